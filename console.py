"""Interactive console harness for the channel engine.

Drives a ChannelState from a menu, the way a window's text fields and
buttons would, and prints the rendered view after every change.  Input
comes from an injected text stream so the loop can be scripted.

Run with:
    color-calculator [--log-level DEBUG] [--modulus 12]
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import IntPrompt, Prompt

from channels import Channel, ChannelState
from config import CalculatorConfig, ConfigError
from counter import BoundedCounter, InvalidArgumentError
from factory import CounterFactory
from models import ButtonPress, TextEntry
from view import ColorView

logger = logging.getLogger(__name__)

COMMANDS = ["t", "b", "c", "?", "q"]

MENU = [
    "Menu",
    "  t - set a channel from text",
    "  b - step a channel by button",
    "  c - enter a bounded counter",
    "  ? - view all accessors",
    "  q - quit",
]


class LineSource:
    """Wraps a text stream so that running out of input raises EOFError.

    Lines come back without their line ending, so an empty answer is
    exactly "" and prompts fall back to their defaults.
    """

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def readline(self) -> str:
        line = self.stream.readline()
        if not line:
            raise EOFError("end of input")
        return line.rstrip("\r\n")


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

def prompt_counter(
    message: str,
    source: LineSource,
    console: Console,
    default_modulus: int,
) -> BoundedCounter:
    """Ask for a value and modulus until they make a legal counter."""
    console.print(message, markup=False)
    while True:
        value = IntPrompt.ask("  Enter value  ", console=console, stream=source)
        modulus = IntPrompt.ask(
            "  Enter modulus", console=console, stream=source, default=default_modulus
        )
        try:
            return CounterFactory.create(value, modulus)
        except InvalidArgumentError as e:
            logger.debug("Illegal counter: %s", e)
            console.print("Illegal BoundedCounter entered; please try again")


def show_accessors(state: ChannelState, console: Console) -> None:
    for channel in Channel:
        value = state.get_channel_value(channel)
        shown = "unset" if value is None else str(value)
        console.print(f"  {channel.value:<6}= {shown}", markup=False)
    if state.is_complete():
        console.print(f"  Hex   = {state.get_hex()}", markup=False)
    else:
        console.print("  No hex because some colors missing")
    console.print()


# ---------------------------------------------------------------------------
# Menu loop
# ---------------------------------------------------------------------------

def run(
    stream: TextIO,
    console: Console,
    config: CalculatorConfig | None = None,
    state: ChannelState | None = None,
) -> ChannelState:
    """Run the menu loop until ``q`` or end of input; return the engine."""
    if config is None:
        config = CalculatorConfig()
    if state is None:
        state = CounterFactory.create_channel_state()

    source = LineSource(stream)

    def show(rendering) -> None:
        for line in rendering.lines():
            console.print(line, markup=False)
        console.print()

    ColorView(state, config, sink=show)
    console.print(f"State: {state}", markup=False)

    while True:
        try:
            for line in MENU:
                console.print(line)
            selection = Prompt.ask(
                "Enter command", console=console, choices=COMMANDS, stream=source
            )

            if selection == "t":
                color = Prompt.ask("  Enter color    ", console=console, stream=source)
                intensity = Prompt.ask(
                    "  Enter intensity", console=console, stream=source
                )
                TextEntry(channel=color, text=intensity).apply(state)

            elif selection == "b":
                color = Prompt.ask("  Enter color ", console=console, stream=source)
                amount = IntPrompt.ask(
                    "  Enter amount",
                    console=console,
                    stream=source,
                    default=config.default_step,
                )
                ButtonPress(channel=color, amount=amount).apply(state)

            elif selection == "c":
                counter = prompt_counter(
                    "Enter a bounded counter", source, console, config.modulus
                )
                console.print(f"  Counter = {counter}", markup=False)

            elif selection == "?":
                show_accessors(state, console)

            else:
                break

        except EOFError:
            break
        except Exception as e:
            logger.debug("Command failed", exc_info=True)
            console.print(f"  Exception caught/handled: {e}", markup=False)

    return state


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Set red/green/blue channels from text or buttons and watch the hex value",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: COLOR_CALC_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--modulus",
        type=int,
        default=None,
        help="Default modulus offered when entering a counter",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Print the law verification report and exit",
    )
    args = parser.parse_args(argv)

    try:
        config = CalculatorConfig.from_env()
        overrides = {}
        if args.log_level is not None:
            overrides["log_level"] = args.log_level
        if args.modulus is not None:
            overrides["modulus"] = args.modulus
        if overrides:
            config = dataclasses.replace(config, **overrides)
    except ConfigError as e:
        parser.error(str(e))

    console = Console()
    logging.basicConfig(
        level=config.level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    if args.verify:
        report = CounterFactory.verify(config.modulus)
        console.print(report.summary(), markup=False)
        return 0

    run(sys.stdin, console, config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
