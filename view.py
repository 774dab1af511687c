"""Text view of a ChannelState.

ColorView registers itself as the engine's observer.  On every
notification it takes a snapshot and renders what a window would show:
one field per channel (the value or a placeholder), whether a swatch
can be painted, and the hex label.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from channels import Channel, ChannelState
from config import CalculatorConfig, DEFAULT
from models import ColorSnapshot


@dataclass(frozen=True)
class Rendering:
    fields: dict[str, str]
    swatch: tuple[int, int, int] | None
    hex_label: str
    buttons: tuple[str, ...] = ()

    def lines(self) -> list[str]:
        out = [f"{name:<6}{text}" for name, text in self.fields.items()]
        if self.buttons:
            out.append("Buttons: " + " ".join(self.buttons))
        out.append(self.hex_label)
        return out


def render(snapshot: ColorSnapshot, config: CalculatorConfig = DEFAULT) -> Rendering:
    values = {
        Channel.RED: snapshot.red,
        Channel.GREEN: snapshot.green,
        Channel.BLUE: snapshot.blue,
    }
    fields = {
        channel.value: config.placeholder if value is None else str(value)
        for channel, value in values.items()
    }
    hex_text = snapshot.hex if snapshot.is_complete else config.unknown_hex
    return Rendering(
        fields=fields,
        swatch=snapshot.rgb,
        hex_label=f"Hex: {hex_text}",
        buttons=tuple(f"{step:+d}" for step in config.button_steps if step),
    )


class ColorView:
    """Observer that re-renders the engine after every change."""

    def __init__(
        self,
        state: ChannelState,
        config: CalculatorConfig = DEFAULT,
        sink: Callable[[Rendering], None] | None = None,
    ) -> None:
        self.state = state
        self.config = config
        self.sink = sink
        self.updates = 0
        self.current = render(state.snapshot(), config)
        state.add_view(self.update)

    def update(self) -> None:
        self.updates += 1
        self.current = render(self.state.snapshot(), self.config)
        if self.sink is not None:
            self.sink(self.current)
