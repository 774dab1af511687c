"""
Channel state engine.

ChannelState owns the red, green and blue channels of one color.  Each
channel is either unset (``None``) or a BoundedCounter over 256 values.
Text entry replaces a channel outright; buttons step an existing value
with wrap-around.  After each change the engine tells its observer,
which reads the new state back through the accessors.

Bad text is not an error: the channel simply becomes unset.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable

from counter import BYTE_MODULUS, BoundedCounter
from models import ColorSnapshot, channel_hex

logger = logging.getLogger(__name__)

Observer = Callable[[], None]

_DECIMAL = re.compile(r"[+-]?[0-9]+")


def parse_intensity(text: str) -> int | None:
    """The base-10 integer spelled by ``text``, or None.

    Only an optional sign and ASCII digits are accepted: no whitespace,
    underscores or non-ASCII digits.
    """
    if not isinstance(text, str) or _DECIMAL.fullmatch(text) is None:
        return None
    return int(text)


class Channel(str, Enum):
    RED = "Red"
    GREEN = "Green"
    BLUE = "Blue"

    @classmethod
    def lookup(cls, name: Channel | str) -> Channel | None:
        """The channel called ``name`` (case-sensitive), or None."""
        try:
            return cls(name)
        except ValueError:
            return None


class ChannelState:
    """The three color channels plus the derived color and hex string."""

    def __init__(self) -> None:
        self._channels: dict[Channel, BoundedCounter | None] = {
            channel: None for channel in Channel
        }
        self._observer: Observer | None = None

    # -- observer -----------------------------------------------------------

    def set_observer(self, observer: Observer | None) -> None:
        """Register the single listener, replacing any previous one."""
        self._observer = observer

    add_view = set_observer

    def _changed(self) -> None:
        logger.debug("State: %s", self)
        if self._observer is not None:
            self._observer()

    # -- input entry points -------------------------------------------------

    def set_channel_from_text(self, channel: Channel | str, text: str) -> None:
        """Replace a channel with the integer in ``text``, or unset it."""
        target = Channel.lookup(channel)
        if target is None:
            logger.debug("Ignoring text for unknown channel %r", channel)
            return

        self._channels[target] = None
        value = parse_intensity(text)
        if value is not None and 0 <= value < BYTE_MODULUS:
            self._channels[target] = BoundedCounter(value, BYTE_MODULUS)
        else:
            logger.debug("Rejected %s intensity %r", target.value, text)

        self._changed()

    def step_channel_by_button(self, channel: Channel | str, amount: int) -> None:
        """Step a set channel by ``amount``; unset channels stay unset."""
        target = Channel.lookup(channel)
        if target is None:
            logger.debug("Ignoring button for unknown channel %r", channel)
            return

        counter = self._channels[target]
        if counter is not None:
            counter.update(amount)

        self._changed()

    # -- accessors ----------------------------------------------------------

    def get_channel_value(self, channel: Channel | str) -> int | None:
        """The channel's value in [0, 255], or None when unset."""
        target = Channel.lookup(channel)
        if target is None:
            return None
        counter = self._channels[target]
        return None if counter is None else counter.value

    @property
    def red(self) -> int | None:
        return self.get_channel_value(Channel.RED)

    @property
    def green(self) -> int | None:
        return self.get_channel_value(Channel.GREEN)

    @property
    def blue(self) -> int | None:
        return self.get_channel_value(Channel.BLUE)

    @property
    def combined_color(self) -> tuple[int, int, int] | None:
        rgb = (self.red, self.green, self.blue)
        if None in rgb:
            return None
        return rgb

    def is_complete(self) -> bool:
        return self.combined_color is not None

    def get_hex(self) -> str | None:
        """RRGGBB in uppercase, or None unless every channel is set."""
        rgb = self.combined_color
        if rgb is None:
            return None
        return "".join(channel_hex(v) for v in rgb)

    @property
    def hex(self) -> str | None:
        return self.get_hex()

    def snapshot(self) -> ColorSnapshot:
        return ColorSnapshot(
            red=self.red, green=self.green, blue=self.blue, hex=self.get_hex()
        )

    def __str__(self) -> str:
        red, green, blue = (self._channels[c] for c in Channel)
        return f"ChannelState[red={red}, green={green}, blue={blue}]"
