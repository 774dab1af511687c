"""Read and command models for the channel engine.

ColorSnapshot is what an observer sees after a notification: the three
channel values (``None`` when unset) and the hex string, present only
when the color is complete.  TextEntry and ButtonPress are the two
kinds of input event a controller forwards to the engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from channels import ChannelState


CHANNEL_MAX = 255


def channel_hex(value: int) -> str:
    """Two uppercase hex digits for one channel value."""
    return f"{value:02X}"


# ---------------------------------------------------------------------------
# ColorSnapshot: the observer-facing read model
# ---------------------------------------------------------------------------

class ColorSnapshot(BaseModel):
    """Immutable view of the engine's state at one point in time."""

    model_config = ConfigDict(frozen=True)

    red: int | None = Field(default=None, ge=0, le=CHANNEL_MAX)
    green: int | None = Field(default=None, ge=0, le=CHANNEL_MAX)
    blue: int | None = Field(default=None, ge=0, le=CHANNEL_MAX)
    hex: str | None = Field(default=None, pattern=r"^[0-9A-F]{6}$")

    @model_validator(mode="after")
    def hex_matches_channels(self) -> ColorSnapshot:
        channels = (self.red, self.green, self.blue)
        if None in channels:
            if self.hex is not None:
                raise ValueError("hex must be absent while a channel is unset")
            return self
        expected = "".join(channel_hex(v) for v in channels)
        if self.hex != expected:
            raise ValueError(f"hex {self.hex!r} does not match channels ({expected})")
        return self

    @property
    def is_complete(self) -> bool:
        return self.hex is not None

    @property
    def rgb(self) -> tuple[int, int, int] | None:
        if not self.is_complete:
            return None
        return (self.red, self.green, self.blue)


# ---------------------------------------------------------------------------
# Input events
# ---------------------------------------------------------------------------

class TextEntry(BaseModel):
    """Text typed into a channel field (submitted or focus lost)."""

    channel: str
    text: str

    def apply(self, state: ChannelState) -> None:
        state.set_channel_from_text(self.channel, self.text)


class ButtonPress(BaseModel):
    """A +/- step button pressed for a channel."""

    channel: str
    amount: int

    def apply(self, state: ChannelState) -> None:
        state.step_channel_by_button(self.channel, self.amount)
