"""Shared fixtures for channel engine tests."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from channels import ChannelState


class Recorder:
    """Observer that counts notifications and the values seen at each."""

    def __init__(self, state: ChannelState) -> None:
        self.state = state
        self.seen: list[tuple] = []

    def __call__(self) -> None:
        s = self.state
        self.seen.append((s.red, s.green, s.blue, s.get_hex()))

    @property
    def calls(self) -> int:
        return len(self.seen)


@pytest.fixture
def state() -> ChannelState:
    return ChannelState()


@pytest.fixture
def recorder(state: ChannelState) -> Recorder:
    rec = Recorder(state)
    state.set_observer(rec)
    return rec


@pytest.fixture
def full_state(state: ChannelState) -> ChannelState:
    """All three channels set: 255 / 128 / 0."""
    state.set_channel_from_text("Red", "255")
    state.set_channel_from_text("Green", "128")
    state.set_channel_from_text("Blue", "0")
    return state


@pytest.fixture
def console() -> Console:
    return Console(
        file=io.StringIO(), width=120, color_system=None, force_terminal=False
    )
