"""
Configuration for the color calculator.

CalculatorConfig holds the knobs the engine's collaborators need: the
modulus used for law verification and counter prompts, the step sizes
offered as buttons, and the texts a view shows for missing values.
Values can be overridden from the environment with ``from_env``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from counter import BYTE_MODULUS


ENV_PREFIX = "COLOR_CALC_"


class ConfigError(ValueError):
    """Raised when a configuration value is malformed."""


@dataclass(frozen=True)
class CalculatorConfig:
    """
    Settings for one calculator session.

    Attributes:
        modulus: Modulus for law verification and prompted counters
        button_steps: Amounts offered as +/- buttons, in display order
        placeholder: Text shown in a channel field when the channel is unset
        unknown_hex: Text shown instead of the hex value when incomplete
        log_level: Name of a ``logging`` level for the console harness
    """

    modulus: int = BYTE_MODULUS
    button_steps: tuple[int, ...] = (10, -10)
    placeholder: str = "Enter [0,255]"
    unknown_hex: str = "Unknown"
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.modulus < 1:
            raise ConfigError(f"modulus ({self.modulus}) must be positive")
        if not any(self.button_steps):
            raise ConfigError("at least one non-zero button step is required")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigError(f"unknown log level: {self.log_level!r}")

    @property
    def level(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.log_level.upper())

    @property
    def default_step(self) -> int:
        """First non-zero button step; the amount a bare button press uses."""
        return next(step for step in self.button_steps if step)

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None
    ) -> CalculatorConfig:
        """Build a config from ``COLOR_CALC_*`` variables over the defaults."""
        if environ is None:
            environ = os.environ

        overrides: dict = {}

        raw = environ.get(ENV_PREFIX + "MODULUS")
        if raw is not None:
            overrides["modulus"] = _parse_int("MODULUS", raw)

        raw = environ.get(ENV_PREFIX + "BUTTON_STEPS")
        if raw is not None:
            overrides["button_steps"] = tuple(
                _parse_int("BUTTON_STEPS", part)
                for part in raw.split(",")
                if part.strip()
            )

        raw = environ.get(ENV_PREFIX + "LOG_LEVEL")
        if raw is not None:
            overrides["log_level"] = raw.strip()

        return cls(**overrides)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(
            f"{ENV_PREFIX}{name} must be an integer, got {raw!r}"
        ) from None


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

DEFAULT = CalculatorConfig()
