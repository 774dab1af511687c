"""
Bounded counter layer for the color calculator.

A BoundedCounter holds an integer in [0, modulus-1].  Stepping past
either end wraps around (like C unsigned arithmetic), so every
operation leaves the counter inside its domain.

Equality compares value *and* modulus; ordering compares value only.
The mismatch is deliberate: counters of different moduli still order
by their raw value.
"""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when a counter is built or stepped with an illegal argument."""


class BoundedCounter:
    """
    An integer counter over a fixed modulus with wrap-around stepping.

    Invariant: ``0 <= value < modulus`` after every operation.
    """

    __slots__ = ("_value", "_modulus")

    def __init__(self, value: int, modulus: int) -> None:
        if modulus < 1:
            raise InvalidArgumentError(f"modulus ({modulus}) must be positive")
        if value < 0 or value >= modulus:
            raise InvalidArgumentError(
                f"value ({value}) not in range [0, {modulus - 1}]"
            )
        self._value = value
        self._modulus = modulus

    @classmethod
    def of_modulus(cls, modulus: int) -> BoundedCounter:
        """Counter starting at zero."""
        return cls(0, modulus)

    # -- accessors --------------------------------------------------------

    @property
    def value(self) -> int:
        return self._value

    @property
    def modulus(self) -> int:
        return self._modulus

    def get_value(self) -> int:
        return self._value

    def get_modulus(self) -> int:
        return self._modulus

    def is_zero(self) -> bool:
        """True when the value is 0, whatever the modulus."""
        return self._value == 0

    # -- mutation ---------------------------------------------------------

    def reset(self) -> None:
        self._value = 0

    def step_by_1_forward(self) -> None:
        if self._value == self._modulus - 1:
            self._value = 0
        else:
            self._value += 1

    def step_by_1_backward(self) -> None:
        if self._value == 0:
            self._value = self._modulus - 1
        else:
            self._value -= 1

    def step_forward(self, delta: int) -> None:
        """Advance by ``delta`` single steps (delta >= 0)."""
        if delta < 0:
            raise InvalidArgumentError(f"delta ({delta}) must be non-negative")
        # Same result as delta calls to step_by_1_forward.
        self._value = (self._value + delta) % self._modulus

    def step_backward(self, delta: int) -> None:
        """Retreat by ``delta`` single steps (delta >= 0)."""
        if delta < 0:
            raise InvalidArgumentError(f"delta ({delta}) must be non-negative")
        self._value = (self._value - delta) % self._modulus

    def update(self, delta: int) -> None:
        """Step forward for non-negative ``delta``, backward otherwise."""
        if delta >= 0:
            self.step_forward(delta)
        else:
            self.step_backward(-delta)

    # -- comparison -------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundedCounter):
            return NotImplemented
        return self._value == other._value and self._modulus == other._modulus

    # Mutable, so not usable as a dict key or set member.
    __hash__ = None  # type: ignore[assignment]

    def compare_to(self, other: BoundedCounter) -> int:
        """Negative, zero or positive as this value is below, equal or above."""
        return self._value - other._value

    def __lt__(self, other: BoundedCounter) -> bool:
        if not isinstance(other, BoundedCounter):
            return NotImplemented
        return self._value < other._value

    def __le__(self, other: BoundedCounter) -> bool:
        if not isinstance(other, BoundedCounter):
            return NotImplemented
        return self._value <= other._value

    def __gt__(self, other: BoundedCounter) -> bool:
        if not isinstance(other, BoundedCounter):
            return NotImplemented
        return self._value > other._value

    def __ge__(self, other: BoundedCounter) -> bool:
        if not isinstance(other, BoundedCounter):
            return NotImplemented
        return self._value >= other._value

    # -- display ----------------------------------------------------------

    def __str__(self) -> str:
        return f"{self._value}(mod {self._modulus})"

    def __repr__(self) -> str:
        return f"BoundedCounter(value={self._value}, modulus={self._modulus})"


# ---------------------------------------------------------------------------
# Common moduli
# ---------------------------------------------------------------------------

BYTE_MODULUS = 256     # one color channel
