"""
Law catalogue for counters and channels.

A Law is a named, checkable statement about an implementation.  It is
purely declarative: it says WHAT must hold, not HOW it is checked.

Each law has:
  - a human-readable description
  - a predicate whose first argument is the object maker under test
  - the names of the domains its remaining arguments are drawn from
    ("value" ranges over [0, m-1], "delta" over [-m, m], "small_delta"
    over [-k, k] with k = min(m, SMALL_DELTA_LIMIT))

Laws whose checks cost time proportional to the delta draw from
"small_delta", so verifying a huge modulus stays fast.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from counter import BoundedCounter


SMALL_DELTA_LIMIT = 64


# ---------------------------------------------------------------------------
# Core primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Law:
    """A single verifiable law."""

    name: str
    description: str
    predicate: Callable[..., bool]
    domains: tuple[str, ...] = ()

    def check(self, *args: Any) -> bool:
        return self.predicate(*args)


@dataclass
class LawBook:
    """An ordered collection of laws that together form a contract."""

    name: str
    laws: list[Law] = field(default_factory=list)

    def add(self, law: Law) -> None:
        self.laws.append(law)

    def __iter__(self):
        return iter(self.laws)

    def __len__(self):
        return len(self.laws)


class CounterMaker(Protocol):
    """Anything that builds a counter from (value, modulus)."""

    def __call__(self, value: int, modulus: int) -> BoundedCounter: ...


# ---------------------------------------------------------------------------
# Counter laws
# ---------------------------------------------------------------------------

def _stepped(make: CounterMaker, value: int, modulus: int, delta: int) -> int:
    counter = make(value, modulus)
    counter.update(delta)
    return counter.value


def _single_steps(make: CounterMaker, value: int, modulus: int, delta: int) -> int:
    counter = make(value, modulus)
    for _ in range(abs(delta)):
        if delta > 0:
            counter.step_by_1_forward()
        else:
            counter.step_by_1_backward()
    return counter.value


def _full_cycle(make: CounterMaker, value: int, modulus: int) -> bool:
    counter = make(value, modulus)
    counter.step_forward(modulus)
    return counter.value == value


def _inverse(make: CounterMaker, value: int, modulus: int, delta: int) -> bool:
    counter = make(value, modulus)
    counter.update(delta)
    counter.update(-delta)
    return counter.value == value


def _reset(make: CounterMaker, value: int, modulus: int) -> bool:
    counter = make(value, modulus)
    counter.reset()
    return counter.value == 0 and counter.modulus == modulus


def _order_ignores_modulus(make: CounterMaker, value: int, modulus: int) -> bool:
    other = make(value, value + 1)
    return make(value, modulus).compare_to(other) == 0


def counter_laws(modulus: int) -> LawBook:
    """Build the law book for counters of the given modulus."""
    m = modulus

    book = LawBook(name=f"counter(mod {m})")

    book.add(Law(
        name="closure",
        description="update(d) keeps the value in [0, m-1]",
        predicate=lambda make, v, d: 0 <= _stepped(make, v, m, d) < m,
        domains=("value", "delta"),
    ))

    book.add(Law(
        name="single_steps",
        description="update(d) equals |d| single steps in d's direction",
        predicate=lambda make, v, d: (
            _stepped(make, v, m, d) == _single_steps(make, v, m, d)
        ),
        domains=("value", "small_delta"),
    ))

    book.add(Law(
        name="full_cycle",
        description="step_forward(m) restores the value",
        predicate=lambda make, v: _full_cycle(make, v, m),
        domains=("value",),
    ))

    book.add(Law(
        name="inverse",
        description="update(d) then update(-d) restores the value",
        predicate=lambda make, v, d: _inverse(make, v, m, d),
        domains=("value", "delta"),
    ))

    book.add(Law(
        name="reset",
        description="reset() sets the value to 0 and keeps the modulus",
        predicate=lambda make, v: _reset(make, v, m),
        domains=("value",),
    ))

    book.add(Law(
        name="order_ignores_modulus",
        description="counters with equal values compare equal in order",
        predicate=lambda make, v: _order_ignores_modulus(make, v, m),
        domains=("value",),
    ))

    return book


# ---------------------------------------------------------------------------
# Channel laws
# ---------------------------------------------------------------------------

def _out_of_range_unsets(make) -> bool:
    state = make()
    state.set_channel_from_text("Red", "300")
    return state.get_channel_value("Red") is None


def _button_steps_set_channel(make) -> bool:
    state = make()
    state.set_channel_from_text("Red", "10")
    state.step_channel_by_button("Red", 10)
    return state.get_channel_value("Red") == 20


def _hex_of_complete_color(make) -> bool:
    state = make()
    state.set_channel_from_text("Red", "255")
    state.set_channel_from_text("Green", "0")
    state.set_channel_from_text("Blue", "0")
    return state.get_hex() == "FF0000"


def _button_wraps(make) -> bool:
    state = make()
    state.set_channel_from_text("Red", "255")
    state.step_channel_by_button("Red", 1)
    return state.get_channel_value("Red") == 0


def _unknown_channel_ignored(make) -> bool:
    state = make()
    calls = []
    state.set_observer(lambda: calls.append(1))
    state.set_channel_from_text("Purple", "5")
    return not calls and state.snapshot().red is None and not state.is_complete()


def _bad_text_clears(make) -> bool:
    state = make()
    state.set_channel_from_text("Green", "42")
    state.set_channel_from_text("Green", "abc")
    return state.get_channel_value("Green") is None


def _button_on_unset_is_noop(make) -> bool:
    state = make()
    state.step_channel_by_button("Blue", 10)
    return state.get_channel_value("Blue") is None


def channel_laws() -> LawBook:
    """Build the law book for the channel engine."""
    book = LawBook(name="channels")

    book.add(Law("out_of_range_unsets", "text outside [0,255] unsets the channel",
                 _out_of_range_unsets))
    book.add(Law("button_steps_set_channel", "a button steps a set channel",
                 _button_steps_set_channel))
    book.add(Law("hex_of_complete_color", "255/0/0 encodes as FF0000",
                 _hex_of_complete_color))
    book.add(Law("button_wraps", "255 stepped by +1 wraps to 0", _button_wraps))
    book.add(Law("unknown_channel_ignored",
                 "an unknown channel changes nothing and notifies nobody",
                 _unknown_channel_ignored))
    book.add(Law("bad_text_clears", "non-numeric text clears a set channel",
                 _bad_text_clears))
    book.add(Law("button_on_unset_is_noop", "a button leaves an unset channel unset",
                 _button_on_unset_is_noop))

    return book
