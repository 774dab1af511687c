"""
The verifying factory.

The factory does NOT just construct counters and engines - it checks
them against their law books before releasing them.

Flow:
  1. Caller asks for a counter (or a channel engine).
  2. Factory runs the law book for that modulus against the maker.
  3. If every law holds -> return the object.
     If any law fails   -> raise LawViolationError with the report.

Reports are cached per (maker, modulus), so only the first request for
a modulus pays for verification.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable

from channels import ChannelState
from counter import BYTE_MODULUS, BoundedCounter
from laws import SMALL_DELTA_LIMIT, Law, LawBook, channel_laws, counter_laws

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    """How one law fared, with the failing arguments labelled by domain."""

    law_name: str
    passed: bool
    cases: int = 0
    counterexample: dict[str, int] | None = None

    def describe(self) -> str:
        if self.passed:
            return f"ok    {self.law_name} ({self.cases} cases)"
        where = ", ".join(f"{k}={v}" for k, v in (self.counterexample or {}).items())
        at = f" at {where}" if where else ""
        return f"FAIL  {self.law_name}{at} (case {self.cases})"

    __repr__ = describe


@dataclass
class VerificationReport:
    """Every law of one book, checked at one modulus."""

    book_name: str
    modulus: int
    sampled: bool = False
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def failures(self) -> list[str]:
        return [r.law_name for r in self.results if not r.passed]

    def summary(self) -> str:
        mode = "sampled" if self.sampled else "exhaustive"
        lines = [f"{self.book_name}: {len(self.results)} laws, {mode}"]
        lines.extend(f"  {r.describe()}" for r in self.results)
        if self.passed:
            lines.append("  all laws hold")
        else:
            lines.append(f"  broken: {', '.join(self.failures)}")
        return "\n".join(lines)


class LawViolationError(Exception):
    """Raised when a maker breaks a law at some modulus."""

    def __init__(self, report: VerificationReport):
        self.report = report
        self.modulus = report.modulus
        super().__init__(
            f"{report.book_name} breaks {', '.join(report.failures) or 'no laws'}"
            f" at modulus {report.modulus}\n{report.summary()}"
        )


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class CounterFactory:
    """
    Produces counters and channel engines whose laws have been checked.

    For small moduli every (value, delta) combination is checked.  For
    larger ones the factory samples edge values plus seeded random draws;
    the single-step law only ever sees deltas within SMALL_DELTA_LIMIT.
    """

    EXHAUSTIVE_THRESHOLD = 64
    SAMPLE_COUNT = 2_000
    SEED = 0

    _reports: dict[tuple[Any, int], VerificationReport] = {}

    @classmethod
    def create(
        cls,
        value: int,
        modulus: int,
        make: Callable[[int, int], BoundedCounter] = BoundedCounter,
    ) -> BoundedCounter:
        """Verify ``make`` for ``modulus``, then build a counter with it."""
        counter = make(value, modulus)
        cls.verify(modulus, make)
        return counter

    @classmethod
    def create_channel_state(
        cls, make: Callable[[], ChannelState] = ChannelState
    ) -> ChannelState:
        """Verify the channel counters and ``make``, then build an engine."""
        cls.verify(BYTE_MODULUS)
        report = cls.verify_book(channel_laws(), make)
        if not report.passed:
            raise LawViolationError(report)
        return make()

    @classmethod
    def verify(
        cls,
        modulus: int,
        make: Callable[[int, int], BoundedCounter] = BoundedCounter,
    ) -> VerificationReport:
        """Check the counter laws for ``modulus``; raise if any fails."""
        key = (make, modulus)
        report = cls._reports.get(key)
        if report is None:
            report = cls.verify_book(counter_laws(modulus), make, modulus)
            logger.debug("%s", report.summary())
            if report.passed:
                cls._reports[key] = report
        if not report.passed:
            raise LawViolationError(report)
        return report

    @classmethod
    def clear_cache(cls) -> None:
        cls._reports.clear()

    @classmethod
    def verify_book(
        cls, book: LawBook, make: Any, modulus: int = BYTE_MODULUS
    ) -> VerificationReport:
        sampled = modulus > cls.EXHAUSTIVE_THRESHOLD and any(law.domains for law in book)
        report = VerificationReport(book_name=book.name, modulus=modulus, sampled=sampled)
        for law in book:
            report.results.append(cls._verify_law(law, make, modulus))
        return report

    # -- internal ---------------------------------------------------------

    @classmethod
    def _verify_law(cls, law: Law, make: Any, modulus: int) -> VerificationResult:
        if modulus <= cls.EXHAUSTIVE_THRESHOLD:
            combos = itertools.product(*(_domain(d, modulus) for d in law.domains))
        else:
            combos = _generate_samples(law.domains, modulus, cls.SAMPLE_COUNT, cls.SEED)

        cases = 0
        for combo in combos:
            cases += 1
            if not law.check(make, *combo):
                return VerificationResult(
                    law_name=law.name,
                    passed=False,
                    cases=cases,
                    counterexample=dict(zip(law.domains, combo)),
                )

        return VerificationResult(law_name=law.name, passed=True, cases=cases)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _domain(name: str, modulus: int) -> range:
    if name == "value":
        return range(modulus)
    if name == "delta":
        return range(-modulus, modulus + 1)
    if name == "small_delta":
        k = min(modulus, SMALL_DELTA_LIMIT)
        return range(-k, k + 1)
    raise ValueError(f"unknown domain: {name!r}")


def _edge_values(name: str, modulus: int) -> list[int]:
    if name == "value":
        edges = [0, 1, modulus // 2, modulus - 2, modulus - 1]
        return sorted({v for v in edges if 0 <= v < modulus})
    k = modulus if name == "delta" else min(modulus, SMALL_DELTA_LIMIT)
    return sorted({-k, -k + 1, -1, 0, 1, k - 1, k})


def _generate_samples(
    domains: tuple[str, ...], modulus: int, count: int, seed: int
) -> list[tuple[int, ...]]:
    """Edge-case combinations followed by seeded random fill."""
    rng = random.Random(seed)

    samples: list[tuple[int, ...]] = list(
        itertools.product(*(_edge_values(d, modulus) for d in domains))
    )
    if not domains:
        return samples

    while len(samples) < count:
        samples.append(tuple(rng.choice(_domain(d, modulus)) for d in domains))

    return samples
