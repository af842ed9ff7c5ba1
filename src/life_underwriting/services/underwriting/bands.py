"""Ordered threshold tables for classification ladders.

Age, BMI, income, ratio and class thresholds are all expressed as an
ordered list of ``(upper_bound, value)`` rows evaluated first-match, with a
mandatory default for anything past the last bound.
"""

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from attrs import field, frozen
from beartype import beartype

V = TypeVar("V")


@frozen
class Band(Generic[V]):
    """One row of a band table."""

    upper_bound: Any
    value: V
    inclusive: bool = False

    def contains(self, measure: Any) -> bool:
        """Check whether ``measure`` falls under this row's upper bound."""
        if self.inclusive:
            return bool(measure <= self.upper_bound)
        return bool(measure < self.upper_bound)


@frozen
class BandTable(Generic[V]):
    """First-match lookup over ascending upper bounds."""

    bands: tuple[Band[V], ...] = field(converter=tuple)
    default: V

    @bands.validator
    def _check_ascending(self, attribute: Any, value: tuple[Band[V], ...]) -> None:
        bounds = [band.upper_bound for band in value]
        if bounds != sorted(bounds):
            raise ValueError(f"Band upper bounds must be ascending: {bounds}")

    @classmethod
    def below(cls, rows: Iterable[tuple[Any, V]], default: V) -> "BandTable[V]":
        """Build a table where each bound is exclusive (``measure < bound``)."""
        return cls(tuple(Band(bound, value) for bound, value in rows), default)

    @classmethod
    def at_most(cls, rows: Iterable[tuple[Any, V]], default: V) -> "BandTable[V]":
        """Build a table where each bound is inclusive (``measure <= bound``)."""
        return cls(
            tuple(Band(bound, value, inclusive=True) for bound, value in rows),
            default,
        )

    @beartype
    def lookup(self, measure: Any) -> Any:
        """Return the value of the first row containing ``measure``."""
        for band in self.bands:
            if band.contains(measure):
                return band.value
        return self.default
