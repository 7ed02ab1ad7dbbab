"""
Retention Range Table

Turns an unordered age -> step mapping into an ordered, gap-free partition
of ages into half-open ranges, and answers point lookups by binary search.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterator, Mapping, Optional, Tuple

from stepwise.retention.types import RetentionRange


class RangeTable:
    """
    Immutable partition of [min_age, +inf) into retention ranges.

    Tables are never modified after construction. Rebuilding a rule creates
    a new table and swaps the reference, so readers need no locking.
    """

    __slots__ = ("_lowers", "_ranges")

    def __init__(self, ranges: Tuple[RetentionRange, ...] = ()):
        self._ranges = tuple(ranges)
        self._lowers = tuple(r.lower for r in self._ranges)

    @classmethod
    def from_mapping(cls, retentions: Mapping[int, int]) -> "RangeTable":
        """
        Build a table from age threshold -> step size pairs.

        Each threshold opens a range that ends at the next threshold; the
        highest threshold opens an unbounded range.
        """
        entries = sorted(retentions.items())
        ranges = []

        for index, (age, step) in enumerate(entries):
            if index < len(entries) - 1:
                upper: Optional[int] = entries[index + 1][0]
            else:
                upper = None
            ranges.append(RetentionRange(lower=age, upper=upper, step=step))

        return cls(tuple(ranges))

    def lookup(self, age: int) -> Optional[int]:
        """Get the step size for an age, or None if the age is uncovered."""
        index = bisect_right(self._lowers, age) - 1
        if index < 0:
            return None
        return self._ranges[index].step

    @property
    def min_age(self) -> Optional[int]:
        return self._lowers[0] if self._lowers else None

    def __iter__(self) -> Iterator[RetentionRange]:
        return iter(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __bool__(self) -> bool:
        return bool(self._ranges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeTable):
            return NotImplemented
        return self._ranges == other._ranges

    def __str__(self) -> str:
        return "[" + ", ".join(str(r) for r in self._ranges) + "]"

    def __repr__(self) -> str:
        return f"RangeTable({self})"


EMPTY_TABLE = RangeTable()
