"""
Retention Types

Core value types shared by the retention engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AggregationType(str, Enum):
    """Well-known downsampling functions applied when rolling up."""
    AVG = "avg"
    SUM = "sum"
    MIN = "min"
    MAX = "max"
    LAST = "last"
    ANY = "any"


@dataclass(frozen=True)
class RetentionRange:
    """A half-open age interval [lower, upper) stored at one step size."""
    lower: int
    upper: Optional[int]  # None = unbounded
    step: int

    def contains(self, age: int) -> bool:
        """Check whether the age falls inside this range."""
        if age < self.lower:
            return False
        return self.upper is None or age < self.upper

    def __str__(self) -> str:
        upper = "+inf" if self.upper is None else str(self.upper)
        return f"[{self.lower}..{upper})={self.step}"
