"""
Retention errors.

All errors raised by the retention engine derive from RetentionError so
callers can treat configuration problems as a single family.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class RetentionError(Exception):
    """Base class for retention errors."""


class InvalidRetentionPatternError(RetentionError, ValueError):
    """Raised when a rule pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid retention pattern {pattern!r}: {reason}")


class InvalidRetentionError(RetentionError, ValueError):
    """Raised when an (age, step) pair is out of range."""

    def __init__(self, age: Any, step: Any, reason: str):
        self.age = age
        self.step = step
        super().__init__(f"Invalid retention {age!r} -> {step!r}: {reason}")


class RetentionNotFoundError(RetentionError, LookupError):
    """
    Raised when no retention range applies.

    Either the queried age falls below the lowest configured threshold (or
    the range table is empty), or no rule matches a metric name.
    """

    def __init__(
        self,
        age: Optional[int] = None,
        ranges: Sequence[Any] = (),
        metric_name: Optional[str] = None,
    ):
        self.age = age
        self.ranges = tuple(ranges)
        self.metric_name = metric_name

        if metric_name is not None:
            message = f"No retention rule matches metric {metric_name!r}"
        else:
            values = ", ".join(str(r) for r in self.ranges) or "<empty>"
            message = f"Could not find retention step for age {age}, values: [{values}]"
        super().__init__(message)
