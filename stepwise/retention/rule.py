"""
Metric Retention Rules

A rule binds a metric-name pattern to a downsampling function and a range
table that maps data point age to storage step size.
"""

from __future__ import annotations

import re
import threading
from typing import Dict, Mapping, Pattern

import structlog

from stepwise.retention.exceptions import (
    InvalidRetentionError,
    InvalidRetentionPatternError,
    RetentionNotFoundError,
)
from stepwise.retention.ranges import EMPTY_TABLE, RangeTable

logger = structlog.get_logger(__name__)


def _compile(pattern: str) -> Pattern:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidRetentionPatternError(pattern, str(e)) from e


def _validate(age: int, step: int) -> None:
    """Check a single age -> step pair."""
    for value in (age, step):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidRetentionError(age, step, "age and step must be integers")
    if age < 0:
        raise InvalidRetentionError(age, step, "age must not be negative")
    if step <= 0:
        raise InvalidRetentionError(age, step, "step must be positive")


class MetricRetention:
    """
    Retention rule for metrics whose names match a pattern.

    The range table is replaced as a whole on every rebuild; lookups read a
    single reference and never observe a partially built table.
    """

    def __init__(self, pattern: Pattern, function: str):
        self._pattern = pattern
        self._function = function
        self._ranges: RangeTable = EMPTY_TABLE
        self._write_lock = threading.Lock()

    @staticmethod
    def new_builder(pattern: str, function: str) -> "MetricRetentionBuilder":
        """Start building a rule. Fails at once on a malformed pattern."""
        return MetricRetentionBuilder(pattern, function)

    @property
    def pattern(self) -> Pattern:
        return self._pattern

    @property
    def function(self) -> str:
        return self._function

    @property
    def ranges(self) -> RangeTable:
        return self._ranges

    def matches(self, name: str) -> bool:
        """Check whether the whole metric name matches the rule pattern."""
        return self._pattern.fullmatch(name) is not None

    def step_size(self, age_seconds: int) -> int:
        """
        Get the storage step for a data point of the given age.

        Negative ages are treated as zero.

        Raises:
            RetentionNotFoundError: If no range covers the age.
        """
        ranges = self._ranges
        step = ranges.lookup(max(age_seconds, 0))
        if step is None:
            raise RetentionNotFoundError(age=age_seconds, ranges=ranges)
        return step

    def rebuild(self, retentions: Mapping[int, int]) -> "MetricRetention":
        """
        Replace the range table with one built from a complete new mapping.

        Previous ranges are discarded, never merged.
        """
        for age, step in retentions.items():
            _validate(age, step)
        self._install(RangeTable.from_mapping(retentions))
        return self

    def _install(self, table: RangeTable) -> None:
        with self._write_lock:
            self._ranges = table

        logger.info(
            "Retention rule built",
            pattern=self._pattern.pattern,
            function=self._function,
            ranges=str(table),
        )

    def __repr__(self) -> str:
        return (
            f"MetricRetention(pattern={self._pattern.pattern!r}, "
            f"function={self._function!r}, ranges={self._ranges})"
        )


class MetricRetentionBuilder:
    """Collects age -> step pairs and finalizes them into a rule."""

    def __init__(self, pattern: str, function: str):
        self._retentions: Dict[int, int] = {}
        self._result = MetricRetention(_compile(pattern), function)

    def add_retention(self, age: int, step: int) -> "MetricRetentionBuilder":
        """Add a breakpoint: from this age on, store at this step."""
        _validate(age, step)

        previous = self._retentions.get(age)
        if previous is not None and previous != step:
            logger.warning(
                "Overwriting retention for duplicate age",
                pattern=self._result.pattern.pattern,
                age=age,
                previous_step=previous,
                step=step,
            )

        self._retentions[age] = step
        return self

    def build(self) -> MetricRetention:
        """Rebuild the rule's range table from all added pairs."""
        self._result._install(RangeTable.from_mapping(self._retentions))
        return self._result
