"""
Retention Registry

Selects the retention rule for a metric name: rules are tried in
configuration order, the first full match wins, and an optional default
rule catches everything else.
"""

from __future__ import annotations

import threading
from typing import Iterable, Optional, Tuple

import structlog

from stepwise.retention.exceptions import RetentionNotFoundError
from stepwise.retention.rule import MetricRetention

logger = structlog.get_logger(__name__)

_Snapshot = Tuple[Tuple[MetricRetention, ...], Optional[MetricRetention]]


class RetentionRegistry:
    """
    Ordered collection of retention rules with a fallback default.

    The rule set is held as one immutable snapshot. Reloads swap the whole
    snapshot, so concurrent lookups see either the old or the new rules.
    """

    def __init__(
        self,
        rules: Iterable[MetricRetention] = (),
        default: Optional[MetricRetention] = None,
    ):
        self._snapshot: _Snapshot = (tuple(rules), default)
        self._reload_lock = threading.Lock()

    @property
    def rules(self) -> Tuple[MetricRetention, ...]:
        return self._snapshot[0]

    @property
    def default(self) -> Optional[MetricRetention]:
        return self._snapshot[1]

    def find(self, name: str) -> MetricRetention:
        """
        Get the rule for a metric name.

        Raises:
            RetentionNotFoundError: If no rule matches and there is no default.
        """
        rules, default = self._snapshot

        for rule in rules:
            if rule.matches(name):
                return rule

        if default is None:
            raise RetentionNotFoundError(metric_name=name)
        return default

    def step_size(self, name: str, age_seconds: int) -> int:
        """Get the storage step for a metric at the given age."""
        return self.find(name).step_size(age_seconds)

    def function(self, name: str) -> str:
        """Get the downsampling function for a metric."""
        return self.find(name).function

    def reload(
        self,
        rules: Iterable[MetricRetention],
        default: Optional[MetricRetention] = None,
    ) -> None:
        """Replace all rules and the default in one step."""
        snapshot: _Snapshot = (tuple(rules), default)

        with self._reload_lock:
            self._snapshot = snapshot

        logger.info(
            "Retention rules reloaded",
            rules=len(snapshot[0]),
            has_default=default is not None,
        )

    def __len__(self) -> int:
        return len(self._snapshot[0])

    def __iter__(self):
        return iter(self._snapshot[0])
