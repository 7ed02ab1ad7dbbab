"""
Stepwise - Time-Series Retention Resolver

Decides, per metric-name rule, which storage step size and downsampling
function apply to a data point of a given age.
"""

__version__ = "1.0.0"

from stepwise.retention import (
    AggregationType,
    MetricRetention,
    RetentionNotFoundError,
    RetentionRegistry,
)

__all__ = [
    "AggregationType",
    "MetricRetention",
    "RetentionNotFoundError",
    "RetentionRegistry",
    "__version__",
]
