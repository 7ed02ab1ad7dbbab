"""
Retention Engine

Maps the age of a data point to the storage step size and downsampling
function configured for its metric name.
"""

from .exceptions import (
    RetentionError,
    InvalidRetentionError,
    InvalidRetentionPatternError,
    RetentionNotFoundError,
)

from .types import (
    AggregationType,
    RetentionRange,
)

from .ranges import RangeTable

from .rule import (
    MetricRetention,
    MetricRetentionBuilder,
)

from .registry import RetentionRegistry

from .loader import (
    RetentionPoint,
    RetentionRuleDefinition,
    RetentionSchema,
    build_rule,
    build_registry,
    parse_schema,
    load_schema,
    load_registry,
)

__all__ = [
    # Errors
    "RetentionError",
    "InvalidRetentionError",
    "InvalidRetentionPatternError",
    "RetentionNotFoundError",
    # Types
    "AggregationType",
    "RetentionRange",
    "RangeTable",
    # Rules
    "MetricRetention",
    "MetricRetentionBuilder",
    "RetentionRegistry",
    # Loading
    "RetentionPoint",
    "RetentionRuleDefinition",
    "RetentionSchema",
    "build_rule",
    "build_registry",
    "parse_schema",
    "load_schema",
    "load_registry",
]
