"""
Retention Rule Loader

Declarative rule definitions validated with Pydantic, and helpers to turn
them into rules and registries. Definitions are read from JSON documents
of the form::

    {
        "rules": [
            {
                "pattern": "cpu\\\\..*",
                "function": "avg",
                "retentions": [
                    {"age": 0, "precision": 10},
                    {"age": 3600, "precision": 60}
                ]
            }
        ],
        "default": {"pattern": ".*", "function": "last", "retentions": [...]}
    }
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, List, Mapping, Optional

import structlog
from pydantic import BaseModel, Field, field_validator

from stepwise.retention.registry import RetentionRegistry
from stepwise.retention.rule import MetricRetention
from stepwise.retention.types import AggregationType

logger = structlog.get_logger(__name__)


class RetentionPoint(BaseModel):
    """From `age` seconds on, keep data at `precision` seconds."""
    age: int = Field(ge=0, description="Age threshold in seconds")
    precision: int = Field(gt=0, description="Step size in seconds")


class RetentionRuleDefinition(BaseModel):
    """A single rule as written in configuration."""
    pattern: str
    function: str = AggregationType.AVG.value
    retentions: List[RetentionPoint] = Field(default_factory=list)

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid regular expression: {e}") from e
        return v


class RetentionSchema(BaseModel):
    """Ordered rule definitions plus an optional catch-all default."""
    rules: List[RetentionRuleDefinition] = Field(default_factory=list)
    default: Optional[RetentionRuleDefinition] = None


def build_rule(definition: RetentionRuleDefinition) -> MetricRetention:
    """Build a rule from its definition."""
    builder = MetricRetention.new_builder(definition.pattern, definition.function)
    for point in definition.retentions:
        builder.add_retention(point.age, point.precision)
    return builder.build()


def build_registry(
    schema: RetentionSchema,
    registry: Optional[RetentionRegistry] = None,
) -> RetentionRegistry:
    """
    Build every rule in a schema.

    When an existing registry is given it is reloaded in place, otherwise a
    new one is created. All rules are built before the registry is touched.
    """
    rules = [build_rule(d) for d in schema.rules]
    default = build_rule(schema.default) if schema.default is not None else None

    if registry is None:
        return RetentionRegistry(rules, default)

    registry.reload(rules, default)
    return registry


def parse_schema(data: Mapping[str, Any]) -> RetentionSchema:
    """Validate a mapping as a retention schema."""
    return RetentionSchema.model_validate(data)


def load_schema(path: Path) -> RetentionSchema:
    """Load a retention schema from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Retention config not found: {path}")

    with open(path) as f:
        data = json.load(f)

    schema = parse_schema(data)
    logger.info("Loaded retention schema", path=str(path), rules=len(schema.rules))
    return schema


def load_registry(
    path: Path,
    registry: Optional[RetentionRegistry] = None,
) -> RetentionRegistry:
    """Load a JSON file and build (or reload) a registry from it."""
    return build_registry(load_schema(path), registry)
