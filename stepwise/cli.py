"""
Stepwise Command Line Interface

Inspect retention schemas and resolve step sizes from the command line.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from stepwise.core.config import get_settings
from stepwise.core.logging import setup_logging
from stepwise.retention import (
    RetentionError,
    RetentionRegistry,
    load_registry,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stepwise",
        description="Stepwise - time-series retention resolver",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Show command
    show_parser = subparsers.add_parser("show", help="Print rules and their ranges")
    show_parser.add_argument("--config", type=Path, help="Retention schema (JSON)")

    # Resolve command
    resolve_parser = subparsers.add_parser("resolve", help="Resolve the step for a metric")
    resolve_parser.add_argument("name", help="Metric name")
    resolve_parser.add_argument("age", type=int, help="Data point age in seconds")
    resolve_parser.add_argument("--config", type=Path, help="Retention schema (JSON)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    setup_logging(settings.log_level.value, json_output=settings.log_json)

    config_path = args.config or settings.rules_path
    if config_path is None:
        print("Error: no retention schema given (use --config or STEPWISE_RULES_PATH)", file=sys.stderr)
        return 2

    try:
        registry = load_registry(config_path)

        if args.command == "show":
            cmd_show(registry)
        elif args.command == "resolve":
            cmd_resolve(registry, args.name, args.age)
    except (RetentionError, FileNotFoundError, ValidationError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def cmd_show(registry: RetentionRegistry) -> None:
    """Print every rule with its ranges."""
    rules = list(registry.rules)
    if registry.default is not None:
        rules.append(registry.default)

    for index, rule in enumerate(rules):
        label = "default" if index == len(registry.rules) else str(index)
        print(f"[{label}] {rule.pattern.pattern}  function={rule.function}")
        if not rule.ranges:
            print("    (no ranges)")
        elif rule.ranges.min_age > 0:
            print(f"    (ages below {rule.ranges.min_age} are not covered)")
        for r in rule.ranges:
            upper = "inf" if r.upper is None else r.upper
            print(f"    {r.lower:>10} .. {upper:<10} step={r.step}")


def cmd_resolve(registry: RetentionRegistry, name: str, age: int) -> None:
    """Print the step and function for one metric at one age."""
    rule = registry.find(name)
    step = rule.step_size(age)
    print(f"{name}\tage={age}\tstep={step}\tfunction={rule.function}")


if __name__ == "__main__":
    sys.exit(main())
