"""
Command-line tools for Shift.

    shift match PATTERN EVENT
    shift routes package.module:DEFINITIONS EVENT
    shift run package.module:DEFINITIONS
"""

from __future__ import annotations

import argparse
import importlib
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from shift.app import Shift
from shift.bootstrap import bootstrap
from shift.config import ShiftConfig
from shift.errors import EternalDispatchLoop, ShiftError
from shift.logging_config import configure_logging
from shift.routing import matches, resolve


def load_definitions(target: str) -> Mapping[str, Any]:
    """Import ``package.module:attr`` and return the definitions mapping."""
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise ShiftError(f"Expected 'package.module:attr', got {target!r}")

    module = importlib.import_module(module_name)
    try:
        definitions = getattr(module, attr)
    except AttributeError:
        raise ShiftError(f"{module_name!r} has no attribute {attr!r}") from None

    if not isinstance(definitions, Mapping):
        raise ShiftError(f"{target!r} is not a mapping of namespace -> definition")
    return definitions


def cmd_match(pattern: str, event: str) -> int:
    result = matches(pattern, event)
    print("true" if result else "false")
    return 0 if result else 1


def cmd_routes(target: str, event: str, config: ShiftConfig) -> int:
    definitions = load_definitions(target)
    app = Shift(definitions, config=config)
    result = bootstrap(definitions, app.registry)
    app.modules.update(result.modules)

    for failure in result.errors:
        print(f"bootstrap failed: {failure.module}: {failure.exception!r}", file=sys.stderr)

    for route in resolve(event, app.modules):
        print(f"{route.module} {route.action}")
    return 0


def cmd_run(target: str, config: ShiftConfig) -> int:
    app = Shift(load_definitions(target), config=config)
    try:
        app.run()
    except EternalDispatchLoop as exc:
        print(f"Fatal: {exc}", file=sys.stderr)
        return 2
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shift", description="Shift event bus tools")
    parser.add_argument("--log-level", help="Log level (overrides SHIFT_LOG_LEVEL)")
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit JSON logs (overrides SHIFT_LOG_JSON)"
    )
    parser.add_argument(
        "--base-dir", type=Path, help="Directory holding config/shift.env (default: cwd)"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    match = sub.add_parser("match", help="Test a route pattern against an event name")
    match.add_argument("pattern")
    match.add_argument("event")

    routes = sub.add_parser("routes", help="List the routes an event resolves to")
    routes.add_argument("target", help="package.module:attr holding module definitions")
    routes.add_argument("event")

    run = sub.add_parser("run", help="Bootstrap modules and run until the bus drains")
    run.add_argument("target", help="package.module:attr holding module definitions")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    config = ShiftConfig.from_env(args.base_dir)
    if args.log_level:
        config.log_level = args.log_level.upper()
    if args.json_logs:
        config.json_logs = True
    configure_logging(config)

    try:
        if args.command == "match":
            return cmd_match(args.pattern, args.event)
        if args.command == "routes":
            return cmd_routes(args.target, args.event, config)
        if args.command == "run":
            return cmd_run(args.target, config)
    except ShiftError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
