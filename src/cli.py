"""Command-line interface for modgraph-core."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

from graph.engine import DependencyGraphEngine
from rules.config import ConfigError, ModGraphConfig, load_config
from store.snapshot import SnapshotError, load_module_state, load_snapshot
from validate.validator import ConfigValidator


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "snapshot",
        help="JSON snapshot with 'dependencies' and 'compatibility' lists",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Directory containing modgraph.toml (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="modgraph")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    graph_parser = subparsers.add_parser("graph", help="Print the dependency graph")
    _add_common_args(graph_parser)
    graph_parser.add_argument(
        "--fail-on-cycles",
        action="store_true",
        help="Exit with status 1 when the graph has cycles",
    )

    order_parser = subparsers.add_parser(
        "order", help="Print an installation order for modules"
    )
    _add_common_args(order_parser)
    order_parser.add_argument("keys", nargs="+", help="Module keys to install")

    validate_parser = subparsers.add_parser(
        "validate", help="Validate a proposed module change"
    )
    _add_common_args(validate_parser)
    validate_parser.add_argument(
        "--proposed",
        required=True,
        help="JSON file with the proposed module state",
    )
    validate_parser.add_argument(
        "--current",
        default=None,
        help="JSON file with the current module state (omit for a new module)",
    )

    return parser


def _load_engine(snapshot: str, config: ModGraphConfig) -> DependencyGraphEngine:
    store = load_snapshot(Path(snapshot).expanduser().resolve())
    edges, compatibility = store.snapshot()
    return DependencyGraphEngine(edges, compatibility, core_key=config.graph.core_key)


def _write_json(payload: object) -> None:
    options = orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS
    sys.stdout.write(orjson.dumps(payload, option=options).decode())
    sys.stdout.write("\n")


def _handle_graph(engine: DependencyGraphEngine, *, fail_on_cycles: bool) -> int:
    graph = engine.graph
    _write_json(graph.model_dump(mode="json", by_alias=True))
    if fail_on_cycles and graph.has_cycles:
        for cycle in graph.cycles:
            sys.stderr.write(f"cycle: {' -> '.join(cycle)}\n")
        return 1
    return 0


def _handle_order(engine: DependencyGraphEngine, keys: list[str]) -> int:
    for key in engine.get_installation_order(keys):
        sys.stdout.write(f"{key}\n")
    return 0


def _handle_validate(
    engine: DependencyGraphEngine,
    config: ModGraphConfig,
    proposed: str,
    current: str | None,
) -> int:
    proposed_state = load_module_state(Path(proposed).expanduser().resolve())
    current_state = (
        load_module_state(Path(current).expanduser().resolve())
        if current is not None
        else None
    )
    validator = ConfigValidator(engine, config.validator)
    result = validator.validate_module(current_state, proposed_state)
    _write_json(result.model_dump(mode="json"))
    return 0 if result.can_save else 1


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    root = Path(args.root).expanduser().resolve()
    try:
        config = load_config(root)
        engine = _load_engine(args.snapshot, config)

        if args.command == "graph":
            return _handle_graph(engine, fail_on_cycles=args.fail_on_cycles)

        if args.command == "order":
            return _handle_order(engine, args.keys)

        if args.command == "validate":
            return _handle_validate(engine, config, args.proposed, args.current)
    except (ConfigError, SnapshotError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
