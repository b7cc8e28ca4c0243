"""CLI entry point for capsearch.

Runs one search against a configured connector and prints every emitted
record as a JSON line on stdout.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from capsearch.config.settings import Settings
    from capsearch.models.paging import PagingRequest
    from capsearch.models.predicate import Predicate
    from capsearch.models.record import Record


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for capsearch."""
    parser = argparse.ArgumentParser(
        prog="capsearch",
        description="capsearch — Capability-aware search over record backends",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--connector",
        type=str,
        default=None,
        help="Connector to search (overrides search.default_connector)",
    )
    parser.add_argument(
        "--equals",
        action="append",
        default=[],
        metavar="ATTR=VALUE",
        help="Exact match clause (repeatable)",
    )
    parser.add_argument(
        "--contains",
        action="append",
        default=[],
        metavar="ATTR=VALUE",
        help="Substring match clause (repeatable)",
    )
    parser.add_argument("--page-size", type=int, default=None, help="Records per page")
    parser.add_argument("--offset", type=int, default=None, help="1-based index of the first record")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"capsearch {_get_version()}",
    )

    args = parser.parse_args(argv)

    from capsearch.config.settings import Settings

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level

    from capsearch.observability.logging import setup_logging

    setup_logging(settings.observability)

    try:
        predicate = build_predicate(args.equals, args.contains)
    except ValueError as e:
        parser.error(str(e))

    from capsearch.models.paging import PagingRequest

    paging = None
    if args.page_size is not None or args.offset is not None:
        paging = PagingRequest(page_size=args.page_size, offset=args.offset)

    connector_name = args.connector or settings.search.default_connector
    sys.exit(asyncio.run(_run(settings, connector_name, predicate, paging)))


def _parse_clause(clause: str) -> tuple[str, str]:
    attribute, sep, value = clause.partition("=")
    if not sep or not attribute:
        raise ValueError(f"Expected ATTR=VALUE, got '{clause}'")
    return attribute, value


def build_predicate(equals: list[str], contains: list[str]) -> Predicate | None:
    """Turn ``ATTR=VALUE`` clauses into a predicate.

    No clause means match all, one clause is used as is, and several clauses
    are combined with And.

    Raises:
        ValueError: If a clause is not of the form ``ATTR=VALUE``.
    """
    from capsearch.models.predicate import And, Contains, Equals

    clauses: list[Predicate] = []
    for clause in equals:
        attribute, value = _parse_clause(clause)
        clauses.append(Equals(attribute=attribute, value=value))
    for clause in contains:
        attribute, value = _parse_clause(clause)
        clauses.append(Contains(attribute=attribute, value=value))

    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return And(predicates=clauses)


def _print_records(records: list[Record]) -> None:
    for record in records:
        print(record.model_dump_json())


async def _run(
    settings: Settings,
    connector_name: str,
    predicate: Predicate | None,
    paging: PagingRequest | None,
) -> int:
    from capsearch.connectors.base.exceptions import ConnectorError
    from capsearch.connectors.base.registry import ConnectorNotFoundError, ConnectorRegistry
    from capsearch.connectors.loader import register_connectors
    from capsearch.core.engine import SearchEngine
    from capsearch.core.exceptions import SearchError
    from capsearch.observability.logging import get_logger

    log = get_logger("capsearch.cli")
    registry = ConnectorRegistry()
    await register_connectors(registry, settings)
    try:
        connector = registry.get(connector_name)
        engine = SearchEngine(connector, settings.search)
        result = await engine.search(predicate, _print_records, paging)
    except ConnectorNotFoundError as e:
        log.error("connector_unavailable", connector=connector_name, error=str(e))
        return 1
    except SearchError as e:
        log.error("search_rejected", connector=connector_name, error=str(e))
        return 2
    except ConnectorError as e:
        log.error("backend_failed", connector=connector_name, error=str(e))
        return 3
    finally:
        await registry.shutdown_all()

    log.info(
        "search_completed",
        connector=connector_name,
        token=result.token,
        no_more_results=result.no_more_results,
    )
    return 0


def _get_version() -> str:
    """Get the package version."""
    try:
        from capsearch import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
