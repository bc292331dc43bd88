"""Command line interface for crawling Congressional Record speeches."""
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .config import AppConfig, load_config, resolve_config_path, save_config
from .database import create_storage
from .errors import CrecError
from .export import write_csv, write_jsonl
from .runtime import run_crawl

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Congressional Record speech crawler")
    parser.add_argument("command", choices=["fetch", "list", "config"], help="Which action to execute")
    parser.add_argument("--config", type=Path, help="Path to an explicit configuration file")
    parser.add_argument("--api-key", help="govinfo API key (overrides the configuration)")
    parser.add_argument("--session", type=int, dest="congress_session", help="Congressional session number")
    parser.add_argument("--from", dest="date_from", help="First issue date (YYYY-MM-DD)")
    parser.add_argument("--to", dest="date_to", help="Last issue date (YYYY-MM-DD)")
    parser.add_argument("--max-results", type=int, help="Stop after this many speeches")
    parser.add_argument(
        "--drop-empty",
        action="store_true",
        help="Discard speeches whose text is empty after whitespace normalisation",
    )
    parser.add_argument("--output", type=Path, help="Write the speeches to this file")
    parser.add_argument("--format", choices=["csv", "jsonl"], default="csv", help="Output file format")
    parser.add_argument("--store", action="store_true", help="Store the speeches in the configured database")
    parser.add_argument("--limit", type=int, default=25, help="Number of stored speeches to show ('list' only)")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Write the effective settings to the configuration file ('config' only)",
    )
    return parser


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    if args.api_key:
        config.govinfo = replace(config.govinfo, api_key=args.api_key)
    overrides = {
        "congress_session": args.congress_session,
        "date_from": args.date_from,
        "date_to": args.date_to,
        "max_results": args.max_results,
    }
    config.crawl = replace(config.crawl, **{key: value for key, value in overrides.items() if value is not None})
    if args.drop_empty:
        config.crawl.keep_empty_speeches = False
    return config


def _fetch(args: argparse.Namespace, config: AppConfig) -> int:
    config = _apply_overrides(config, args)

    try:
        records = run_crawl(config)
    except CrecError as exc:
        LOGGER.error("%s", exc)
        return 1

    if args.output:
        writer = write_jsonl if args.format == "jsonl" else write_csv
        written = writer(records, args.output)
        LOGGER.info("Wrote %s speeches to %s", written, args.output)
    if args.store:
        storage = create_storage(config.storage.database_url, echo=config.storage.echo_sql)
        try:
            stored = storage.replace_records(records)
            LOGGER.info("Stored %s speeches in %s", stored, config.storage.database_url)
        finally:
            storage.dispose()
    if not args.output and not args.store:
        for record in records:
            print(f"{record.to_row()['date']}\t{record.speaker}\t{record.title}")
    return 0


def _list(args: argparse.Namespace, config: AppConfig) -> int:
    storage = create_storage(config.storage.database_url, echo=config.storage.echo_sql)
    try:
        LOGGER.info("%s speeches stored", storage.count_records())
        for record in storage.list_records(limit=args.limit):
            print(f"{record.to_row()['date']}\t{record.speaker}\t{record.title}")
    finally:
        storage.dispose()
    return 0


def _show_config(args: argparse.Namespace, config: AppConfig) -> int:
    config = _apply_overrides(config, args)
    target = resolve_config_path(args.config)
    if args.save:
        save_config(config, target)
        LOGGER.info("Saved configuration to %s", target)
        return 0
    print(f"Configuration file: {target}")
    print(f"Session: {config.crawl.congress_session}")
    print(f"Date range: {config.crawl.date_from or '-'} to {config.crawl.date_to or '-'}")
    print(f"API key configured: {'yes' if config.govinfo.api_key else 'no'}")
    return 0

def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(args.config)
    except ValueError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 1

    if args.command == "fetch":
        return _fetch(args, config)
    if args.command == "list":
        return _list(args, config)
    if args.command == "config":
        return _show_config(args, config)
    parser.error(f"Unknown command {args.command}")
    return 2


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
