"""Command-line interface for exporting and summarizing tagged video sessions."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Sequence

import uvicorn

from clipmark.analysis import build_summary
from clipmark.api import create_app
from clipmark.config import Settings, load_settings
from clipmark.export import build_export_rows, rows_to_csv
from clipmark.persistence import create_repository


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export and summarize video tags")
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite database path (overrides CLIPMARK_DB_PATH)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log storage activity to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export = subparsers.add_parser("export", help="Export all tags as CSV")
    export.add_argument("--output", type=Path, default=None, help="Output CSV path (stdout if omitted)")
    export.add_argument("--json", action="store_true", help="Emit export rows as JSON instead of CSV")

    subparsers.add_parser("summary", help="Print tag counts per category and player")

    serve = subparsers.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")
    return parser.parse_args(argv)


def _settings(args: argparse.Namespace) -> Settings:
    settings = load_settings()
    if args.db is not None:
        settings = replace(settings, storage="sqlite", db_path=args.db)
    return settings


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s [%(name)s] %(message)s",
    )
    settings = _settings(args)

    if args.command == "serve":
        uvicorn.run(create_app(settings=settings), host=args.host, port=args.port)
        return

    repository = create_repository(settings)

    if args.command == "summary":
        summary = build_summary(repository)
        print(json.dumps(summary.model_dump(by_alias=True), indent=2))
        return

    rows = build_export_rows(repository)
    if args.json:
        text = json.dumps([row.model_dump(by_alias=True) for row in rows], indent=2)
    else:
        text = rows_to_csv(rows)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"Exported {len(rows)} tags to {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    main()
