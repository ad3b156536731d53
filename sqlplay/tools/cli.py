"""
Command line front-end for SQL Playground.

Drives the same Playground core as the HTTP API, against a local
database file:
- list / create / show / rename / delete: manage playgrounds
- run: execute one guarded SQL statement
- history: show the most recent execution attempts

Usage:
    sqlplay list
    sqlplay create "demo"
    sqlplay run 1 "SELECT 1 AS x"
    sqlplay --db /tmp/play.db history 1

Invariants:
    - Output on stdout is JSON, one document per command
    - Any core error prints "error: <message>" on stderr and exits 1
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from typing import Any

from ..config import ObservabilityConfig, ServerConfig, StorageConfig
from ..engine import Playground
from ..errors import NotFoundError, PlaygroundError
from ..observability import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sqlplay", description="SQL Playground tool")
    parser.add_argument("--db", help="SQLite database file (default: $SQLPLAY_DB_PATH)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List playgrounds, most recently modified first")

    create_parser = subparsers.add_parser("create", help="Create a playground")
    create_parser.add_argument("title", help="Playground title")

    show_parser = subparsers.add_parser("show", help="Show one playground")
    show_parser.add_argument("id", type=int, help="Playground ID")

    rename_parser = subparsers.add_parser("rename", help="Rename a playground")
    rename_parser.add_argument("id", type=int, help="Playground ID")
    rename_parser.add_argument("title", help="New title")

    delete_parser = subparsers.add_parser("delete", help="Delete a playground and its history")
    delete_parser.add_argument("id", type=int, help="Playground ID")

    run_parser = subparsers.add_parser("run", help="Execute a SQL statement")
    run_parser.add_argument("id", type=int, help="Playground ID")
    run_parser.add_argument("sql", help="SQL text")

    history_parser = subparsers.add_parser("history", help="Show execution history")
    history_parser.add_argument("id", type=int, help="Playground ID")

    return parser


async def dispatch(playground: Playground, args: argparse.Namespace) -> Any:
    """Run one parsed command and return a JSON-serializable result."""
    if args.command == "list":
        return [ws.to_dict() for ws in await playground.list_workspaces()]

    if args.command == "create":
        return (await playground.create_workspace(args.title)).to_dict()

    if args.command == "show":
        workspace = await playground.get_workspace(args.id)
        if workspace is None:
            raise NotFoundError("Playground not found", "playground", args.id)
        return workspace.to_dict()

    if args.command == "rename":
        return (await playground.rename_workspace(args.id, args.title)).to_dict()

    if args.command == "delete":
        await playground.delete_workspace(args.id)
        return {"message": "Playground deleted successfully"}

    if args.command == "run":
        return (await playground.run_guarded_query(args.id, args.sql)).to_dict()

    if args.command == "history":
        return [record.to_dict() for record in await playground.get_history(args.id)]

    raise ValueError(f"Unknown command: {args.command}")


async def run_command(config: StorageConfig, args: argparse.Namespace) -> Any:
    async with Playground.from_config(config) as playground:
        return await dispatch(playground, args)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(ObservabilityConfig(log_level=args.log_level))

    # Only storage settings apply here; logging comes from --log-level.
    try:
        storage = StorageConfig.from_env()
        if args.db:
            storage = replace(storage, db_path=args.db)
        ServerConfig(storage=storage).validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        result = asyncio.run(run_command(storage, args))
    except PlaygroundError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
