"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

from rich.console import Console

from workitems import (
    CommandError,
    ConfigError,
    PersistenceError,
    WorkItemsSession,
    configure_logging,
    load_config,
)
from workitems.cli.commands import items as item_commands
from workitems.cli.commands import tree as tree_commands
from workitems.cli.parser import build_parser

Handler = Callable[[argparse.Namespace, WorkItemsSession, Console], None]

_HANDLERS: dict[str, Handler] = {
    "tree": tree_commands.run_tree,
    "show": tree_commands.run_show,
    "add-epic": item_commands.run_add_epic,
    "add": item_commands.run_add,
    "edit": item_commands.run_edit,
    "delete": item_commands.run_delete,
    "generate": item_commands.run_generate,
    "export": item_commands.run_export,
}


def _run(args: argparse.Namespace, console: Console) -> None:
    config = load_config(args.config)
    level = logging.DEBUG if args.verbose else config.log_level
    configure_logging(level, log_path=config.log_path, stream=args.verbose)

    with WorkItemsSession(config) as session:
        _HANDLERS[args.command](args, session, console)
        if session.persistence.last_error is not None:
            raise session.persistence.last_error


def main(argv: list[str] | None = None, *, console: Console | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = console or Console()

    try:
        _run(args, console)
        return 0
    except (ConfigError, PersistenceError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except CommandError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except Exception as exc:  # pragma: no cover - defensive fallback
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
