"""Item mutation commands."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from workitems import CommandError, PersistenceError, WorkItem, WorkItemsSession, WorkItemType, display_label


def parse_assignments(assignments: list[str]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for assignment in assignments:
        name, sep, value = assignment.partition("=")
        if not sep or not name.strip():
            raise CommandError(f"expected FIELD=VALUE, got: {assignment}")
        fields[name.strip()] = value
    return fields


def run_add_epic(args: argparse.Namespace, session: WorkItemsSession, console: Console) -> None:
    item_id = session.commands.add_epic(args.title)
    console.print(f"Added epic {escape(args.title.strip())!r}: {item_id}")


def run_add(args: argparse.Namespace, session: WorkItemsSession, console: Console) -> None:
    kind = WorkItemType(args.item_type)
    item_id = session.commands.add_child(args.parent_id, kind, args.title)
    console.print(f"Added {kind} {escape(args.title.strip())!r}: {item_id}")


def run_edit(args: argparse.Namespace, session: WorkItemsSession, console: Console) -> None:
    item = session.commands.edit_fields(args.item_id, parse_assignments(args.assignments))
    state = "complete" if item.status.is_complete else "incomplete"
    console.print(f"Updated {item.type} {escape(display_label(item))!r} ({state})")


def run_delete(args: argparse.Namespace, session: WorkItemsSession, console: Console) -> None:
    def confirm(item: WorkItem, descendants: int) -> bool:
        if args.yes:
            return True
        suffix = f" and {descendants} item(s) under it" if descendants else ""
        return Confirm.ask(
            f"Are you sure you want to delete {item.type}: {escape(display_label(item))}{suffix}?",
            console=console,
            default=False,
        )

    item = session.commands.find_item(args.item_id)
    if session.commands.delete_item(args.item_id, confirm=confirm):
        console.print(f"{item.type} {escape(display_label(item))!r} deleted successfully!")
    else:
        console.print("Nothing deleted.")


def run_generate(args: argparse.Namespace, session: WorkItemsSession, console: Console) -> None:
    count = args.count if args.count is not None else session.config.generate_count
    if count < 1:
        raise CommandError("--count must be at least 1")
    created = session.commands.generate_children(args.item_id, count=count)
    console.print(f"{len(created)} item(s) generated successfully.")


def run_export(args: argparse.Namespace, session: WorkItemsSession, console: Console) -> None:
    payload = json.dumps(session.store.export_data().model_dump(mode="json", by_alias=True), indent=2)
    if args.output is None:
        console.print_json(payload)
        return
    output = Path(args.output)
    try:
        output.write_text(payload + "\n", encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(f"failed to write export: {output}") from exc
    console.print(f"Exported {len(session.store)} item(s) to {output}")


__all__ = [
    "parse_assignments",
    "run_add",
    "run_add_epic",
    "run_delete",
    "run_edit",
    "run_export",
    "run_generate",
]
