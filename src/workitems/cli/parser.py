"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version

from workitems.core.config import DEFAULT_CONFIG_NAME

CHILD_TYPE_CHOICES = ("feature", "solution-intent", "story")


def _package_version() -> str:
    try:
        return version("workitems-manager")
    except PackageNotFoundError:
        return "0.0.0"


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=f"./{DEFAULT_CONFIG_NAME}", help=f"Path to {DEFAULT_CONFIG_NAME}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="workitems")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    tree_parser = subparsers.add_parser("tree", help="Show the work-item tree")
    _add_common(tree_parser)

    add_epic_parser = subparsers.add_parser("add-epic", help="Add a top-level epic")
    add_epic_parser.add_argument("title", help="Epic title")
    _add_common(add_epic_parser)

    add_parser = subparsers.add_parser("add", help="Add a feature, solution intent or story under a parent")
    add_parser.add_argument("item_type", choices=CHILD_TYPE_CHOICES, help="Kind of item to add")
    add_parser.add_argument("parent_id", help="Parent item id")
    add_parser.add_argument("title", help="Item title")
    _add_common(add_parser)

    edit_parser = subparsers.add_parser("edit", help="Set field values on an item")
    edit_parser.add_argument("item_id", help="Item id")
    edit_parser.add_argument("assignments", nargs="+", metavar="FIELD=VALUE", help="Field assignments")
    _add_common(edit_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete an item and everything under it")
    delete_parser.add_argument("item_id", help="Item id")
    delete_parser.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    _add_common(delete_parser)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate placeholder features under an epic or stories under a feature",
    )
    generate_parser.add_argument("item_id", help="Epic or feature id")
    generate_parser.add_argument("--count", type=int, default=None, help="Number of items (default from config)")
    _add_common(generate_parser)

    show_parser = subparsers.add_parser("show", help="Show the fields of one item")
    show_parser.add_argument("item_id", help="Item id")
    _add_common(show_parser)

    export_parser = subparsers.add_parser("export", help="Print the store as JSON")
    export_parser.add_argument("--output", "-o", default=None, help="Write to a file instead of stdout")
    _add_common(export_parser)

    return parser


__all__ = ["build_parser"]
