"""Tree and show commands."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from workitems import TreeNode, TreeProjection, WorkItemsSession

_DESCRIPTION_STYLES = {
    "Complete": "green",
    "Incomplete": "yellow",
    "Loading...": "cyan",
}


def format_node(node: TreeNode) -> str:
    text = f"[bold]{escape(node.label)}[/bold] [dim]{node.type} {node.id}[/dim]"
    if node.description:
        style = _DESCRIPTION_STYLES.get(node.description, "white")
        text += f" [{style}]{escape(node.description)}[/{style}]"
    return text


def build_tree(projection: TreeProjection, *, title: str = "Work items") -> Tree:
    root = Tree(title)
    stack: list[tuple[TreeNode, Tree]] = [(node, root) for node in reversed(projection.get_children())]
    seen: set[str] = set()
    while stack:
        node, branch_parent = stack.pop()
        if node.id in seen:
            continue
        seen.add(node.id)
        branch = branch_parent.add(format_node(node))
        if node.collapsible:
            stack.extend((child, branch) for child in reversed(projection.get_children(node)))
    return root


def run_tree(args: argparse.Namespace, session: WorkItemsSession, console: Console) -> None:
    del args
    if not session.store.root_ids:
        console.print("No work items yet. Use [bold]workitems add-epic TITLE[/bold] to create one.")
        return
    console.print(build_tree(session.projection))


def run_show(args: argparse.Namespace, session: WorkItemsSession, console: Console) -> None:
    item = session.commands.find_item(args.item_id)
    status = "complete" if item.status.is_complete else "incomplete"
    table = Table(title=f"{item.type} {item.id} ({status})")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for name, value in item.fields.items():
        table.add_row(name, escape(str(value)))
    console.print(table)
    if item.child_ids:
        console.print(f"Children: {', '.join(item.child_ids)}")


__all__ = ["build_tree", "format_node", "run_show", "run_tree"]
