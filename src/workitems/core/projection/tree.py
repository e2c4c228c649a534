"""Display-tree projection over the work-item store."""

from __future__ import annotations

from pydantic import BaseModel

from workitems.core.contracts.item import WorkItem, WorkItemType, display_label
from workitems.core.store import WorkItemStore

TYPE_ICONS: dict[str, str] = {
    WorkItemType.EPIC: "project",
    WorkItemType.FEATURE: "package",
    WorkItemType.SOLUTION_INTENT: "lightbulb",
    WorkItemType.STORY: "note",
}


class TreeNode(BaseModel):
    id: str
    type: str
    label: str
    description: str = ""
    icon: str | None = None
    collapsible: bool = False


def _decorate(item: WorkItem) -> tuple[str, str | None]:
    if item.status.is_loading:
        return "Loading...", "sync~spin"
    if item.status.is_error:
        return "Incomplete", "warning"
    if item.status.is_complete:
        return "Complete", "check"
    return "", TYPE_ICONS.get(item.type)


def build_node(item: WorkItem) -> TreeNode:
    description, icon = _decorate(item)
    return TreeNode(
        id=item.id,
        type=item.type,
        label=display_label(item),
        description=description,
        icon=icon,
        collapsible=bool(item.child_ids),
    )


class TreeProjection:
    """Resolve roots and children to :class:`TreeNode` on demand."""

    def __init__(self, store: WorkItemStore) -> None:
        self._store = store

    def get_children(self, node: TreeNode | str | None = None) -> list[TreeNode]:
        if node is None:
            ids = self._store.root_ids
        else:
            parent = self._store.get_item(node if isinstance(node, str) else node.id)
            if parent is None:
                return []
            ids = parent.child_ids

        nodes: list[TreeNode] = []
        for item_id in ids:
            item = self._store.get_item(item_id)
            if item is None:
                continue
            nodes.append(build_node(item))
        return nodes
