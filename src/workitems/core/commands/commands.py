"""Command layer: the only sanctioned mutator of a :class:`WorkItemStore`.

Commands validate ids, titles, field names and the parent/type hierarchy
before the store is touched, so a rejected command never leaves a partial
edit behind.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping

from workitems.core.contracts.exceptions import CommandError, HierarchyError, ItemNotFoundError
from workitems.core.contracts.item import WorkItem, WorkItemType, is_valid_parent
from workitems.core.store import WorkItemStore

logger = logging.getLogger(__name__)

ConfirmDelete = Callable[[WorkItem, int], bool]
"""Called with the item and its descendant count; returns True to proceed."""

_PLACEHOLDER_PREFIX: dict[str, str] = {
    WorkItemType.FEATURE: "FEATURE",
    WorkItemType.STORY: "STORY",
}


class WorkItemCommands:
    def __init__(self, store: WorkItemStore, *, rng: random.Random | None = None) -> None:
        self._store = store
        self._rng = rng or random.Random()

    @property
    def store(self) -> WorkItemStore:
        return self._store

    def find_item(self, item_id: str) -> WorkItem:
        item = self._store.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    # ---- Creation ----

    def add_epic(self, title: str) -> str:
        return self._create(WorkItemType.EPIC, None, title)

    def add_feature(self, parent_id: str, title: str) -> str:
        return self.add_child(parent_id, WorkItemType.FEATURE, title)

    def add_solution_intent(self, parent_id: str, title: str) -> str:
        return self.add_child(parent_id, WorkItemType.SOLUTION_INTENT, title)

    def add_story(self, parent_id: str, title: str) -> str:
        return self.add_child(parent_id, WorkItemType.STORY, title)

    def add_child(self, parent_id: str, item_type: str, title: str) -> str:
        parent = self.find_item(parent_id)
        return self._create(item_type, parent, title)

    def _create(self, item_type: str, parent: WorkItem | None, title: str) -> str:
        try:
            kind = WorkItemType(item_type)
        except ValueError as exc:
            raise CommandError(f"unknown work item type: {item_type}") from exc

        parent_type = parent.type if parent is not None else None
        if not is_valid_parent(kind, parent_type):
            where = f"under a {parent_type}" if parent_type else "at the top level"
            raise HierarchyError(f"a {kind} cannot be created {where}", child_type=kind, parent_type=parent_type)

        clean_title = title.strip()
        if not clean_title:
            raise CommandError(f"{kind} title must not be blank")

        item_id = self._store.create_item(
            kind,
            parent_id=parent.id if parent is not None else None,
            field_overrides={"Title": clean_title},
        )
        self._store.recompute_status(item_id)
        logger.info("added %s %r (%s)", kind, clean_title, item_id)
        return item_id

    def generate_children(self, parent_id: str, *, count: int = 5) -> list[str]:
        """Create *count* placeholder children: features under an epic, stories under a feature."""
        parent = self.find_item(parent_id)
        if parent.type == WorkItemType.EPIC:
            kind = WorkItemType.FEATURE
        elif parent.type == WorkItemType.FEATURE:
            kind = WorkItemType.STORY
        else:
            raise HierarchyError(
                f"cannot generate children for a {parent.type}",
                child_type="",
                parent_type=parent.type,
            )
        prefix = _PLACEHOLDER_PREFIX[kind]
        return [self._create(kind, parent, f"{prefix}-{self._rng.randint(0, 9999)}") for _ in range(count)]

    def generate_features(self, epic_id: str, *, count: int = 5) -> list[str]:
        epic = self.find_item(epic_id)
        if epic.type != WorkItemType.EPIC:
            raise HierarchyError(
                "features can only be generated under an epic", child_type="feature", parent_type=epic.type
            )
        return self.generate_children(epic_id, count=count)

    def generate_stories(self, feature_id: str, *, count: int = 5) -> list[str]:
        feature = self.find_item(feature_id)
        if feature.type != WorkItemType.FEATURE:
            raise HierarchyError(
                "stories can only be generated under a feature", child_type="story", parent_type=feature.type
            )
        return self.generate_children(feature_id, count=count)

    # ---- Editing ----

    def edit_fields(self, item_id: str, fields: Mapping[str, str]) -> WorkItem:
        """Update field values, then recompute completeness."""
        item = self.find_item(item_id)
        unknown = sorted(set(fields) - set(item.fields))
        if unknown:
            raise CommandError(f"{item.type} has no field(s): {', '.join(unknown)}")
        self._store.update_item_fields(item_id, fields)
        self._store.recompute_status(item_id)
        return self.find_item(item_id)

    def rename(self, item_id: str, title: str) -> WorkItem:
        clean_title = title.strip()
        if not clean_title:
            raise CommandError("title must not be blank")
        return self.edit_fields(item_id, {"Title": clean_title})

    # ---- Deletion ----

    def delete_item(self, item_id: str, *, confirm: ConfirmDelete | None = None) -> bool:
        """Delete an item and its subtree. Returns False if *confirm* declines."""
        item = self.find_item(item_id)
        descendants = sum(1 for _ in self._store.walk(item_id)) - 1
        if confirm is not None and not confirm(item, descendants):
            logger.debug("delete of %s cancelled", item_id)
            return False
        self._store.delete_item(item_id)
        logger.info("deleted %s %s with %d descendant(s)", item.type, item_id, descendants)
        return True
