"""Normalized work-item store.

The store is the single owner of every :class:`WorkItem`. Items live in flat
id-indexed maps (``items_by_id``, ``parent_by_id``) and display order is kept
in explicit lists (``root_ids`` and each item's ``child_ids``).

The store trusts its callers: it does not check parent/type legality and it
never raises. Unknown ids are silently ignored, and schema incompatibility is
reported through the returned :class:`MigrationOutcome`.

Completeness is *not* recomputed by :meth:`WorkItemStore.update_item_fields`.
Callers that edit fields must follow up with :meth:`recompute_status` (or an
explicit :meth:`update_item_status`) when the derived flag should change.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any
from uuid import uuid4

from pydantic import ValidationError

from workitems.core.contracts.item import ItemStatus, WorkItem, WorkItemType, default_fields, is_complete
from workitems.core.contracts.snapshot import ExportedItem, PersistedSnapshot, StoreExport
from workitems.core.store.notifier import ChangeNotifier, Listener, Unsubscribe
from workitems.core.store.versioning import CURRENT_DATA_STRUCTURE_VERSION, MigrationOutcome, classify_version

logger = logging.getLogger(__name__)

_STATUS_ALIASES = {
    "isLoading": "is_loading",
    "isComplete": "is_complete",
    "isError": "is_error",
}


def _new_id() -> str:
    return uuid4().hex


class WorkItemStore:
    """In-memory tree of work items with change notification."""

    def __init__(
        self,
        *,
        version: str = CURRENT_DATA_STRUCTURE_VERSION,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._current_version = version
        self._id_factory = id_factory
        self._notifier: ChangeNotifier[PersistedSnapshot] = ChangeNotifier()
        self._items: dict[str, WorkItem] = {}
        self._parents: dict[str, str | None] = {}
        self._root_ids: list[str] = []
        self._version = version

    # ---- State accessors (copies) ----

    @property
    def current_version(self) -> str:
        """The compiled-in schema version this store writes."""
        return self._current_version

    @property
    def data_structure_version(self) -> str:
        return self._version

    @property
    def items_by_id(self) -> dict[str, WorkItem]:
        return {item_id: item.model_copy(deep=True) for item_id, item in self._items.items()}

    @property
    def parent_by_id(self) -> dict[str, str | None]:
        return dict(self._parents)

    @property
    def root_ids(self) -> list[str]:
        return list(self._root_ids)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    # ---- Subscription ----

    def subscribe(self, listener: Listener[PersistedSnapshot]) -> Unsubscribe:
        """Register *listener* for post-mutation snapshots; returns an unsubscribe handle."""
        return self._notifier.subscribe(listener)

    def snapshot(self) -> PersistedSnapshot:
        export = self.export_data()
        return PersistedSnapshot(
            items_by_id=export.items_by_id,
            parent_by_id=export.parent_by_id,
            root_ids=export.root_ids,
            data_structure_version=self._version,
        )

    def _notify(self) -> None:
        if len(self._notifier) == 0:
            return
        self._notifier.emit(self.snapshot())

    # ---- CRUD ----

    def create_item(
        self,
        item_type: str,
        parent_id: str | None = None,
        field_overrides: Mapping[str, Any] | None = None,
    ) -> str:
        """Create an item and link it under *parent_id* (or as a root epic).

        The type/parent pairing is recorded as given. A missing parent is a
        caller error: the parent link is recorded but no ``child_ids`` list is
        touched.
        """
        item_type = str(item_type)
        fields: dict[str, Any] = default_fields(item_type)
        if field_overrides:
            fields.update(field_overrides)

        item_id = self._id_factory()
        self._items[item_id] = WorkItem(id=item_id, type=item_type, fields=fields)
        self._parents[item_id] = parent_id

        if parent_id is not None:
            parent = self._items.get(parent_id)
            if parent is None:
                logger.warning("created %s %s under unknown parent %s", item_type, item_id, parent_id)
            else:
                parent.child_ids.append(item_id)
        elif item_type == WorkItemType.EPIC:
            self._root_ids.append(item_id)

        logger.debug("created %s %s (parent=%s)", item_type, item_id, parent_id)
        self._notify()
        return item_id

    def get_item(self, item_id: str) -> WorkItem | None:
        item = self._items.get(item_id)
        if item is None:
            return None
        return item.model_copy(deep=True)

    def update_item_fields(self, item_id: str, fields: Mapping[str, Any]) -> None:
        """Overwrite the given field keys. Does not recompute completeness."""
        item = self._items.get(item_id)
        if item is None:
            logger.debug("update_item_fields: unknown item %s", item_id)
            return
        item.fields.update(fields)
        self._notify()

    def update_item_status(self, item_id: str, status: Mapping[str, Any] | None = None, **changes: Any) -> None:
        """Merge status flags. Keys may be field names (``is_complete``) or aliases (``isComplete``).

        Values are parsed as booleans; a value that does not parse leaves the status unchanged.
        """
        item = self._items.get(item_id)
        if item is None:
            logger.debug("update_item_status: unknown item %s", item_id)
            return
        merged = item.status.model_dump()
        for key, value in {**(status or {}), **changes}.items():
            name = _STATUS_ALIASES.get(key, key)
            if name not in merged:
                logger.debug("update_item_status: ignoring unknown status key %s", key)
                continue
            merged[name] = value
        try:
            item.status = ItemStatus.model_validate(merged)
        except ValidationError:
            logger.warning("update_item_status: rejected status values for %s: %r", item_id, merged)
            return
        self._notify()

    def recompute_status(self, item_id: str) -> bool | None:
        """Set ``is_complete`` from the completeness rule and return it."""
        item = self._items.get(item_id)
        if item is None:
            return None
        complete = is_complete(item)
        if item.status.is_complete != complete:
            item.status = item.status.model_copy(update={"is_complete": complete})
            self._notify()
        return complete

    def walk(self, item_id: str | None = None) -> Iterator[str]:
        """Yield ids depth-first in display order, starting at *item_id* or every root.

        Dangling ids and cycles are skipped.
        """
        stack = [item_id] if item_id is not None else list(reversed(self._root_ids))
        seen: set[str] = set()
        while stack:
            current = stack.pop()
            if current in seen or current not in self._items:
                continue
            seen.add(current)
            yield current
            stack.extend(reversed(self._items[current].child_ids))

    def delete_item(self, item_id: str) -> None:
        """Remove *item_id* and its whole subtree. Unknown ids are a no-op."""
        if item_id not in self._items:
            return

        # Reverse pre-order visits every child before its parent.
        doomed = list(self.walk(item_id))
        for current in reversed(doomed):
            parent_id = self._parents.get(current)
            parent = self._items.get(parent_id) if parent_id is not None else None
            if parent is not None:
                parent.child_ids[:] = [child for child in parent.child_ids if child != current]
            if current in self._root_ids:
                self._root_ids[:] = [root for root in self._root_ids if root != current]
            self._items.pop(current, None)
            self._parents.pop(current, None)

        logger.debug("deleted %s and %d descendant(s)", item_id, len(doomed) - 1)
        self._notify()

    # ---- Lifecycle ----

    def _reset(self) -> None:
        self._items = {}
        self._parents = {}
        self._root_ids = []
        self._version = self._current_version

    def reset_state(self) -> None:
        self._reset()
        self._notify()

    def _recompute_all(self) -> None:
        for item in self._items.values():
            item.status = item.status.model_copy(update={"is_complete": is_complete(item)})

    def _check_and_migrate(self, persisted_version: str | None) -> MigrationOutcome:
        outcome = classify_version(persisted_version, self._current_version)
        if outcome in (MigrationOutcome.INITIALIZED, MigrationOutcome.CLEARED):
            self._reset()
        elif outcome is MigrationOutcome.MIGRATED:
            self._recompute_all()
            self._version = self._current_version

        if outcome is MigrationOutcome.CLEARED:
            logger.warning(
                "discarded work items: persisted schema %s is incompatible with %s",
                persisted_version,
                self._current_version,
            )
        elif outcome is MigrationOutcome.MIGRATED:
            logger.info("migrated work items from schema %s to %s", persisted_version, self._current_version)
        return outcome

    def check_and_migrate_version(self, persisted_version: str | None) -> MigrationOutcome:
        """Reconcile the store with a persisted schema tag.

        * missing tag: reset, ``initialized``
        * different major: reset, ``cleared``
        * different minor: recompute completeness, ``migrated``
        * same version: ``unchanged``
        """
        outcome = self._check_and_migrate(persisted_version)
        if outcome is not MigrationOutcome.UNCHANGED:
            self._notify()
        return outcome

    def restore(self, snapshot: PersistedSnapshot, persisted_version: str | None = None) -> MigrationOutcome:
        """Adopt a persisted snapshot when its schema version allows it.

        *persisted_version* defaults to the version recorded in the snapshot.
        Snapshots carry no status, so completeness is derived for every
        adopted item.
        """
        version = persisted_version if persisted_version is not None else snapshot.data_structure_version
        outcome = self._check_and_migrate(version)
        if outcome in (MigrationOutcome.UNCHANGED, MigrationOutcome.MIGRATED):
            self._items = {
                item_id: WorkItem(
                    id=entry.id,
                    type=entry.type,
                    fields=copy.deepcopy(entry.fields),
                    status=ItemStatus(is_complete=is_complete(entry.fields)),
                    child_ids=list(entry.child_ids),
                )
                for item_id, entry in snapshot.items_by_id.items()
            }
            self._parents = dict(snapshot.parent_by_id)
            self._root_ids = list(snapshot.root_ids)
            self._version = self._current_version
            logger.info("restored %d work item(s) (%s)", len(self._items), outcome)
        self._notify()
        return outcome

    def export_data(self) -> StoreExport:
        """Return a detached copy of the tree without status or bookkeeping."""
        return StoreExport(
            items_by_id={
                item_id: ExportedItem(
                    id=item.id,
                    type=item.type,
                    fields=copy.deepcopy(item.fields),
                    child_ids=list(item.child_ids),
                )
                for item_id, item in self._items.items()
            },
            parent_by_id=dict(self._parents),
            root_ids=list(self._root_ids),
        )
