"""Exception hierarchy for workitems.

The store never raises; these exceptions belong to the boundaries around it
(configuration, persistence, and the command layer).
"""

from __future__ import annotations


class WorkItemsError(Exception):
    """Base exception for all workitems errors."""


class ConfigError(WorkItemsError):
    """Configuration loading or validation failure."""


class PersistenceError(WorkItemsError):
    """Snapshot could not be read from or written to durable storage."""


class CommandError(WorkItemsError):
    """A user command was rejected before reaching the store."""


class ItemNotFoundError(CommandError):
    """A command referenced an item id the store does not hold."""

    def __init__(self, item_id: str) -> None:
        super().__init__(f"work item not found: {item_id}")
        self.item_id = item_id


class HierarchyError(CommandError):
    """A command would place an item under an illegal parent type."""

    def __init__(self, message: str, *, child_type: str, parent_type: str | None) -> None:
        super().__init__(message)
        self.child_type = child_type
        self.parent_type = parent_type
