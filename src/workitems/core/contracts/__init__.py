"""Core contracts-domain exports."""

from workitems.core.contracts.config import WorkItemsConfig
from workitems.core.contracts.exceptions import (
    CommandError,
    ConfigError,
    HierarchyError,
    ItemNotFoundError,
    PersistenceError,
    WorkItemsError,
)
from workitems.core.contracts.item import (
    ALLOWED_PARENT_TYPES,
    ItemStatus,
    WorkItem,
    WorkItemType,
    default_fields,
    display_label,
    is_complete,
    is_valid_parent,
)
from workitems.core.contracts.snapshot import ExportedItem, PersistedSnapshot, StoreExport

__all__ = [
    "ALLOWED_PARENT_TYPES",
    "CommandError",
    "ConfigError",
    "ExportedItem",
    "HierarchyError",
    "ItemNotFoundError",
    "ItemStatus",
    "PersistedSnapshot",
    "PersistenceError",
    "StoreExport",
    "WorkItem",
    "WorkItemType",
    "WorkItemsError",
    "default_fields",
    "display_label",
    "is_complete",
    "is_valid_parent",
]
