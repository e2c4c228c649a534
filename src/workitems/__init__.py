"""Public API surface for workitems."""

__version__ = "0.1.0"

from workitems.core.commands import ConfirmDelete, WorkItemCommands
from workitems.core.config import configure_logging, load_config, write_config
from workitems.core.contracts import (
    CommandError,
    ConfigError,
    ExportedItem,
    HierarchyError,
    ItemNotFoundError,
    ItemStatus,
    PersistedSnapshot,
    PersistenceError,
    StoreExport,
    WorkItem,
    WorkItemsConfig,
    WorkItemsError,
    WorkItemType,
    default_fields,
    display_label,
    is_complete,
    is_valid_parent,
)
from workitems.core.persistence import JsonFilePersistence, load_snapshot, persist_snapshot
from workitems.core.projection import TreeNode, TreeProjection
from workitems.core.store import CURRENT_DATA_STRUCTURE_VERSION, MigrationOutcome, WorkItemStore
from workitems.session import WorkItemsSession

__all__ = [
    "CURRENT_DATA_STRUCTURE_VERSION",
    "CommandError",
    "ConfigError",
    "ConfirmDelete",
    "ExportedItem",
    "HierarchyError",
    "ItemNotFoundError",
    "ItemStatus",
    "JsonFilePersistence",
    "MigrationOutcome",
    "PersistedSnapshot",
    "PersistenceError",
    "StoreExport",
    "TreeNode",
    "TreeProjection",
    "WorkItem",
    "WorkItemCommands",
    "WorkItemStore",
    "WorkItemType",
    "WorkItemsConfig",
    "WorkItemsError",
    "WorkItemsSession",
    "__version__",
    "configure_logging",
    "default_fields",
    "display_label",
    "is_complete",
    "is_valid_parent",
    "load_config",
    "load_snapshot",
    "persist_snapshot",
    "write_config",
]
