"""Normalized work-item store."""

from workitems.core.store.notifier import ChangeNotifier
from workitems.core.store.store import WorkItemStore
from workitems.core.store.versioning import (
    CURRENT_DATA_STRUCTURE_VERSION,
    MigrationOutcome,
    classify_version,
    parse_version,
)

__all__ = [
    "CURRENT_DATA_STRUCTURE_VERSION",
    "ChangeNotifier",
    "MigrationOutcome",
    "WorkItemStore",
    "classify_version",
    "parse_version",
]
