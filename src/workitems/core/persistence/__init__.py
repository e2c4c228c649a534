"""Persistence helpers for the work-item store."""

from workitems.core.persistence.adapter import JsonFilePersistence
from workitems.core.persistence.snapshot_file import load_snapshot, persist_snapshot

__all__ = [
    "JsonFilePersistence",
    "load_snapshot",
    "persist_snapshot",
]
