"""Shared test fixtures for workitems tests."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from pathlib import Path

import pytest

from workitems import PersistedSnapshot, WorkItemCommands, WorkItemsConfig, WorkItemStore


def sequential_ids(prefix: str = "id") -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def store() -> WorkItemStore:
    """An empty store handing out ``id-1``, ``id-2``, ... ."""
    return WorkItemStore(id_factory=sequential_ids())


@pytest.fixture
def commands(store: WorkItemStore) -> WorkItemCommands:
    return WorkItemCommands(store)


@pytest.fixture
def populated_store(store: WorkItemStore) -> WorkItemStore:
    """Epic id-1 > feature id-2 > stories id-3, id-4; solution intent id-5 under id-1; epic id-6."""
    epic = store.create_item("epic", field_overrides={"Title": "Checkout"})
    feature = store.create_item("feature", parent_id=epic, field_overrides={"Title": "Payments"})
    store.create_item("story", parent_id=feature, field_overrides={"Title": "Pay by card"})
    store.create_item("story", parent_id=feature, field_overrides={"Title": "Pay by wallet"})
    store.create_item("solution-intent", parent_id=epic)
    store.create_item("epic", field_overrides={"Title": "Search"})
    return store


@pytest.fixture
def snapshot_payload() -> dict:
    """A persisted snapshot in on-disk (camelCase) form."""
    return {
        "itemsById": {
            "E1": {
                "id": "E1",
                "type": "epic",
                "fields": {"Title": "Checkout", "Description": "Buy things"},
                "childIds": ["F1"],
            },
            "F1": {
                "id": "F1",
                "type": "feature",
                "fields": {"Title": "Payments", "Description": ""},
                "childIds": [],
            },
        },
        "parentById": {"E1": None, "F1": "E1"},
        "rootIds": ["E1"],
        "dataStructureVersion": "1.0",
    }


@pytest.fixture
def snapshot(snapshot_payload: dict) -> PersistedSnapshot:
    return PersistedSnapshot.model_validate(snapshot_payload)


@pytest.fixture
def sample_config(tmp_path: Path) -> WorkItemsConfig:
    return WorkItemsConfig(data_path=tmp_path / "data" / "state.json")
