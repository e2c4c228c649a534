from __future__ import annotations

import itertools
import logging

import pytest

from workitems import PersistedSnapshot, WorkItemStore


def test_create_root_epic(store: WorkItemStore) -> None:
    epic_id = store.create_item("epic")

    item = store.get_item(epic_id)
    assert epic_id == "id-1"
    assert store.root_ids == [epic_id]
    assert store.parent_by_id[epic_id] is None
    assert item is not None
    assert item.fields == {"Title": "", "Description": ""}
    assert item.child_ids == []
    assert item.status.model_dump() == {"is_loading": False, "is_complete": False, "is_error": False}


def test_create_child_links_parent(store: WorkItemStore) -> None:
    epic_id = store.create_item("epic")
    feature_id = store.create_item("feature", parent_id=epic_id)

    assert store.items_by_id[epic_id].child_ids == [feature_id]
    assert store.parent_by_id[feature_id] == epic_id
    assert store.root_ids == [epic_id]


def test_create_appends_children_in_insertion_order(store: WorkItemStore) -> None:
    epic_id = store.create_item("epic")
    children = [store.create_item("feature", parent_id=epic_id) for _ in range(3)]

    assert store.items_by_id[epic_id].child_ids == children


def test_create_merges_overrides_onto_defaults(store: WorkItemStore) -> None:
    story_id = store.create_item("story", field_overrides={"Title": "Login", "Estimate": "3"})

    assert store.items_by_id[story_id].fields == {
        "Title": "Login",
        "AcceptanceCriteria": "",
        "Description": "",
        "Estimate": "3",
    }


def test_create_unknown_type_records_title_only(store: WorkItemStore) -> None:
    item_id = store.create_item("bug")

    assert store.items_by_id[item_id].fields == {"Title": ""}
    assert store.root_ids == []
    assert store.parent_by_id[item_id] is None


def test_create_records_illegal_pairing_without_rejecting(store: WorkItemStore) -> None:
    epic_id = store.create_item("epic")
    story_id = store.create_item("story", parent_id=epic_id)

    assert store.items_by_id[epic_id].child_ids == [story_id]
    assert store.parent_by_id[story_id] == epic_id


def test_create_under_missing_parent_records_link_only(
    store: WorkItemStore, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="workitems"):
        item_id = store.create_item("feature", parent_id="ghost")

    assert store.parent_by_id[item_id] == "ghost"
    assert store.root_ids == []
    assert "unknown parent ghost" in caplog.text


def test_create_does_not_mutate_overrides(store: WorkItemStore) -> None:
    overrides = {"Title": "Checkout"}
    epic_id = store.create_item("epic", field_overrides=overrides)
    store.update_item_fields(epic_id, {"Title": "Changed"})

    assert overrides == {"Title": "Checkout"}


def test_get_item_missing_returns_none(store: WorkItemStore) -> None:
    assert store.get_item("nope") is None


def test_get_item_returns_detached_copy(store: WorkItemStore) -> None:
    epic_id = store.create_item("epic")
    item = store.get_item(epic_id)
    assert item is not None

    item.fields["Title"] = "mutated"
    item.child_ids.append("x")

    stored = store.get_item(epic_id)
    assert stored is not None
    assert stored.fields["Title"] == ""
    assert stored.child_ids == []


def test_update_fields_merges_without_recomputing(store: WorkItemStore) -> None:
    epic_id = store.create_item("epic")
    feature_id = store.create_item("feature", parent_id=epic_id)

    store.update_item_fields(feature_id, {"Title": "Checkout", "Description": "Add checkout flow"})

    item = store.get_item(feature_id)
    assert item is not None
    assert item.fields == {"Title": "Checkout", "Description": "Add checkout flow"}
    assert item.status.is_complete is False


def test_update_fields_then_status(store: WorkItemStore) -> None:
    epic_id = store.create_item("epic")
    feature_id = store.create_item("feature", parent_id=epic_id)

    store.update_item_fields(feature_id, {"Title": "Checkout", "Description": "Add checkout flow"})
    store.update_item_status(feature_id, {"isComplete": True})

    item = store.get_item(feature_id)
    assert item is not None
    assert item.fields["Title"] == "Checkout"
    assert item.status.is_complete is True


def test_update_status_merges_partial_flags(store: WorkItemStore) -> None:
    epic_id = store.create_item("epic")

    store.update_item_status(epic_id, is_loading=True)
    store.update_item_status(epic_id, {"isError": True, "bogus": True})

    item = store.get_item(epic_id)
    assert item is not None
    assert item.status.is_loading is True
    assert item.status.is_error is True
    assert item.status.is_complete is False


def test_updates_on_missing_item_are_noops(store: WorkItemStore) -> None:
    events: list[PersistedSnapshot] = []
    store.subscribe(events.append)

    store.update_item_fields("ghost", {"Title": "x"})
    store.update_item_status("ghost", is_complete=True)

    assert len(store) == 0
    assert events == []


def test_recompute_status(store: WorkItemStore) -> None:
    epic_id = store.create_item("epic")
    store.update_item_fields(epic_id, {"Title": "Checkout", "Description": "Buy"})

    assert store.recompute_status(epic_id) is True
    assert store.items_by_id[epic_id].status.is_complete is True

    store.update_item_fields(epic_id, {"Description": " "})
    assert store.recompute_status(epic_id) is False
    assert store.recompute_status("ghost") is None


def test_delete_removes_subtree(populated_store: WorkItemStore) -> None:
    populated_store.delete_item("id-1")

    assert set(populated_store.items_by_id) == {"id-6"}
    assert set(populated_store.parent_by_id) == {"id-6"}
    assert populated_store.root_ids == ["id-6"]


def test_delete_scenario_epic_with_feature(store: WorkItemStore) -> None:
    epic_id = store.create_item("epic")
    feature_id = store.create_item("feature", parent_id=epic_id)

    store.delete_item(epic_id)

    assert epic_id not in store.items_by_id
    assert feature_id not in store.items_by_id
    assert store.root_ids == []


def test_delete_detaches_from_parent(populated_store: WorkItemStore) -> None:
    populated_store.delete_item("id-2")

    assert populated_store.items_by_id["id-1"].child_ids == ["id-5"]
    for gone in ("id-2", "id-3", "id-4"):
        assert gone not in populated_store.items_by_id
        assert gone not in populated_store.parent_by_id


def test_delete_is_idempotent(populated_store: WorkItemStore) -> None:
    populated_store.delete_item("id-3")
    before = populated_store.export_data()

    populated_store.delete_item("id-3")
    populated_store.delete_item("never-existed")

    assert populated_store.export_data() == before


def test_delete_leaves_store_keys_consistent(populated_store: WorkItemStore) -> None:
    populated_store.delete_item("id-2")

    items = populated_store.items_by_id
    assert set(items) == set(populated_store.parent_by_id)
    for item in items.values():
        assert all(child in items for child in item.child_ids)


def test_delete_handles_deep_trees_without_recursion(store: WorkItemStore) -> None:
    parent = store.create_item("epic")
    for _ in range(5000):
        parent = store.create_item("feature", parent_id=parent)

    store.delete_item("id-1")

    assert len(store) == 0


def test_walk_is_depth_first_in_display_order(populated_store: WorkItemStore) -> None:
    assert list(populated_store.walk()) == ["id-1", "id-2", "id-3", "id-4", "id-5", "id-6"]
    assert list(populated_store.walk("id-2")) == ["id-2", "id-3", "id-4"]
    assert list(populated_store.walk("ghost")) == []


def test_reset_state_empties_store(populated_store: WorkItemStore) -> None:
    populated_store.reset_state()

    assert populated_store.items_by_id == {}
    assert populated_store.parent_by_id == {}
    assert populated_store.root_ids == []
    assert populated_store.data_structure_version == populated_store.current_version


def test_export_strips_status_and_is_detached(populated_store: WorkItemStore) -> None:
    populated_store.update_item_status("id-1", is_loading=True)
    export = populated_store.export_data()

    payload = export.model_dump(by_alias=True)
    assert "status" not in payload["itemsById"]["id-1"]
    assert payload["itemsById"]["id-1"]["childIds"] == ["id-2", "id-5"]
    assert payload["parentById"]["id-2"] == "id-1"
    assert payload["rootIds"] == ["id-1", "id-6"]

    export.items_by_id["id-1"].fields["Title"] = "mutated"
    export.items_by_id["id-1"].child_ids.clear()
    export.root_ids.append("bogus")
    export.parent_by_id["id-2"] = None

    item = populated_store.get_item("id-1")
    assert item is not None
    assert item.fields["Title"] == "Checkout"
    assert item.child_ids == ["id-2", "id-5"]
    assert populated_store.root_ids == ["id-1", "id-6"]
    assert populated_store.parent_by_id["id-2"] == "id-1"


def test_subscribers_receive_snapshot_after_each_mutation(store: WorkItemStore) -> None:
    events: list[PersistedSnapshot] = []
    unsubscribe = store.subscribe(events.append)

    epic_id = store.create_item("epic")
    store.update_item_fields(epic_id, {"Title": "Checkout"})
    store.update_item_status(epic_id, is_error=True)
    store.delete_item(epic_id)

    assert len(events) == 4
    assert events[0].root_ids == [epic_id]
    assert events[0].data_structure_version == store.current_version
    assert events[1].items_by_id[epic_id].fields["Title"] == "Checkout"
    assert events[-1].items_by_id == {}

    unsubscribe()
    unsubscribe()
    store.create_item("epic")
    assert len(events) == 4


def test_failing_subscriber_does_not_abort_mutation(
    store: WorkItemStore, caplog: pytest.LogCaptureFixture
) -> None:
    received: list[PersistedSnapshot] = []

    def broken(_: PersistedSnapshot) -> None:
        raise RuntimeError("disk on fire")

    store.subscribe(broken)
    store.subscribe(received.append)

    with caplog.at_level(logging.ERROR, logger="workitems"):
        epic_id = store.create_item("epic")

    assert epic_id in store
    assert len(received) == 1
    assert "store listener" in caplog.text


def test_id_factory_is_used_for_every_item() -> None:
    counter = itertools.count(1)
    store = WorkItemStore(id_factory=lambda: f"wi-{next(counter)}")

    assert store.create_item("epic") == "wi-1"
    assert store.create_item("epic") == "wi-2"


def test_default_ids_are_unique() -> None:
    store = WorkItemStore()
    ids = {store.create_item("epic") for _ in range(100)}

    assert len(ids) == 100


def _cyclic_store() -> WorkItemStore:
    store = WorkItemStore()
    store.restore(
        PersistedSnapshot.model_validate(
            {
                "itemsById": {
                    "E1": {"id": "E1", "type": "epic", "fields": {"Title": "Loop"}, "childIds": ["F1"]},
                    "F1": {"id": "F1", "type": "feature", "fields": {"Title": "Back"}, "childIds": ["E1"]},
                },
                "parentById": {"E1": None, "F1": "E1"},
                "rootIds": ["E1"],
                "dataStructureVersion": store.current_version,
            }
        )
    )
    return store


def test_walk_terminates_on_child_cycle() -> None:
    store = _cyclic_store()

    assert list(store.walk()) == ["E1", "F1"]
    assert list(store.walk("F1")) == ["F1", "E1"]


def test_delete_terminates_on_child_cycle() -> None:
    store = _cyclic_store()

    store.delete_item("E1")

    assert store.items_by_id == {}
    assert store.parent_by_id == {}
    assert store.root_ids == []


def test_update_status_parses_flag_values(store: WorkItemStore) -> None:
    epic_id = store.create_item("epic")
    store.update_item_status(epic_id, is_loading=True, is_error=True)

    store.update_item_status(epic_id, {"isLoading": "false", "isError": 0})

    item = store.get_item(epic_id)
    assert item is not None
    assert item.status.is_loading is False
    assert item.status.is_error is False


def test_update_status_rejects_unparseable_values(store: WorkItemStore, caplog: pytest.LogCaptureFixture) -> None:
    epic_id = store.create_item("epic")
    events: list[PersistedSnapshot] = []
    store.subscribe(events.append)

    with caplog.at_level(logging.WARNING, logger="workitems"):
        store.update_item_status(epic_id, {"isComplete": "maybe", "isLoading": True})

    item = store.get_item(epic_id)
    assert item is not None
    assert item.status.is_complete is False
    assert item.status.is_loading is False
    assert events == []
    assert "rejected status values" in caplog.text
