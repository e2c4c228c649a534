"""Work item contracts: types, default field sets and the completeness rule."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WorkItemType(StrEnum):
    EPIC = "epic"
    FEATURE = "feature"
    SOLUTION_INTENT = "solution-intent"
    STORY = "story"


_DEFAULT_FIELD_NAMES: dict[str, tuple[str, ...]] = {
    WorkItemType.EPIC: ("Title", "Description"),
    WorkItemType.FEATURE: ("Title", "Description"),
    WorkItemType.SOLUTION_INTENT: ("Title", "InitiativeBackground", "SolutionBackOrHighLevelRequirement"),
    WorkItemType.STORY: ("Title", "AcceptanceCriteria", "Description"),
}

ALLOWED_PARENT_TYPES: dict[str, frozenset[str]] = {
    WorkItemType.EPIC: frozenset(),
    WorkItemType.FEATURE: frozenset({WorkItemType.EPIC}),
    WorkItemType.SOLUTION_INTENT: frozenset({WorkItemType.EPIC}),
    WorkItemType.STORY: frozenset({WorkItemType.FEATURE}),
}


class ItemStatus(BaseModel):
    """Display status of an item. ``is_complete`` is derived, never authoritative."""

    model_config = ConfigDict(populate_by_name=True)

    is_loading: bool = Field(default=False, alias="isLoading")
    is_complete: bool = Field(default=False, alias="isComplete")
    is_error: bool = Field(default=False, alias="isError")


class WorkItem(BaseModel):
    """A single node of the work-item tree.

    ``type`` is kept as a plain string: unknown kinds are recorded as given.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: str
    fields: dict[str, Any] = Field(default_factory=dict)
    status: ItemStatus = Field(default_factory=ItemStatus)
    child_ids: list[str] = Field(default_factory=list, alias="childIds")


def default_fields(item_type: str) -> dict[str, str]:
    """Return a fresh ``{field: ""}`` mapping for *item_type*.

    Unknown types get ``{"Title": ""}``.
    """
    names = _DEFAULT_FIELD_NAMES.get(item_type, ("Title",))
    return {name: "" for name in names}


def is_complete(item: WorkItem | Mapping[str, Any]) -> bool:
    """True iff every string field is non-blank after trimming.

    Non-string values are treated as satisfied.
    """
    fields = item.fields if isinstance(item, WorkItem) else item
    return all(value.strip() != "" for value in fields.values() if isinstance(value, str))


def is_valid_parent(child_type: str, parent_type: str | None) -> bool:
    allowed = ALLOWED_PARENT_TYPES.get(child_type)
    if allowed is None:
        return False
    if parent_type is None:
        return not allowed
    return parent_type in allowed


def display_label(item: WorkItem) -> str:
    title = item.fields.get("Title")
    if isinstance(title, str) and title.strip():
        return title
    return item.type
