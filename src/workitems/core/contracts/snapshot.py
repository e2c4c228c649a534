"""Persisted snapshot and export contracts."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExportedItem(BaseModel):
    """Item as written to durable storage: no status or bookkeeping."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: str
    fields: dict[str, Any] = Field(default_factory=dict)
    child_ids: list[str] = Field(default_factory=list, alias="childIds")


class StoreExport(BaseModel):
    """Detached copy of the store produced by ``export_data``."""

    model_config = ConfigDict(populate_by_name=True)

    items_by_id: dict[str, ExportedItem] = Field(default_factory=dict, alias="itemsById")
    parent_by_id: dict[str, str | None] = Field(default_factory=dict, alias="parentById")
    root_ids: list[str] = Field(default_factory=list, alias="rootIds")


class PersistedSnapshot(StoreExport):
    """The four store fields delivered to persistence after every mutation."""

    data_structure_version: str | None = Field(default=None, alias="dataStructureVersion")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
