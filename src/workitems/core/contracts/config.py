"""Application configuration contract."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_DATA_PATH = Path(".workitems") / "state.json"


class WorkItemsConfig(BaseModel):
    """Settings for a ``workitems`` session.

    Attributes:
        data_path: Where the store snapshot is persisted.
        log_path: Optional rotating log file.
        log_level: Level name for the root ``workitems`` logger.
        generate_count: Number of placeholder children created by ``generate``.
    """

    data_path: Path = DEFAULT_DATA_PATH
    log_path: Path | None = None
    log_level: str = "INFO"
    generate_count: int = Field(default=5, ge=1, le=100)

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unsupported log level: {value}")
        return level
