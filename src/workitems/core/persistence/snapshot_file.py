"""JSON snapshot persistence helpers."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from workitems.core.contracts.exceptions import PersistenceError
from workitems.core.contracts.snapshot import PersistedSnapshot


def persist_snapshot(*, snapshot: PersistedSnapshot, path: Path) -> None:
    tmp_path = path.with_name(f"{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(json.dumps(snapshot.to_payload(), indent=2), encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError as exc:
        raise PersistenceError(f"failed to persist work items: {path}") from exc


def load_snapshot(*, path: Path) -> PersistedSnapshot | None:
    if not path.exists():
        return None
    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
        return PersistedSnapshot.model_validate(payload)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise PersistenceError(f"invalid work items file: {path}") from exc
