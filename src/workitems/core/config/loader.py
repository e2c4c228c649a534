"""Config loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from workitems.core.contracts.config import WorkItemsConfig
from workitems.core.contracts.exceptions import ConfigError

DEFAULT_CONFIG_NAME = "workitems.json"


def _resolve_path(value: Path | None, *, base_dir: Path) -> Path | None:
    if value is None:
        return None
    if value.is_absolute():
        return value
    return (base_dir / value).resolve()


def load_config(path: str | Path) -> WorkItemsConfig:
    """Load config from JSON, resolving relative paths against the config directory.

    A missing file yields the defaults, rooted at the directory it would live in.
    """
    config_path = Path(path).expanduser().resolve()
    config_dir = config_path.parent

    if not config_path.exists():
        parsed = WorkItemsConfig()
    else:
        try:
            raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
            parsed = WorkItemsConfig.model_validate(raw_payload)
        except OSError as exc:
            raise ConfigError(f"failed reading config file: {config_path}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
        except ValidationError as exc:
            raise ConfigError(f"invalid config: {exc}") from exc

    return parsed.model_copy(
        update={
            "data_path": _resolve_path(parsed.data_path, base_dir=config_dir),
            "log_path": _resolve_path(parsed.log_path, base_dir=config_dir),
        }
    )


def write_config(config: WorkItemsConfig, path: str | Path) -> Path:
    config_path = Path(path).expanduser()
    payload = config.model_dump(mode="json", exclude_none=True)
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed writing config file: {config_path}") from exc
    return config_path
