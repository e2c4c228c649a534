"""Schema version tags for persisted store snapshots."""

from __future__ import annotations

from enum import StrEnum

CURRENT_DATA_STRUCTURE_VERSION = "1.0"


class MigrationOutcome(StrEnum):
    INITIALIZED = "initialized"
    CLEARED = "cleared"
    MIGRATED = "migrated"
    UNCHANGED = "unchanged"


def parse_version(value: str | None) -> tuple[int, int] | None:
    """Parse a ``major.minor`` tag. A bare major is read as ``major.0``.

    Returns ``None`` for anything that is not one or two dot-separated integers.
    """
    if not value:
        return None
    parts = value.strip().split(".")
    if len(parts) > 2:
        return None
    try:
        major = int(parts[0])
        minor = int(parts[1]) if len(parts) == 2 else 0
    except ValueError:
        return None
    if major < 0 or minor < 0:
        return None
    return major, minor


def classify_version(persisted: str | None, current: str) -> MigrationOutcome:
    """Decide what a snapshot tagged *persisted* needs to match *current*.

    An unparseable persisted tag is treated as an incompatible major version.
    """
    if not persisted:
        return MigrationOutcome.INITIALIZED
    persisted_parts = parse_version(persisted)
    current_parts = parse_version(current)
    if persisted_parts is None or current_parts is None:
        return MigrationOutcome.CLEARED
    if persisted_parts[0] != current_parts[0]:
        return MigrationOutcome.CLEARED
    if persisted_parts[1] != current_parts[1]:
        return MigrationOutcome.MIGRATED
    return MigrationOutcome.UNCHANGED
