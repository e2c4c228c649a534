"""File-backed persistence adapter for :class:`WorkItemStore`."""

from __future__ import annotations

import logging
from pathlib import Path

from workitems.core.contracts.exceptions import PersistenceError
from workitems.core.contracts.snapshot import PersistedSnapshot
from workitems.core.persistence.snapshot_file import load_snapshot, persist_snapshot
from workitems.core.store import MigrationOutcome, WorkItemStore
from workitems.core.store.notifier import Unsubscribe

logger = logging.getLogger(__name__)


class JsonFilePersistence:
    """Restores a store from a JSON file and saves it after every mutation.

    Usage::

        persistence = JsonFilePersistence(path)
        persistence.restore_into(store)
        persistence.attach(store)
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._detach: Unsubscribe | None = None
        self.last_error: PersistenceError | None = None

    @property
    def path(self) -> Path:
        return self._path

    def restore_into(self, store: WorkItemStore) -> MigrationOutcome:
        snapshot = load_snapshot(path=self._path)
        if snapshot is None:
            logger.debug("no work items file at %s", self._path)
            return store.restore(PersistedSnapshot())
        return store.restore(snapshot)

    def save(self, snapshot: PersistedSnapshot) -> None:
        """Write *snapshot*; failures are logged and kept on ``last_error``."""
        try:
            persist_snapshot(snapshot=snapshot, path=self._path)
        except PersistenceError as exc:
            self.last_error = exc
            logger.error("%s", exc)
            return
        self.last_error = None
        logger.debug("saved %d work item(s) to %s", len(snapshot.items_by_id), self._path)

    def attach(self, store: WorkItemStore) -> Unsubscribe:
        self.detach()
        self._detach = store.subscribe(self.save)
        return self.detach

    def detach(self) -> None:
        if self._detach is not None:
            self._detach()
            self._detach = None
