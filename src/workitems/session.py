"""Session composition root for workitems."""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

from workitems.core.commands import WorkItemCommands
from workitems.core.config import load_config
from workitems.core.contracts.config import WorkItemsConfig
from workitems.core.persistence import JsonFilePersistence
from workitems.core.projection import TreeProjection
from workitems.core.store import MigrationOutcome, WorkItemStore

logger = logging.getLogger(__name__)


class WorkItemsSession:
    """Owns one store together with its persistence, projection and commands.

    The store is restored from ``config.data_path`` on open and saved after
    every mutation until :meth:`close`::

        with WorkItemsSession.from_config_path("workitems.json") as session:
            epic_id = session.commands.add_epic("Checkout")
    """

    def __init__(self, config: WorkItemsConfig, *, store: WorkItemStore | None = None) -> None:
        self._config = config
        self.store = store or WorkItemStore()
        self.persistence = JsonFilePersistence(config.data_path)
        self.commands = WorkItemCommands(self.store)
        self.projection = TreeProjection(self.store)
        self.restore_outcome: MigrationOutcome | None = None

    @classmethod
    def from_config_path(cls, path: str | Path) -> WorkItemsSession:
        return cls(load_config(path))

    @property
    def config(self) -> WorkItemsConfig:
        return self._config

    def open(self) -> MigrationOutcome:
        self.restore_outcome = self.persistence.restore_into(self.store)
        self.persistence.attach(self.store)
        if self.restore_outcome is not MigrationOutcome.UNCHANGED:
            self.persistence.save(self.store.snapshot())
        logger.debug("session opened on %s (%s)", self.persistence.path, self.restore_outcome)
        return self.restore_outcome

    def close(self) -> None:
        self.persistence.detach()

    def __enter__(self) -> WorkItemsSession:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
