# src/taskbook/core/state.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from ..core.results import StorageError
from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules.
    settings: object

    tasks: TaskList
    store: TaskStore

    # Source of "today" for deadline checks; tests pin it.
    today: Callable[[], date] = field(default=date.today)

    def persist(self) -> None:
        """Write the whole task list through to disk."""
        self.store.save(self.tasks)

    def apply(self, change: Callable[[], str]) -> str:
        """
        Run a list mutation and write it through.

        If the write fails the list is put back as it was, so memory and
        file never disagree.
        """
        snapshot = self.tasks.snapshot()
        reply = change()
        try:
            self.persist()
        except StorageError:
            self.tasks.restore(snapshot)
            raise
        return reply
