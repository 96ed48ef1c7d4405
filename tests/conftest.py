# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskbook.cli.commands import registry
from taskbook.core.state import AppState
from taskbook.tasks.task_list import TaskList
from taskbook.tasks.task_store import TaskStore

from .fakes import FixedClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than reading real env
    config, to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Duke",
        log_level="WARNING",
        log_to_file=False,
        data_dir=tmp_path,
        tasks_file_path=tmp_path / "data" / "tasks.txt",
        log_dir=tmp_path,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_file_path)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """
    AppState with an empty list, a real file-backed store and a pinned clock.
    """
    return AppState(settings=settings, tasks=TaskList(), store=store, today=FixedClock())


@pytest.fixture()
def run(state: AppState):
    """Feed one line through the command registry."""

    def _run(line: str):
        return registry.handle(state, line)

    return _run
