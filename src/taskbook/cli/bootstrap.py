# src/taskbook/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- reads the task file and wires TaskList + TaskStore into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.results import StorageError
from ..core.state import AppState
from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_file_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> tuple[AppState, str | None]:
    """
    Create AppState from the provided settings.

    Returns the state plus a warning for the user when the task file could
    not be read (the session then starts with an empty list).
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(settings.tasks_file_path)
    warning: str | None = None
    try:
        tasks = store.load()
    except StorageError as e:
        logger.error("Starting with an empty task list: %s", e)
        warning = f"Something went wrong: {e.message}. Starting with an empty task list."
        tasks = []

    state = AppState(settings=settings, tasks=TaskList(tasks), store=store)
    return state, warning
