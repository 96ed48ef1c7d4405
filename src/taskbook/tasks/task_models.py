# src/taskbook/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import assert_never

from ..core.results import InvalidFormatError

DISPLAY_DATE_FORMAT = "%b %d %Y"
DONE_MARK = "X"


class TaskKind(StrEnum):
    """
    One-letter tag per task variant.

    The same letter is shown in listings ("[T]") and written as the first
    field of a stored record, so it must stay stable.
    """

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


def _require_description(description: str) -> None:
    if not description or not description.strip():
        raise InvalidFormatError("The description of a task cannot be empty.")


@dataclass(slots=True)
class Todo:
    description: str
    done: bool = False

    def __post_init__(self) -> None:
        _require_description(self.description)


@dataclass(slots=True)
class Deadline:
    description: str
    by: date
    done: bool = False

    def __post_init__(self) -> None:
        _require_description(self.description)


@dataclass(slots=True)
class Event:
    description: str
    at: str
    done: bool = False

    def __post_init__(self) -> None:
        _require_description(self.description)


Task = Todo | Deadline | Event


def task_kind(task: Task) -> TaskKind:
    match task:
        case Todo():
            return TaskKind.TODO
        case Deadline():
            return TaskKind.DEADLINE
        case Event():
            return TaskKind.EVENT
        case _:
            assert_never(task)


def format_task(task: Task) -> str:
    """Render a task the way listings and confirmations show it, e.g. `[D][X] essay (by: Oct 21 2026)`."""
    mark = DONE_MARK if task.done else " "
    head = f"[{task_kind(task)}][{mark}] {task.description}"
    match task:
        case Todo():
            return head
        case Deadline(by=by):
            return f"{head} (by: {by.strftime(DISPLAY_DATE_FORMAT)})"
        case Event(at=at):
            return f"{head} (at: {at})"
        case _:
            assert_never(task)
