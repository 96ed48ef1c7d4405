# src/taskbook/tasks/task_list.py

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Iterator
from datetime import date

from ..core.results import InvalidTaskIndexError
from .task_models import Deadline, Event, Task, Todo, format_task

logger = logging.getLogger(__name__)


def _count_line(n: int) -> str:
    noun = "task" if n == 1 else "tasks"
    return f"Now you have {n} {noun} in the list."


class TaskList:
    """
    Ordered in-memory task list.

    Callers speak 1-based indices (what the user sees in `list`); the
    underlying Python list is 0-based. Every public operation returns the
    user-facing confirmation text.
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, pos: int) -> Task:
        return self._tasks[pos]

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    def snapshot(self) -> list[Task]:
        # tasks are mutated in place by mark_done, so copy each one
        return [dataclasses.replace(t) for t in self._tasks]

    def restore(self, snapshot: Iterable[Task]) -> None:
        self._tasks = list(snapshot)

    # ---- index handling ----

    def check_index(self, index: int) -> int:
        """Validate a 1-based index and return the matching 0-based position."""
        if index < 1:
            raise InvalidTaskIndexError("Task list index starts from 1!")
        if index > len(self._tasks):
            raise InvalidTaskIndexError(f"There are only {len(self._tasks)} tasks!")
        return index - 1

    # ---- mutations ----

    def _append(self, task: Task) -> str:
        self._tasks.append(task)
        logger.debug("Task added pos=%d kind=%s", len(self._tasks), type(task).__name__)
        return f"Got it. I've added this task:\n  {format_task(task)}\n{_count_line(len(self._tasks))}"

    def add_todo(self, description: str) -> str:
        return self._append(Todo(description))

    def add_deadline(self, description: str, by: date) -> str:
        return self._append(Deadline(description, by))

    def add_event(self, description: str, at: str) -> str:
        return self._append(Event(description, at))

    def mark_done(self, index: int) -> str:
        task = self._tasks[self.check_index(index)]
        if task.done:
            logger.debug("Task %d already done", index)
        task.done = True
        return f"Nice! I've marked this task as done:\n  {format_task(task)}"

    def delete_task(self, index: int) -> str:
        task = self._tasks.pop(self.check_index(index))
        logger.debug("Task removed pos=%d", index)
        return f"Noted. I've removed this task:\n  {format_task(task)}\n{_count_line(len(self._tasks))}"

    # ---- queries ----

    def list_tasks(self) -> str:
        if not self._tasks:
            return "Your task list is empty!"
        lines = ["Here are the tasks in your list:"]
        for i, task in enumerate(self._tasks, start=1):
            lines.append(f"{i}. {format_task(task)}")
        return "\n".join(lines)

    def find(self, keyword: str) -> str:
        """Case-sensitive substring search over descriptions only."""
        matches = [t for t in self._tasks if keyword in t.description]
        if not matches:
            return "There are no matching results!"
        lines = ["Here are the matching tasks in your list:"]
        for i, task in enumerate(matches, start=1):
            lines.append(f"{i}. {format_task(task)}")
        return "\n".join(lines)
