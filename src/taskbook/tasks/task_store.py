# src/taskbook/tasks/task_store.py

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import assert_never

from ..core.results import StorageError, TaskbookError
from .task_models import Deadline, Event, Task, TaskKind, Todo, task_kind

logger = logging.getLogger(__name__)

FIELD_SEP = " | "


class RecordFormatError(ValueError):
    """A stored line that cannot be turned back into a task."""


def encode_task(task: Task) -> str:
    """
    One record per task:

        T | 0 | read book
        D | 1 | return book | 2026-10-21
        E | 0 | project meeting | Mon 2-4pm
    """
    fields = [str(task_kind(task)), "1" if task.done else "0", task.description]
    match task:
        case Todo():
            pass
        case Deadline(by=by):
            fields.append(by.isoformat())
        case Event(at=at):
            fields.append(at)
        case _:
            assert_never(task)
    return FIELD_SEP.join(fields)


def decode_task(line: str) -> Task:
    head = line.split(FIELD_SEP, 2)
    if len(head) < 3:
        raise RecordFormatError(f"expected at least 3 fields, got {len(head)}")

    raw_kind, raw_done = head[0].strip(), head[1].strip()
    try:
        kind = TaskKind(raw_kind)
    except ValueError:
        raise RecordFormatError(f"unknown task kind {raw_kind!r}") from None
    if raw_done not in ("0", "1"):
        raise RecordFormatError(f"bad completion flag {raw_done!r}")
    done = raw_done == "1"

    if kind is TaskKind.TODO:
        return Todo(head[2], done=done)

    # description never contains FIELD_SEP, so the variant field is everything after it
    rest = head[2].split(FIELD_SEP, 1)
    if len(rest) != 2:
        raise RecordFormatError(f"{kind.name.lower()} record is missing its last field")
    description, extra = rest

    if kind is TaskKind.DEADLINE:
        try:
            by = date.fromisoformat(extra.strip())
        except ValueError:
            raise RecordFormatError(f"bad deadline date {extra!r}") from None
        return Deadline(description, by, done=done)

    return Event(description, extra, done=done)


class TaskStore:
    """
    Flat-file task store.

    The whole list is rewritten on every save (write-through, no batching).
    Writes go to a sibling .tmp file first and are moved into place, so a
    failed write leaves the previous file intact.
    """

    def __init__(self, path: str | Path = "tasks.txt") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task]:
        """
        Read every task from disk.

        Missing file -> empty list. Malformed lines are skipped and logged;
        an unreadable file raises StorageError.
        """
        if not self._path.exists():
            logger.info("Task file %s does not exist. Starting with an empty list.", self._path)
            return []

        tasks: list[Task] = []
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                for lineno, raw in enumerate(f, start=1):
                    line = raw.rstrip("\r\n")
                    if not line.strip():
                        continue
                    try:
                        tasks.append(decode_task(line))
                    except (RecordFormatError, TaskbookError) as e:
                        logger.warning("Skipping bad record %s:%d: %s", self._path, lineno, e)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("File access error loading tasks from %s: %s", self._path, e)
            raise StorageError(f"Could not read {self._path}: {e}") from e

        logger.info("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        lines = [encode_task(t) for t in tasks]
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                for line in lines:
                    f.write(line + "\n")
            os.replace(tmp, self._path)
        except OSError as e:
            logger.error("File access error saving tasks to %s: %s", self._path, e)
            raise StorageError(f"Could not write {self._path}: {e.strerror or e}") from e
        logger.debug("Saved %d tasks to %s", len(lines), self._path)
