# src/taskbook/core/results.py

"""
Error kinds and command results.

Lower layers (models, task list, storage) raise TaskbookError subclasses.
The command registry is the only place that turns them into CommandResult
values, so a bad line never ends the session.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    INVALID_FORMAT = "invalid_format"
    INVALID_TASK_INDEX = "invalid_task_index"
    DOMAIN = "domain"
    IO = "io"
    INTERNAL = "internal"


class TaskbookError(Exception):
    """Base error; `kind` decides how the dispatcher reports it."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidFormatError(TaskbookError):
    kind = ErrorKind.INVALID_FORMAT


class InvalidTaskIndexError(TaskbookError):
    kind = ErrorKind.INVALID_TASK_INDEX


class DomainError(TaskbookError):
    kind = ErrorKind.DOMAIN


class StorageError(TaskbookError):
    kind = ErrorKind.IO


@dataclass(frozen=True, slots=True)
class CommandResult:
    text: str
    error: ErrorKind | None = None
    exit: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, kind: ErrorKind, text: str) -> CommandResult:
        return cls(text=text, error=kind)

    @classmethod
    def from_error(cls, err: TaskbookError) -> CommandResult:
        return cls(text=err.message, error=err.kind)
