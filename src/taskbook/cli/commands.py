# src/taskbook/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime

from ..core.results import (
    CommandResult,
    DomainError,
    ErrorKind,
    InvalidFormatError,
    InvalidTaskIndexError,
    StorageError,
    TaskbookError,
)
from ..core.state import AppState
from ..tasks.task_store import FIELD_SEP

CommandHandler = Callable[[AppState, str], "str | CommandResult"]

logger = logging.getLogger(__name__)

DATE_INPUT_FORMAT = "%Y-%m-%d"
BY_ANCHOR = " /by "
AT_ANCHOR = " /at "
_INDEX_RE = re.compile(r"[+-]?\d+", re.ASCII)
# strptime alone would also take "2026-1-5"
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


@dataclass(frozen=True, slots=True)
class _Command:
    handler: CommandHandler
    usage: str
    help_text: str


class CommandRegistry:
    """Keyword-dispatch registry: the first word of a line picks the handler."""

    def __init__(self) -> None:
        self._commands: dict[str, _Command] = {}
        self._order: list[str] = []

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: str | None = None,
        aliases: list[str] | None = None,
    ) -> None:
        key = name.lower()
        cmd = _Command(handler=handler, usage=usage or key, help_text=help_text)
        self._commands[key] = cmd
        self._order.append(key)
        for alias in aliases or []:
            self._commands[alias.lower()] = cmd

    def handle(self, state: AppState, line: str) -> CommandResult:
        """
        Run one input line and return what to show the user.

        Never raises: library errors become error results of the matching
        kind, anything unexpected becomes an INTERNAL result.
        """
        parts = line.strip().split(maxsplit=1)
        if not parts:
            return CommandResult(self.build_help())

        name = parts[0].lower()
        arg = parts[1] if len(parts) > 1 else ""

        cmd = self._commands.get(name)
        if cmd is None:
            logger.debug("Unknown command %r", name)
            return CommandResult.failure(
                ErrorKind.DOMAIN,
                "OOPS!!! I'm sorry, but I don't know what that means :-(\n" + self.build_help(),
            )

        try:
            out = cmd.handler(state, arg)
        except StorageError as e:
            return CommandResult.failure(ErrorKind.IO, f"Something went wrong: {e.message}")
        except TaskbookError as e:
            logger.debug("Command %s rejected (%s): %s", name, e.kind, e.message)
            return CommandResult.from_error(e)
        except Exception:
            logger.exception("Command handler %s crashed.", name)
            return CommandResult.failure(
                ErrorKind.INTERNAL, "Internal error while handling a command."
            )

        if isinstance(out, CommandResult):
            return out
        return CommandResult(out)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        width = max((len(self._commands[n].usage) for n in self._order), default=0)
        for name in self._order:
            cmd = self._commands[name]
            lines.append(f"  {cmd.usage:<{width}}  {cmd.help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _split_on_anchor(arg: str, anchor: str) -> tuple[str, str] | None:
    # Pad so that "x /by" and "/by 2026-01-01" still contain the anchor.
    head, sep, tail = f" {arg} ".partition(anchor)
    if not sep:
        return None
    return head.strip(), tail.strip()


def _check_description(description: str) -> None:
    # any "|" could merge with the field separator on either side
    if FIELD_SEP.strip() in description:
        raise InvalidFormatError("A description cannot contain '|'.")


def parse_index(arg: str, missing_message: str) -> int:
    raw = arg.strip()
    if not raw:
        raise InvalidTaskIndexError(missing_message)
    if not _INDEX_RE.fullmatch(raw):
        raise InvalidTaskIndexError("A task index should only contain numbers!")
    return int(raw)


def parse_deadline_date(raw: str, today: date) -> date:
    if not _DATE_RE.fullmatch(raw):
        raise InvalidFormatError("Please enter the date in the format of yyyy-mm-dd!")
    try:
        by = datetime.strptime(raw, DATE_INPUT_FORMAT).date()
    except ValueError:
        raise InvalidFormatError("Please enter the date in the format of yyyy-mm-dd!") from None
    if by < today:
        raise DomainError("The deadline was in the past!")
    return by


# ---- command handlers ----


def cmd_todo(state: AppState, arg: str) -> str:
    description = arg.strip()
    if not description:
        raise InvalidFormatError("OOPS!!! The description of a todo cannot be empty.")
    _check_description(description)
    return state.apply(lambda: state.tasks.add_todo(description))


def cmd_deadline(state: AppState, arg: str) -> str:
    parts = _split_on_anchor(arg, BY_ANCHOR)
    if parts is None:
        raise InvalidFormatError(
            "OOPS!! To add a Deadline, type -> deadline <description> /by <yyyy-mm-dd>"
        )
    description, raw_date = parts
    if not description or not raw_date:
        raise InvalidFormatError("OOPS!!! The description of a deadline cannot be empty.")
    _check_description(description)
    by = parse_deadline_date(raw_date, state.today())
    return state.apply(lambda: state.tasks.add_deadline(description, by))


def cmd_event(state: AppState, arg: str) -> str:
    parts = _split_on_anchor(arg, AT_ANCHOR)
    if parts is None:
        raise InvalidFormatError("OOPS!! To add an Event, type -> event <description> /at <details>")
    description, detail = parts
    if not description or not detail:
        raise InvalidFormatError("OOPS!!! The description of an event cannot be empty.")
    _check_description(description)
    return state.apply(lambda: state.tasks.add_event(description, detail))


def cmd_done(state: AppState, arg: str) -> str:
    index = parse_index(arg, "Please specify the task index to be marked as done!")
    return state.apply(lambda: state.tasks.mark_done(index))


def cmd_delete(state: AppState, arg: str) -> str:
    index = parse_index(arg, "Please specify the task index to be deleted!")
    return state.apply(lambda: state.tasks.delete_task(index))


def cmd_list(state: AppState, arg: str) -> str:
    return state.tasks.list_tasks()


def cmd_find(state: AppState, arg: str) -> str:
    # keep inner spaces: "find read bo" searches for "read bo"
    keyword = arg.strip()
    if not keyword:
        raise InvalidFormatError("Please specify the keyword to be searched!")
    return state.tasks.find(keyword)


def cmd_help(state: AppState, arg: str) -> str:
    return registry.build_help()


def cmd_bye(state: AppState, arg: str) -> CommandResult:
    return CommandResult("Bye. Hope to see you again soon!", exit=True)


registry.register("todo", cmd_todo, "Add a todo.", usage="todo <description>")
registry.register(
    "deadline", cmd_deadline, "Add a deadline.", usage="deadline <description> /by <yyyy-mm-dd>"
)
registry.register("event", cmd_event, "Add an event.", usage="event <description> /at <details>")
registry.register("done", cmd_done, "Mark a task as done.", usage="done <task index>")
registry.register("delete", cmd_delete, "Delete a task.", usage="delete <task index>")
registry.register("list", cmd_list, "Show all tasks.")
registry.register("find", cmd_find, "Search task descriptions.", usage="find <keyword>")
registry.register("help", cmd_help, "Show this help.")
registry.register("bye", cmd_bye, "End the session.")
