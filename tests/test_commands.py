# tests/test_commands.py

from __future__ import annotations

from datetime import date

import pytest

from taskbook.cli.commands import CommandRegistry, registry
from taskbook.core.results import CommandResult, DomainError, ErrorKind
from taskbook.core.state import AppState
from taskbook.tasks.task_list import TaskList
from taskbook.tasks.task_models import Deadline, Event, Todo

from .fakes import FailingTaskStore, stored_lines


def test_command_registry_routes_and_wraps_strings(state) -> None:
    reg = CommandRegistry()
    seen: list[str] = []

    def echo(state, arg):
        seen.append(arg)
        return f"echo {arg}"

    reg.register("echo", echo, "Echo.", aliases=["e"])

    assert reg.handle(state, "echo  hello world ") == CommandResult("echo hello world")
    assert reg.handle(state, "E x").text == "echo x"
    assert seen == ["hello world", "x"]


def test_registry_turns_errors_into_results(state) -> None:
    reg = CommandRegistry()

    def rejects(state, arg):
        raise DomainError("nope")

    def crashes(state, arg):
        raise KeyError("boom")

    reg.register("rejects", rejects, "r")
    reg.register("crashes", crashes, "c")

    assert reg.handle(state, "rejects") == CommandResult("nope", error=ErrorKind.DOMAIN)
    crashed = reg.handle(state, "crashes")
    assert crashed.error is ErrorKind.INTERNAL
    assert not crashed.ok


def test_unknown_command_shows_help(run) -> None:
    result = run("blah blah")
    assert result.error is ErrorKind.DOMAIN
    assert result.text.startswith("OOPS!!! I'm sorry, but I don't know what that means :-(")
    assert "deadline <description> /by <yyyy-mm-dd>" in result.text


def test_blank_line_shows_help(run) -> None:
    result = run("   ")
    assert result.ok
    assert result.text == registry.build_help()


def test_add_each_variant_then_list(run, state, store) -> None:
    assert run("todo read book").ok
    assert run("deadline return book /by 2026-10-21").ok
    assert run("event project meeting /at Mon 2-4pm").ok

    assert run("list").text == (
        "Here are the tasks in your list:\n"
        "1. [T][ ] read book\n"
        "2. [D][ ] return book (by: Oct 21 2026)\n"
        "3. [E][ ] project meeting (at: Mon 2-4pm)"
    )
    assert stored_lines(store) == [
        "T | 0 | read book",
        "D | 0 | return book | 2026-10-21",
        "E | 0 | project meeting | Mon 2-4pm",
    ]


def test_keyword_is_case_insensitive(run, state) -> None:
    assert run("TODO shout").ok
    assert state.tasks.tasks == [Todo("shout")]


def test_done_marks_and_persists(run, state, store) -> None:
    run("todo a")
    run("todo b")

    result = run("done 2")

    assert result == CommandResult("Nice! I've marked this task as done:\n  [T][X] b")
    assert "2. [T][X] b" in run("list").text
    assert stored_lines(store) == ["T | 0 | a", "T | 1 | b"]


def test_done_twice_reconfirms(run) -> None:
    run("todo a")
    assert run("done 1").text == run("done 1").text


def test_delete_shifts_and_shrinks_file(run, state, store) -> None:
    for name in ("a", "b", "c"):
        run(f"todo {name}")

    result = run("delete 2")

    assert result.text == "Noted. I've removed this task:\n  [T][ ] b\nNow you have 2 tasks in the list."
    assert [t.description for t in state.tasks] == ["a", "c"]
    assert run("list").text.splitlines()[2] == "2. [T][ ] c"
    assert stored_lines(store) == ["T | 0 | a", "T | 0 | c"]


@pytest.mark.parametrize(
    "line, message",
    [
        ("done 0", "Task list index starts from 1!"),
        ("done -1", "Task list index starts from 1!"),
        ("done 3", "There are only 2 tasks!"),
        ("done two", "A task index should only contain numbers!"),
        ("done 1.5", "A task index should only contain numbers!"),
        ("done", "Please specify the task index to be marked as done!"),
        ("delete 0", "Task list index starts from 1!"),
        ("delete 9", "There are only 2 tasks!"),
        ("delete x1", "A task index should only contain numbers!"),
        ("delete", "Please specify the task index to be deleted!"),
    ],
)
def test_bad_index_does_not_mutate(run, state, store, line: str, message: str) -> None:
    run("todo a")
    run("todo b")
    before_tasks = state.tasks.tasks
    before_file = stored_lines(store)

    result = run(line)

    assert result == CommandResult(message, error=ErrorKind.INVALID_TASK_INDEX)
    assert state.tasks.tasks == before_tasks
    assert stored_lines(store) == before_file


def test_find(run) -> None:
    run("todo read book")
    run("todo buy milk")
    run("deadline return book /by 2026-12-01")

    assert run("find book").text == (
        "Here are the matching tasks in your list:\n"
        "1. [T][ ] read book\n"
        "2. [D][ ] return book (by: Dec 01 2026)"
    )
    assert run("find cheese").text == "There are no matching results!"


def test_find_requires_keyword(run) -> None:
    result = run("find")
    assert result == CommandResult(
        "Please specify the keyword to be searched!", error=ErrorKind.INVALID_FORMAT
    )


@pytest.mark.parametrize(
    "line, message",
    [
        ("todo", "OOPS!!! The description of a todo cannot be empty."),
        ("todo    ", "OOPS!!! The description of a todo cannot be empty."),
        (
            "deadline essay",
            "OOPS!! To add a Deadline, type -> deadline <description> /by <yyyy-mm-dd>",
        ),
        ("deadline essay /by", "OOPS!!! The description of a deadline cannot be empty."),
        ("deadline /by 2026-12-01", "OOPS!!! The description of a deadline cannot be empty."),
        ("event party", "OOPS!! To add an Event, type -> event <description> /at <details>"),
        ("event party/at home", "OOPS!! To add an Event, type -> event <description> /at <details>"),
        ("event /at home", "OOPS!!! The description of an event cannot be empty."),
        ("event party /at", "OOPS!!! The description of an event cannot be empty."),
    ],
)
def test_malformed_adds(run, state, line: str, message: str) -> None:
    result = run(line)
    assert result == CommandResult(message, error=ErrorKind.INVALID_FORMAT)
    assert len(state.tasks) == 0


def test_description_may_contain_slash(run, state) -> None:
    assert run("event read a/b testing paper /at library").ok
    assert state.tasks.tasks == [Event("read a/b testing paper", "library")]


def test_field_separator_in_description_rejected(run, state) -> None:
    result = run("todo this | that")
    assert result.error is ErrorKind.INVALID_FORMAT
    assert run("deadline essay |  /by 2026-12-01").error is ErrorKind.INVALID_FORMAT
    assert run("event a | /at b").error is ErrorKind.INVALID_FORMAT
    assert run("todo a|b").error is ErrorKind.INVALID_FORMAT
    assert len(state.tasks) == 0


def test_deadline_dates(run, state, store) -> None:
    past = run("deadline essay /by 2026-10-18")
    assert past == CommandResult("The deadline was in the past!", error=ErrorKind.DOMAIN)

    malformed = run("deadline essay /by next friday")
    assert malformed == CommandResult(
        "Please enter the date in the format of yyyy-mm-dd!", error=ErrorKind.INVALID_FORMAT
    )
    assert run("deadline essay /by 2026-02-30").error is ErrorKind.INVALID_FORMAT
    assert run("deadline essay /by 2026-12-1").error is ErrorKind.INVALID_FORMAT
    assert run("deadline essay /by 20261201").error is ErrorKind.INVALID_FORMAT

    # today is allowed
    assert run("deadline essay /by 2026-10-19").ok
    assert run("deadline thesis /by 2027-05-01").ok

    assert state.tasks.tasks == [
        Deadline("essay", date(2026, 10, 19)),
        Deadline("thesis", date(2027, 5, 1)),
    ]
    assert stored_lines(store) == ["D | 0 | essay | 2026-10-19", "D | 0 | thesis | 2027-05-01"]


def test_write_failure_is_reported(settings, tmp_path) -> None:
    failing = FailingTaskStore(tmp_path / "tasks.txt")
    state = AppState(settings=settings, tasks=TaskList(), store=failing)

    result = registry.handle(state, "todo a")

    assert result == CommandResult("Something went wrong: disk full", error=ErrorKind.IO)
    assert failing.save_calls == 1
    assert len(state.tasks) == 0


def test_write_failure_rolls_back_done_and_delete(settings, tmp_path) -> None:
    failing = FailingTaskStore(tmp_path / "tasks.txt")
    state = AppState(
        settings=settings, tasks=TaskList([Todo("a"), Todo("b")]), store=failing
    )

    assert registry.handle(state, "done 1").error is ErrorKind.IO
    assert registry.handle(state, "delete 2").error is ErrorKind.IO

    assert state.tasks.tasks == [Todo("a"), Todo("b")]
    assert failing.save_calls == 2


def test_bye_requests_exit(run) -> None:
    result = run("bye")
    assert result.exit is True
    assert result.text == "Bye. Hope to see you again soon!"


def test_round_trip_after_session(run, store) -> None:
    run("todo read book")
    run("deadline return book /by 2026-11-02")
    run("event party /at 7pm | rooftop")
    run("done 3")

    reloaded = TaskList(store.load())

    assert reloaded.list_tasks() == run("list").text
