# src/taskbook/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

DIVIDER = "_" * 60


def _print_reply(text: str, output: Callable[[str], None]) -> None:
    output(DIVIDER)
    for line in text.splitlines():
        output(f" {line}")
    output(DIVIDER)


def greeting(app_name: str) -> str:
    return (
        f"Hello! I'm {app_name}\n"
        "What can I do for you today?\n"
        "(type 'help' to see the available commands)"
    )


def run_console_loop(
    state: AppState,
    *,
    read: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
    startup_warning: str | None = None,
) -> None:
    """Read one command per line until `bye`, EOF or Ctrl+C."""
    logger.info("Console connector started (tasks=%d file=%s).", len(state.tasks), state.store.path)

    app_name = str(getattr(getattr(state, "settings", None), "app_name", "Duke"))
    _print_reply(greeting(app_name), output)
    if startup_warning:
        _print_reply(startup_warning, output)

    while True:
        try:
            line = read("> ")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            output("")
            break

        result = command_registry.handle(state, line)
        if not result.ok:
            logger.info("Command failed kind=%s line=%r", result.error, line)
        _print_reply(result.text, output)

        if result.exit:
            logger.info("Console exit command received.")
            break

    logger.info("Console connector finished.")
