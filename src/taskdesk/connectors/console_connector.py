# src/taskdesk/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = frozenset({"/exit", "/quit"})


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _read_line(read: Callable[[str], str], prompt: str) -> str | None:
    """One stripped input line, or None once the user closes the console."""
    try:
        return read(prompt).strip()
    except EOFError:
        logger.info("Console input closed.")
    except KeyboardInterrupt:
        logger.info("Console interrupted.")
        print()
    return None


def _as_command(line: str) -> str:
    return line if line.startswith("/") else f"/add {line}"


def run_console_loop(
    state: AppState,
    *,
    read: Callable[[str], str] = input,
    reply: Callable[[str], None] = _print_ts,
) -> int:
    """
    Read commands until /exit, /quit or end of input. Plain text without a
    leading slash creates a task with that title.

    Returns the number of command lines handled.
    """
    app_name = str(getattr(state.settings, "app_name", "taskdesk"))
    logger.info("Console started (tasks=%d).", state.task_store.count_tasks())
    reply(f"[{app_name}] /help lists commands, /exit quits. Plain text adds a task.")

    def emit(text: str) -> None:
        print(text, flush=True)

    handled = 0
    while (line := _read_line(read, f"{app_name}> ")) is not None:
        if not line:
            continue
        if line.lower() in EXIT_COMMANDS:
            break

        try:
            response = command_registry.handle(state, _as_command(line), emit=emit)
        except Exception:
            logger.exception("Command crashed: %r", line)
            response = "Internal error while handling a command."
        handled += 1

        if response is not None:
            reply(response)

    logger.info("Console stopped after %d command(s).", handled)
    return handled
