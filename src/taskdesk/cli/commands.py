# src/taskdesk/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, cast

from ..core.state import AppState
from ..tasks.task_api import create_validated_task, update_validated_task
from ..tasks.task_formatters import format_statistics, format_task, format_task_list
from ..tasks.task_models import (
    SortDirection,
    SortField,
    SortOptions,
    TaskFilters,
    TaskPriority,
    TaskStatus,
)
from ..tasks.task_results import OperationResult

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandError(ValueError):
    """Bad command arguments; the message is shown to the user as-is."""


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except CommandError as e:
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----

_OPTION_KEYS = {
    "priority",
    "status",
    "due",
    "tags",
    "tag",
    "desc",
    "title",
    "text",
    "from",
    "to",
    "sort",
    "dir",
}


def _split_options(args: list[str]) -> tuple[list[str], dict[str, str]]:
    """Split `key=value` tokens (known keys only) from positional words."""
    positional: list[str] = []
    options: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if sep and key.lower() in _OPTION_KEYS:
            options[key.lower()] = value
        else:
            positional.append(arg)
    return positional, options


def _parse_date(raw: str) -> datetime | None:
    """ISO date or datetime in local time; "none" clears."""
    if raw.strip().lower() in ("", "none", "-"):
        return None
    try:
        value = datetime.fromisoformat(raw.strip())
    except ValueError:
        raise CommandError(f"Invalid date: {raw!r}. Use YYYY-MM-DD or YYYY-MM-DDTHH:MM.") from None
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(UTC)


def _parse_tags(raw: str) -> list[str]:
    return [t.strip() for t in raw.split(",") if t.strip()]


def _parse_enum(enum_cls: Any, raw: str, what: str) -> Any:
    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise CommandError(f"Invalid {what}: {raw!r}. Use one of: {allowed}.") from None


def _parse_sort(field_raw: str | None, dir_raw: str | None) -> SortOptions | None:
    if not field_raw:
        return None
    field = _parse_enum(SortField, field_raw, "sort field")
    direction = _parse_enum(SortDirection, dir_raw, "direction") if dir_raw else SortDirection.ASC
    return SortOptions(field=field, direction=direction)


def _task_reply(result: OperationResult, headline: str) -> str:
    if not result.success:
        return f"Error: {result.error_message}"
    return f"{headline}\n{format_task(result.data)}"


def _require_id(args: list[str], usage: str) -> str:
    if not args:
        raise CommandError(f"Usage: {usage}")
    return args[0]


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <title> [priority=P] [due=YYYY-MM-DD] [tags=a,b] [desc="..."]
    """
    positional, opts = _split_options(args)
    title = " ".join(positional)
    if not title:
        raise CommandError(
            'Usage: /add <title> [priority=low|medium|high|urgent] '
            '[due=YYYY-MM-DD] [tags=a,b] [desc="..."]'
        )

    candidate: dict[str, Any] = {"title": title}
    if "priority" in opts:
        candidate["priority"] = _parse_enum(TaskPriority, opts["priority"], "priority")
    if "due" in opts:
        candidate["due_date"] = _parse_date(opts["due"])
    if "tags" in opts:
        candidate["tags"] = _parse_tags(opts["tags"])
    if "desc" in opts:
        candidate["description"] = opts["desc"]

    result = create_validated_task(state, candidate)
    return _task_reply(result, "Task created.")


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list                   -> all tasks in creation order
    /list <field> [asc|desc] -> sorted by title|priority|created_at|due_date|status
    """
    sort = _parse_sort(args[0] if args else None, args[1] if len(args) > 1 else None)
    tasks = state.task_store.search_tasks(TaskFilters(), sort)
    return format_task_list(tasks)


def cmd_show(state: AppState, args: list[str]) -> str:
    task_id = _require_id(args, "/show <id>")
    result = state.task_store.get_task(task_id)
    if not result.success:
        return f"Error: {result.error_message}"
    return format_task(result.data)


def cmd_find(state: AppState, args: list[str]) -> str:
    """
    /find [status=S] [priority=P] [tag=a,b] [text=...] [from=DATE] [to=DATE]
          [sort=FIELD] [dir=asc|desc]
    Words without key= are used as the free-text search.
    """
    positional, opts = _split_options(args)
    text = opts.get("text") or " ".join(positional) or None

    filters = TaskFilters(
        status=_parse_enum(TaskStatus, opts["status"], "status") if "status" in opts else None,
        priority=(
            _parse_enum(TaskPriority, opts["priority"], "priority") if "priority" in opts else None
        ),
        tags=_parse_tags(opts.get("tag") or opts.get("tags") or "") or None,
        search=text,
        due_date_from=_parse_date(opts["from"]) if "from" in opts else None,
        due_date_to=_parse_date(opts["to"]) if "to" in opts else None,
    )
    sort = _parse_sort(opts.get("sort"), opts.get("dir"))
    tasks = state.task_store.search_tasks(filters, sort)
    return f"Found {len(tasks)} task(s):\n{format_task_list(tasks)}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> [title="..."] [desc="..."] [priority=P] [status=S] [due=DATE|none] [tags=a,b]
    """
    positional, opts = _split_options(args)
    task_id = _require_id(positional, "/edit <id> key=value ...")

    changes: dict[str, Any] = {}
    if "title" in opts:
        changes["title"] = opts["title"]
    if "desc" in opts:
        changes["description"] = opts["desc"]
    if "priority" in opts:
        changes["priority"] = _parse_enum(TaskPriority, opts["priority"], "priority")
    if "status" in opts:
        changes["status"] = _parse_enum(TaskStatus, opts["status"], "status")
    if "due" in opts:
        changes["due_date"] = _parse_date(opts["due"])
    if "tags" in opts:
        changes["tags"] = _parse_tags(opts["tags"])

    if not changes:
        return "Nothing to change. Use key=value pairs: title, desc, priority, status, due, tags."

    result = update_validated_task(state, task_id, changes)
    return _task_reply(result, "Task updated.")


def cmd_start(state: AppState, args: list[str]) -> str:
    task_id = _require_id(args, "/start <id>")
    return _task_reply(state.task_store.start_task(task_id), "Task started.")


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _require_id(args, "/done <id>")
    return _task_reply(state.task_store.complete_task(task_id), "Task completed.")


def cmd_cancel(state: AppState, args: list[str]) -> str:
    task_id = _require_id(args, "/cancel <id>")
    return _task_reply(state.task_store.cancel_task(task_id), "Task cancelled.")


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _require_id(args, "/delete <id>")
    result = state.task_store.delete_task(task_id)
    if not result.success:
        return f"Error: {result.error_message}"
    return f"Task {task_id} deleted."


def cmd_stats(state: AppState, args: list[str]) -> str:
    return format_statistics(state.task_store.get_statistics())


def cmd_demo(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    from .demo import run_demo

    run_demo(state, emit=emit or (lambda _: None))
    return "Demo finished."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add", cmd_add, help_text='Create a task: /add <title> [priority=P] [due=DATE] [tags=a,b] [desc="..."].'
)
registry.register(
    "list", cmd_list, help_text="List tasks: /list [title|priority|created_at|due_date|status] [asc|desc].",
    aliases=["ls"],
)
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register(
    "find",
    cmd_find,
    help_text="Search: /find [text] [status=S] [priority=P] [tag=a,b] [from=DATE] [to=DATE] [sort=F] [dir=D].",
)
registry.register("edit", cmd_edit, help_text="Update fields: /edit <id> key=value ...")
registry.register("start", cmd_start, help_text="Mark a task in progress: /start <id>.")
registry.register("done", cmd_done, help_text="Complete a task: /done <id>.", aliases=["complete"])
registry.register("cancel", cmd_cancel, help_text="Cancel a task: /cancel <id>.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("stats", cmd_stats, help_text="Show task statistics.")
registry.register("demo", cmd_demo, help_text="Run the scripted demonstration against this store.")
