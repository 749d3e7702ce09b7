# src/taskdesk/cli/demo.py

"""
Scripted demonstration: create, search, update, complete, summarize and
validate tasks against a store, printing each step.

Run standalone with `taskdesk-demo` (fresh store seeded with sample tasks)
or from the console with /demo (uses the console's store).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from ..config import get_settings
from ..core.state import AppState
from ..logging_setup import parse_level, setup_logging
from ..tasks.task_api import create_validated_task
from ..tasks.task_formatters import format_statistics, format_task, format_task_list
from ..tasks.task_models import TaskFilters, TaskPriority, TaskStatus
from .bootstrap import create_initial_state

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]


def _section(emit: Emit, title: str) -> None:
    emit("")
    emit(title)
    emit("-" * len(title))


def run_demo(state: AppState, *, emit: Emit = print) -> None:
    store = state.task_store
    now = datetime.now(UTC)

    _section(emit, "📋 CURRENT TASKS")
    emit(format_task_list(store.get_all_tasks()))

    _section(emit, "➕ CREATING TASKS")
    new_tasks: list[dict[str, Any]] = [
        {
            "title": "Study Python",
            "description": "Finish the online Python course",
            "priority": TaskPriority.HIGH,
            "tags": ["study", "python", "programming"],
            "due_date": now + timedelta(days=3),
        },
        {
            "title": "Weekly shopping",
            "description": "Buy fruit, vegetables and basics",
            "priority": TaskPriority.MEDIUM,
            "tags": ["shopping", "home"],
            "due_date": now + timedelta(days=1),
        },
        {
            "title": "Call the dentist",
            "description": "Book a check-up appointment",
            "priority": TaskPriority.URGENT,
            "tags": ["health", "appointment"],
            "due_date": now + timedelta(days=2),
        },
    ]
    for candidate in new_tasks:
        emit(f'📝 Creating task: "{candidate["title"]}"')
        result = create_validated_task(state, candidate)
        if result.success:
            emit(f"✅ Created with id: {result.data.id}")
        else:
            emit(f"❌ Could not create task: {result.error_message}")

    all_tasks = store.get_all_tasks()
    _section(emit, "📋 ALL TASKS")
    emit(format_task_list(all_tasks))

    _section(emit, "🔍 SEARCHING")
    emit("🟠 High priority tasks:")
    emit(format_task_list(store.search_tasks(TaskFilters(priority=TaskPriority.HIGH))))
    emit("📚 Study tasks:")
    emit(format_task_list(store.search_tasks(TaskFilters(tags=["study"]))))

    _section(emit, "✏️  UPDATING")
    if all_tasks:
        first = all_tasks[0]
        emit(f'🔄 Updating task: "{first.title}"')
        result = store.update_task(
            first.id,
            status=TaskStatus.IN_PROGRESS,
            description=f"{first.description} (in progress)",
        )
        if result.success:
            emit(format_task(result.data))
        else:
            emit(f"❌ Could not update: {result.error_message}")

    _section(emit, "✅ COMPLETING")
    if len(all_tasks) > 1:
        second = all_tasks[1]
        emit(f'✅ Completing task: "{second.title}"')
        result = store.complete_task(second.id)
        if result.success:
            emit(format_task(result.data))
        else:
            emit(f"❌ Could not complete: {result.error_message}")

    _section(emit, "📊 STATISTICS")
    emit(format_statistics(store.get_statistics()))

    _section(emit, "🔍 VALIDATION")
    invalid = {
        "title": "",
        "priority": TaskPriority.HIGH,
        "tags": [f"tag{i}" for i in range(1, 12)],
    }
    emit("❌ Trying to create an invalid task...")
    report = state.validator.validate_create(invalid)
    for error in report.errors:
        emit(f"  - {error}")

    _section(emit, "📋 FINAL STATE")
    emit(format_task_list(store.get_all_tasks()))
    logger.info("Demo finished with %d tasks", store.count_tasks())


def main() -> None:
    settings = get_settings()
    setup_logging(
        log_dir=settings.data_dir if settings.log_to_file else None,
        console_level=parse_level(settings.log_level),
    )

    state = create_initial_state(settings=settings, seed=True)
    run_demo(state)


if __name__ == "__main__":
    main()
