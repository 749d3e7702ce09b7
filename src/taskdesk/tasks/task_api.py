# src/taskdesk/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from ..core.state import AppState
from .task_models import Task, TaskPriority
from .task_results import OperationResult, ValidationError
from .task_store import TaskStore

logger = logging.getLogger(__name__)

SAMPLE_TASKS: list[dict[str, Any]] = [
    {
        "title": "Learn Python typing",
        "description": "Work through the basics of type hints and dataclasses",
        "priority": TaskPriority.HIGH,
        "tags": ["study", "programming"],
        "due_in_days": 7,
    },
    {
        "title": "Exercise",
        "description": "Go to the gym for an hour",
        "priority": TaskPriority.MEDIUM,
        "tags": ["health", "exercise"],
        "due_in_days": 1,
    },
    {
        "title": "Buy groceries",
        "description": "Weekly trip to the supermarket",
        "priority": TaskPriority.URGENT,
        "tags": ["shopping", "home"],
        "due_in_days": 2,
    },
]


def create_validated_task(state: AppState, candidate: Mapping[str, Any]) -> OperationResult[Task]:
    """
    Validate a create candidate with state.validator, then create it.
    A rejected candidate comes back as a failed result listing every rule it broke.
    """
    report = state.validator.validate_create(candidate)
    if not report.is_valid:
        logger.debug("Create rejected: %s", report.errors)
        return OperationResult.fail(ValidationError(report.errors))
    return state.task_store.create_task(**candidate)


def update_validated_task(
    state: AppState, task_id: str, changes: Mapping[str, Any]
) -> OperationResult[Task]:
    id_error = state.validator.validate_task_id(task_id)
    if id_error:
        return OperationResult.fail(ValidationError(id_error))

    report = state.validator.validate_update(changes)
    if not report.is_valid:
        logger.debug("Update rejected id=%s: %s", task_id, report.errors)
        return OperationResult.fail(ValidationError(report.errors))
    return state.task_store.update_task(task_id, **changes)


def seed_sample_tasks(store: TaskStore, now: datetime | None = None) -> list[Task]:
    """Populate a store with a few example tasks (used for demos and first runs)."""
    now = now or datetime.now(UTC)
    created: list[Task] = []
    for sample in SAMPLE_TASKS:
        result = store.create_task(
            title=sample["title"],
            description=sample["description"],
            priority=sample["priority"],
            tags=list(sample["tags"]),
            due_date=now + timedelta(days=sample["due_in_days"]),
        )
        if result.success and result.data is not None:
            created.append(result.data)
        else:
            logger.warning("Sample task %r not created: %s", sample["title"], result.error_message)
    logger.info("Seeded %d sample tasks", len(created))
    return created
