# tasks/task_store.py

from __future__ import annotations

import logging
import uuid
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from .task_models import (
    SortDirection,
    SortField,
    SortOptions,
    Task,
    TaskFilters,
    TaskPriority,
    TaskStatistics,
    TaskStatus,
)
from .task_results import InternalError, NotFoundError, OperationResult, ValidationError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

UPDATABLE_FIELDS = frozenset(
    {"title", "description", "priority", "status", "due_date", "tags", "completed_at"}
)

# Tasks without a due date sort as if due at the end of time, in both directions.
_FAR_FUTURE = datetime.max.replace(tzinfo=UTC)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _as_aware(value: datetime | None) -> datetime | None:
    """Naive datetimes are taken to be UTC so they compare with stored ones."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def _parse_priority(raw: Any) -> TaskPriority:
    if isinstance(raw, TaskPriority):
        return raw
    try:
        return TaskPriority(str(raw).strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in TaskPriority)
        raise ValidationError(f"Priority must be one of: {allowed}") from None


def _parse_status(raw: Any) -> TaskStatus:
    if isinstance(raw, TaskStatus):
        return raw
    try:
        return TaskStatus(str(raw).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise ValidationError(f"Status must be one of: {allowed}") from None


def _check_datetime(name: str, value: Any) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, datetime):
        raise ValidationError(f"{name} must be a datetime or None")
    return _as_aware(value)


def _check_description(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("description must be a string")
    return value


def _check_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ValidationError("tags must be a list of strings")
    tags = list(value)
    if not all(isinstance(t, str) for t in tags):
        raise ValidationError("tags must be a list of strings")
    return tags


def _sort_key(field: SortField) -> Callable[[Task], Any]:
    if field is SortField.DUE_DATE:
        return lambda t: t.due_date or _FAR_FUTURE
    if field is SortField.PRIORITY:
        return lambda t: t.priority.rank
    if field is SortField.STATUS:
        return lambda t: t.status.rank
    if field is SortField.CREATED_AT:
        return lambda t: t.created_at
    return lambda t: t.title


class TaskStore:
    """
    In-memory task store.

    The collection is an insertion-ordered dict (id -> Task); get_all_tasks()
    and unsorted searches return tasks in creation order.

    Ownership:
    - the store keeps the only canonical Task objects
    - every task handed out is a copy, so callers may mutate it freely

    Thread-safety:
    - none; the store assumes one caller at a time. Hosts with several
      threads must hold one lock around every call (reads included).
    """

    def __init__(self, *, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or _utcnow
        self._tasks: dict[str, Task] = {}
        # Every id ever handed out, so deleted ids are never issued again.
        self._issued_ids: set[str] = set()
        logger.info("TaskStore ready (in-memory)")

    # ---- low-level helpers ----

    def _now(self) -> datetime:
        now = self._clock()
        return now if now.tzinfo is not None else now.replace(tzinfo=UTC)

    def _generate_id(self, now: datetime) -> str:
        millis = int(now.timestamp() * 1000)
        while True:
            task_id = f"task_{millis}_{uuid.uuid4().hex[:9]}"
            if task_id not in self._issued_ids:
                self._issued_ids.add(task_id)
                return task_id

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def create_task(
        self,
        *,
        title: str | None,
        description: str | None = None,
        priority: TaskPriority | str | None = None,
        due_date: datetime | None = None,
        tags: Iterable[str] | None = None,
    ) -> OperationResult[Task]:
        if not title or not str(title).strip():
            return OperationResult.fail(ValidationError("Task title is required"))

        try:
            prio = TaskPriority.MEDIUM if priority is None else _parse_priority(priority)
            due = _check_datetime("due_date", due_date)
            tag_list = _check_tags(tags)
            desc = _check_description(description).strip()
        except ValidationError as e:
            return OperationResult.fail(e)

        try:
            now = self._now()
            task = Task(
                id=self._generate_id(now),
                title=str(title).strip(),
                description=desc,
                priority=prio,
                status=TaskStatus.PENDING,
                created_at=now,
                updated_at=now,
                due_date=due,
                tags=tag_list,
                completed_at=None,
            )
            self._tasks[task.id] = task
        except Exception as e:
            logger.exception("Task create failed title=%r", title)
            return OperationResult.fail(InternalError("create the task", e))

        logger.debug(
            "Task created id=%s priority=%s due_date=%s tags=%s",
            task.id,
            task.priority.value,
            task.due_date,
            task.tags,
        )
        return OperationResult.ok(task.copy(), "Task created")

    def get_task(self, task_id: str) -> OperationResult[Task]:
        task = self._tasks.get(task_id)
        if task is None:
            return OperationResult.fail(NotFoundError(task_id))
        return OperationResult.ok(task.copy())

    def get_all_tasks(self) -> list[Task]:
        return [t.copy() for t in self._tasks.values()]

    def update_task(self, task_id: str, **changes: Any) -> OperationResult[Task]:
        """
        Apply a partial update.

        Every supplied field is applied as given (None clears due_date and
        completed_at; None tags means no tags). Moving into COMPLETED stamps
        completed_at unless it was already set or the caller passes
        completed_at explicitly in the same call.
        """
        current = self._tasks.get(task_id)
        if current is None:
            return OperationResult.fail(NotFoundError(task_id))

        unknown = sorted(set(changes) - UPDATABLE_FIELDS)
        if unknown:
            return OperationResult.fail(
                ValidationError(f"Unknown task field(s): {', '.join(unknown)}")
            )

        if "title" in changes:
            title = changes["title"]
            if title is None or not str(title).strip():
                return OperationResult.fail(ValidationError("Task title cannot be empty"))

        applied = dict(changes)
        try:
            if "priority" in applied:
                applied["priority"] = _parse_priority(applied["priority"])
            if "status" in applied:
                applied["status"] = _parse_status(applied["status"])
            if "tags" in applied:
                applied["tags"] = _check_tags(applied["tags"])
            if "description" in applied:
                applied["description"] = _check_description(applied["description"])
            for key in ("due_date", "completed_at"):
                if key in applied:
                    applied[key] = _check_datetime(key, applied[key])
        except ValidationError as e:
            return OperationResult.fail(e)

        try:
            now = self._now()
            updated = replace(current, **applied, updated_at=now)
            if (
                "completed_at" not in changes
                and updated.status is TaskStatus.COMPLETED
                and current.completed_at is None
            ):
                updated.completed_at = now
            self._tasks[task_id] = updated
        except Exception as e:
            logger.exception("Task update failed id=%s", task_id)
            return OperationResult.fail(InternalError("update the task", e))

        logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
        return OperationResult.ok(updated.copy(), "Task updated")

    def delete_task(self, task_id: str) -> OperationResult[None]:
        if task_id not in self._tasks:
            return OperationResult.fail(NotFoundError(task_id))
        del self._tasks[task_id]
        logger.debug("Task deleted id=%s", task_id)
        return OperationResult.ok(message="Task deleted")

    def complete_task(self, task_id: str) -> OperationResult[Task]:
        return self.update_task(task_id, status=TaskStatus.COMPLETED, completed_at=self._now())

    def start_task(self, task_id: str) -> OperationResult[Task]:
        return self.update_task(task_id, status=TaskStatus.IN_PROGRESS)

    def cancel_task(self, task_id: str) -> OperationResult[Task]:
        return self.update_task(task_id, status=TaskStatus.CANCELLED)

    def search_tasks(
        self,
        filters: TaskFilters | None = None,
        sort: SortOptions | None = None,
    ) -> list[Task]:
        """
        Filter (AND across criteria) and optionally sort.

        Criteria:
        - status / priority: exact match
        - tags: task carries at least one of them
        - search: case-insensitive substring of title or description
        - due_date_from / due_date_to: inclusive bounds; tasks without a
          due date never match a bounded search

        Sorting is stable. Tasks without a due date sort as the latest ones
        under both directions.
        """
        tasks: Iterable[Task] = self._tasks.values()
        f = filters or TaskFilters()

        if f.status:
            tasks = [t for t in tasks if t.status == f.status]

        if f.priority:
            tasks = [t for t in tasks if t.priority == f.priority]

        if f.tags:
            wanted = set(f.tags)
            tasks = [t for t in tasks if wanted.intersection(t.tags)]

        if f.search:
            term = f.search.lower()
            tasks = [
                t for t in tasks if term in t.title.lower() or term in t.description.lower()
            ]

        if f.due_date_from:
            lower = _as_aware(f.due_date_from)
            tasks = [t for t in tasks if t.due_date is not None and t.due_date >= lower]

        if f.due_date_to:
            upper = _as_aware(f.due_date_to)
            tasks = [t for t in tasks if t.due_date is not None and t.due_date <= upper]

        out = [t.copy() for t in tasks]
        if sort is not None:
            out.sort(key=_sort_key(sort.field), reverse=sort.direction is SortDirection.DESC)
        return out

    def get_statistics(self) -> TaskStatistics:
        """
        Aggregate counts over the whole store, recomputed on every call.

        Overdue means due before now and not COMPLETED, so a cancelled task
        past its due date still counts.
        """
        now = self._now()
        tasks = list(self._tasks.values())
        by_status = Counter(t.status for t in tasks)
        by_priority = Counter(t.priority for t in tasks)
        overdue = sum(
            1
            for t in tasks
            if t.due_date is not None and t.due_date < now and t.status is not TaskStatus.COMPLETED
        )
        return TaskStatistics(
            total=len(tasks),
            completed=by_status[TaskStatus.COMPLETED],
            pending=by_status[TaskStatus.PENDING],
            in_progress=by_status[TaskStatus.IN_PROGRESS],
            cancelled=by_status[TaskStatus.CANCELLED],
            overdue=overdue,
            by_priority={p: by_priority[p] for p in TaskPriority},
        )
