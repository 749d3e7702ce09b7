# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Notes:
    - COMPLETED stamps completed_at the first time a task enters it.
    - CANCELLED keeps any completed_at stamped earlier.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


_PRIORITY_RANK = {p: i for i, p in enumerate(TaskPriority)}
_STATUS_RANK = {s: i for i, s in enumerate(TaskStatus)}


class SortField(StrEnum):
    TITLE = "title"
    PRIORITY = "priority"
    CREATED_AT = "created_at"
    DUE_DATE = "due_date"
    STATUS = "status"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(slots=True)
class Task:
    id: str
    title: str
    priority: TaskPriority
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    description: str = ""
    due_date: datetime | None = None
    tags: list[str] = field(default_factory=list)
    completed_at: datetime | None = None

    def copy(self) -> Task:
        """Independent copy (own tags list); datetimes are immutable."""
        return replace(self, tags=list(self.tags))


@dataclass(slots=True)
class TaskFilters:
    """
    Search criteria. Every non-empty criterion must hold (AND);
    `tags` matches when the task carries at least one of them.
    """

    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    tags: list[str] | None = None
    search: str | None = None
    due_date_from: datetime | None = None
    due_date_to: datetime | None = None


@dataclass(frozen=True, slots=True)
class SortOptions:
    field: SortField
    direction: SortDirection = SortDirection.ASC


@dataclass(slots=True)
class TaskStatistics:
    total: int
    completed: int
    pending: int
    in_progress: int
    cancelled: int
    overdue: int
    by_priority: dict[TaskPriority, int]

    def to_dict(self) -> dict[str, object]:
        return {
            "total": self.total,
            "completed": self.completed,
            "pending": self.pending,
            "in_progress": self.in_progress,
            "cancelled": self.cancelled,
            "overdue": self.overdue,
            "by_priority": {p.value: n for p, n in self.by_priority.items()},
        }
