# tasks/task_validators.py

"""
Field-level validation for task candidates.

Callers run this before TaskStore.create_task / update_task; the store only
re-checks the title and value types. Multi-field checks collect every
violated rule instead of stopping at the first one.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from .task_models import TaskPriority, TaskStatus
from .task_store import UPDATABLE_FIELDS

# Letters (any script), digits, whitespace, "_" and "-".
TAG_RE = re.compile(r"[\w\s-]+")

CREATE_FIELDS = frozenset({"title", "description", "priority", "due_date", "tags"})


@dataclass(slots=True)
class ValidationReport:
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, error: str | None) -> None:
        if error:
            self.errors.append(error)


def _unknown_fields(values: Mapping[str, Any], allowed: frozenset[str]) -> str | None:
    unknown = sorted(set(values) - allowed)
    if unknown:
        return f"Unknown task field(s): {', '.join(unknown)}"
    return None


class TaskValidator:
    def __init__(
        self,
        *,
        title_max_length: int = 200,
        description_max_length: int = 1000,
        max_tags: int = 10,
        tag_max_length: int = 50,
        allow_past_due_dates: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.title_max_length = title_max_length
        self.description_max_length = description_max_length
        self.max_tags = max_tags
        self.tag_max_length = tag_max_length
        self.allow_past_due_dates = allow_past_due_dates
        self._clock = clock or (lambda: datetime.now(UTC))

    @classmethod
    def from_settings(cls, settings: Any) -> TaskValidator:
        return cls(
            title_max_length=getattr(settings, "title_max_length", 200),
            description_max_length=getattr(settings, "description_max_length", 1000),
            max_tags=getattr(settings, "max_tags", 10),
            tag_max_length=getattr(settings, "tag_max_length", 50),
            allow_past_due_dates=getattr(settings, "allow_past_due_dates", False),
        )

    # ---- single fields (message or None) ----

    def validate_title(self, title: Any) -> str | None:
        if not title or not isinstance(title, str):
            return "Title is required and must be a string"
        trimmed = title.strip()
        if not trimmed:
            return "Title cannot be empty"
        if len(trimmed) > self.title_max_length:
            return f"Title cannot be longer than {self.title_max_length} characters"
        return None

    def validate_description(self, description: Any) -> str | None:
        if description is None:
            return None
        if not isinstance(description, str):
            return "Description must be a string"
        if len(description) > self.description_max_length:
            return f"Description cannot be longer than {self.description_max_length} characters"
        return None

    def validate_priority(self, priority: Any) -> str | None:
        if not priority:
            return "Priority is required"
        if priority not in {p.value for p in TaskPriority}:
            return f"Priority must be one of: {', '.join(p.value for p in TaskPriority)}"
        return None

    def validate_status(self, status: Any) -> str | None:
        if not status:
            return "Status is required"
        if status not in {s.value for s in TaskStatus}:
            return f"Status must be one of: {', '.join(s.value for s in TaskStatus)}"
        return None

    def validate_due_date(self, due_date: Any) -> str | None:
        if due_date is None:
            return None
        if not isinstance(due_date, datetime):
            return "Due date must be a valid date"
        if self.allow_past_due_dates:
            return None
        if due_date.tzinfo is None:
            due_date = due_date.replace(tzinfo=UTC)
        if due_date < self._clock():
            return "Due date cannot be in the past"
        return None

    def validate_completed_at(self, completed_at: Any) -> str | None:
        if completed_at is None or isinstance(completed_at, datetime):
            return None
        return "Completed date must be a valid date"

    def validate_tags(self, tags: Any) -> str | None:
        if tags is None:
            return None
        if not isinstance(tags, (list, tuple)):
            return "Tags must be a list"
        if len(tags) > self.max_tags:
            return f"A task cannot have more than {self.max_tags} tags"
        for pos, tag in enumerate(tags, start=1):
            if not isinstance(tag, str):
                return f"Tag at position {pos} must be a string"
            trimmed = tag.strip()
            if not trimmed:
                return f"Tag at position {pos} cannot be empty"
            if len(trimmed) > self.tag_max_length:
                return f"Tag at position {pos} cannot be longer than {self.tag_max_length} characters"
            if not TAG_RE.fullmatch(trimmed):
                return f"Tag at position {pos} contains characters that are not allowed"
        return None

    def validate_task_id(self, task_id: Any) -> str | None:
        if not task_id or not isinstance(task_id, str) or not task_id.strip():
            return "Task id must be a non-empty string"
        return None

    # ---- whole candidates ----

    def validate_create(self, candidate: Mapping[str, Any]) -> ValidationReport:
        report = ValidationReport()
        report.add(_unknown_fields(candidate, CREATE_FIELDS))
        report.add(self.validate_title(candidate.get("title")))
        report.add(self.validate_description(candidate.get("description")))
        if candidate.get("priority") is not None:
            report.add(self.validate_priority(candidate["priority"]))
        report.add(self.validate_due_date(candidate.get("due_date")))
        report.add(self.validate_tags(candidate.get("tags")))
        return report

    def validate_update(self, changes: Mapping[str, Any]) -> ValidationReport:
        """Check only the fields present in `changes`."""
        report = ValidationReport()
        report.add(_unknown_fields(changes, UPDATABLE_FIELDS))
        if "title" in changes:
            report.add(self.validate_title(changes["title"]))
        if "description" in changes:
            report.add(self.validate_description(changes["description"]))
        if "priority" in changes:
            report.add(self.validate_priority(changes["priority"]))
        if "status" in changes:
            report.add(self.validate_status(changes["status"]))
        if "due_date" in changes:
            report.add(self.validate_due_date(changes["due_date"]))
        if "tags" in changes:
            report.add(self.validate_tags(changes["tags"]))
        if "completed_at" in changes:
            report.add(self.validate_completed_at(changes["completed_at"]))
        return report
