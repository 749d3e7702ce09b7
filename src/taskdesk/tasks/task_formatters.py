# tasks/task_formatters.py

"""Human-readable rendering of tasks and statistics (read-only)."""

from __future__ import annotations

from datetime import UTC, datetime

from .task_models import Task, TaskPriority, TaskStatistics, TaskStatus

PRIORITY_ICONS: dict[TaskPriority, str] = {
    TaskPriority.LOW: "🟢",
    TaskPriority.MEDIUM: "🟡",
    TaskPriority.HIGH: "🟠",
    TaskPriority.URGENT: "🔴",
}

PRIORITY_LABELS: dict[TaskPriority, str] = {
    TaskPriority.LOW: "Low",
    TaskPriority.MEDIUM: "Medium",
    TaskPriority.HIGH: "High",
    TaskPriority.URGENT: "Urgent",
}

STATUS_ICONS: dict[TaskStatus, str] = {
    TaskStatus.PENDING: "⏳",
    TaskStatus.IN_PROGRESS: "🔄",
    TaskStatus.COMPLETED: "✅",
    TaskStatus.CANCELLED: "❌",
}

STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.COMPLETED: "Completed",
    TaskStatus.CANCELLED: "Cancelled",
}

OVERDUE_ICON = "⚠️ "


def _now() -> datetime:
    return datetime.now(UTC)


def is_overdue(task: Task, now: datetime | None = None) -> bool:
    now = now or _now()
    return (
        task.due_date is not None
        and task.due_date < now
        and task.status is not TaskStatus.COMPLETED
    )


def format_date(value: datetime) -> str:
    return value.astimezone().strftime("%B %d, %Y %H:%M")


def _ago(count: int, unit: str) -> str:
    return f"{count} {unit} ago" if count == 1 else f"{count} {unit}s ago"


def format_relative_date(value: datetime, now: datetime | None = None) -> str:
    now = now or _now()
    minutes = int((now - value).total_seconds() // 60)
    hours = minutes // 60
    days = hours // 24

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return _ago(minutes, "minute")
    if hours < 24:
        return _ago(hours, "hour")
    if days < 7:
        return _ago(days, "day")
    return format_date(value)


def format_priority(priority: TaskPriority) -> str:
    return f"{PRIORITY_ICONS[priority]} {PRIORITY_LABELS[priority]}"


def format_status(status: TaskStatus) -> str:
    return f"{STATUS_ICONS[status]} {STATUS_LABELS[status]}"


def format_tags(tags: list[str]) -> str:
    if not tags:
        return "No tags"
    return " ".join(f"#{tag}" for tag in tags)


def format_task(task: Task, now: datetime | None = None) -> str:
    now = now or _now()
    lines = [
        f"📋 {task.title}",
        f"🆔 {task.id}",
        f"📝 {task.description or 'No description'}",
        f"🏷️  {format_priority(task.priority)}",
        f"📊 {format_status(task.status)}",
        f"📅 Created: {format_relative_date(task.created_at, now)}",
        f"🔄 Updated: {format_relative_date(task.updated_at, now)}",
    ]

    if task.due_date is not None:
        marker = OVERDUE_ICON if is_overdue(task, now) else ""
        lines.append(f"{marker}📅 Due: {format_date(task.due_date)}")

    if task.completed_at is not None:
        lines.append(f"✅ Completed: {format_date(task.completed_at)}")

    if task.tags:
        lines.append(f"🏷️  Tags: {format_tags(task.tags)}")

    return "\n".join(lines)


def format_task_list(tasks: list[Task], now: datetime | None = None) -> str:
    if not tasks:
        return "📭 No tasks to show"

    now = now or _now()
    lines = []
    for i, task in enumerate(tasks, start=1):
        marker = OVERDUE_ICON if is_overdue(task, now) else ""
        lines.append(
            f"{i}. {PRIORITY_ICONS[task.priority]}{STATUS_ICONS[task.status]}"
            f"{marker}{task.title}  [{task.id}]"
        )
    return "\n".join(lines)


def format_statistics(stats: TaskStatistics) -> str:
    return "\n".join(
        [
            "📊 TASK STATISTICS",
            "==================",
            f"📈 Total: {stats.total}",
            f"✅ Completed: {stats.completed}",
            f"⏳ Pending: {stats.pending}",
            f"🔄 In progress: {stats.in_progress}",
            f"❌ Cancelled: {stats.cancelled}",
            f"⚠️  Overdue: {stats.overdue}",
            "",
            "📊 BY PRIORITY:",
            f"🔴 Urgent: {stats.by_priority[TaskPriority.URGENT]}",
            f"🟠 High: {stats.by_priority[TaskPriority.HIGH]}",
            f"🟡 Medium: {stats.by_priority[TaskPriority.MEDIUM]}",
            f"🟢 Low: {stats.by_priority[TaskPriority.LOW]}",
        ]
    )
