# tests/test_task_formatters.py

from __future__ import annotations

from datetime import timedelta

from taskdesk.tasks.task_formatters import (
    OVERDUE_ICON,
    format_relative_date,
    format_statistics,
    format_tags,
    format_task,
    format_task_list,
)
from taskdesk.tasks.task_models import TaskPriority
from taskdesk.tasks.task_store import TaskStore

from .fakes import START


def test_relative_dates() -> None:
    assert format_relative_date(START, START + timedelta(seconds=20)) == "just now"
    assert format_relative_date(START, START + timedelta(minutes=5)) == "5 minutes ago"
    assert format_relative_date(START, START + timedelta(hours=3)) == "3 hours ago"
    assert format_relative_date(START, START + timedelta(days=2)) == "2 days ago"
    assert "2026" in format_relative_date(START, START + timedelta(days=30))


def test_relative_dates_use_singular_for_one() -> None:
    assert format_relative_date(START, START + timedelta(minutes=1)) == "1 minute ago"
    assert format_relative_date(START, START + timedelta(hours=1, minutes=5)) == "1 hour ago"
    assert format_relative_date(START, START + timedelta(days=1, hours=2)) == "1 day ago"


def test_tags() -> None:
    assert format_tags([]) == "No tags"
    assert format_tags(["a", "b"]) == "#a #b"


def test_task_list_marks_overdue_and_shows_ids(store: TaskStore, clock) -> None:
    late = store.create_task(title="late", due_date=START + timedelta(minutes=1)).unwrap()
    store.create_task(title="fine")
    now = clock.advance(hours=1)

    out = format_task_list(store.get_all_tasks(), now=now)
    lines = out.splitlines()
    assert lines[0].startswith("1. ")
    assert OVERDUE_ICON in lines[0]
    assert late.id in lines[0]
    assert OVERDUE_ICON not in lines[1]


def test_empty_task_list() -> None:
    assert "No tasks" in format_task_list([])


def test_task_detail(store: TaskStore, clock) -> None:
    task = store.create_task(
        title="Report", priority=TaskPriority.URGENT, tags=["work"], description=""
    ).unwrap()
    done = store.complete_task(task.id).unwrap()

    out = format_task(done, now=START)
    assert "Report" in out
    assert "No description" in out
    assert "Urgent" in out
    assert "Completed" in out
    assert "#work" in out


def test_statistics_block(store: TaskStore) -> None:
    store.create_task(title="a", priority=TaskPriority.HIGH)
    out = format_statistics(store.get_statistics())
    assert "Total: 1" in out
    assert "High: 1" in out
    assert "Urgent: 0" in out
