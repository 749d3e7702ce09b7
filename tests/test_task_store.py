# tests/test_task_store.py

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from taskdesk.tasks.task_models import TaskPriority, TaskStatus
from taskdesk.tasks.task_results import (
    InternalError,
    NotFoundError,
    TaskError,
    ValidationError,
)
from taskdesk.tasks.task_store import TaskStore

from .fakes import START


def test_buy_milk_scenario(store: TaskStore, clock) -> None:
    created = store.create_task(title="Buy milk")
    assert created.success
    task = created.data
    assert task.priority is TaskPriority.MEDIUM
    assert task.status is TaskStatus.PENDING
    assert task.tags == []
    assert task.completed_at is None

    clock.advance(minutes=5)
    done = store.complete_task(task.id)
    assert done.success
    assert done.data.status is TaskStatus.COMPLETED
    assert done.data.completed_at is not None
    assert done.data.updated_at > task.updated_at

    stats = store.get_statistics()
    assert stats.completed == 1
    assert stats.pending == 0
    assert stats.total == 1
    assert stats.by_priority[TaskPriority.MEDIUM] == 1

    assert store.delete_task(task.id).success
    missing = store.get_task(task.id)
    assert not missing.success
    assert isinstance(missing.error, NotFoundError)
    assert missing.error.task_id == task.id
    assert task.id in str(missing.error)


def test_create_round_trip_trims_and_defaults(store: TaskStore) -> None:
    due = START + timedelta(days=3)
    created = store.create_task(
        title="  Write report  ",
        description="  quarterly numbers ",
        priority=TaskPriority.HIGH,
        due_date=due,
        tags=["work", "work", "q1"],
    ).unwrap()

    fetched = store.get_task(created.id).unwrap()
    assert fetched.title == "Write report"
    assert fetched.description == "quarterly numbers"
    assert fetched.priority is TaskPriority.HIGH
    assert fetched.due_date == due
    assert fetched.tags == ["work", "work", "q1"]
    assert fetched.status is TaskStatus.PENDING
    assert fetched.completed_at is None
    assert fetched.created_at == fetched.updated_at == START


def test_create_accepts_priority_string(store: TaskStore) -> None:
    task = store.create_task(title="x", priority="Urgent").unwrap()
    assert task.priority is TaskPriority.URGENT


@pytest.mark.parametrize("title", [None, "", "   ", "\t\n"])
def test_create_rejects_blank_title(store: TaskStore, title) -> None:
    result = store.create_task(title=title)
    assert not result.success
    assert isinstance(result.error, ValidationError)
    assert store.count_tasks() == 0


def test_create_rejects_unknown_priority(store: TaskStore) -> None:
    result = store.create_task(title="x", priority="critical")
    assert not result.success
    assert isinstance(result.error, ValidationError)
    assert store.get_all_tasks() == []


def test_naive_due_date_is_taken_as_utc(store: TaskStore) -> None:
    task = store.create_task(title="x", due_date=datetime(2026, 2, 1, 9, 0)).unwrap()
    assert task.due_date == datetime(2026, 2, 1, 9, 0, tzinfo=UTC)


def test_ids_are_unique_and_never_reused(store: TaskStore) -> None:
    first = [store.create_task(title=f"t{i}").unwrap().id for i in range(50)]
    assert len(set(first)) == 50

    for task_id in first[:10]:
        assert store.delete_task(task_id).success

    later = [store.create_task(title=f"u{i}").unwrap().id for i in range(50)]
    assert not set(later) & set(first)


def test_get_all_returns_insertion_order(store: TaskStore) -> None:
    titles = ["c", "a", "b"]
    for t in titles:
        store.create_task(title=t)
    assert [t.title for t in store.get_all_tasks()] == titles


def test_returned_tasks_are_copies(store: TaskStore) -> None:
    task = store.create_task(title="original", tags=["a"]).unwrap()
    task.title = "mutated"
    task.tags.append("b")

    listed = store.get_all_tasks()[0]
    listed.tags.clear()

    fetched = store.get_task(task.id).unwrap()
    assert fetched.title == "original"
    assert fetched.tags == ["a"]


def test_tags_argument_is_copied_in(store: TaskStore) -> None:
    tags = ["a"]
    task = store.create_task(title="x", tags=tags).unwrap()
    tags.append("b")
    assert store.get_task(task.id).unwrap().tags == ["a"]


def test_empty_update_only_touches_updated_at(store: TaskStore, clock) -> None:
    before = store.create_task(title="x", tags=["a"], due_date=START + timedelta(days=1)).unwrap()
    clock.advance(seconds=30)

    after = store.update_task(before.id).unwrap()
    assert after.updated_at == START + timedelta(seconds=30)
    assert after == replace(before, updated_at=after.updated_at)


def test_update_applies_supplied_fields(store: TaskStore, clock) -> None:
    task = store.create_task(title="x", due_date=START + timedelta(days=1)).unwrap()
    clock.advance(minutes=1)

    updated = store.update_task(
        task.id,
        title="y",
        description="details",
        priority="low",
        tags=["home"],
        due_date=None,
    ).unwrap()
    assert updated.title == "y"
    assert updated.description == "details"
    assert updated.priority is TaskPriority.LOW
    assert updated.tags == ["home"]
    assert updated.due_date is None
    assert updated.created_at == START
    assert updated.updated_at > updated.created_at


def test_update_missing_id(store: TaskStore) -> None:
    result = store.update_task("task_nope", title="y")
    assert not result.success
    assert isinstance(result.error, NotFoundError)


def test_update_blank_title_applies_nothing(store: TaskStore, clock) -> None:
    task = store.create_task(title="keep").unwrap()
    clock.advance(minutes=1)

    result = store.update_task(task.id, title="   ", priority=TaskPriority.URGENT)
    assert not result.success
    assert isinstance(result.error, ValidationError)

    unchanged = store.get_task(task.id).unwrap()
    assert unchanged == task


def test_update_rejects_unknown_field_and_bad_status(store: TaskStore) -> None:
    task = store.create_task(title="x").unwrap()

    result = store.update_task(task.id, owner="bob")
    assert isinstance(result.error, ValidationError)
    assert "owner" in str(result.error)

    result = store.update_task(task.id, status="archived")
    assert isinstance(result.error, ValidationError)
    assert store.get_task(task.id).unwrap().status is TaskStatus.PENDING


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("due_date", "2026-02-01"),
        ("completed_at", "yesterday"),
        ("tags", 5),
        ("tags", [1, 2]),
        ("tags", "abc"),
        ("description", 42),
    ],
)
def test_update_rejects_wrongly_typed_values(store: TaskStore, clock, field, value) -> None:
    task = store.create_task(title="typed", tags=["t"]).unwrap()
    clock.advance(minutes=1)

    result = store.update_task(task.id, **{field: value})
    assert not result.success
    assert isinstance(result.error, ValidationError)
    assert field in str(result.error)
    assert store.get_task(task.id).unwrap() == task


@pytest.mark.parametrize(
    "kwargs",
    [
        {"due_date": "2026-02-01"},
        {"tags": "home"},
        {"tags": [None]},
        {"description": ["not", "text"]},
    ],
)
def test_create_rejects_wrongly_typed_values(store: TaskStore, kwargs) -> None:
    result = store.create_task(title="typed", **kwargs)
    assert not result.success
    assert isinstance(result.error, ValidationError)
    assert store.count_tasks() == 0


def test_completion_stamps_once(store: TaskStore, clock) -> None:
    task = store.create_task(title="x").unwrap()

    call_time = clock.advance(minutes=10)
    first = store.update_task(task.id, status=TaskStatus.COMPLETED).unwrap()
    assert first.completed_at is not None
    assert first.completed_at >= call_time

    clock.advance(minutes=10)
    second = store.update_task(task.id, status=TaskStatus.COMPLETED).unwrap()
    assert second.completed_at == first.completed_at
    assert second.updated_at > first.updated_at


def test_explicit_completed_at_wins(store: TaskStore, clock) -> None:
    task = store.create_task(title="x").unwrap()
    stamp = START - timedelta(days=2)

    clock.advance(minutes=1)
    updated = store.update_task(task.id, status="completed", completed_at=stamp).unwrap()
    assert updated.completed_at == stamp


def test_completed_at_survives_later_status_changes(store: TaskStore, clock) -> None:
    task = store.create_task(title="x").unwrap()
    clock.advance(minutes=1)
    completed_at = store.complete_task(task.id).unwrap().completed_at

    clock.advance(minutes=1)
    cancelled = store.cancel_task(task.id).unwrap()
    assert cancelled.status is TaskStatus.CANCELLED
    assert cancelled.completed_at == completed_at

    clock.advance(minutes=1)
    started = store.start_task(task.id).unwrap()
    assert started.status is TaskStatus.IN_PROGRESS
    assert started.completed_at == completed_at


def test_status_wrappers_report_missing_ids(store: TaskStore) -> None:
    for op in (store.complete_task, store.start_task, store.cancel_task, store.delete_task):
        result = op("task_missing")
        assert not result.success
        assert isinstance(result.error, NotFoundError)


def test_delete_removes_from_every_view(store: TaskStore) -> None:
    keep = store.create_task(title="keep", tags=["t"]).unwrap()
    gone = store.create_task(title="gone", tags=["t"]).unwrap()

    assert store.delete_task(gone.id).success
    assert [t.id for t in store.get_all_tasks()] == [keep.id]
    assert [t.id for t in store.search_tasks()] == [keep.id]
    assert store.get_statistics().total == 1
    assert not store.delete_task(gone.id).success


def test_unexpected_failure_becomes_internal_error() -> None:
    def broken_clock() -> datetime:
        raise RuntimeError("clock exploded")

    store = TaskStore(clock=broken_clock)
    result = store.create_task(title="x")
    assert not result.success
    assert isinstance(result.error, InternalError)
    assert "clock exploded" in str(result.error)
    assert store.count_tasks() == 0


def test_unwrap_raises_carried_error(store: TaskStore) -> None:
    with pytest.raises(NotFoundError):
        store.get_task("task_missing").unwrap()
    with pytest.raises(TaskError):
        store.create_task(title="").unwrap()
