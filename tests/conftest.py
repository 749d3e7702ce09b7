# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskdesk.core.state import AppState
from taskdesk.tasks.task_store import TaskStore
from taskdesk.tasks.task_validators import TaskValidator

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskdesk-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        log_to_file=False,
        seed_sample_tasks=False,
        title_max_length=200,
        description_max_length=1000,
        max_tags=10,
        tag_max_length=50,
        allow_past_due_dates=False,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock: FakeClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, clock: FakeClock) -> AppState:
    """AppState wired with the fake-clock store (no sample tasks)."""
    return AppState(
        settings=settings,
        task_store=store,
        validator=TaskValidator(clock=clock),
    )
