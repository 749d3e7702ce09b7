# src/taskdesk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the task store and validator into AppState,
- optionally seeds the store with sample tasks.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_api import seed_sample_tasks
from ..tasks.task_store import TaskStore
from ..tasks.task_validators import TaskValidator

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    if getattr(settings, "log_to_file", False):
        settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, seed: bool | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). `seed` overrides settings.seed_sample_tasks.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore()
    state = AppState(
        settings=settings,
        task_store=store,
        validator=TaskValidator.from_settings(settings),
    )

    if seed is None:
        seed = bool(getattr(settings, "seed_sample_tasks", False))
    if seed:
        seed_sample_tasks(store)

    logger.info("State ready: %d tasks", store.count_tasks())
    return state
