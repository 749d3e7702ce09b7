# src/taskdesk/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_store import TaskStore
from ..tasks.task_validators import TaskValidator


@dataclass
class AppState:
    """
    Everything a connector or command needs, built once by the composition
    root (cli/bootstrap.py) and passed down explicitly.
    """

    # config.Settings, or any object with the same attributes (tests use SimpleNamespace).
    settings: Any
    task_store: TaskStore
    validator: TaskValidator
