# src/taskdesk/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing is read from the environment at import time; the first
  get_settings() call builds the instance.
- Bad values fall back to defaults instead of failing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKDESK"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path
    log_to_file: bool

    # ---- Startup ----
    seed_sample_tasks: bool

    # ---- Validation limits ----
    title_max_length: int
    description_max_length: int
    max_tags: int
    tag_max_length: int
    allow_past_due_dates: bool

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "taskdesk") or "taskdesk",
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            data_dir=_env_path(_k("DATA_DIR"), Path(".local/taskdesk")),
            log_to_file=_env_bool(_k("LOG_TO_FILE"), True),
            seed_sample_tasks=_env_bool(_k("SEED_SAMPLE_TASKS"), True),
            title_max_length=_env_int(_k("TITLE_MAX_LENGTH"), 200),
            description_max_length=_env_int(_k("DESCRIPTION_MAX_LENGTH"), 1000),
            max_tags=_env_int(_k("MAX_TAGS"), 10),
            tag_max_length=_env_int(_k("TAG_MAX_LENGTH"), 50),
            allow_past_due_dates=_env_bool(_k("ALLOW_PAST_DUE_DATES"), False),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        # Local .env never overrides variables already set in the environment.
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
