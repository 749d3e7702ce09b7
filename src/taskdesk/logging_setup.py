# src/taskdesk/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskdesk.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console-only filter: records from the taskdesk package pass at the
    handler level, everything else (captured warnings included) needs ERROR.
    """

    def __init__(self, package: str = "taskdesk", floor: int = logging.ERROR) -> None:
        super().__init__()
        self.package = package
        self.floor = floor

    def _is_ours(self, name: str) -> bool:
        return name == self.package or name.startswith(self.package + ".")

    def filter(self, record: logging.LogRecord) -> bool:
        return self._is_ours(record.name) or record.levelno >= self.floor


def setup_logging(
    *,
    log_dir: str | Path | None = ".local/taskdesk",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path | None:
    """
    Reset the root logger to a stderr console handler plus, when log_dir is
    given, a file handler writing <log_dir>/taskdesk.log.

    Returns the log file path (None without a file handler). Calling it again
    replaces the handlers from the previous call.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    log_file: Path | None = None
    if log_dir is not None:
        log_file = Path(log_dir) / LOG_FILE_NAME
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    # warnings.warn() ends up under the "py.warnings" logger.
    logging.captureWarnings(True)
    return log_file


def parse_level(name: object, default: int = logging.INFO) -> int:
    """Level for a name such as "debug" or "WARNING"; unknown names give `default`."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else default
