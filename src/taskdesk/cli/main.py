# src/taskdesk/cli/main.py

"""
`taskdesk` console entry point.

Tasks live in memory only; whatever is in the store is dropped on exit.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import parse_level, setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging(
        log_dir=settings.data_dir if settings.log_to_file else None,
        console_level=parse_level(settings.log_level),
    )
    logger.info("Starting %s", settings.app_name)

    state = create_initial_state(settings=settings)
    try:
        run_console_loop(state)
    finally:
        logger.info("Bye (%d tasks discarded).", state.task_store.count_tasks())


if __name__ == "__main__":
    main()
