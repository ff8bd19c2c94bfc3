# src/task_console/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console menu loop
in the main thread until the exit command (or EOF / Ctrl+C).
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

APP_VERSION = "1.0"

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        log_to_file=settings.log_to_file,
    )

    logger.info("Starting %s %s...", settings.app_name, APP_VERSION)

    state = create_initial_state(settings=settings)
    code = run_console_loop(state, greeting=f"{settings.app_name} {APP_VERSION}")

    logger.info("Bye.")
    return code


if __name__ == "__main__":
    sys.exit(main())
