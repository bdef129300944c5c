# src/taskpulse/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the board, runs the initial load, then starts the
console REPL (optional).
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_board, load_board
from ..cli.commands import format_metrics
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    board = create_board(settings=settings)
    asyncio.run(load_board(board, settings=settings))

    try:
        if settings.console_enabled:
            run_console_loop(board, app_name=settings.app_name)
        else:
            print(format_metrics(board.metrics))
    finally:
        board.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
