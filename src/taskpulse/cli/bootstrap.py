# src/taskpulse/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the store, the data source and the metrics policy into a TaskBoard.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..tasks.task_api import TaskBoard
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_board(*, settings=None) -> TaskBoard:
    """
    Create a TaskBoard from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    board = TaskBoard(TaskStore(), target_rate=settings.target_revenue_per_hour)
    logger.debug("Board created target_rate=%s", board.target_rate)
    return board


async def load_board(board: TaskBoard, *, settings=None) -> TaskBoard:
    """Run the one-time initial load from settings.tasks_source."""
    if settings is None:
        settings = get_settings()
    await board.load(settings.tasks_source)
    if board.error:
        logger.warning("Starting with an empty board: %s", board.error)
    else:
        logger.info("Loaded %d task(s) from %s", len(board.store), settings.tasks_source)
    return board
