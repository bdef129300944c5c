# src/taskpulse/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..tasks.task_api import TaskBoard

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(board: TaskBoard, *, app_name: str = "taskpulse") -> None:
    logger.info("Console connector started (tasks=%s).", len(board.store))
    _print_ts(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")

    if board.error:
        _print_ts(f"[{app_name}] {board.error}")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            _print_ts("Commands start with '/'. Use /help.")
            continue

        try:
            reply = command_registry.handle(board, user_input, emit=emit)
        except Exception:
            logger.exception("Command failed: %s", user_input)
            _print_ts("Command failed (see log for details).")
            continue

        if reply:
            _print_ts(reply)
