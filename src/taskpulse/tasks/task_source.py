# src/taskpulse/tasks/task_source.py

"""
Initial data source for the board.

`source` is either an http(s) URL (fetched with httpx) or a path to a local JSON
file. One attempt only: no retries, no backoff, no timeout. Every failure is
raised as TaskLoadError with a message suitable for showing to the user.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Failed to load tasks"


class TaskLoadError(Exception):
    def __init__(self, message: str = DEFAULT_ERROR_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def _fetch_url(url: str, client: httpx.AsyncClient | None) -> Any:
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=None)
    try:
        resp = await client.get(url)
        if resp.is_error:
            raise TaskLoadError(f"{DEFAULT_ERROR_MESSAGE} (HTTP {resp.status_code})")
        return resp.json()
    except httpx.HTTPError as e:
        raise TaskLoadError(f"{DEFAULT_ERROR_MESSAGE}: {e}") from e
    except ValueError as e:
        raise TaskLoadError(f"{DEFAULT_ERROR_MESSAGE}: invalid JSON") from e
    finally:
        if owns_client:
            await client.aclose()


async def _read_file(path: Path) -> Any:
    try:
        raw = await asyncio.to_thread(path.read_text, "utf-8")
    except OSError as e:
        raise TaskLoadError(f"{DEFAULT_ERROR_MESSAGE}: cannot read {path}") from e
    try:
        return json.loads(raw)
    except ValueError as e:
        raise TaskLoadError(f"{DEFAULT_ERROR_MESSAGE}: invalid JSON in {path}") from e


async def fetch_raw_tasks(source: str, *, client: httpx.AsyncClient | None = None) -> Any:
    """Fetch the raw, untyped task payload from `source`."""
    source = (source or "").strip()
    if not source:
        raise TaskLoadError(f"{DEFAULT_ERROR_MESSAGE}: no source configured")

    logger.debug("Fetching tasks from %s", source)
    if _is_url(source):
        return await _fetch_url(source, client)
    return await _read_file(Path(source).expanduser())
