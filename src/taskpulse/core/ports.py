# src/taskpulse/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task core.

The store and the board depend on Protocols instead of concrete implementations,
so the clock, id generation and the initial data source stay swappable in tests.
"""

from datetime import datetime
from typing import Any, Awaitable, Protocol


class Clock(Protocol):
    """Returns the current time as a timezone-aware datetime."""
    def __call__(self) -> datetime: ...


class IdFactory(Protocol):
    """Returns a process-unique task identifier."""
    def __call__(self) -> str: ...


class TaskSource(Protocol):
    """
    Loader side port: fetches the raw (untyped) initial task payload.

    Implementations raise TaskLoadError with a human-readable message on failure.
    """

    def __call__(self, source: str) -> Awaitable[Any]: ...
