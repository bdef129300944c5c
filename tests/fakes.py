# tests/fakes.py

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any


class FakeClock:
    """
    Deterministic clock for unit tests.

    Returns the same instant until advanced.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class SequentialIds:
    """Id factory yielding id-1, id-2, ..."""

    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self.n = 0

    def __call__(self) -> str:
        self.n += 1
        return f"{self.prefix}-{self.n}"


class FakeTaskSource:
    """
    Fake loader port.

    - Captures requested sources for assertions
    - Returns `payload` or raises `error`
    - Optionally waits on `gate` so tests can act while a load is in flight
    """

    def __init__(
        self,
        payload: Any = None,
        *,
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.payload = payload
        self.error = error
        self.gate = gate
        self.calls: list[str] = []

    async def __call__(self, source: str) -> Any:
        self.calls.append(source)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.payload
