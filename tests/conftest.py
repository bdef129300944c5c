# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskpulse.tasks.task_api import TaskBoard
from taskpulse.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeTaskSource, SequentialIds

SAMPLE_RAW = [
    {"id": "a", "title": "A", "revenue": 100, "timeTaken": 2, "status": "Done"},
    {"id": "b", "title": "B", "revenue": 50, "timeTaken": 5, "status": "Todo"},
]


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="taskpulse-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path / "data",
        tasks_source=str(tmp_path / "tasks.json"),
        target_revenue_per_hour=100.0,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture()
def store(clock: FakeClock, ids: SequentialIds) -> TaskStore:
    return TaskStore(clock=clock, id_factory=ids)


@pytest.fixture()
def loaded_store(store: TaskStore) -> TaskStore:
    store.load([dict(r) for r in SAMPLE_RAW])
    return store


@pytest.fixture()
def board(store: TaskStore) -> TaskBoard:
    """Board wired with a fake source returning the two-task sample payload."""
    return TaskBoard(store, fetcher=FakeTaskSource([dict(r) for r in SAMPLE_RAW]))
