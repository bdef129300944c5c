# tests/test_task_api.py

from __future__ import annotations

import asyncio

import pytest

from taskpulse.tasks.task_api import TaskBoard
from taskpulse.tasks.task_models import INITIAL_METRICS, PerformanceGrade, TaskDraft, TaskStatus
from taskpulse.tasks.task_source import TaskLoadError
from taskpulse.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeTaskSource


def test_new_board_reports_loading(board: TaskBoard) -> None:
    snap = board.snapshot()
    assert snap.loading is True
    assert snap.error is None
    assert snap.derived_sorted == []


@pytest.mark.asyncio
async def test_load_populates_board(board: TaskBoard) -> None:
    assert board.loading is True
    assert board.metrics == INITIAL_METRICS

    await board.load("tasks.json")

    snap = board.snapshot()
    assert snap.loading is False
    assert snap.error is None
    assert [d.id for d in snap.derived_sorted] == ["a", "b"]
    assert snap.metrics.total_revenue == 150
    assert snap.metrics.average_roi == 30


@pytest.mark.asyncio
async def test_load_failure_surfaces_message(store: TaskStore) -> None:
    board = TaskBoard(store, fetcher=FakeTaskSource(error=TaskLoadError("Failed to load tasks (HTTP 404)")))

    await board.load("tasks.json")

    assert board.error == "Failed to load tasks (HTTP 404)"
    assert board.loading is False
    assert board.tasks == ()


@pytest.mark.asyncio
async def test_unexpected_load_error_uses_default_message(store: TaskStore) -> None:
    board = TaskBoard(store, fetcher=FakeTaskSource(error=RuntimeError("boom")))

    await board.load("tasks.json")

    assert board.error == "Failed to load tasks"
    assert board.tasks == ()


@pytest.mark.asyncio
async def test_load_runs_only_once(store: TaskStore) -> None:
    source = FakeTaskSource([{"id": "x"}])
    board = TaskBoard(store, fetcher=source)

    await board.load("first.json")
    await board.load("second.json")

    assert source.calls == ["first.json"]


@pytest.mark.asyncio
async def test_result_after_close_is_discarded(store: TaskStore) -> None:
    gate = asyncio.Event()
    board = TaskBoard(store, fetcher=FakeTaskSource([{"id": "x"}], gate=gate))

    pending = asyncio.create_task(board.load("tasks.json"))
    await asyncio.sleep(0)
    assert board.loading is True

    board.close()
    gate.set()
    await pending

    assert board.tasks == ()
    assert board.error is None


@pytest.mark.asyncio
async def test_failure_after_close_is_discarded(store: TaskStore) -> None:
    gate = asyncio.Event()
    board = TaskBoard(store, fetcher=FakeTaskSource(error=TaskLoadError(), gate=gate))

    pending = asyncio.create_task(board.load("tasks.json"))
    await asyncio.sleep(0)
    board.close()
    gate.set()
    await pending

    assert board.error is None


@pytest.mark.asyncio
async def test_mutations_flow_into_views(board: TaskBoard, clock: FakeClock) -> None:
    await board.load("tasks.json")

    done_at = clock.advance(minutes=5)
    task = board.update_task("b", status=TaskStatus.DONE)
    assert task is not None and task.completed_at == done_at
    assert board.metrics.completed_count == 2

    added = board.add_task(TaskDraft(title="big win", revenue=1000, time_taken=1))
    assert board.derived_sorted[0].id == added.id
    assert board.derived_sorted[0].grade is PerformanceGrade.EXCELLENT

    board.delete_task("a")
    assert board.snapshot().last_deleted is not None
    assert {t.id for t in board.tasks} == {"b", added.id}

    board.undo_delete()
    assert {t.id for t in board.tasks} == {"a", "b", added.id}
    assert board.last_deleted is None

    board.delete_task("missing-id")
    assert board.last_deleted is None
    assert board.undo_delete() is None


@pytest.mark.asyncio
async def test_clear_last_deleted(board: TaskBoard) -> None:
    await board.load("tasks.json")
    board.delete_task("a")
    board.clear_last_deleted()
    assert board.undo_delete() is None
    assert len(board.tasks) == 1
