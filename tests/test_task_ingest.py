# tests/test_task_ingest.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from taskpulse.tasks.task_ingest import normalize_tasks, parse_timestamp
from taskpulse.tasks.task_models import Priority, TaskStatus

from .fakes import SequentialIds

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("raw", [-5, 0, float("nan"), float("inf"), None, "3", True])
def test_bad_time_taken_is_coerced_to_one(raw) -> None:
    (task,) = normalize_tasks([{"id": "x", "timeTaken": raw}], now=NOW)
    assert task.time_taken == 1.0


def test_valid_time_taken_is_kept() -> None:
    (task,) = normalize_tasks([{"id": "x", "timeTaken": 2.5}], now=NOW)
    assert task.time_taken == 2.5


@pytest.mark.parametrize("raw", [float("nan"), float("-inf"), "100", None])
def test_non_finite_revenue_becomes_zero(raw) -> None:
    (task,) = normalize_tasks([{"id": "x", "revenue": raw}], now=NOW)
    assert task.revenue == 0.0


def test_missing_created_at_is_spaced_by_index() -> None:
    tasks = normalize_tasks([{"id": "a"}, {"id": "b"}, {"id": "c"}], now=NOW)
    assert [t.created_at for t in tasks] == [
        NOW,
        NOW - timedelta(days=1),
        NOW - timedelta(days=2),
    ]


def test_unparseable_created_at_falls_back() -> None:
    tasks = normalize_tasks([{"id": "a"}, {"id": "b", "createdAt": "not-a-date"}], now=NOW)
    assert tasks[1].created_at == NOW - timedelta(days=1)


def test_completed_at_only_for_done_tasks() -> None:
    tasks = normalize_tasks(
        [
            {"id": "a", "status": "Done", "createdAt": "2026-09-01T09:00:00Z"},
            {
                "id": "b",
                "status": "Done",
                "createdAt": "2026-09-01T09:00:00Z",
                "completedAt": "2026-09-02T10:00:00Z",
            },
            {"id": "c", "status": "Todo", "completedAt": "2026-09-02T10:00:00Z"},
        ],
        now=NOW,
    )
    assert tasks[0].completed_at == tasks[0].created_at
    assert tasks[1].completed_at == datetime(2026, 9, 2, 10, 0, tzinfo=timezone.utc)
    assert tasks[2].completed_at is None


def test_missing_and_duplicate_ids_get_fresh_ids() -> None:
    ids = SequentialIds("gen")
    tasks = normalize_tasks([{"title": "no id"}, {"id": "dup"}, {"id": "dup"}], now=NOW, id_factory=ids)
    assert [t.id for t in tasks] == ["gen-1", "dup", "gen-2"]


def test_generated_ids_skip_ids_already_in_payload() -> None:
    tasks = normalize_tasks(
        [{"id": "id-1"}, {"title": "no id"}, {"id": "id-1"}, {"title": "later"}, {"id": "id-3"}],
        now=NOW,
        id_factory=SequentialIds(),
    )
    ids = [t.id for t in tasks]
    assert len(set(ids)) == len(ids) == 5
    assert ids[0] == "id-1"
    assert ids[4] == "id-3"


def test_store_load_keeps_ids_unique(store) -> None:
    store.load([{"id": "id-1"}, {"title": "no id"}])
    assert len({t.id for t in store.tasks}) == 2


def test_non_list_payload_and_non_object_records() -> None:
    assert normalize_tasks({"tasks": []}, now=NOW) == []
    assert normalize_tasks(None, now=NOW) == []

    tasks = normalize_tasks([None, 42, {"id": "ok", "title": "kept"}], now=NOW)
    assert [t.id for t in tasks] == ["ok"]


def test_unknown_enum_values_fall_back() -> None:
    (task,) = normalize_tasks([{"id": "x", "status": "Blocked", "priority": "Urgent"}], now=NOW)
    assert task.status is TaskStatus.TODO
    assert task.priority is Priority.MEDIUM


def test_snake_case_keys_are_accepted() -> None:
    (task,) = normalize_tasks(
        [{"id": "x", "time_taken": 4, "created_at": "2026-01-01T00:00:00+00:00", "notes": "n"}],
        now=NOW,
    )
    assert task.time_taken == 4.0
    assert task.created_at == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert task.notes == "n"


def test_parse_timestamp_naive_is_utc() -> None:
    assert parse_timestamp("2026-05-05T08:00:00") == datetime(2026, 5, 5, 8, 0, tzinfo=timezone.utc)
    assert parse_timestamp("") is None
    assert parse_timestamp(123) is None
