# src/taskpulse/tasks/task_ingest.py

"""
Ingestion boundary: untyped payload in, well-formed Task objects out.

Nothing past normalize_tasks() sees raw dicts. A bad record never aborts the
load; every field falls back to a safe default instead:

- createdAt missing/unparseable -> now minus <index> days (keeps input order)
- timeTaken missing, non-numeric, non-finite or <= 0 -> 1
- revenue non-numeric or non-finite -> 0
- completedAt kept (or set to createdAt) only when status is Done
- missing or duplicate id -> freshly generated id
"""

from __future__ import annotations

import logging
import math
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from .task_models import Priority, Task, TaskStatus

logger = logging.getLogger(__name__)

DEFAULT_TIME_TAKEN = 1.0
CREATED_AT_FALLBACK_STEP = timedelta(days=1)


def new_task_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _is_number(value: Any) -> bool:
    # bool is an int subclass; "true" is not a duration.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def coerce_time_taken(value: Any) -> float:
    if _is_number(value) and math.isfinite(value) and value > 0:
        return float(value)
    return DEFAULT_TIME_TAKEN


def coerce_revenue(value: Any) -> float:
    if _is_number(value) and math.isfinite(value):
        return float(value)
    return 0.0


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 string (or pass through a datetime). Naive values are taken as UTC."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        s = value.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _pick(record: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in record and record[k] is not None:
            return record[k]
    return None


def _raw_id(record: Mapping[str, Any]) -> str:
    raw_id = record.get("id")
    return str(raw_id) if raw_id not in (None, "") else ""


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def normalize_task(
    record: Mapping[str, Any],
    *,
    index: int,
    now: datetime,
    task_id: str,
) -> Task:
    created_at = parse_timestamp(_pick(record, "createdAt", "created_at"))
    if created_at is None:
        created_at = now - index * CREATED_AT_FALLBACK_STEP

    status = TaskStatus.from_raw(record.get("status"))

    completed_at: datetime | None = None
    if status is TaskStatus.DONE:
        completed_at = parse_timestamp(_pick(record, "completedAt", "completed_at")) or created_at

    return Task(
        id=task_id,
        title=str(record.get("title") or ""),
        revenue=coerce_revenue(record.get("revenue")),
        time_taken=coerce_time_taken(_pick(record, "timeTaken", "time_taken")),
        priority=Priority.from_raw(record.get("priority")),
        status=status,
        notes=_opt_str(record.get("notes")),
        created_at=created_at,
        completed_at=completed_at,
    )


def normalize_tasks(
    raw: Any,
    *,
    now: datetime | None = None,
    id_factory: Callable[[], str] = new_task_id,
) -> list[Task]:
    """
    Normalize a raw payload (expected: a list of task-like dicts) into Tasks.

    A non-list payload yields an empty list. Non-mapping entries are skipped.
    """
    if now is None:
        now = utc_now()
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Task payload is not a list (got %s); loading nothing.", type(raw).__name__)
        return []

    # Generated ids must not collide with any id present in the payload,
    # including ids of records further down the list.
    reserved = {_raw_id(r) for r in raw if isinstance(r, Mapping)}
    reserved.discard("")

    out: list[Task] = []
    seen: set[str] = set()
    for idx, record in enumerate(raw):
        if not isinstance(record, Mapping):
            logger.warning("Skipping non-object task record at index=%s", idx)
            continue

        task_id = _raw_id(record)
        if not task_id or task_id in seen:
            if task_id:
                logger.warning("Duplicate task id=%s at index=%s; assigning a fresh id.", task_id, idx)
            task_id = id_factory()
            while task_id in seen or task_id in reserved:
                task_id = id_factory()
        seen.add(task_id)

        out.append(normalize_task(record, index=idx, now=now, task_id=task_id))

    logger.debug("Normalized %d task record(s) out of %d.", len(out), len(raw))
    return out
