# src/taskpulse/tasks/task_store.py

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any

from ..core.ports import Clock, IdFactory
from .task_ingest import coerce_revenue, coerce_time_taken, new_task_id, normalize_tasks, utc_now
from .task_models import Priority, Task, TaskDraft, TaskStatus

logger = logging.getLogger(__name__)

# Fields update() may change. id/created_at/completed_at are owned by the store.
PATCHABLE_FIELDS = frozenset({"title", "revenue", "time_taken", "priority", "status", "notes"})


class TaskStore:
    """
    In-memory task store.

    Holds the canonical task sequence (insertion order, not display order) and a
    single-capacity "last deleted" slot used for one level of undo.

    Thread-safety:
    - every mutation runs under one lock covering both the list and the slot,
      so delete + undo_delete never interleave
    """

    def __init__(
        self,
        *,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_task_id,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory
        self._tasks: list[Task] = []
        self._last_deleted: Task | None = None
        self._lock = threading.RLock()

    # ---- read surface ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        with self._lock:
            return tuple(self._tasks)

    @property
    def last_deleted(self) -> Task | None:
        return self._last_deleted

    def get(self, task_id: str) -> Task | None:
        with self._lock:
            idx = self._index_of(task_id)
            return self._tasks[idx] if idx is not None else None

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return isinstance(task_id, str) and self._index_of(task_id) is not None

    # ---- low-level helpers ----

    def _index_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _fresh_id(self) -> str:
        while True:
            task_id = self._id_factory()
            if self._index_of(task_id) is None:
                return task_id

    # ---- mutations ----

    def load(self, raw: Any) -> list[Task]:
        """Replace the whole collection with the normalized payload. The undo slot is kept."""
        tasks = normalize_tasks(raw, now=self._clock(), id_factory=self._id_factory)
        with self._lock:
            self._tasks = list(tasks)
        logger.info("TaskStore loaded total=%s", len(tasks))
        return tasks

    def add(self, draft: TaskDraft) -> Task:
        with self._lock:
            task_id = draft.id
            if not task_id:
                task_id = self._fresh_id()
            elif self._index_of(task_id) is not None:
                new_id = self._fresh_id()
                logger.warning("Task id=%s already exists; assigning id=%s", task_id, new_id)
                task_id = new_id

            now = self._clock()
            status = TaskStatus(draft.status)
            task = Task(
                id=task_id,
                title=draft.title,
                revenue=coerce_revenue(draft.revenue),
                time_taken=coerce_time_taken(draft.time_taken),
                priority=Priority(draft.priority),
                status=status,
                notes=draft.notes,
                created_at=now,
                completed_at=now if status is TaskStatus.DONE else None,
            )
            self._tasks.append(task)

        logger.debug("Task added id=%s status=%s", task.id, task.status.value)
        return task

    def update(self, task_id: str, **changes: Any) -> Task | None:
        """
        Merge `changes` into the task with `task_id`.

        Returns the updated task, or None when no such task exists (not an error).
        completed_at is only ever set here, on a transition into Done.
        """
        unknown = set(changes) - PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"cannot update field(s): {', '.join(sorted(unknown))}")

        fields = dict(changes)
        if "status" in fields:
            fields["status"] = TaskStatus(fields["status"])
        if "priority" in fields:
            fields["priority"] = Priority(fields["priority"])
        if "time_taken" in fields:
            fields["time_taken"] = coerce_time_taken(fields["time_taken"])
        if "revenue" in fields:
            fields["revenue"] = coerce_revenue(fields["revenue"])

        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                logger.debug("update: no task id=%s", task_id)
                return None

            prev = self._tasks[idx]
            if prev.status is not TaskStatus.DONE and fields.get("status") is TaskStatus.DONE:
                fields["completed_at"] = self._clock()

            task = replace(prev, **fields)
            self._tasks[idx] = task

        logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
        return task

    def delete(self, task_id: str) -> Task | None:
        """
        Remove the task with `task_id` and put it into the last-deleted slot.

        The slot is overwritten even when nothing matched (it becomes None).
        """
        with self._lock:
            idx = self._index_of(task_id)
            removed = self._tasks.pop(idx) if idx is not None else None
            self._last_deleted = removed

        if removed is None:
            logger.debug("delete: no task id=%s (undo slot cleared)", task_id)
        else:
            logger.debug("Task deleted id=%s", task_id)
        return removed

    def undo_delete(self) -> Task | None:
        """
        Re-append the last deleted task (at the end) and clear the slot.

        If its id was taken by another task since the deletion, the task comes
        back under a fresh id; compare the returned task's id to detect this.
        """
        with self._lock:
            task = self._last_deleted
            if task is None:
                return None
            self._last_deleted = None
            if self._index_of(task.id) is not None:
                new_id = self._fresh_id()
                logger.warning("undo: id=%s is in use; restoring as id=%s", task.id, new_id)
                task = replace(task, id=new_id)
            self._tasks.append(task)

        logger.debug("Task restored id=%s", task.id)
        return task

    def clear_last_deleted(self) -> None:
        with self._lock:
            self._last_deleted = None
