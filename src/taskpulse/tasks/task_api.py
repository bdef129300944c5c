# src/taskpulse/tasks/task_api.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..core.ports import TaskSource
from .task_derive import DEFAULT_TARGET_RATE, derive_all
from .task_metrics import compute_metrics
from .task_models import DerivedTask, Metrics, Task, TaskDraft
from .task_source import DEFAULT_ERROR_MESSAGE, fetch_raw_tasks
from .task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class BoardSnapshot:
    """Everything a rendering layer needs for one render pass."""

    derived_sorted: list[DerivedTask]
    metrics: Metrics
    loading: bool
    error: str | None
    last_deleted: Task | None


class TaskBoard:
    """
    Owned handle over one TaskStore.

    Consumers read derived views and metrics (recomputed on every read) and
    mutate only through the methods below. The initial load is the only async
    step; it runs at most once and its result is dropped if the board was
    closed while it was in flight.

    A new board reports loading=True until its initial load settles, so a
    consumer rendering before the data arrives shows a loading state rather
    than an empty board.
    """

    def __init__(
        self,
        store: TaskStore | None = None,
        *,
        fetcher: TaskSource = fetch_raw_tasks,
        target_rate: float = DEFAULT_TARGET_RATE,
    ) -> None:
        self.store = store if store is not None else TaskStore()
        self.target_rate = target_rate
        self._fetcher = fetcher
        self._loading = True
        self._error: str | None = None
        self._load_started = False
        self._closed = False

    # ---- lifecycle ----

    async def load(self, source: str) -> None:
        if self._load_started:
            logger.info("Initial load already started; ignoring load(%s)", source)
            return
        self._load_started = True
        self._loading = True

        try:
            raw: Any = await self._fetcher(source)
        except Exception as e:
            if self._closed:
                logger.debug("Load failed after close; ignoring: %s", e)
                return
            self._error = getattr(e, "message", None) or DEFAULT_ERROR_MESSAGE
            logger.warning("Initial task load failed source=%s: %s", source, self._error, exc_info=True)
        else:
            if self._closed:
                logger.debug("Load finished after close; discarding result from %s", source)
                return
            self.store.load(raw)
        finally:
            if not self._closed:
                self._loading = False

    def close(self) -> None:
        """Tear down: results of an in-flight load are ignored from now on."""
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    # ---- read views ----

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self.store.tasks

    @property
    def last_deleted(self) -> Task | None:
        return self.store.last_deleted

    @property
    def derived_sorted(self) -> list[DerivedTask]:
        return derive_all(self.store.tasks, target_rate=self.target_rate)

    @property
    def metrics(self) -> Metrics:
        return compute_metrics(self.store.tasks, target_rate=self.target_rate)

    def snapshot(self) -> BoardSnapshot:
        tasks = self.store.tasks
        return BoardSnapshot(
            derived_sorted=derive_all(tasks, target_rate=self.target_rate),
            metrics=compute_metrics(tasks, target_rate=self.target_rate),
            loading=self._loading,
            error=self._error,
            last_deleted=self.store.last_deleted,
        )

    # ---- mutations ----

    def add_task(self, draft: TaskDraft) -> Task:
        return self.store.add(draft)

    def update_task(self, task_id: str, **changes: Any) -> Task | None:
        return self.store.update(task_id, **changes)

    def delete_task(self, task_id: str) -> Task | None:
        return self.store.delete(task_id)

    def undo_delete(self) -> Task | None:
        return self.store.undo_delete()

    def clear_last_deleted(self) -> None:
        self.store.clear_last_deleted()
