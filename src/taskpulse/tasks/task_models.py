# src/taskpulse/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Values are the wire/display labels ("Todo", "In Progress", "Done") so raw
    payloads can be matched directly.
    """

    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"

    @classmethod
    def from_raw(cls, raw: object) -> TaskStatus:
        if not isinstance(raw, str) or not raw.strip():
            return cls.TODO
        try:
            return cls(raw.strip())
        except ValueError:
            return cls.TODO


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_raw(cls, raw: object) -> Priority:
        if not isinstance(raw, str) or not raw.strip():
            return cls.MEDIUM
        try:
            return cls(raw.strip())
        except ValueError:
            return cls.MEDIUM


class PerformanceGrade(StrEnum):
    """Qualitative performance label, ordered worst -> best."""

    NEEDS_IMPROVEMENT = "Needs Improvement"
    FAIR = "Fair"
    GOOD = "Good"
    EXCELLENT = "Excellent"

    @property
    def rank(self) -> int:
        return _GRADE_ORDER.index(self)


_GRADE_ORDER = (
    PerformanceGrade.NEEDS_IMPROVEMENT,
    PerformanceGrade.FAIR,
    PerformanceGrade.GOOD,
    PerformanceGrade.EXCELLENT,
)


class TimeValue(StrEnum):
    LOW = "Low Value"
    MEDIUM = "Medium Value"
    HIGH = "High Value"


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    revenue: float
    time_taken: float
    priority: Priority
    status: TaskStatus
    created_at: datetime

    notes: str | None = None
    completed_at: datetime | None = None

    @property
    def is_done(self) -> bool:
        return self.status is TaskStatus.DONE


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """Caller input for a new task. Timestamps are assigned by the store."""

    title: str
    revenue: float = 0.0
    time_taken: float = 1.0
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    notes: str | None = None
    id: str | None = None


@dataclass(frozen=True, slots=True)
class DerivedTask:
    """A Task plus computed, read-only performance fields."""

    task: Task
    roi: float
    efficiency_pct: float
    time_value: TimeValue
    grade: PerformanceGrade

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def created_at(self) -> datetime:
        return self.task.created_at


@dataclass(frozen=True, slots=True)
class Metrics:
    total_revenue: float
    total_time_taken: float
    time_efficiency_pct: float
    revenue_per_hour: float
    average_roi: float
    performance_grade: PerformanceGrade

    task_count: int = 0
    completed_count: int = 0
    completion_rate_pct: float = 0.0


INITIAL_METRICS = Metrics(
    total_revenue=0.0,
    total_time_taken=0.0,
    time_efficiency_pct=0.0,
    revenue_per_hour=0.0,
    average_roi=0.0,
    performance_grade=PerformanceGrade.NEEDS_IMPROVEMENT,
)
