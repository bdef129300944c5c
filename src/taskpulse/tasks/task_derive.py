# src/taskpulse/tasks/task_derive.py

"""
Per-task derived fields and the display ordering.

ROI is revenue per hour of a single task. Grades and time-value classes are
fixed, monotonic step functions of ROI:

    grade:       Excellent >= 500, Good >= 200, Fair >= 50, else Needs Improvement
    time value:  High >= 200, Medium >= 50, else Low

Display order: grade (best first), ROI (desc), created_at (newest first), id.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from .task_models import DerivedTask, PerformanceGrade, Task, TimeValue

DEFAULT_TARGET_RATE = 100.0

GRADE_THRESHOLDS: tuple[tuple[float, PerformanceGrade], ...] = (
    (500.0, PerformanceGrade.EXCELLENT),
    (200.0, PerformanceGrade.GOOD),
    (50.0, PerformanceGrade.FAIR),
)

TIME_VALUE_THRESHOLDS: tuple[tuple[float, TimeValue], ...] = (
    (200.0, TimeValue.HIGH),
    (50.0, TimeValue.MEDIUM),
)


def grade_for_roi(roi: float) -> PerformanceGrade:
    if not math.isfinite(roi):
        return PerformanceGrade.NEEDS_IMPROVEMENT
    for threshold, grade in GRADE_THRESHOLDS:
        if roi >= threshold:
            return grade
    return PerformanceGrade.NEEDS_IMPROVEMENT


def time_value_for_roi(roi: float) -> TimeValue:
    if not math.isfinite(roi):
        return TimeValue.LOW
    for threshold, value in TIME_VALUE_THRESHOLDS:
        if roi >= threshold:
            return value
    return TimeValue.LOW


def compute_roi(task: Task) -> float:
    # time_taken > 0 is guaranteed by ingestion and the store.
    return task.revenue / task.time_taken


def with_derived(task: Task, *, target_rate: float = DEFAULT_TARGET_RATE) -> DerivedTask:
    roi = compute_roi(task)
    efficiency = roi / target_rate * 100.0 if target_rate > 0 else 0.0
    return DerivedTask(
        task=task,
        roi=roi,
        efficiency_pct=efficiency,
        time_value=time_value_for_roi(roi),
        grade=grade_for_roi(roi),
    )


def _sort_key(d: DerivedTask) -> tuple[int, float, float, str]:
    return (-d.grade.rank, -d.roi, -d.created_at.timestamp(), d.id)


def sort_tasks(derived: Iterable[DerivedTask]) -> list[DerivedTask]:
    """Deterministic total order; sorting an already sorted list is a no-op."""
    return sorted(derived, key=_sort_key)


def derive_all(tasks: Iterable[Task], *, target_rate: float = DEFAULT_TARGET_RATE) -> list[DerivedTask]:
    return sort_tasks(with_derived(t, target_rate=target_rate) for t in tasks)
