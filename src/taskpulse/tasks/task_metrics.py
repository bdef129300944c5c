# src/taskpulse/tasks/task_metrics.py

from __future__ import annotations

"""
Collection-wide metrics.

Every function is pure and recomputes from scratch. Time efficiency compares the
aggregate revenue rate against a target rate and is NOT clamped: beating the
target gives more than 100%.
"""

import math
from collections.abc import Sequence

from .task_derive import DEFAULT_TARGET_RATE, compute_roi, grade_for_roi
from .task_models import INITIAL_METRICS, Metrics, PerformanceGrade, Task


def compute_total_revenue(tasks: Sequence[Task]) -> float:
    return float(sum(t.revenue for t in tasks))


def compute_total_time_taken(tasks: Sequence[Task]) -> float:
    return float(sum(t.time_taken for t in tasks))


def compute_revenue_per_hour(tasks: Sequence[Task]) -> float:
    """Total revenue / total hours. Undefined for an empty collection."""
    total_time = compute_total_time_taken(tasks)
    if total_time <= 0:
        raise ValueError("revenue per hour is undefined for an empty task collection")
    return compute_total_revenue(tasks) / total_time


def compute_time_efficiency(
    tasks: Sequence[Task], *, target_rate: float = DEFAULT_TARGET_RATE
) -> float:
    if not tasks or target_rate <= 0:
        return 0.0
    return compute_revenue_per_hour(tasks) / target_rate * 100.0


def compute_average_roi(tasks: Sequence[Task]) -> float:
    """Unweighted mean of per-task ROI."""
    if not tasks:
        return 0.0
    return sum(compute_roi(t) for t in tasks) / len(tasks)


def compute_performance_grade(avg_roi: float) -> PerformanceGrade:
    if not math.isfinite(avg_roi) or avg_roi <= 0:
        return PerformanceGrade.NEEDS_IMPROVEMENT
    return grade_for_roi(avg_roi)


def compute_completion_rate(tasks: Sequence[Task]) -> float:
    if not tasks:
        return 0.0
    return sum(1 for t in tasks if t.is_done) / len(tasks) * 100.0


def compute_metrics(
    tasks: Sequence[Task], *, target_rate: float = DEFAULT_TARGET_RATE
) -> Metrics:
    if not tasks:
        return INITIAL_METRICS

    avg_roi = compute_average_roi(tasks)
    return Metrics(
        total_revenue=compute_total_revenue(tasks),
        total_time_taken=compute_total_time_taken(tasks),
        time_efficiency_pct=compute_time_efficiency(tasks, target_rate=target_rate),
        revenue_per_hour=compute_revenue_per_hour(tasks),
        average_roi=avg_roi,
        performance_grade=compute_performance_grade(avg_roi),
        task_count=len(tasks),
        completed_count=sum(1 for t in tasks if t.is_done),
        completion_rate_pct=compute_completion_rate(tasks),
    )
