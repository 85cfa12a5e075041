"""
Task-date predicates

Classify a task against a reference time. ``now`` may be injected for
deterministic results; it only defaults to the wall clock here, at the
outermost call.
"""

from datetime import datetime
from typing import Dict, Iterable, Optional

from taskstats.core.models import Task
from taskstats.core.stats.dates import (
    MONDAY,
    day_after,
    end_of_day,
    end_of_week,
    in_range,
    start_of_day,
    start_of_week,
)


def _has_open_due_date(task: Task) -> bool:
    return not task.is_completed and task.due_date is not None


def is_overdue(task: Task, now: Optional[datetime] = None) -> bool:
    """A task becomes overdue on the calendar day after its due date, not on the due date itself"""
    if not _has_open_due_date(task):
        return False
    now = now or datetime.now()
    return now >= day_after(task.due_date)


def is_due_today(task: Task, now: Optional[datetime] = None) -> bool:
    if not _has_open_due_date(task):
        return False
    now = now or datetime.now()
    return in_range(task.due_date, start_of_day(now), end_of_day(now))


def is_due_this_week(
    task: Task, now: Optional[datetime] = None, week_starts_on: int = MONDAY
) -> bool:
    if not _has_open_due_date(task):
        return False
    now = now or datetime.now()
    return in_range(
        task.due_date,
        start_of_week(now, week_starts_on),
        end_of_week(now, week_starts_on),
    )


def task_date_summary(
    tasks: Iterable[Task],
    now: Optional[datetime] = None,
    week_starts_on: int = MONDAY,
) -> Dict[str, int]:
    """Count overdue, due-today and due-this-week tasks in one pass"""
    now = now or datetime.now()
    summary = {"overdue": 0, "dueToday": 0, "dueThisWeek": 0, "total": 0}

    for task in tasks:
        summary["total"] += 1
        if is_overdue(task, now):
            summary["overdue"] += 1
        if is_due_today(task, now):
            summary["dueToday"] += 1
        if is_due_this_week(task, now, week_starts_on):
            summary["dueThisWeek"] += 1

    return summary
