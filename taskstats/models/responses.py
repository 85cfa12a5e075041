"""
Aggregate view models returned by StatsManager

Rate units differ on purpose: task, category and project-task rates are
percentages (0..100) while ProjectStats.completion_rate is a fraction (0..1).
Clients depend on these units.
"""

from datetime import datetime
from typing import Optional

from .base import BaseModel


class TaskStats(BaseModel):
    """Main-task counts and rates (percentages)"""

    total: int = 0
    completed: int = 0
    in_progress: int = 0
    pending: int = 0
    blocked: int = 0
    overdue: int = 0
    due_today: int = 0
    due_this_week: int = 0
    completion_rate: float = 0.0
    overdue_rate: float = 0.0


class QuadrantStats(BaseModel):
    """Eisenhower distribution of non-completed main tasks"""

    urgent_important: int = 0
    important_not_urgent: int = 0
    urgent_not_important: int = 0
    neither_urgent_nor_important: int = 0


class CategoryStats(BaseModel):
    category_id: int
    category_name: str
    total: int
    completed: int
    pending: int
    in_progress: int
    blocked: int
    completion_rate: float


class ProjectStats(BaseModel):
    """Project counts by status; completion_rate is a fraction (0..1)"""

    total: int = 0
    active: int = 0
    completed: int = 0
    planning: int = 0
    on_hold: int = 0
    cancelled: int = 0
    completion_rate: float = 0.0


class ProjectTaskStats(BaseModel):
    project_id: int
    project_name: str
    project_status: str
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    pending_tasks: int
    blocked_tasks: int
    overdue_tasks: int
    completion_rate: float
    # Same value as completion_rate, kept for the client
    progress: float


class TimeSeriesPoint(BaseModel):
    date: str
    created: int = 0
    completed: int = 0


class HeatmapPoint(BaseModel):
    date: str
    created: int = 0
    completed: int = 0
    subtask_created: int = 0
    subtask_completed: int = 0


class TaskDuration(BaseModel):
    task_id: int
    task_title: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    duration_days: int
    status: str
    project_name: Optional[str] = None
