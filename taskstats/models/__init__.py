"""
Pydantic models shared by the manager and handler layers
"""

from .base import BaseModel
from .requests import (
    DurationRankingRequest,
    TimeSeriesRequest,
    UserStatsRequest,
    YearStatsRequest,
)
from .responses import (
    CategoryStats,
    HeatmapPoint,
    ProjectStats,
    ProjectTaskStats,
    QuadrantStats,
    TaskDuration,
    TaskStats,
    TimeSeriesPoint,
)

__all__ = [
    "BaseModel",
    "UserStatsRequest",
    "TimeSeriesRequest",
    "YearStatsRequest",
    "DurationRankingRequest",
    "TaskStats",
    "QuadrantStats",
    "CategoryStats",
    "ProjectStats",
    "ProjectTaskStats",
    "TimeSeriesPoint",
    "HeatmapPoint",
    "TaskDuration",
]
