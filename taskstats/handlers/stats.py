"""
Stats module command handlers
Expose StatsManager aggregates through the {success, data, timestamp} envelope
"""

from datetime import datetime
from typing import Any, Dict

from taskstats.core.logger import get_logger
from taskstats.core.stats.manager import StatsManager, get_stats_manager
from taskstats.models.requests import (
    DurationRankingRequest,
    TimeSeriesRequest,
    UserStatsRequest,
    YearStatsRequest,
)

from . import api_handler

logger = get_logger(__name__)


def _success(data: Any) -> Dict[str, Any]:
    return {
        "success": True,
        "data": data,
        "timestamp": datetime.now().isoformat(),
    }


def _failure(message: str) -> Dict[str, Any]:
    return {
        "success": False,
        "message": message,
        "timestamp": datetime.now().isoformat(),
    }


@api_handler(
    method="POST",
    path="/stats/overview",
    tags=["stats"],
    summary="Get task statistics",
    description="Get main-task counts, overdue/due-today counts and completion/overdue rates (percentages)",
)
async def get_task_overview(body: UserStatsRequest) -> Dict[str, Any]:
    """Get task statistics

    @param body User and (unused) period
    @returns Task counts and rates
    """
    try:
        stats = get_stats_manager().get_task_stats(body.user_id, body.period)
        return _success(stats.model_dump())

    except Exception as e:
        logger.error(f"Failed to get task statistics: {e}", exc_info=True)
        return _failure(f"Failed to get task statistics: {str(e)}")


@api_handler(
    method="POST",
    path="/stats/quadrant",
    tags=["stats"],
    summary="Get quadrant statistics",
    description="Get the urgency x importance distribution of unfinished main tasks",
)
async def get_quadrant_stats(body: UserStatsRequest) -> Dict[str, Any]:
    """Get quadrant statistics"""
    try:
        stats = get_stats_manager().get_quadrant_stats(body.user_id, body.period)
        return _success(stats.model_dump())

    except Exception as e:
        logger.error(f"Failed to get quadrant statistics: {e}", exc_info=True)
        return _failure(f"Failed to get quadrant statistics: {str(e)}")


@api_handler(
    method="POST",
    path="/stats/time-series",
    tags=["stats"],
    summary="Get task time series",
    description="Get zero-filled daily created/completed counts for the day, week or month containing a date",
)
async def get_time_series(body: TimeSeriesRequest) -> Dict[str, Any]:
    """Get task time series

    @returns One data point per day; an empty list when data is unavailable
    """
    series = get_stats_manager().get_time_series_data(
        body.user_id, body.period, body.target_date
    )
    return _success([point.model_dump() for point in series])


@api_handler(
    method="POST",
    path="/stats/year-heatmap",
    tags=["stats"],
    summary="Get year heatmap",
    description="Get per-day created/completed counts for main tasks and sub-tasks over a whole year",
)
async def get_year_heatmap(body: YearStatsRequest) -> Dict[str, Any]:
    """Get year heatmap"""
    heatmap = get_stats_manager().get_year_heatmap_data(body.user_id, body.year)
    return _success([point.model_dump() for point in heatmap])


@api_handler(
    method="POST",
    path="/stats/categories",
    tags=["stats"],
    summary="Get category statistics",
    description="Get per-category main-task statistics; categories without tasks are omitted",
)
async def get_category_stats(body: UserStatsRequest) -> Dict[str, Any]:
    """Get category statistics"""
    try:
        stats = get_stats_manager().get_category_stats(body.user_id, body.period)
        return _success([item.model_dump() for item in stats])

    except Exception as e:
        logger.error(f"Failed to get category statistics: {e}", exc_info=True)
        return _failure(f"Failed to get category statistics: {str(e)}")


@api_handler(
    method="POST",
    path="/stats/projects",
    tags=["stats"],
    summary="Get project statistics",
    description="Get project counts by status; completionRate is a fraction between 0 and 1",
)
async def get_project_stats(body: UserStatsRequest) -> Dict[str, Any]:
    """Get project statistics"""
    try:
        stats = get_stats_manager().get_project_stats(body.user_id)
        return _success(stats.model_dump())

    except Exception as e:
        logger.error(f"Failed to get project statistics: {e}", exc_info=True)
        return _failure(f"Failed to get project statistics: {str(e)}")


@api_handler(
    method="POST",
    path="/stats/project-tasks",
    tags=["stats"],
    summary="Get project task statistics",
    description="Get per-project main-task statistics, including projects without tasks",
)
async def get_project_task_stats(body: UserStatsRequest) -> Dict[str, Any]:
    """Get project task statistics"""
    try:
        stats = get_stats_manager().get_project_task_stats(body.user_id)
        return _success([item.model_dump() for item in stats])

    except Exception as e:
        logger.error(f"Failed to get project task statistics: {e}", exc_info=True)
        return _failure(f"Failed to get project task statistics: {str(e)}")


@api_handler(
    method="POST",
    path="/stats/duration-ranking",
    tags=["stats"],
    summary="Get task duration ranking",
    description="Get main tasks of a year ranked by elapsed days, longest first",
)
async def get_task_duration_ranking(body: DurationRankingRequest) -> Dict[str, Any]:
    """Get task duration ranking

    @param body User, optional year and optional top-N limit
    @returns Tasks sorted by durationDays descending
    """
    try:
        durations = get_stats_manager().get_task_duration_ranking(body.user_id, body.year)
        ranked = StatsManager.rank_task_durations(durations, body.limit)
        return _success([item.model_dump(mode="json") for item in ranked])

    except Exception as e:
        logger.error(f"Failed to get task duration ranking: {e}", exc_info=True)
        return _failure(f"Failed to get task duration ranking: {str(e)}")
