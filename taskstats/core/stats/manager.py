"""
Stats Manager

Handles all task statistics computations, including:
- Main-task counts, rates and quadrant distribution
- Per-category and per-project breakdowns
- Zero-filled daily time series and the yearly activity heatmap
- Task duration spans

Every aggregator issues exactly one bulk read against the record store and
computes the rest in memory. Snapshot aggregators and the duration ranking
re-raise storage errors; the time-series views degrade to an empty list.

Completion time is approximated by ``updated_at`` of completed tasks, so any
later edit of a completed task moves its completion day.
"""

import math
from collections import Counter, defaultdict
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from taskstats.core.logger import get_logger
from taskstats.core.models import ProjectStatus, StatsPeriod, Task, TaskStatus
from taskstats.core.protocols import StatsDatabaseProtocol
from taskstats.core.stats.dates import (
    MONDAY,
    DateLike,
    each_day,
    end_of_day,
    end_of_month,
    end_of_week,
    start_of_day,
    start_of_month,
    start_of_week,
    to_datetime,
    year_bounds,
)
from taskstats.core.stats.task_dates import is_due_this_week, is_due_today, is_overdue
from taskstats.models.responses import (
    CategoryStats,
    HeatmapPoint,
    ProjectStats,
    ProjectTaskStats,
    QuadrantStats,
    TaskDuration,
    TaskStats,
    TimeSeriesPoint,
)

logger = get_logger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def _percentage(part: int, total: int) -> float:
    return (part / total) * 100 if total > 0 else 0.0


class StatsManager:
    """Stats manager

    Responsible for all task statistics queries and calculations. ``clock``
    supplies the reference time whenever a caller does not pass ``now``.
    """

    def __init__(
        self,
        db: Optional[StatsDatabaseProtocol] = None,
        clock: Optional[Callable[[], datetime]] = None,
        week_starts_on: int = MONDAY,
    ):
        if db is None:
            from taskstats.core.db import get_db

            db = get_db()
        self.db: StatsDatabaseProtocol = db
        self._clock = clock or datetime.now
        self.week_starts_on = week_starts_on

    def _resolve_now(self, now: Optional[DateLike] = None) -> datetime:
        if now is None:
            return self._clock()
        return to_datetime(now)

    def _resolve_year(self, year: Any, now: datetime) -> int:
        """Fall back to the current year for missing or malformed values"""
        try:
            resolved = int(year)
        except (TypeError, ValueError):
            return now.year
        if not 1 <= resolved < 9999:
            return now.year
        return resolved

    def _period_range(self, period: StatsPeriod, anchor: datetime) -> Tuple[datetime, datetime]:
        if period is StatsPeriod.WEEK:
            return (
                start_of_week(anchor, self.week_starts_on),
                end_of_week(anchor, self.week_starts_on),
            )
        if period is StatsPeriod.MONTH:
            return start_of_month(anchor), end_of_month(anchor)
        return start_of_day(anchor), end_of_day(anchor)

    # ==================== Snapshot aggregators ====================

    def get_task_stats(
        self,
        user_id: int,
        period: Any = StatsPeriod.MONTH.value,
        now: Optional[DateLike] = None,
    ) -> TaskStats:
        """Get main-task statistics

        Args:
            user_id: Owner of the tasks
            period: Accepted for symmetry with the other endpoints; it does not
                filter the tasks
            now: Reference time for overdue/due classification

        Returns:
            TaskStats: Counts plus completion/overdue rates as percentages

        Raises:
            Exception: Record store errors are re-raised unchanged
        """
        try:
            now = self._resolve_now(now)
            tasks = self.db.get_tasks(user_id, main_only=True)

            total = len(tasks)
            by_status = Counter(task.status for task in tasks)
            overdue = sum(1 for task in tasks if is_overdue(task, now))
            due_today = sum(1 for task in tasks if is_due_today(task, now))
            due_this_week = sum(
                1 for task in tasks if is_due_this_week(task, now, self.week_starts_on)
            )
            completed = by_status[TaskStatus.COMPLETED]

            stats = TaskStats(
                total=total,
                completed=completed,
                in_progress=by_status[TaskStatus.IN_PROGRESS],
                pending=by_status[TaskStatus.PENDING],
                blocked=by_status[TaskStatus.BLOCKED],
                overdue=overdue,
                due_today=due_today,
                due_this_week=due_this_week,
                completion_rate=_percentage(completed, total),
                overdue_rate=_percentage(overdue, total),
            )

            logger.info(
                f"Task statistics retrieval completed: user={user_id}, period={period}, "
                f"{total} main tasks, {overdue} overdue"
            )
            return stats

        except Exception as e:
            logger.error(f"Failed to get task statistics: {e}", exc_info=True)
            raise

    def get_quadrant_stats(
        self, user_id: int, period: Any = StatsPeriod.MONTH.value
    ) -> QuadrantStats:
        """Get the urgency x importance distribution of open main tasks

        Completed tasks are left out at the store; ``period`` does not filter.
        """
        try:
            tasks = self.db.get_tasks(user_id, main_only=True, exclude_completed=True)

            quadrants = Counter((task.urgency, task.importance) for task in tasks)
            stats = QuadrantStats(
                urgent_important=quadrants[(True, True)],
                important_not_urgent=quadrants[(False, True)],
                urgent_not_important=quadrants[(True, False)],
                neither_urgent_nor_important=quadrants[(False, False)],
            )

            logger.info(
                f"Quadrant statistics retrieval completed: user={user_id}, {len(tasks)} open main tasks"
            )
            return stats

        except Exception as e:
            logger.error(f"Failed to get quadrant statistics: {e}", exc_info=True)
            raise

    def get_category_stats(
        self, user_id: int, period: Any = StatsPeriod.MONTH.value
    ) -> List[CategoryStats]:
        """Get per-category main-task statistics

        Categories without main tasks are omitted.
        """
        try:
            categories = self.db.get_categories_with_tasks(user_id)

            results: List[CategoryStats] = []
            for category in categories:
                total = len(category.tasks)
                if total == 0:
                    continue
                by_status = Counter(task.status for task in category.tasks)
                completed = by_status[TaskStatus.COMPLETED]
                results.append(
                    CategoryStats(
                        category_id=category.id,
                        category_name=category.name,
                        total=total,
                        completed=completed,
                        pending=by_status[TaskStatus.PENDING],
                        in_progress=by_status[TaskStatus.IN_PROGRESS],
                        blocked=by_status[TaskStatus.BLOCKED],
                        completion_rate=_percentage(completed, total),
                    )
                )

            logger.info(
                f"Category statistics retrieval completed: user={user_id}, "
                f"{len(results)}/{len(categories)} categories with tasks"
            )
            return results

        except Exception as e:
            logger.error(f"Failed to get category statistics: {e}", exc_info=True)
            raise

    def get_project_stats(self, user_id: int) -> ProjectStats:
        """Get project counts by status

        Unlike the task-level rates, completion_rate here is a fraction (0..1).
        """
        try:
            projects = self.db.get_projects(user_id)

            total = len(projects)
            by_status = Counter(project.status for project in projects)
            completed = by_status[ProjectStatus.COMPLETED.value]

            stats = ProjectStats(
                total=total,
                active=by_status[ProjectStatus.ACTIVE.value],
                completed=completed,
                planning=by_status[ProjectStatus.PLANNING.value],
                on_hold=by_status[ProjectStatus.ON_HOLD.value],
                cancelled=by_status[ProjectStatus.CANCELLED.value],
                completion_rate=completed / total if total > 0 else 0.0,
            )

            logger.info(f"Project statistics retrieval completed: user={user_id}, {total} projects")
            return stats

        except Exception as e:
            logger.error(f"Failed to get project statistics: {e}", exc_info=True)
            raise

    def get_project_task_stats(
        self, user_id: int, now: Optional[DateLike] = None
    ) -> List[ProjectTaskStats]:
        """Get per-project main-task statistics, including projects with no tasks"""
        try:
            now = self._resolve_now(now)
            projects = self.db.get_projects_with_tasks(user_id)

            results: List[ProjectTaskStats] = []
            for project in projects:
                tasks = project.tasks
                total = len(tasks)
                by_status = Counter(task.status for task in tasks)
                completed = by_status[TaskStatus.COMPLETED]
                completion_rate = _percentage(completed, total)

                results.append(
                    ProjectTaskStats(
                        project_id=project.id,
                        project_name=project.name,
                        project_status=project.status,
                        total_tasks=total,
                        completed_tasks=completed,
                        in_progress_tasks=by_status[TaskStatus.IN_PROGRESS],
                        pending_tasks=by_status[TaskStatus.PENDING],
                        blocked_tasks=by_status[TaskStatus.BLOCKED],
                        overdue_tasks=sum(1 for task in tasks if is_overdue(task, now)),
                        completion_rate=completion_rate,
                        progress=completion_rate,
                    )
                )

            logger.info(
                f"Project task statistics retrieval completed: user={user_id}, {len(results)} projects"
            )
            return results

        except Exception as e:
            logger.error(f"Failed to get project task statistics: {e}", exc_info=True)
            raise

    # ==================== Time series ====================

    def get_time_series_data(
        self,
        user_id: int,
        period: Any = StatsPeriod.DAY.value,
        target_date: Optional[DateLike] = None,
    ) -> List[TimeSeriesPoint]:
        """Get daily created/completed counts of main tasks

        Args:
            user_id: Owner of the tasks
            period: 'day', 'week' (Monday-Sunday) or 'month'; anything else means 'day'
            target_date: Any moment inside the requested period, default now

        Returns:
            One zero-filled point per calendar day in the period, or an empty
            list when the record store fails
        """
        try:
            anchor = self._resolve_now(target_date)
            resolved_period = StatsPeriod.parse(period, StatsPeriod.DAY)
            range_start, range_end = self._period_range(resolved_period, anchor)
            first_day, last_day = range_start.date(), range_end.date()

            tasks = self.db.get_tasks(user_id, main_only=True)

            created: Dict[date, int] = defaultdict(int)
            completed: Dict[date, int] = defaultdict(int)
            for task in tasks:
                created_day = task.created_at.date()
                if first_day <= created_day <= last_day:
                    created[created_day] += 1
                if task.is_completed:
                    completed_day = task.updated_at.date()
                    if first_day <= completed_day <= last_day:
                        completed[completed_day] += 1

            series = [
                TimeSeriesPoint(
                    date=day.isoformat(),
                    created=created.get(day, 0),
                    completed=completed.get(day, 0),
                )
                for day in each_day(first_day, last_day)
            ]

            logger.info(
                f"Time series retrieval completed: user={user_id}, "
                f"period={resolved_period.value}, {len(series)} data points"
            )
            return series

        except Exception as e:
            logger.error(f"Failed to get time series data: {e}", exc_info=True)
            return []

    def get_year_heatmap_data(self, user_id: int, year: Any = None) -> List[HeatmapPoint]:
        """Get per-day activity for a whole year

        Main tasks and sub-tasks are counted separately. Tasks are bucketed by
        day in a single pass and the year is enumerated afterwards.

        Returns:
            365 or 366 zero-filled points, or an empty list when the record
            store fails
        """
        try:
            target_year = self._resolve_year(year, self._clock())
            tasks = self.db.get_tasks(user_id)

            buckets: Dict[str, Dict[date, int]] = {
                "created": defaultdict(int),
                "completed": defaultdict(int),
                "subtask_created": defaultdict(int),
                "subtask_completed": defaultdict(int),
            }

            for task in tasks:
                prefix = "" if task.is_main else "subtask_"
                if task.created_at.year == target_year:
                    buckets[f"{prefix}created"][task.created_at.date()] += 1
                if task.is_completed and task.updated_at.year == target_year:
                    buckets[f"{prefix}completed"][task.updated_at.date()] += 1

            first_day, last_day = year_bounds(target_year)
            heatmap = [
                HeatmapPoint(
                    date=day.isoformat(),
                    created=buckets["created"].get(day, 0),
                    completed=buckets["completed"].get(day, 0),
                    subtask_created=buckets["subtask_created"].get(day, 0),
                    subtask_completed=buckets["subtask_completed"].get(day, 0),
                )
                for day in each_day(first_day, last_day)
            ]

            active_days = sum(
                1
                for point in heatmap
                if point.created
                or point.completed
                or point.subtask_created
                or point.subtask_completed
            )
            logger.info(
                f"Year heatmap retrieval completed: user={user_id}, year={target_year}, "
                f"{len(tasks)} tasks, active days {active_days}/{len(heatmap)}"
            )
            return heatmap

        except Exception as e:
            logger.error(f"Failed to get year heatmap data: {e}", exc_info=True)
            return []

    # ==================== Duration ranking ====================

    @staticmethod
    def _resolve_end_date(task: Task, now: datetime) -> Optional[datetime]:
        if task.status is TaskStatus.COMPLETED:
            return task.updated_at
        if task.status in (TaskStatus.IN_PROGRESS, TaskStatus.BLOCKED):
            return now
        return task.due_date

    def get_task_duration_ranking(
        self,
        user_id: int,
        year: Any = None,
        now: Optional[DateLike] = None,
    ) -> List[TaskDuration]:
        """Get elapsed-day spans of main tasks related to a year

        A task is related when its created, updated or due date falls inside
        the year. Tasks without a resolvable end date are dropped. The result
        is unordered; see rank_task_durations() for sorting.

        Raises:
            Exception: Record store errors are re-raised unchanged
        """
        try:
            now = self._resolve_now(now)
            target_year = self._resolve_year(year, now)
            tasks = self.db.get_tasks_touching_year(user_id, target_year)

            durations: List[TaskDuration] = []
            for task in tasks:
                start_date = task.created_at
                end_date = self._resolve_end_date(task, now)

                duration_days = 0
                if start_date and end_date:
                    elapsed = (end_date - start_date).total_seconds()
                    duration_days = max(1, math.ceil(elapsed / SECONDS_PER_DAY))

                if duration_days == 0:
                    continue

                durations.append(
                    TaskDuration(
                        task_id=task.id,
                        task_title=task.title,
                        start_date=start_date,
                        end_date=end_date,
                        duration_days=duration_days,
                        status=task.status.value,
                        project_name=task.project_name,
                    )
                )

            logger.info(
                f"Task duration ranking retrieval completed: user={user_id}, "
                f"year={target_year}, {len(durations)}/{len(tasks)} tasks with duration"
            )
            return durations

        except Exception as e:
            logger.error(f"Failed to get task duration ranking: {e}", exc_info=True)
            raise

    @staticmethod
    def rank_task_durations(
        durations: List[TaskDuration], limit: Optional[int] = None
    ) -> List[TaskDuration]:
        """Sort durations longest first, optionally keeping only the top ``limit``"""
        ranked = sorted(durations, key=lambda item: item.duration_days, reverse=True)
        if limit is not None:
            ranked = ranked[:limit]
        return ranked


def parse_week_starts_on(value: Any) -> int:
    """Read a configured first weekday, falling back to Monday for malformed values"""
    try:
        return int(value) % 7
    except (TypeError, ValueError):
        logger.warning(f"Invalid stats.week_starts_on value {value!r}, using Monday")
        return MONDAY


# Global StatsManager instance
_stats_manager: Optional[StatsManager] = None


def get_stats_manager() -> StatsManager:
    """Get global StatsManager instance

    Returns:
        StatsManager: Global stats manager instance
    """
    global _stats_manager

    if _stats_manager is None:
        from taskstats.config.loader import get_config

        week_starts_on = get_config().get("stats.week_starts_on", MONDAY)
        _stats_manager = StatsManager(week_starts_on=parse_week_starts_on(week_starts_on))

    return _stats_manager
