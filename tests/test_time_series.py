# tests/test_time_series.py
from __future__ import annotations

from datetime import date, datetime

from taskstats.core.stats.manager import StatsManager


def _by_date(points):
    return {point.date: point for point in points}


# --- Period time series -----------------------------------------------------

def test_week_series_is_zero_filled(manager: StatsManager, seeded):
    series = manager.get_time_series_data(1, "week", datetime(2024, 6, 12))

    assert [point.date for point in series] == [
        "2024-06-10", "2024-06-11", "2024-06-12", "2024-06-13",
        "2024-06-14", "2024-06-15", "2024-06-16",
    ]
    points = _by_date(series)
    # Sub-task created on 2024-06-10 is ignored; user 2's task on 06-12 too
    assert points["2024-06-10"].created == 1
    assert points["2024-06-12"].created == 1
    assert sum(point.created for point in series) == 2
    assert sum(point.completed for point in series) == 0


def test_week_series_anchored_on_sunday(manager: StatsManager, seeded):
    series = manager.get_time_series_data(1, "week", date(2024, 6, 16))
    assert series[0].date == "2024-06-10"
    assert series[-1].date == "2024-06-16"


def test_month_series(manager: StatsManager, seeded):
    series = manager.get_time_series_data(1, "month", "2024-06-20")

    assert len(series) == 30
    assert series[0].date == "2024-06-01"
    assert series[-1].date == "2024-06-30"

    points = _by_date(series)
    assert points["2024-06-01"].created == 1
    assert points["2024-06-03"].completed == 1
    assert sum(point.created for point in series) == 3
    assert sum(point.completed for point in series) == 1


def test_day_series_has_single_point(manager: StatsManager, seeded):
    series = manager.get_time_series_data(1, "day", datetime(2024, 6, 12, 22, 0))
    assert [point.model_dump() for point in series] == [
        {"date": "2024-06-12", "created": 1, "completed": 0}
    ]


def test_unknown_period_falls_back_to_day(manager: StatsManager, seeded):
    series = manager.get_time_series_data(1, "fortnight", datetime(2024, 6, 12))
    assert [point.date for point in series] == ["2024-06-12"]


def test_series_defaults_to_clock(manager: StatsManager, seeded):
    series = manager.get_time_series_data(1)
    assert [point.date for point in series] == ["2024-06-12"]


def test_series_degrades_to_empty_on_store_error(failing_manager: StatsManager):
    assert failing_manager.get_time_series_data(1, "week", datetime(2024, 6, 12)) == []


# --- Year heatmap -----------------------------------------------------------

def test_leap_year_heatmap_is_complete(manager: StatsManager, seeded):
    heatmap = manager.get_year_heatmap_data(1, 2024)

    assert len(heatmap) == 366
    assert heatmap[0].date == "2024-01-01"
    assert heatmap[-1].date == "2024-12-31"
    assert set(heatmap[100].model_dump()) == {
        "date", "created", "completed", "subtaskCreated", "subtaskCompleted",
    }


def test_heatmap_separates_main_and_subtasks(manager: StatsManager, seeded):
    points = _by_date(manager.get_year_heatmap_data(1, 2024))

    assert points["2024-01-15"].created == 1
    assert points["2024-06-01"].created == 1
    assert points["2024-06-03"].completed == 1
    assert points["2024-06-02"].subtask_created == 1
    assert points["2024-06-04"].subtask_completed == 1
    assert points["2024-06-04"].completed == 0

    # Main and sub-task created the same day land in different fields
    assert points["2024-06-10"].created == 1
    assert points["2024-06-10"].subtask_created == 1

    # user 2's task on 06-12 is not counted
    assert points["2024-06-12"].created == 1
    assert points["2024-06-12"].completed == 0

    totals = {
        field: sum(getattr(point, field) for point in points.values())
        for field in ("created", "completed", "subtask_created", "subtask_completed")
    }
    assert totals == {"created": 5, "completed": 1, "subtask_created": 2, "subtask_completed": 1}


def test_heatmap_for_year_without_activity(manager: StatsManager, seeded):
    heatmap = manager.get_year_heatmap_data(1, 2023)
    assert len(heatmap) == 365
    assert all(
        point.created == point.completed == point.subtask_created == point.subtask_completed == 0
        for point in heatmap
    )


def test_heatmap_filters_completion_by_updated_year(manager: StatsManager, db):
    db.insert_task(
        7, "Cross-year", status="completed",
        created_at=datetime(2023, 12, 31, 22, 0), updated_at=datetime(2024, 1, 1, 9, 0),
    )

    points_2023 = _by_date(manager.get_year_heatmap_data(7, 2023))
    points_2024 = _by_date(manager.get_year_heatmap_data(7, 2024))

    assert points_2023["2023-12-31"].created == 1
    assert sum(point.completed for point in points_2023.values()) == 0
    assert points_2024["2024-01-01"].completed == 1
    assert sum(point.created for point in points_2024.values()) == 0


def test_heatmap_invalid_year_falls_back_to_current_year(manager: StatsManager, seeded):
    for year in (None, "abc", -5):
        heatmap = manager.get_year_heatmap_data(1, year)
        assert heatmap[0].date == "2024-01-01"
        assert len(heatmap) == 366


def test_heatmap_degrades_to_empty_on_store_error(failing_manager: StatsManager):
    assert failing_manager.get_year_heatmap_data(1, 2024) == []
