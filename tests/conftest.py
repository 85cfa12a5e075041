"""Pytest fixtures for taskstats"""
from __future__ import annotations

import os
import sqlite3
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

# Keep configuration, logs and the default database out of the user's home.
# Must be set before any taskstats module is imported.
_CONFIG_DIR = Path(tempfile.mkdtemp(prefix="taskstats-tests-"))
os.environ["TASKSTATS_CONFIG"] = str(_CONFIG_DIR / "config.toml")

from taskstats.core.db import DatabaseManager  # noqa: E402
from taskstats.core.stats.manager import StatsManager  # noqa: E402

# Wednesday; its Monday-based week runs 2024-06-10 .. 2024-06-16
NOW = datetime(2024, 6, 12, 10, 0, 0)


@pytest.fixture()
def db(tmp_path: Path) -> DatabaseManager:
    return DatabaseManager(str(tmp_path / "stats.db"))


@pytest.fixture()
def seeded(db: DatabaseManager) -> dict:
    """Two users; user 1 carries the interesting data, user 2 only exists to catch leakage"""
    ids: dict = {}

    ids["cat_work"] = db.insert_category("Work", 1)
    ids["cat_home"] = db.insert_category("Home", 1)
    ids["cat_subtasks_only"] = db.insert_category("Subtasks only", 1)

    ids["alpha"] = db.insert_project("Alpha", 1, "active")
    ids["beta"] = db.insert_project("Beta", 1, "completed")
    ids["gamma"] = db.insert_project("Gamma", 1, "planning")
    ids["delta"] = db.insert_project("Delta", 1, "on-hold")

    ids["report"] = db.insert_task(
        1, "Write report", status="completed", urgency=True, importance=True,
        due_date="2024-06-05",
        created_at=datetime(2024, 6, 1, 9, 0), updated_at=datetime(2024, 6, 3, 17, 0),
        category_id=ids["cat_work"], project_id=ids["alpha"],
    )
    ids["bug"] = db.insert_task(
        1, "Fix bug", status="in-progress", urgency=True, importance=False,
        due_date="2024-06-11",
        created_at=datetime(2024, 6, 10, 8, 0),
        category_id=ids["cat_work"], project_id=ids["alpha"],
    )
    ids["trip"] = db.insert_task(
        1, "Plan trip", status="pending", urgency=False, importance=True,
        due_date="2024-06-12",
        created_at=datetime(2024, 6, 12, 7, 0),
        category_id=ids["cat_home"],
    )
    ids["bills"] = db.insert_task(
        1, "Pay bills", status="blocked",
        due_date="2024-06-14",
        created_at=datetime(2024, 5, 20, 12, 0),
        category_id=ids["cat_home"], project_id=ids["beta"],
    )
    # Unknown status is read back as pending
    ids["legacy"] = db.insert_task(
        1, "Legacy item", status="archived",
        created_at=datetime(2024, 1, 15, 8, 0),
        project_id=ids["gamma"],
    )

    ids["report_sub"] = db.insert_task(
        1, "Collect numbers", status="completed", urgency=True, importance=True,
        created_at=datetime(2024, 6, 2, 10, 0), updated_at=datetime(2024, 6, 4, 10, 0),
        category_id=ids["cat_work"], project_id=ids["alpha"], parent_task_id=ids["report"],
    )
    ids["bug_sub"] = db.insert_task(
        1, "Write regression test", status="pending", due_date="2024-06-01",
        created_at=datetime(2024, 6, 10, 9, 0),
        category_id=ids["cat_subtasks_only"], parent_task_id=ids["bug"],
    )

    ids["other_cat"] = db.insert_category("Other", 2)
    ids["other_project"] = db.insert_project("Foreign", 2, "completed")
    ids["other_task"] = db.insert_task(
        2, "Someone else's task", status="completed", urgency=True, importance=True,
        due_date="2024-06-01",
        created_at=datetime(2024, 6, 12, 8, 0), updated_at=datetime(2024, 6, 12, 9, 0),
        category_id=ids["other_cat"], project_id=ids["other_project"],
    )
    return ids


@pytest.fixture()
def manager(db: DatabaseManager) -> StatsManager:
    return StatsManager(db, clock=lambda: NOW)


class FailingStore:
    """Record store whose every read fails like a broken database"""

    def _fail(self, *args, **kwargs):
        raise sqlite3.OperationalError("database is locked")

    get_tasks = _fail
    get_tasks_touching_year = _fail
    get_projects = _fail
    get_projects_with_tasks = _fail
    get_categories_with_tasks = _fail


@pytest.fixture()
def failing_manager() -> StatsManager:
    return StatsManager(FailingStore(), clock=lambda: NOW)
