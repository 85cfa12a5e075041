"""
SQLite database wrapper
Provides connection handling, raw query helpers and the bulk reads used by the statistics layer
"""

import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from taskstats.core.logger import get_logger
from taskstats.core.models import Category, Project, Task, TaskStatus
from taskstats.core.sqls import queries, schema

logger = get_logger(__name__)


def _serialize_date(value: Optional[Union[date, datetime, str]]) -> Optional[str]:
    """Store dates as ISO strings so range comparisons stay lexicographic"""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


class DatabaseManager:
    """Database manager"""

    def __init__(self, db_path: Optional[str] = None):
        if db_path is None:
            from taskstats.core.paths import get_db_path

            db_path = str(get_db_path())

        self.db_path = db_path
        self._init_database()

    def _init_database(self):
        """Initialize database"""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._create_tables()
        logger.info(f"Database initialization completed: {self.db_path}")

    def _create_tables(self):
        """Create database tables"""
        with self.get_connection() as conn:
            cursor = conn.cursor()

            for table_sql in schema.ALL_TABLES:
                cursor.execute(table_sql)

            for index_sql in schema.ALL_INDEXES:
                cursor.execute(index_sql)

            conn.commit()
            logger.info("Database table creation completed")

    @contextmanager
    def get_connection(self):
        """Get database connection context manager"""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row  # Enable column name access for results
        try:
            yield conn
        finally:
            conn.close()

    def execute_query(self, query: str, params: Tuple = ()) -> List[Dict[str, Any]]:
        """Execute query and return results"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            rows = cursor.fetchall()
            return [dict(row) for row in rows]

    def execute_insert(self, query: str, params: Tuple = ()) -> int:
        """Execute insert operation and return inserted ID"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            conn.commit()
            return cursor.lastrowid or 0

    # Record creation (used for seeding; regular CRUD lives outside this package)
    def insert_category(self, name: str, user_id: int) -> int:
        """Insert category"""
        return self.execute_insert(queries.INSERT_CATEGORY, (name, user_id))

    def insert_project(self, name: str, user_id: int, status: str = "planning") -> int:
        """Insert project"""
        return self.execute_insert(queries.INSERT_PROJECT, (name, status, user_id))

    def insert_task(
        self,
        user_id: int,
        title: str,
        status: Union[str, TaskStatus] = TaskStatus.PENDING,
        urgency: bool = False,
        importance: bool = False,
        due_date: Optional[Union[date, datetime, str]] = None,
        created_at: Optional[Union[datetime, str]] = None,
        updated_at: Optional[Union[datetime, str]] = None,
        category_id: Optional[int] = None,
        project_id: Optional[int] = None,
        parent_task_id: Optional[int] = None,
    ) -> int:
        """Insert task; updated_at defaults to created_at, which defaults to now"""
        created_at = created_at or datetime.now()
        updated_at = updated_at or created_at
        if isinstance(status, TaskStatus):
            status = status.value

        params = (
            title,
            status,
            1 if urgency else 0,
            1 if importance else 0,
            _serialize_date(due_date),
            _serialize_date(created_at),
            _serialize_date(updated_at),
            category_id,
            project_id,
            parent_task_id,
            user_id,
        )
        return self.execute_insert(queries.INSERT_TASK, params)

    # Bulk reads for the statistics layer
    def get_tasks(
        self, user_id: int, main_only: bool = False, exclude_completed: bool = False
    ) -> List[Task]:
        """Get all tasks of a user in a single query"""
        where_clauses = ["user_id = ?"]
        params: List[Any] = [user_id]

        if main_only:
            where_clauses.append("parent_task_id IS NULL")
        if exclude_completed:
            where_clauses.append("status != ?")
            params.append(TaskStatus.COMPLETED.value)

        query = queries.SELECT_TASKS_BY_USER.format(where=" AND ".join(where_clauses))
        rows = self.execute_query(query, tuple(params))
        return [Task.from_dict(row) for row in rows]

    def get_tasks_touching_year(self, user_id: int, year: int) -> List[Task]:
        """Get main tasks whose created, updated or due date falls within the year"""
        start = date(year, 1, 1).isoformat()
        end = date(year + 1, 1, 1).isoformat()
        params = (user_id, start, end, start, end, start, end)
        rows = self.execute_query(queries.SELECT_MAIN_TASKS_TOUCHING_RANGE, params)
        return [Task.from_dict(row) for row in rows]

    def get_projects(self, user_id: int) -> List[Project]:
        """Get all projects of a user"""
        rows = self.execute_query(queries.SELECT_PROJECTS_BY_USER, (user_id,))
        return [Project.from_dict(row) for row in rows]

    def get_projects_with_tasks(self, user_id: int) -> List[Project]:
        """Get projects with their main tasks eagerly loaded through one join"""
        rows = self.execute_query(queries.SELECT_PROJECTS_WITH_MAIN_TASKS, (user_id,))

        projects: Dict[int, Project] = {}
        for row in rows:
            project = projects.get(row["project_id"])
            if project is None:
                project = Project.from_dict(row, prefix="project_")
                projects[project.id] = project
            if row["task_id"] is not None:
                project.tasks.append(Task.from_dict(row, prefix="task_"))

        return list(projects.values())

    def get_categories_with_tasks(self, user_id: int) -> List[Category]:
        """Get categories with their main tasks eagerly loaded through one join"""
        rows = self.execute_query(queries.SELECT_CATEGORIES_WITH_MAIN_TASKS, (user_id,))

        categories: Dict[int, Category] = {}
        for row in rows:
            category = categories.get(row["category_id"])
            if category is None:
                category = Category.from_dict(row, prefix="category_")
                categories[category.id] = category
            if row["task_id"] is not None:
                category.tasks.append(Task.from_dict(row, prefix="task_"))

        return list(categories.values())


# Global database manager instance
db_manager: Optional[DatabaseManager] = None


def get_db() -> DatabaseManager:
    """Get database manager instance

    Read database path from database.path in config.toml,
    use the default path next to the configuration file if not configured
    """
    global db_manager
    if db_manager is None:
        from taskstats.config.loader import get_config
        from taskstats.core.paths import get_db_path

        config = get_config()
        configured_path = config.get("database.path", "")

        if configured_path and str(configured_path).strip():
            db_path = str(configured_path)
        else:
            db_path = str(get_db_path())

        db_manager = DatabaseManager(db_path)
        logger.info(f"✓ Database manager initialized, path: {db_path}")

    return db_manager
