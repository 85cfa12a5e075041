"""
Type protocols for record-store operations

The statistics layer depends on these Protocols rather than on the SQLite
implementation, so any store offering the same bulk reads can back it.
"""

from typing import List, Protocol

from taskstats.core.models import Category, Project, Task


class StatsDatabaseProtocol(Protocol):
    """Protocol for the bulk reads used by StatsManager

    Every method is a single query scoped to one user.
    """

    def get_tasks(
        self, user_id: int, main_only: bool = False, exclude_completed: bool = False
    ) -> List[Task]:
        """Get all tasks of a user, optionally main tasks only and/or not completed"""
        ...

    def get_tasks_touching_year(self, user_id: int, year: int) -> List[Task]:
        """Get main tasks created, updated or due within the year, with project names"""
        ...

    def get_projects(self, user_id: int) -> List[Project]:
        """Get all projects of a user"""
        ...

    def get_projects_with_tasks(self, user_id: int) -> List[Project]:
        """Get all projects of a user with their main tasks loaded"""
        ...

    def get_categories_with_tasks(self, user_id: int) -> List[Category]:
        """Get all categories of a user with their main tasks loaded"""
        ...
