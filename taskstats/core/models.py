"""
Data model definitions
Read-only snapshots of the Task, Project and Category records consumed by the statistics layer
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from taskstats.core.stats.dates import to_datetime


class TaskStatus(Enum):
    """Task status enumeration"""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    BLOCKED = "blocked"
    COMPLETED = "completed"

    @classmethod
    def normalize(cls, value: Any) -> "TaskStatus":
        """Map a stored status onto the enum; unknown or missing values become PENDING"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.PENDING


class ProjectStatus(Enum):
    """Project status enumeration"""

    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"
    CANCELLED = "cancelled"


class StatsPeriod(Enum):
    """Aggregation period accepted by the statistics endpoints"""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @classmethod
    def parse(cls, value: Any, default: "StatsPeriod") -> "StatsPeriod":
        """Parse a period, falling back to ``default`` for anything unrecognized"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return default


@dataclass
class Task:
    """Task data model

    ``parent_task_id`` is None for main tasks; sub-tasks are nested exactly one
    level below a main task.
    """

    id: int
    title: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime
    user_id: int
    urgency: bool = False
    importance: bool = False
    due_date: Optional[datetime] = None
    category_id: Optional[int] = None
    project_id: Optional[int] = None
    parent_task_id: Optional[int] = None
    project_name: Optional[str] = None

    @property
    def is_main(self) -> bool:
        return self.parent_task_id is None

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "urgency": self.urgency,
            "importance": self.importance,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "category_id": self.category_id,
            "project_id": self.project_id,
            "parent_task_id": self.parent_task_id,
            "user_id": self.user_id,
            "project_name": self.project_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], prefix: str = "") -> "Task":
        """Create instance from dictionary

        ``prefix`` selects re-labelled columns from joined rows (e.g. "task_").
        """

        def col(name: str, default: Any = None) -> Any:
            return data.get(f"{prefix}{name}", default)

        return cls(
            id=col("id"),
            title=col("title") or "",
            status=TaskStatus.normalize(col("status")),
            created_at=to_datetime(col("created_at")),
            updated_at=to_datetime(col("updated_at")),
            user_id=col("user_id"),
            urgency=bool(col("urgency", False)),
            importance=bool(col("importance", False)),
            due_date=to_datetime(col("due_date")),
            category_id=col("category_id"),
            project_id=col("project_id"),
            parent_task_id=col("parent_task_id"),
            project_name=data.get("project_name") if not prefix else None,
        )


@dataclass
class Project:
    """Project data model, optionally carrying its main tasks"""

    id: int
    name: str
    status: str
    user_id: int
    tasks: List[Task] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], prefix: str = "") -> "Project":
        """Create instance from dictionary"""
        return cls(
            id=data[f"{prefix}id"],
            name=data[f"{prefix}name"],
            status=data.get(f"{prefix}status") or ProjectStatus.PLANNING.value,
            user_id=data[f"{prefix}user_id"],
        )


@dataclass
class Category:
    """Category data model, optionally carrying its main tasks"""

    id: int
    name: str
    user_id: int
    tasks: List[Task] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], prefix: str = "") -> "Category":
        """Create instance from dictionary"""
        return cls(
            id=data[f"{prefix}id"],
            name=data[f"{prefix}name"],
            user_id=data[f"{prefix}user_id"],
        )
