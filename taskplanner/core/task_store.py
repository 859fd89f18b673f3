"""
Task Store for the Task Planner
Durable CRUD over task records with default filling and derived fields.

The store is the single source of truth. Every mutating call commits before
returning, so the next read (report, calendar, list) sees the new state.

Schema management is additive only:
- CREATE TABLE IF NOT EXISTS on startup
- PRAGMA table_info to find columns missing from older databases
- ALTER TABLE ... ADD COLUMN for each missing column
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Union

from .database import Database
from .errors import NotFoundError, ValidationError
from .models import (
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    Task,
    TaskPatch,
    format_timestamp,
    normalize_fields,
    parse_day,
    utc_now,
)

logger = logging.getLogger(__name__)

# Column name -> column definition. Order matters for CREATE TABLE.
TASK_COLUMNS = {
    "id": "INTEGER PRIMARY KEY AUTOINCREMENT",
    "title": "TEXT NOT NULL",
    "description": "TEXT",
    "date": "TEXT",
    "completed": "BOOLEAN DEFAULT 0",
    "time_hours": "REAL DEFAULT 0",
    "priority": "TEXT DEFAULT 'medium'",
    "category": f"TEXT DEFAULT '{DEFAULT_CATEGORY}'",
    "position": "INTEGER DEFAULT 0",
    "deadline": "DATETIME",
    "created_at": "DATETIME",
    "completed_at": "DATETIME",
}

# Unscheduled (NULL date) sorts first in SQLite ascending order
ORDER_BY = "ORDER BY date ASC, position ASC, created_at ASC, id ASC"

STATUS_FILTERS = {"open": 0, "completed": 1}


class TaskStore:
    """
    SQLite-backed task repository.

    Usage:
        store = TaskStore(Database(config.get_database_path()))
        task = store.create({"title": "Write report", "date": "2024-01-05"})
        store.update(task.id, TaskPatch(completed=True))
    """

    def __init__(self, db: Database, default_category: str = DEFAULT_CATEGORY):
        """
        Initialize the store and make sure the schema is current.

        Args:
            db: Database connection wrapper
            default_category: Category colour for tasks created without one
        """
        self.db = db
        self.default_category = default_category
        self.ensure_schema()

    def ensure_schema(self) -> None:
        """Create the tasks table or add any columns an older file lacks."""
        columns = ",\n                ".join(
            f"{name} {definition}" for name, definition in TASK_COLUMNS.items()
        )
        self.db.execute_write(f"""
            CREATE TABLE IF NOT EXISTS tasks (
                {columns}
            )
        """)

        existing = set(self.db.column_names("tasks"))
        for name, definition in TASK_COLUMNS.items():
            if name not in existing:
                logger.info("Adding missing column tasks.%s", name)
                self.db.execute_write(f"ALTER TABLE tasks ADD COLUMN {name} {definition}")

        self.db.execute_write(
            "CREATE INDEX IF NOT EXISTS idx_tasks_date ON tasks(date)"
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_all(self, status: Optional[str] = None) -> List[Task]:
        """
        All tasks, unscheduled first, then by date, position and creation time.

        Args:
            status: "open" or "completed" to filter by completion, None for all

        Raises:
            ValidationError: if status is not one of the filters
        """
        if status is None:
            rows = self.db.execute(f"SELECT * FROM tasks {ORDER_BY}")
        elif status in STATUS_FILTERS:
            rows = self.db.execute(
                f"SELECT * FROM tasks WHERE IFNULL(completed, 0) = ? {ORDER_BY}",
                (STATUS_FILTERS[status],),
            )
        else:
            raise ValidationError(
                f"status must be one of {', '.join(STATUS_FILTERS)}, got {status!r}"
            )
        return [Task.from_dict(row) for row in rows]

    def list_unscheduled(self) -> List[Task]:
        """Open tasks in the pool (no date assigned)."""
        rows = self.db.execute(
            f"SELECT * FROM tasks WHERE date IS NULL AND IFNULL(completed, 0) = 0 {ORDER_BY}"
        )
        return [Task.from_dict(row) for row in rows]

    def list_range(
        self,
        start: Union[str, date],
        end: Union[str, date],
    ) -> List[Task]:
        """
        Tasks scheduled within an inclusive date range.

        Args:
            start: First day (YYYY-MM-DD or date)
            end: Last day (YYYY-MM-DD or date)

        Raises:
            ValidationError: if either bound is not a valid date
        """
        start_day = parse_day(start, "start_date").isoformat()
        end_day = parse_day(end, "end_date").isoformat()
        rows = self.db.execute(
            f"SELECT * FROM tasks WHERE date BETWEEN ? AND ? {ORDER_BY}",
            (start_day, end_day),
        )
        return [Task.from_dict(row) for row in rows]

    def get(self, task_id: int) -> Task:
        """
        Fetch a single task.

        Raises:
            NotFoundError: if no task has this id
        """
        row = self.db.execute_one("SELECT * FROM tasks WHERE id = ?", (task_id,))
        if row is None:
            raise NotFoundError(f"Task {task_id} not found")
        return Task.from_dict(row)

    def count(self) -> int:
        return self.db.count("tasks")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, data: Dict[str, Any]) -> Task:
        """
        Create a task, filling defaults for omitted fields.

        Args:
            data: title (required), description, date, time_hours,
                priority, category, deadline, position

        Returns:
            The stored task including its new id

        Raises:
            ValidationError: if the title is empty/absent or a field is invalid
        """
        if not data.get("title"):
            raise ValidationError("title is required and cannot be empty")

        values = {
            "description": "",
            "date": None,
            "time_hours": 0,
            "priority": DEFAULT_PRIORITY,
            "category": self.default_category,
            "position": 0,
            "deadline": None,
        }
        values.update({k: v for k, v in data.items() if v is not None and k in values})
        values["title"] = data["title"]

        columns = normalize_fields(values)
        columns["completed"] = 0
        columns["created_at"] = format_timestamp(utc_now())

        names = list(columns)
        placeholders = ", ".join("?" for _ in names)
        task_id = self.db.execute_write(
            f"INSERT INTO tasks ({', '.join(names)}) VALUES ({placeholders})",
            tuple(columns[name] for name in names),
        )

        logger.info("Created task %s: %s", task_id, columns["title"])
        return self.get(task_id)

    def update(self, task_id: int, patch: Union[TaskPatch, Dict[str, Any]]) -> Task:
        """
        Apply a partial update.

        Only fields present in the patch change. Setting ``completed`` to
        True stamps ``completed_at`` with the current time (overwriting any
        earlier stamp); setting it to False clears ``completed_at``. All
        fields are validated first and written in one statement.

        Raises:
            NotFoundError: if no task has this id
            ValidationError: if a supplied field is invalid
        """
        if isinstance(patch, dict):
            patch = TaskPatch.from_dict(patch)

        changes = normalize_fields(patch.changes())
        if not changes:
            return self.get(task_id)

        if "completed" in changes:
            changes["completed_at"] = (
                format_timestamp(utc_now()) if changes["completed"] else None
            )

        assignments = ", ".join(f"{name} = ?" for name in changes)
        affected = self.db.execute_write(
            f"UPDATE tasks SET {assignments} WHERE id = ?",
            tuple(changes.values()) + (task_id,),
        )
        if affected == 0:
            raise NotFoundError(f"Task {task_id} not found")

        logger.info("Updated task %s: %s", task_id, ", ".join(changes))
        return self.get(task_id)

    def delete(self, task_id: int) -> None:
        """
        Hard-delete a task.

        Raises:
            NotFoundError: if no task has this id
        """
        affected = self.db.execute_write("DELETE FROM tasks WHERE id = ?", (task_id,))
        if affected == 0:
            raise NotFoundError(f"Task {task_id} not found")
        logger.info("Deleted task %s", task_id)

    def complete(self, task_id: int, completed: bool = True) -> Task:
        """Shortcut for toggling completion."""
        return self.update(task_id, TaskPatch(completed=completed))

    def complete_day(self, day: Union[str, date]) -> int:
        """
        Mark every open task on a day as completed.

        Tasks already completed keep their original ``completed_at``.

        Returns:
            Number of tasks that were completed

        Raises:
            ValidationError: if day is not a valid date
        """
        target = parse_day(day).isoformat()
        affected = self.db.execute_write(
            "UPDATE tasks SET completed = 1, completed_at = ? "
            "WHERE date = ? AND IFNULL(completed, 0) = 0",
            (format_timestamp(utc_now()), target),
        )
        logger.info("Completed %d tasks on %s", affected, target)
        return affected

    def schedule(self, task_id: int, day: Optional[str]) -> Task:
        """Move a task onto a calendar day, or back to the pool with None."""
        return self.update(task_id, TaskPatch(date=day))
