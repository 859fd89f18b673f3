"""
Database utilities and connection management for the local SQLite store

Usage:
    db = Database(config.get_database_path())
    rows = db.execute("SELECT * FROM tasks WHERE date = ?", ("2024-01-01",))

Each call opens its own connection and commits before returning, so every
write is durable as soon as the call completes.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List, Dict, Any, Optional, Tuple

from .errors import StorageError

logger = logging.getLogger(__name__)


class Database:
    """SQLite database wrapper used by the task store"""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_connection(self):
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            logger.error("Cannot open database %s: %s", self.db_path, e)
            raise StorageError(f"Cannot open database at {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as e:
            logger.error("Database error on %s: %s", self.db_path, e)
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def execute(self, query: str, params: Tuple = ()) -> List[Dict[str, Any]]:
        """Execute a SELECT query and return results as list of dicts"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            rows = cursor.fetchall()
            return [dict(row) for row in rows]

    def execute_one(self, query: str, params: Tuple = ()) -> Optional[Dict[str, Any]]:
        """Execute a SELECT query and return single result"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            row = cursor.fetchone()
            return dict(row) if row else None

    def execute_write(self, query: str, params: Tuple = ()) -> int:
        """Execute an INSERT, UPDATE, or DELETE query.

        Returns the new row id for inserts, otherwise the affected row count.
        """
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            conn.commit()
            if query.lstrip().upper().startswith("INSERT"):
                return cursor.lastrowid
            return cursor.rowcount

    def table_exists(self, table_name: str) -> bool:
        query = "SELECT name FROM sqlite_master WHERE type='table' AND name=?;"
        result = self.execute_one(query, (table_name,))
        return result is not None

    def column_names(self, table_name: str) -> List[str]:
        rows = self.execute(f"PRAGMA table_info({table_name})")
        return [row['name'] for row in rows]

    def count(self, table_name: str, where_clause: str = "", params: Tuple = ()) -> int:
        query = f"SELECT COUNT(*) as count FROM {table_name}"
        if where_clause:
            query += f" WHERE {where_clause}"
        result = self.execute_one(query, params)
        return result['count'] if result else 0
