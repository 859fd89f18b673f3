"""
Core module for the Task Planner
Contains database, configuration, error types, models and the task store
"""

from .config import Config
from .database import Database
from .errors import PlannerError, ValidationError, NotFoundError, StorageError
from .models import Task, TaskPatch, UNSET
from .task_store import TaskStore

__all__ = [
    'Config', 'Database', 'Task', 'TaskPatch', 'UNSET', 'TaskStore',
    'PlannerError', 'ValidationError', 'NotFoundError', 'StorageError',
]
