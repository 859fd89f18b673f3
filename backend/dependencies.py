"""
Dependency injection for FastAPI endpoints.

Provides singleton instances of Config, Database and TaskStore, plus a
ReportAggregator built on top of them, to be used across all API routes.

Pattern: **Dependency Injection** - FastAPI's Depends() mechanism lets
tests swap any of these through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from taskplanner.core.config import Config
from taskplanner.core.database import Database
from taskplanner.core.task_store import TaskStore
from taskplanner.reports.aggregator import ReportAggregator


@lru_cache()
def get_config() -> Config:
    """
    Get cached Config instance.

    lru_cache ensures we only create one Config instance
    for the lifetime of the application (singleton pattern).
    """
    return Config()


@lru_cache()
def get_database() -> Database:
    """Get cached Database instance pointing at the configured file."""
    return Database(get_config().get_database_path())


@lru_cache()
def get_task_store() -> TaskStore:
    """
    Get cached TaskStore.

    Construction runs the schema check once per process.
    """
    config = get_config()
    return TaskStore(get_database(), default_category=config.get("default_category"))


def get_report_aggregator(
    store: TaskStore = Depends(get_task_store),
    config: Config = Depends(get_config),
) -> ReportAggregator:
    """Get ReportAggregator reading from the shared store."""
    return ReportAggregator(store, config)
