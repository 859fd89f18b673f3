"""
API routers for the Task Planner backend.

Each router handles a specific domain:
- tasks: Task CRUD and the unscheduled pool
- reports: Completion reports over a date range
- calendar: Month grid, day panel and today's counters
"""

from .tasks import router as tasks_router
from .reports import router as reports_router
from .calendar import router as calendar_router

__all__ = [
    'tasks_router',
    'reports_router',
    'calendar_router',
]
