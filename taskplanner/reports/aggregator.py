"""
Report aggregation module for the Task Planner.

Turns the tasks scheduled inside a date range into completion and time
statistics plus a per-day breakdown for the analytics view.
"""

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple, Union

from taskplanner.core.config import Config
from taskplanner.core.models import DEFAULT_PRIORITY, PRIORITIES, Task, category_bucket, parse_day
from taskplanner.core.task_store import TaskStore

CATEGORY_BUCKETS = ("blue", "purple", "green", "orange", "other")


@dataclass
class TaskSummary:
    """Slim task view listed under each report day."""
    id: int
    title: str
    description: str
    completed: bool
    time_hours: float
    priority: str
    category: str

    @classmethod
    def from_task(cls, task: Task) -> 'TaskSummary':
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            completed=task.completed,
            time_hours=task.time_hours,
            priority=task.priority,
            category=task.category,
        )


@dataclass
class DayReport:
    """All tasks of one day with their hour and completion totals."""
    date: str
    tasks: List[TaskSummary] = field(default_factory=list)
    total_hours: float = 0.0
    completed_count: int = 0


@dataclass
class ReportStats:
    """Headline numbers for a report range."""
    total_tasks: int = 0
    completed_tasks: int = 0
    completion_rate: int = 0
    total_hours: float = 0.0
    by_priority: Dict[str, int] = field(
        default_factory=lambda: {p: 0 for p in PRIORITIES}
    )
    by_category: Dict[str, int] = field(
        default_factory=lambda: {c: 0 for c in CATEGORY_BUCKETS}
    )


@dataclass
class Report:
    """Complete report structure."""
    start_date: str
    end_date: str
    stats: ReportStats
    tasks_by_date: List[DayReport]


def completion_rate(completed: int, total: int) -> int:
    """Percentage of completed tasks, rounded half up; 0 for an empty range."""
    if total <= 0:
        return 0
    return int(math.floor(completed / total * 100 + 0.5))


def summarize(tasks: List[Task], start_date: str, end_date: str) -> Report:
    """
    Build a report from tasks already filtered to the range and ordered.

    Single pass: global counters plus one bucket per distinct date. Day
    buckets keep the order in which their dates first appear, which is date
    order for store results.
    """
    stats = ReportStats()
    days: Dict[str, DayReport] = {}

    for task in tasks:
        stats.total_tasks += 1
        if task.completed:
            stats.completed_tasks += 1
        hours = task.time_hours or 0.0
        stats.total_hours += hours

        priority = task.priority if task.priority in PRIORITIES else DEFAULT_PRIORITY
        stats.by_priority[priority] += 1
        stats.by_category[category_bucket(task.category)] += 1

        key = task.date.isoformat() if task.date else "unscheduled"
        day = days.get(key)
        if day is None:
            day = days[key] = DayReport(date=key)
        day.tasks.append(TaskSummary.from_task(task))
        day.total_hours += hours
        if task.completed:
            day.completed_count += 1

    stats.completion_rate = completion_rate(stats.completed_tasks, stats.total_tasks)

    return Report(
        start_date=start_date,
        end_date=end_date,
        stats=stats,
        tasks_by_date=list(days.values()),
    )


class ReportAggregator:
    """
    Read-side report generator.

    Holds no state of its own; every call re-reads the store.
    """

    def __init__(self, store: TaskStore, config: Optional[Config] = None):
        """
        Initialize aggregator.

        Args:
            store: Task store to read from
            config: Configuration (creates default if not provided)
        """
        self.store = store
        self.config = config if config else Config()

    def default_range(self, today: Optional[date] = None) -> Tuple[str, str]:
        """The last ``report_default_days`` days, ending today."""
        if today is None:
            today = date.today()
        days = int(self.config.get("report_default_days", 30))
        start = today - timedelta(days=days)
        return start.isoformat(), today.isoformat()

    def generate(
        self,
        start_date: Union[str, date],
        end_date: Union[str, date],
    ) -> Report:
        """
        Generate the report for an inclusive date range.

        Tasks without a date are never part of a range. A reversed range
        simply matches nothing.

        Raises:
            ValidationError: if either date is malformed
        """
        start = parse_day(start_date, "start_date").isoformat()
        end = parse_day(end_date, "end_date").isoformat()
        tasks = self.store.list_range(start, end)
        return summarize(tasks, start, end)
