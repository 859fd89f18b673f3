"""
Calendar views for the Task Planner.

Derived, read-only helpers behind the month grid: per-day cell status,
the five-week grid itself, the day panel and today's counters.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional

from taskplanner.core.models import Task, category_label, resolve_category_color, utc_now

GRID_DAYS = 35
PREVIEW_LIMIT = 5
PREVIEW_TITLE_LENGTH = 10


class DayStatus(str, Enum):
    """Colour class of a calendar cell"""
    NO_TASKS = "no-tasks"
    FUTURE = "future"
    TODAY = "today"
    ALL_COMPLETED = "all-completed"
    HAS_INCOMPLETE = "has-incomplete"


def _local_now(now: Optional[datetime]) -> datetime:
    if now is None:
        now = utc_now()
    if now.tzinfo is None:
        now = now.astimezone()
    return now.astimezone()


def is_expired(task: Task, now: Optional[datetime] = None) -> bool:
    """True when the task's deadline has passed and it is not completed."""
    return task.is_expired(_local_now(now))


def classify_day(day: date, tasks: Iterable[Task], now: Optional[datetime] = None) -> DayStatus:
    """
    Classify one calendar day.

    An expired deadline on any task wins over everything else. Otherwise
    empty days have no status, later days are future, the current day is
    today, and past days are all-completed or has-incomplete.
    """
    now = _local_now(now)
    tasks = list(tasks)

    if any(task.is_expired(now) for task in tasks):
        return DayStatus.HAS_INCOMPLETE
    if not tasks:
        return DayStatus.NO_TASKS

    today = now.date()
    if day > today:
        return DayStatus.FUTURE
    if day == today:
        return DayStatus.TODAY
    if all(task.completed for task in tasks):
        return DayStatus.ALL_COMPLETED
    return DayStatus.HAS_INCOMPLETE


@dataclass
class TaskPreview:
    id: int
    title: str
    full_title: str
    color: str
    completed: bool


@dataclass
class CalendarCell:
    date: date
    in_month: bool
    is_today: bool
    status: DayStatus
    previews: List[TaskPreview] = field(default_factory=list)
    more: int = 0


@dataclass
class CategoryGroup:
    color: str
    label: str
    tasks: List[Task] = field(default_factory=list)


@dataclass
class TodayCounts:
    date: date
    open: int = 0
    done: int = 0


def group_by_date(tasks: Iterable[Task]) -> Dict[date, List[Task]]:
    """Scheduled tasks keyed by day, keeping store order within a day."""
    grouped: Dict[date, List[Task]] = {}
    for task in tasks:
        if task.date is not None:
            grouped.setdefault(task.date, []).append(task)
    return grouped


def grid_start(year: int, month: int) -> date:
    """The Sunday on or before the first of the month."""
    first = date(year, month, 1)
    # weekday(): Monday=0 .. Sunday=6
    return first - timedelta(days=(first.weekday() + 1) % 7)


def _preview(task: Task) -> TaskPreview:
    title = task.title
    short = title[:PREVIEW_TITLE_LENGTH] + ("..." if len(title) > PREVIEW_TITLE_LENGTH else "")
    return TaskPreview(
        id=task.id,
        title=short,
        full_title=title,
        color=resolve_category_color(task.category),
        completed=task.completed,
    )


def month_grid(
    year: int,
    month: int,
    tasks: Iterable[Task],
    now: Optional[datetime] = None,
) -> List[CalendarCell]:
    """
    Build the five-week month grid.

    Args:
        year: Calendar year
        month: Month number 1-12
        tasks: Tasks to place (unscheduled ones are ignored)
        now: Current time (defaults to now)

    Returns:
        35 cells starting on the Sunday on or before the first of the month
    """
    now = _local_now(now)
    today = now.date()
    by_day = group_by_date(tasks)
    start = grid_start(year, month)

    cells = []
    for offset in range(GRID_DAYS):
        day = start + timedelta(days=offset)
        day_tasks = by_day.get(day, [])
        cells.append(CalendarCell(
            date=day,
            in_month=day.month == month,
            is_today=day == today,
            status=classify_day(day, day_tasks, now),
            previews=[_preview(t) for t in day_tasks[:PREVIEW_LIMIT]],
            more=max(0, len(day_tasks) - PREVIEW_LIMIT),
        ))
    return cells


def day_panel(day: date, tasks: Iterable[Task]) -> List[CategoryGroup]:
    """
    A day's tasks grouped by category, in first-seen order.

    Unrecognised stored categories keep their own group, labelled "Task".
    """
    groups: Dict[str, CategoryGroup] = {}
    for task in tasks:
        if task.date != day:
            continue
        key = task.category
        group = groups.get(key)
        if group is None:
            group = groups[key] = CategoryGroup(
                color=resolve_category_color(key),
                label=category_label(key),
            )
        group.tasks.append(task)
    return list(groups.values())


def today_counts(tasks: Iterable[Task], now: Optional[datetime] = None) -> TodayCounts:
    """Open and completed task counts for the current day."""
    today = _local_now(now).date()
    counts = TodayCounts(date=today)
    for task in tasks:
        if task.date != today:
            continue
        if task.completed:
            counts.done += 1
        else:
            counts.open += 1
    return counts
