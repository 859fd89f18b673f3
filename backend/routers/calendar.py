"""
Calendar API endpoints.

Month grid, day panel (with its complete-all action) and today's counters,
computed server-side from the task store so every view classifies days the
same way.
"""

from datetime import timedelta

from fastapi import APIRouter, Depends, Path

from backend.dependencies import get_task_store
from backend.schemas import (
    CalendarCellSchema,
    CategoryGroupSchema,
    DayCompleteResponse,
    DayResponse,
    ErrorResponse,
    MonthResponse,
    TaskPreviewSchema,
    TodayResponse,
)
from taskplanner.core.models import parse_day
from taskplanner.core.task_store import TaskStore
from taskplanner.reports.calendar import (
    GRID_DAYS,
    classify_day,
    day_panel,
    grid_start,
    month_grid,
    today_counts,
)

router = APIRouter(
    prefix="/calendar",
    tags=["calendar"],
    responses={400: {"model": ErrorResponse, "description": "Malformed date"}},
)


@router.get("/today", response_model=TodayResponse)
async def get_today(store: TaskStore = Depends(get_task_store)):
    """Open and completed task counts for today."""
    counts = today_counts(store.list_all())
    return TodayResponse(date=counts.date.isoformat(), open=counts.open, done=counts.done)


@router.get("/day/{day}", response_model=DayResponse)
async def get_day(day: str, store: TaskStore = Depends(get_task_store)):
    """A single day's tasks grouped by category, with the day's status."""
    target = parse_day(day)
    tasks = store.list_range(target, target)
    groups = day_panel(target, tasks)
    return DayResponse(
        date=target.isoformat(),
        status=classify_day(target, tasks).value,
        groups=[
            CategoryGroupSchema(
                color=g.color,
                label=g.label,
                tasks=[t.to_dict() for t in g.tasks],
            )
            for g in groups
        ],
    )


@router.post("/day/{day}/complete", response_model=DayCompleteResponse)
async def complete_day(day: str, store: TaskStore = Depends(get_task_store)):
    """Mark every open task on a day as completed."""
    target = parse_day(day)
    return DayCompleteResponse(date=target.isoformat(), completed=store.complete_day(target))


@router.get("/{year}/{month}", response_model=MonthResponse)
async def get_month(
    year: int = Path(..., ge=1900, le=9998),
    month: int = Path(..., ge=1, le=12),
    store: TaskStore = Depends(get_task_store),
):
    """Five-week grid for a month with per-day status and task previews."""
    start = grid_start(year, month)
    end = start + timedelta(days=GRID_DAYS - 1)
    cells = month_grid(year, month, store.list_range(start, end))
    return MonthResponse(
        year=year,
        month=month,
        cells=[
            CalendarCellSchema(
                date=c.date.isoformat(),
                in_month=c.in_month,
                is_today=c.is_today,
                status=c.status.value,
                previews=[TaskPreviewSchema(**vars(p)) for p in c.previews],
                more=c.more,
            )
            for c in cells
        ],
    )
