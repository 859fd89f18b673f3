"""
Pydantic schemas for API request/response validation.

These schemas provide:
- Type safety for API inputs and outputs
- Automatic validation and error messages
- OpenAPI documentation generation

Design note: report payloads keep the camelCase keys the calendar UI
already reads (totalTasks, tasksByDate, ...). Everything else is snake_case.
"""

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

Priority = Literal["high", "medium", "low"]


# =============================================================================
# Base Response Schemas
# =============================================================================

class ErrorResponse(BaseModel):
    """Error body for planner failures."""
    error: str
    detail: str


class SuccessResponse(BaseModel):
    """Acknowledgement for operations without a payload."""
    success: bool = True


class HealthResponse(BaseModel):
    status: str
    database: str
    tasks: Optional[int] = None
    error: Optional[str] = None


# =============================================================================
# Task Schemas
# =============================================================================

class TaskCreate(BaseModel):
    """Request body for creating a task."""
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    date: Optional[str] = None  # YYYY-MM-DD, omitted for the task pool
    time_hours: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    priority: Optional[Priority] = None
    category: Optional[str] = None  # #RRGGBB or legacy name
    deadline: Optional[str] = None  # ISO-8601
    position: Optional[int] = None


class TaskUpdate(BaseModel):
    """
    Request body for updating a task.

    Only the keys present in the JSON body are applied; send null for
    ``date`` to move a task back to the pool or for ``deadline`` to clear it.
    """
    title: Optional[str] = Field(default=None, max_length=500)
    description: Optional[str] = None
    date: Optional[str] = None
    completed: Optional[bool] = None
    time_hours: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    priority: Optional[Priority] = None
    category: Optional[str] = None
    position: Optional[int] = None
    deadline: Optional[str] = None


class TaskResponse(BaseModel):
    """Task data returned from API."""
    id: int
    title: str
    description: str = ""
    date: Optional[str] = None
    completed: bool = False
    time_hours: float = 0.0
    priority: str = "medium"
    category: str
    position: int = 0
    deadline: Optional[str] = None
    created_at: Optional[str] = None
    completed_at: Optional[str] = None


# =============================================================================
# Report Schemas
# =============================================================================

class ReportTask(BaseModel):
    """Task summary listed under a report day."""
    id: int
    title: str
    description: str
    completed: bool
    time_hours: float
    priority: str
    category: str


class ReportDay(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str
    tasks: List[ReportTask]
    total_hours: float = Field(alias="totalHours")
    completed_count: int = Field(alias="completedCount")


class ReportStatsSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_tasks: int = Field(alias="totalTasks")
    completed_tasks: int = Field(alias="completedTasks")
    completion_rate: int = Field(alias="completionRate")
    total_hours: float = Field(alias="totalHours")
    by_priority: Dict[str, int] = Field(alias="byPriority")
    by_category: Dict[str, int] = Field(alias="byCategory")


class ReportResponse(BaseModel):
    """Completion report for a date range."""
    model_config = ConfigDict(populate_by_name=True)

    start_date: str = Field(alias="startDate")
    end_date: str = Field(alias="endDate")
    stats: ReportStatsSchema
    tasks_by_date: List[ReportDay] = Field(alias="tasksByDate")


# =============================================================================
# Calendar Schemas
# =============================================================================

class TaskPreviewSchema(BaseModel):
    id: int
    title: str
    full_title: str
    color: str
    completed: bool


class CalendarCellSchema(BaseModel):
    date: str
    in_month: bool
    is_today: bool
    status: str
    previews: List[TaskPreviewSchema] = []
    more: int = 0


class MonthResponse(BaseModel):
    year: int
    month: int
    cells: List[CalendarCellSchema]


class CategoryGroupSchema(BaseModel):
    color: str
    label: str
    tasks: List[TaskResponse]


class DayResponse(BaseModel):
    date: str
    status: str
    groups: List[CategoryGroupSchema]


class TodayResponse(BaseModel):
    date: str
    open: int
    done: int


class DayCompleteResponse(BaseModel):
    """Result of completing every open task on a day."""
    date: str
    completed: int
