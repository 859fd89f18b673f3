"""
Data models for the Task Planner
Defines the Task record, the TaskPatch partial-update value and the
field rules shared by the store, the reports and the API.
"""

import math
import re
from dataclasses import dataclass, field, fields
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from dateutil import parser as date_parser

from .errors import ValidationError

PRIORITIES = ("high", "medium", "low")
DEFAULT_PRIORITY = "medium"
DEFAULT_CATEGORY = "#5B8DEE"

# Named categories from before categories became free hex colours
LEGACY_CATEGORY_COLORS = {
    "blue": "#5B8DEE",
    "purple": "#9B84EE",
    "green": "#52D0A4",
    "orange": "#FFB454",
}

CATEGORY_LABELS = {
    "#5B8DEE": "Work",
    "#9B84EE": "Personal",
    "#52D0A4": "Health",
    "#FFB454": "Learning",
    "#FF6B6B": "Urgent",
    "#6E6E7A": "Other",
}

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def resolve_category_color(category: Optional[str]) -> str:
    """
    Resolve a category token to its hex colour.

    Hex values pass through, legacy names map to their colour and anything
    else falls back to the default category colour.
    """
    if category and category.startswith("#"):
        return category
    return LEGACY_CATEGORY_COLORS.get(category or "", DEFAULT_CATEGORY)


def stored_category(category: Optional[str]) -> str:
    """
    Category as read back from a stored row.

    Legacy names become their colour and an empty value becomes the default.
    Any other value is kept as stored so reports count it under "other"
    instead of attributing it to a known category.
    """
    if not category:
        return DEFAULT_CATEGORY
    return LEGACY_CATEGORY_COLORS.get(category, category)


def category_label(category: Optional[str]) -> str:
    """Human-readable name for a category ("Task" when unknown)."""
    if category and not category.startswith("#") and category not in LEGACY_CATEGORY_COLORS:
        return "Task"
    return CATEGORY_LABELS.get(resolve_category_color(category).upper(), "Task")


def category_bucket(category: Optional[str]) -> str:
    """
    Map a category to one of the report buckets.

    Returns the legacy name whose colour matches (blue, purple, green,
    orange), or "other" for any colour outside those four.
    """
    if not category:
        return "blue"
    if category in LEGACY_CATEGORY_COLORS:
        return category
    color = category.upper()
    for name, hex_value in LEGACY_CATEGORY_COLORS.items():
        if hex_value == color:
            return name
    return "other"


def parse_day(value: Any, field_name: str = "date") -> date:
    """Parse a YYYY-MM-DD string, raising ValidationError when malformed."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not DATE_RE.match(value):
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid calendar date: {value!r}")


def parse_timestamp(value: Any, field_name: str = "deadline") -> datetime:
    """
    Parse an ISO-8601 timestamp supplied by a client.

    Naive timestamps are read as local time, matching how the calendar UI
    builds deadlines from the picked day and hour.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        try:
            dt = date_parser.isoparse(value.strip())
        except (ValueError, OverflowError):
            raise ValidationError(f"{field_name} must be an ISO-8601 timestamp, got {value!r}")
    else:
        raise ValidationError(f"{field_name} must be an ISO-8601 timestamp, got {value!r}")
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """Canonical stored form of a timestamp."""
    return dt.isoformat(timespec="microseconds")


def normalize_fields(values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate client-supplied task fields and convert them to column values.

    Only the keys present in ``values`` are checked and returned, so the
    same rules serve both creation and partial updates.

    Raises:
        ValidationError: if any supplied value breaks a field rule
    """
    out: Dict[str, Any] = {}

    if "title" in values:
        title = values["title"]
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("title is required and cannot be empty")
        out["title"] = title

    if "description" in values:
        description = values["description"]
        out["description"] = "" if description is None else str(description)

    if "date" in values:
        day = values["date"]
        out["date"] = None if day in (None, "") else parse_day(day).isoformat()

    if "completed" in values:
        completed = values["completed"]
        if not isinstance(completed, (bool, int)):
            raise ValidationError(f"completed must be a boolean, got {completed!r}")
        out["completed"] = 1 if completed else 0

    if "time_hours" in values:
        hours = values["time_hours"]
        if hours is None:
            hours = 0
        if isinstance(hours, bool) or not isinstance(hours, (int, float)):
            raise ValidationError(f"time_hours must be a number, got {hours!r}")
        if not math.isfinite(hours):
            raise ValidationError(f"time_hours must be a finite number, got {hours!r}")
        if hours < 0:
            raise ValidationError("time_hours cannot be negative")
        out["time_hours"] = float(hours)

    if "priority" in values:
        priority = values["priority"]
        if priority not in PRIORITIES:
            raise ValidationError(
                f"priority must be one of {', '.join(PRIORITIES)}, got {priority!r}"
            )
        out["priority"] = priority

    if "category" in values:
        category = values["category"]
        if category in LEGACY_CATEGORY_COLORS:
            category = LEGACY_CATEGORY_COLORS[category]
        elif not isinstance(category, str) or not HEX_COLOR_RE.match(category):
            raise ValidationError(
                f"category must be a #RRGGBB colour or a legacy name, got {category!r}"
            )
        out["category"] = category.upper()

    if "position" in values:
        position = values["position"]
        if isinstance(position, bool) or not isinstance(position, int):
            raise ValidationError(f"position must be an integer, got {position!r}")
        out["position"] = position

    if "deadline" in values:
        deadline = values["deadline"]
        out["deadline"] = (
            None if deadline in (None, "") else format_timestamp(parse_timestamp(deadline))
        )

    return out


@dataclass
class Task:
    """Task data model"""
    id: Optional[int] = None
    title: str = ""
    description: str = ""
    date: Optional['date'] = None
    completed: bool = False
    time_hours: float = 0.0
    priority: str = DEFAULT_PRIORITY
    category: str = DEFAULT_CATEGORY
    position: int = 0
    deadline: Optional[datetime] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """Create Task from database row dictionary"""
        return cls(
            id=data.get('id'),
            title=data.get('title') or '',
            description=data.get('description') or '',
            date=cls._parse_date(data.get('date')),
            completed=bool(data.get('completed')),
            time_hours=float(data.get('time_hours') or 0),
            priority=data.get('priority') or DEFAULT_PRIORITY,
            category=stored_category(data.get('category')),
            position=int(data.get('position') or 0),
            deadline=cls._parse_datetime(data.get('deadline')),
            created_at=cls._parse_datetime(data.get('created_at')),
            completed_at=cls._parse_datetime(data.get('completed_at')),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape exposed by the API."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat() if self.date else None,
            "completed": self.completed,
            "time_hours": self.time_hours,
            "priority": self.priority,
            "category": self.category,
            "position": self.position,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    def is_scheduled(self) -> bool:
        """Check if task sits on a calendar day rather than in the pool"""
        return self.date is not None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check if the deadline has passed while the task is still open"""
        if self.deadline is None or self.completed:
            return False
        if now is None:
            now = utc_now()
        elif now.tzinfo is None:
            now = now.astimezone()
        return self.deadline < now

    @staticmethod
    def _parse_date(value: Optional[str]):
        """Parse date string from database"""
        if value:
            try:
                return date.fromisoformat(value[:10])
            except (ValueError, TypeError):
                return None
        return None

    @staticmethod
    def _parse_datetime(dt_str: Optional[str]) -> Optional[datetime]:
        """Parse timestamp string from database (naive values are UTC)"""
        if dt_str:
            try:
                dt = datetime.fromisoformat(dt_str)
            except (ValueError, TypeError):
                return None
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt
        return None


class _Unset:
    """Marker for a patch field the caller did not supply."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class TaskPatch:
    """
    Partial update for a task.

    Every field defaults to UNSET. Only fields that were supplied are
    written; an explicit None clears a nullable column (``date`` moves the
    task back to the pool, ``deadline`` removes the deadline).
    """
    title: Any = UNSET
    description: Any = UNSET
    date: Any = UNSET
    completed: Any = UNSET
    time_hours: Any = UNSET
    priority: Any = UNSET
    category: Any = UNSET
    position: Any = UNSET
    deadline: Any = UNSET

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TaskPatch':
        """Build a patch from the keys present in ``data``; other keys are ignored."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    def changes(self) -> Dict[str, Any]:
        """The supplied fields, keyed by column name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.changes()
