"""
Unit tests for the models module.
Covers category resolution, field validation, Task parsing and TaskPatch.
"""

import pytest
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from taskplanner.core.errors import ValidationError
from taskplanner.core.models import (
    UNSET,
    Task,
    TaskPatch,
    category_bucket,
    category_label,
    normalize_fields,
    parse_day,
    parse_timestamp,
    resolve_category_color,
    stored_category,
)


class TestCategories:
    """Tests for category colour resolution and bucketing."""

    @pytest.mark.parametrize("name,color", [
        ("blue", "#5B8DEE"),
        ("purple", "#9B84EE"),
        ("green", "#52D0A4"),
        ("orange", "#FFB454"),
    ])
    def test_legacy_names_resolve_to_hex(self, name, color):
        assert resolve_category_color(name) == color

    def test_hex_passes_through(self):
        assert resolve_category_color("#FF6B6B") == "#FF6B6B"

    def test_unknown_falls_back_to_default(self):
        assert resolve_category_color("teal") == "#5B8DEE"
        assert resolve_category_color(None) == "#5B8DEE"

    def test_bucket_maps_hex_back_to_legacy_name(self):
        assert category_bucket("#9B84EE") == "purple"
        assert category_bucket("#52d0a4") == "green"
        assert category_bucket("orange") == "orange"

    def test_bucket_for_unmapped_hex_is_other(self):
        assert category_bucket("#FF6B6B") == "other"
        assert category_bucket("#123456") == "other"

    def test_labels(self):
        assert category_label("#5B8DEE") == "Work"
        assert category_label("purple") == "Personal"
        assert category_label("#FF6B6B") == "Urgent"
        assert category_label("#123456") == "Task"

    def test_stored_category_keeps_unknown_names(self):
        assert stored_category("green") == "#52D0A4"
        assert stored_category("#FF6B6B") == "#FF6B6B"
        assert stored_category("red") == "red"
        assert stored_category(None) == "#5B8DEE"
        assert stored_category("") == "#5B8DEE"

    def test_unknown_name_is_other_and_unlabelled(self):
        assert category_bucket("red") == "other"
        assert category_label("red") == "Task"


class TestParsing:
    """Tests for date and timestamp parsing."""

    def test_parse_day(self):
        assert parse_day("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2024-2-1", "01/02/2024", "2023-02-29", "", None, 20240101])
    def test_parse_day_rejects_bad_values(self, value):
        with pytest.raises(ValidationError):
            parse_day(value)

    def test_parse_timestamp_keeps_offset(self):
        dt = parse_timestamp("2024-01-05T17:30:00Z")
        assert dt == datetime(2024, 1, 5, 17, 30, tzinfo=timezone.utc)

    def test_parse_timestamp_naive_becomes_aware(self):
        dt = parse_timestamp("2024-01-05T17:30:00")
        assert dt.tzinfo is not None

    def test_parse_timestamp_rejects_garbage(self):
        with pytest.raises(ValidationError):
            parse_timestamp("next tuesday")


class TestNormalizeFields:
    """Tests for field validation shared by create and update."""

    def test_only_supplied_fields_are_returned(self):
        assert normalize_fields({"priority": "high"}) == {"priority": "high"}

    @pytest.mark.parametrize("title", ["", "   ", None, 5])
    def test_empty_title_rejected(self, title):
        with pytest.raises(ValidationError):
            normalize_fields({"title": title})

    def test_negative_hours_rejected(self):
        with pytest.raises(ValidationError):
            normalize_fields({"time_hours": -1})

    @pytest.mark.parametrize("hours", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_hours_rejected(self, hours):
        with pytest.raises(ValidationError):
            normalize_fields({"time_hours": hours})

    def test_hours_become_float(self):
        assert normalize_fields({"time_hours": 2}) == {"time_hours": 2.0}

    def test_priority_outside_enum_rejected(self):
        with pytest.raises(ValidationError):
            normalize_fields({"priority": "urgent"})

    def test_legacy_category_stored_as_hex(self):
        assert normalize_fields({"category": "green"}) == {"category": "#52D0A4"}

    def test_hex_category_uppercased(self):
        assert normalize_fields({"category": "#ff6b6b"}) == {"category": "#FF6B6B"}

    def test_bad_category_rejected(self):
        with pytest.raises(ValidationError):
            normalize_fields({"category": "red"})

    def test_null_date_clears(self):
        assert normalize_fields({"date": None}) == {"date": None}

    def test_completed_stored_as_int(self):
        assert normalize_fields({"completed": True}) == {"completed": 1}
        assert normalize_fields({"completed": False}) == {"completed": 0}

    def test_position_must_be_int(self):
        with pytest.raises(ValidationError):
            normalize_fields({"position": "3"})


class TestTask:
    """Tests for the Task dataclass."""

    def test_from_dict_parses_row(self):
        task = Task.from_dict({
            "id": 7,
            "title": "Write report",
            "description": None,
            "date": "2024-01-05",
            "completed": 1,
            "time_hours": None,
            "priority": "high",
            "category": "blue",
            "position": 2,
            "deadline": "2024-01-05T17:00:00+00:00",
            "created_at": "2024-01-01 09:00:00",
            "completed_at": None,
        })
        assert task.id == 7
        assert task.description == ""
        assert task.date == date(2024, 1, 5)
        assert task.completed is True
        assert task.time_hours == 0.0
        assert task.category == "#5B8DEE"
        assert task.created_at == datetime(2024, 1, 1, 9, tzinfo=timezone.utc)

    def test_to_dict_round_trips_iso_strings(self):
        task = Task(id=1, title="x", date=date(2024, 1, 2))
        data = task.to_dict()
        assert data["date"] == "2024-01-02"
        assert data["deadline"] is None
        assert data["completed"] is False

    def test_is_expired(self):
        now = datetime(2024, 1, 10, 12, tzinfo=timezone.utc)
        past = now - timedelta(hours=1)
        future = now + timedelta(hours=1)

        assert Task(title="a", deadline=past).is_expired(now) is True
        assert Task(title="b", deadline=past, completed=True).is_expired(now) is False
        assert Task(title="c", deadline=future).is_expired(now) is False
        assert Task(title="d").is_expired(now) is False

    def test_is_scheduled(self):
        assert Task(title="a").is_scheduled() is False
        assert Task(title="a", date=date(2024, 1, 1)).is_scheduled() is True


class TestTaskPatch:
    """Tests for presence-based partial updates."""

    def test_default_patch_is_empty(self):
        patch = TaskPatch()
        assert patch.is_empty()
        assert patch.title is UNSET

    def test_explicit_none_is_a_change(self):
        patch = TaskPatch(date=None)
        assert patch.changes() == {"date": None}

    def test_from_dict_ignores_unknown_and_readonly_keys(self):
        patch = TaskPatch.from_dict({"title": "New", "id": 9, "created_at": "x"})
        assert patch.changes() == {"title": "New"}

    def test_unset_is_falsy_singleton(self):
        assert not UNSET
        assert repr(UNSET) == "UNSET"
