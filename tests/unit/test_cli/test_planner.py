"""
Unit tests for the planner CLI.
Runs commands through typer's CliRunner against a temporary store.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from typer.testing import CliRunner

import planner
from taskplanner.core.config import Config
from taskplanner.core.database import Database
from taskplanner.core.task_store import TaskStore

runner = CliRunner()


@pytest.fixture
def store(tmp_path, monkeypatch):
    """Point the CLI at a temporary config dir and database."""
    store = TaskStore(Database(tmp_path / "cli.db"))
    monkeypatch.setattr(planner, "_config", Config(tmp_path / "config"))
    monkeypatch.setattr(planner, "_store", store)
    return store


class TestTaskCommands:
    """Tests for add/list/done/schedule/edit/delete."""

    def test_add_to_pool(self, store):
        result = runner.invoke(planner.app, ["add", "Someday idea"])

        assert result.exit_code == 0
        assert "pool" in result.output
        assert store.list_unscheduled()[0].title == "Someday idea"

    def test_add_scheduled(self, store):
        result = runner.invoke(
            planner.app, ["add", "Write report", "--date", "2024-01-05", "--hours", "2"]
        )

        assert result.exit_code == 0
        task = store.list_all()[0]
        assert task.date.isoformat() == "2024-01-05"
        assert task.time_hours == 2.0

    def test_add_invalid_date_exits_nonzero(self, store):
        result = runner.invoke(planner.app, ["add", "x", "--date", "Jan 5"])

        assert result.exit_code == 1
        assert store.count() == 0

    def test_list(self, store):
        store.create({"title": "visible"})
        result = runner.invoke(planner.app, ["list"])
        assert "visible" in result.output

    def test_list_status(self, store):
        store.create({"title": "still open"})
        finished = store.create({"title": "finished"})
        store.complete(finished.id)

        result = runner.invoke(planner.app, ["list", "--status", "completed"])

        assert result.exit_code == 0
        assert "finished" in result.output
        assert "still open" not in result.output

    def test_list_bad_status(self, store):
        assert runner.invoke(planner.app, ["list", "--status", "someday"]).exit_code == 1

    def test_complete_day(self, store):
        first = store.create({"title": "a", "date": "2024-01-05"})
        second = store.create({"title": "b", "date": "2024-01-05"})

        result = runner.invoke(planner.app, ["complete-day", "2024-01-05"])

        assert result.exit_code == 0
        assert "Completed 2 task(s)" in result.output
        assert store.get(first.id).completed and store.get(second.id).completed

    def test_done_and_undo(self, store):
        task = store.create({"title": "x"})

        assert runner.invoke(planner.app, ["done", str(task.id)]).exit_code == 0
        assert store.get(task.id).completed is True

        assert runner.invoke(planner.app, ["done", str(task.id), "--undo"]).exit_code == 0
        assert store.get(task.id).completed_at is None

    def test_done_missing_task(self, store):
        result = runner.invoke(planner.app, ["done", "99"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_schedule_and_unschedule(self, store):
        task = store.create({"title": "x"})

        runner.invoke(planner.app, ["schedule", str(task.id), "2024-02-01"])
        assert store.get(task.id).date.isoformat() == "2024-02-01"

        runner.invoke(planner.app, ["schedule", str(task.id)])
        assert store.get(task.id).date is None

    def test_edit_changes_only_given_options(self, store):
        task = store.create({"title": "x", "priority": "low", "time_hours": 3})

        result = runner.invoke(planner.app, ["edit", str(task.id), "--priority", "high"])

        assert result.exit_code == 0
        updated = store.get(task.id)
        assert updated.priority == "high"
        assert updated.time_hours == 3.0

    def test_delete(self, store):
        task = store.create({"title": "x"})
        assert runner.invoke(planner.app, ["delete", str(task.id)]).exit_code == 0
        assert runner.invoke(planner.app, ["delete", str(task.id)]).exit_code == 1


class TestReportCommands:
    """Tests for report and today."""

    def test_report_range(self, store):
        store.create({"title": "A", "date": "2024-01-03", "time_hours": 2})
        result = runner.invoke(planner.app, ["report", "2024-01-01", "2024-01-31", "--verbose"])

        assert result.exit_code == 0
        assert "1 tasks" in result.output
        assert "A" in result.output

    def test_report_bad_range(self, store):
        result = runner.invoke(planner.app, ["report", "2024-01-01", "later"])
        assert result.exit_code == 1

    def test_today(self, store):
        result = runner.invoke(planner.app, ["today"])
        assert result.exit_code == 0
        assert "0 open" in result.output
