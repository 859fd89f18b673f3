"""
Unit tests for configuration loading.
"""

import json
import logging
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from taskplanner.core.config import PROJECT_ROOT, Config, configure_logging


class TestConfig:
    """Tests for Config defaults, overrides and persistence."""

    def test_creates_settings_file_with_defaults(self, tmp_path):
        config = Config(tmp_path)

        assert (tmp_path / "settings.json").exists()
        assert config.get("api_port") == 3001
        assert config.get("report_default_days") == 30
        assert config.get("missing", "fallback") == "fallback"

    def test_file_values_override_defaults(self, tmp_path):
        (tmp_path / "settings.json").write_text(json.dumps({"api_port": 4000}))

        config = Config(tmp_path)

        assert config.get("api_port") == 4000
        assert config.get("api_host") == "127.0.0.1"

    def test_set_persists(self, tmp_path):
        Config(tmp_path).set("report_default_days", 7)
        assert Config(tmp_path).get("report_default_days") == 7

    def test_config_dir_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PLANNER_CONFIG_DIR", str(tmp_path / "env"))
        assert Config().config_dir == tmp_path / "env"

    def test_relative_database_path_is_under_project_root(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PLANNER_DB_PATH", raising=False)
        config = Config(tmp_path)
        assert config.get_database_path() == PROJECT_ROOT / "data/database/planner.db"

    def test_absolute_database_path(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PLANNER_DB_PATH", raising=False)
        config = Config(tmp_path)
        config.set("database_path", str(tmp_path / "abs.db"))
        assert config.get_database_path() == tmp_path / "abs.db"

    def test_database_path_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PLANNER_DB_PATH", str(tmp_path / "env.db"))
        assert Config(tmp_path).get_database_path() == tmp_path / "env.db"


def test_configure_logging_accepts_lowercase_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    configure_logging("debug")

    assert calls["level"] == logging.DEBUG
