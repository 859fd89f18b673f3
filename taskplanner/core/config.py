"""
Configuration management for the Task Planner
Handles loading and saving settings for the store, API server and reports
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

PROJECT_ROOT = Path(__file__).parent.parent.parent


class Config:
    """Configuration manager for the planner"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize configuration manager

        Args:
            config_dir: Path to configuration directory
                (defaults to $PLANNER_CONFIG_DIR, then ./config)
        """
        if config_dir is None:
            env_dir = os.environ.get("PLANNER_CONFIG_DIR")
            config_dir = Path(env_dir) if env_dir else PROJECT_ROOT / "config"

        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.settings_file = self.config_dir / "settings.json"

        defaults = self._default_settings()
        self.settings = {**defaults, **self._load_json(self.settings_file, defaults)}

    def _load_json(self, file_path: Path, default: Dict[str, Any]) -> Dict[str, Any]:
        """Load JSON file or return default if file doesn't exist"""
        if file_path.exists():
            with open(file_path, 'r') as f:
                return json.load(f)
        else:
            # Create file with defaults
            self._save_json(file_path, default)
            return default

    def _save_json(self, file_path: Path, data: Dict[str, Any]) -> None:
        """Save data to JSON file"""
        with open(file_path, 'w') as f:
            json.dump(data, f, indent=2)

    def _default_settings(self) -> Dict[str, Any]:
        """Default system settings"""
        return {
            "database_path": "data/database/planner.db",
            "api_host": "127.0.0.1",
            "api_port": 3001,
            "log_level": "INFO",
            "report_default_days": 30,
            "default_category": "#5B8DEE",
            "cors_origins": [
                "http://localhost:3001",
                "http://127.0.0.1:3001",
                "file://",
            ],
        }

    def get(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Update one setting and write settings.json back out"""
        self.settings[key] = value
        self._save_json(self.settings_file, self.settings)

    def get_database_path(self) -> Path:
        """Get full path to database file ($PLANNER_DB_PATH wins over settings)"""
        env_path = os.environ.get("PLANNER_DB_PATH")
        if env_path:
            return Path(env_path)

        db_path = Path(self.settings["database_path"])
        if db_path.is_absolute():
            return db_path
        return PROJECT_ROOT / db_path


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at process entry (API server, CLI)."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
