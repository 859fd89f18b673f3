#!/usr/bin/env python3
"""
Database initialization script for the Task Planner
Creates (or upgrades) the SQLite task database at the configured path
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from taskplanner.core import Config, Database, TaskStore
from taskplanner.core.config import configure_logging


def init_database(db_path: Path, reset: bool = False, assume_yes: bool = False) -> bool:
    """
    Initialize the database with the tasks schema.

    An existing file is upgraded in place (missing columns are added)
    unless ``reset`` is set, in which case it is deleted first.
    """
    if reset and db_path.exists():
        if not assume_yes:
            response = input(f"Database already exists at {db_path}. Overwrite? (yes/no): ")
            if response.lower() != 'yes':
                print("Aborting database initialization.")
                return False
        db_path.unlink()

    print(f"Preparing database at {db_path}...")
    db = Database(db_path)
    action = "upgraded" if db.table_exists("tasks") else "created"
    store = TaskStore(db)
    print(f"✓ tasks table {action} ({store.count()} tasks)")
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description="Create or upgrade the planner database")
    parser.add_argument("--db", type=Path, help="Database file (defaults to the configured path)")
    parser.add_argument("--reset", action="store_true", help="Delete the existing database first")
    parser.add_argument("--yes", action="store_true", help="Do not ask before deleting")
    args = parser.parse_args()

    configure_logging("INFO")
    db_path = args.db or Config().get_database_path()
    return 0 if init_database(db_path, reset=args.reset, assume_yes=args.yes) else 1


if __name__ == "__main__":
    sys.exit(main())
