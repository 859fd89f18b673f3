"""
Task Planner
Local task store, completion reports and calendar views for the desktop planner.
"""

__version__ = "1.0.0"
