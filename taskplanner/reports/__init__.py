"""
Reports module for the Task Planner.

Provides range report aggregation, calendar cell classification and
Rich formatting for the CLI.
"""

from .aggregator import (
    ReportAggregator,
    Report,
    ReportStats,
    DayReport,
    TaskSummary,
    completion_rate,
    summarize,
)
from .calendar import (
    DayStatus,
    CalendarCell,
    classify_day,
    is_expired,
    month_grid,
    day_panel,
    today_counts,
)
from .formatter import ReportFormatter

__all__ = [
    # Aggregator
    'ReportAggregator',
    'Report',
    'ReportStats',
    'DayReport',
    'TaskSummary',
    'completion_rate',
    'summarize',
    # Calendar
    'DayStatus',
    'CalendarCell',
    'classify_day',
    'is_expired',
    'month_grid',
    'day_panel',
    'today_counts',
    # Formatter
    'ReportFormatter',
]
