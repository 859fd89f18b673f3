"""
Rich formatter module for Task Planner reports.

Renders a Report as terminal panels and tables for the CLI.
"""

from typing import List, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from taskplanner.core.models import Task, category_label
from taskplanner.reports.aggregator import DayReport, Report, ReportStats

PRIORITY_COLORS = {
    "high": "red bold",
    "medium": "yellow",
    "low": "dim",
}

BUCKET_LABELS = {
    "blue": "Work",
    "purple": "Personal",
    "green": "Health",
    "orange": "Learning",
    "other": "Other",
}


class ReportFormatter:
    """
    Rich-based formatter for completion reports and task lists.
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize formatter.

        Args:
            console: Rich Console instance (creates default if not provided)
        """
        self.console = console or Console()

    def _format_priority(self, priority: str) -> str:
        """Format priority as colored badge."""
        color = PRIORITY_COLORS.get(priority, "white")
        return f"[{color}]{priority}[/{color}]"

    def _format_hours(self, hours: float) -> str:
        return f"{hours:.1f}h"

    def format_stats(self, report: Report) -> Panel:
        """Headline numbers panel."""
        stats: ReportStats = report.stats
        content = Text()
        content.append(f"{stats.total_tasks}", style="bold")
        content.append(" tasks  ")
        content.append(f"{stats.completed_tasks}", style="bold green")
        content.append(" done  ")
        content.append(f"{stats.completion_rate}%", style="bold cyan")
        content.append(" complete  ")
        content.append(self._format_hours(stats.total_hours), style="bold")
        content.append(" planned")

        return Panel(
            content,
            title=f"[bold]{report.start_date} → {report.end_date}[/bold]",
            title_align="center",
            border_style="blue",
            padding=(0, 2),
        )

    def format_breakdown(self, report: Report) -> Table:
        """Priority and category counts side by side."""
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan")
        table.add_column("Priority")
        table.add_column("#", justify="right")
        table.add_column("Category")
        table.add_column("#", justify="right")

        priorities = list(report.stats.by_priority.items())
        categories = list(report.stats.by_category.items())
        for i in range(max(len(priorities), len(categories))):
            p_name, p_count = priorities[i] if i < len(priorities) else ("", "")
            c_name, c_count = categories[i] if i < len(categories) else ("", "")
            table.add_row(
                self._format_priority(p_name) if p_name else "",
                str(p_count),
                BUCKET_LABELS.get(c_name, c_name),
                str(c_count),
            )
        return table

    def format_day(self, day: DayReport) -> Table:
        """One day of the report."""
        table = Table(
            title=f"{day.date}  ({day.completed_count}/{len(day.tasks)} done, "
                  f"{self._format_hours(day.total_hours)})",
            title_justify="left",
            box=box.MINIMAL,
            show_header=False,
        )
        table.add_column("", width=2)
        table.add_column("Task", min_width=30)
        table.add_column("Priority", width=8)
        table.add_column("Hours", justify="right", width=6)
        table.add_column("Category", width=10)

        for task in day.tasks:
            table.add_row(
                "[green]✓[/green]" if task.completed else "[dim]○[/dim]",
                f"[dim]{task.title}[/dim]" if task.completed else task.title,
                self._format_priority(task.priority),
                self._format_hours(task.time_hours),
                category_label(task.category),
            )
        return table

    def render_report(self, report: Report, verbose: bool = False) -> None:
        """Print the whole report."""
        parts = [self.format_stats(report), self.format_breakdown(report)]
        if verbose:
            parts.extend(self.format_day(day) for day in report.tasks_by_date)
        self.console.print(Group(*parts))

    def render_tasks(self, tasks: List[Task]) -> None:
        """Print a task list as a table."""
        if not tasks:
            self.console.print("[yellow]No tasks found[/yellow]")
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("#", style="dim", width=4)
        table.add_column("Task", min_width=30)
        table.add_column("Date", width=10)
        table.add_column("Priority", width=8)
        table.add_column("Hours", justify="right", width=6)
        table.add_column("Status", width=10)

        for task in tasks:
            status = "[green]✓ done[/green]" if task.completed else "[white]○ open[/white]"
            if task.is_expired():
                status = "[red bold]⏰ expired[/red bold]"
            table.add_row(
                str(task.id),
                task.title,
                task.date.isoformat() if task.date else "[dim]pool[/dim]",
                self._format_priority(task.priority),
                self._format_hours(task.time_hours),
                status,
            )
        self.console.print(table)
