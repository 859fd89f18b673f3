#!/usr/bin/env python3
"""
Task Planner - Command Line Interface
Serve the local API, manage tasks and print completion reports
"""

from typing import Optional

import typer
from rich.console import Console

from taskplanner.core import Config, Database, PlannerError, TaskPatch, TaskStore
from taskplanner.core.config import configure_logging
from taskplanner.reports import ReportAggregator, ReportFormatter, today_counts

# Initialize CLI app and console
app = typer.Typer(help="Task Planner - calendar tasks, deadlines and reports")
console = Console()

_store: Optional[TaskStore] = None
_config: Optional[Config] = None


def get_config() -> Config:
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_store() -> TaskStore:
    """
    Get or open the TaskStore.

    Opened lazily so `planner --help` never touches the database.
    """
    global _store
    if _store is None:
        config = get_config()
        configure_logging(config.get("log_level", "WARNING"))
        _store = TaskStore(
            Database(config.get_database_path()),
            default_category=config.get("default_category"),
        )
    return _store


def _fail(e: PlannerError) -> None:
    console.print(f"[red]✗[/red] {e.message}")
    raise typer.Exit(1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from config)"),
):
    """Run the HTTP API used by the desktop UI."""
    import uvicorn
    from backend.main import app as api_app

    config = get_config()
    configure_logging(config.get("log_level", "INFO"))
    uvicorn.run(
        api_app,
        host=host or config.get("api_host", "127.0.0.1"),
        port=port or int(config.get("api_port", 3001)),
    )


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    date: Optional[str] = typer.Option(None, "--date", "-d", help="Day (YYYY-MM-DD); omit for the pool"),
    hours: float = typer.Option(0, "--hours", "-h", help="Estimated hours"),
    priority: str = typer.Option("medium", "--priority", "-p", help="high, medium or low"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="#RRGGBB or blue/purple/green/orange"),
    deadline: Optional[str] = typer.Option(None, "--deadline", help="ISO-8601 timestamp"),
):
    """
    Add a new task

    Examples:
      planner add "Write report" --date 2024-01-05 --hours 2
      planner add "Someday idea"
    """
    try:
        task = get_store().create({
            "title": title,
            "date": date,
            "time_hours": hours,
            "priority": priority,
            "category": category,
            "deadline": deadline,
        })
    except PlannerError as e:
        _fail(e)

    where = task.date.isoformat() if task.date else "pool"
    console.print(f"[green]✓[/green] Added #{task.id}: {task.title} [dim]({where})[/dim]")


@app.command("list")
def list_tasks(
    pool: bool = typer.Option(False, "--pool", help="Only open unscheduled tasks"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="open or completed"),
):
    """List tasks in calendar order"""
    store = get_store()
    try:
        tasks = store.list_unscheduled() if pool else store.list_all(status=status)
    except PlannerError as e:
        _fail(e)
    ReportFormatter(console).render_tasks(tasks)


@app.command()
def done(
    task_id: int = typer.Argument(..., help="Task ID to mark as done"),
    undo: bool = typer.Option(False, "--undo", help="Mark as not done instead"),
):
    """Mark a task as done (or reopen it with --undo)"""
    try:
        task = get_store().complete(task_id, completed=not undo)
    except PlannerError as e:
        _fail(e)

    if task.completed:
        console.print(f"[green]✓[/green] Completed: {task.title}")
    else:
        console.print(f"[yellow]○[/yellow] Reopened: {task.title}")


@app.command("complete-day")
def complete_day(date: str = typer.Argument(..., help="Day (YYYY-MM-DD)")):
    """Mark every open task on a day as done"""
    try:
        count = get_store().complete_day(date)
    except PlannerError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Completed {count} task(s) on {date}")


@app.command()
def schedule(
    task_id: int = typer.Argument(..., help="Task ID"),
    date: Optional[str] = typer.Argument(None, help="Day (YYYY-MM-DD); omit to move back to the pool"),
):
    """Move a task onto a day or back to the pool"""
    try:
        task = get_store().schedule(task_id, date)
    except PlannerError as e:
        _fail(e)

    where = task.date.isoformat() if task.date else "the pool"
    console.print(f"[green]✓[/green] Moved #{task.id} to {where}")


@app.command()
def edit(
    task_id: int = typer.Argument(..., help="Task ID"),
    title: Optional[str] = typer.Option(None, "--title"),
    hours: Optional[float] = typer.Option(None, "--hours", "-h"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p"),
    category: Optional[str] = typer.Option(None, "--category", "-c"),
    deadline: Optional[str] = typer.Option(None, "--deadline"),
):
    """Change fields of a task; options not given are left as they are"""
    patch = TaskPatch.from_dict({
        k: v for k, v in {
            "title": title,
            "time_hours": hours,
            "priority": priority,
            "category": category,
            "deadline": deadline,
        }.items() if v is not None
    })
    try:
        task = get_store().update(task_id, patch)
    except PlannerError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Updated #{task.id}: {task.title}")


@app.command()
def delete(task_id: int = typer.Argument(..., help="Task ID to delete")):
    """Delete a task"""
    try:
        get_store().delete(task_id)
    except PlannerError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Deleted task #{task_id}")


@app.command()
def report(
    start: Optional[str] = typer.Argument(None, help="First day (YYYY-MM-DD)"),
    end: Optional[str] = typer.Argument(None, help="Last day (YYYY-MM-DD)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List tasks per day"),
):
    """
    Show a completion report

    Without dates, covers the last 30 days (see report_default_days).
    """
    aggregator = ReportAggregator(get_store(), get_config())
    if not start or not end:
        start, end = aggregator.default_range()
    try:
        data = aggregator.generate(start, end)
    except PlannerError as e:
        _fail(e)

    ReportFormatter(console).render_report(data, verbose=verbose)


@app.command()
def today():
    """Show open and completed counts for today"""
    counts = today_counts(get_store().list_all())
    console.print(
        f"\n[bold]{counts.date.strftime('%a, %b %d')}[/bold]  "
        f"[white]○ {counts.open} open[/white]  [green]✓ {counts.done} done[/green]\n"
    )


if __name__ == "__main__":
    app()
