"""Terminal rendering of schedules with rich."""

from io import StringIO

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from gantt_chart.colors import resource_color
from gantt_chart.models import Resource, Schedule
from gantt_chart.scheduler import ResourceStats


def _capture(renderable, width: int = 100) -> str:
    buffer = StringIO()
    console = Console(file=buffer, force_terminal=True, width=width)
    console.print(renderable)
    return buffer.getvalue()


def render_schedule(schedule: Schedule, resources: list[Resource], title: str = "") -> str:
    """Render the dated schedule as a table.

    Args:
        schedule: The schedule to display
        resources: Resources in schedule order, for their colors
        title: Table title

    Returns:
        String representation of the table
    """
    if not schedule.all_entries():
        return "No tasks to display."

    table = Table(title=title or "Schedule", box=box.ROUNDED)
    table.add_column("Resource", style="cyan", no_wrap=True)
    table.add_column("Task")
    table.add_column("Start", style="magenta")
    table.add_column("Finish", style="magenta")
    table.add_column("Days", justify="right", style="green")
    table.add_column("Status", justify="center")

    for entry in schedule.all_entries():
        if entry.resource_index is None:
            resource_cell = Text("◆ Milestones", style="bold")
        else:
            color = resource_color(resources[entry.resource_index], entry.resource_index)
            resource_cell = Text("██ ", style=color.hex)
            resource_cell.append(entry.resource_name)

        if entry.is_milestone:
            status = "[bold]◆[/bold]"
        else:
            status = "[green]Done[/green]" if entry.task.done else "[yellow]Open[/yellow]"

        table.add_row(
            resource_cell,
            entry.name,
            entry.start.strftime("%Y-%m-%d %a"),
            entry.finish.strftime("%Y-%m-%d %a"),
            str(entry.task.days),
            status,
        )

    return _capture(table)


def render_statistics(stats: list[ResourceStats], schedule: Schedule) -> str:
    """Render the per-resource summary.

    Args:
        stats: List of ResourceStats
        schedule: The schedule

    Returns:
        String representation of statistics
    """
    buffer = StringIO()
    console = Console(file=buffer, force_terminal=True, width=100)

    finish = schedule.finish_date()
    if finish:
        console.print(
            f"[bold cyan]Work scheduled until:[/bold cyan] "
            f"{finish.strftime('%Y-%m-%d')} ({finish.strftime('%A')})"
        )
        console.print()

    table = Table(title="Resource Statistics", box=box.SIMPLE)
    table.add_column("Resource", style="cyan", no_wrap=True)
    table.add_column("Tasks", justify="right", style="blue")
    table.add_column("Days", justify="right", style="green")
    table.add_column("Done", justify="right")
    table.add_column("Start", style="magenta")
    table.add_column("Finish", style="magenta")

    for stat in stats:
        done = f"[green]{stat.done_count}[/green]" if stat.fully_done else str(stat.done_count)
        table.add_row(
            stat.name,
            str(stat.task_count),
            str(stat.working_days),
            done,
            stat.first_start.strftime("%Y-%m-%d") if stat.first_start else "—",
            stat.finish.strftime("%Y-%m-%d") if stat.finish else "—",
        )

    console.print(table)
    return buffer.getvalue()
