"""Command-line interface for the Gantt chart generator."""

import json
import logging
import sys
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from gantt_chart.analysis import (
    create_timeline_figure,
    export_schedule_csv,
    export_timeline_html,
)
from gantt_chart.config import load_chart_config
from gantt_chart.errors import GanttChartError
from gantt_chart.importer import (
    load_import_config,
    read_excel_tasks,
    save_default_import_config,
    update_project_json,
)
from gantt_chart.loader import load_project, sample_project
from gantt_chart.render import render_to_file
from gantt_chart.scheduler import Scheduler
from gantt_chart.visualization import render_schedule, render_statistics

DEFAULT_PROJECT_FILE = "project.json"
DEFAULT_CHART_CONFIG_FILE = "chart_config.json"
DEFAULT_IMPORT_CONFIG_FILE = "import_config.json"

console = Console()
logger = logging.getLogger("gantt_chart")


def _setup_logging(verbose: bool) -> None:
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    logging.captureWarnings(True)


def _parse_reference_date(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    if value.lower() == "today":
        return date.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date or 'today'") from None


def _load_or_exit(path: str):
    try:
        return load_project(path)
    except FileNotFoundError:
        console.print(f"[red]Error:[/red] Project file '{path}' not found.")
        console.print("\n[yellow]Create one with 'gantt-chart init'. Example format:[/yellow]")
        console.print(Panel(json.dumps(sample_project(), indent=2), border_style="blue"))
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.option(
    "-c", "--config",
    default=DEFAULT_CHART_CONFIG_FILE,
    help="Path to chart configuration file",
    show_default=True,
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, config, verbose):
    """Render Gantt charts from JSON project descriptions."""
    ctx.ensure_object(dict)
    ctx.obj['config'] = config
    _setup_logging(verbose)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o", "--output",
    "output_file",
    required=True,
    type=click.Path(dir_okay=False),
    help="SVG file to write",
)
@click.option("--day-width", type=float, default=None, help="Width of one day column in pixels")
@click.option(
    "--resource-table/--no-resource-table",
    default=None,
    help="Draw the per-resource summary table",
)
@click.option("--hide-empty", is_flag=True, help="Hide resources that have no tasks")
@click.option("--today", "reference", default=None, help="Draw a date line (YYYY-MM-DD or 'today')")
@click.pass_context
def render(ctx, input_file, output_file, day_width, resource_table, hide_empty, reference):
    """Render a project file to an SVG Gantt chart."""
    try:
        chart_config = load_chart_config(ctx.obj['config'])
    except ValueError as e:
        console.print(f"[red]Error:[/red] Invalid chart configuration: {e}")
        sys.exit(1)

    overrides = {}
    if day_width is not None:
        overrides["day_column_width"] = day_width
    if resource_table is not None:
        overrides["show_resource_table"] = resource_table
    if hide_empty:
        overrides["show_empty_resources"] = False
    reference_date = _parse_reference_date(reference)
    if reference_date is not None:
        overrides["reference_date"] = reference_date
    if overrides:
        chart_config = replace(chart_config, **overrides)

    project = _load_or_exit(input_file)

    try:
        with console.status("[bold green]Rendering chart...", spinner="dots"):
            path = render_to_file(project, output_file, chart_config)
    except GanttChartError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    console.print(
        f"[green]Wrote[/green] {path} "
        f"[dim]({project.task_count} tasks, {len(project.resources)} resources)[/dim]"
    )


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
def show(input_file):
    """Print the computed schedule and resource summary."""
    project = _load_or_exit(input_file)

    try:
        scheduler = Scheduler(project)
        schedule = scheduler.create_schedule()
    except GanttChartError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    console.print(render_schedule(schedule, project.resources, title=project.name))
    console.print(render_statistics(scheduler.get_statistics(schedule), schedule))


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), help="Write the schedule as CSV")
@click.option("--html", "html_path", type=click.Path(dir_okay=False), help="Write an interactive timeline")
def export(input_file, csv_path, html_path):
    """Export the computed schedule as CSV and/or HTML."""
    if not csv_path and not html_path:
        console.print("[yellow]Nothing to export: pass --csv and/or --html.[/yellow]")
        return

    project = _load_or_exit(input_file)
    try:
        schedule = Scheduler(project).create_schedule()
    except GanttChartError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if csv_path:
        export_schedule_csv(schedule, csv_path)
        console.print(f"[green]Schedule saved to:[/green] {csv_path}")

    if html_path:
        fig = create_timeline_figure(schedule, project.resources, title=project.name)
        if fig is None:
            console.print("[yellow]No tasks scheduled; timeline not written.[/yellow]")
        else:
            export_timeline_html(fig, html_path)
            console.print(f"[green]Timeline saved to:[/green] {html_path}")


@cli.command()
@click.option(
    "-p", "--project",
    "project_path",
    default=DEFAULT_PROJECT_FILE,
    help="Project file to create",
    show_default=True,
)
@click.option("--force", is_flag=True, help="Overwrite existing project file")
def init(project_path, force):
    """Initialize a sample project file."""
    path = Path(project_path)

    if path.exists() and not force:
        console.print(f"[yellow]Project file '{project_path}' already exists.[/yellow]")
        console.print("[dim]Use --force to overwrite.[/dim]")
        return

    with open(path, "w", encoding="utf-8") as f:
        json.dump(sample_project(), f, indent=2)

    console.print(f"[green]Created sample project file:[/green] {project_path}")
    console.print(f"[dim]Edit this file, then run 'gantt-chart render {project_path} -o chart.svg'[/dim]")


@cli.command(name="import")
@click.argument("excel_file", type=click.Path(exists=True))
@click.option(
    "-p", "--project",
    "project_path",
    default=DEFAULT_PROJECT_FILE,
    help="Project file to update",
    show_default=True,
)
@click.option(
    "--import-config",
    default=DEFAULT_IMPORT_CONFIG_FILE,
    help="Path to import configuration file",
    show_default=True,
)
def import_cmd(excel_file, project_path, import_config):
    """Import or update tasks from an Excel file."""
    try:
        with console.status("[bold green]Loading import configuration...", spinner="dots"):
            config = load_import_config(import_config)

        console.print(f"[cyan]Reading Excel file:[/cyan] {excel_file}")
        console.print(f"[cyan]Using import config:[/cyan] {import_config}")
        console.print()

        with console.status("[bold green]Reading Excel data...", spinner="dots"):
            rows = read_excel_tasks(excel_file, config)

        console.print(f"[green]Found {len(rows)} tasks in Excel file[/green]")
        console.print()

        with console.status("[bold green]Updating project...", spinner="dots"):
            stats = update_project_json(rows, project_path)

        table = Table(title="Import Summary", box=box.ROUNDED)
        table.add_column("Status", style="bold")
        table.add_column("Count", justify="right", style="cyan")

        table.add_row("Added", f"[green]{stats['added']}[/green]")
        table.add_row("Updated", f"[yellow]{stats['updated']}[/yellow]")
        table.add_row("Unchanged", f"[dim]{stats['unchanged']}[/dim]")

        console.print(table)
        console.print()
        console.print(f"[green]Project saved to:[/green] {project_path}")

    except (OSError, ValueError, KeyError) as e:
        console.print(f"[red]Error during import:[/red] {e}")
        sys.exit(1)


@cli.command()
@click.option(
    "--import-config",
    default=DEFAULT_IMPORT_CONFIG_FILE,
    help="Path to import configuration file",
    show_default=True,
)
@click.option("--force", is_flag=True, help="Overwrite existing configuration file")
def init_import_config(import_config, force):
    """Initialize a sample import configuration file."""
    config_path = Path(import_config)

    if config_path.exists() and not force:
        console.print(f"[yellow]Import configuration file '{import_config}' already exists.[/yellow]")
        console.print("[dim]Use --force to overwrite.[/dim]")
        return

    save_default_import_config(import_config)

    console.print(f"[green]Created sample import configuration file:[/green] {import_config}")
    console.print("[dim]Edit this file to customize the column mapping for your Excel file.[/dim]")
    console.print()

    info = Table(title="Default Configuration", box=box.SIMPLE)
    info.add_column("Setting", style="cyan", no_wrap=True)
    info.add_column("Value", style="white")

    info.add_row("Sheet", "First sheet (index 0)")
    info.add_row("Header row", "Row 1")
    info.add_row("", "")
    info.add_row("[bold]Column Mapping", "")
    info.add_row("'Resource'", "→ resource")
    info.add_row("'Task'", "→ name")
    info.add_row("'Days'", "→ days")
    info.add_row("'Done'", "→ done (optional)")
    info.add_row("'Start'", "→ start (optional)")

    console.print(info)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    try:
        cli(obj={}, args=argv, standalone_mode=False)
        return 0
    except click.exceptions.Exit as e:
        return e.exit_code
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        console.print(f"[red]Unexpected error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
