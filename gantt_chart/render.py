"""Project to SVG in one pass: schedule, lay out, emit."""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from gantt_chart.config import ChartConfig
from gantt_chart.emitter import emit
from gantt_chart.layout import Geometry, LayoutEngine
from gantt_chart.models import Project
from gantt_chart.scheduler import Scheduler
from gantt_chart.workdays import add_working_days, next_weekday

logger = logging.getLogger(__name__)


def explicit_end(project: Project) -> Optional[date]:
    """The exclusive right edge of the chart, if the project fixes one.

    ``end_date`` is the last day of the project, so the edge is the next
    working day after it. ``duration_days`` counts working days from the
    start (today when the project has none), which already gives an
    exclusive end.
    """
    if project.end_date is not None:
        return add_working_days(project.end_date, 1)
    if project.duration_days is not None:
        start = next_weekday(project.start_date or date.today())
        return add_working_days(start, project.duration_days)
    return None


def build_geometry(project: Project, config: Optional[ChartConfig] = None) -> Geometry:
    """Schedule and lay out a project without serializing it."""
    schedule = Scheduler(project).create_schedule()
    engine = LayoutEngine(config)
    return engine.layout(
        schedule,
        project.resources,
        start=project.start_date,
        end=explicit_end(project),
        title=project.name,
    )


def render_svg(project: Project, config: Optional[ChartConfig] = None) -> str:
    """Render a project as an SVG document.

    Raises:
        GanttChartError: If scheduling or layout fails; no document is produced
    """
    geometry = build_geometry(project, config)
    logger.debug(
        "Rendering '%s': %d bar(s), %d milestone(s), %.0fx%.0f px",
        project.name, len(geometry.bars), len(geometry.milestones),
        geometry.width, geometry.height,
    )
    return emit(geometry)


def render_to_file(project: Project, path, config: Optional[ChartConfig] = None) -> Path:
    """Render a project and write the SVG to ``path``."""
    document = render_svg(project, config)
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document, encoding="utf-8")
    return output
