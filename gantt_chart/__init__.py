"""Gantt chart generator: schedule resource tasks and render them as SVG."""

from gantt_chart.config import ChartConfig
from gantt_chart.errors import GanttChartError, InvalidDate, InvalidDuration, LayoutError
from gantt_chart.models import Milestone, Project, Resource, Task
from gantt_chart.render import render_svg
from gantt_chart.scheduler import Scheduler

__all__ = [
    "ChartConfig",
    "GanttChartError",
    "InvalidDate",
    "InvalidDuration",
    "LayoutError",
    "Milestone",
    "Project",
    "Resource",
    "Task",
    "Scheduler",
    "render_svg",
]
