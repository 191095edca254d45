"""Tabular and interactive views of a schedule."""

from pathlib import Path
from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from gantt_chart.colors import resource_color
from gantt_chart.layout import MILESTONE_COLOR
from gantt_chart.models import Resource, Schedule
from gantt_chart.scheduler import ResourceStats

SCHEDULE_COLUMNS = ["resource", "task", "start", "end", "days", "done", "milestone"]


def schedule_to_frame(schedule: Schedule) -> pd.DataFrame:
    """One row per dated task, then one per project milestone.

    ``end`` is exclusive, like DatedTask.end. Project milestones have an
    empty resource.
    """
    records = [
        {
            "resource": entry.resource_name,
            "task": entry.name,
            "start": pd.Timestamp(entry.start),
            "end": pd.Timestamp(entry.end),
            "days": entry.task.days,
            "done": entry.task.done,
            "milestone": entry.is_milestone,
        }
        for entry in schedule.all_entries()
    ]
    return pd.DataFrame.from_records(records, columns=SCHEDULE_COLUMNS)


def resource_summary_frame(stats: list[ResourceStats]) -> pd.DataFrame:
    """Per-resource aggregates, indexed by resource name.

    ``end`` is exclusive; ``finish`` is the last working day.
    """
    df = pd.DataFrame(
        [
            {
                "resource": s.name,
                "tasks": s.task_count,
                "milestones": s.milestone_count,
                "done": s.done_count,
                "days": s.working_days,
                "start": s.first_start,
                "end": s.last_end,
                "finish": s.finish,
            }
            for s in stats
        ],
        columns=["resource", "tasks", "milestones", "done", "days", "start", "end", "finish"],
    )
    return df.set_index("resource")


def export_schedule_csv(schedule: Schedule, path) -> Path:
    """Write the schedule table to CSV with ISO dates."""
    csv_path = Path(path)
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    df = schedule_to_frame(schedule)
    df.to_csv(csv_path, index=False, date_format="%Y-%m-%d")
    return csv_path


def create_timeline_figure(
    schedule: Schedule, resources: list[Resource], title: str = ""
) -> Optional[go.Figure]:
    """Create an interactive timeline of the schedule.

    Bars use the same colors as the SVG chart; milestones are diamond
    markers.

    Returns:
        Plotly Figure object or None if nothing is scheduled
    """
    df = schedule_to_frame(schedule)
    if df.empty:
        return None

    # Task names repeat across resources; one row per resource and task
    df["row"] = [
        f"{resource} / {task}" if resource else task
        for resource, task in zip(df["resource"], df["task"])
    ]

    color_map = {r.name: resource_color(r, i).hex for i, r in enumerate(resources)}
    bars = df[~df["milestone"]]
    markers = df[df["milestone"]]

    if bars.empty:
        fig = go.Figure()
    else:
        fig = px.timeline(
            bars,
            x_start="start",
            x_end="end",
            y="row",
            color="resource",
            color_discrete_map=color_map,
            hover_data=["task", "days", "done"],
        )

    if not markers.empty:
        fig.add_trace(
            go.Scatter(
                x=markers["start"],
                y=markers["row"],
                mode="markers",
                name="Milestones",
                marker=dict(symbol="diamond", size=12, color=MILESTONE_COLOR.hex),
                hovertemplate="<b>%{y}</b><br>%{x|%Y-%m-%d}<extra></extra>",
            )
        )

    fig.update_yaxes(autorange="reversed")
    fig.update_layout(
        title=dict(
            text=title,
            font=dict(size=20, family="Inter, sans-serif", color="#111827"),
        ),
        xaxis_title="",
        yaxis_title="",
        plot_bgcolor="white",
        paper_bgcolor="white",
        font=dict(family="Inter, sans-serif", color="#374151"),
        xaxis=dict(gridcolor="#f3f4f6", showgrid=True, tickformat="%d %b"),
        legend=dict(title_text=""),
    )
    return fig


def export_timeline_html(fig: go.Figure, path) -> Path:
    """Write a standalone HTML page for the figure."""
    html_path = Path(path)
    html_path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(html_path), include_plotlyjs="cdn")
    return html_path
