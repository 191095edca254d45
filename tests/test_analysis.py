"""Tests for tabular exports, the timeline figure and terminal views."""

from datetime import date

import pandas as pd

from gantt_chart.analysis import (
    SCHEDULE_COLUMNS,
    create_timeline_figure,
    export_schedule_csv,
    export_timeline_html,
    resource_summary_frame,
    schedule_to_frame,
)
from gantt_chart.models import Milestone, Project, Resource, Task
from gantt_chart.scheduler import Scheduler
from gantt_chart.visualization import render_schedule, render_statistics

MONDAY = date(2024, 11, 4)


def _project(milestones=None) -> Project:
    return Project(
        name="Relaunch",
        start_date=MONDAY,
        resources=[
            Resource("Design", [Task("Wireframes", 3, done=True), Task("Sign-off", 0)]),
            Resource("Dev", [Task("API", 5)]),
        ],
        milestones=milestones or [],
    )


def _scheduled(project):
    scheduler = Scheduler(project)
    result = scheduler.create_schedule()
    return result, scheduler.get_statistics(result)


class TestScheduleFrame:
    """Tests for the pandas views."""

    def test_columns_and_rows(self):
        """Test one row per dated task with timestamps."""
        schedule, _ = _scheduled(_project())
        df = schedule_to_frame(schedule)
        assert list(df.columns) == SCHEDULE_COLUMNS
        assert list(df["task"]) == ["Wireframes", "Sign-off", "API"]
        assert df.loc[0, "start"] == pd.Timestamp("2024-11-04")
        assert df.loc[0, "end"] == pd.Timestamp("2024-11-07")
        assert list(df["milestone"]) == [False, True, False]

    def test_project_milestones_last(self):
        """Test project milestones follow the tasks with no resource."""
        schedule, _ = _scheduled(_project([Milestone("Launch", date(2024, 11, 8))]))
        df = schedule_to_frame(schedule)
        last = df.iloc[-1]
        assert last["task"] == "Launch"
        assert last["milestone"]
        assert not last["resource"]

    def test_empty(self):
        """Test an empty schedule gives an empty frame with the columns."""
        schedule, _ = _scheduled(Project("Empty", start_date=MONDAY))
        df = schedule_to_frame(schedule)
        assert df.empty
        assert list(df.columns) == SCHEDULE_COLUMNS

    def test_resource_summary(self):
        """Test the summary is indexed by resource."""
        _, stats = _scheduled(_project())
        df = resource_summary_frame(stats)
        assert list(df.index) == ["Design", "Dev"]
        assert df.loc["Design", "tasks"] == 2
        assert df.loc["Design", "done"] == 1
        assert df.loc["Dev", "days"] == 5
        assert df.loc["Dev", "end"] == date(2024, 11, 11)
        assert df.loc["Dev", "finish"] == date(2024, 11, 8)

    def test_export_csv(self, tmp_path):
        """Test the CSV has a header and ISO dates."""
        schedule, _ = _scheduled(_project())
        path = export_schedule_csv(schedule, tmp_path / "exports" / "schedule.csv")
        lines = path.read_text().splitlines()
        assert lines[0] == ",".join(SCHEDULE_COLUMNS)
        assert lines[1].startswith("Design,Wireframes,2024-11-04,2024-11-07,3,True")
        assert len(lines) == 4


class TestTimelineFigure:
    """Tests for the plotly timeline."""

    def test_traces(self):
        """Test one bar trace per resource plus a milestone trace."""
        schedule, _ = _scheduled(_project())
        fig = create_timeline_figure(schedule, _project().resources, "Relaunch")
        assert fig is not None
        names = [trace.name for trace in fig.data]
        assert "Design" in names
        assert "Dev" in names
        assert "Milestones" in names
        assert fig.layout.title.text == "Relaunch"

    def test_shared_task_names_get_separate_rows(self):
        """Test same-named tasks on different resources stay on their own rows."""
        project = Project(
            "Shared",
            start_date=MONDAY,
            resources=[Resource("A", [Task("Build", 2)]), Resource("B", [Task("Build", 3)])],
        )
        schedule, _ = _scheduled(project)
        fig = create_timeline_figure(schedule, project.resources)
        rows = {y for trace in fig.data for y in trace.y}
        assert rows == {"A / Build", "B / Build"}

    def test_project_milestone_row_is_its_name(self):
        """Test project milestones are labelled by name alone."""
        schedule, _ = _scheduled(_project([Milestone("Launch", date(2024, 11, 8))]))
        fig = create_timeline_figure(schedule, _project().resources)
        markers = next(trace for trace in fig.data if trace.name == "Milestones")
        assert "Launch" in list(markers.y)
        assert "Design / Sign-off" in list(markers.y)

    def test_empty(self):
        """Test nothing to plot returns None."""
        schedule, _ = _scheduled(Project("Empty", start_date=MONDAY))
        assert create_timeline_figure(schedule, []) is None

    def test_milestones_only(self):
        """Test a schedule of milestones still gets a figure."""
        project = Project("M", start_date=MONDAY, milestones=[Milestone("Launch", MONDAY)])
        schedule, _ = _scheduled(project)
        fig = create_timeline_figure(schedule, [])
        assert [trace.name for trace in fig.data] == ["Milestones"]

    def test_export_html(self, tmp_path):
        """Test the HTML page is written."""
        schedule, _ = _scheduled(_project())
        fig = create_timeline_figure(schedule, _project().resources)
        path = export_timeline_html(fig, tmp_path / "timeline.html")
        assert path.exists()
        assert "plotly" in path.read_text(encoding="utf-8").lower()


class TestTerminalViews:
    """Tests for rich rendering."""

    def test_render_schedule(self):
        """Test the schedule table lists tasks and dates."""
        schedule, _ = _scheduled(_project())
        output = render_schedule(schedule, _project().resources, "Relaunch")
        assert "Relaunch" in output
        assert "Wireframes" in output
        assert "2024-11-04" in output
        # Wireframes ends exclusive Thursday; the last working day is Wednesday
        assert "2024-11-06" in output

    def test_render_empty_schedule(self):
        """Test the message for an empty schedule."""
        schedule, _ = _scheduled(Project("Empty", start_date=MONDAY))
        assert render_schedule(schedule, []) == "No tasks to display."

    def test_render_statistics(self):
        """Test the statistics view shows the finish date and resources."""
        schedule, stats = _scheduled(_project())
        output = render_statistics(stats, schedule)
        assert "Work scheduled until" in output
        assert "2024-11-08" in output
        assert "2024-11-11" not in output
        assert "Resource Statistics" in output
        assert "Design" in output

    def test_statistics_show_last_working_day(self):
        """Test a Monday-Wednesday task is reported as finishing Wednesday."""
        project = Project("Short", start_date=MONDAY, resources=[Resource("Dev", [Task("A", 3)])])
        schedule, stats = _scheduled(project)
        output = render_statistics(stats, schedule)
        assert "2024-11-06" in output
        assert "Wednesday" in output
        assert "2024-11-07" not in output
