"""Load projects from JSON files."""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from gantt_chart.colors import parse_hex_color
from gantt_chart.models import Milestone, Project, Resource, Task

DATE_FORMAT = "%Y-%m-%d"


def _parse_date(value, what: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value), DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"Invalid date for {what}: '{value}' (expected YYYY-MM-DD)") from None


def _parse_days(value, what: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid number of days for {what}: {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise ValueError(f"Invalid number of days for {what}: {value!r}")
    return value


def _first(data: dict, *keys):
    for key in keys:
        if key in data:
            return data[key]
    return None


def project_from_dict(data: dict) -> Project:
    """Build a Project from its JSON form.

    Expected format:
    {
        "name": "Website relaunch",
        "start_date": "2024-11-04",
        "resources": [
            {
                "name": "Design",
                "tasks": [{"name": "Wireframes", "days": 3, "done": true}]
            }
        ],
        "milestones": [{"name": "Launch", "date": "2024-12-16"}]
    }

    ``startDate`` and ``endDate`` are accepted as aliases.

    Raises:
        ValueError: If a field is missing or malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Project file must contain a JSON object")

    resources = []
    for r in data.get("resources", []):
        if not r.get("name"):
            raise ValueError("Every resource needs a name")

        tasks = []
        for t in r.get("tasks", []):
            if not t.get("name"):
                raise ValueError(f"Task without a name on resource '{r['name']}'")
            what = f"task '{t['name']}'"
            tasks.append(
                Task(
                    name=t["name"],
                    days=_parse_days(t.get("days", 0), what),
                    done=bool(t.get("done", False)),
                    start=_parse_date(t.get("start"), what),
                )
            )

        color = r.get("color")
        if color:
            parse_hex_color(color)
        resources.append(Resource(name=r["name"], tasks=tasks, color=color))

    milestones = []
    for m in data.get("milestones", []):
        if not m.get("name"):
            raise ValueError("Every milestone needs a name")
        day = _parse_date(m.get("date"), f"milestone '{m['name']}'")
        if day is None:
            raise ValueError(f"Milestone '{m['name']}' needs a date")
        milestones.append(Milestone(name=m["name"], date=day))

    duration_days = data.get("duration_days")
    if duration_days is not None:
        duration_days = _parse_days(duration_days, "the project duration")

    return Project(
        name=data.get("name", ""),
        start_date=_parse_date(_first(data, "start_date", "startDate"), "the project start"),
        end_date=_parse_date(_first(data, "end_date", "endDate"), "the project end"),
        duration_days=duration_days,
        resources=resources,
        milestones=milestones,
    )


def project_to_dict(project: Project) -> dict:
    """Inverse of project_from_dict, omitting unset optional fields."""
    data: dict = {"name": project.name}
    if project.start_date is not None:
        data["start_date"] = project.start_date.isoformat()
    if project.end_date is not None:
        data["end_date"] = project.end_date.isoformat()
    if project.duration_days is not None:
        data["duration_days"] = project.duration_days

    data["resources"] = []
    for resource in project.resources:
        r: dict = {"name": resource.name}
        if resource.color:
            r["color"] = resource.color
        r["tasks"] = []
        for task in resource.tasks:
            t: dict = {"name": task.name, "days": task.days}
            if task.done:
                t["done"] = True
            if task.start is not None:
                t["start"] = task.start.isoformat()
            r["tasks"].append(t)
        data["resources"].append(r)

    data["milestones"] = [
        {"name": m.name, "date": m.date.isoformat()} for m in project.milestones
    ]
    return data


def load_project(config_path: str) -> Project:
    """Load a project from a JSON file.

    Args:
        config_path: Path to the project file

    Returns:
        Project

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the content is not a valid project
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Project file '{config_path}' not found.")

    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Project file '{config_path}' is not valid JSON: {e}") from e

    return project_from_dict(data)


def sample_project(today: Optional[date] = None) -> dict:
    """A small example project starting on the next Monday."""
    today = today or date.today()
    monday = date.fromordinal(today.toordinal() + (7 - today.weekday()) % 7)
    return {
        "name": "Website relaunch",
        "start_date": monday.isoformat(),
        "resources": [
            {
                "name": "Design",
                "tasks": [
                    {"name": "Wireframes", "days": 3, "done": True},
                    {"name": "Visual design", "days": 5},
                    {"name": "Design sign-off", "days": 0},
                ],
            },
            {
                "name": "Development",
                "tasks": [
                    {"name": "Backend API", "days": 8},
                    {"name": "Frontend", "days": 6},
                ],
            },
            {
                "name": "QA",
                "tasks": [
                    {"name": "Test plan", "days": 2},
                    {"name": "Regression", "days": 4},
                ],
            },
        ],
        "milestones": [],
    }
