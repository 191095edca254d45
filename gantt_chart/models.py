"""Data models for the Gantt chart generator."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from gantt_chart.errors import InvalidDate
from gantt_chart.workdays import last_working_day


@dataclass
class Task:
    """A unit of work assigned to a resource.

    Attributes:
        name: The task name
        days: Number of working days (0 makes the task a milestone)
        done: Whether the task is finished (rendering only)
        start: Fixed start date overriding the resource's running cursor
    """

    name: str
    days: int = 0
    done: bool = False
    start: Optional[date] = None

    @property
    def is_milestone(self) -> bool:
        """A zero-length task is drawn as a marker, not a bar."""
        return self.days == 0


@dataclass
class Resource:
    """A person or team whose tasks run one after another.

    Attributes:
        name: Resource name, unique within a project
        tasks: Tasks in scheduling order
        color: Optional hex color overriding the generated one
    """

    name: str
    tasks: list[Task] = field(default_factory=list)
    color: Optional[str] = None


@dataclass
class Milestone:
    """A project-level marker pinned to a calendar date."""

    name: str
    date: date


@dataclass
class Project:
    """A project made of resources, their tasks and project milestones.

    Attributes:
        name: The chart title
        start_date: When scheduling starts (defaults to today if not specified)
        end_date: Explicit end of the visible date range
        duration_days: Working days from the start, used when end_date is absent
        resources: Resources in display order
        milestones: Dated project milestones
    """

    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    duration_days: Optional[int] = None
    resources: list[Resource] = field(default_factory=list)
    milestones: list[Milestone] = field(default_factory=list)

    def __post_init__(self):
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.start_date > self.end_date
        ):
            raise InvalidDate(
                f"Project '{self.name}' starts on {self.start_date} "
                f"after its end date {self.end_date}"
            )

        seen = set()
        for resource in self.resources:
            if resource.name in seen:
                raise ValueError(f"Duplicate resource name: '{resource.name}'")
            seen.add(resource.name)

    @property
    def task_count(self) -> int:
        """Total number of tasks across all resources."""
        return sum(len(r.tasks) for r in self.resources)


@dataclass(frozen=True)
class DatedTask:
    """A task with its computed dates.

    ``end`` is exclusive: a 3-day task starting on a Monday ends on the
    Thursday and occupies Monday to Wednesday. Milestones have start == end.

    Attributes:
        task: The scheduled task (or a Task built from a project milestone)
        resource_index: Index of the owning resource, None for project milestones
        resource_name: Name of the owning resource
        start: First working day
        end: First working day after the task
    """

    task: Task
    resource_index: Optional[int]
    resource_name: str
    start: date
    end: date

    @property
    def is_milestone(self) -> bool:
        return self.task.is_milestone

    @property
    def name(self) -> str:
        return self.task.name

    @property
    def finish(self) -> date:
        """Last working day of the task (the start day for milestones)."""
        return last_working_day(self.start, self.end)


@dataclass
class Schedule:
    """A fully dated project.

    Attributes:
        start_date: Weekday the resource cursors started from
        tasks: Dated tasks ordered by resource, then task order
        milestones: Dated project milestones
    """

    start_date: Optional[date] = None
    tasks: list[DatedTask] = field(default_factory=list)
    milestones: list[DatedTask] = field(default_factory=list)

    def tasks_for_resource(self, resource_index: int) -> list[DatedTask]:
        """Get all dated tasks for one resource, in scheduling order."""
        return [t for t in self.tasks if t.resource_index == resource_index]

    def all_entries(self) -> list[DatedTask]:
        """Dated tasks followed by project milestones."""
        return self.tasks + self.milestones

    def first_start(self) -> Optional[date]:
        """Get the earliest start date, if anything is scheduled."""
        entries = self.all_entries()
        if not entries:
            return None
        return min(t.start for t in entries)

    def last_end(self) -> Optional[date]:
        """Get the latest end date, if anything is scheduled."""
        entries = self.all_entries()
        if not entries:
            return None
        return max(t.end for t in entries)

    def finish_date(self) -> Optional[date]:
        """Get the last working day of any scheduled work."""
        entries = self.all_entries()
        if not entries:
            return None
        return max(t.finish for t in entries)
