"""Per-resource sequential scheduling."""

import logging
import warnings
from dataclasses import dataclass
from datetime import date
from typing import Optional

from gantt_chart.errors import InvalidDuration
from gantt_chart.models import DatedTask, Project, Resource, Schedule, Task
from gantt_chart.workdays import add_working_days, next_weekday

logger = logging.getLogger(__name__)


@dataclass
class ResourceStats:
    """Statistics for a resource in the schedule."""

    name: str
    task_count: int
    milestone_count: int
    done_count: int
    working_days: int
    first_start: Optional[date]
    last_end: Optional[date]
    finish: Optional[date] = None

    @property
    def fully_done(self) -> bool:
        """Check if every task on the resource is finished."""
        return self.task_count > 0 and self.done_count == self.task_count


class Scheduler:
    """Assign dates to a project's tasks.

    Each resource works through its tasks one after another, in the order
    they were declared:
    1. The first task starts on the project start date
    2. Each following task starts when the previous one ends
    3. A task with a fixed start ignores the running cursor
    4. Weekends are skipped (Monday-Friday only)

    Resources do not affect each other; there is no leveling across them.
    """

    def __init__(self, project: Project, start_date: Optional[date] = None):
        """Initialize the scheduler.

        Args:
            project: Project to schedule
            start_date: Starting date for scheduling (defaults to the project
                start, then today)
        """
        self.project = project
        self.start_date = start_date or project.start_date or date.today()

    def create_schedule(self) -> Schedule:
        """Create the dated schedule for the project.

        Returns:
            Schedule with dated tasks ordered by resource, then task

        Raises:
            InvalidDuration: If any task has a negative duration
            InvalidDate: If date arithmetic leaves the calendar range
        """
        origin = next_weekday(self.start_date)
        schedule = Schedule(start_date=origin)

        for index, resource in enumerate(self.project.resources):
            cursor = origin
            previous: Optional[DatedTask] = None

            for task in resource.tasks:
                dated = self._date_task(task, index, resource.name, cursor)

                if previous is not None and dated.start < previous.end:
                    warnings.warn(
                        (
                            f"Task '{task.name}' on '{resource.name}' is fixed to start "
                            f"{dated.start}, before '{previous.name}' finishes on {previous.finish}."
                        ),
                        category=UserWarning,
                        stacklevel=2,
                    )

                schedule.tasks.append(dated)
                cursor = dated.end
                previous = dated

            logger.debug(
                "Scheduled %d task(s) for resource '%s', cursor ends on %s",
                len(resource.tasks), resource.name, cursor,
            )

        for milestone in self.project.milestones:
            day = next_weekday(milestone.date)
            schedule.milestones.append(
                DatedTask(
                    task=Task(name=milestone.name, days=0),
                    resource_index=None,
                    resource_name="",
                    start=day,
                    end=day,
                )
            )

        return schedule

    @staticmethod
    def _date_task(task: Task, index: int, resource_name: str, cursor: date) -> DatedTask:
        """Compute the start and end dates of a single task."""
        if task.days < 0:
            raise InvalidDuration(
                f"Task '{task.name}' on '{resource_name}' has a negative duration ({task.days})"
            )

        start = next_weekday(task.start) if task.start is not None else cursor
        end = add_working_days(start, task.days)
        return DatedTask(
            task=task,
            resource_index=index,
            resource_name=resource_name,
            start=start,
            end=end,
        )

    def get_statistics(self, schedule: Schedule) -> list[ResourceStats]:
        """Calculate statistics for each resource in the schedule.

        Returns:
            List of ResourceStats, in resource order
        """
        return resource_statistics(schedule, self.project.resources)


def resource_statistics(schedule: Schedule, resources: list[Resource]) -> list[ResourceStats]:
    """Aggregate the dated tasks of each resource."""
    stats = []
    for index, resource in enumerate(resources):
        dated = schedule.tasks_for_resource(index)
        stats.append(
            ResourceStats(
                name=resource.name,
                task_count=len(dated),
                milestone_count=sum(1 for t in dated if t.is_milestone),
                done_count=sum(1 for t in dated if t.task.done),
                working_days=sum(t.task.days for t in dated),
                first_start=min((t.start for t in dated), default=None),
                last_end=max((t.end for t in dated), default=None),
                finish=max((t.finish for t in dated), default=None),
            )
        )
    return stats


def schedule(project: Project) -> Schedule:
    """Schedule a project starting from its own start date."""
    return Scheduler(project).create_schedule()
