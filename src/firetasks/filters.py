"""Task filtering, dashboard statistics, and per-task display helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence

from .models import Task
from .status import is_completed_status

ALL = "all"
STATUS_FILTERS = ("all", "overdue", "due-tomorrow")

_STATUS_PREDICATES: Dict[str, Callable[[Task], bool]] = {
    "all": lambda task: True,
    "overdue": lambda task: task.is_overdue,
    "due-tomorrow": lambda task: task.is_due_tomorrow,
}

_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@dataclass(frozen=True, slots=True)
class TaskStats:
    """Counters shown in the dashboard header."""

    total: int
    overdue: int
    due_tomorrow: int
    completed: int
    filtered: int


@dataclass(frozen=True, slots=True)
class TaskBadge:
    """Urgency badge for one task."""

    kind: str
    icon: str
    text: str


def filter_tasks(
    tasks: Sequence[Task],
    status_filter: str = ALL,
    assignee: str = ALL,
    project: str = ALL,
) -> List[Task]:
    """Keep tasks matching the status filter, assignee, and project.

    Raises:
        ValueError: If ``status_filter`` is not one of :data:`STATUS_FILTERS`.
    """
    if status_filter not in _STATUS_PREDICATES:
        raise ValueError(
            f"Unknown status filter '{status_filter}'; expected one of {', '.join(STATUS_FILTERS)}."
        )
    matches_status: Callable[[Task], bool] = _STATUS_PREDICATES[status_filter]

    return [
        task
        for task in tasks
        if matches_status(task)
        and (assignee == ALL or task.assignee_name == assignee)
        and (project == ALL or task.project_key == project)
    ]


def available_assignees(tasks: Sequence[Task]) -> List[str]:
    """Return ``["all"]`` followed by the sorted distinct assignee names."""
    names = {task.assignee_name for task in tasks if task.assignee_name}
    return [ALL, *sorted(names)]


def available_projects(tasks: Sequence[Task]) -> List[str]:
    """Return ``["all"]`` followed by the sorted distinct project keys."""
    return [ALL, *sorted({task.project_key for task in tasks})]


def compute_task_stats(tasks: Sequence[Task], filtered: Optional[Sequence[Task]] = None) -> TaskStats:
    """Count overdue, due-tomorrow, and completed tasks."""
    return TaskStats(
        total=len(tasks),
        overdue=sum(1 for task in tasks if task.is_overdue),
        due_tomorrow=sum(1 for task in tasks if task.is_due_tomorrow),
        completed=sum(1 for task in tasks if is_completed_status(task.status)),
        filtered=len(tasks if filtered is None else filtered),
    )


def task_badge(task: Task) -> TaskBadge:
    """Pick the badge for ``task``.

    Precedence: overdue, due tomorrow, completed, within deadline, no deadline.
    """
    if task.is_overdue:
        unit = "day" if task.overdue_days == 1 else "days"
        return TaskBadge("overdue", "🔥", f"{task.overdue_days} {unit} overdue")
    if task.is_due_tomorrow:
        return TaskBadge("due-tomorrow", "⚠️", "Due tomorrow")
    if is_completed_status(task.status):
        return TaskBadge("completed", "✅", "Completed")
    if task.due_date:
        return TaskBadge("within-deadline", "✅", "Within deadline")
    return TaskBadge("no-deadline", "📝", "No deadline")


def issue_url(space_url: str, issue_key: str) -> str:
    """Browser URL of an issue in the Backlog space."""
    return f"{space_url.rstrip('/')}/view/{issue_key}"


def format_date_with_day_of_week(value: Optional[str]) -> str:
    """Format an ISO date as ``YYYY-MM-DD(Ddd)``; unparseable input is returned as-is."""
    if not value:
        return "Not set"

    try:
        day = date.fromisoformat(value.split("T")[0])
    except ValueError:
        return value

    return f"{day.isoformat()}({_DAY_NAMES[day.weekday()]})"
