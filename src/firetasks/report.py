"""Plain-text rendering of the task dashboard."""

from __future__ import annotations

from typing import List, Sequence

from .filters import TaskStats, format_date_with_day_of_week, issue_url, task_badge
from .models import Task


def format_task_line(task: Task, space_url: str) -> str:
    """Render one task as a two-line entry."""
    badge = task_badge(task)
    details = [
        f"status: {task.status}",
        f"assignee: {task.assignee_name or 'Unassigned'}",
        f"due: {format_date_with_day_of_week(task.due_date)}",
        f"updated: {task.updated}",
    ]
    if task.parent_task is not None:
        details.append(f"parent: {task.parent_task.issue_key}")

    return (
        f"{badge.icon} [{badge.text}] {task.issue_key} {task.summary}\n"
        f"   {' | '.join(details)}\n"
        f"   {issue_url(space_url, task.issue_key)}"
    )


def generate_report(tasks: Sequence[Task], stats: TaskStats, space_url: str) -> str:
    """Generate the human-readable dashboard report.

    Args:
        tasks: Tasks to list, already filtered.
        stats: Counters computed over the unfiltered task list.
        space_url: Backlog space URL used for issue links.

    Returns:
        Formatted multi-line text report.
    """
    lines: List[str] = [
        "Backlog Fire Tasks",
        "",
        f"Total: {stats.total}",
        f"Overdue: {stats.overdue}",
        f"Due tomorrow: {stats.due_tomorrow}",
        f"Completed: {stats.completed}",
        f"Shown: {stats.filtered}",
        "",
    ]

    if not tasks:
        lines.append("No tasks match the current filters.")
    else:
        lines.extend(format_task_line(task, space_url) for task in tasks)

    return "\n".join(lines)
