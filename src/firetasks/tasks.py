"""Transformation of raw Backlog issues into dashboard tasks."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from .models import ParentTaskRef, RawIssue, Task
from .urgency import calculate_overdue_status

UPDATED_DISPLAY_FORMAT = "%Y/%m/%d %H:%M"


def parse_backlog_datetime(value: str) -> datetime:
    """Parse a Backlog ISO8601 timestamp, normalizing a trailing ``Z``."""
    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    return datetime.fromisoformat(normalized)


def format_updated(value: str) -> str:
    """Render an ISO timestamp as ``YYYY/MM/DD HH:MM`` in the process's local time.

    Display only; urgency never depends on this value.
    """
    return parse_backlog_datetime(value).astimezone().strftime(UPDATED_DISPLAY_FORMAT)


def find_parent_task(
    issue: RawIssue,
    all_issues: Optional[Sequence[RawIssue]],
) -> Optional[ParentTaskRef]:
    """Look up ``issue``'s parent by linear scan over ``all_issues``."""
    if issue.parent_issue_id is None or not all_issues:
        return None

    for candidate in all_issues:
        if candidate.id == issue.parent_issue_id:
            return ParentTaskRef(
                id=candidate.id,
                issue_key=candidate.issue_key,
                summary=candidate.summary,
            )

    return None


def transform_issue_to_task(
    issue: RawIssue,
    project_key: str,
    all_issues: Optional[Sequence[RawIssue]] = None,
) -> Task:
    """Build the dashboard ``Task`` for one issue.

    ``all_issues`` is only used to resolve the parent task; when it is
    omitted or does not contain the parent, ``parent_task`` stays ``None``.
    """
    urgency = calculate_overdue_status(issue.due_date)

    return Task(
        id=issue.id,
        project_key=project_key,
        issue_key=issue.issue_key,
        issue_type=issue.issue_type.name,
        summary=issue.summary,
        status=issue.status.name,
        updated=format_updated(issue.updated),
        is_overdue=urgency.is_overdue,
        overdue_days=urgency.overdue_days,
        is_due_tomorrow=urgency.is_due_tomorrow,
        assignee_name=issue.assignee.name if issue.assignee else None,
        start_date=issue.start_date,
        due_date=issue.due_date,
        parent_task=find_parent_task(issue, all_issues),
    )
