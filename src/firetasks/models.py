"""Domain models for Backlog issue data and dashboard tasks.

The ``Raw*`` dataclasses model only the subset of Backlog API payload fields
the dashboard needs. ``Task`` is the canonical output record handed to the
rendering layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class NamedRef:
    """An ``{id, name}`` pair embedded in issue payloads (type, status, assignee)."""

    id: int
    name: str


@dataclass(frozen=True, slots=True)
class RawProject:
    """Represents a project returned by ``/api/v2/projects``."""

    id: int
    project_key: str
    name: str


@dataclass(frozen=True, slots=True)
class RawStatus:
    """Represents one workflow status of a project."""

    id: int
    name: str


@dataclass(frozen=True, slots=True)
class RawUser:
    """Represents a space user returned by ``/api/v2/users``."""

    id: int
    user_id: str
    name: str


@dataclass(frozen=True, slots=True)
class RawIssue:
    """Represents the minimal issue data required to build a task."""

    id: int
    project_id: int
    issue_key: str
    issue_type: NamedRef
    summary: str
    status: NamedRef
    updated: str
    assignee: Optional[NamedRef] = None
    parent_issue_id: Optional[int] = None
    start_date: Optional[str] = None
    due_date: Optional[str] = None


@dataclass(frozen=True, slots=True)
class UrgencyResult:
    """Due-date urgency of a task relative to today."""

    is_overdue: bool
    overdue_days: int
    is_due_tomorrow: bool


NOT_URGENT = UrgencyResult(is_overdue=False, overdue_days=0, is_due_tomorrow=False)


@dataclass(frozen=True, slots=True)
class ParentTaskRef:
    """Reference to the parent issue of a child task."""

    id: int
    issue_key: str
    summary: str


@dataclass(frozen=True, slots=True)
class Task:
    """Canonical dashboard task built from one Backlog issue."""

    id: int
    project_key: str
    issue_key: str
    issue_type: str
    summary: str
    status: str
    updated: str
    is_overdue: bool
    overdue_days: int
    is_due_tomorrow: bool
    assignee_name: Optional[str] = None
    start_date: Optional[str] = None
    due_date: Optional[str] = None
    parent_task: Optional[ParentTaskRef] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used by JSON consumers."""
        payload: Dict[str, Any] = {
            "id": self.id,
            "projectKey": self.project_key,
            "issueKey": self.issue_key,
            "issueType": self.issue_type,
            "summary": self.summary,
            "status": self.status,
            "assigneeName": self.assignee_name,
            "startDate": self.start_date,
            "dueDate": self.due_date,
            "updated": self.updated,
            "isOverdue": self.is_overdue,
            "overdueDays": self.overdue_days,
            "isDueTomorrow": self.is_due_tomorrow,
        }
        if self.parent_task is not None:
            payload["parentTask"] = {
                "id": self.parent_task.id,
                "issueKey": self.parent_task.issue_key,
                "summary": self.parent_task.summary,
            }
        return payload
