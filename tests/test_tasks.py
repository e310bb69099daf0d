"""Tests for issue-to-task transformation."""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from firetasks.models import NamedRef, ParentTaskRef, RawIssue
from firetasks.tasks import format_updated, transform_issue_to_task


def _make_issue(
    issue_id: int = 123,
    parent_issue_id=None,
    assignee=None,
    due_date=None,
    summary: str = "Test task",
) -> RawIssue:
    return RawIssue(
        id=issue_id,
        project_id=456,
        issue_key=f"TEST-{issue_id}",
        issue_type=NamedRef(id=1, name="Task"),
        summary=summary,
        status=NamedRef(id=2, name="In Progress"),
        updated="2024-01-15T09:00:00Z",
        assignee=assignee,
        parent_issue_id=parent_issue_id,
        start_date="2024-01-01",
        due_date=due_date,
    )


def _local(value: datetime) -> str:
    return value.astimezone().strftime("%Y/%m/%d %H:%M")


def test_format_updated_renders_local_time():
    """Verify updated timestamps are rendered as YYYY/MM/DD HH:MM in local time."""
    expected = _local(datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc))

    assert format_updated("2024-01-15T09:00:00Z") == expected


def test_transform_copies_fields_and_computes_urgency():
    """Verify issue fields are copied and past due dates are marked overdue."""
    issue = _make_issue(assignee=NamedRef(id=789, name="Tanaka"), due_date="2024-01-31")

    task = transform_issue_to_task(issue, "TEST")

    assert task.id == 123
    assert task.project_key == "TEST"
    assert task.issue_key == "TEST-123"
    assert task.issue_type == "Task"
    assert task.summary == "Test task"
    assert task.status == "In Progress"
    assert task.assignee_name == "Tanaka"
    assert task.start_date == "2024-01-01"
    assert task.due_date == "2024-01-31"
    assert task.updated == _local(datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc))
    assert task.is_overdue is True
    assert task.overdue_days > 0
    assert task.is_due_tomorrow is False
    assert task.parent_task is None


def test_transform_without_assignee_or_due_date():
    """Verify missing assignee stays None and no due date means no urgency."""
    task = transform_issue_to_task(_make_issue(), "BUG")

    assert task.assignee_name is None
    assert task.due_date is None
    assert task.is_overdue is False
    assert task.overdue_days == 0
    assert task.is_due_tomorrow is False


def test_transform_resolves_parent_from_issue_list():
    """Verify a child referencing a parent in the list gets its id, key, and summary."""
    parent = _make_issue(issue_id=100, summary="Parent task")
    child = _make_issue(issue_id=101, parent_issue_id=100)

    task = transform_issue_to_task(child, "TEST", [parent, child])

    assert task.parent_task == ParentTaskRef(id=100, issue_key="TEST-100", summary="Parent task")


def test_transform_unknown_parent_or_missing_list_leaves_parent_empty():
    """Verify unresolvable parents and omitted issue lists yield no parent task."""
    parent = _make_issue(issue_id=100)
    orphan = _make_issue(issue_id=102, parent_issue_id=999)
    child = _make_issue(issue_id=101, parent_issue_id=100)

    assert transform_issue_to_task(orphan, "TEST", [parent, orphan]).parent_task is None
    assert transform_issue_to_task(child, "TEST").parent_task is None


def test_task_to_dict_uses_camel_case_keys():
    """Verify JSON serialization keys and the embedded parent reference."""
    parent = _make_issue(issue_id=100, summary="Parent task")
    child = _make_issue(issue_id=101, parent_issue_id=100)

    payload = transform_issue_to_task(child, "TEST", [parent]).to_dict()

    assert payload["issueKey"] == "TEST-101"
    assert payload["assigneeName"] is None
    assert payload["parentTask"] == {"id": 100, "issueKey": "TEST-100", "summary": "Parent task"}
