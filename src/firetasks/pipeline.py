"""Aggregation pipeline: projects + issues -> ordered dashboard tasks.

Every step returns a ``Result``; the first ``Err`` short-circuits the run and
reaches the caller unchanged, except for the two scoping failures that add
context ("Failed to fetch project info" and unmatched project keys).
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from .backlog_client import BacklogClient, IssueQuery, TrackerGateway
from .config import Config, load_config
from .errors import ApiError, FireTasksError, ScopingError
from .models import RawIssue, RawProject, Task
from .result import Err, Ok, Result
from .status import get_active_status_ids
from .tasks import transform_issue_to_task

logger = logging.getLogger(__name__)


def fallback_project_key(project_id: int) -> str:
    """Project key used for issues whose project is not in the project list."""
    return f"PROJECT_{project_id}"


def build_project_key_map(projects: Sequence[RawProject]) -> Dict[int, str]:
    """Map project id to project key."""
    return {project.id: project.project_key for project in projects}


def build_issue_query(
    config: Config,
    gateway: TrackerGateway,
    projects: Sequence[RawProject],
) -> Result[IssueQuery, FireTasksError]:
    """Build the scoped issue query for ``config``.

    Business logic:
    - ``count`` is always ``config.task_limit``.
    - With project keys configured, keep only known projects with those keys
      (``ScopingError`` if none match), filter by their ids, and filter by
      their non-completed status ids when any were resolved.
    - With member keys configured, filter by them as assignee ids as-is.
    """
    project_ids: List[int] = []
    status_ids: List[int] = []

    if config.project_keys:
        matched = [project for project in projects if project.project_key in config.project_keys]
        if not matched:
            return Err(
                ScopingError(
                    "Configured projects were not found: " + ", ".join(config.project_keys)
                )
            )

        project_ids = [project.id for project in matched]

        active_result = get_active_status_ids(gateway, project_ids)
        if active_result.is_err():
            return active_result
        status_ids = active_result.value

    return Ok(
        IssueQuery(
            count=config.task_limit,
            project_ids=tuple(project_ids),
            status_ids=tuple(status_ids),
            assignee_ids=tuple(config.member_keys),
        )
    )


def fetch_issues(
    config: Config,
    gateway: TrackerGateway,
    projects: Optional[Sequence[RawProject]] = None,
) -> Result[List[RawIssue], FireTasksError]:
    """Fetch the issues in scope for ``config``.

    ``projects`` is fetched when project keys are configured and no project
    list is supplied; that fetch's failure is wrapped with context.
    """
    if projects is None:
        projects = []
        if config.project_keys:
            projects_result = gateway.fetch_projects()
            if projects_result.is_err():
                return Err(
                    ApiError(f"Failed to fetch project info: {projects_result.error}")
                )
            projects = projects_result.value

    query_result = build_issue_query(config, gateway, projects)
    if query_result.is_err():
        return query_result

    query = query_result.value
    logger.debug(
        "Fetching issues",
        extra={
            "count": query.count,
            "project_ids": list(query.project_ids),
            "status_ids": len(query.status_ids),
            "assignee_ids": len(query.assignee_ids),
        },
    )
    return gateway.fetch_issues(query)


def fetch_backlog_tasks(config: Config, gateway: TrackerGateway) -> Result[List[Task], FireTasksError]:
    """Fetch, scope, and transform issues into dashboard tasks.

    Tasks keep the order the issue endpoint returned them in.
    """
    projects_result = gateway.fetch_projects()
    if projects_result.is_err():
        return projects_result

    projects = projects_result.value
    project_keys = build_project_key_map(projects)

    issues_result = fetch_issues(config, gateway, projects=projects)
    if issues_result.is_err():
        return issues_result

    issues = issues_result.value
    tasks = [
        transform_issue_to_task(
            issue,
            project_keys.get(issue.project_id) or fallback_project_key(issue.project_id),
            issues,
        )
        for issue in issues
    ]

    logger.info(
        "Collected dashboard tasks",
        extra={
            "projects_total": len(projects),
            "tasks_total": len(tasks),
            "overdue": sum(1 for task in tasks if task.is_overdue),
            "due_tomorrow": sum(1 for task in tasks if task.is_due_tomorrow),
        },
    )
    return Ok(tasks)


def load_and_fetch_tasks(
    environ: Optional[Mapping[str, str]] = None,
    gateway_factory: Callable[[Config], TrackerGateway] = BacklogClient,
) -> Result[List[Task], FireTasksError]:
    """Load configuration, then run :func:`fetch_backlog_tasks` against a fresh gateway."""
    config_result = load_config(environ)
    if config_result.is_err():
        return config_result

    config = config_result.value
    return fetch_backlog_tasks(config, gateway_factory(config))
