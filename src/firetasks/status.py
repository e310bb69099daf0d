"""Workflow status classification and active-status resolution.

Status names vary between spaces and locales, so "completed" is detected by
case-insensitive substring matching against a fixed vocabulary instead of
per-space configuration. Substring matching also catches names such as
``"Uncompleted"``; that imprecision is accepted.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from .backlog_client import TrackerGateway
from .errors import FireTasksError
from .models import RawStatus
from .result import Ok, Result

logger = logging.getLogger(__name__)

COMPLETED_STATUS_PATTERNS = (
    "完了",
    "完成",
    "done",
    "closed",
    "close",
    "complete",
    "finished",
)

STATUS_FETCH_MAX_WORKERS = 8


def is_completed_status(status_name: str) -> bool:
    """Return True when ``status_name`` looks like a finished workflow state."""
    lowered = status_name.lower()
    return any(pattern in lowered for pattern in COMPLETED_STATUS_PATTERNS)


def _fetch_statuses_or_empty(gateway: TrackerGateway, project_id: int) -> List[RawStatus]:
    result = gateway.fetch_project_statuses(project_id)
    if result.is_err():
        logger.warning(
            "Project %s statuses fetch failed: %s",
            project_id,
            result.error,
            extra={"project_id": project_id},
        )
        return []
    return result.value


def get_active_status_ids(
    gateway: TrackerGateway,
    project_ids: Sequence[int],
    max_workers: int = STATUS_FETCH_MAX_WORKERS,
) -> Result[List[int], FireTasksError]:
    """Collect ids of non-completed statuses across ``project_ids``.

    Business logic:
    - No project ids: succeed with an empty list without calling the API.
    - Fetch every project's statuses concurrently and wait for all of them.
    - A project whose fetch fails contributes no statuses and is logged.
    - Keep statuses not matched by :func:`is_completed_status`, deduplicated
      in first-seen order.

    Fetch failures never produce ``Err``.
    """
    if not project_ids:
        return Ok([])

    workers = max(1, min(max_workers, len(project_ids)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        per_project = list(
            pool.map(lambda project_id: _fetch_statuses_or_empty(gateway, project_id), project_ids)
        )

    active_ids: List[int] = []
    seen = set()
    for statuses in per_project:
        for status in statuses:
            if is_completed_status(status.name) or status.id in seen:
                continue
            seen.add(status.id)
            active_ids.append(status.id)

    logger.debug(
        "Resolved active statuses",
        extra={"projects": len(project_ids), "active_status_ids": len(active_ids)},
    )
    return Ok(active_ids)
