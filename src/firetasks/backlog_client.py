"""Backlog REST API client for dashboard data retrieval."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple, TypeVar

import requests

from .config import Config
from .errors import ApiError
from .models import NamedRef, RawIssue, RawProject, RawStatus, RawUser
from .result import Err, Ok, Result
from .tasks import parse_backlog_datetime

logger = logging.getLogger(__name__)

QueryParams = List[Tuple[str, Any]]
RecordT = TypeVar("RecordT")


@dataclass(frozen=True)
class IssueQuery:
    """Filters for the issue list endpoint."""

    count: int
    project_ids: Tuple[int, ...] = ()
    status_ids: Tuple[int, ...] = ()
    assignee_ids: Tuple[str, ...] = ()

    def to_params(self) -> QueryParams:
        """Render as repeated ``name[]`` query parameters, preserving order."""
        params: QueryParams = [("count", self.count)]
        params.extend(("projectId[]", project_id) for project_id in self.project_ids)
        params.extend(("statusId[]", status_id) for status_id in self.status_ids)
        params.extend(("assigneeId[]", assignee_id) for assignee_id in self.assignee_ids)
        return params


class TrackerGateway(Protocol):
    """Remote calls the aggregation pipeline depends on."""

    def fetch_projects(self) -> Result[List[RawProject], ApiError]:
        ...

    def fetch_issues(self, query: IssueQuery) -> Result[List[RawIssue], ApiError]:
        ...

    def fetch_project_statuses(self, project_id: int) -> Result[List[RawStatus], ApiError]:
        ...

    def fetch_users(self) -> Result[List[RawUser], ApiError]:
        ...


class BacklogClient:
    """Small, typed client for the Backlog v2 REST API.

    Each ``fetch_*`` method performs exactly one GET and returns ``Ok`` with
    parsed records or ``Err(ApiError)``. There is no retry policy; callers
    re-invoke when they want another attempt.
    """

    def __init__(self, config: Config, timeout_seconds: Optional[int] = None) -> None:
        """Initialize a Backlog API client.

        Args:
            config: Validated runtime configuration including space URL and API key.
            timeout_seconds: Per-request timeout in seconds. Defaults to
                ``config.timeout_seconds``.
        """
        self._config = config
        self._timeout_seconds = timeout_seconds or config.timeout_seconds
        self._base_url = f"{config.space_url.rstrip('/')}/api/v2"

        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def _build_url(self, endpoint: str) -> str:
        """Build a fully qualified API URL from a path below ``/api/v2``."""
        return f"{self._base_url}/{endpoint.lstrip('/')}"

    def close(self) -> None:
        """Release the pooled HTTP connections."""
        self._session.close()

    def __enter__(self) -> "BacklogClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _get_json(self, endpoint: str, params: Optional[QueryParams] = None) -> List[Any]:
        """Execute one GET request and return the decoded JSON array.

        Raises:
            ApiError: If the transport fails, the API returns HTTP >= 400,
                or the body is not a JSON array.
        """
        url = self._build_url(endpoint)
        query: QueryParams = [("apiKey", self._config.api_key)]
        query.extend(params or [])

        try:
            response = self._session.get(url, params=query, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise ApiError(f"Backlog API request failed ({endpoint}): {exc}") from exc

        if response.status_code >= 400:
            raise ApiError(
                "Backlog API request failed: "
                f"{response.status_code} {response.reason} ({endpoint})"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(f"Backlog API returned invalid JSON ({endpoint})") from exc

        if not isinstance(payload, list):
            raise ApiError(f"Backlog API returned unexpected payload shape ({endpoint})")

        return payload

    def _fetch(
        self,
        endpoint: str,
        parse: Callable[[Dict[str, Any]], RecordT],
        params: Optional[QueryParams] = None,
    ) -> Result[List[RecordT], ApiError]:
        """Fetch ``endpoint`` and parse every item, folding failures into ``Err``."""
        try:
            items = self._get_json(endpoint, params=params)
            records = [parse(item) for item in items]
        except ApiError as exc:
            logger.debug("Backlog request failed", extra={"endpoint": endpoint, "error": str(exc)})
            return Err(exc)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.debug("Backlog payload rejected", extra={"endpoint": endpoint, "error": str(exc)})
            return Err(ApiError(f"Backlog API returned malformed payload ({endpoint}): {exc}"))

        logger.debug("Backlog request succeeded", extra={"endpoint": endpoint, "count": len(records)})
        return Ok(records)

    def fetch_projects(self) -> Result[List[RawProject], ApiError]:
        """List projects visible to the API key."""
        return self._fetch("projects", _parse_project)

    def fetch_issues(self, query: IssueQuery) -> Result[List[RawIssue], ApiError]:
        """List issues matching ``query``, in the order the API returns them."""
        return self._fetch("issues", _parse_issue, params=query.to_params())

    def fetch_project_statuses(self, project_id: int) -> Result[List[RawStatus], ApiError]:
        """List the workflow statuses of one project."""
        return self._fetch(f"projects/{project_id}/statuses", _parse_status)

    def fetch_users(self) -> Result[List[RawUser], ApiError]:
        """List users of the space."""
        return self._fetch("users", _parse_user)


def _require(item: Dict[str, Any], fields: Sequence[str], kind: str) -> None:
    missing = [field for field in fields if item.get(field) is None]
    if missing:
        raise ApiError(
            f"Backlog {kind} payload is missing required fields {missing}: payload={item}"
        )


def _parse_ref(value: Optional[Dict[str, Any]]) -> Optional[NamedRef]:
    if not value or value.get("id") is None:
        return None
    return NamedRef(id=int(value["id"]), name=str(value.get("name") or ""))


def _parse_project(item: Dict[str, Any]) -> RawProject:
    _require(item, ("id", "projectKey"), "project")
    return RawProject(
        id=int(item["id"]),
        project_key=str(item["projectKey"]),
        name=str(item.get("name") or ""),
    )


def _parse_status(item: Dict[str, Any]) -> RawStatus:
    _require(item, ("id", "name"), "status")
    return RawStatus(id=int(item["id"]), name=str(item["name"]))


def _parse_user(item: Dict[str, Any]) -> RawUser:
    _require(item, ("id",), "user")
    return RawUser(
        id=int(item["id"]),
        user_id=str(item.get("userId") or ""),
        name=str(item.get("name") or ""),
    )


def _parse_issue(item: Dict[str, Any]) -> RawIssue:
    _require(item, ("id", "projectId", "issueKey", "issueType", "status", "updated"), "issue")
    issue_type = _parse_ref(item["issueType"])
    status = _parse_ref(item["status"])
    if issue_type is None or status is None:
        raise ApiError(f"Backlog issue payload has malformed issueType/status: payload={item}")

    updated = str(item["updated"])
    # Rejects values the task transformer cannot render.
    parse_backlog_datetime(updated)

    parent_issue_id = item.get("parentIssueId")
    return RawIssue(
        id=int(item["id"]),
        project_id=int(item["projectId"]),
        issue_key=str(item["issueKey"]),
        issue_type=issue_type,
        summary=str(item.get("summary") or ""),
        status=status,
        updated=updated,
        assignee=_parse_ref(item.get("assignee")),
        parent_issue_id=int(parent_issue_id) if parent_issue_id is not None else None,
        start_date=item.get("startDate") or None,
        due_date=item.get("dueDate") or None,
    )
