"""Tests for application orchestration in the main module."""

import json
import sys
from argparse import Namespace
from pathlib import Path
from unittest.mock import MagicMock, patch

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from firetasks.config import Config
from firetasks.errors import ApiError, AuthenticationError, ConfigurationError, ScopingError
from firetasks.main import orchestrate_dashboard
from firetasks.models import RawUser, Task
from firetasks.result import Err, Ok

CONFIG = Config(space_url="https://example.backlog.com", api_key="secret")


def _args(**overrides) -> Namespace:
    values = {
        "status_filter": "all",
        "assignee": "all",
        "project": "all",
        "json": False,
        "list_users": False,
        "verbose": False,
    }
    values.update(overrides)
    return Namespace(**values)


def _client() -> MagicMock:
    client = MagicMock()
    client.__enter__.return_value = client
    client.__exit__.return_value = False
    return client


def _task(task_id: int, overdue_days: int = 0) -> Task:
    return Task(
        id=task_id,
        project_key="TEST",
        issue_key=f"TEST-{task_id}",
        issue_type="Task",
        summary=f"Task {task_id}",
        status="Open",
        updated="2024/01/15 18:00",
        is_overdue=overdue_days > 0,
        overdue_days=overdue_days,
        is_due_tomorrow=False,
    )


def test_orchestrate_dashboard_success(capsys):
    """Verify orchestration returns 0 and wires components correctly on success."""
    client = _client()
    tasks = [_task(1, overdue_days=2), _task(2)]

    with patch("firetasks.main.parse_args", return_value=_args()) as parse_args_mock, patch(
        "firetasks.main.load_config", return_value=Ok(CONFIG)
    ), patch("firetasks.main.BacklogClient", return_value=client) as client_ctor_mock, patch(
        "firetasks.main.fetch_backlog_tasks", return_value=Ok(tasks)
    ) as fetch_mock, patch(
        "firetasks.main.generate_report", return_value="REPORT"
    ) as report_mock:
        exit_code = orchestrate_dashboard()

    assert exit_code == 0
    parse_args_mock.assert_called_once_with(None)
    client_ctor_mock.assert_called_once_with(config=CONFIG)
    fetch_mock.assert_called_once_with(CONFIG, client)
    client.__exit__.assert_called_once()
    shown, stats, space_url = report_mock.call_args.args
    assert shown == tasks
    assert stats.total == 2
    assert stats.overdue == 1
    assert space_url == "https://example.backlog.com"
    assert "REPORT" in capsys.readouterr().out


def test_orchestrate_dashboard_json_output_applies_filter(capsys):
    """Verify --json prints only the filtered tasks with camelCase keys."""
    tasks = [_task(1, overdue_days=2), _task(2)]

    with patch("firetasks.main.parse_args", return_value=_args(json=True, status_filter="overdue")), patch(
        "firetasks.main.load_config", return_value=Ok(CONFIG)
    ), patch("firetasks.main.BacklogClient", return_value=_client()), patch(
        "firetasks.main.fetch_backlog_tasks", return_value=Ok(tasks)
    ):
        exit_code = orchestrate_dashboard()

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert [item["issueKey"] for item in payload] == ["TEST-1"]
    assert payload[0]["overdueDays"] == 2


def test_orchestrate_dashboard_list_users(capsys):
    """Verify --list-users prints users and skips the task pipeline."""
    client = _client()
    client.fetch_users.return_value = Ok([RawUser(id=5, user_id="tanaka", name="Tanaka")])

    with patch("firetasks.main.parse_args", return_value=_args(list_users=True)), patch(
        "firetasks.main.load_config", return_value=Ok(CONFIG)
    ), patch("firetasks.main.BacklogClient", return_value=client), patch(
        "firetasks.main.fetch_backlog_tasks"
    ) as fetch_mock:
        exit_code = orchestrate_dashboard()

    assert exit_code == 0
    assert "5\ttanaka\tTanaka" in capsys.readouterr().out
    fetch_mock.assert_not_called()


def test_orchestrate_dashboard_missing_api_key_returns_auth_error():
    """Verify missing API key failures return the authentication exit code."""
    with patch("firetasks.main.parse_args", return_value=_args()), patch(
        "firetasks.main.load_config",
        return_value=Err(AuthenticationError("Missing required Backlog API key.")),
    ):
        exit_code = orchestrate_dashboard()

    assert exit_code == 3


def test_orchestrate_dashboard_missing_url_returns_config_error():
    """Verify configuration failures return the configuration exit code."""
    with patch("firetasks.main.parse_args", return_value=_args()), patch(
        "firetasks.main.load_config",
        return_value=Err(ConfigurationError("Missing required Backlog space URL.")),
    ):
        exit_code = orchestrate_dashboard()

    assert exit_code == 2


def test_orchestrate_dashboard_api_error_returns_api_exit_code():
    """Verify Backlog API failures return the API error exit code."""
    with patch("firetasks.main.parse_args", return_value=_args()), patch(
        "firetasks.main.load_config", return_value=Ok(CONFIG)
    ), patch("firetasks.main.BacklogClient", return_value=_client()), patch(
        "firetasks.main.fetch_backlog_tasks", return_value=Err(ApiError("500 (projects)"))
    ):
        exit_code = orchestrate_dashboard()

    assert exit_code == 4


def test_orchestrate_dashboard_scoping_error_returns_scoping_exit_code():
    """Verify unmatched project keys return the scoping exit code."""
    with patch("firetasks.main.parse_args", return_value=_args()), patch(
        "firetasks.main.load_config", return_value=Ok(CONFIG)
    ), patch("firetasks.main.BacklogClient", return_value=_client()), patch(
        "firetasks.main.fetch_backlog_tasks", return_value=Err(ScopingError("not found"))
    ):
        exit_code = orchestrate_dashboard()

    assert exit_code == 5


def test_orchestrate_dashboard_unexpected_error_returns_generic_exit_code():
    """Verify unexpected exceptions are mapped to the generic non-zero exit code."""
    with patch("firetasks.main.parse_args", side_effect=RuntimeError("boom")):
        exit_code = orchestrate_dashboard()

    assert exit_code == 1
