"""Tests for command-line argument parsing."""

import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from firetasks.cli import parse_args


def test_parse_args_defaults(monkeypatch):
    """Verify CLI parsing falls back to showing every task as a text report."""
    monkeypatch.setattr(sys, "argv", ["backlog-fire-tasks"])

    args = parse_args()

    assert args.status_filter == "all"
    assert args.assignee == "all"
    assert args.project == "all"
    assert args.json is False
    assert args.list_users is False
    assert args.verbose is False


def test_parse_args_with_filters():
    """Verify filter flags are parsed from an explicit argv."""
    args = parse_args(
        ["--filter", "overdue", "--assignee", "Tanaka", "--project", "TEST", "--json", "--verbose"]
    )

    assert args.status_filter == "overdue"
    assert args.assignee == "Tanaka"
    assert args.project == "TEST"
    assert args.json is True
    assert args.verbose is True


def test_parse_args_list_users():
    """Verify the user listing flag."""
    assert parse_args(["--list-users"]).list_users is True


def test_parse_args_with_unknown_filter_fails_validation():
    """Verify CLI parsing exits with an error for an unsupported status filter."""
    with pytest.raises(SystemExit):
        parse_args(["--filter", "completed"])
