"""Command-line argument parsing for Backlog Fire Tasks."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from .filters import STATUS_FILTERS


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the task dashboard.

    Connection settings come from the environment (``BACKLOG_SPACE_URL``,
    ``BACKLOG_API_KEY``, ``PROJECT_KEYS``, ``MEMBER_KEYS``, ``TASK_LIMIT``);
    the flags below only shape the output.

    Returns:
        Parsed CLI arguments.
    """
    parser = argparse.ArgumentParser(
        prog="backlog-fire-tasks",
        description=(
            "List Backlog tasks grouped by due-date urgency "
            "(overdue, due tomorrow, within deadline)."
        ),
    )

    parser.add_argument(
        "--filter",
        dest="status_filter",
        choices=STATUS_FILTERS,
        default="all",
        help="Show only overdue or due-tomorrow tasks (default: all).",
    )
    parser.add_argument(
        "--assignee",
        default="all",
        help="Show only tasks assigned to this display name.",
    )
    parser.add_argument(
        "--project",
        default="all",
        help="Show only tasks of this project key.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the filtered tasks as JSON instead of a text report.",
    )
    parser.add_argument(
        "--list-users",
        action="store_true",
        help="Print space users (id, userId, name) to help fill MEMBER_KEYS, then exit.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser.parse_args(argv)
