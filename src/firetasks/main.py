"""Entry point wiring configuration, the Backlog client, and the task pipeline."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from .backlog_client import BacklogClient
from .cli import parse_args
from .config import Config, load_config
from .errors import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    FireTasksError,
    ScopingError,
)
from .filters import compute_task_stats, filter_tasks
from .pipeline import fetch_backlog_tasks
from .report import generate_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIGURATION = 2
EXIT_AUTHENTICATION = 3
EXIT_API = 4
EXIT_SCOPING = 5

_EXIT_CODES = (
    (AuthenticationError, EXIT_AUTHENTICATION),
    (ConfigurationError, EXIT_CONFIGURATION),
    (ApiError, EXIT_API),
    (ScopingError, EXIT_SCOPING),
)


def exit_code_for(error: FireTasksError) -> int:
    """Map an error to the process exit code."""
    for error_type, code in _EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return EXIT_UNEXPECTED


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _render_dashboard(args: argparse.Namespace, config: Config, client: BacklogClient) -> int:
    """Fetch tasks (or users) through ``client`` and print them."""
    if args.list_users:
        users_result = client.fetch_users()
        if users_result.is_err():
            logger.error("%s", users_result.error)
            return exit_code_for(users_result.error)
        for user in users_result.value:
            print(f"{user.id}\t{user.user_id}\t{user.name}")
        return EXIT_OK

    tasks_result = fetch_backlog_tasks(config, client)
    if tasks_result.is_err():
        logger.error("%s", tasks_result.error)
        return exit_code_for(tasks_result.error)
    tasks = tasks_result.value

    shown = filter_tasks(
        tasks,
        status_filter=args.status_filter,
        assignee=args.assignee,
        project=args.project,
    )

    if args.json:
        print(json.dumps([task.to_dict() for task in shown], ensure_ascii=False, indent=2))
    else:
        stats = compute_task_stats(tasks, shown)
        print(generate_report(shown, stats, config.space_url))
    return EXIT_OK


def orchestrate_dashboard(argv: Optional[Sequence[str]] = None) -> int:
    """Run one dashboard pass and return the process exit code."""
    try:
        args = parse_args(argv)
        configure_logging(args.verbose)

        config_result = load_config()
        if config_result.is_err():
            logger.error("%s", config_result.error)
            return exit_code_for(config_result.error)
        config = config_result.value

        with BacklogClient(config=config) as client:
            return _render_dashboard(args, config, client)
    except Exception:
        logger.exception("Unexpected error while building the task dashboard")
        return EXIT_UNEXPECTED


def main() -> None:
    """Console-script entry point."""
    raise SystemExit(orchestrate_dashboard())


if __name__ == "__main__":
    main()
