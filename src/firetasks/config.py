"""Configuration parsing and validation for Backlog Fire Tasks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .errors import AuthenticationError, ConfigurationError, FireTasksError
from .result import Err, Ok, Result

DEFAULT_TASK_LIMIT = 100
DEFAULT_SERVER_PORT = 3001
DEFAULT_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class Config:
    """Validated runtime settings for one pipeline run."""

    space_url: str
    api_key: str
    project_keys: Tuple[str, ...] = ()
    member_keys: Tuple[str, ...] = ()
    task_limit: int = DEFAULT_TASK_LIMIT
    server_port: int = DEFAULT_SERVER_PORT
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS


def _split_keys(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-delimited value, dropping blank entries."""
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _positive_int(environ: Mapping[str, str], name: str, default: int) -> int:
    """Read a positive integer from ``environ``.

    Raises:
        ConfigurationError: If the value is set but is not an integer greater than 0.
    """
    raw = environ.get(name, "").strip()
    if not raw:
        return default

    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"Invalid value for '{name}': expected an integer, got '{raw}'."
        ) from exc

    if value <= 0:
        raise ConfigurationError(
            f"Invalid value for '{name}': expected an integer greater than 0."
        )

    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> Result[Config, FireTasksError]:
    """Build and validate configuration from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        ``Ok(Config)`` on success. ``Err(AuthenticationError)`` when
        ``BACKLOG_API_KEY`` is missing, ``Err(ConfigurationError)`` when
        ``BACKLOG_SPACE_URL`` is missing or a numeric setting is invalid.
    """
    env = os.environ if environ is None else environ

    space_url = env.get("BACKLOG_SPACE_URL", "").strip()
    if not space_url:
        return Err(
            ConfigurationError(
                "Missing required Backlog space URL. "
                "Set the 'BACKLOG_SPACE_URL' environment variable."
            )
        )

    api_key = env.get("BACKLOG_API_KEY", "").strip()
    if not api_key:
        return Err(
            AuthenticationError(
                "Missing required Backlog API key. "
                "Set the 'BACKLOG_API_KEY' environment variable."
            )
        )

    try:
        task_limit = _positive_int(env, "TASK_LIMIT", DEFAULT_TASK_LIMIT)
        server_port = _positive_int(env, "SERVER_PORT", DEFAULT_SERVER_PORT)
        timeout_seconds = _positive_int(env, "BACKLOG_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
    except ConfigurationError as exc:
        return Err(exc)

    return Ok(
        Config(
            space_url=space_url.rstrip("/"),
            api_key=api_key,
            project_keys=_split_keys(env.get("PROJECT_KEYS")),
            member_keys=_split_keys(env.get("MEMBER_KEYS")),
            task_limit=task_limit,
            server_port=server_port,
            timeout_seconds=timeout_seconds,
        )
    )
