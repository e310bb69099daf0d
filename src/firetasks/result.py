"""Two-variant result type threaded through every fallible call.

A fallible function returns either ``Ok(value)`` or ``Err(error)`` where
``error`` is a :class:`~firetasks.errors.FireTasksError` instance. Callers
branch on :meth:`is_ok` / :meth:`is_err` and pass ``Err`` values up
unchanged, so the first failure reaches the caller verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err[E]]
