"""Due-date urgency computation.

"Today" is always the calendar date in :data:`URGENCY_TIMEZONE`, never the
process's local timezone, so the same issue classifies identically wherever
the dashboard runs.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional

import pytz

from .models import NOT_URGENT, UrgencyResult

logger = logging.getLogger(__name__)

URGENCY_TIMEZONE = "Asia/Tokyo"


def today_in_reference_timezone(now: Optional[datetime] = None) -> date:
    """Return the calendar date of ``now`` (default: current time) in Asia/Tokyo."""
    tz = pytz.timezone(URGENCY_TIMEZONE)
    if now is None:
        return datetime.now(tz).date()
    if now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(tz).date()


def calculate_overdue_status(due_date: Optional[str], now: Optional[datetime] = None) -> UrgencyResult:
    """Classify a due date as overdue, due tomorrow, or neither.

    Args:
        due_date: ISO date (``YYYY-MM-DD``) or datetime string; anything after
            ``T`` is ignored.
        now: Reference instant. Naive values are taken as UTC. Defaults to
            the current time.

    Returns:
        ``UrgencyResult`` where ``overdue_days`` is the whole-day difference
        between today and the due date for past dates, and 0 otherwise.
    """
    if not due_date:
        return NOT_URGENT

    today = today_in_reference_timezone(now)
    tomorrow = today + timedelta(days=1)
    due_day_str = due_date.split("T")[0]

    if due_day_str == today.isoformat():
        return NOT_URGENT

    if due_day_str == tomorrow.isoformat():
        return UrgencyResult(is_overdue=False, overdue_days=0, is_due_tomorrow=True)

    try:
        due_day = date.fromisoformat(due_day_str)
    except ValueError:
        logger.warning("Ignoring unparseable due date", extra={"due_date": due_date})
        return NOT_URGENT

    diff_days = (today - due_day).days
    return UrgencyResult(
        is_overdue=diff_days > 0,
        overdue_days=max(0, diff_days),
        is_due_tomorrow=False,
    )
