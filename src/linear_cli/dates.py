"""Date helpers shared by the period filter and the monthly processor.

All comparisons happen in UTC. Month arithmetic is calendar based
(``relativedelta``), so "six months before August 31st" is February 28th/29th
rather than a fixed number of days.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any

from dateutil import parser as dtparser
from dateutil.relativedelta import relativedelta

from linear_cli.types.core import IssueRecord

# Fills the parts a loose string leaves out, so "June 2023" means June 1st.
_LOOSE_DEFAULT = datetime(2000, 1, 1)


def parse_date(value: Any) -> datetime | None:
    """Parse an ISO-8601 or loose date string into an aware UTC datetime.

    Accepts ``datetime`` and ``date`` objects as-is. Naive values are assumed
    to be UTC. Returns None when the value cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            try:
                dt = dtparser.parse(text, default=_LOOSE_DEFAULT)
            except (ValueError, OverflowError):
                return None
    else:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def reference_date_string(issue: IssueRecord) -> Any:
    """Return completedAt when present, else createdAt (either may be None)."""
    return issue.get("completedAt") or issue.get("createdAt")


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(now: datetime | None) -> datetime:
    """Normalise an optional "now" to an aware UTC datetime."""
    if now is None:
        return utc_now()
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now.astimezone(UTC)


def months_ago(day: date, months: int) -> date:
    """Calendar-month subtraction, clamping to the end of shorter months."""
    return day - relativedelta(months=months)


def quarter_of(month: int) -> int:
    """Quarter number (1-4) for a month number (1-12)."""
    return (month - 1) // 3 + 1


def month_key(dt: date) -> str:
    return f"{dt.year:04d}-{dt.month:02d}"


def month_label(dt: date) -> str:
    return dt.strftime("%B %Y")
