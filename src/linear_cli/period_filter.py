"""Filter issues by reporting period.

Periods:
    all      issues dated within the last N calendar months (default 6)
    month    issues dated in the current calendar month
    quarter  issues dated in the current calendar quarter
    year     issues dated in the current calendar year

An issue is dated by its completion timestamp, falling back to its creation
timestamp. Any other period string passes every issue through unfiltered.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime

from linear_cli.dates import as_utc, months_ago, parse_date, quarter_of, reference_date_string
from linear_cli.types.core import IssueRecord

logger = logging.getLogger(__name__)

MONTHS_LOOKBACK = 6


class PeriodFilter:
    """Select the issues that fall inside a reporting period."""

    def __init__(self, months_lookback: int = MONTHS_LOOKBACK) -> None:
        if months_lookback < 1:
            msg = f"months_lookback must be at least 1, got {months_lookback}"
            raise ValueError(msg)
        self.months_lookback = months_lookback

    def filter(
        self,
        issues: Iterable[IssueRecord] | None,
        period: str,
        *,
        now: datetime | None = None,
    ) -> list[IssueRecord]:
        if not issues:
            return []
        issues = list(issues)
        current = as_utc(now)

        if period == "all":
            cutoff = self.cutoff_date(now=current)
            return [i for i in issues if self._on_or_after(i, cutoff)]
        if period in ("month", "quarter", "year"):
            return [i for i in issues if self._in_same_period(i, period, current)]
        return issues

    def cutoff_date(self, *, now: datetime | None = None) -> date:
        """First calendar date (inclusive) covered by the "all" period."""
        return months_ago(as_utc(now).date(), self.months_lookback)

    def _issue_date(self, issue: IssueRecord) -> datetime | None:
        raw = reference_date_string(issue)
        if not raw:
            return None
        parsed = parse_date(raw)
        if parsed is None:
            logger.warning("Invalid date format on issue %s: %r", issue.get("id", "?"), raw)
        return parsed

    def _on_or_after(self, issue: IssueRecord, cutoff: date) -> bool:
        dt = self._issue_date(issue)
        if dt is None:
            return False
        return dt.date() >= cutoff

    def _in_same_period(self, issue: IssueRecord, period: str, current: datetime) -> bool:
        dt = self._issue_date(issue)
        if dt is None:
            return False
        if dt.year != current.year:
            return False
        if period == "month":
            return dt.month == current.month
        if period == "quarter":
            return quarter_of(dt.month) == quarter_of(current.month)
        return True


def filter_issues_by_period(
    issues: Iterable[IssueRecord] | None,
    period: str,
    *,
    now: datetime | None = None,
    months_lookback: int = MONTHS_LOOKBACK,
) -> list[IssueRecord]:
    """Module-level shortcut for ``PeriodFilter(months_lookback).filter(...)``."""
    return PeriodFilter(months_lookback).filter(issues, period, now=now)
