"""Monthly time series of workload rollups over a rolling lookback window."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Literal

from linear_cli.dates import as_utc, month_key, month_label, months_ago, parse_date, reference_date_string
from linear_cli.types.analytics import MonthBucket, MonthlyReport
from linear_cli.types.core import IssueRecord, ProjectRecord, TeamRecord
from linear_cli.workload import WorkloadCalculator

logger = logging.getLogger(__name__)

DEFAULT_MONTHS_BACK = 6

UnparseablePolicy = Literal["exclude", "current_month"]


class MonthlyProcessor:
    """Split issues into calendar-month buckets and roll each one up.

    ``unparseable`` decides what happens to an issue whose reference date
    cannot be parsed: ``"exclude"`` drops it with a warning (the same rule the
    period filter applies), ``"current_month"`` files it under the current
    month.
    """

    def __init__(
        self,
        calculator: WorkloadCalculator | None = None,
        *,
        months_back: int = DEFAULT_MONTHS_BACK,
        unparseable: UnparseablePolicy = "exclude",
    ) -> None:
        if months_back < 1:
            msg = f"months_back must be at least 1, got {months_back}"
            raise ValueError(msg)
        if unparseable not in ("exclude", "current_month"):
            msg = f"Unknown unparseable-date policy: {unparseable!r}"
            raise ValueError(msg)
        self.calculator = calculator or WorkloadCalculator()
        self.months_back = months_back
        self.unparseable = unparseable

    def group_by_month(
        self,
        issues: Iterable[IssueRecord] | None,
        months_back: int | None = None,
        *,
        now: datetime | None = None,
    ) -> dict[str, MonthBucket]:
        """Return exactly ``months_back`` buckets, newest first.

        Every month in the window is present even when no issue falls in it.
        Issues dated outside the window land in no bucket.
        """
        count = self.months_back if months_back is None else months_back
        if count < 1:
            msg = f"months_back must be at least 1, got {count}"
            raise ValueError(msg)
        current = as_utc(now)
        first_of_month = current.date().replace(day=1)

        buckets: dict[str, MonthBucket] = {}
        for offset in range(count):
            month_start = months_ago(first_of_month, offset)
            buckets[month_key(month_start)] = {"name": month_label(month_start), "issues": []}

        current_key = month_key(first_of_month)
        for issue in issues or []:
            raw = reference_date_string(issue)
            if not raw:
                continue
            parsed = parse_date(raw)
            if parsed is None:
                if self.unparseable == "current_month":
                    logger.warning(
                        "Invalid date format on issue %s: %r, counting it in %s", issue.get("id", "?"), raw, current_key
                    )
                    key = current_key
                else:
                    logger.warning("Invalid date format on issue %s: %r", issue.get("id", "?"), raw)
                    continue
            else:
                key = month_key(parsed)
            bucket = buckets.get(key)
            if bucket is not None:
                bucket["issues"].append(issue)
        return buckets

    def process_monthly_data(
        self,
        issues: Iterable[IssueRecord] | None,
        teams: Iterable[TeamRecord] | None,
        projects: Iterable[ProjectRecord] | None,
        *,
        now: datetime | None = None,
    ) -> dict[str, MonthlyReport]:
        """Multi-team rollup per month, annotated with month_name and issue_count."""
        teams = list(teams or [])
        projects = list(projects or [])
        reports: dict[str, MonthlyReport] = {}
        for key, bucket in self.group_by_month(issues, now=now).items():
            report: MonthlyReport = dict(
                self.calculator.engineer_project_workload(bucket["issues"], teams, projects)
            )
            report["month_name"] = bucket["name"]
            report["issue_count"] = len(bucket["issues"])
            reports[key] = report
        return reports

    def process_monthly_team_data(
        self,
        issues: Iterable[IssueRecord] | None,
        team: TeamRecord,
        projects: Iterable[ProjectRecord] | None,
        *,
        now: datetime | None = None,
    ) -> dict[str, MonthlyReport]:
        """Single-team rollup per month, annotated with month_name and issue_count."""
        projects = list(projects or [])
        reports: dict[str, MonthlyReport] = {}
        for key, bucket in self.group_by_month(issues, now=now).items():
            report: MonthlyReport = dict(self.calculator.team_project_workload(bucket["issues"], team, projects))
            report["month_name"] = bucket["name"]
            report["issue_count"] = len(bucket["issues"])
            reports[key] = report
        return reports


def group_by_month(
    issues: Iterable[IssueRecord] | None,
    months_back: int = DEFAULT_MONTHS_BACK,
    *,
    now: datetime | None = None,
) -> dict[str, MonthBucket]:
    return MonthlyProcessor(months_back=months_back).group_by_month(issues, now=now)
