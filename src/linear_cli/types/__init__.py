"""Typed record and return-value contracts for linear_cli."""

from __future__ import annotations

from linear_cli.types.analytics import (
    CapitalizationMetrics,
    CompletionRate,
    ContributorWorkload,
    MonthBucket,
    ProjectWorkload,
    Report,
    ReportSummary,
    TeamWorkload,
)
from linear_cli.types.core import (
    ClientSettings,
    IssueDetail,
    IssueRecord,
    ISOTimestamp,
    NodeRef,
    ProjectDetail,
    ProjectRecord,
    TeamDetail,
    TeamRecord,
)

__all__ = [
    "CapitalizationMetrics",
    "ClientSettings",
    "CompletionRate",
    "ContributorWorkload",
    "ISOTimestamp",
    "IssueDetail",
    "IssueRecord",
    "MonthBucket",
    "NodeRef",
    "ProjectDetail",
    "ProjectRecord",
    "ProjectWorkload",
    "Report",
    "ReportSummary",
    "TeamDetail",
    "TeamRecord",
    "TeamWorkload",
]

# IMPORT CONSTRAINT: types/ modules must only import from typing, stdlib, and each other.
