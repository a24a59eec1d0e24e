"""Shared pytest fixtures for linear_cli tests."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest
from click.testing import CliRunner

from tests._factories import make_issue, make_project, make_team

NOW = datetime(2023, 6, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time: 2023-06-15 12:00 UTC."""
    return NOW


@pytest.fixture
def workspace() -> dict[str, Any]:
    """A small workspace with two teams, a shared project, and mixed issues.

    Creates:
    - teams t1 (Platform) and t2 (Mobile)
    - p1 owned by t1 (labeled "Capitalization"), p2 shared by t1 and t2,
      p3 owned by t2 (unlabeled)
    - issues across both teams, some completed, some unestimated
    """
    t1 = make_team("t1", "Platform", "PLT")
    t2 = make_team("t2", "Mobile", "MOB")
    p1 = make_project("p1", "Billing", teams=[t1], labels=["Capitalization"])
    p2 = make_project("p2", "Design System", teams=[t1, t2])
    p3 = make_project("p3", "App Store", teams=[t2])
    ann = ("u1", "Ann")
    bob = ("u2", "Bob")
    issues = [
        make_issue(team=t1, project=p1, assignee=ann, estimate=5, completed_at="2023-06-10T09:00:00Z"),
        make_issue(team=t1, project=p1, assignee=bob, estimate=3, completed_at="2023-05-20T09:00:00Z"),
        make_issue(team=t1, project=p2, assignee=ann, estimate=2, completed_at="2023-06-02T09:00:00Z"),
        make_issue(team=t2, project=p2, assignee=bob, estimate=8, completed_at="2023-04-11T09:00:00Z"),
        make_issue(team=t2, project=p3, assignee=None, estimate=None, created_at="2023-06-05T09:00:00Z"),
        make_issue(team=t1, project=None, assignee=ann, estimate=1, state="Done", completed_at="2023-03-01T09:00:00Z"),
    ]
    return {"teams": [t1, t2], "projects": [p1, p2, p3], "issues": issues}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()
