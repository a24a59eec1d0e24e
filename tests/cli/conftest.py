"""Fixtures for CLI interface tests.

Commands run against a FakeLinear endpoint handed in through ``ctx.obj``;
no network, no real API key, no config file from the developer's machine.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner, Result

from linear_cli.cli import cli
from linear_cli.dates import months_ago, utc_now
from linear_cli.logging import LOGGER_NAME
from tests._factories import make_issue, make_project, make_team
from tests._graphql import FakeLinear

CLI_ENV: dict[str, str | None] = {
    "LINEAR_API_KEY": "lin_api_test",
    "LINEAR_API_URL": None,
    "LINEAR_SAFE_MODE": None,
    "LINEAR_CLI_LOG_DIR": None,
}


@pytest.fixture
def live_workspace() -> dict[str, Any]:
    """Workspace whose issues are dated relative to the real clock.

    Creates:
    - teams t1 (Platform) and t2 (Mobile)
    - p1 Billing (t1, capitalized), p2 Design System (t1 + t2), p3 App Store (t2)
    - this month: t1/p1 Ann 5pt, t1/p2 Bob 3pt, t2/p3 Bob 2pt (all completed)
      and an open, unestimated t2/p2 issue
    - one completed t1/p1 issue from three years ago
    """
    now = utc_now()
    this_month = now.isoformat()
    long_ago = months_ago(now.date(), 36).isoformat()
    t1 = make_team("t1", "Platform", "PLT")
    t2 = make_team("t2", "Mobile", "MOB")
    p1 = make_project("p1", "Billing", teams=[t1], labels=["Capitalization"])
    p2 = make_project("p2", "Design System", teams=[t1, t2])
    p3 = make_project("p3", "App Store", teams=[t2])
    ann = ("u1", "Ann")
    bob = ("u2", "Bob")
    issues = [
        make_issue(team=t1, project=p1, assignee=ann, estimate=5, completed_at=this_month, state="Done"),
        make_issue(team=t1, project=p2, assignee=bob, estimate=3, completed_at=this_month, state="Done"),
        make_issue(team=t2, project=p3, assignee=bob, estimate=2, completed_at=this_month, state="Done"),
        make_issue(team=t2, project=p2, assignee=ann, estimate=None, created_at=this_month),
        make_issue(team=t1, project=p1, assignee=ann, estimate=8, completed_at=long_ago, created_at=long_ago),
    ]
    return {"teams": [t1, t2], "projects": [p1, p2, p3], "issues": issues}


@pytest.fixture
def fake_linear(live_workspace: dict[str, Any]) -> FakeLinear:
    return FakeLinear(live_workspace["teams"], live_workspace["projects"], live_workspace["issues"], page_size=2)


@pytest.fixture
def run(
    cli_runner: CliRunner,
    fake_linear: FakeLinear,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[Callable[..., Result], None, None]:
    """Invoke the CLI against ``fake_linear`` from an empty working directory."""
    monkeypatch.chdir(tmp_path)

    def invoke(*args: str, env: dict[str, str | None] | None = None, transport: Any = None) -> Result:
        merged = dict(CLI_ENV)
        merged.update(env or {})
        obj = {"transport": transport or fake_linear.transport}
        return cli_runner.invoke(cli, list(args), obj=obj, env=merged)

    yield invoke

    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
