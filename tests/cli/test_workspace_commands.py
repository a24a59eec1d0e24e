"""CLI tests for browsing teams and projects."""

from __future__ import annotations

import json
from collections.abc import Callable

import pytest
from click.testing import Result

from tests._graphql import FakeLinear

Run = Callable[..., Result]


class TestTeamsList:
    def test_table(self, run: Run) -> None:
        result = run("teams", "list")
        assert result.exit_code == 0, result.output
        assert "Platform" in result.output
        assert "MOB" in result.output
        assert "2 teams" in result.output

    def test_json(self, run: Run) -> None:
        result = run("teams", "list", "--json")
        assert result.exit_code == 0, result.output
        assert [t["key"] for t in json.loads(result.output)] == ["PLT", "MOB"]

    def test_empty_workspace(self, run: Run) -> None:
        result = run("teams", "list", transport=FakeLinear().transport)
        assert result.exit_code == 0, result.output
        assert "No teams found." in result.output


class TestTeamsView:
    @pytest.fixture
    def detailed(self) -> FakeLinear:
        team = {
            "id": "t1",
            "name": "Platform",
            "key": "PLT",
            "description": "Payments and billing",
            "members": {"nodes": [{"id": "u1", "name": "Ann", "email": "ann@example.com"}]},
            "states": {"nodes": [{"id": "s1", "name": "In Review", "type": "started"}]},
            "labels": {"nodes": [{"id": "l1", "name": "CapEx"}]},
        }
        return FakeLinear([team])

    def test_text(self, run: Run, detailed: FakeLinear) -> None:
        result = run("teams", "view", "plt", transport=detailed.transport)
        assert result.exit_code == 0, result.output
        assert result.output.startswith("PLT: Platform\n")
        assert "Description: Payments and billing" in result.output
        assert "Members (1):" in result.output
        assert "ann@example.com" in result.output
        assert "In Review" in result.output
        assert "Labels: CapEx" in result.output
        assert detailed.operations() == ["Teams", "Team"]
        assert detailed.requests[1]["variables"] == {"id": "t1"}

    def test_sparse_team(self, run: Run) -> None:
        result = run("teams", "view", "Mobile")
        assert result.exit_code == 0, result.output
        assert "Description: No description" in result.output
        assert "Members (0):" in result.output

    def test_json(self, run: Run, detailed: FakeLinear) -> None:
        result = run("teams", "view", "Platform", "--json", transport=detailed.transport)
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["members"]["nodes"][0]["name"] == "Ann"

    def test_unknown_team(self, run: Run) -> None:
        result = run("teams", "view", "Growth")
        assert result.exit_code == 1
        assert "Team 'Growth' not found" in result.output

    def test_blank_team(self, run: Run) -> None:
        result = run("teams", "view", " ", "--json")
        assert result.exit_code == 1
        assert json.loads(result.output) == {"error": "Team name cannot be blank."}


class TestProjectsList:
    def test_table_marks_capitalized(self, run: Run) -> None:
        result = run("projects", "list")
        assert result.exit_code == 0, result.output
        billing = next(line for line in result.output.splitlines() if line.startswith("Billing"))
        assert "yes" in billing
        store = next(line for line in result.output.splitlines() if line.startswith("App Store"))
        assert "yes" not in store
        assert "3 projects" in result.output

    def test_filter_by_team(self, run: Run, fake_linear: FakeLinear) -> None:
        result = run("projects", "list", "--team", "Mobile", "--json")
        assert result.exit_code == 0, result.output
        assert [p["name"] for p in json.loads(result.output)] == ["Design System", "App Store"]
        assert fake_linear.operations()[0] == "Teams"

    def test_unknown_team(self, run: Run) -> None:
        result = run("projects", "list", "--team", "Growth", "--json")
        assert result.exit_code == 1
        assert json.loads(result.output)["error"].startswith("Team 'Growth' not found")


class TestProjectsView:
    def test_text_lists_project_issues(self, run: Run) -> None:
        result = run("projects", "view", "p2")
        assert result.exit_code == 0, result.output
        assert result.output.startswith("Design System\n")
        assert "Teams: Platform, Mobile" in result.output
        assert "Capitalized: no" in result.output
        assert "No description provided." in result.output
        assert "Issues (2):" in result.output

    def test_detail_fields(self, run: Run) -> None:
        project = {
            "id": "p9",
            "name": "Ledger",
            "state": "started",
            "progress": 0.4,
            "lead": {"id": "u1", "name": "Ann"},
            "targetDate": "2023-09-30",
            "labels": {"nodes": [{"name": "Capitalization"}]},
            "members": {"nodes": [{"id": "u1", "name": "Ann"}, {"id": "u2", "name": "Bob"}]},
        }
        result = run("projects", "view", "p9", transport=FakeLinear(projects=[project]).transport)
        assert result.exit_code == 0, result.output
        assert "Progress: 40%" in result.output
        assert "Lead: Ann" in result.output
        assert "Start Date: Not set" in result.output
        assert "Target Date: 2023-09-30" in result.output
        assert "Capitalized: yes" in result.output
        assert "Members: Ann, Bob" in result.output
        assert "Issues (0):" in result.output

    def test_json(self, run: Run) -> None:
        result = run("projects", "view", "p1", "--json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["name"] == "Billing"
        assert len(data["issues"]["nodes"]) == 2

    def test_not_found(self, run: Run) -> None:
        result = run("projects", "view", "nope")
        assert result.exit_code == 1
        assert "Project not found: nope" in result.output
