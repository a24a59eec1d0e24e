"""TypedDicts for the records returned by the Linear GraphQL API.

Every optional field may be present with a ``None`` value; consumers use
``.get()`` and treat ``None`` the same as a missing key.
"""

from __future__ import annotations

from typing import NewType, TypedDict

ISOTimestamp = NewType("ISOTimestamp", str)


class NodeRef(TypedDict):
    """Minimal ``{id, name}`` reference embedded in other records."""

    id: str
    name: str


class LabelNode(TypedDict, total=False):
    id: str
    name: str


class LabelConnection(TypedDict):
    nodes: list[LabelNode]


class TeamConnection(TypedDict):
    nodes: list[NodeRef]


class StateRef(TypedDict, total=False):
    id: str
    name: str
    type: str


class TeamRecord(TypedDict, total=False):
    id: str
    name: str
    key: str
    description: str | None


class ProjectRecord(TypedDict, total=False):
    id: str
    name: str
    description: str | None
    state: str | None
    labels: LabelConnection | list[str | LabelNode] | None
    teams: TeamConnection | None


class IssueRecord(TypedDict, total=False):
    id: str
    identifier: str
    title: str
    estimate: float | None
    assignee: NodeRef | None
    team: NodeRef | None
    project: NodeRef | None
    state: StateRef | None
    priority: int | None
    labels: LabelConnection | list[str | LabelNode] | None
    completedAt: ISOTimestamp | None
    createdAt: ISOTimestamp
    updatedAt: ISOTimestamp | None



class UserRef(TypedDict, total=False):
    id: str
    name: str
    email: str


class UserConnection(TypedDict):
    nodes: list[UserRef]


class StateConnection(TypedDict):
    nodes: list[StateRef]


class CommentNode(TypedDict, total=False):
    body: str
    createdAt: ISOTimestamp
    user: UserRef | None


class CommentConnection(TypedDict):
    nodes: list[CommentNode]


class IssueConnection(TypedDict):
    nodes: list[IssueRecord]


class IssueDetail(IssueRecord, total=False):
    """``issue(id:)`` result: the list fields plus description and comments."""

    description: str | None
    comments: CommentConnection | None


class TeamDetail(TeamRecord, total=False):
    members: UserConnection | None
    states: StateConnection | None
    labels: LabelConnection | None


class ProjectDetail(ProjectRecord, total=False):
    progress: float | None
    startDate: str | None
    targetDate: str | None
    lead: UserRef | None
    members: UserConnection | None
    issues: IssueConnection | None

class ClientSettings(TypedDict, total=False):
    """Shape of .linear/config.json."""

    api_url: str
    safe_mode: bool
    page_size: int
    timeout: float
    log_dir: str
