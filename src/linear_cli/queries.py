"""GraphQL query text for the Linear API.

Every list query takes ``$first``/``$after`` and selects ``pageInfo`` so that
``LinearClient.fetch_paginated`` can walk the cursor.
"""

from __future__ import annotations

LIST_TEAMS = """
query Teams($first: Int, $after: String) {
  teams(first: $first, after: $after) {
    pageInfo { hasNextPage endCursor }
    nodes {
      id
      name
      key
      description
    }
  }
}
"""

LIST_PROJECTS = """
query Projects($first: Int, $after: String) {
  projects(first: $first, after: $after) {
    pageInfo { hasNextPage endCursor }
    nodes {
      id
      name
      description
      state
      startDate
      targetDate
      completedAt
      createdAt
      labels { nodes { id name } }
      teams { nodes { id name } }
    }
  }
}
"""

_ISSUE_FIELDS = """
      id
      identifier
      title
      state { id name type }
      assignee { id name }
      team { id name key }
      project { id name }
      priority
      estimate
      startedAt
      completedAt
      labels { nodes { name } }
      createdAt
      updatedAt
"""

LIST_ISSUES = (
    """
query Issues($first: Int, $after: String) {
  issues(first: $first, after: $after) {
    pageInfo { hasNextPage endCursor }
    nodes {"""
    + _ISSUE_FIELDS
    + """    }
  }
}
"""
)

LIST_TEAM_ISSUES = (
    """
query TeamIssues($first: Int, $after: String, $teamId: ID) {
  issues(first: $first, after: $after, filter: { team: { id: { eq: $teamId } } }) {
    pageInfo { hasNextPage endCursor }
    nodes {"""
    + _ISSUE_FIELDS
    + """    }
  }
}
"""
)

# Single-record lookups. Linear resolves ``issue(id:)`` by UUID or by
# identifier (``ENG-123``).

GET_ISSUE = (
    """
query Issue($id: String!) {
  issue(id: $id) {"""
    + _ISSUE_FIELDS
    + """      description
      comments(first: 50) {
        nodes {
          body
          createdAt
          user { id name }
        }
      }
  }
}
"""
)

GET_TEAM = """
query Team($id: String!) {
  team(id: $id) {
    id
    name
    key
    description
    members(first: 100) { nodes { id name email } }
    states(first: 100) { nodes { id name type } }
    labels(first: 100) { nodes { id name } }
  }
}
"""

GET_PROJECT = """
query Project($id: String!) {
  project(id: $id) {
    id
    name
    description
    state
    progress
    startDate
    targetDate
    completedAt
    createdAt
    lead { id name }
    labels { nodes { id name } }
    teams { nodes { id name } }
    members(first: 100) { nodes { id name email } }
    issues(first: 100) {
      nodes {
        id
        identifier
        title
        estimate
        state { id name type }
        assignee { id name }
      }
    }
  }
}
"""
