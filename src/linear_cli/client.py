"""Minimal GraphQL client for the Linear API.

One POST per query, cursor pagination on top. Everything the client needs,
including safe mode and an optional ``httpx`` transport for tests, comes in
through the constructor.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from time import perf_counter
from types import TracebackType
from typing import Any

import httpx

from linear_cli.config import ClientConfig

logger = logging.getLogger(__name__)

_MUTATION_RE = re.compile(r"^\s*mutation\b", re.IGNORECASE)
_OPERATION_RE = re.compile(r"^\s*(?:query|mutation)\s+(\w+)", re.IGNORECASE)

_STATUS_MESSAGES: dict[int, str] = {
    401: "Authentication failed. Please check your Linear API key.",
    403: "Access denied. Your API key doesn't have permission to perform this action.",
    404: "Resource not found. Please check the ID or name you provided.",
    429: "Rate limit exceeded. Please try again in a few minutes.",
}


class LinearAPIError(RuntimeError):
    """The Linear API rejected a request or returned GraphQL errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SafeModeError(LinearAPIError):
    """A mutation was attempted while safe mode is enabled."""


class LinearClient:
    """Send GraphQL queries to Linear and unwrap the ``data`` payload."""

    def __init__(self, config: ClientConfig, *, transport: httpx.BaseTransport | None = None) -> None:
        self.config = config
        self._http = httpx.Client(
            headers={
                "Content-Type": "application/json",
                "Authorization": config.require_api_key(),
            },
            timeout=config.timeout,
            transport=transport,
        )

    def __enter__(self) -> LinearClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute one GraphQL request and return its ``data`` object."""
        if self.config.safe_mode and _MUTATION_RE.match(query):
            msg = (
                "Operation blocked: safe mode is enabled and mutations are not allowed. "
                "Use --allow-mutations to perform this operation."
            )
            raise SafeModeError(msg)

        operation = _operation_name(query)
        start = perf_counter()
        try:
            response = self._http.post(self.config.api_url, json={"query": query, "variables": variables or {}})
        except httpx.HTTPError as exc:
            logger.warning(
                "graphql %s failed",
                operation,
                extra={"operation": operation, "error": str(exc), "duration_ms": _elapsed_ms(start)},
            )
            msg = f"Could not reach the Linear API: {exc}"
            raise LinearAPIError(msg) from exc
        logger.info(
            "graphql %s finished",
            operation,
            extra={
                "operation": operation,
                "status_code": response.status_code,
                "duration_ms": _elapsed_ms(start),
                "args_data": variables or {},
            },
        )
        return self._handle_response(response)

    def fetch_paginated(
        self,
        query: str,
        variables: dict[str, Any] | None,
        nodes_path: str,
        *,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Collect ``nodes`` across pages by following ``pageInfo.endCursor``.

        ``nodes_path`` is a dotted path to the connection object in ``data``,
        e.g. ``"issues"`` or ``"team.issues"``. ``limit`` stops the walk once
        that many nodes are collected; pages shrink to what is still missing.
        """
        current = dict(variables or {})
        current.setdefault("first", self.config.page_size)
        nodes_keys = nodes_path.split(".")

        items: list[dict[str, Any]] = []
        if limit is not None and limit < 1:
            return items
        while True:
            if limit is not None:
                current["first"] = min(current["first"], limit - len(items))
            data = self.query(query, current)
            connection = _dig(data, nodes_keys) or {}
            items.extend(node for node in connection.get("nodes") or [] if node is not None)
            if limit is not None and len(items) >= limit:
                return items[:limit]

            page_info = connection.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                break
            cursor = page_info.get("endCursor")
            if not cursor or cursor == current.get("after"):
                logger.warning("Stopping pagination of %s: cursor did not advance", nodes_path)
                break
            current["after"] = cursor
        return items

    # -- internals ---------------------------------------------------------

    @staticmethod
    def _handle_response(response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as exc:
            msg = f"Linear API returned a non-JSON response (HTTP {response.status_code})"
            raise LinearAPIError(msg, response.status_code) from exc
        if not isinstance(body, dict):
            msg = f"Linear API returned an unexpected payload (HTTP {response.status_code})"
            raise LinearAPIError(msg, response.status_code)

        errors = body.get("errors") or []
        if response.status_code != 200 or errors:
            raise _error_for(response.status_code, errors)
        data = body.get("data")
        return data if isinstance(data, dict) else {}


def _operation_name(query: str) -> str:
    match = _OPERATION_RE.match(query)
    return match.group(1) if match else "anonymous"


def _elapsed_ms(start: float) -> float:
    return round((perf_counter() - start) * 1000, 1)


def _dig(data: Any, keys: Sequence[str]) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _error_for(status_code: int, errors: list[Any]) -> LinearAPIError:
    messages = ", ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
    if status_code in _STATUS_MESSAGES:
        return LinearAPIError(_STATUS_MESSAGES[status_code], status_code)
    lowered = messages.lower()
    if "authentication" in lowered or "not authenticated" in lowered:
        return LinearAPIError(_STATUS_MESSAGES[401], status_code)
    return LinearAPIError(f"Linear API Error ({status_code}): {messages}", status_code)
