"""Shared validation for CLI and programmatic entry points.

Pure functions, no Click or httpx dependencies. The choice tuples feed the
``click.Choice`` options of the CLI.
"""

from __future__ import annotations

import unicodedata
from typing import Any

FORMATS: tuple[str, ...] = ("table", "json")
PERIODS: tuple[str, ...] = ("all", "month", "quarter", "year")
VIEWS: tuple[str, ...] = ("detailed", "summary")

_MAX_NAME_LENGTH = 256


def sanitize_string(value: Any) -> str:
    """Drop control/format characters and surrounding whitespace."""
    if value is None:
        return ""
    text = str(value)
    cleaned = "".join(ch for ch in text if not unicodedata.category(ch).startswith("C"))
    return cleaned.strip()


def validate_team_name(value: Any) -> str:
    """Sanitize a team name; raise ValueError when it ends up empty or too long."""
    cleaned = sanitize_string(value)
    if not cleaned:
        msg = "Team name cannot be blank."
        raise ValueError(msg)
    if len(cleaned) > _MAX_NAME_LENGTH:
        msg = f"Team name must be at most {_MAX_NAME_LENGTH} characters"
        raise ValueError(msg)
    return cleaned
