"""Shared CLI helpers used by cli.py and the cli_commands/ modules.

Provides ``open_fetcher()`` and ``fail()`` so that every command builds its
API client and reports errors the same way.
"""

from __future__ import annotations

import json as json_mod
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, NoReturn

import click

from linear_cli.client import LinearClient
from linear_cli.config import ClientConfig
from linear_cli.data_fetcher import DataFetcher

logger = logging.getLogger(__name__)


@contextmanager
def open_fetcher(ctx: click.Context) -> Iterator[DataFetcher]:
    """Yield a DataFetcher built from the config stored on the click context.

    ``ctx.obj["transport"]``, when present, replaces the network transport
    (used by tests to serve canned GraphQL responses).
    """
    config: ClientConfig = ctx.obj["config"]
    with LinearClient(config, transport=ctx.obj.get("transport")) as client:
        yield DataFetcher(client)


def fail(message: str, as_json: bool = False) -> NoReturn:
    """Report an error in the requested output format and exit 1."""
    if as_json:
        click.echo(json_mod.dumps({"error": message}))
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def emit_json(data: Any) -> None:
    click.echo(json_mod.dumps(data, indent=2, default=str))


def progress(message: str, as_json: bool) -> None:
    """Status line on stderr; suppressed for JSON output to keep stdout parseable."""
    if not as_json:
        click.echo(message, err=True)


def log_command(command: str, args: dict[str, Any], duration_ms: float, error: str | None = None) -> None:
    extra: dict[str, Any] = {"command": command, "args_data": args, "duration_ms": duration_ms}
    if error is not None:
        extra["error"] = error
        logger.warning("command failed", extra=extra)
    else:
        logger.info("command finished", extra=extra)
