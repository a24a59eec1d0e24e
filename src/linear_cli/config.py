"""Client configuration.

Settings are resolved in this order, later sources winning:

1. built-in defaults
2. ``.linear/config.json``, discovered by walking up from the cwd
3. environment variables (``LINEAR_API_KEY``, ``LINEAR_API_URL``,
   ``LINEAR_SAFE_MODE``, ``LINEAR_CLI_LOG_DIR``)

The API key is only ever read from the environment so that it never ends up
in a checked-in config file.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from linear_cli.types.core import ClientSettings

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".linear"
CONFIG_FILENAME = "config.json"

DEFAULT_API_URL = "https://api.linear.app/graphql"
DEFAULT_PAGE_SIZE = 50
DEFAULT_TIMEOUT = 30.0

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


class ConfigError(ValueError):
    """Raised when the configuration cannot be used to talk to the API."""


@dataclass(frozen=True)
class ClientConfig:
    """Everything the API client needs, passed explicitly at construction."""

    api_key: str | None = None
    api_url: str = DEFAULT_API_URL
    safe_mode: bool = True
    page_size: int = DEFAULT_PAGE_SIZE
    timeout: float = DEFAULT_TIMEOUT
    log_dir: Path | None = None

    def require_api_key(self) -> str:
        if not self.api_key:
            msg = "Linear API key is required. Set LINEAR_API_KEY in your environment."
            raise ConfigError(msg)
        return self.api_key

    def with_overrides(self, **changes: object) -> ClientConfig:
        return replace(self, **changes)  # type: ignore[arg-type]


def find_config_dir(start: Path | None = None) -> Path:
    """Walk up from start (default cwd) looking for a .linear/ directory."""
    current = (start or Path.cwd()).resolve()
    for parent in [current, *current.parents]:
        candidate = parent / CONFIG_DIR_NAME
        if candidate.is_dir():
            return candidate
    msg = f"No {CONFIG_DIR_NAME}/ directory found in {current} or any parent"
    raise FileNotFoundError(msg)


def read_settings(config_dir: Path) -> ClientSettings:
    """Read .linear/config.json. Returns {} if missing or corrupt."""
    config_path = config_dir / CONFIG_FILENAME
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text())
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Failed to read %s, using defaults: %s", config_path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", config_path)
        return {}
    result: ClientSettings = data  # type: ignore[assignment]
    return result


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    msg = f"{name} must be a boolean (true/false), got {raw!r}"
    raise ConfigError(msg)


def _from_settings(settings: ClientSettings, base: ClientConfig) -> ClientConfig:
    changes: dict[str, object] = {}
    if "api_url" in settings:
        changes["api_url"] = str(settings["api_url"])
    if "safe_mode" in settings:
        changes["safe_mode"] = bool(settings["safe_mode"])
    if "page_size" in settings:
        page_size = int(settings["page_size"])
        if page_size < 1:
            msg = f"page_size must be positive, got {page_size}"
            raise ConfigError(msg)
        changes["page_size"] = page_size
    if "timeout" in settings:
        changes["timeout"] = float(settings["timeout"])
    if settings.get("log_dir"):
        changes["log_dir"] = Path(settings["log_dir"])
    return base.with_overrides(**changes)


def _from_environ(environ: Mapping[str, str], base: ClientConfig) -> ClientConfig:
    changes: dict[str, object] = {}
    if environ.get("LINEAR_API_KEY"):
        changes["api_key"] = environ["LINEAR_API_KEY"]
    if environ.get("LINEAR_API_URL"):
        changes["api_url"] = environ["LINEAR_API_URL"]
    if environ.get("LINEAR_SAFE_MODE"):
        changes["safe_mode"] = _parse_bool("LINEAR_SAFE_MODE", environ["LINEAR_SAFE_MODE"])
    if environ.get("LINEAR_CLI_LOG_DIR"):
        changes["log_dir"] = Path(environ["LINEAR_CLI_LOG_DIR"])
    return base.with_overrides(**changes)


def load_config(start: Path | None = None, environ: Mapping[str, str] | None = None) -> ClientConfig:
    """Resolve a ClientConfig from defaults, config file, and environment."""
    config = ClientConfig()
    try:
        config_dir = find_config_dir(start)
    except FileNotFoundError:
        pass  # No .linear/ dir; defaults and environment only
    else:
        try:
            config = _from_settings(read_settings(config_dir), config)
        except ConfigError:
            raise
        except (TypeError, ValueError) as exc:
            msg = f"Invalid value in {config_dir / CONFIG_FILENAME}: {exc}"
            raise ConfigError(msg) from exc
    return _from_environ(os.environ if environ is None else environ, config)
