"""Tests for configuration discovery and resolution."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from linear_cli.config import (
    CONFIG_DIR_NAME,
    DEFAULT_API_URL,
    ClientConfig,
    ConfigError,
    find_config_dir,
    load_config,
    read_settings,
)


def _project(tmp_path: Path, settings: object) -> Path:
    config_dir = tmp_path / CONFIG_DIR_NAME
    config_dir.mkdir()
    (config_dir / "config.json").write_text(json.dumps(settings))
    return tmp_path


class TestClientConfig:
    def test_defaults(self) -> None:
        config = ClientConfig()
        assert config.api_url == DEFAULT_API_URL
        assert config.safe_mode is True
        assert config.page_size == 50
        assert config.timeout == 30.0
        assert config.log_dir is None

    def test_require_api_key(self) -> None:
        assert ClientConfig(api_key="k").require_api_key() == "k"
        with pytest.raises(ConfigError, match="LINEAR_API_KEY"):
            ClientConfig().require_api_key()
        with pytest.raises(ConfigError):
            ClientConfig(api_key="").require_api_key()

    def test_with_overrides_returns_copy(self) -> None:
        base = ClientConfig(api_key="k")
        changed = base.with_overrides(safe_mode=False)
        assert changed.safe_mode is False
        assert changed.api_key == "k"
        assert base.safe_mode is True


class TestFindConfigDir:
    def test_finds_in_parent(self, tmp_path: Path) -> None:
        root = _project(tmp_path, {})
        nested = root / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_dir(nested) == (root / CONFIG_DIR_NAME).resolve()

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            find_config_dir(tmp_path)


class TestReadSettings:
    def test_missing_file(self, tmp_path: Path) -> None:
        assert read_settings(tmp_path) == {}

    def test_corrupt_file(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        (tmp_path / "config.json").write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="linear_cli.config"):
            assert read_settings(tmp_path) == {}
        assert "Failed to read" in caplog.text

    def test_non_object(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text("[1, 2]")
        assert read_settings(tmp_path) == {}

    def test_reads_object(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text(json.dumps({"page_size": 25, "safe_mode": False}))
        assert read_settings(tmp_path) == {"page_size": 25, "safe_mode": False}


class TestLoadConfig:
    def test_defaults_without_file_or_env(self, tmp_path: Path) -> None:
        assert load_config(tmp_path, environ={}) == ClientConfig()

    def test_file_settings(self, tmp_path: Path) -> None:
        root = _project(
            tmp_path,
            {"api_url": "http://proxy/graphql", "page_size": 10, "timeout": 5, "safe_mode": False, "log_dir": "logs"},
        )
        config = load_config(root, environ={})
        assert config.api_url == "http://proxy/graphql"
        assert config.page_size == 10
        assert config.timeout == 5.0
        assert config.safe_mode is False
        assert config.log_dir == Path("logs")

    def test_environment_wins_over_file(self, tmp_path: Path) -> None:
        root = _project(tmp_path, {"api_url": "http://file/graphql", "safe_mode": False})
        env = {
            "LINEAR_API_KEY": "lin_api_env",
            "LINEAR_API_URL": "http://env/graphql",
            "LINEAR_SAFE_MODE": "true",
            "LINEAR_CLI_LOG_DIR": "/tmp/linear-logs",
        }
        config = load_config(root, environ=env)
        assert config.api_key == "lin_api_env"
        assert config.api_url == "http://env/graphql"
        assert config.safe_mode is True
        assert config.log_dir == Path("/tmp/linear-logs")

    def test_api_key_not_read_from_file(self, tmp_path: Path) -> None:
        root = _project(tmp_path, {"api_key": "from-file"})
        assert load_config(root, environ={}).api_key is None

    @pytest.mark.parametrize(("raw", "expected"), [("0", False), ("no", False), ("OFF", False), ("Yes", True), ("1", True)])
    def test_safe_mode_env_values(self, tmp_path: Path, raw: str, expected: bool) -> None:
        assert load_config(tmp_path, environ={"LINEAR_SAFE_MODE": raw}).safe_mode is expected

    def test_bad_safe_mode_env(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="LINEAR_SAFE_MODE"):
            load_config(tmp_path, environ={"LINEAR_SAFE_MODE": "maybe"})

    def test_non_positive_page_size(self, tmp_path: Path) -> None:
        root = _project(tmp_path, {"page_size": 0})
        with pytest.raises(ConfigError, match="page_size must be positive"):
            load_config(root, environ={})

    def test_unparseable_value(self, tmp_path: Path) -> None:
        root = _project(tmp_path, {"timeout": "soon"})
        with pytest.raises(ConfigError, match="Invalid value"):
            load_config(root, environ={})
