"""Tests for swagup.config -- XDG paths, config files, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from swagup.config import (
    get_config_dir,
    load_project_config,
    load_user_config,
    resolve_config,
)
from swagup.exceptions import ConfigError
from swagup.models import CollectionFormat, GlobalConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestConfigDir:
    def test_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("swagup.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".config" / "swagup"

    def test_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("swagup.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "custom"))

        assert get_config_dir() == tmp_path / "custom" / "swagup"

    def test_non_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("swagup.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".swagup"
        assert not result.exists()


# ---------------------------------------------------------------------------
# Config files
# ---------------------------------------------------------------------------


class TestConfigFiles:
    def test_absent(self, isolated_config: Path) -> None:
        assert load_user_config() is None
        assert load_project_config() is None

    def test_user_config(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "config.json", {"output_format": "yaml"})
        assert load_user_config() == {"output_format": "yaml"}

    def test_project_config(self, isolated_config: Path) -> None:
        _write_json(Path.cwd() / "swagup.json", {"timeout": 5})
        assert load_project_config() == {"timeout": 5}

    def test_invalid_json(self, isolated_config: Path) -> None:
        path = isolated_config / "config.json"
        path.parent.mkdir(parents=True)
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_user_config()

    def test_not_an_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "config.json", ["yaml"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_user_config()


# ---------------------------------------------------------------------------
# Precedence resolution
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults(self, isolated_config: Path) -> None:
        config = resolve_config()
        assert config == GlobalConfig()
        assert config.options.collection_format is None
        assert config.options.build_tags_from_paths is False
        assert config.output_format == "auto"

    def test_user_config_applies(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config.json",
            {"options": {"collectionFormat": "ssv"}, "timeout": 10},
        )
        config = resolve_config()
        assert config.options.collection_format is CollectionFormat.SSV
        assert config.timeout == 10

    def test_project_overrides_user(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "config.json", {"options": {"collectionFormat": "ssv"}})
        _write_json(Path.cwd() / "swagup.json", {"options": {"collection_format": "pipes"}})
        assert resolve_config().options.collection_format is CollectionFormat.PIPES

    def test_layers_merge_per_key(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "config.json", {"options": {"buildTagsFromPaths": True}})
        _write_json(Path.cwd() / "swagup.json", {"options": {"collectionFormat": "tsv"}})
        options = resolve_config().options
        assert options.build_tags_from_paths is True
        assert options.collection_format is CollectionFormat.TSV

    def test_explicit_file_overrides_project(
        self, isolated_config: Path, tmp_path: Path
    ) -> None:
        _write_json(Path.cwd() / "swagup.json", {"output_format": "json"})
        explicit = tmp_path / "explicit.json"
        _write_json(explicit, {"output_format": "yaml"})
        assert resolve_config(config_file=str(explicit)).output_format == "yaml"

    def test_missing_explicit_file(self, isolated_config: Path, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            resolve_config(config_file=str(tmp_path / "nope.json"))

    def test_env_overrides_files(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(Path.cwd() / "swagup.json", {"options": {"collectionFormat": "csv"}})
        monkeypatch.setenv("SWAGUP_COLLECTION_FORMAT", "multi")
        monkeypatch.setenv("SWAGUP_BUILD_TAGS_FROM_PATHS", "yes")
        options = resolve_config().options
        assert options.collection_format is CollectionFormat.MULTI
        assert options.build_tags_from_paths is True

    def test_cli_overrides_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SWAGUP_COLLECTION_FORMAT", "multi")
        monkeypatch.setenv("SWAGUP_BUILD_TAGS_FROM_PATHS", "1")
        config = resolve_config(
            cli_collection_format="pipes",
            cli_build_tags_from_paths=False,
            cli_output_format="yaml",
        )
        assert config.options.collection_format is CollectionFormat.PIPES
        assert config.options.build_tags_from_paths is False
        assert config.output_format == "yaml"

    def test_unknown_key_rejected(self, isolated_config: Path) -> None:
        _write_json(Path.cwd() / "swagup.json", {"outputFormat": "yaml"})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()

    def test_invalid_value_rejected(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SWAGUP_COLLECTION_FORMAT", "commas")
        with pytest.raises(ConfigError):
            resolve_config()
