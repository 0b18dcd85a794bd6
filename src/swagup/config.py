"""Configuration loading with XDG paths and precedence resolution.

swagup reads, but never writes, configuration:

* **User config** -- ``$XDG_CONFIG_HOME/swagup/config.json`` on Linux/BSD
  (default ``~/.config/swagup/config.json``), ``~/.swagup/config.json`` on
  macOS and Windows.  See :func:`get_config_dir`.
* **Project config** -- ``./swagup.json`` in the working directory.
* **Explicit config** -- a file passed with ``--config``.
* **Environment** -- ``SWAGUP_COLLECTION_FORMAT`` and
  ``SWAGUP_BUILD_TAGS_FROM_PATHS``.

Every file holds a (partial) :class:`~swagup.models.GlobalConfig` as JSON,
for example::

    {"options": {"collectionFormat": "multi"}, "output_format": "yaml"}

:func:`resolve_config` merges the layers into the effective configuration.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from swagup.exceptions import ConfigError
from swagup.models import GlobalConfig

_APP_NAME = "swagup"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "swagup.json"

_ENV_COLLECTION_FORMAT = "SWAGUP_COLLECTION_FORMAT"
_ENV_BUILD_TAGS_FROM_PATHS = "SWAGUP_BUILD_TAGS_FROM_PATHS"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory.

    On Linux/BSD: ``$XDG_CONFIG_HOME/swagup/`` (default ``~/.config/swagup/``).
    On macOS/Windows: ``~/.swagup/``.  The directory is not created.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        return base / _APP_NAME
    return Path.home() / f".{_APP_NAME}"


# --- Config files ---


def _read_config_file(path: Path) -> Optional[dict[str, Any]]:
    """Read a JSON config file, returning ``None`` if it does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config at {path}: expected a JSON object")
    return data


def load_user_config() -> Optional[dict[str, Any]]:
    """Load the user-wide config file, or ``None`` if absent."""
    return _read_config_file(get_config_dir() / _CONFIG_FILENAME)


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./swagup.json`` from the working directory, or ``None`` if absent."""
    return _read_config_file(Path.cwd() / _PROJECT_CONFIG_FILENAME)


def _env_overrides() -> dict[str, Any]:
    """Collect conversion option overrides from environment variables."""
    options: dict[str, Any] = {}
    collection_format = os.environ.get(_ENV_COLLECTION_FORMAT)
    if collection_format:
        options["collectionFormat"] = collection_format
    tags_from_paths = os.environ.get(_ENV_BUILD_TAGS_FROM_PATHS)
    if tags_from_paths:
        options["buildTagsFromPaths"] = tags_from_paths.strip().lower() in ("1", "true", "yes", "on")
    return {"options": options} if options else {}


_OPTION_ALIASES = {
    "collection_format": "collectionFormat",
    "build_tags_from_paths": "buildTagsFromPaths",
}


def _normalize_layer(layer: dict[str, Any]) -> dict[str, Any]:
    """Spell option keys by their aliases so layers merge key-for-key."""
    options = layer.get("options")
    if not isinstance(options, dict):
        return layer
    renamed = {_OPTION_ALIASES.get(key, key): value for key, value in options.items()}
    return {**layer, "options": renamed}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *override* into a copy of *base*."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# --- Precedence resolution ---


def resolve_config(
    config_file: Optional[str] = None,
    cli_collection_format: Optional[str] = None,
    cli_build_tags_from_paths: Optional[bool] = None,
    cli_output_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables
        3. Explicit config file (``--config``)
        4. Project config (``./swagup.json``)
        5. User config
        6. Defaults

    Raises:
        ConfigError: If a config file is invalid, the explicit config file
            does not exist, or the merged result fails validation.
    """
    layers: list[dict[str, Any]] = []

    user = load_user_config()
    if user is not None:
        layers.append(user)

    project = load_project_config()
    if project is not None:
        layers.append(project)

    if config_file is not None:
        explicit = _read_config_file(Path(config_file))
        if explicit is None:
            raise ConfigError(f"Config file not found: {config_file}")
        layers.append(explicit)

    layers.append(_env_overrides())

    cli: dict[str, Any] = {}
    cli_options: dict[str, Any] = {}
    if cli_collection_format is not None:
        cli_options["collectionFormat"] = cli_collection_format
    if cli_build_tags_from_paths is not None:
        cli_options["buildTagsFromPaths"] = cli_build_tags_from_paths
    if cli_options:
        cli["options"] = cli_options
    if cli_output_format is not None:
        cli["output_format"] = cli_output_format
    layers.append(cli)

    merged: dict[str, Any] = {}
    for layer in layers:
        merged = _merge(merged, _normalize_layer(layer))

    try:
        return GlobalConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
