"""Shared test fixtures for swagup.

Provides reusable fixtures for loading Swagger 1.x fixture documents,
creating isolated config environments, and managing output state.  These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from swagup.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _load_fixture(name: str) -> dict[str, Any]:
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Swagger 1.x documents (plain dicts loaded from JSON files)
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_listing() -> dict[str, Any]:
    """The petstore resource listing."""
    return _load_fixture("petstore/index.json")


@pytest.fixture
def petstore_declarations() -> dict[str, dict[str, Any]]:
    """The petstore API declarations keyed by listing path."""
    return {
        "/pet": _load_fixture("petstore/pet.json"),
        "/user": _load_fixture("petstore/user.json"),
    }


@pytest.fixture
def embedded_listing() -> dict[str, Any]:
    """A resource listing with inline operations and models."""
    return _load_fixture("embedded.json")


@pytest.fixture
def minimal_listing() -> dict[str, Any]:
    """The smallest referenced resource listing: one path, no metadata."""
    return {"swaggerVersion": "1.2", "apis": [{"path": "/pets"}]}


@pytest.fixture
def minimal_declarations() -> dict[str, dict[str, Any]]:
    return {
        "/pets": {
            "swaggerVersion": "1.2",
            "resourcePath": "/pets",
            "apis": [
                {
                    "path": "/pets",
                    "operations": [{"method": "GET", "nickname": "listPets"}],
                }
            ],
        }
    }


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user config directory and the working directory at *tmp_path*.

    Clears the ``SWAGUP_*`` environment variables so the host environment
    cannot leak into precedence tests.  Returns the user config directory
    (not created).
    """
    config_home = tmp_path / "config"
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setattr("swagup.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("SWAGUP_COLLECTION_FORMAT", raising=False)
    monkeypatch.delenv("SWAGUP_BUILD_TAGS_FROM_PATHS", raising=False)
    monkeypatch.chdir(workdir)
    return config_home / "swagup"


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


@pytest.fixture
def json_output() -> OutputManager:
    """Install a colourless JSON OutputManager as the global instance."""
    output = OutputManager(format=OutputFormat.JSON, no_color=True)
    set_output(output)
    return output
