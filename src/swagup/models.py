"""Pydantic models shared across swagup modules.

Two groups live here:

**Conversion options** -- :class:`ConvertOptions`, the only knobs the
converter core accepts. Field aliases match the camelCase keys used by
existing Swagger tooling (``collectionFormat``, ``buildTagsFromPaths``),
so a plain dict such as ``{"collectionFormat": "multi"}`` validates
directly.

**Configuration models** -- :class:`GlobalConfig`, serialised as JSON in
the user's config directory or in a project-local ``swagup.json``. See
:func:`~swagup.config.resolve_config` for the precedence chain.
"""

from __future__ import annotations

import enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CollectionFormat(str, enum.Enum):
    """Swagger 2.0 ``collectionFormat`` values for array parameters."""

    CSV = "csv"
    SSV = "ssv"
    TSV = "tsv"
    PIPES = "pipes"
    MULTI = "multi"


class ConvertOptions(BaseModel):
    """Options accepted by :func:`~swagup.converter.convert`.

    Example::

        ConvertOptions(collectionFormat="multi")
        ConvertOptions(build_tags_from_paths=True)
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    collection_format: Optional[CollectionFormat] = Field(
        default=None,
        alias="collectionFormat",
        description="collectionFormat stamped onto array-typed non-body parameters",
    )
    build_tags_from_paths: bool = Field(
        default=False,
        alias="buildTagsFromPaths",
        description="Name tags after resource listing paths instead of resourcePath",
    )


class GlobalConfig(BaseModel):
    """Effective configuration for the ``swagup`` command.

    Loaded from ``~/.config/swagup/config.json`` and ``./swagup.json`` by
    :mod:`swagup.config`. Unknown keys are rejected so that typos surface as
    a :class:`~swagup.exceptions.ConfigError` instead of being ignored.
    """

    model_config = ConfigDict(extra="forbid")

    options: ConvertOptions = Field(default_factory=ConvertOptions)
    output_format: Literal["auto", "json", "yaml"] = Field(
        default="auto", description="Output format: auto, json, yaml"
    )
    timeout: float = Field(
        default=30.0, gt=0, description="Timeout in seconds for remote fetches"
    )
