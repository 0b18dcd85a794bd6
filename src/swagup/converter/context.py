"""Per-conversion working state.

A :class:`ConversionContext` is created once per :func:`~swagup.converter.convert`
call and passed explicitly to every builder.  Nothing in the converter is
stored at module level, so concurrent conversions never interfere.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from swagup.models import ConvertOptions


@dataclass(frozen=True)
class ConversionContext:
    """State shared by the builders of a single conversion.

    Attributes:
        options: The validated conversion options.
        custom_types: Model ids declared by any resource in the input.
            Used to tell a reference to a known model apart from an opaque
            type name.
        security_names: Maps each Swagger 1.x authorization name to the
            Swagger 2.0 security definition names generated from it (one
            per OAuth2 grant type).
    """

    options: ConvertOptions = field(default_factory=ConvertOptions)
    custom_types: frozenset[str] = frozenset()
    security_names: Mapping[str, list[str]] = field(default_factory=dict)

    def is_custom_type(self, name: str) -> bool:
        return name in self.custom_types
