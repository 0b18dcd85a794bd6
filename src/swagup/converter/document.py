"""Assemble a Swagger 2.0 document from a Swagger 1.x resource listing.

A Swagger 1.x API comes in one of two shapes:

* **referenced** -- the resource listing only names paths, and each path's
  operations live in a separate API declaration supplied by the caller;
* **embedded** -- every resource listing entry carries its ``operations``
  inline, and the listing is the only document.

:func:`convert` accepts either shape, walks every resource in listing
order, and merges their paths and models into one document.  It is a pure
function of its arguments: nothing is fetched, logged, or mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import ValidationError

from swagup.converter.coerce import as_dict, as_list
from swagup.converter.context import ConversionContext
from swagup.converter.datatypes import build_definitions
from swagup.converter.info import aggregate_path_components, build_info, build_tags
from swagup.converter.operations import build_paths
from swagup.converter.security import build_security_definitions
from swagup.exceptions import (
    InvalidUsageError,
    MissingReferenceError,
    MixedDeclarationStyleError,
    StructuralError,
)
from swagup.models import ConvertOptions

SWAGGER_VERSION = "2.0"

OptionsLike = Union[ConvertOptions, Mapping[str, Any], None]


def convert(
    resource_listing: Mapping[str, Any],
    api_declarations: Optional[Mapping[str, Mapping[str, Any]]] = None,
    options: OptionsLike = None,
) -> dict[str, Any]:
    """Convert a Swagger 1.x API description into a Swagger 2.0 document.

    Args:
        resource_listing: The parsed Swagger 1.x root document.
        api_declarations: Parsed API declarations keyed by the ``path``
            under which the resource listing references them.  Ignored for
            embedded documents.
        options: A :class:`~swagup.models.ConvertOptions`, a mapping with
            the same (camelCase) keys, or ``None`` for defaults.

    Returns:
        A new Swagger 2.0 document as a plain dict.

    Raises:
        ConversionError: Any subclass, when the input cannot be converted.
            No partial document is returned.
        InvalidUsageError: If *options* fails validation.

    Example::

        listing = {"apiVersion": "1.0.0", "swaggerVersion": "1.2",
                   "apis": [{"path": "/pets", "description": "Pets"}]}
        declarations = {"/pets": {"resourcePath": "/pets", "apis": [...]}}
        swagger = convert(listing, declarations)
    """
    if not isinstance(resource_listing, Mapping):
        raise StructuralError("resourceListing", "an object", resource_listing)
    api_declarations = as_dict(api_declarations, "apiDeclarations")
    convert_options = _resolve_options(options)

    listing_apis = [
        as_dict(entry, f"apis[{index}]")
        for index, entry in enumerate(as_list(resource_listing.get("apis"), "apis"))
    ]

    if _is_embedded(listing_apis):
        resources: list[Mapping[str, Any]] = [resource_listing]
        declarations: list[Mapping[str, Any]] = []
        tags: list[dict[str, Any]] = []
        tag_names: list[Optional[str]] = [None]
    else:
        declarations = _resolve_declarations(listing_apis, api_declarations)
        resources = list(declarations)
        tags, names = build_tags(list(zip(listing_apis, declarations)), convert_options)
        tag_names = list(names)

    custom_types: set[str] = set()
    for index, resource in enumerate(resources):
        custom_types.update(as_dict(resource.get("models"), _models_field(index, declarations)))

    security_definitions, security_names = build_security_definitions(
        resource_listing.get("authorizations")
    )
    context = ConversionContext(
        options=convert_options,
        custom_types=frozenset(custom_types),
        security_names=security_names,
    )

    paths: dict[str, dict[str, Any]] = {}
    definitions: dict[str, Any] = {}
    for index, (resource, tag) in enumerate(zip(resources, tag_names)):
        definitions.update(
            build_definitions(context, resource.get("models"), _models_field(index, declarations))
        )
        for path, path_item in build_paths(context, resource, tag).items():
            paths.setdefault(path, {}).update(path_item)

    result: dict[str, Any] = {
        "swagger": SWAGGER_VERSION,
        "info": build_info(resource_listing),
    }
    result.update(aggregate_path_components(resource_listing, declarations))
    if tags:
        result["tags"] = tags
    result["paths"] = paths
    if security_definitions:
        result["securityDefinitions"] = security_definitions
    if definitions:
        result["definitions"] = definitions
    return result


def _resolve_options(options: OptionsLike) -> ConvertOptions:
    if options is None:
        return ConvertOptions()
    if isinstance(options, ConvertOptions):
        return options
    try:
        return ConvertOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise InvalidUsageError(f"Invalid conversion options: {exc}") from exc


def _is_embedded(listing_apis: list[Mapping[str, Any]]) -> bool:
    """Return ``True`` if every entry carries inline operations.

    Raises:
        MixedDeclarationStyleError: If only some entries do.
    """
    embedded = ["operations" in entry for entry in listing_apis]
    if any(embedded) and not all(embedded):
        raise MixedDeclarationStyleError()
    return bool(embedded) and all(embedded)


def _resolve_declarations(
    listing_apis: list[Mapping[str, Any]],
    api_declarations: Mapping[str, Any],
) -> list[Mapping[str, Any]]:
    """Look up the API declaration of every resource listing entry, in order."""
    declarations: list[Mapping[str, Any]] = []
    for index, entry in enumerate(listing_apis):
        path = entry.get("path")
        if path not in api_declarations:
            raise MissingReferenceError(
                f"No API declaration supplied for resource path '{path}'",
                name=str(path),
                field=f"apis[{index}].path",
            )
        declarations.append(as_dict(api_declarations[path], f"apiDeclarations[{path}]"))
    return declarations


def _models_field(index: int, declarations: list[Mapping[str, Any]]) -> str:
    if declarations:
        return f"apiDeclarations[{index}].models"
    return "models"
