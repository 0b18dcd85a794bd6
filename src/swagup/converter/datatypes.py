"""Translate Swagger 1.x data types and models into Swagger 2.0 schemas.

Swagger 1.x describes a type in several overlapping ways: a ``type``,
``dataType`` or ``responseClass`` name, a ``$ref`` to a model, an ``items``
sub-descriptor, and textual collections such as ``List[Pet]`` or
``Map[String,Pet]`` (a Swagger 1.1 habit).  :func:`build_data_type`
reconciles all of them into one schema object.

Model inheritance (``subTypes`` on the parent) is rewritten as composition
on the child: ``{"allOf": [{"$ref": parent}, <child schema>]}``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from swagup.converter.coerce import (
    as_dict,
    as_list,
    clone,
    coerce_bool,
    coerce_literal,
    strip_empty,
)
from swagup.converter.context import ConversionContext
from swagup.exceptions import CircularInheritanceError, MissingReferenceError

DEFINITIONS_PREFIX = "#/definitions/"

# Keys are lower-case; lookups are case-insensitive.
TYPE_MAP: dict[str, dict[str, Any]] = {
    "integer": {"type": "integer"},
    "number": {"type": "number"},
    "string": {"type": "string"},
    "boolean": {"type": "boolean"},
    "array": {"type": "array"},
    "object": {"type": "object"},
    "file": {"type": "file"},
    "void": {},
    "any": {},
    "int": {"type": "integer", "format": "int32"},
    "long": {"type": "integer", "format": "int64"},
    "float": {"type": "number", "format": "float"},
    "double": {"type": "number", "format": "double"},
    "byte": {"type": "string", "format": "byte"},
    "date": {"type": "string", "format": "date"},
    "datetime": {"type": "string", "format": "date-time"},
    "date-time": {"type": "string", "format": "date-time"},
    "list": {"type": "array"},
    "set": {"type": "array", "uniqueItems": True},
    "map": {"type": "object"},
}

_COLLECTION_RE = re.compile(r"^([^\[]*)\[(.*)\]$")


def definition_ref(name: str) -> dict[str, str]:
    """Return a ``$ref`` object pointing at the definition *name*."""
    if name.startswith(DEFINITIONS_PREFIX):
        return {"$ref": name}
    return {"$ref": DEFINITIONS_PREFIX + name}


def build_type_properties(
    context: ConversionContext, type_name: Any, allow_ref: bool
) -> dict[str, Any]:
    """Translate a Swagger 1.x type name into schema properties.

    Args:
        context: The current conversion context.
        type_name: A primitive name, a collection such as ``List[Pet]``,
            or a model id.
        allow_ref: Whether an unknown name may become a ``$ref``.  When
            ``False`` the name is kept as a verbatim ``type``.

    Returns:
        A new schema dict (empty for ``void``/``any`` or a missing name).
    """
    if not type_name:
        return {}
    type_name = str(type_name)

    mapped = TYPE_MAP.get(type_name.lower())
    if mapped is not None:
        return dict(mapped)

    match = _COLLECTION_RE.match(type_name)
    if match:
        collection = match.group(1).strip().lower()
        item_type = match.group(2).strip()
        if collection == "map":
            value_type = _split_top_level(item_type)[-1].strip()
            return {
                "type": "object",
                "additionalProperties": build_type_properties(
                    context, value_type, allow_ref
                ),
            }
        result = dict(TYPE_MAP.get(collection) or {"type": "array"})
        result["items"] = build_type_properties(context, item_type, allow_ref)
        return result

    if context.is_custom_type(type_name) or allow_ref:
        return definition_ref(type_name)
    return {"type": type_name}


def _split_top_level(text: str) -> list[str]:
    """Split *text* on commas that sit outside any ``[...]`` nesting."""
    parts: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(text):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(text[start:index])
            start = index + 1
    parts.append(text[start:])
    return parts


def build_data_type(
    context: ConversionContext,
    descriptor: Any,
    allow_ref: bool,
    field: str = "dataType",
) -> dict[str, Any]:
    """Translate a Swagger 1.x data-type descriptor into a schema.

    The descriptor may be a model property, a parameter, an operation (its
    response type), or an ``items`` object.  Unrelated keys are ignored.

    Args:
        context: The current conversion context.
        descriptor: The Swagger 1.x object, or ``None``.
        allow_ref: See :func:`build_type_properties`.
        field: Name used in structural and literal errors.

    Returns:
        A new schema dict, empty when the descriptor names no type.
    """
    if descriptor is None:
        return {}
    descriptor = as_dict(descriptor, field)

    if descriptor.get("$ref"):
        result = definition_ref(str(descriptor["$ref"]))
    else:
        type_name = (
            descriptor.get("type")
            or descriptor.get("dataType")
            or descriptor.get("responseClass")
            or descriptor.get("responseModel")
        )
        result = build_type_properties(context, type_name, allow_ref)

    items = descriptor.get("items")
    if items is not None and result.get("type") == "array" and "items" not in result:
        result["items"] = build_data_type(context, items, allow_ref, f"{field}.items")

    if descriptor.get("format"):
        result["format"] = descriptor["format"]

    default = descriptor.get("defaultValue", descriptor.get("default"))
    if default is not None and result.get("type") != "string":
        default = coerce_literal(default, f"{field}.default", fallback=True)

    result.update(
        strip_empty(
            {
                "enum": clone(descriptor.get("enum")),
                "minimum": coerce_literal(descriptor.get("minimum"), f"{field}.minimum"),
                "maximum": coerce_literal(descriptor.get("maximum"), f"{field}.maximum"),
                "uniqueItems": coerce_bool(
                    descriptor.get("uniqueItems"), f"{field}.uniqueItems"
                ),
                "default": clone(default),
            }
        )
    )
    return result


def build_model(
    context: ConversionContext, model: Any, model_id: str
) -> dict[str, Any]:
    """Translate one Swagger 1.x model into a Swagger 2.0 schema.

    Properties marked ``required`` are collected into the schema's
    ``required`` list unless the model supplies its own list, which then
    wins outright.
    """
    field = f"models.{model_id}"
    model = as_dict(model, field)

    required: list[str] = []
    properties: dict[str, Any] = {}
    for name, prop in as_dict(model.get("properties"), f"{field}.properties").items():
        prop_field = f"{field}.properties.{name}"
        prop = as_dict(prop, prop_field)
        if coerce_bool(prop.get("required"), f"{prop_field}.required"):
            required.append(name)
        schema = build_data_type(context, prop, True, prop_field)
        if prop.get("description"):
            schema["description"] = prop["description"]
        properties[name] = schema

    if model.get("required") is not None:
        required = clone(as_list(model["required"], f"{field}.required"))

    result = build_data_type(context, model, True, field)
    result.update(
        strip_empty(
            {
                "description": model.get("description"),
                "required": required,
                "properties": properties,
                "discriminator": model.get("discriminator"),
                "example": clone(model.get("example")),
            }
        )
    )
    return result


def build_definitions(
    context: ConversionContext, models: Any, field: str = "models"
) -> dict[str, Any]:
    """Translate a ``models`` map and apply ``subTypes`` composition.

    Runs in two passes: every model is translated first, then each
    parent -> child link wraps the child's schema in an ``allOf`` that
    references the parent.  Multi-level hierarchies stay nested: a
    grandchild references its direct parent only.

    Raises:
        MissingReferenceError: If ``subTypes`` names an unknown model.
        CircularInheritanceError: If a model is its own ancestor.
    """
    models = as_dict(models, field)
    definitions = {
        model_id: build_model(context, model, model_id)
        for model_id, model in models.items()
    }

    parents: dict[str, list[str]] = {}
    for parent_id, model in models.items():
        sub_types = as_list(
            as_dict(model, f"{field}.{parent_id}").get("subTypes"),
            f"{field}.{parent_id}.subTypes",
        )
        for child_id in sub_types:
            if child_id not in definitions:
                raise MissingReferenceError(
                    f"Model '{parent_id}' lists unknown subType '{child_id}'",
                    name=child_id,
                    field=f"{field}.{parent_id}.subTypes",
                )
            parents.setdefault(child_id, []).append(parent_id)

    _check_acyclic(parents)

    for child_id, parent_ids in parents.items():
        own_schema = definitions[child_id]
        all_of = [definition_ref(parent_id) for parent_id in parent_ids]
        all_of.insert(1, own_schema)
        definitions[child_id] = {"allOf": all_of}

    return definitions


def _check_acyclic(parents: Mapping[str, list[str]]) -> None:
    """Raise if any model can reach itself by following parent links."""
    for model_id in parents:
        stack = list(parents[model_id])
        seen: set[str] = set()
        while stack:
            current = stack.pop()
            if current == model_id:
                raise CircularInheritanceError(model_id)
            if current in seen:
                continue
            seen.add(current)
            stack.extend(parents.get(current, ()))
