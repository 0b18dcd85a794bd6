"""Translate Swagger 1.x APIs and operations into Swagger 2.0 path items.

Every operation in an API declaration becomes an entry under
``paths[<path>][<method>]``.  Parameters are the part that needs the most
care: Swagger 2.0 only allows schemas (and therefore model references)
in ``body`` parameters, and multi-valued parameters must be real arrays
rather than a Swagger 1.x ``allowMultiple`` flag.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from swagup.converter.coerce import (
    as_dict,
    as_list,
    clone,
    coerce_bool,
    fix_path,
    strip_empty,
    unique,
)
from swagup.converter.context import ConversionContext
from swagup.converter.datatypes import build_data_type, build_type_properties
from swagup.converter.security import build_security
from swagup.exceptions import StructuralError, UnrepresentableParameterError
from swagup.models import CollectionFormat

RESPONSE_PLACEHOLDER = "No response was specified"

# collectionFormat=multi is not allowed for these parameter locations.
_NO_MULTI_LOCATIONS = frozenset({"path", "formData"})


def build_paths(
    context: ConversionContext,
    resource: Mapping[str, Any],
    tag: str | None,
    field: str = "apis",
) -> dict[str, dict[str, Any]]:
    """Build the ``paths`` contributed by one resource.

    Operations of entries that normalise to the same path are merged into
    one path item; a repeated method replaces the earlier one.

    Args:
        context: The current conversion context.
        resource: An API declaration, or the resource listing itself for
            an embedded document.
        tag: The resource's tag name, applied to every operation.
        field: Name used in structural errors.

    Returns:
        A mapping of path -> (lower-case method -> operation).
    """
    paths: dict[str, dict[str, Any]] = {}

    for index, api in enumerate(as_list(resource.get("apis"), field)):
        api_field = f"{field}[{index}]"
        api = as_dict(api, api_field)
        path_item = paths.setdefault(fix_path(str(api.get("path") or "")), {})

        operations = as_list(api.get("operations"), f"{api_field}.operations")
        for op_index, operation in enumerate(operations):
            op_field = f"{api_field}.operations[{op_index}]"
            operation = as_dict(operation, op_field)
            method = operation.get("method") or operation.get("httpMethod")
            if not isinstance(method, str) or not method:
                raise StructuralError(f"{op_field}.method", "an HTTP method name", method)
            path_item[method.lower()] = build_operation(
                context, operation, resource, tag, op_field
            )

    return paths


def build_operation(
    context: ConversionContext,
    operation: Mapping[str, Any],
    resource: Mapping[str, Any],
    tag: str | None,
    field: str = "operation",
) -> dict[str, Any]:
    """Translate a single Swagger 1.x operation.

    ``produces``/``consumes`` fall back to the containing declaration.
    ``security`` comes from the operation's own ``authorizations`` only;
    resource-level authorizations are not cascaded.
    """
    tags = [tag] if tag else []
    tags.extend(str(name) for name in as_list(operation.get("tags"), f"{field}.tags"))

    parameters = [
        build_parameter(context, parameter, f"{field}.parameters[{index}]")
        for index, parameter in enumerate(
            as_list(operation.get("parameters"), f"{field}.parameters")
        )
    ]

    return strip_empty(
        {
            "tags": unique(tags),
            "summary": operation.get("summary"),
            "description": operation.get("description") or operation.get("notes"),
            "operationId": operation.get("nickname"),
            "produces": clone(operation.get("produces") or resource.get("produces")),
            "consumes": clone(operation.get("consumes") or resource.get("consumes")),
            "parameters": parameters,
            "responses": build_responses(context, operation, field),
            "deprecated": coerce_bool(operation.get("deprecated"), f"{field}.deprecated"),
            "security": build_security(
                operation.get("authorizations"),
                context.security_names,
                f"{field}.authorizations",
            ),
        }
    )


def build_parameter(
    context: ConversionContext, parameter: Any, field: str = "parameter"
) -> dict[str, Any]:
    """Translate a Swagger 1.x parameter.

    Raises:
        UnrepresentableParameterError: If a non-body parameter refers to a
            model.
    """
    parameter = as_dict(parameter, field)

    location = parameter.get("paramType")
    if location == "form":
        location = "formData"

    result = strip_empty(
        {
            "in": location,
            "name": parameter.get("name"),
            "description": parameter.get("description"),
            "required": coerce_bool(parameter.get("required"), f"{field}.required"),
        }
    )
    allow_multiple = coerce_bool(parameter.get("allowMultiple"), f"{field}.allowMultiple")

    if location == "body":
        schema = build_data_type(context, parameter, True, field)
        if allow_multiple and schema.get("type") != "array":
            schema = {"type": "array", "items": schema}
        result.setdefault("name", "body")
        result["schema"] = schema
        return result

    data_type = build_data_type(context, parameter, False, field)
    if _has_ref(data_type):
        raise UnrepresentableParameterError(parameter.get("name"), location)

    data_type.setdefault("type", "string")
    if data_type["type"] == "array":
        data_type.setdefault("items", {}).setdefault("type", "string")

    if allow_multiple and data_type["type"] != "array":
        data_type = {"type": "array", "items": data_type}

    if location == "path":
        result["required"] = True

    collection_format = context.options.collection_format
    if collection_format is not None and data_type["type"] == "array":
        if not (
            collection_format is CollectionFormat.MULTI
            and location in _NO_MULTI_LOCATIONS
        ):
            data_type["collectionFormat"] = collection_format.value

    result.update(data_type)
    return result


def _has_ref(schema: Mapping[str, Any]) -> bool:
    """Return ``True`` if *schema* or any nested item/value schema is a ``$ref``."""
    if "$ref" in schema:
        return True
    for key in ("items", "additionalProperties"):
        nested = schema.get(key)
        if isinstance(nested, Mapping) and _has_ref(nested):
            return True
    return False


def build_responses(
    context: ConversionContext,
    operation: Mapping[str, Any],
    field: str = "operation",
) -> dict[str, Any]:
    """Build the ``responses`` object of an operation.

    A ``200`` response always exists.  ``responseMessages`` add or replace
    entries by status code, and the operation's own type (its ``type``,
    ``responseClass`` or ``items``) becomes the ``200`` schema.
    """
    responses: dict[str, Any] = {"200": {"description": RESPONSE_PLACEHOLDER}}

    messages = as_list(operation.get("responseMessages"), f"{field}.responseMessages")
    for index, message in enumerate(messages):
        message_field = f"{field}.responseMessages[{index}]"
        message = as_dict(message, message_field)
        code = message.get("code")
        if code is None:
            raise StructuralError(f"{message_field}.code", "a status code", code)

        response: dict[str, Any] = {"description": message.get("message") or RESPONSE_PLACEHOLDER}
        schema = build_type_properties(context, message.get("responseModel"), True)
        if schema:
            response["schema"] = schema
        responses[str(code)] = response

    schema = build_data_type(context, operation, True, field)
    if schema:
        responses["200"]["schema"] = schema

    return responses
