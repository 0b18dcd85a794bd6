"""Small stateless helpers shared by every converter sub-module.

Swagger 1.x documents were frequently produced by hand or by template
engines, so booleans and numbers often arrive as strings (``"true"``,
``"10"``).  :func:`coerce_literal` turns those back into JSON values; its
``fallback`` flag selects between failing the conversion and treating an
unparsable value as absent.

The structural helpers (:func:`as_dict`, :func:`as_list`) accept any
mapping or sequence so that read-only inputs (``MappingProxyType``,
tuples) convert the same way as plain dicts and lists.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from typing import Any

from swagup.exceptions import MalformedLiteralError, StructuralError


def coerce_literal(value: Any, field: str, *, fallback: bool = False) -> Any:
    """Coerce a string-encoded boolean, number, or JSON literal.

    Non-string values are returned unchanged.  For strings:

    * ``"true"`` / ``"false"`` (any case) become booleans.
    * An empty string becomes ``None`` (absent).
    * Anything else is parsed as a JSON literal (``"10"`` -> ``10``,
      ``'"abc"'`` -> ``"abc"``).

    Args:
        value: The raw input value.
        field: Field name used in the error when parsing fails.
        fallback: When ``True`` an unparsable string yields ``None``
            instead of raising.

    Returns:
        The coerced value, or ``None`` when absent.

    Raises:
        MalformedLiteralError: If *value* cannot be parsed and *fallback*
            is ``False``.
    """
    if not isinstance(value, str):
        return value

    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value == "":
        return None

    try:
        return json.loads(value)
    except ValueError:
        if fallback:
            return None
        raise MalformedLiteralError(field, value) from None


def coerce_bool(value: Any, field: str) -> bool | None:
    """Coerce *value* to a boolean, keeping ``None`` for absent values."""
    value = coerce_literal(value, field)
    if value is None:
        return None
    return bool(value)


def as_dict(value: Any, field: str) -> Mapping[str, Any]:
    """Return *value* as a mapping, treating ``None`` as empty.

    Raises:
        StructuralError: If *value* is present but not a mapping.
    """
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise StructuralError(field, "an object", value)
    return value


def as_list(value: Any, field: str) -> list[Any]:
    """Return *value* as a list, treating ``None`` as empty.

    Raises:
        StructuralError: If *value* is present but not a list or tuple.
    """
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise StructuralError(field, "an array", value)
    return list(value)


def is_value(value: Any) -> bool:
    """Return ``True`` unless *value* is ``None`` or an empty container."""
    if value is None:
        return False
    if isinstance(value, (Mapping, list, tuple)):
        return len(value) > 0
    return True


def strip_empty(obj: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *obj* without ``None`` values or empty containers.

    Empty strings and ``False``/``0`` are kept; they are meaningful values.
    """
    return {key: value for key, value in obj.items() if is_value(value)}


def clone(value: Any) -> Any:
    """Deep-copy a value carried verbatim from the input into the output.

    Read-only mappings and tuples are converted to plain dicts and lists so
    the output is always an ordinary JSON tree.
    """
    if isinstance(value, Mapping):
        return {key: clone(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [clone(item) for item in value]
    return copy.deepcopy(value)


def fix_path(path: str) -> str:
    """Make *path* absolute and substitute the ``{format}`` placeholder."""
    path = path.replace("{format}", "json")
    if not path.startswith("/"):
        path = "/" + path
    return path


def unique(items: list[Any]) -> list[Any]:
    """De-duplicate *items*, keeping first occurrences in order."""
    result: list[Any] = []
    for item in items:
        if item not in result:
            result.append(item)
    return result
