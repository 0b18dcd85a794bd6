"""Build the document-level metadata: ``info``, host/base path, and tags.

Swagger 1.x allowed every API declaration to carry its own ``basePath``;
Swagger 2.0 has exactly one ``host`` + ``basePath`` pair per document.
:func:`aggregate_path_components` reconciles the two and refuses to
guess when the declarations disagree.

Tags replace the Swagger 1.x notion of a *resource*: every declaration
gets one short tag name (``/api-docs/pet.json`` -> ``pet``) that is
applied to all of its operations.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urljoin, urlsplit

from swagup.converter.coerce import as_dict, strip_empty
from swagup.exceptions import ConflictingBasePathError
from swagup.models import ConvertOptions

TITLE_PLACEHOLDER = "Title was not specified"
DEFAULT_VERSION = "1.0.0"


def build_info(resource_listing: Mapping[str, Any]) -> dict[str, Any]:
    """Build the Swagger 2.0 ``info`` object from the resource listing."""
    info = as_dict(resource_listing.get("info"), "info")
    api_version = resource_listing.get("apiVersion")

    result: dict[str, Any] = {
        "title": info.get("title") or TITLE_PLACEHOLDER,
        "version": str(api_version) if api_version is not None else DEFAULT_VERSION,
    }

    contact = info.get("contact")
    license_name = info.get("license")
    result.update(
        strip_empty(
            {
                "description": info.get("description"),
                "termsOfService": info.get("termsOfServiceUrl"),
                # Swagger 1.x only ever had a bare e-mail address here.
                "contact": {"email": contact} if contact else None,
                "license": (
                    strip_empty({"name": license_name, "url": info.get("licenseUrl")})
                    if license_name
                    else None
                ),
            }
        )
    )
    return result


def build_path_components(base_path: str) -> dict[str, Any]:
    """Split an absolute base URL into ``host``, ``basePath`` and ``schemes``.

    Example::

        >>> build_path_components("https://api.example.com/v1")
        {'host': 'api.example.com', 'basePath': '/v1', 'schemes': ['https']}
    """
    parts = urlsplit(base_path)
    return strip_empty(
        {
            "host": parts.netloc or None,
            "basePath": parts.path or "/",
            "schemes": [parts.scheme] if parts.scheme else None,
        }
    )


def aggregate_path_components(
    resource_listing: Mapping[str, Any],
    declarations: list[Mapping[str, Any]],
) -> dict[str, Any]:
    """Compute the single ``host``/``basePath``/``schemes`` of the output.

    The root ``basePath`` is the starting point.  A declaration's own
    ``basePath`` is resolved against it (so relative values work) and then
    replaces it; every later declaration must resolve to the same URL.
    A trailing ``/`` is ignored when comparing.

    Args:
        resource_listing: The Swagger 1.x root document.
        declarations: The API declarations in listing order (empty for an
            embedded document).

    Returns:
        The path components, or an empty dict when no base path is known.

    Raises:
        ConflictingBasePathError: If two declarations resolve to different
            base paths.
    """
    root = resource_listing.get("basePath")
    established: str | None = None

    for declaration in declarations:
        base_path = declaration.get("basePath")
        if not base_path:
            continue
        absolute = urljoin(root, base_path) if root else base_path
        if established is None:
            established = absolute
        elif established.rstrip("/") != absolute.rstrip("/"):
            raise ConflictingBasePathError(established, absolute)

    base_path = established or root
    if not base_path:
        return {}
    return build_path_components(base_path)


def build_tags(
    resources: list[tuple[Mapping[str, Any], Mapping[str, Any]]],
    options: ConvertOptions,
) -> tuple[list[dict[str, Any]], list[str]]:
    """Derive one tag per referenced API declaration.

    Tag names come from each declaration's ``resourcePath``.  When
    *options* asks for it, or when ``resourcePath`` values are missing or
    duplicated, the resource listing entry's ``path`` is used instead.

    Args:
        resources: ``(listing entry, declaration)`` pairs in listing order.
        options: The conversion options.

    Returns:
        A ``(tags, names)`` tuple: the ``tags`` objects for the output
        document, and the tag name of each resource (parallel to
        *resources*).
    """
    if not resources:
        return [], []

    resource_paths = [declaration.get("resourcePath") for _, declaration in resources]
    usable = all(isinstance(path, str) and path for path in resource_paths)
    if options.build_tags_from_paths or not usable or len(set(resource_paths)) < len(resources):
        sources = [str(entry.get("path") or "") for entry, _ in resources]
    else:
        sources = resource_paths

    names = shorten_names(sources)
    if sources is resource_paths and not all(names):
        # A root resourcePath such as "/" leaves nothing to name the tag by.
        names = shorten_names([str(entry.get("path") or "") for entry, _ in resources])

    tags: list[dict[str, Any]] = []
    seen: set[str] = set()
    for name, (entry, _) in zip(names, resources):
        if not name or name in seen:
            continue
        seen.add(name)
        tags.append(strip_empty({"name": name, "description": entry.get("description")}))
    return tags, names


def shorten_names(paths: list[str]) -> list[str]:
    """Turn resource paths into short tag names.

    Strips the longest common prefix ending at a ``/``, substitutes the
    ``{format}`` placeholder, and drops a trailing ``/`` and ``.json``.

    Example::

        >>> shorten_names(["/api-docs/pet.json", "/api-docs/user.json"])
        ['pet', 'user']
    """
    prefix = _common_prefix(paths)
    names: list[str] = []
    for path in paths:
        name = path[len(prefix):].replace("{format}", "json").rstrip("/")
        if name.endswith(".json"):
            name = name[: -len(".json")]
        names.append(name)
    return names


def _common_prefix(paths: list[str]) -> str:
    """Longest common prefix ending at a ``/`` that leaves every path non-empty."""
    if not paths:
        return ""
    shortest = min(len(path.rstrip("/")) for path in paths)
    prefix = paths[0][: max(shortest - 1, 0)]
    for path in paths[1:]:
        while not path.startswith(prefix):
            prefix = prefix[:-1]
    return prefix[: prefix.rfind("/") + 1]
