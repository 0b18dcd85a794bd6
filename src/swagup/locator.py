"""Locate the API declarations referenced by a Swagger 1.x resource listing.

A resource listing names its API declarations by relative path.  This
module turns those paths into absolute URLs so that a loader can fetch
them; it never performs any I/O itself.

Swagger 1.x producers disagree on how the paths combine with the listing
URL, so the rules follow what Swagger UI historically accepted:

* The path is *appended* to the base path rather than resolved against it
  (``http://host/api-docs.json`` + ``/pet`` ->
  ``http://host/api-docs.json/pet``).
* Swagger 1.0 listings served from a ``*.json`` file address declarations
  relative to the file's directory.
* A base URL ending in a query string (``http://host?spec=``) receives the
  URL-encoded path as the query value.

The single public function is :func:`list_api_declarations`.
"""

from __future__ import annotations

import posixpath
from collections.abc import Mapping
from typing import Any
from urllib.parse import SplitResult, quote, urljoin, urlsplit, urlunsplit

from swagup.converter.coerce import as_dict, as_list
from swagup.exceptions import StructuralError


def list_api_declarations(source_url: str, resource_listing: Mapping[str, Any]) -> dict[str, str]:
    """Compute the absolute URL of every referenced API declaration.

    Args:
        source_url: The URL the resource listing was fetched from.
        resource_listing: The parsed resource listing.

    Returns:
        A dict mapping each entry's ``path`` (exactly as written in the
        listing) to the absolute URL of its API declaration.  Entries with
        inline ``operations`` are skipped.

    Raises:
        StructuralError: If ``apis`` is not a list or an entry's ``path``
            is not a string.
        ValueError: If a URL cannot be parsed.

    Example::

        >>> list_api_declarations(
        ...     "http://test.com/api-docs.json",
        ...     {"swaggerVersion": "1.2", "apis": [{"path": "/pet"}]},
        ... )
        {'/pet': 'http://test.com/api-docs.json/pet'}
    """
    base_url = resource_listing.get("basePath")
    base = urlsplit(urljoin(source_url, base_url) if base_url else source_url)
    base_path = base.path
    if resource_listing.get("swaggerVersion") == "1.0" and _is_json_file(base_path):
        base_path = base_path.rsplit("/", 1)[0]

    result: dict[str, str] = {}
    for index, api in enumerate(as_list(resource_listing.get("apis"), "apis")):
        api = as_dict(api, f"apis[{index}]")
        if "operations" in api:
            continue
        path = api.get("path")
        if not isinstance(path, str):
            raise StructuralError(f"apis[{index}].path", "a string", path)
        result[path] = _join(base, base_path, path.replace("{format}", "json"))
    return result


def _is_json_file(path: str) -> bool:
    return posixpath.splitext(path)[1].lower() == ".json"


def _join(base: SplitResult, base_path: str, path: str) -> str:
    """Append *path* to the base URL (see module docstring for the rules)."""
    target = urlsplit(path)
    if target.scheme:
        return urlunsplit(target._replace(path=_remove_dot_segments(target.path)))

    if base.query:
        return urlunsplit(
            (base.scheme, base.netloc, base_path or "/", base.query + quote(path, safe=""), "")
        )

    joined = base_path.rstrip("/") + "/" + target.path.lstrip("/")
    return urlunsplit(
        (base.scheme, base.netloc, _remove_dot_segments(joined), target.query, "")
    )


def _remove_dot_segments(path: str) -> str:
    """Collapse ``.`` and ``..`` segments (RFC 3986 section 5.2.4)."""
    output: list[str] = []
    for segment in path.split("/"):
        if segment == "..":
            if len(output) > 1:
                output.pop()
        elif segment != ".":
            output.append(segment)
    if path.endswith(("/.", "/..")):
        output.append("")

    normalized = "/".join(output)
    if path.startswith("/") and not normalized.startswith("/"):
        normalized = "/" + normalized
    return normalized
