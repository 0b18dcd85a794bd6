"""Load Swagger 1.x documents from a URL, local file, or stdin.

This module handles all I/O around the converter core.  It fetches raw
documents, parses them as JSON or YAML, discovers and fetches the API
declarations a resource listing refers to, and hands everything to
:func:`~swagup.converter.convert`.

The public functions are:

* :func:`load_document` -- load and parse one document from any source.
* :func:`load_api_declarations` -- fetch every declaration a listing refers to.
* :func:`convert_from_source` -- load a whole API and convert it.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlsplit
from urllib.request import url2pathname

import httpx
import yaml

from swagup.converter import convert
from swagup.converter.document import OptionsLike
from swagup.exceptions import DocumentLoadError
from swagup.locator import list_api_declarations

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def load_document(source: str, timeout: float = DEFAULT_TIMEOUT) -> dict[str, Any]:
    """Load a document from URL, ``file://`` URL, file path, or stdin (``-``).

    Supports JSON and YAML; the format is detected from the extension or
    content type, falling back to trying JSON first.

    Args:
        source: A URL (http/https/file), file path, or ``-`` for stdin.
        timeout: Timeout in seconds for remote fetches.

    Returns:
        The parsed document as a dictionary.

    Raises:
        DocumentLoadError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source, timeout)
    elif source.startswith("file://"):
        return _load_from_file(url2pathname(urlsplit(source).path))
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read a document from stdin.

    Raises:
        DocumentLoadError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str, timeout: float) -> dict[str, Any]:
    """Fetch a document over HTTP(S).

    Raises:
        DocumentLoadError: If the URL cannot be fetched or parsed.
    """
    logger.debug("Fetching %s", url)
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise DocumentLoadError(
            f"HTTP {exc.response.status_code} fetching {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise DocumentLoadError(f"Failed to fetch {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint, origin=url)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local file.

    Raises:
        DocumentLoadError: If the file is missing, empty, or unparsable.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentLoadError(f"File not found: {path}")

    logger.debug("Reading %s", file_path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read {path}: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError(f"File is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint, origin=path)


def _parse_content(content: str, hint: str = "", origin: str = "document") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hinted as YAML), then falls back to YAML.

    Raises:
        DocumentLoadError: If the content cannot be parsed as either
            format, or is not an object.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            return _require_object(json.loads(content), origin)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise DocumentLoadError(f"Invalid JSON in {origin}: {exc}") from exc

    try:
        return _require_object(yaml.safe_load(content), origin)
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = f"Failed to parse {origin} as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise DocumentLoadError(msg)


def _require_object(result: Any, origin: str) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise DocumentLoadError(f"{origin} must be a JSON/YAML object (got {kind})")
    return result


def load_api_declarations(
    source_url: str,
    resource_listing: Mapping[str, Any],
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, dict[str, Any]]:
    """Fetch every API declaration referenced by *resource_listing*.

    Args:
        source_url: The URL the resource listing was loaded from.
        resource_listing: The parsed resource listing.
        timeout: Timeout in seconds for each remote fetch.

    Returns:
        Parsed declarations keyed by the listing's ``path`` values, ready
        for :func:`~swagup.converter.convert`.
    """
    declarations: dict[str, dict[str, Any]] = {}
    for path, url in list_api_declarations(source_url, resource_listing).items():
        logger.debug("Loading API declaration %s from %s", path, url)
        declarations[path] = load_document(url, timeout)
    return declarations


def convert_from_source(
    source: str,
    options: OptionsLike = None,
    declarations: Optional[Mapping[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """Load a Swagger 1.x API from *source* and convert it to Swagger 2.0.

    Args:
        source: Where the resource listing lives (see :func:`load_document`).
        options: Conversion options passed to :func:`~swagup.converter.convert`.
        declarations: Explicit ``path -> source`` locations for the API
            declarations.  When given, nothing is located automatically.
        timeout: Timeout in seconds for remote fetches.

    Returns:
        The converted Swagger 2.0 document.

    Raises:
        DocumentLoadError: If any document cannot be loaded.
        ConversionError: If the documents cannot be converted.
    """
    resource_listing = load_document(source, timeout)

    if declarations is not None:
        api_declarations = {
            path: load_document(location, timeout)
            for path, location in declarations.items()
        }
    else:
        api_declarations = load_api_declarations(source_url(source), resource_listing, timeout)

    logger.debug("Converting %s with %d API declaration(s)", source, len(api_declarations))
    return convert(resource_listing, api_declarations, options)


def source_url(source: str) -> str:
    """Return *source* as a URL usable as a base for relative paths."""
    if source == "-":
        return ""
    if "://" in source:
        return source
    return Path(source).resolve().as_uri()
