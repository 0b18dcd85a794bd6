"""Tests for swagup.locator -- API declaration URL computation."""

from __future__ import annotations

from typing import Any

import pytest

from swagup.exceptions import StructuralError
from swagup.locator import list_api_declarations


def _listing(**extra: Any) -> dict[str, Any]:
    listing: dict[str, Any] = {"swaggerVersion": "1.2", "apis": [{"path": "/pet"}]}
    listing.update(extra)
    return listing


class TestListApiDeclarations:
    def test_path_appended_to_listing_url(self) -> None:
        result = list_api_declarations("http://test.com/api-docs.json", _listing())
        assert result == {"/pet": "http://test.com/api-docs.json/pet"}

    def test_version_1_0_json_file_uses_directory(self) -> None:
        result = list_api_declarations(
            "http://test.com/api-docs.json", _listing(swaggerVersion="1.0")
        )
        assert result == {"/pet": "http://test.com/pet"}

    def test_version_1_0_without_json_suffix(self) -> None:
        result = list_api_declarations(
            "http://test.com/api-docs", _listing(swaggerVersion="1.0")
        )
        assert result == {"/pet": "http://test.com/api-docs/pet"}

    def test_absolute_path_kept(self) -> None:
        listing = _listing(apis=[{"path": "http://foo.com/pet.json"}])
        result = list_api_declarations("http://test.com/api-docs.json", listing)
        assert result == {"http://foo.com/pet.json": "http://foo.com/pet.json"}

    def test_base_path_overrides_source(self) -> None:
        result = list_api_declarations(
            "http://test.com/api-docs.json", _listing(basePath="http://bar.com")
        )
        assert result == {"/pet": "http://bar.com/pet"}

    def test_relative_base_path_resolved_against_source(self) -> None:
        result = list_api_declarations(
            "http://test.com/docs/index.json", _listing(basePath="/api-docs")
        )
        assert result == {"/pet": "http://test.com/api-docs/pet"}

    def test_base_path_with_query(self) -> None:
        result = list_api_declarations(
            "http://test.com/api-docs.json", _listing(basePath="http://bar.com?spec=")
        )
        assert result == {"/pet": "http://bar.com/?spec=%2Fpet"}

    def test_format_placeholder(self) -> None:
        listing = _listing(apis=[{"path": "/pet.{format}"}])
        result = list_api_declarations("http://test.com/api-docs", listing)
        assert result == {"/pet.{format}": "http://test.com/api-docs/pet.json"}

    def test_dot_segments_collapsed(self) -> None:
        listing = _listing(apis=[{"path": "/../pet"}])
        result = list_api_declarations("http://test.com/docs/api", listing)
        assert result == {"/../pet": "http://test.com/docs/pet"}

    def test_embedded_entries_skipped(self) -> None:
        listing = _listing(apis=[{"path": "/pet", "operations": []}])
        assert list_api_declarations("http://test.com/api-docs.json", listing) == {}

    def test_file_url(self) -> None:
        result = list_api_declarations("file:///srv/docs/index.json", _listing())
        assert result == {"/pet": "file:///srv/docs/index.json/pet"}

    def test_non_string_path(self) -> None:
        with pytest.raises(StructuralError) as exc_info:
            list_api_declarations("http://test.com", _listing(apis=[{"path": 3}]))
        assert exc_info.value.field == "apis[0].path"

    def test_no_apis(self) -> None:
        assert list_api_declarations("http://test.com", {"swaggerVersion": "1.2"}) == {}
