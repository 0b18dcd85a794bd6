"""Tests for swagup.converter.security."""

from __future__ import annotations

from typing import Any

from swagup.converter.security import build_security, build_security_definitions

LOGIN_URL = "http://example.com/oauth/dialog"
REQUEST_URL = "http://example.com/oauth/requestToken"
TOKEN_URL = "http://example.com/oauth/token"


def _oauth2(grant_types: dict[str, Any]) -> dict[str, Any]:
    return {
        "oauth2": {
            "type": "oauth2",
            "scopes": [{"scope": "write:pets", "description": "Modify pets"}, {"scope": "read:pets"}],
            "grantTypes": grant_types,
        }
    }


IMPLICIT = {"loginEndpoint": {"url": LOGIN_URL}, "tokenName": "access_token"}
AUTH_CODE = {
    "tokenRequestEndpoint": {"url": REQUEST_URL},
    "tokenEndpoint": {"url": TOKEN_URL},
}


class TestSecurityDefinitions:
    def test_basic_auth_renamed(self) -> None:
        definitions, names = build_security_definitions({"basic": {"type": "basicAuth"}})
        assert definitions == {"basic": {"type": "basic"}}
        assert names == {"basic": ["basic"]}

    def test_api_key(self) -> None:
        definitions, _ = build_security_definitions(
            {"key": {"type": "apiKey", "passAs": "query", "keyname": "api_key"}}
        )
        assert definitions == {"key": {"type": "apiKey", "in": "query", "name": "api_key"}}

    def test_single_grant_keeps_name(self) -> None:
        definitions, names = build_security_definitions(_oauth2({"implicit": IMPLICIT}))
        assert names == {"oauth2": ["oauth2"]}
        assert definitions["oauth2"] == {
            "type": "oauth2",
            "scopes": {"write:pets": "Modify pets", "read:pets": "Undescribed read:pets"},
            "flow": "implicit",
            "authorizationUrl": LOGIN_URL,
        }

    def test_two_grants_split_by_flow(self) -> None:
        definitions, names = build_security_definitions(
            _oauth2({"implicit": IMPLICIT, "authorization_code": AUTH_CODE})
        )
        assert names == {"oauth2": ["oauth2_implicit", "oauth2_authorization_code"]}
        assert definitions["oauth2_authorization_code"]["flow"] == "accessCode"
        assert definitions["oauth2_authorization_code"]["authorizationUrl"] == REQUEST_URL
        assert definitions["oauth2_authorization_code"]["tokenUrl"] == TOKEN_URL
        assert definitions["oauth2_implicit"]["scopes"] == definitions[
            "oauth2_authorization_code"
        ]["scopes"]

    def test_unsupported_grant_types_skipped(self) -> None:
        definitions, names = build_security_definitions(
            _oauth2({"implicit": IMPLICIT, "password": {"tokenEndpoint": {"url": TOKEN_URL}}})
        )
        assert names == {"oauth2": ["oauth2"]}
        assert list(definitions) == ["oauth2"]

    def test_only_unsupported_grant_types_keep_definition(self) -> None:
        definitions, names = build_security_definitions(
            _oauth2({"password": {"tokenEndpoint": {"url": TOKEN_URL}}})
        )
        assert names == {"oauth2": ["oauth2"]}
        assert definitions == {
            "oauth2": {
                "type": "oauth2",
                "scopes": {"write:pets": "Modify pets", "read:pets": "Undescribed read:pets"},
            }
        }
        assert build_security({"oauth2": []}, names) == [{"oauth2": []}]

    def test_absent(self) -> None:
        assert build_security_definitions(None) == ({}, {})


class TestSecurityRequirements:
    def test_expands_split_names(self) -> None:
        name_map = {"oauth2": ["oauth2_implicit", "oauth2_authorization_code"]}
        result = build_security({"oauth2": [{"scope": "write:pets"}]}, name_map)
        assert result == [
            {"oauth2_implicit": ["write:pets"]},
            {"oauth2_authorization_code": ["write:pets"]},
        ]

    def test_unknown_name_passes_through(self) -> None:
        assert build_security({"legacy": []}, {}) == [{"legacy": []}]

    def test_string_scopes(self) -> None:
        assert build_security({"oauth2": ["read:pets"]}, {"oauth2": ["oauth2"]}) == [
            {"oauth2": ["read:pets"]}
        ]

    def test_absent(self) -> None:
        assert build_security(None, {}) == []
