"""Translate Swagger 1.x authorizations into Swagger 2.0 security objects.

Swagger 1.2 lets one ``oauth2`` authorization describe both the
``implicit`` and the ``authorization_code`` grant, while a Swagger 2.0
security definition holds exactly one flow.  Such an authorization is
split into one definition per grant type, and the generated names are
recorded in a *security name map* so that every later reference to the
original name expands to all of its definitions.
"""

from __future__ import annotations

from typing import Any

from swagup.converter.coerce import as_dict, as_list, strip_empty

_TYPE_RENAMES = {"basicAuth": "basic"}

# Swagger 1.2 grant type -> Swagger 2.0 flow.  Other grant types have no
# Swagger 2.0 counterpart and are skipped.
_FLOWS = {"implicit": "implicit", "authorization_code": "accessCode"}


def build_security_definitions(
    authorizations: Any,
) -> tuple[dict[str, Any], dict[str, list[str]]]:
    """Build ``securityDefinitions`` and the security name map.

    Args:
        authorizations: The ``authorizations`` object of the resource
            listing (name -> authorization), or ``None``.

    Returns:
        A ``(definitions, name_map)`` tuple.  ``name_map`` maps every
        original authorization name to the list of definition names
        generated for it.
    """
    definitions: dict[str, Any] = {}
    name_map: dict[str, list[str]] = {}

    for name, authorization in as_dict(authorizations, "authorizations").items():
        field = f"authorizations.{name}"
        authorization = as_dict(authorization, field)
        base = strip_empty(
            {
                "type": _TYPE_RENAMES.get(authorization.get("type"), authorization.get("type")),
                "in": authorization.get("passAs"),
                "name": authorization.get("keyname"),
                "scopes": _build_scopes(authorization.get("scopes"), f"{field}.scopes"),
            }
        )

        grant_types = authorization.get("grantTypes")
        if grant_types is None:
            definitions[name] = base
            name_map[name] = [name]
            continue

        grant_types = {
            flow_name: grant
            for flow_name, grant in as_dict(grant_types, f"{field}.grantTypes").items()
            if flow_name in _FLOWS
        }
        if not grant_types:
            # No grant type with a Swagger 2.0 flow; keep the bare definition.
            definitions[name] = base
            name_map[name] = [name]
            continue
        name_map[name] = []
        for flow_name, grant in grant_types.items():
            grant = as_dict(grant, f"{field}.grantTypes.{flow_name}")
            definition_name = f"{name}_{flow_name}" if len(grant_types) > 1 else name
            definition = dict(base)
            definition.update(_build_flow(flow_name, grant))
            definitions[definition_name] = definition
            name_map[name].append(definition_name)

    return definitions, name_map


def _build_flow(flow_name: str, grant: Any) -> dict[str, Any]:
    """Return the flow-specific fields for one OAuth2 grant type."""
    if flow_name == "implicit":
        return strip_empty(
            {
                "flow": "implicit",
                "authorizationUrl": _endpoint_url(grant.get("loginEndpoint")),
            }
        )
    return strip_empty(
        {
            "flow": "accessCode",
            "authorizationUrl": _endpoint_url(grant.get("tokenRequestEndpoint")),
            "tokenUrl": _endpoint_url(grant.get("tokenEndpoint")),
        }
    )


def _endpoint_url(endpoint: Any) -> str | None:
    return as_dict(endpoint, "endpoint").get("url")


def _build_scopes(scopes: Any, field: str) -> dict[str, str]:
    """Map scope name -> description, inventing a description when missing."""
    result: dict[str, str] = {}
    for scope in as_list(scopes, field):
        scope = as_dict(scope, field)
        scope_name = scope.get("scope")
        if scope_name is None:
            continue
        result[scope_name] = scope.get("description") or f"Undescribed {scope_name}"
    return result


def build_security(
    authorizations: Any, name_map: dict[str, list[str]], field: str = "authorizations"
) -> list[dict[str, list[str]]]:
    """Expand Swagger 1.x authorization references into security requirements.

    Args:
        authorizations: An operation's ``authorizations`` object (name ->
            list of scopes), or ``None``.
        name_map: The security name map from
            :func:`build_security_definitions`.
        field: Name used in structural errors.

    Returns:
        One single-key requirement object per generated definition name.
        Names missing from *name_map* are passed through unchanged.
    """
    requirements: list[dict[str, list[str]]] = []
    for name, scopes in as_dict(authorizations, field).items():
        scope_names = [_scope_name(scope) for scope in as_list(scopes, f"{field}.{name}")]
        scope_names = [scope for scope in scope_names if scope is not None]
        for definition_name in name_map.get(name, [name]):
            requirements.append({definition_name: list(scope_names)})
    return requirements


def _scope_name(scope: Any) -> str | None:
    # Swagger 1.2 lists scope objects; some producers emit bare strings.
    if isinstance(scope, str):
        return scope
    return as_dict(scope, "scope").get("scope")
