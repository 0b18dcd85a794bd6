"""swagup -- Convert Swagger 1.x API descriptions to Swagger 2.0.

A Swagger 1.x API is a *resource listing* plus one *API declaration* per
resource.  swagup locates and loads the declarations, then converts the
whole set into a single Swagger 2.0 document.

Typical workflow::

    swagup convert http://petstore.example.com/api/api-docs > swagger.json
    swagup locate ./api-docs.json

or, from Python::

    from swagup import convert

    swagger = convert(resource_listing, {"/pets": pets_declaration})

Modules:
    app: Typer application and CLI entry point.
    converter: The pure Swagger 1.x -> 2.0 converter.
    locator: URL computation for referenced API declarations.
    loader: Loading documents from URLs, files, and stdin.
    models: Pydantic models for options and configuration.
    config: XDG-aware configuration resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

from swagup.converter import convert  # noqa: E402
from swagup.loader import convert_from_source  # noqa: E402
from swagup.locator import list_api_declarations  # noqa: E402

__all__ = ["__version__", "convert", "convert_from_source", "list_api_declarations"]
