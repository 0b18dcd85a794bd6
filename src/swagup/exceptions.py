"""Exception hierarchy for swagup.

All exceptions inherit from :class:`SwagupError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`swagup.exit_codes`.
The top-level error handler in :func:`swagup.app.main` catches
``SwagupError`` and exits with the appropriate code.

Errors raised by the converter core derive from :class:`ConversionError`
and carry the offending field or name as attributes, so callers can build
their own messages without parsing ``str(exc)``.

Subclass hierarchy::

    SwagupError (exit 1)
    +-- InvalidUsageError              (exit 2)
    +-- DocumentLoadError              (exit 3)
    +-- ConfigError                    (exit 1)
    +-- ConversionError                (exit 4)
        +-- StructuralError
        +-- CircularInheritanceError
        +-- MissingReferenceError
        +-- ConflictingBasePathError
        +-- MixedDeclarationStyleError
        +-- UnrepresentableParameterError
        +-- MalformedLiteralError
"""

from __future__ import annotations

from typing import Any

from swagup.exit_codes import (
    EXIT_CONVERSION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_LOAD_ERROR,
)


class SwagupError(Exception):
    """Base exception for all swagup errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`swagup.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SwagupError):
    """Raised for invalid CLI arguments (e.g. a malformed ``-d`` mapping)."""

    exit_code = EXIT_INVALID_USAGE


class DocumentLoadError(SwagupError):
    """Raised when a source document cannot be read, fetched, or parsed."""

    exit_code = EXIT_LOAD_ERROR


class ConfigError(SwagupError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE


class ConversionError(SwagupError):
    """Base class for every error raised by the converter core.

    Args:
        message: Human-readable error description.
        field: Name of the input field the error relates to, if any.
    """

    exit_code = EXIT_CONVERSION_ERROR

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class StructuralError(ConversionError):
    """An input node is not an object/array where one is required."""

    def __init__(self, field: str, expected: str, value: Any):
        super().__init__(
            f"'{field}' must be {expected}, got {type(value).__name__}",
            field=field,
        )
        self.expected = expected
        self.value = value


class CircularInheritanceError(ConversionError):
    """A model is its own ancestor through ``subTypes`` links."""

    def __init__(self, model_id: str):
        super().__init__(
            f"Model '{model_id}' inherits from itself through subTypes",
            field="subTypes",
        )
        self.name = model_id


class MissingReferenceError(ConversionError):
    """A referenced API declaration or ``subTypes`` model does not exist."""

    def __init__(self, message: str, name: str, field: str | None = None):
        super().__init__(message, field=field)
        self.name = name


class ConflictingBasePathError(ConversionError):
    """Two resources declare different absolute base paths."""

    def __init__(self, first: str, second: str):
        super().__init__(
            f"Resources declare conflicting base paths: '{first}' and '{second}'",
            field="basePath",
        )
        self.base_paths = (first, second)


class MixedDeclarationStyleError(ConversionError):
    """Some resource listing entries are embedded and others are references."""

    def __init__(self) -> None:
        super().__init__(
            "Resource listing mixes embedded operations with references "
            "to API declarations",
            field="apis",
        )


class UnrepresentableParameterError(ConversionError):
    """A non-body parameter refers to a model type."""

    def __init__(self, name: str | None, location: str | None):
        super().__init__(
            f"Complex type is used inside non-body parameter "
            f"'{name}' (in: {location})",
            field="parameters",
        )
        self.name = name
        self.location = location


class MalformedLiteralError(ConversionError):
    """A string-encoded boolean or number cannot be parsed."""

    def __init__(self, field: str, value: str):
        super().__init__(
            f"Invalid value for '{field}': {value!r} is not a boolean, "
            "number, or JSON literal",
            field=field,
        )
        self.value = value
