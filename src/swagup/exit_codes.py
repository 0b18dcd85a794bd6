"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~swagup.exceptions.SwagupError` subclass.
Shell scripts wrapping ``swagup convert`` can inspect the exit code to tell
a bad input document apart from an unreachable server.

Example::

    $ swagup convert https://api.example.com/api-docs
    $ echo $?
    4   # EXIT_CONVERSION_ERROR -- the documents could not be converted
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_LOAD_ERROR = 3
"""A source document could not be read, fetched, or parsed."""

EXIT_CONVERSION_ERROR = 4
"""The documents were loaded but could not be converted to Swagger 2.0."""
