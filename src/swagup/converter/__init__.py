"""Swagger 1.x -> Swagger 2.0 schema converter.

This sub-package is the core of swagup.  It takes already-parsed documents
and returns a new Swagger 2.0 document; it performs no I/O and no logging.

Typical usage::

    from swagup.converter import convert

    swagger = convert(resource_listing, {"/pets": pets_declaration})

Sub-modules:

* :mod:`~swagup.converter.document` -- top-level assembly (:func:`convert`).
* :mod:`~swagup.converter.info` -- ``info``, host/base path, and tags.
* :mod:`~swagup.converter.security` -- security definitions and requirements.
* :mod:`~swagup.converter.operations` -- paths, operations, parameters,
  and responses.
* :mod:`~swagup.converter.datatypes` -- data types, models, and
  inheritance.
* :mod:`~swagup.converter.coerce` -- literal coercion and structural checks.
"""

from swagup.converter.context import ConversionContext
from swagup.converter.document import convert

__all__ = ["ConversionContext", "convert"]
