"""Validator Package.

This package checks W3C Design Tokens documents against the bundled JSON
Schemas. It is split into small modules along the steps of a validation run:

Modules:
    engine: Wraps jsonschema/referencing. Holds the schema registry and
        compiles (links) the root schema into a validator.
    references: Walks a schema for external $ref values and registers every
        transitively referenced schema with the engine exactly once.
    diagnostics: Renders schema errors, either as a flat list or as a
        source excerpt of the failing document.
    discovery: Expands glob patterns into a sorted list of target files.
    validator: Orchestrates a run for one validation kind and prints a
        result per file.

Usage:
    from validator.validator import Validator
    ok = Validator("tokens").validate_files(["colors.tokens.json"])

Only the exceptions are imported here; the schema package depends on them,
so importing the heavier modules at package import time would be circular.
"""
from .exceptions import (
    DesignTokensError,
    DocumentParseError,
    SchemaCompileError,
    SchemaNotFoundError,
    SchemaParseError,
    UsageError,
)

__all__ = [
    "DesignTokensError",
    "DocumentParseError",
    "SchemaCompileError",
    "SchemaNotFoundError",
    "SchemaParseError",
    "UsageError",
]
