"""Schema Package - Bundled Design Tokens Schemas and Loader.

This package ships the JSON Schemas that describe the two W3C Design Tokens
document formats, together with the loader that resolves schema identifiers
to parsed documents.

Available Schemas:
    format.json: Design Tokens Format Module (*.tokens.json documents)
    resolver.json: Design Tokens Resolver Module (*.resolver.json documents)

    Both root schemas split their definitions across the format/,
    format/values/ and resolver/ directories and link them with relative
    $ref values.

Usage:
    from schema import SchemaLoader, FORMAT_SCHEMA
    loader = SchemaLoader()
    root = loader.load(FORMAT_SCHEMA)

Remote identifiers never trigger network access: a schema URL is mapped to the
file with the same name in SCHEMA_DIR.
"""
from .schema import (
    FORMAT_SCHEMA,
    RESOLVER_SCHEMA,
    SCHEMA_DIR,
    SchemaCache,
    SchemaLoader,
)

__all__ = [
    "FORMAT_SCHEMA",
    "RESOLVER_SCHEMA",
    "SCHEMA_DIR",
    "SchemaCache",
    "SchemaLoader",
]
