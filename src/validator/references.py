"""Discovery and registration of externally referenced schemas.

Before the root schema can be compiled, every schema it reaches through an
external $ref has to be registered with the engine. This module walks a
schema document depth-first and, for every external reference, loads the
target through the SchemaLoader, registers it, and walks it in turn.

Rules:
    - A $ref is internal iff it starts with "#". Anything else names a file,
      possibly followed by a fragment ("other.json#/$defs/x"); the file part
      is loaded and the fragment is left to the engine.
    - Relative references resolve against the directory of the file that
      contains them, not the root schema's directory.
    - A reference whose resolved path is already in the schema cache is
      skipped. This is what terminates cycles (a.json -> b.json -> a.json)
      and keeps every schema from being registered twice.
    - A schema is registered under its own $id when it declares one,
      otherwise under the reference joined onto the referring schema's id.
      That is the URI the engine computes when it follows the same $ref.
      When a declared $id differs from that URI, the schema is registered
      under both.
"""
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urldefrag, urljoin

from schema import SchemaLoader

from .engine import SchemaEngine

logger = logging.getLogger(__name__)


def is_internal_ref(ref: str) -> bool:
    """Return True if ref points into the document that contains it."""
    return ref.startswith("#")


def register_referenced_schemas(
    engine: SchemaEngine,
    loader: SchemaLoader,
    schema: Any,
    base_dir: Path,
    base_uri: str = "",
) -> None:
    """Register every schema transitively referenced from schema.

    Args:
        engine: Engine to register referenced schemas with
        loader: Loader whose cache doubles as the set of visited files
        schema: Schema document to walk
        base_dir: Directory of the file schema was loaded from
        base_uri: Identifier schema is registered under ("" for a root
            without $id)

    Raises:
        SchemaNotFoundError: If a referenced file does not exist
        SchemaParseError: If a referenced file is not valid JSON
    """
    if isinstance(schema, list):
        for item in schema:
            register_referenced_schemas(engine, loader, item, base_dir, base_uri)
        return
    if not isinstance(schema, dict):
        return

    ref = schema.get("$ref")
    if isinstance(ref, str) and not is_internal_ref(ref):
        _register_reference(engine, loader, ref, base_dir, base_uri)

    for key, value in schema.items():
        if key != "$ref":
            register_referenced_schemas(engine, loader, value, base_dir, base_uri)


def _register_reference(
    engine: SchemaEngine,
    loader: SchemaLoader,
    ref: str,
    base_dir: Path,
    base_uri: str,
) -> None:
    target, _fragment = urldefrag(ref)
    if not target:
        return
    if target.startswith("http://") or target.startswith("https://"):
        identifier = target
    else:
        identifier = str(base_dir / target)

    path = loader.resolve_path(identifier)
    if path in loader.cache:
        return

    ref_schema = loader.load(identifier)

    ref_uri = urljoin(base_uri, target)
    schema_id = None
    if isinstance(ref_schema, dict) and isinstance(ref_schema.get("$id"), str):
        schema_id = ref_schema["$id"]
    if not schema_id:
        schema_id = ref_uri

    _add_if_missing(engine, ref_schema, schema_id)
    if ref_uri != schema_id:
        # The $ref as written must resolve even when the target declares another $id
        _add_if_missing(engine, ref_schema, ref_uri)

    logger.debug(f"Resolved $ref {ref!r} to {path}")
    register_referenced_schemas(engine, loader, ref_schema, path.parent, schema_id)


def _add_if_missing(engine: SchemaEngine, schema: Any, uri: str) -> None:
    if engine.get_schema(uri) is None:
        engine.add_schema(schema, uri)
    else:
        logger.debug(f"Schema {uri} already registered, skipping")
