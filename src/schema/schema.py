"""
Schema Loading Module.

This module is responsible for turning a schema identifier into a parsed
JSON Schema document. Every schema the validator needs ships inside this
package, so loading never touches the network.

Identifier Resolution:
    1. "http://..." or "https://...": the last path segment of the URL is
       looked up in the schema directory. A URL such as
       https://www.designtokens.org/schemas/2025.10/format.json maps to
       <schema dir>/format.json.
    2. Absolute path: used as is.
    3. Anything else: relative to the schema directory.

Caching:
    Parsed documents are kept in a SchemaCache keyed by resolved filesystem
    path. A cache belongs to one validation run; the loader consults it before
    every read, so a given file is read from disk at most once per run.

Error Handling:
    - SchemaNotFoundError: the resolved file is missing or unreadable
    - SchemaParseError: the file is not JSON, or not an object/boolean schema
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union
from urllib.parse import urlparse

from validator.exceptions import SchemaNotFoundError, SchemaParseError

logger = logging.getLogger(__name__)

# Bundled schemas live next to this module (src/schema/)
SCHEMA_DIR = Path(__file__).parent

# Root schema per document format
FORMAT_SCHEMA = "format.json"
RESOLVER_SCHEMA = "resolver.json"

SchemaDocument = Union[Dict[str, Any], bool]


class SchemaCache:
    """Parsed schema documents keyed by resolved filesystem path.

    Entries are never evicted; a cache lives as long as one validation run.
    """

    def __init__(self):
        self._documents: Dict[Path, SchemaDocument] = {}

    def __contains__(self, path: Path) -> bool:
        return path in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Path]:
        return iter(self._documents)

    def get(self, path: Path) -> Optional[SchemaDocument]:
        return self._documents.get(path)

    def put(self, path: Path, document: SchemaDocument) -> None:
        self._documents[path] = document


class SchemaLoader:
    """Resolve schema identifiers to cached, parsed schema documents.

    Args:
        schema_dir: Directory holding the schema files. Defaults to the
            schemas bundled with this package.
        cache: Cache to read through. A fresh cache is created when omitted.

    Example:
        >>> loader = SchemaLoader()
        >>> schema = loader.load("https://www.designtokens.org/schemas/2025.10/format.json")
        >>> schema["title"]
        'Design Tokens Format Module'
    """

    def __init__(self, schema_dir: Optional[Union[str, Path]] = None, cache: Optional[SchemaCache] = None):
        self.schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        self.cache = cache if cache is not None else SchemaCache()

    def resolve_path(self, identifier: str) -> Path:
        """Map a schema identifier to the local file that holds it."""
        if identifier.startswith("http://") or identifier.startswith("https://"):
            filename = urlparse(identifier).path.rstrip("/").split("/")[-1]
            path = self.schema_dir / filename
        elif os.path.isabs(identifier):
            path = Path(identifier)
        else:
            path = self.schema_dir / identifier
        return path.resolve()

    def load(self, identifier: str) -> SchemaDocument:
        """Load a schema document, reading from disk only on a cache miss.

        Args:
            identifier: URL, absolute path, or name relative to the schema directory

        Returns:
            Parsed schema document

        Raises:
            SchemaNotFoundError: If the file is missing or unreadable
            SchemaParseError: If the file is not a valid JSON schema document
        """
        path = self.resolve_path(identifier)

        cached = self.cache.get(path)
        if cached is not None:
            logger.debug(f"Schema cache hit: {path}")
            return cached

        content = self._read_document(path)
        try:
            schema = json.loads(content)
        except json.JSONDecodeError as e:
            raise SchemaParseError(
                f"Invalid JSON in schema file {path}: {e.msg} (line {e.lineno}, column {e.colno})"
            ) from e

        if not isinstance(schema, (dict, bool)):
            raise SchemaParseError(
                f"Schema file {path} must contain a JSON object or boolean, got {type(schema).__name__}"
            )

        self.cache.put(path, schema)
        logger.debug(f"Loaded schema {identifier} from {path}")
        return schema

    def _read_document(self, path: Path) -> str:
        if not path.is_file():
            raise SchemaNotFoundError(
                f"Schema file not found: {path}. "
                f"Expected location: {self.schema_dir}"
            )
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise SchemaNotFoundError(f"Unable to read schema file {path}: {e}") from e
