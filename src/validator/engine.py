"""Validation engine built on jsonschema and referencing.

SchemaEngine owns the referencing.Registry that referenced schemas are
registered into, and turns a root schema into a ready-to-use jsonschema
validator once every referenced schema is in place.

Engine behaviour:
    - All errors are collected per document (callers use iter_errors, never
      the fail-fast validate()).
    - Errors keep their full context: instance, failing subschema, instance
      path and schema path.
    - Unknown keywords are ignored, so schema authors may use annotations the
      metaschema does not define.
    - Format assertions are enabled through the draft's FORMAT_CHECKER.
"""
import logging
from typing import Any, List, Optional
from urllib.parse import urljoin

from jsonschema.exceptions import SchemaError
from jsonschema.protocols import Validator as JsonSchemaValidator
from jsonschema.validators import Draft202012Validator, validator_for
from referencing import Registry, Resource
from referencing.exceptions import NoSuchResource, Unresolvable
from referencing.jsonschema import DRAFT202012

from .exceptions import SchemaCompileError

logger = logging.getLogger(__name__)


class SchemaEngine:
    """Registry of schemas plus the compile step that links them."""

    def __init__(self):
        self._registry: Registry = Registry()
        self.registered: List[str] = []

    def get_schema(self, uri: str) -> Optional[Any]:
        """Return the schema registered under uri, or None."""
        try:
            return self._registry.contents(uri)
        except NoSuchResource:
            return None

    def add_schema(self, schema: Any, uri: str) -> None:
        resource = Resource.from_contents(schema, default_specification=DRAFT202012)
        self._registry = self._registry.with_resource(uri, resource)
        self.registered.append(uri)
        logger.debug(f"Registered schema {uri}")

    def compile(self, schema: Any, uri: str) -> JsonSchemaValidator:
        """Link the root schema and return a validator for it.

        The root is registered under uri (so referenced schemas can point back
        at it), checked against its metaschema, and every $ref in every
        registered schema is resolved up front. jsonschema resolves references
        lazily, so without this step a broken link would only surface while
        validating a document that happens to reach it.

        Raises:
            SchemaCompileError: If the root is not a valid schema or any
                reference cannot be resolved
        """
        if self.get_schema(uri) is None:
            self.add_schema(schema, uri)

        cls = validator_for(schema, default=Draft202012Validator)
        try:
            cls.check_schema(schema)
        except SchemaError as e:
            raise SchemaCompileError(f"Schema {uri} is invalid: {e.message}") from e

        self._registry = self._registry.crawl()
        for resource_uri in list(self._registry):
            self._check_references(self._registry.contents(resource_uri), resource_uri)

        logger.debug(f"Compiled {uri} with {cls.__name__} ({len(self.registered)} schemas registered)")
        return cls(schema, registry=self._registry, format_checker=cls.FORMAT_CHECKER)

    def _check_references(self, contents: Any, base_uri: str) -> None:
        if isinstance(contents, list):
            for item in contents:
                self._check_references(item, base_uri)
            return
        if not isinstance(contents, dict):
            return

        nested_id = contents.get("$id")
        if isinstance(nested_id, str):
            base_uri = urljoin(base_uri, nested_id)

        ref = contents.get("$ref")
        if isinstance(ref, str):
            try:
                self._registry.resolver(base_uri=base_uri).lookup(ref)
            except Unresolvable as e:
                raise SchemaCompileError(
                    f"Unresolvable reference {ref!r} in schema {base_uri or '<root>'}: {e}"
                ) from e

        for key, value in contents.items():
            if key != "$ref":
                self._check_references(value, base_uri)
