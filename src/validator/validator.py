"""
Validation Orchestrator.

This module ties the loader, the reference resolver, the engine and the
diagnostic renderers together into a validation run for one document kind.

Validation Kinds:
    tokens:   *.tokens.json documents, checked against format.json
    resolver: *.resolver.json documents, checked against resolver.json
              ("resolvers" is accepted as an alias)

Run Sequence:
    1. Load the kind's root schema through a SchemaLoader with a fresh cache
    2. Create a SchemaEngine
    3. Register every transitively referenced schema with the engine
    4. Compile the root schema (fatal on failure)
    5. For each target file: read, parse, validate, print the result
       immediately

Error Handling:
    Schema-side errors (SchemaNotFoundError, SchemaParseError,
    SchemaCompileError) propagate and abort the run. Document-side errors are
    turned into an invalid ValidationResult for that file and the batch
    continues.

Example:
    >>> validator = Validator("tokens", renderer="flat")
    >>> validator.validate_files(["colors.tokens.json"])
    ✓ colors.tokens.json
    True
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from jsonschema.protocols import Validator as JsonSchemaValidator
from rich.console import Console
from rich.markup import escape

from schema import FORMAT_SCHEMA, RESOLVER_SCHEMA, SchemaCache, SchemaLoader

from .diagnostics import DEFAULT_RENDERER, DiagnosticRenderer, get_renderer
from .discovery import discover_files
from .engine import SchemaEngine
from .exceptions import DocumentParseError, UsageError
from .references import register_referenced_schemas

logger = logging.getLogger(__name__)

DOCUMENT_PARSE_ERROR = "DocumentParseError"
DOCUMENT_INVALID = "DocumentInvalid"


@dataclass(frozen=True)
class ValidationKind:
    """A document format: its root schema and where its files are found."""
    name: str
    schema: str
    pattern: str


KINDS: Dict[str, ValidationKind] = {
    "tokens": ValidationKind("tokens", FORMAT_SCHEMA, "**/*.tokens.json"),
    "resolver": ValidationKind("resolver", RESOLVER_SCHEMA, "**/*.resolver.json"),
}

KIND_ALIASES = {"resolvers": "resolver"}


def get_kind(name: str) -> ValidationKind:
    """Look up a validation kind by name or alias.

    Raises:
        UsageError: If name is not a known kind
    """
    kind = KINDS.get(KIND_ALIASES.get(name, name))
    if kind is None:
        valid = sorted(list(KINDS) + list(KIND_ALIASES))
        raise UsageError(f"Unknown validation kind {name!r}. Valid kinds: {', '.join(valid)}")
    return kind


@dataclass
class ValidationResult:
    """Outcome of validating one file."""
    file: str
    valid: bool
    errors: Optional[str] = None
    error_type: Optional[str] = None


def parse_document(path: Union[str, Path]) -> Tuple[Any, str]:
    """Read and parse a validation target.

    Returns:
        Tuple of (parsed document, raw text)

    Raises:
        DocumentParseError: If the file cannot be read or is not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentParseError(f"Unable to read file: {e}") from e

    try:
        return json.loads(content), content
    except json.JSONDecodeError as e:
        raise DocumentParseError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise DocumentParseError("Invalid JSON: document nests too deeply to parse") from e


class Validator:
    """Validate documents of one kind against its schema.

    The schema is compiled once, on first use, and reused for every file the
    instance validates. Each Validator owns its own schema cache.

    Args:
        kind: Validation kind name ("tokens", "resolver", "resolvers") or a
            ValidationKind
        schema_dir: Directory holding the schemas (default: bundled schemas)
        renderer: Renderer name or instance used for failing documents
        console: Console results are printed to
    """

    def __init__(
        self,
        kind: Union[str, ValidationKind],
        schema_dir: Optional[Union[str, Path]] = None,
        renderer: Union[str, DiagnosticRenderer] = DEFAULT_RENDERER,
        console: Optional[Console] = None,
    ):
        self.kind = get_kind(kind) if isinstance(kind, str) else kind
        self.loader = SchemaLoader(schema_dir, cache=SchemaCache())
        self.renderer = get_renderer(renderer) if isinstance(renderer, str) else renderer
        self.console = console or Console(soft_wrap=True, highlight=False, emoji=False)
        self.engine: Optional[SchemaEngine] = None
        self._validate_fn: Optional[JsonSchemaValidator] = None

    @property
    def schema_path(self) -> Path:
        return self.loader.resolve_path(self.kind.schema)

    def compile(self) -> JsonSchemaValidator:
        """Load, link and compile the root schema for this kind.

        Raises:
            SchemaNotFoundError: If the root or a referenced schema is missing
            SchemaParseError: If a schema file is not valid JSON
            SchemaCompileError: If the linked schema is rejected
        """
        if self._validate_fn is not None:
            return self._validate_fn

        schema_path = self.schema_path
        schema = self.loader.load(self.kind.schema)

        root_uri = schema_path.name
        if isinstance(schema, dict) and isinstance(schema.get("$id"), str):
            root_uri = schema["$id"]

        self.engine = SchemaEngine()
        register_referenced_schemas(self.engine, self.loader, schema, schema_path.parent, root_uri)
        self._validate_fn = self.engine.compile(schema, root_uri)

        logger.info(f"Compiled {self.kind.name} schema {schema_path} ({len(self.loader.cache)} schema file(s))")
        return self._validate_fn

    def validate_file(self, path: Union[str, Path]) -> ValidationResult:
        """Validate one file; document problems are reported, never raised."""
        validate_fn = self.compile()
        file = str(path)

        try:
            document, content = parse_document(path)
        except DocumentParseError as e:
            logger.debug(f"{file}: {e}")
            return ValidationResult(file=file, valid=False, errors=str(e), error_type=DOCUMENT_PARSE_ERROR)

        try:
            errors = list(validate_fn.iter_errors(document))
        except RecursionError:
            logger.debug(f"{file}: recursion limit reached during validation")
            return ValidationResult(
                file=file,
                valid=False,
                errors="Document nests too deeply to validate",
                error_type=DOCUMENT_PARSE_ERROR,
            )
        if not errors:
            return ValidationResult(file=file, valid=True)

        logger.debug(f"{file}: {len(errors)} schema error(s)")
        return ValidationResult(
            file=file,
            valid=False,
            errors=self.renderer.render(errors, content),
            error_type=DOCUMENT_INVALID,
        )

    def validate_files(self, files: Iterable[Union[str, Path]]) -> bool:
        """Validate files in order, printing each result as soon as it is known.

        Returns:
            True if every file is valid
        """
        self.compile()

        all_valid = True
        for file in files:
            result = self.validate_file(file)
            self.print_result(result)
            if not result.valid:
                all_valid = False
        return all_valid

    def validate_pattern(self, pattern: Optional[str] = None, root: Optional[str] = None) -> bool:
        """Discover files with a glob pattern (default: the kind's pattern) and validate them.

        Returns:
            True if every file is valid, including when nothing matched
        """
        pattern = pattern or self.kind.pattern

        self.console.print(f"Loading schema from {escape(str(self.schema_path))}...")
        self.compile()

        files = discover_files(pattern, root)
        if not files:
            self.console.print(f"No files found matching {escape(pattern)}")
            return True

        self.console.print(f"Found {len(files)} file(s) to validate\n")
        return self.validate_files(files)

    def print_result(self, result: ValidationResult) -> None:
        if result.valid:
            self.console.print(f"[green]✓[/green] {escape(result.file)}")
        else:
            self.console.print(f"[red]✗[/red] {escape(result.file)}")
            self.console.print(result.errors, markup=False)
