"""Exceptions raised by the design tokens validator.

Schema-side errors (SchemaNotFoundError, SchemaParseError, SchemaCompileError)
are fatal: without a fully linked schema there is nothing meaningful to report,
so they abort the whole run.

Document-side errors (DocumentParseError) are isolated per file. The
orchestrator catches them and records an invalid result for that file only,
then moves on to the next target.

UsageError is raised by the command line layer before any file is touched.
"""


class DesignTokensError(Exception):
    """Base exception for all design-tokens errors."""
    pass


class SchemaNotFoundError(DesignTokensError):
    """Raised when a schema file is missing or cannot be read."""
    pass


class SchemaParseError(DesignTokensError):
    """Raised when a schema file does not contain a valid JSON schema document."""
    pass


class SchemaCompileError(DesignTokensError):
    """Raised when the engine rejects the linked schema.

    Typical causes are a reference that cannot be resolved from the file
    containing it, or a root schema that fails its metaschema check.
    """
    pass


class DocumentParseError(DesignTokensError):
    """Raised when a validation target is not valid JSON."""
    pass


class UsageError(DesignTokensError):
    """Raised for missing or unrecognized command line arguments."""
    pass
