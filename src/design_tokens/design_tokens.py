"""
design-tokens Validation Command.

This module provides the design-tokens-validate console command, which checks
W3C Design Tokens documents against the bundled JSON Schemas.

Usage:
    design-tokens-validate <tokens|resolver|resolvers> [path-or-glob ...]

    With explicit paths, exactly those files are validated (glob patterns
    among them are expanded under --root). Without paths, every file matching the kind's
    default pattern under --root is validated:
        tokens    **/*.tokens.json
        resolver  **/*.resolver.json

Output:
    Each file is printed as soon as it has been checked, with a green check
    mark or a red cross followed by diagnostics. Logging goes to stderr and,
    when configured, to a rotating log file; it never mixes with results.

Exit Codes:
    0: every file is valid
    1: any file is invalid, a schema could not be loaded or compiled, or the
       command line was wrong

Functions:
    main(argv) -> int:
        Entry point for the console script.

Example:
    $ design-tokens-validate tokens ./colors.tokens.json
    ✓ ./colors.tokens.json
"""
import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from config import VALID_RENDERERS, load_config
from validator.discovery import expand_targets
from validator.exceptions import DesignTokensError, UsageError
from validator.validator import KIND_ALIASES, KINDS, Validator, get_kind

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

USAGE_EXAMPLES = """Examples:
  design-tokens-validate tokens ./colors.tokens.json
  design-tokens-validate resolver ./theme.resolver.json
  design-tokens-validate tokens 'tokens/**/*.tokens.json'
  design-tokens-validate resolvers --root ./examples"""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    kinds = "|".join(sorted(list(KINDS) + list(KIND_ALIASES)))
    parser = _ArgumentParser(
        prog="design-tokens-validate",
        description="Validate W3C Design Tokens files against the bundled JSON Schemas.",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("kind", metavar=f"<{kinds}>", help="Document kind to validate")
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or glob patterns to validate (default: discover by kind)",
    )
    parser.add_argument("--renderer", choices=VALID_RENDERERS, help="Diagnostic output style")
    parser.add_argument("--schema-dir", help="Directory holding the JSON Schemas")
    parser.add_argument("--config", help="Path to design-tokens.yml")
    parser.add_argument(
        "--root",
        help="Directory discovery and glob arguments search under (default: current directory)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log progress at INFO level")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    return parser


def configure_logging(level: int, log_file: Optional[str] = None) -> None:
    """Configure root logging for a command line run.

    Log records go to stderr so stdout only carries validation results. When
    log_file is set, records are also written to a rotating file with a 10MB
    limit and 3 backups.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers to avoid duplicates on repeated calls
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=3
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def _log_level(args: argparse.Namespace, logging_config: dict) -> int:
    debug = args.debug or os.environ.get("DESIGN_TOKENS_DEBUG", "").lower() in ("true", "1", "yes")
    if debug:
        return logging.DEBUG
    if args.verbose:
        return logging.INFO
    return getattr(logging, str(logging_config.get("level", "WARNING")).upper(), logging.WARNING)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the design-tokens-validate console command.

    Args:
        argv: Command line arguments without the program name
            (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    parser = build_parser()

    # Arguments are checked before anything touches the filesystem
    try:
        args = parser.parse_args(argv)
        kind = get_kind(args.kind)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        print(f"\n{USAGE_EXAMPLES}", file=sys.stderr)
        return 1

    config = load_config(args.config)
    configure_logging(_log_level(args, config["logging"]), config["logging"].get("file"))

    renderer = args.renderer or config["validator"]["renderer"]
    schema_dir = args.schema_dir or config["validator"]["schema_dir"]
    logger.info(f"Validating {kind.name} documents with the {renderer} renderer")

    try:
        validator = Validator(kind, schema_dir=schema_dir, renderer=renderer)
        if args.paths:
            valid = validator.validate_files(expand_targets(args.paths, root=args.root))
        else:
            valid = validator.validate_pattern(root=args.root)
    except DesignTokensError as e:
        logger.debug("Validation aborted", exc_info=True)
        print(f"Validation failed: {e}", file=sys.stderr)
        return 1

    return 0 if valid else 1


# Allow running as a script for development/testing
if __name__ == "__main__":
    raise SystemExit(main())
