"""design-tokens Package.

This package provides the command line entry point of the design-tokens
toolchain, which validates W3C Design Tokens documents (*.tokens.json) and
resolver documents (*.resolver.json) against the JSON Schemas shipped with
the design-tokens skill.

Exported Functions:
    main: Entry point for the design-tokens-validate console command
"""
from .design_tokens import main

__all__ = ["main"]
