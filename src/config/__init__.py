"""
Configuration Module for design-tokens.

This module provides configuration loading for the validator and the plugin
build. Configuration is read from design-tokens.yml; every setting has a
default, so the file is optional.

Usage:
    >>> from config import load_config
    >>> config = load_config()
    >>> config["validator"]["renderer"]
    'pretty'
"""
import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


logger = logging.getLogger(__name__)

CONFIG_FILENAME = "design-tokens.yml"
DEFAULT_RENDERER = "pretty"
VALID_RENDERERS = ("flat", "pretty")


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from design-tokens.yml.

    Values from the file are merged over the defaults section by section, so
    a file only needs to mention what it changes.

    Args:
        config_path: Path to the configuration file. If None, looks in the
                    current directory and its parents.

    Returns:
        Dictionary containing configuration settings

    Example:
        >>> config = load_config("design-tokens.yml")
        >>> schema_dir = config["validator"]["schema_dir"]
    """
    if config_path is None:
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            candidate = parent / CONFIG_FILENAME
            if candidate.exists():
                config_path = str(candidate)
                break

    if config_path is None:
        logger.debug(f"{CONFIG_FILENAME} not found, using default configuration")
        return get_default_config()

    try:
        with open(config_path, "r") as f:
            loaded = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning(f"Configuration file not found: {config_path}")
        return get_default_config()
    except yaml.YAMLError as e:
        logger.error(f"Error parsing configuration file: {e}")
        return get_default_config()

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        logger.warning("Configuration root must be a mapping, using default configuration")
        return get_default_config()

    config = merge_config(get_default_config(), loaded)
    config["validator"]["renderer"] = get_renderer_name(config)
    logger.info(f"Loaded configuration from {config_path}")
    return config


def get_default_config() -> Dict[str, Any]:
    """Return default configuration when design-tokens.yml is not available.

    Build paths are relative to the directory the build runs in and follow the
    repository layout: the W3C repository vendored as a git submodule under
    vendor/w3c-dtcg, skill sources under src/skills/design-tokens.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "validator": {
            "schema_dir": None,
            "renderer": DEFAULT_RENDERER,
        },
        "logging": {
            "level": "WARNING",
            "file": None,
        },
        "build": {
            "vendor_root": "vendor/w3c-dtcg",
            "technical_reports": "technical-reports",
            "schema_source": "www/public/schemas/2025.10",
            "skill_source": "src/skills/design-tokens",
            "plugin_source": "src/.claude-plugin",
            "license": "LICENSE",
            "third_party_notices": "THIRD_PARTY_NOTICES.md",
            "dist": "dist",
            "skill_name": "design-tokens",
            "spec_files": {
                "format": [
                    "aliases.md",
                    "composite-types.md",
                    "design-token.md",
                    "file-format.md",
                    "groups.md",
                    "terminology.md",
                    "types.md",
                ],
                "color": [
                    "overview.md",
                    "color-type.md",
                    "color-terminology.md",
                    "interpolation.md",
                    "gamut-mapping.md",
                    "token-naming.md",
                ],
                "resolver": [
                    "introduction.md",
                    "terminology.md",
                    "inputs.md",
                    "syntax.md",
                    "resolution-logic.md",
                    "bundling.md",
                    "filetype.md",
                    "http-headers.md",
                    "conformance.md",
                ],
            },
            "plugin": {
                "root": "plugin",
                "skills_source": "packages/skill/skills",
                "agents_source": "packages/subagent/agents",
            },
        },
    }


def merge_config(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into a copy of defaults.

    Nested mappings are merged key by key; any other value (including lists)
    replaces the default outright. A section whose default is a mapping keeps
    its defaults when the override is not a mapping.
    """
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if value is None and isinstance(merged.get(key), dict):
            # An empty section ("validator:") keeps its defaults
            continue
        if isinstance(merged.get(key), dict) and not isinstance(value, dict):
            logger.warning(
                f"Configuration section {key!r} must be a mapping, got {type(value).__name__}; using defaults"
            )
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_renderer_name(config: Dict[str, Any]) -> str:
    """Return a validated renderer name from config, with pretty fallback."""
    name = config.get("validator", {}).get("renderer", DEFAULT_RENDERER)
    if name not in VALID_RENDERERS:
        logger.warning(f"Unknown renderer {name!r}; falling back to {DEFAULT_RENDERER}")
        return DEFAULT_RENDERER
    return name
