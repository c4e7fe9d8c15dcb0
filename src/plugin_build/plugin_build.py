"""
Plugin Build Step.

Copies everything the design-tokens skill needs at run time out of the
vendored W3C Design Tokens repository and the skill sources into the
distributable plugin layout:

    dist/
      .claude-plugin/                 plugin manifest
      skills/design-tokens/
        SKILL.md                      skill descriptor
        spec/<section>/*.md           W3C specification chapters
        schemas/                      JSON Schemas used by the validator
        LICENSE, THIRD_PARTY_NOTICES.md

A second step assembles the combined plugin, which bundles the skill package
and the agent package side by side.

All paths come from the "build" section of the configuration and are
resolved against a base directory (the current directory by default).

Functions:
    build_plugin(build_config, base_dir): Run the full skill build
    assemble_plugin(build_config, base_dir): Assemble the combined plugin
    main(argv) -> int: Entry point for the design-tokens-build command
"""
import argparse
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config import load_config
from design_tokens.design_tokens import configure_logging
from validator.exceptions import DesignTokensError

logger = logging.getLogger(__name__)


class BuildError(DesignTokensError):
    """Raised when the build cannot run, e.g. the vendored repository is missing."""
    pass


class BuildPaths:
    """Source and destination paths of a build, resolved from configuration."""

    def __init__(self, build_config: Dict[str, Any], base_dir: Union[str, Path] = "."):
        base = Path(base_dir)
        self.vendor_root = base / build_config["vendor_root"]
        self.technical_reports = self.vendor_root / build_config["technical_reports"]
        self.schema_source = self.vendor_root / build_config["schema_source"]
        self.skill_source = base / build_config["skill_source"]
        self.plugin_source = base / build_config["plugin_source"]
        self.license = base / build_config["license"]
        self.third_party_notices = base / build_config["third_party_notices"]

        self.dist = base / build_config["dist"]
        self.skill_dest = self.dist / "skills" / build_config["skill_name"]
        self.spec_dest = self.skill_dest / "spec"
        self.schema_dest = self.skill_dest / "schemas"
        self.plugin_dest = self.dist / ".claude-plugin"


def clean_dist(paths: BuildPaths) -> None:
    logger.info(f"Cleaning {paths.dist}...")
    if paths.dist.exists():
        shutil.rmtree(paths.dist)
    paths.dist.mkdir(parents=True)


def copy_spec_files(paths: BuildPaths, spec_files: Dict[str, List[str]]) -> List[Path]:
    """Copy the listed specification chapters, skipping (with a warning) any that are missing.

    Returns:
        Destination paths of the files that were copied
    """
    logger.info("Copying spec files...")
    copied = []

    for section, files in spec_files.items():
        src_dir = paths.technical_reports / section
        dest_dir = paths.spec_dest / section
        dest_dir.mkdir(parents=True, exist_ok=True)

        for filename in files:
            src = src_dir / filename
            if not src.is_file():
                logger.warning(f"  {section}/{filename} not found, skipping")
                continue
            dest = dest_dir / filename
            shutil.copy2(src, dest)
            copied.append(dest)
            logger.info(f"  copied {section}/{filename}")

    return copied


def copy_schemas(paths: BuildPaths) -> None:
    logger.info("Copying schemas...")
    if not paths.schema_source.is_dir():
        raise BuildError(f"Schema directory not found at {paths.schema_source}")
    shutil.copytree(paths.schema_source, paths.schema_dest, dirs_exist_ok=True)
    logger.info(f"  copied schemas to {paths.schema_dest}")


def copy_skill_assets(paths: BuildPaths) -> None:
    logger.info("Copying skill assets...")
    if not paths.plugin_source.is_dir():
        raise BuildError(f"Plugin manifest directory not found at {paths.plugin_source}")
    shutil.copytree(paths.plugin_source, paths.plugin_dest, dirs_exist_ok=True)
    logger.info("  copied .claude-plugin/")

    skill_md = paths.skill_source / "SKILL.md"
    if skill_md.is_file():
        paths.skill_dest.mkdir(parents=True, exist_ok=True)
        shutil.copy2(skill_md, paths.skill_dest / "SKILL.md")
        logger.info("  copied SKILL.md")


def copy_license_notices(paths: BuildPaths) -> None:
    logger.info("Copying license notices...")
    paths.skill_dest.mkdir(parents=True, exist_ok=True)
    for notice in (paths.license, paths.third_party_notices):
        if notice.is_file():
            shutil.copy2(notice, paths.skill_dest / notice.name)
            logger.info(f"  copied {notice.name}")
        else:
            logger.warning(f"  {notice.name} not found")


def build_plugin(build_config: Dict[str, Any], base_dir: Union[str, Path] = ".") -> BuildPaths:
    """Build the design-tokens skill into the dist directory.

    Args:
        build_config: The "build" section of the configuration
        base_dir: Directory configured paths are relative to

    Returns:
        The resolved build paths

    Raises:
        BuildError: If the vendored W3C repository is missing
    """
    paths = BuildPaths(build_config, base_dir)

    if not paths.vendor_root.is_dir():
        raise BuildError(
            f"W3C DTCG submodule not found at {paths.vendor_root}. "
            f"Run: git submodule update --init"
        )

    logger.info("Building design-tokens plugin...")
    clean_dist(paths)
    copy_spec_files(paths, build_config["spec_files"])
    copy_schemas(paths)
    copy_skill_assets(paths)
    copy_license_notices(paths)
    logger.info(f"Build complete! Output in {paths.dist}")
    return paths


def _replace_tree(source: Path, dest: Path) -> None:
    if dest.exists():
        shutil.rmtree(dest)
    shutil.copytree(source, dest)


def assemble_plugin(build_config: Dict[str, Any], base_dir: Union[str, Path] = ".") -> Path:
    """Replace the combined plugin's skills/ and agents/ with fresh copies of their packages.

    Returns:
        The plugin root directory

    Raises:
        BuildError: If a source package directory is missing
    """
    base = Path(base_dir)
    plugin_config = build_config["plugin"]
    plugin_root = base / plugin_config["root"]

    for name, source_key in (("skills", "skills_source"), ("agents", "agents_source")):
        source = base / plugin_config[source_key]
        if not source.is_dir():
            raise BuildError(f"{name} source not found at {source}")
        _replace_tree(source, plugin_root / name)
        logger.info(f"Copied {name} from {source}")

    logger.info(f"Combined plugin assembled in {plugin_root}")
    return plugin_root


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="design-tokens-build",
        description="Build the design-tokens skill and plugin from the vendored W3C repository.",
    )
    parser.add_argument("--config", help="Path to design-tokens.yml")
    parser.add_argument("--base-dir", default=".", help="Directory configured paths are relative to")
    parser.add_argument("--combined", action="store_true", help="Also assemble the combined plugin")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_logging(logging.INFO, config["logging"].get("file"))

    build_config = config["build"]
    try:
        build_plugin(build_config, args.base_dir)
        if args.combined:
            assemble_plugin(build_config, args.base_dir)
    except BuildError as e:
        logger.error(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
