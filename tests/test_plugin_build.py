"""
Unit Tests for the Plugin Build Step.

These tests lay out a miniature repository (vendored W3C tree, skill
sources, packages) under tmp_path and run the build against it.
"""
import logging
from unittest.mock import patch

import pytest

from config import get_default_config
from plugin_build import BuildError, assemble_plugin, build_plugin
from plugin_build.plugin_build import BuildPaths, main


@pytest.fixture
def build_config():
    return get_default_config()["build"]


@pytest.fixture
def repo(tmp_path):
    """Create a repository with a vendored W3C tree missing some spec chapters."""
    reports = tmp_path / "vendor" / "w3c-dtcg" / "technical-reports"
    (reports / "format").mkdir(parents=True)
    (reports / "format" / "groups.md").write_text("# Groups\n")
    (reports / "format" / "types.md").write_text("# Types\n")
    (reports / "color").mkdir()
    (reports / "color" / "overview.md").write_text("# Color\n")

    schemas = tmp_path / "vendor" / "w3c-dtcg" / "www" / "public" / "schemas" / "2025.10"
    (schemas / "format").mkdir(parents=True)
    (schemas / "format.json").write_text("{}")
    (schemas / "format" / "group.json").write_text("{}")

    plugin_source = tmp_path / "src" / ".claude-plugin"
    plugin_source.mkdir(parents=True)
    (plugin_source / "plugin.json").write_text('{"name": "design-tokens"}')

    skill_source = tmp_path / "src" / "skills" / "design-tokens"
    skill_source.mkdir(parents=True)
    (skill_source / "SKILL.md").write_text("# Design tokens\n")

    (tmp_path / "LICENSE").write_text("MIT\n")
    return tmp_path


def test_build_paths(build_config, tmp_path):
    paths = BuildPaths(build_config, tmp_path)

    assert paths.technical_reports == tmp_path / "vendor" / "w3c-dtcg" / "technical-reports"
    assert paths.skill_dest == tmp_path / "dist" / "skills" / "design-tokens"
    assert paths.plugin_dest == tmp_path / "dist" / ".claude-plugin"


def test_build_plugin_copies_everything(build_config, repo):
    """Test the full build output layout."""
    paths = build_plugin(build_config, repo)
    skill = repo / "dist" / "skills" / "design-tokens"

    assert paths.dist == repo / "dist"
    assert (skill / "spec" / "format" / "groups.md").read_text() == "# Groups\n"
    assert (skill / "spec" / "format" / "types.md").is_file()
    assert (skill / "spec" / "color" / "overview.md").is_file()
    assert (skill / "schemas" / "format.json").is_file()
    assert (skill / "schemas" / "format" / "group.json").is_file()
    assert (skill / "SKILL.md").is_file()
    assert (skill / "LICENSE").read_text() == "MIT\n"
    assert (repo / "dist" / ".claude-plugin" / "plugin.json").is_file()


def test_build_plugin_warns_on_missing_files(build_config, repo, caplog):
    """Test that missing spec chapters and notices are skipped with a warning."""
    with caplog.at_level(logging.WARNING):
        build_plugin(build_config, repo)

    assert "format/aliases.md not found, skipping" in caplog.text
    assert "resolver/syntax.md not found, skipping" in caplog.text
    assert "THIRD_PARTY_NOTICES.md not found" in caplog.text
    assert not (repo / "dist" / "skills" / "design-tokens" / "spec" / "format" / "aliases.md").exists()


def test_build_plugin_cleans_dist(build_config, repo):
    stale = repo / "dist" / "stale.txt"
    stale.parent.mkdir()
    stale.write_text("old")

    build_plugin(build_config, repo)

    assert not stale.exists()


def test_build_plugin_missing_vendor(build_config, tmp_path):
    with pytest.raises(BuildError) as exc_info:
        build_plugin(build_config, tmp_path)

    assert "git submodule update --init" in str(exc_info.value)
    assert not (tmp_path / "dist").exists()


def test_build_plugin_missing_schemas(build_config, repo):
    build_config["schema_source"] = "www/public/schemas/1999.01"

    with pytest.raises(BuildError) as exc_info:
        build_plugin(build_config, repo)

    assert "Schema directory not found" in str(exc_info.value)


def test_assemble_plugin(build_config, tmp_path):
    """Test that skills/ and agents/ are replaced with fresh copies of their packages."""
    skills = tmp_path / "packages" / "skill" / "skills" / "design-tokens"
    skills.mkdir(parents=True)
    (skills / "SKILL.md").write_text("# Skill\n")
    agents = tmp_path / "packages" / "subagent" / "agents"
    agents.mkdir(parents=True)
    (agents / "tokens.md").write_text("# Agent\n")
    stale = tmp_path / "plugin" / "skills" / "old.md"
    stale.parent.mkdir(parents=True)
    stale.write_text("old")

    plugin_root = assemble_plugin(build_config, tmp_path)

    assert plugin_root == tmp_path / "plugin"
    assert (plugin_root / "skills" / "design-tokens" / "SKILL.md").is_file()
    assert (plugin_root / "agents" / "tokens.md").is_file()
    assert not stale.exists()


def test_assemble_plugin_missing_source(build_config, tmp_path):
    with pytest.raises(BuildError) as exc_info:
        assemble_plugin(build_config, tmp_path)

    assert "skills source not found" in str(exc_info.value)


def test_main_exit_codes(repo, tmp_path):
    missing = tmp_path / "no-config.yml"

    assert main(["--config", str(missing), "--base-dir", str(repo)]) == 0
    assert main(["--config", str(missing), "--base-dir", str(repo / "elsewhere")]) == 1
    assert main(["--config", str(missing), "--base-dir", str(repo), "--combined"]) == 1


def test_main_configures_logging_like_validate(repo, tmp_path):
    """Test that the build sets up logging through the shared configure_logging."""
    config_file = tmp_path / "design-tokens.yml"
    config_file.write_text(f"logging:\n  file: {tmp_path / 'build.log'}\n")

    with patch("plugin_build.plugin_build.configure_logging") as configure:
        assert main(["--config", str(config_file), "--base-dir", str(repo)]) == 0

    configure.assert_called_once_with(logging.INFO, str(tmp_path / "build.log"))
