"""
Unit Tests for Configuration Module.

This test suite validates the configuration loading functionality.
"""
import logging
import os
import tempfile
from pathlib import Path

from config import get_default_config, get_renderer_name, load_config, merge_config

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _write_config(content):
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
        f.write(content)
        return f.name


def test_get_default_config():
    """Test default configuration values."""
    config = get_default_config()

    assert config["validator"]["schema_dir"] is None
    assert config["validator"]["renderer"] == "pretty"
    assert config["logging"]["level"] == "WARNING"
    assert config["logging"]["file"] is None
    assert config["build"]["vendor_root"] == "vendor/w3c-dtcg"
    assert "groups.md" in config["build"]["spec_files"]["format"]
    assert config["build"]["plugin"]["root"] == "plugin"


def test_get_default_config_returns_fresh_copy():
    config = get_default_config()
    config["validator"]["renderer"] = "flat"

    assert get_default_config()["validator"]["renderer"] == "pretty"


def test_load_config_from_project_root():
    """Test loading design-tokens.yml shipped in the project root."""
    config = load_config(str(PROJECT_ROOT / "design-tokens.yml"))

    assert config["validator"]["renderer"] == "pretty"
    assert config["validator"]["schema_dir"] is None
    # Keys the file leaves out keep their defaults
    assert config["build"]["schema_source"] == "www/public/schemas/2025.10"


def test_load_config_with_explicit_path():
    """Test loading config from explicit path."""
    temp_path = _write_config("""
validator:
  renderer: flat
  schema_dir: /custom/schemas
logging:
  level: DEBUG
""")

    try:
        config = load_config(temp_path)
        assert config["validator"]["renderer"] == "flat"
        assert config["validator"]["schema_dir"] == "/custom/schemas"
        assert config["logging"]["level"] == "DEBUG"
        assert config["logging"]["file"] is None
        assert config["build"] == get_default_config()["build"]
    finally:
        os.unlink(temp_path)


def test_load_config_file_not_found():
    """Test loading config when file doesn't exist."""
    config = load_config("/nonexistent/path/design-tokens.yml")

    # Should return default config
    assert config == get_default_config()


def test_load_config_invalid_yaml():
    """Test that unparseable YAML falls back to defaults."""
    temp_path = _write_config("validator: [unclosed\n")

    try:
        assert load_config(temp_path) == get_default_config()
    finally:
        os.unlink(temp_path)


def test_load_config_non_mapping_root():
    temp_path = _write_config("- just\n- a list\n")

    try:
        assert load_config(temp_path) == get_default_config()
    finally:
        os.unlink(temp_path)


def test_load_config_empty_file():
    temp_path = _write_config("")

    try:
        assert load_config(temp_path) == get_default_config()
    finally:
        os.unlink(temp_path)


def test_load_config_empty_section_keeps_defaults():
    temp_path = _write_config("validator:\nlogging:\n  level: INFO\n")

    try:
        config = load_config(temp_path)
        assert config["validator"] == get_default_config()["validator"]
        assert config["logging"]["level"] == "INFO"
    finally:
        os.unlink(temp_path)


def test_load_config_invalid_renderer_falls_back(caplog):
    """Test that an unknown renderer is replaced by pretty with a warning."""
    temp_path = _write_config("validator:\n  renderer: fancy\n")

    try:
        with caplog.at_level(logging.WARNING):
            config = load_config(temp_path)
        assert config["validator"]["renderer"] == "pretty"
        assert "Unknown renderer 'fancy'" in caplog.text
    finally:
        os.unlink(temp_path)


def test_load_config_searches_parent_directories(tmp_path, monkeypatch):
    (tmp_path / "design-tokens.yml").write_text("validator:\n  renderer: flat\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert load_config()["validator"]["renderer"] == "flat"


def test_merge_config_replaces_lists():
    defaults = {"build": {"spec_files": {"format": ["a.md", "b.md"]}, "dist": "dist"}}
    overrides = {"build": {"spec_files": {"format": ["c.md"]}}}

    merged = merge_config(defaults, overrides)

    assert merged == {"build": {"spec_files": {"format": ["c.md"]}, "dist": "dist"}}
    assert defaults["build"]["spec_files"]["format"] == ["a.md", "b.md"]


def test_get_renderer_name():
    assert get_renderer_name({"validator": {"renderer": "flat"}}) == "flat"
    assert get_renderer_name({}) == "pretty"
    assert get_renderer_name({"validator": {"renderer": "html"}}) == "pretty"


def test_load_config_section_of_wrong_type_keeps_defaults(caplog):
    """Test that a section given as a scalar is ignored with a warning."""
    temp_path = _write_config("validator: flat\nlogging:\n  level: INFO\n")

    try:
        with caplog.at_level(logging.WARNING):
            config = load_config(temp_path)
        assert config["validator"] == get_default_config()["validator"]
        assert config["logging"]["level"] == "INFO"
        assert "Configuration section 'validator' must be a mapping" in caplog.text
    finally:
        os.unlink(temp_path)


def test_merge_config_nested_section_of_wrong_type():
    defaults = {"build": {"plugin": {"root": "plugin"}, "dist": "dist"}}

    merged = merge_config(defaults, {"build": {"plugin": ["x"], "dist": "out"}})

    assert merged == {"build": {"plugin": {"root": "plugin"}, "dist": "out"}}
