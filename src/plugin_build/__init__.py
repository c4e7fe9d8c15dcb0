"""
Plugin Build Module.

Copies the vendored W3C specification, the JSON Schemas and the skill assets
into the distributable plugin layout, and assembles the combined skill and
agent plugin.
"""

from plugin_build.plugin_build import BuildError, assemble_plugin, build_plugin

__all__ = ["BuildError", "assemble_plugin", "build_plugin"]
