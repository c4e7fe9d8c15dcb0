"""Rendering of schema validation errors.

Two renderers sit behind the DiagnosticRenderer interface, so the validation
run does not care how errors end up on screen:

    flat:   one line per error, "<instance path> <keyword>: <message>"
    pretty: per error, the keyword and message, where the value sits in the
            file, and a numbered excerpt of the document with a caret under
            the offending value

Instance paths are JSON Pointers ("/c/$value"); the document root is "".
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Tuple

import yaml
from jsonschema.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_RENDERER = "pretty"


def _json_pointer_escape(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def json_pointer(path: Iterable) -> str:
    """Build a JSON Pointer from a jsonschema error path."""
    return "".join(f"/{_json_pointer_escape(str(part))}" for part in path)


def build_source_map(source: str) -> Dict[str, Tuple[int, int]]:
    """Map JSON Pointers of a JSON document to 1-based (line, column).

    JSON is (for our purposes) a subset of YAML, so PyYAML's node tree gives
    us positions without writing a second JSON parser. Documents PyYAML
    refuses, e.g. ones indented with tabs, and documents nested deeper than
    the recursion limit get an empty map.
    """
    source_map: Dict[str, Tuple[int, int]] = {}

    try:
        root = yaml.compose(source, Loader=yaml.SafeLoader)
    except (yaml.YAMLError, RecursionError) as e:
        logger.debug(f"Could not build source map: {e}")
        return {}

    if root is None:
        return source_map

    def _walk(node, path: str) -> None:
        mark = node.start_mark
        # PyYAML uses 0-based line/column
        source_map[path] = (mark.line + 1, mark.column + 1)

        if isinstance(node, yaml.nodes.MappingNode):
            for key_node, value_node in node.value:
                _walk(value_node, f"{path}/{_json_pointer_escape(str(key_node.value))}")
        elif isinstance(node, yaml.nodes.SequenceNode):
            for idx, item_node in enumerate(node.value):
                _walk(item_node, f"{path}/{idx}")

    try:
        _walk(root, "")
    except RecursionError:
        logger.debug("Could not build source map: document nests too deeply")
        return {}
    return source_map


class DiagnosticRenderer(ABC):
    """Turns the errors of one document into printable text."""

    name = ""

    @abstractmethod
    def render(self, errors: List[ValidationError], source: str) -> str:
        """Render errors found in a document.

        Args:
            errors: Every error jsonschema reported for the document
            source: Raw text of the document, for renderers that quote it
        """
        pass


class FlatRenderer(DiagnosticRenderer):
    name = "flat"

    def render(self, errors: List[ValidationError], source: str) -> str:
        return "\n".join(
            f"{json_pointer(error.absolute_path)} {error.validator}: {error.message}"
            for error in errors
        )


class PrettyRenderer(DiagnosticRenderer):
    """Show each error next to the part of the document that caused it."""

    name = "pretty"

    def __init__(self, context_lines: int = 2):
        self.context_lines = context_lines

    def render(self, errors: List[ValidationError], source: str) -> str:
        source_map = build_source_map(source)
        lines = source.splitlines()
        blocks = []

        for error in errors:
            pointer = json_pointer(error.absolute_path)
            block = [f"{str(error.validator).upper()} {error.message}"]

            location = source_map.get(pointer)
            if location is None:
                block.append(f"  at {pointer or '/'}")
            else:
                line, column = location
                block.append(f"  at {pointer or '/'} (line {line}, column {column})")
                block.append("")
                block.extend(self._code_frame(lines, line, column))

            blocks.append("\n".join(block))

        return "\n\n".join(blocks)

    def _code_frame(self, lines: List[str], line: int, column: int) -> List[str]:
        first = max(1, line - self.context_lines)
        last = min(len(lines), line + self.context_lines)
        width = len(str(last))

        frame = []
        for number in range(first, last + 1):
            marker = ">" if number == line else " "
            frame.append(f"{marker} {number:>{width}} | {lines[number - 1]}")
            if number == line:
                frame.append(f"  {' ' * width} | {' ' * (column - 1)}^")
        return frame


RENDERERS = {
    FlatRenderer.name: FlatRenderer,
    PrettyRenderer.name: PrettyRenderer,
}


def get_renderer(name: str) -> DiagnosticRenderer:
    """Instantiate the renderer registered under name.

    Raises:
        ValueError: If no renderer has that name
    """
    try:
        return RENDERERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown renderer {name!r}. Valid renderers: {sorted(RENDERERS)}"
        ) from None
