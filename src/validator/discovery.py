"""Expansion of validation targets into a sorted list of files."""
import glob
import logging
import os
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

GLOB_CHARS = ("*", "?", "[")


def is_glob_pattern(value: str) -> bool:
    return any(char in value for char in GLOB_CHARS)


def discover_files(pattern: str, root: Optional[str] = None) -> List[str]:
    """Find files matching pattern, sorted lexicographically.

    "**" matches any number of directories. Directories matching the pattern
    are left out. With a root, relative matches are joined onto it so the
    returned paths can be opened from the current directory.

    Args:
        pattern: Glob pattern such as "**/*.tokens.json"
        root: Directory to search from (default: current directory)

    Returns:
        Sorted list of matching file paths
    """
    base = root or os.curdir
    matches = glob.glob(pattern, root_dir=base, recursive=True)
    files = [
        os.path.join(root, match) if root else match
        for match in matches
        if os.path.isfile(os.path.join(base, match))
    ]
    logger.debug(f"Pattern {pattern!r} under {base} matched {len(files)} file(s)")
    return sorted(files)


def expand_targets(targets: Iterable[str], root: Optional[str] = None) -> List[str]:
    """Expand command line targets: glob patterns are discovered, other paths kept as given."""
    files: List[str] = []
    for target in targets:
        if is_glob_pattern(target):
            matches = discover_files(target, root)
            if not matches:
                logger.warning(f"No files found matching {target}")
            files.extend(matches)
        else:
            files.append(target)
    return files
