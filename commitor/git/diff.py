"""Git diff utilities.

Contains:
- NumstatRow: One row of `git diff --numstat` output
- parse_numstat: Parse numstat output into rows
- resolve_rename_path: Resolve the new path from a numstat rename entry
- _should_exclude_file: Check if a file should be excluded based on patterns
- truncate_diff: Truncate diff text past a character budget
"""

import fnmatch
import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from commitor.git.status import unquote_path


# "dir/{old => new}/file" or "{old => new}" style renames
_BRACE_RENAME = re.compile(r"\{([^{}]*) => ([^{}]*)\}")

TRUNCATION_MARKER = "\n...[truncated]\n"


@dataclass(frozen=True)
class NumstatRow:
    """Line counts for one staged path."""

    additions: int
    deletions: int
    path: str


def resolve_rename_path(path: str) -> str:
    """Resolve the destination path of a numstat rename entry.

    Args:
        path: The path column, e.g. ``a.py => b.py`` or ``src/{a => b}/x.py``.

    Returns:
        The new path; plain paths are returned unchanged.
    """
    if _BRACE_RENAME.search(path):
        resolved = _BRACE_RENAME.sub(lambda m: m.group(2), path)
        # Empty sides leave doubled or leading separators behind
        resolved = re.sub(r"/{2,}", "/", resolved)
        return resolved.lstrip("/")
    if " => " in path:
        return path.split(" => ", 1)[1]
    return path


def _parse_count(value: str) -> int:
    """Parse a numstat count; binary files report '-'."""
    try:
        return int(value)
    except ValueError:
        return 0


def parse_numstat(output: str) -> list[NumstatRow]:
    """Parse `git diff --cached --numstat` output.

    Args:
        output: Raw numstat output, one ``added<TAB>deleted<TAB>path`` per line.

    Returns:
        Rows in the order git reported them.
    """
    rows = []
    for line in output.split("\n"):
        if not line.strip():
            continue
        parts = line.split("\t")
        if len(parts) < 3:
            continue
        rows.append(
            NumstatRow(
                additions=_parse_count(parts[0]),
                deletions=_parse_count(parts[1]),
                path=resolve_rename_path(unquote_path("\t".join(parts[2:]))),
            )
        )
    return rows


def _should_exclude_file(filename: str, patterns: list[str]) -> bool:
    """Check if a file should be excluded based on patterns.

    Supports glob patterns like *.lock, build/*, etc.

    Args:
        filename: The file path to check.
        patterns: List of patterns to match against.

    Returns:
        True if the file should be excluded.
    """
    basename = PurePosixPath(filename).name
    for pattern in patterns:
        if filename == pattern:
            return True
        if fnmatch.fnmatch(filename, pattern):
            return True
        if fnmatch.fnmatch(basename, pattern):
            return True
    return False


def truncate_diff(diff: str, max_chars: int) -> str:
    """Truncate diff text that exceeds max_chars.

    Args:
        diff: The diff text.
        max_chars: Maximum characters to keep.

    Returns:
        The diff, cut with a truncation marker if it was too long.
    """
    if max_chars <= 0 or len(diff) <= max_chars:
        return diff
    return diff[:max_chars] + TRUNCATION_MARKER
