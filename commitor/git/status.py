"""Git status parsing.

Contains:
- StagedStatus: Staged paths grouped by how they changed
- unquote_path: Decode C-style quoted paths from git output
- parse_porcelain_status: Parse `git status --porcelain=v1` output
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RenamedPath:
    """A staged rename."""

    old: str
    new: str


@dataclass(frozen=True)
class StagedStatus:
    """Staged paths grouped by change kind.

    Attributes:
        branch: Branch header from the status output, if present.
        staged: Paths modified in the index (content or type changes).
        created: Paths added to the index.
        deleted: Paths removed from the index.
        renamed: Staged renames.
    """

    branch: str = ""
    staged: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    renamed: list[RenamedPath] = field(default_factory=list)

    @property
    def all_paths(self) -> list[str]:
        """Every staged path (rename targets for renames), without duplicates."""
        seen = set()
        paths = []
        for path in self.staged + self.created + self.deleted + [r.new for r in self.renamed]:
            if path not in seen:
                seen.add(path)
                paths.append(path)
        return paths

    @property
    def is_empty(self) -> bool:
        """True when nothing is staged."""
        return not (self.staged or self.created or self.deleted or self.renamed)

    def rename_source(self, path: str) -> str | None:
        """Return the old path if ``path`` is a rename target."""
        for rename in self.renamed:
            if rename.new == path:
                return rename.old
        return None


# Single-character escapes git uses inside quoted paths
_C_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "v": "\v",
    "f": "\f",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}
_OCTAL_DIGITS = "01234567"


def unquote_path(path: str) -> str:
    """Decode a path git wrapped in C-style quotes.

    Git quotes paths holding control characters, quotes or backslashes, and
    with ``core.quotePath`` enabled it also writes non-ASCII bytes as octal
    escapes (``"g\\303\\274ncelleme.md"``).

    Args:
        path: A path as printed by git.

    Returns:
        The decoded path; unquoted paths are returned unchanged.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    body = path[1:-1]
    decoded = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char != "\\" or i + 1 == len(body):
            decoded.extend(char.encode("utf-8"))
            i += 1
            continue

        escape = body[i + 1 : i + 4]
        if len(escape) == 3 and all(c in _OCTAL_DIGITS for c in escape):
            decoded.append(int(escape, 8) & 0xFF)
            i += 4
        elif body[i + 1] in _C_ESCAPES:
            decoded.extend(_C_ESCAPES[body[i + 1]].encode("utf-8"))
            i += 2
        else:
            decoded.extend(char.encode("utf-8"))
            i += 1

    return decoded.decode("utf-8", errors="replace")


def parse_porcelain_status(output: str) -> StagedStatus:
    """Parse `git status --porcelain=v1 -b` output into staged groups.

    The porcelain format uses two columns:
    - First column: staged status (index)
    - Second column: worktree status

    Only the first column is considered; unstaged and untracked entries are
    skipped.

    Args:
        output: Raw status output.

    Returns:
        The staged paths grouped by change kind.
    """
    branch = ""
    staged: list[str] = []
    created: list[str] = []
    deleted: list[str] = []
    renamed: list[RenamedPath] = []

    for line in output.split("\n"):
        if not line:
            continue
        if line.startswith("##"):
            # "## main...origin/main [ahead 1]"
            branch = line[3:].split("...")[0].strip()
            continue
        if len(line) < 4:
            continue

        index_status = line[0]
        path = line[3:]

        if index_status in (" ", "?", "!"):
            continue

        if index_status in ("R", "C") and " -> " in path:
            old_path, new_path = path.split(" -> ", 1)
            old_path, new_path = unquote_path(old_path), unquote_path(new_path)
            if index_status == "R":
                renamed.append(RenamedPath(old=old_path, new=new_path))
            else:
                created.append(new_path)
            continue

        path = unquote_path(path)
        if index_status == "A":
            created.append(path)
        elif index_status == "D":
            deleted.append(path)
        else:
            # M (modified), T (type change), U (unmerged)
            staged.append(path)

    return StagedStatus(
        branch=branch,
        staged=staged,
        created=created,
        deleted=deleted,
        renamed=renamed,
    )
