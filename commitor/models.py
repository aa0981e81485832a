"""Data models for commitor.

Contains:
- ChangeKind: How a staged file changed
- CommitType: The closed set of commit categories
- FileChange: One staged file with its counts and diff text
- DiffStats: Aggregate counts over a change set
- ChangeSet: The ordered staged files of one commit
- CommitMessage: A structured commit message
"""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Conventional commit title: type(scope): description, with optional "!"
CONVENTIONAL_PATTERN = re.compile(r"^(\w+)(?:\(([^)]+)\))?!?:\s*.+")

# Type used when a title does not follow the conventional pattern
FALLBACK_COMMIT_TYPE = "chore"


class ChangeKind(str, Enum):
    """How a staged file changed."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


class CommitType(str, Enum):
    """Commit categories assigned by the classifier."""

    FEAT = "feat"
    FIX = "fix"
    REFACTOR = "refactor"
    DOCS = "docs"
    TEST = "test"
    CHORE = "chore"
    STYLE = "style"
    PERF = "perf"


class FileChange(BaseModel):
    """A single staged file.

    Attributes:
        path: Repository-relative path (the new path for renames).
        kind: How the file changed.
        additions: Number of added lines.
        deletions: Number of removed lines.
        diff: Unified diff text for this file (may be empty).
        old_path: Previous path, present only for renames.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)
    kind: ChangeKind
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    diff: str = ""
    old_path: Optional[str] = None

    @model_validator(mode="after")
    def old_path_only_for_renames(self):
        """Ensure old_path is present if and only if the file was renamed."""
        if self.kind == ChangeKind.RENAMED and not self.old_path:
            raise ValueError("renamed files require old_path")
        if self.kind != ChangeKind.RENAMED and self.old_path is not None:
            raise ValueError("old_path is only allowed for renamed files")
        return self


class DiffStats(BaseModel):
    """Aggregate counts over a change set."""

    model_config = ConfigDict(frozen=True)

    file_count: int
    total_additions: int
    total_deletions: int


class ChangeSet(BaseModel):
    """The ordered set of staged files for one commit.

    Stats are recomputed from ``files`` on every access so they can never
    drift from the entries.
    """

    model_config = ConfigDict(frozen=True)

    files: tuple[FileChange, ...]
    branch: str
    commit_type: CommitType

    @property
    def stats(self) -> DiffStats:
        """Aggregate stats over the current entries."""
        return DiffStats(
            file_count=len(self.files),
            total_additions=sum(f.additions for f in self.files),
            total_deletions=sum(f.deletions for f in self.files),
        )

    @property
    def paths(self) -> list[str]:
        """File paths in diff order."""
        return [f.path for f in self.files]


def parse_title(title: str) -> tuple[str, Optional[str]]:
    """Extract the type and scope from a commit title.

    Args:
        title: The commit title line.

    Returns:
        A (type, scope) tuple. Titles that do not follow the conventional
        pattern yield ("chore", None).
    """
    match = CONVENTIONAL_PATTERN.match(title)
    if not match:
        return FALLBACK_COMMIT_TYPE, None
    return match.group(1), match.group(2)


class CommitMessage(BaseModel):
    """A structured commit message.

    ``raw_message`` is always derived from ``title`` and ``body``; to change
    the text, build a new message with ``with_text`` or ``from_raw``.

    Attributes:
        title: Single-line title.
        body: Zero or more body lines joined by newlines.
        type: Commit type parsed from the title.
        scope: Optional scope parsed from the title.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    body: str = ""
    type: str = FALLBACK_COMMIT_TYPE
    scope: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_must_be_single_line(cls, v: str) -> str:
        """Ensure title is a single non-empty line."""
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be empty")
        if "\n" in v:
            raise ValueError("Title must be a single line")
        return v

    @field_validator("body")
    @classmethod
    def strip_body(cls, v: str) -> str:
        """Strip surrounding whitespace from the body."""
        return v.strip()

    @property
    def raw_message(self) -> str:
        """The full commit message text."""
        if not self.body:
            return self.title
        return f"{self.title}\n\n{self.body}"

    @property
    def body_lines(self) -> list[str]:
        """Body split into lines (empty list for an empty body)."""
        return self.body.split("\n") if self.body else []

    @classmethod
    def build(cls, title: str, body: str = "") -> "CommitMessage":
        """Create a message, deriving type and scope from the title."""
        commit_type, scope = parse_title(title.strip())
        return cls(title=title, body=body, type=commit_type, scope=scope)

    def with_text(self, title: Optional[str] = None, body: Optional[str] = None) -> "CommitMessage":
        """Return a new message with a replaced title and/or body."""
        return CommitMessage.build(
            title=self.title if title is None else title,
            body=self.body if body is None else body,
        )

    @classmethod
    def from_raw(cls, text: str) -> "CommitMessage":
        """Create a message from free text, e.g. after a manual edit.

        The first non-blank line becomes the title; the remaining text,
        without leading blank lines, becomes the body.

        Raises:
            ValueError: If the text contains no non-blank line.
        """
        lines = text.strip().splitlines()
        if not lines:
            raise ValueError("Commit message cannot be empty")
        title = lines[0]
        body = "\n".join(line.rstrip() for line in lines[1:])
        return cls.build(title=title, body=body)
