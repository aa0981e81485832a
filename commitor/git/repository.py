"""Repository access bound to a working directory.

Contains:
- Repository: The protocol the change-set builder and language detector consume
- GitRepository: Implementation that shells out to git
- CommitResult: Outcome of a commit
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Union

from commitor.git.diff import NumstatRow, parse_numstat
from commitor.git.exceptions import GitError, NotARepositoryError, NoStagedChangesError
from commitor.git.runner import _run_git_command
from commitor.git.status import StagedStatus, parse_porcelain_status

logger = logging.getLogger(__name__)

# Separates messages in `git log` output; cannot occur in commit text
_RECORD_SEPARATOR = "\x1e"

DETACHED_HEAD = "HEAD (detached)"

# Print non-ASCII paths as-is instead of as octal escapes
_VERBATIM_PATHS = ["-c", "core.quotePath=false"]


def _root_pathspec(path: str) -> str:
    """Pathspec for a repo-root-relative path, independent of cwd and globs."""
    return f":(top,literal){path}"


@dataclass(frozen=True)
class CommitResult:
    """Result of creating a commit."""

    hash: str
    branch: str
    message: str


class Repository(Protocol):
    """Repository capability consumed by the core."""

    def is_repository(self) -> bool: ...

    def current_branch(self) -> str: ...

    def status(self) -> StagedStatus: ...

    def diff_numstat(self) -> list[NumstatRow]: ...

    def diff_text(self, path: str, old_path: Optional[str] = None) -> str: ...

    def recent_log(self, n: int) -> list[str]: ...

    def repo_root(self) -> Path: ...

    def commit(self, message: str) -> CommitResult: ...


class GitRepository:
    """Git access for one working directory.

    All commands run with ``cwd`` set to the directory captured at
    construction; nothing reads the process working directory later.
    """

    def __init__(self, cwd: Union[str, Path, None] = None):
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()

    def _git(self, args: list[str], **kwargs) -> str:
        return _run_git_command(args, cwd=self.cwd, **kwargs)

    def is_repository(self) -> bool:
        """Check whether the working directory is inside a git work tree."""
        try:
            return self._git(["rev-parse", "--is-inside-work-tree"]) == "true"
        except GitError:
            return False

    def repo_root(self) -> Path:
        """Get the root directory of the repository.

        Raises:
            NotARepositoryError: If not in a git repository.
        """
        try:
            return Path(self._git(["rev-parse", "--show-toplevel"]))
        except GitError:
            raise NotARepositoryError(
                "Not a git repository. Please run this command from within a git repo."
            )

    def current_branch(self) -> str:
        """Get the current branch name, or 'HEAD (detached)'."""
        branch = self._git(["branch", "--show-current"])
        if not branch:
            return DETACHED_HEAD
        return branch

    def status(self) -> StagedStatus:
        """Get the staged paths grouped by change kind."""
        # No strip: a leading space is a meaningful status column
        output = self._git(_VERBATIM_PATHS + ["status", "--porcelain=v1", "-b"], strip=False)
        return parse_porcelain_status(output)

    def diff_numstat(self) -> list[NumstatRow]:
        """Get added/removed line counts for every staged path."""
        return parse_numstat(self._git(_VERBATIM_PATHS + ["diff", "--cached", "--numstat", "-M"]))

    def diff_text(self, path: str, old_path: Optional[str] = None) -> str:
        """Get the staged unified diff for one path.

        Args:
            path: The file path.
            old_path: The previous path for renames, so git shows a rename
                instead of an add.
        """
        paths = [old_path, path] if old_path else [path]
        # Status and numstat paths are relative to the repo root, not cwd
        paths = [_root_pathspec(p) for p in paths]
        return self._git(["diff", "--cached", "-M", "--"] + paths, strip=False)

    def recent_log(self, n: int = 25) -> list[str]:
        """Get the full messages of the last n commits.

        Returns:
            Commit messages, newest first. Empty for a repo without commits.
        """
        if n <= 0:
            return []
        try:
            output = self._git(["log", f"-n{n}", f"--pretty=format:%B{_RECORD_SEPARATOR}"])
        except GitError:
            # No commits yet in the repo
            return []
        return [entry.strip() for entry in output.split(_RECORD_SEPARATOR) if entry.strip()]

    def has_staged_changes(self) -> bool:
        """Check whether anything is staged."""
        return not self.status().is_empty

    def commit(self, message: str) -> CommitResult:
        """Commit the staged changes with the given message.

        Raises:
            NotARepositoryError: If not in a git repository.
            NoStagedChangesError: If nothing is staged.
            GitError: If git refuses the commit.
        """
        if not self.is_repository():
            raise NotARepositoryError("Not a git repository")
        if not self.has_staged_changes():
            raise NoStagedChangesError("No staged changes to commit")

        branch = self.current_branch()
        self._git(["commit", "-F", "-"], input_text=message)
        commit_hash = self._git(["rev-parse", "--short", "HEAD"])
        logger.debug("Committed %s on %s", commit_hash, branch)

        return CommitResult(hash=commit_hash, branch=branch, message=message)
