"""Change-set builder.

Contains:
- ChangeSetBuilder: Turn the staged state of a repository into a ChangeSet
- build_change_set: Convenience wrapper around ChangeSetBuilder
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from commitor.classifier import DEFAULT_POLICY, ClassifierPolicy, classify
from commitor.git.diff import NumstatRow
from commitor.git.exceptions import GitError, NotARepositoryError, NoStagedChangesError
from commitor.git.repository import Repository
from commitor.git.status import StagedStatus
from commitor.models import ChangeKind, ChangeSet, FileChange

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


class ChangeSetBuilder:
    """Builds a ChangeSet from a repository's staged changes."""

    def __init__(
        self,
        repository: Repository,
        policy: ClassifierPolicy = DEFAULT_POLICY,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        """Initialize the builder.

        Args:
            repository: The repository to read staged changes from.
            policy: Thresholds for the commit-type classifier.
            max_workers: Number of concurrent per-file diff fetches.
        """
        self.repository = repository
        self.policy = policy
        self.max_workers = max(1, max_workers)

    def build(self) -> ChangeSet:
        """Build the change set for the currently staged files.

        Returns:
            The change set with one entry per staged path, in the order git
            reported them.

        Raises:
            NotARepositoryError: If the directory is not a git repository.
            NoStagedChangesError: If nothing is staged.
        """
        if not self.repository.is_repository():
            raise NotARepositoryError("Not a git repository. Initialize git first.")

        status = self.repository.status()
        if status.is_empty:
            raise NoStagedChangesError(
                "No staged changes found. Stage your changes first with: git add <files>"
            )

        rows = _cover_staged_paths(self.repository.diff_numstat(), status)
        branch = self.repository.current_branch()

        files = self._build_files(rows, status)
        commit_type = classify(files, self.policy)
        logger.debug("Built change set: %d file(s), type=%s", len(files), commit_type.value)

        return ChangeSet(files=tuple(files), branch=branch, commit_type=commit_type)

    def _build_files(self, rows: list[NumstatRow], status: StagedStatus) -> list[FileChange]:
        """Create one FileChange per row, fetching diffs concurrently."""
        old_paths = [status.rename_source(row.path) for row in rows]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            # map() yields results in input order regardless of completion order
            diffs = list(executor.map(self._fetch_diff, [row.path for row in rows], old_paths))

        files = []
        for row, old_path, diff in zip(rows, old_paths, diffs):
            files.append(
                FileChange(
                    path=row.path,
                    kind=_change_kind(row.path, status),
                    additions=row.additions,
                    deletions=row.deletions,
                    diff=diff,
                    old_path=old_path,
                )
            )
        return files

    def _fetch_diff(self, path: str, old_path: Optional[str]) -> str:
        """Fetch one file's diff, degrading to empty text on failure."""
        try:
            return self.repository.diff_text(path, old_path)
        except GitError as e:
            logger.warning("Could not read diff for %s: %s", path, e)
            return ""


def _cover_staged_paths(rows: list[NumstatRow], status: StagedStatus) -> list[NumstatRow]:
    """Append zero-count rows for staged paths numstat did not report."""
    reported = {row.path for row in rows}
    missing = [
        NumstatRow(additions=0, deletions=0, path=path)
        for path in status.all_paths
        if path not in reported
    ]
    if missing:
        logger.debug("No line counts for %d staged path(s)", len(missing))
    return rows + missing


def _change_kind(path: str, status: StagedStatus) -> ChangeKind:
    """Classify a path by its membership in the staged status groups."""
    if path in status.created:
        return ChangeKind.ADDED
    if path in status.deleted:
        return ChangeKind.DELETED
    if status.rename_source(path) is not None:
        return ChangeKind.RENAMED
    return ChangeKind.MODIFIED


def build_change_set(
    repository: Repository,
    policy: ClassifierPolicy = DEFAULT_POLICY,
) -> ChangeSet:
    """Build the change set for a repository's staged files.

    Args:
        repository: The repository to read from.
        policy: Thresholds for the commit-type classifier.

    Returns:
        The change set.
    """
    return ChangeSetBuilder(repository, policy).build()
