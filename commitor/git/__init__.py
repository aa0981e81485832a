"""Git access for commitor.

This package provides:
- exceptions: GitError, NotARepositoryError, NoStagedChangesError
- runner: _run_git_command
- status: StagedStatus, RenamedPath, parse_porcelain_status, unquote_path
- diff: NumstatRow, parse_numstat, resolve_rename_path, _should_exclude_file
- repository: Repository, GitRepository, CommitResult
- changeset: ChangeSetBuilder, build_change_set
"""

from commitor.git.exceptions import (
    GitError,
    NotARepositoryError,
    NoStagedChangesError,
)
from commitor.git.runner import _run_git_command
from commitor.git.status import (
    RenamedPath,
    StagedStatus,
    parse_porcelain_status,
    unquote_path,
)
from commitor.git.diff import (
    NumstatRow,
    parse_numstat,
    resolve_rename_path,
    truncate_diff,
    _should_exclude_file,
)
from commitor.git.repository import (
    CommitResult,
    GitRepository,
    Repository,
)
from commitor.git.changeset import (
    ChangeSetBuilder,
    build_change_set,
)


__all__ = [
    # Exceptions
    "GitError",
    "NotARepositoryError",
    "NoStagedChangesError",
    # Runner
    "_run_git_command",
    # Status
    "RenamedPath",
    "StagedStatus",
    "parse_porcelain_status",
    "unquote_path",
    # Diff
    "NumstatRow",
    "parse_numstat",
    "resolve_rename_path",
    "truncate_diff",
    "_should_exclude_file",
    # Repository
    "CommitResult",
    "GitRepository",
    "Repository",
    # Change set
    "ChangeSetBuilder",
    "build_change_set",
]
