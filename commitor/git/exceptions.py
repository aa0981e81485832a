"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- NotARepositoryError: Raised when the working directory is not a git repo
- NoStagedChangesError: Raised when there are no staged changes
"""

from commitor.exceptions import CommitorError, ErrorCode


class GitError(CommitorError):
    """Custom exception for git-related errors."""

    code = ErrorCode.GIT_COMMAND_FAILED


class NotARepositoryError(GitError):
    """Raised when the working directory is not inside a git repository."""

    code = ErrorCode.NOT_A_REPOSITORY


class NoStagedChangesError(GitError):
    """Raised when there are no staged changes."""

    code = ErrorCode.NO_STAGED_CHANGES
