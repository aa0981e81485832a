"""Base exception classes shared by every commitor package.

Contains:
- ErrorCode: Stable identifiers carried by every commitor error
- CommitorError: Base exception with a code and a retryable flag
- ConfigurationMissingError: Raised when no configuration has been set up
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes surfaced to callers."""

    CONFIGURATION_MISSING = "ConfigurationMissing"
    INVALID_CONFIGURATION = "InvalidConfiguration"
    NOT_A_REPOSITORY = "NotARepository"
    NO_STAGED_CHANGES = "NoStagedChanges"
    GIT_COMMAND_FAILED = "GitCommandFailed"
    GENERATION_AUTH_ERROR = "GenerationAuthError"
    GENERATION_RATE_LIMITED = "GenerationRateLimited"
    GENERATION_SERVER_ERROR = "GenerationServerError"
    GENERATION_UNKNOWN = "GenerationUnknown"
    EMPTY_GENERATED_MESSAGE = "EmptyGeneratedMessage"
    DECRYPTION_FAILURE = "DecryptionFailure"


class CommitorError(Exception):
    """Base exception for all commitor errors.

    Attributes:
        code: Stable error code for programmatic handling.
        retryable: Whether the generation loop may retry after this error.
    """

    code: ErrorCode = ErrorCode.INVALID_CONFIGURATION
    retryable: bool = False

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ConfigurationMissingError(CommitorError):
    """Raised when commitor has not been configured yet."""

    code = ErrorCode.CONFIGURATION_MISSING
