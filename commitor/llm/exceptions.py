"""LLM-related exception classes.

Contains all exception classes for LLM operations:
- ProviderErrorCode: Error codes reported by generation backends
- LLMError: Base exception for LLM-related errors
- MissingAPIKeyError: Raised when API key is not set
- GenerationAuthError: Raised when the provider rejects the credential
- GenerationRateLimitedError: Raised when the provider rate limits the request
- GenerationServerError: Raised when the provider fails server-side
- GenerationUnknownError: Raised for any other provider failure
- EmptyGeneratedMessageError: Raised when no message can be recovered from a response
"""

from enum import Enum

from commitor.exceptions import CommitorError, ErrorCode


class ProviderErrorCode(str, Enum):
    """Error codes reported by a generation backend."""

    INVALID_CREDENTIAL = "InvalidCredential"
    RATE_LIMITED = "RateLimited"
    SERVER_ERROR = "ServerError"
    UNKNOWN = "Unknown"


class LLMError(CommitorError):
    """Base exception for LLM-related errors."""

    code = ErrorCode.GENERATION_UNKNOWN

    def __init__(self, message: str = "", provider: str | None = None):
        super().__init__(message)
        self.provider = provider
        # Set by the orchestrator once the retry loop gives up
        self.attempts = 0


class MissingAPIKeyError(LLMError):
    """Raised when the required API key is not set."""

    code = ErrorCode.CONFIGURATION_MISSING


class GenerationAuthError(LLMError):
    """Raised when the provider rejects the API key."""

    code = ErrorCode.GENERATION_AUTH_ERROR


class GenerationRateLimitedError(LLMError):
    """Raised when the provider rate limits the request."""

    code = ErrorCode.GENERATION_RATE_LIMITED


class GenerationServerError(LLMError):
    """Raised when the provider fails with a server error."""

    code = ErrorCode.GENERATION_SERVER_ERROR
    retryable = True


class GenerationUnknownError(LLMError):
    """Raised for provider failures that carry no recognizable status."""

    code = ErrorCode.GENERATION_UNKNOWN
    retryable = True


class EmptyGeneratedMessageError(LLMError):
    """Raised when the response contains no usable commit message."""

    code = ErrorCode.EMPTY_GENERATED_MESSAGE
    retryable = True


PROVIDER_ERRORS = {
    ProviderErrorCode.INVALID_CREDENTIAL: GenerationAuthError,
    ProviderErrorCode.RATE_LIMITED: GenerationRateLimitedError,
    ProviderErrorCode.SERVER_ERROR: GenerationServerError,
    ProviderErrorCode.UNKNOWN: GenerationUnknownError,
}
