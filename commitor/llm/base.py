"""Base classes and shared utilities for LLM providers."""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from commitor.llm.exceptions import (
    PROVIDER_ERRORS,
    EmptyGeneratedMessageError,
    LLMError,
    MissingAPIKeyError,
    ProviderErrorCode,
)
from commitor.llm.prompts import build_system_prompt

logger = logging.getLogger(__name__)

# Prompt used by health checks; the reply content is ignored
HEALTH_CHECK_PROMPT = "Hello"
HEALTH_CHECK_MAX_TOKENS = 10


@dataclass
class LLMResult:
    """Result from an LLM generation call, including token usage."""

    text: str
    model: str
    input_tokens: int
    output_tokens: int


@dataclass
class HealthStatus:
    """Outcome of a provider health check."""

    ok: bool
    error: Optional[ProviderErrorCode] = None
    message: str = ""


def _extract_status_code(exc: BaseException) -> Optional[int]:
    """Find an HTTP status code on an SDK exception, if it carries one."""
    for attr in ("status_code", "status", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value

    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int):
        return value

    return None


def classify_provider_error(exc: BaseException) -> ProviderErrorCode:
    """Map a provider SDK exception to a ProviderErrorCode.

    Args:
        exc: The exception raised by the SDK client.

    Returns:
        INVALID_CREDENTIAL for 401/403, RATE_LIMITED for 429, SERVER_ERROR
        for 5xx, UNKNOWN otherwise.
    """
    status = _extract_status_code(exc)
    if status in (401, 403):
        return ProviderErrorCode.INVALID_CREDENTIAL
    if status == 429:
        return ProviderErrorCode.RATE_LIMITED
    if status is not None and status >= 500:
        return ProviderErrorCode.SERVER_ERROR
    return ProviderErrorCode.UNKNOWN


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Subclasses implement ``_complete`` against their SDK; the base class turns
    SDK failures into the typed errors from commitor.llm.exceptions.
    """

    display_name = "LLM"

    def __init__(
        self,
        model: str,
        api_key_env_var: str,
        max_tokens: int,
        temperature: float,
        api_key: Optional[str] = None,
    ):
        self.model = model
        self.api_key_env_var = api_key_env_var
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._api_key = api_key

    @property
    def name(self) -> str:
        """Human-readable provider name."""
        return self.display_name

    def get_api_key(self) -> str:
        """Get the API key from the constructor, environment or credentials file.

        Returns:
            The API key string.

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        if self._api_key:
            return self._api_key
        return self._get_api_key_with_fallback(self.api_key_env_var, self.display_name)

    def _get_api_key_with_fallback(self, env_var_name: str, provider_name: str) -> str:
        """Helper to get API key with fallback to credentials file.

        Args:
            env_var_name: Environment variable name to check.
            provider_name: Human-readable provider name for error messages.

        Returns:
            The API key string.

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        api_key = os.getenv(env_var_name)
        if api_key:
            return api_key

        from commitor.global_config import get_credential

        api_key = get_credential(env_var_name)
        if api_key:
            return api_key

        raise MissingAPIKeyError(
            f"{provider_name} API key not found. Set it using:\n"
            f"  1. Environment variable: export {env_var_name}=your_key_here\n"
            f"  2. Run: commitor config set-key {provider_name.lower()}\n"
            f"  3. Manually add to ~/.commitor/credentials",
            provider=provider_name,
        )

    @abstractmethod
    def _complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
    ) -> LLMResult:
        """Run one completion call against the SDK.

        SDK exceptions propagate unchanged; the caller classifies them.
        """

    def generate(self, prompt: str, language: str) -> LLMResult:
        """Generate a commit message response for a compiled prompt.

        Args:
            prompt: The user prompt from build_prompt().
            language: Display name of the target language.

        Returns:
            An LLMResult with the raw response text and token usage.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            GenerationAuthError: If the provider rejects the API key.
            GenerationRateLimitedError: If the provider rate limits the call.
            GenerationServerError: If the provider fails server-side.
            GenerationUnknownError: For any other provider failure.
            EmptyGeneratedMessageError: If the response text is empty.
        """
        system_prompt = build_system_prompt(language)

        try:
            result = self._complete(system_prompt, prompt, self.max_tokens)
        except LLMError:
            raise
        except Exception as e:
            raise self._to_provider_error(e) from e

        if not result.text or not result.text.strip():
            raise EmptyGeneratedMessageError(
                f"No response from {self.display_name}", provider=self.display_name
            )

        logger.debug(
            "%s returned %d chars (%d in / %d out tokens)",
            self.display_name,
            len(result.text),
            result.input_tokens,
            result.output_tokens,
        )
        return result

    def health_check(self) -> HealthStatus:
        """Send a minimal request to verify the API key and endpoint.

        Returns:
            A HealthStatus; failures are reported, never raised.
        """
        try:
            result = self._complete("", HEALTH_CHECK_PROMPT, HEALTH_CHECK_MAX_TOKENS)
        except MissingAPIKeyError as e:
            return HealthStatus(ok=False, error=ProviderErrorCode.INVALID_CREDENTIAL, message=str(e))
        except Exception as e:
            code = classify_provider_error(e)
            logger.debug("%s health check failed: %s", self.display_name, e)
            return HealthStatus(ok=False, error=code, message=self._error_message(code, e))

        if not result.text:
            return HealthStatus(
                ok=False,
                error=ProviderErrorCode.UNKNOWN,
                message=f"Empty response from {self.display_name}",
            )
        return HealthStatus(ok=True)

    def _error_message(self, code: ProviderErrorCode, exc: BaseException) -> str:
        if code == ProviderErrorCode.INVALID_CREDENTIAL:
            return f"Invalid {self.display_name} API key"
        if code == ProviderErrorCode.RATE_LIMITED:
            return f"{self.display_name} rate limit exceeded"
        if code == ProviderErrorCode.SERVER_ERROR:
            return f"{self.display_name} server error"
        return f"{self.display_name} API call failed: {exc}"

    def _to_provider_error(self, exc: BaseException) -> LLMError:
        code = classify_provider_error(exc)
        error_class = PROVIDER_ERRORS[code]
        return error_class(self._error_message(code, exc), provider=self.display_name)
