"""LLM provider module for commitor.

This module provides a unified interface to multiple LLM providers.
The active provider comes from the CommitorConfig passed to get_provider().
"""

from typing import Optional

from dotenv import load_dotenv

from commitor.config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, CommitorConfig, LLMProvider
from commitor.llm.base import BaseLLMProvider, HealthStatus, LLMResult, classify_provider_error
from commitor.llm.exceptions import (
    EmptyGeneratedMessageError,
    GenerationAuthError,
    GenerationRateLimitedError,
    GenerationServerError,
    GenerationUnknownError,
    LLMError,
    MissingAPIKeyError,
    ProviderErrorCode,
)
from commitor.llm.parsing import parse_commit_message
from commitor.llm.prompts import build_prompt, build_system_prompt

# Load environment variables from .env file
load_dotenv()


def get_provider(
    provider: LLMProvider,
    model: str | None = None,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    temperature: float = DEFAULT_TEMPERATURE,
    api_key: str | None = None,
) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        provider: The provider to use.
        model: The model to use. Each provider has its own default.
        max_tokens: Maximum output tokens per call.
        temperature: Sampling temperature.
        api_key: Explicit API key, used by ``commitor init`` before it is saved.

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        ValueError: If the provider is not supported.
    """
    kwargs = {
        "model": model,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "api_key": api_key,
    }

    if provider == LLMProvider.ANTHROPIC:
        from commitor.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(**kwargs)

    elif provider == LLMProvider.OPENAI:
        from commitor.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(**kwargs)

    elif provider == LLMProvider.GOOGLE:
        from commitor.llm.google_provider import GoogleProvider

        return GoogleProvider(**kwargs)

    elif provider == LLMProvider.GROQ:
        from commitor.llm.groq_provider import GroqProvider

        return GroqProvider(**kwargs)

    elif provider == LLMProvider.COHERE:
        from commitor.llm.cohere_provider import CohereProvider

        return CohereProvider(**kwargs)

    elif provider == LLMProvider.OPENROUTER:
        from commitor.llm.openrouter_provider import OpenRouterProvider

        return OpenRouterProvider(**kwargs)

    else:
        raise ValueError(f"Unsupported provider: {provider}")


def provider_from_config(config: CommitorConfig, api_key: Optional[str] = None) -> BaseLLMProvider:
    """Build the provider described by a CommitorConfig."""
    return get_provider(
        config.provider,
        model=config.effective_model,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        api_key=api_key,
    )


__all__ = [
    "BaseLLMProvider",
    "HealthStatus",
    "LLMResult",
    "LLMError",
    "MissingAPIKeyError",
    "GenerationAuthError",
    "GenerationRateLimitedError",
    "GenerationServerError",
    "GenerationUnknownError",
    "EmptyGeneratedMessageError",
    "ProviderErrorCode",
    "classify_provider_error",
    "get_provider",
    "provider_from_config",
    "build_prompt",
    "build_system_prompt",
    "parse_commit_message",
]
