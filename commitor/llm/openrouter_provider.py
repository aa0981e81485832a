"""OpenRouter provider implementation.

OpenRouter provides unified access to many models through a single API.
It uses an OpenAI-compatible API format.
"""

from openai import OpenAI

from commitor.config import API_KEY_ENV_VARS, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from commitor.llm.base import BaseLLMProvider, LLMResult
from commitor.llm.openai_provider import _chat_messages, _chat_result

# OpenRouter API base URL
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OpenRouterProvider(BaseLLMProvider):
    """OpenRouter LLM provider."""

    display_name = "OpenRouter"

    def __init__(
        self,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        api_key: str | None = None,
    ):
        """Initialize the OpenRouter provider.

        Args:
            model: The model to use, as provider/model-name. Defaults to
                anthropic/claude-sonnet-4.
            max_tokens: Maximum output tokens per call.
            temperature: Sampling temperature.
            api_key: Explicit API key; resolved from env or credentials when omitted.
        """
        super().__init__(
            model=model or "anthropic/claude-sonnet-4",
            api_key_env_var=API_KEY_ENV_VARS[LLMProvider.OPENROUTER],
            max_tokens=max_tokens,
            temperature=temperature,
            api_key=api_key,
        )

    def _complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> LLMResult:
        # OpenAI client pointed at OpenRouter
        client = OpenAI(api_key=self.get_api_key(), base_url=OPENROUTER_BASE_URL)

        response = client.chat.completions.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=self.temperature,
            messages=_chat_messages(system_prompt, user_prompt),
        )

        return _chat_result(response, self.model)
