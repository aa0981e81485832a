"""Groq provider implementation."""

from groq import Groq

from commitor.config import API_KEY_ENV_VARS, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from commitor.llm.base import BaseLLMProvider, LLMResult
from commitor.llm.openai_provider import _chat_messages, _chat_result


class GroqProvider(BaseLLMProvider):
    """Groq LLM provider (fast inference)."""

    display_name = "Groq"

    def __init__(
        self,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        api_key: str | None = None,
    ):
        """Initialize the Groq provider.

        Args:
            model: The model to use. Defaults to llama-3.3-70b-versatile.
            max_tokens: Maximum output tokens per call.
            temperature: Sampling temperature.
            api_key: Explicit API key; resolved from env or credentials when omitted.
        """
        super().__init__(
            model=model or "llama-3.3-70b-versatile",
            api_key_env_var=API_KEY_ENV_VARS[LLMProvider.GROQ],
            max_tokens=max_tokens,
            temperature=temperature,
            api_key=api_key,
        )

    def _complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> LLMResult:
        client = Groq(api_key=self.get_api_key())

        response = client.chat.completions.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=self.temperature,
            messages=_chat_messages(system_prompt, user_prompt),
        )

        return _chat_result(response, self.model)
