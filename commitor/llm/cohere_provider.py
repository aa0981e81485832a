"""Cohere provider implementation."""

import cohere

from commitor.config import API_KEY_ENV_VARS, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from commitor.llm.base import BaseLLMProvider, LLMResult
from commitor.llm.openai_provider import _chat_messages


class CohereProvider(BaseLLMProvider):
    """Cohere LLM provider."""

    display_name = "Cohere"

    def __init__(
        self,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        api_key: str | None = None,
    ):
        """Initialize the Cohere provider.

        Args:
            model: The model to use. Defaults to command-r-plus.
            max_tokens: Maximum output tokens per call.
            temperature: Sampling temperature.
            api_key: Explicit API key; resolved from env or credentials when omitted.
        """
        super().__init__(
            model=model or "command-r-plus",
            api_key_env_var=API_KEY_ENV_VARS[LLMProvider.COHERE],
            max_tokens=max_tokens,
            temperature=temperature,
            api_key=api_key,
        )

    def _complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> LLMResult:
        client = cohere.ClientV2(api_key=self.get_api_key())

        response = client.chat(
            model=self.model,
            max_tokens=max_tokens,
            temperature=self.temperature,
            messages=_chat_messages(system_prompt, user_prompt),
        )

        content = response.message.content or []
        text = content[0].text if content else ""

        return LLMResult(
            text=text,
            model=self.model,
            input_tokens=int(response.usage.tokens.input_tokens or 0),
            output_tokens=int(response.usage.tokens.output_tokens or 0),
        )
