"""Anthropic Claude provider implementation."""

from anthropic import Anthropic

from commitor.config import API_KEY_ENV_VARS, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from commitor.llm.base import BaseLLMProvider, LLMResult


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    display_name = "Anthropic"

    def __init__(
        self,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        api_key: str | None = None,
    ):
        """Initialize the Anthropic provider.

        Args:
            model: The model to use. Defaults to claude-sonnet-4-20250514.
            max_tokens: Maximum output tokens per call.
            temperature: Sampling temperature.
            api_key: Explicit API key; resolved from env or credentials when omitted.
        """
        super().__init__(
            model=model or "claude-sonnet-4-20250514",
            api_key_env_var=API_KEY_ENV_VARS[LLMProvider.ANTHROPIC],
            max_tokens=max_tokens,
            temperature=temperature,
            api_key=api_key,
        )

    def _complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> LLMResult:
        client = Anthropic(api_key=self.get_api_key())

        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": self.temperature,
            "messages": [{"role": "user", "content": user_prompt}],
        }
        if system_prompt:
            kwargs["system"] = system_prompt

        message = client.messages.create(**kwargs)

        # Concatenate text blocks; other block types carry no message text
        text = "".join(
            getattr(block, "text", "") for block in message.content
        )

        return LLMResult(
            text=text,
            model=self.model,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )
