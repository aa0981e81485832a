"""OpenAI GPT provider implementation."""

from openai import OpenAI

from commitor.config import API_KEY_ENV_VARS, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from commitor.llm.base import BaseLLMProvider, LLMResult


def _chat_messages(system_prompt: str, user_prompt: str) -> list[dict]:
    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": user_prompt})
    return messages


def _chat_result(response, model: str) -> LLMResult:
    text = response.choices[0].message.content or ""
    usage = response.usage
    return LLMResult(
        text=text,
        model=model,
        input_tokens=usage.prompt_tokens if usage else 0,
        output_tokens=usage.completion_tokens if usage else 0,
    )


class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT LLM provider."""

    display_name = "OpenAI"

    def __init__(
        self,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        api_key: str | None = None,
    ):
        """Initialize the OpenAI provider.

        Args:
            model: The model to use. Defaults to gpt-4o-mini.
            max_tokens: Maximum output tokens per call.
            temperature: Sampling temperature.
            api_key: Explicit API key; resolved from env or credentials when omitted.
        """
        super().__init__(
            model=model or "gpt-4o-mini",
            api_key_env_var=API_KEY_ENV_VARS[LLMProvider.OPENAI],
            max_tokens=max_tokens,
            temperature=temperature,
            api_key=api_key,
        )

    def _complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> LLMResult:
        client = OpenAI(api_key=self.get_api_key())

        response = client.chat.completions.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=self.temperature,
            messages=_chat_messages(system_prompt, user_prompt),
        )

        return _chat_result(response, self.model)
