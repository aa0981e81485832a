"""Google Gemini provider implementation."""

from google import genai
from google.genai import types

from commitor.config import API_KEY_ENV_VARS, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from commitor.llm.base import BaseLLMProvider, LLMResult
from commitor.llm.exceptions import GenerationUnknownError

# Models with built-in "thinking" that consumes output tokens
THINKING_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.5-pro",
    "gemini-2.0-flash-thinking",
]

# Multiplier for max_output_tokens on thinking models
THINKING_TOKEN_MULTIPLIER = 3


class GoogleProvider(BaseLLMProvider):
    """Google Gemini LLM provider."""

    display_name = "Google"

    def __init__(
        self,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        api_key: str | None = None,
    ):
        """Initialize the Google provider.

        Args:
            model: The model to use. Defaults to gemini-2.0-flash.
            max_tokens: Maximum output tokens per call.
            temperature: Sampling temperature.
            api_key: Explicit API key; resolved from env or credentials when omitted.
        """
        super().__init__(
            model=model or "gemini-2.0-flash",
            api_key_env_var=API_KEY_ENV_VARS[LLMProvider.GOOGLE],
            max_tokens=max_tokens,
            temperature=temperature,
            api_key=api_key,
        )

    def _is_thinking_model(self) -> bool:
        """Check if the current model spends output tokens on internal reasoning."""
        return any(thinking_model in self.model.lower() for thinking_model in THINKING_MODELS)

    def _complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> LLMResult:
        client = genai.Client(api_key=self.get_api_key())

        full_prompt = f"{system_prompt}\n\n{user_prompt}" if system_prompt else user_prompt

        effective_max_tokens = max_tokens
        if self._is_thinking_model():
            effective_max_tokens = max_tokens * THINKING_TOKEN_MULTIPLIER

        response = client.models.generate_content(
            model=self.model,
            contents=full_prompt,
            config=types.GenerateContentConfig(
                max_output_tokens=effective_max_tokens,
                temperature=self.temperature,
            ),
        )

        if not response.candidates:
            raise GenerationUnknownError(
                "Google Gemini returned no candidates in response", provider=self.display_name
            )

        finish_reason = str(getattr(response.candidates[0], "finish_reason", "") or "")
        if "SAFETY" in finish_reason:
            raise GenerationUnknownError(
                f"Google Gemini blocked response due to safety filters: {finish_reason}",
                provider=self.display_name,
            )

        text = response.text or ""

        input_tokens = 0
        output_tokens = 0
        usage = getattr(response, "usage_metadata", None)
        if usage:
            input_tokens = usage.prompt_token_count or 0
            # Thinking tokens count against the output budget
            output_tokens = (usage.candidates_token_count or 0) + (
                getattr(usage, "thoughts_token_count", 0) or 0
            )

        return LLMResult(
            text=text,
            model=self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
