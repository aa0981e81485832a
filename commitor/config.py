"""Configuration for commitor.

Configuration is loaded from ~/.commitor/config.yaml into an explicit
CommitorConfig object that is passed to the components that need it.
Use 'commitor config' commands to modify settings.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from commitor.exceptions import ConfigurationMissingError


class LLMProvider(Enum):
    """Supported LLM providers."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GOOGLE = "google"
    GROQ = "groq"
    COHERE = "cohere"
    OPENROUTER = "openrouter"


class LanguagePreference(Enum):
    """How the commit message language is chosen."""

    AUTO = "auto"
    TURKISH = "tr"
    ENGLISH = "en"
    CUSTOM = "custom"


# Human-readable names passed to the model for the fixed languages
LANGUAGE_LABELS = {
    "tr": "Turkish",
    "en": "English",
}


# ============================================================
# DEFAULT VALUES
# ============================================================

DEFAULT_PROVIDER = LLMProvider.OPENAI
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TOKENS = 1500
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_LANGUAGE = LanguagePreference.AUTO


# ============================================================
# AVAILABLE MODELS PER PROVIDER
# ============================================================

AVAILABLE_MODELS = {
    LLMProvider.ANTHROPIC: [
        "claude-sonnet-4-20250514",
        "claude-3-5-sonnet-latest",
        "claude-3-5-haiku-latest",
    ],
    LLMProvider.OPENAI: [
        "gpt-4o-mini",
        "gpt-4o",
        "gpt-4.1",
        "gpt-4.1-mini",
    ],
    LLMProvider.GOOGLE: [
        "gemini-2.0-flash",
        "gemini-2.5-flash",
        "gemini-2.5-pro",
    ],
    LLMProvider.GROQ: [
        "llama-3.3-70b-versatile",
        "llama-3.1-8b-instant",
    ],
    LLMProvider.COHERE: [
        "command-r-plus",
        "command-r",
    ],
    LLMProvider.OPENROUTER: [
        "anthropic/claude-sonnet-4",
        "openai/gpt-4o",
        "google/gemini-2.0-flash-exp",
        "meta-llama/llama-3.3-70b-instruct",
    ],
}

# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VARS = {
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.GOOGLE: "GOOGLE_API_KEY",
    LLMProvider.GROQ: "GROQ_API_KEY",
    LLMProvider.COHERE: "COHERE_API_KEY",
    LLMProvider.OPENROUTER: "OPENROUTER_API_KEY",
}

# Required API key prefixes, where the provider documents one
API_KEY_PREFIXES = {
    LLMProvider.OPENAI: "sk-",
    LLMProvider.ANTHROPIC: "sk-ant-",
}

MIN_API_KEY_LENGTH = 20


class LanguageDetectionSettings(BaseModel):
    """Thresholds for automatic language detection."""

    min_score: int = Field(default=5, ge=0)
    min_confidence: float = Field(default=0.2, ge=0.0, le=1.0)
    commit_window: int = Field(default=25, ge=0)


class ClassifierSettings(BaseModel):
    """Tunable bounds for the commit-type classifier."""

    refactor_ratio_min: float = Field(default=0.8, ge=0.0)
    refactor_ratio_max: float = Field(default=1.2, ge=0.0)

    @model_validator(mode="after")
    def band_must_be_ordered(self):
        """Ensure the refactor ratio band is not inverted."""
        if self.refactor_ratio_min > self.refactor_ratio_max:
            raise ValueError("refactor_ratio_min must not exceed refactor_ratio_max")
        return self


class CommitorConfig(BaseModel):
    """Explicit configuration object passed through constructors.

    Attributes:
        provider: The active LLM provider.
        model: The model name for the provider.
        max_tokens: Maximum output tokens per generation call.
        temperature: Sampling temperature.
        language: Language preference (auto, tr, en, custom).
        custom_language: Free-text language name, required for custom.
        max_attempts: Upper bound on generation attempts.
        editor: Preferred editor command for manual edits.
        language_detection: Thresholds for automatic language detection.
        classifier: Bounds for the commit-type classifier.
    """

    provider: LLMProvider = DEFAULT_PROVIDER
    model: Optional[str] = None
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    language: LanguagePreference = DEFAULT_LANGUAGE
    custom_language: Optional[str] = None
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    editor: Optional[str] = None
    language_detection: LanguageDetectionSettings = Field(default_factory=LanguageDetectionSettings)
    classifier: ClassifierSettings = Field(default_factory=ClassifierSettings)

    @model_validator(mode="after")
    def custom_language_required(self):
        """Ensure a custom language name is set when the preference is custom."""
        if self.language == LanguagePreference.CUSTOM:
            if not self.custom_language or not self.custom_language.strip():
                raise ValueError(
                    "custom_language is required when language is set to custom"
                )
        return self

    @property
    def effective_model(self) -> str:
        """The configured model, or the first known model for the provider."""
        return self.model or AVAILABLE_MODELS[self.provider][0]


def load_config() -> CommitorConfig:
    """Load configuration from the global config file.

    Returns:
        The validated configuration object.

    Raises:
        ConfigurationMissingError: If ~/.commitor/config.yaml does not exist.
        GlobalConfigError: If the file exists but holds invalid values.
    """
    # Import here to avoid circular dependency
    from commitor import global_config

    if not global_config.is_configured():
        raise ConfigurationMissingError(
            "No configuration found. Run 'commitor init' to set up commitor."
        )

    raw = global_config.load_global_config()
    return config_from_dict(raw)


def config_from_dict(raw: dict) -> CommitorConfig:
    """Build a CommitorConfig from a raw configuration dictionary.

    Unknown keys are ignored so older config files keep loading.

    Args:
        raw: Dictionary as read from config.yaml.

    Returns:
        The validated configuration object.

    Raises:
        GlobalConfigError: If a value fails validation.
    """
    from commitor.global_config import GlobalConfigError

    known = {key: value for key, value in raw.items() if key in CommitorConfig.model_fields}
    # Drop explicit nulls so field defaults apply
    known = {key: value for key, value in known.items() if value is not None}
    try:
        return CommitorConfig(**known)
    except ValidationError as e:
        raise GlobalConfigError(f"Invalid configuration: {e}")


def validate_api_key(provider: LLMProvider, api_key: str) -> Optional[str]:
    """Check an API key against the provider's documented format.

    Args:
        provider: The LLM provider the key belongs to.
        api_key: The API key to check.

    Returns:
        An error message if the key looks invalid, None otherwise.
    """
    if not api_key or not api_key.strip():
        return "API key cannot be empty"

    prefix = API_KEY_PREFIXES.get(provider)
    if prefix and not api_key.startswith(prefix):
        return f"{provider.value} API key must start with \"{prefix}\""

    if len(api_key) < MIN_API_KEY_LENGTH:
        return "API key is too short"

    return None


def get_api_key_env_var(provider: LLMProvider) -> str:
    """Get the environment variable name for the API key.

    Args:
        provider: The LLM provider.

    Returns:
        The environment variable name.
    """
    return API_KEY_ENV_VARS[provider]


def resolve_language_label(value: Optional[str]) -> str:
    """Map a language code to its display name.

    Args:
        value: A language code (tr, en) or free-text language name.

    Returns:
        The display name, the value itself when unknown, or "" for no value.
    """
    if not value:
        return ""
    return LANGUAGE_LABELS.get(value, value)
