"""Global configuration management for commitor.

Handles user-level configuration stored in ~/.commitor/:
- config.yaml: Provider, model, language and detection settings
- credentials: API keys for LLM providers
"""

import os
import stat
from pathlib import Path
from typing import Dict, Optional, Any

import yaml

from commitor.config import LLMProvider, LanguagePreference
from commitor.exceptions import CommitorError, ErrorCode


class GlobalConfigError(CommitorError):
    """Raised when there's an error with global configuration."""

    code = ErrorCode.INVALID_CONFIGURATION


class DecryptionFailureError(GlobalConfigError):
    """Raised when the persisted credentials cannot be decoded."""

    code = ErrorCode.DECRYPTION_FAILURE


_CONFIG_DIR = Path.home() / ".commitor"


def get_global_config_dir() -> Path:
    """Get the global commitor configuration directory.

    Returns:
        Path to ~/.commitor/
    """
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Ensure the global config directory exists.

    Returns:
        Path to ~/.commitor/
    """
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    """Get path to config.yaml file.

    Returns:
        Path to ~/.commitor/config.yaml
    """
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    """Get path to credentials file.

    Returns:
        Path to ~/.commitor/credentials
    """
    return get_global_config_dir() / "credentials"


def load_global_config() -> Dict[str, Any]:
    """Load global configuration from ~/.commitor/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.

    Raises:
        GlobalConfigError: If the file cannot be read or parsed.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise GlobalConfigError(f"Config file {config_file} must contain a mapping")
    return config


def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to ~/.commitor/config.yaml.

    Args:
        config: Configuration dictionary to save.
    """
    ensure_global_config_dir()
    config_file = get_config_file_path()

    try:
        with open(config_file, "w", encoding="utf-8") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def _parse_credentials(text: str) -> Dict[str, str]:
    """Parse KEY=value lines, skipping blanks and comments."""
    credentials = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            key, value = line.split("=", 1)
            credentials[key.strip()] = value.strip()
    return credentials


def load_credentials() -> Dict[str, str]:
    """Load API keys from ~/.commitor/credentials.

    Returns:
        Dictionary mapping environment variable names to API keys.

    Raises:
        DecryptionFailureError: If the file is not valid UTF-8 text.
        GlobalConfigError: If the file cannot be read.
    """
    credentials_file = get_credentials_file_path()

    if not credentials_file.exists():
        return {}

    try:
        text = credentials_file.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecryptionFailureError(
            f"Credentials file {credentials_file} is corrupt and cannot be decoded: {e}. "
            f"Remove it and run 'commitor config set-key <provider>'."
        )
    except OSError as e:
        raise GlobalConfigError(f"Failed to load credentials from {credentials_file}: {e}")

    return _parse_credentials(text)


def save_credential(provider_key: str, api_key: str) -> None:
    """Save or update an API key in the credentials file.

    Args:
        provider_key: Environment variable name (e.g., "ANTHROPIC_API_KEY")
        api_key: The API key value.
    """
    ensure_global_config_dir()
    credentials_file = get_credentials_file_path()

    existing_creds = load_credentials()
    existing_creds[provider_key] = api_key

    try:
        with open(credentials_file, "w", encoding="utf-8") as f:
            f.write("# commitor API credentials\n")
            f.write("# This file stores API keys for LLM providers\n")
            f.write("# Format: PROVIDER_API_KEY=your_key_here\n\n")

            for key, value in existing_creds.items():
                f.write(f"{key}={value}\n")

        # Owner read/write only
        os.chmod(credentials_file, stat.S_IRUSR | stat.S_IWUSR)

    except OSError as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def get_credential(provider_key: str) -> Optional[str]:
    """Get an API key from credentials file.

    Args:
        provider_key: Environment variable name (e.g., "ANTHROPIC_API_KEY")

    Returns:
        The API key if found, None otherwise.
    """
    credentials = load_credentials()
    return credentials.get(provider_key)


def get_active_provider() -> Optional[LLMProvider]:
    """Get the active LLM provider from global config.

    Returns:
        LLMProvider enum value, or None if not configured.
    """
    config = load_global_config()
    provider_str = config.get("provider")

    if not provider_str:
        return None

    try:
        return LLMProvider(provider_str)
    except ValueError:
        return None


def get_active_model() -> Optional[str]:
    """Get the active model from global config.

    Returns:
        Model name string, or None if not configured.
    """
    config = load_global_config()
    return config.get("model")


def set_provider_and_model(provider: LLMProvider, model: str) -> None:
    """Set the active provider and model in global config.

    Args:
        provider: The LLM provider to use.
        model: The model name to use.
    """
    config = load_global_config()
    config["provider"] = provider.value
    config["model"] = model
    save_global_config(config)


def set_language_preference(
    preference: LanguagePreference,
    custom_language: Optional[str] = None,
) -> None:
    """Set the commit message language preference in global config.

    Args:
        preference: auto, tr, en or custom.
        custom_language: Language name used when preference is custom.
    """
    config = load_global_config()
    config["language"] = preference.value
    if preference == LanguagePreference.CUSTOM:
        config["custom_language"] = (custom_language or "").strip()
    else:
        config.pop("custom_language", None)
    save_global_config(config)


def get_editor_preference() -> Optional[str]:
    """Get the user's preferred editor from global config.

    Returns:
        Editor command string, or None if not set.
    """
    config = load_global_config()
    return config.get("editor")


def set_editor_preference(editor: str) -> None:
    """Set the user's preferred editor in global config.

    Args:
        editor: Editor command (e.g., "nano", "vim")
    """
    config = load_global_config()
    config["editor"] = editor
    save_global_config(config)


def initialize_default_config() -> None:
    """Initialize config.yaml with default values if it doesn't exist."""
    config_file = get_config_file_path()

    if config_file.exists():
        return

    ensure_global_config_dir()

    default_config = {
        "provider": "openai",
        "model": "gpt-4o-mini",
        "max_tokens": 1500,
        "temperature": 0.3,
        "language": "auto",
        "max_attempts": 3,
        "language_detection": {
            "min_score": 5,
            "min_confidence": 0.2,
            "commit_window": 25,
        },
        "classifier": {
            "refactor_ratio_min": 0.8,
            "refactor_ratio_max": 1.2,
        },
    }

    save_global_config(default_config)


def is_configured() -> bool:
    """Check if commitor has been configured.

    Returns:
        True if config.yaml exists, False otherwise.
    """
    return get_config_file_path().exists()


def clear_global_config() -> bool:
    """Remove config.yaml and the credentials file.

    Returns:
        True if anything was removed, False if nothing was configured.
    """
    removed = False
    for path in (get_config_file_path(), get_credentials_file_path()):
        if path.exists():
            try:
                path.unlink()
            except OSError as e:
                raise GlobalConfigError(f"Failed to remove {path}: {e}")
            removed = True
    return removed
