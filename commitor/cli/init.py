"""CLI commands for setting up and clearing commitor configuration."""

import typer

from commitor import global_config
from commitor.config import (
    API_KEY_ENV_VARS,
    AVAILABLE_MODELS,
    LANGUAGE_LABELS,
    LanguagePreference,
    LLMProvider,
    validate_api_key,
)
from commitor.git import GitRepository
from commitor.global_config import GlobalConfigError
from commitor.language import LanguageDetector
from commitor.llm import get_provider
from commitor.cli.utils import prompt_custom_language


def _select(label: str, options: list[str], default: int = 1) -> int:
    """Show a numbered list and return the chosen zero-based index."""
    for i, option in enumerate(options, 1):
        typer.echo(f"  {i}. {option}")

    choice = typer.prompt(f"{label} (1-{len(options)})", type=int, default=default)
    if choice < 1 or choice > len(options):
        typer.echo("Invalid choice. Aborting.", err=True)
        raise typer.Exit(1)
    return choice - 1


def _prompt_api_key(provider: LLMProvider) -> str:
    while True:
        api_key = typer.prompt(f"Enter your {provider.value} API key", hide_input=True).strip()
        error = validate_api_key(provider, api_key)
        if error is None:
            return api_key
        typer.echo(f"Invalid API key: {error}", err=True)


def _select_language() -> tuple[LanguagePreference, str | None]:
    """Ask for the language preference, offering the detected language as default."""
    detection = LanguageDetector(GitRepository()).detect()
    if detection.language:
        typer.echo(
            f"Detected language from README and commit history: "
            f"{LANGUAGE_LABELS[detection.language]} ({detection.confidence:.0%} confidence)"
        )
    else:
        typer.echo("Unable to detect language automatically. Please choose your preference.")

    preferences = list(LanguagePreference)
    labels = {
        LanguagePreference.AUTO: "Automatic (README + git history)",
        LanguagePreference.TURKISH: "Turkish",
        LanguagePreference.ENGLISH: "English",
        LanguagePreference.CUSTOM: "Other language",
    }
    default = 1
    if detection.language:
        default = preferences.index(LanguagePreference(detection.language)) + 1

    typer.echo("Which language should commit messages use?")
    preference = preferences[_select("Select a language", [labels[p] for p in preferences], default)]

    custom_language = None
    if preference == LanguagePreference.CUSTOM:
        custom_language = prompt_custom_language()
    return preference, custom_language


def init_config() -> None:
    """Initialize commitor global configuration interactively."""
    typer.echo("Welcome to commitor! Let's set up your configuration.")
    typer.echo()

    if global_config.is_configured():
        overwrite = typer.confirm(
            "Configuration already exists at ~/.commitor/config.yaml. Overwrite?",
            default=False,
        )
        if not overwrite:
            typer.echo("Keeping existing configuration.")
            raise typer.Exit(0)

    # Select provider
    typer.echo("Available LLM providers:")
    providers = list(LLMProvider)
    selected_provider = providers[
        _select("Select a provider", [p.value for p in providers], default=providers.index(LLMProvider.OPENAI) + 1)
    ]

    # Select model
    models = AVAILABLE_MODELS[selected_provider]
    typer.echo()
    typer.echo(f"Available models for {selected_provider.value}:")
    selected_model = models[_select("Select a model", models)]

    # Get and check the API key
    typer.echo()
    while True:
        api_key = _prompt_api_key(selected_provider)
        typer.echo(f"Validating {selected_provider.value} API key...")
        health = get_provider(selected_provider, model=selected_model, api_key=api_key).health_check()
        if health.ok:
            typer.echo("✓ API key validated")
            break

        typer.echo(f"API key validation failed: {health.message}", err=True)
        if not typer.confirm("Do you want to try entering a different API key?", default=True):
            typer.echo("Setup cancelled.")
            raise typer.Exit(1)

    # Language preference
    typer.echo()
    preference, custom_language = _select_language()

    try:
        global_config.initialize_default_config()
        global_config.set_provider_and_model(selected_provider, selected_model)
        global_config.set_language_preference(preference, custom_language)
        global_config.save_credential(API_KEY_ENV_VARS[selected_provider], api_key)
    except GlobalConfigError as e:
        typer.echo(f"Error saving configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo()
    typer.echo("✓ Configuration saved to ~/.commitor/")
    typer.echo(f"  Provider: {selected_provider.value}")
    typer.echo(f"  Model: {selected_model}")
    typer.echo(f"  Language: {custom_language or preference.value}")
    typer.echo()
    typer.echo("You can now use 'commitor' in any git repository!")


def logout() -> None:
    """Remove the saved configuration and API keys."""
    if not global_config.is_configured() and not global_config.get_credentials_file_path().exists():
        typer.echo("No configuration found. Nothing to clear.")
        return

    typer.echo("This will remove all saved configuration including API keys.")
    if not typer.confirm("Are you sure you want to continue?", default=False):
        typer.echo("Logout cancelled.")
        return

    try:
        global_config.clear_global_config()
    except GlobalConfigError as e:
        typer.echo(f"Failed to clear configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("✓ Configuration cleared")
    typer.echo("Run 'commitor init' to set up again.")
