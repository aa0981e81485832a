"""CLI commands for global configuration management."""

from typing import Optional

import typer

from commitor import global_config
from commitor.config import (
    API_KEY_ENV_VARS,
    AVAILABLE_MODELS,
    LanguagePreference,
    LLMProvider,
    config_from_dict,
    validate_api_key,
)
from commitor.global_config import GlobalConfigError
from commitor.cli.utils import mask_key, prompt_custom_language

VALID_PROVIDERS = ", ".join(p.value for p in LLMProvider)
VALID_LANGUAGES = ", ".join(p.value for p in LanguagePreference)

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global commitor configuration in ~/.commitor/",
    add_completion=False,
)


def _parse_provider(provider: str) -> LLMProvider:
    try:
        return LLMProvider(provider.lower())
    except ValueError:
        typer.echo(f"Invalid provider: {provider}", err=True)
        typer.echo(f"Valid providers: {VALID_PROVIDERS}")
        raise typer.Exit(1)


def _format_language(language: LanguagePreference, custom_language: Optional[str]) -> str:
    if language == LanguagePreference.AUTO:
        return "Automatic (README + git history)"
    if language == LanguagePreference.CUSTOM:
        return f"Custom ({custom_language or 'not set'})"
    return "Turkish" if language == LanguagePreference.TURKISH else "English"


@config_app.command("show")
def config_show() -> None:
    """Show current global configuration."""
    if not global_config.is_configured():
        typer.echo("No configuration found. Run 'commitor init' to set up.")
        return

    try:
        config = config_from_dict(global_config.load_global_config())
        env_var = API_KEY_ENV_VARS[config.provider]
        api_key = global_config.get_credential(env_var)
    except GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Current commitor configuration ({global_config.get_config_file_path()}):")
    typer.echo()
    typer.echo(f"  Provider: {config.provider.value}")
    typer.echo(f"  Model: {config.effective_model}")
    typer.echo(f"  Max Tokens: {config.max_tokens}")
    typer.echo(f"  Temperature: {config.temperature}")
    typer.echo(f"  Max Attempts: {config.max_attempts}")
    typer.echo(f"  Language: {_format_language(config.language, config.custom_language)}")
    if config.editor:
        typer.echo(f"  Editor: {config.editor}")
    typer.echo()

    if api_key:
        typer.echo(f"  API Key ({env_var}): {mask_key(api_key)}")
    else:
        typer.echo(f"  API Key ({env_var}): not set")


@config_app.command("set-key")
def config_set_key(
    provider: str = typer.Argument(..., help=f"Provider name ({VALID_PROVIDERS})"),
) -> None:
    """Set or update an API key for a provider."""
    llm_provider = _parse_provider(provider)
    env_var = API_KEY_ENV_VARS[llm_provider]

    typer.echo(f"Setting API key for {llm_provider.value}")
    api_key = typer.prompt(f"Enter your {llm_provider.value} API key", hide_input=True).strip()

    error = validate_api_key(llm_provider, api_key)
    if error:
        typer.echo(f"Invalid API key: {error}", err=True)
        raise typer.Exit(1)

    try:
        global_config.save_credential(env_var, api_key)
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ API key saved for {llm_provider.value}")


@config_app.command("set-provider")
def config_set_provider(
    provider: str = typer.Argument(..., help=f"Provider name ({VALID_PROVIDERS})"),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (optional, will prompt if not provided)",
    ),
) -> None:
    """Set the active LLM provider and model."""
    llm_provider = _parse_provider(provider)
    models = AVAILABLE_MODELS[llm_provider]

    if not model:
        typer.echo(f"Available models for {llm_provider.value}:")
        for i, m in enumerate(models, 1):
            typer.echo(f"  {i}. {m}")

        model_choice = typer.prompt(f"Select a model (1-{len(models)})", type=int, default=1)
        if model_choice < 1 or model_choice > len(models):
            typer.echo("Invalid choice. Aborting.", err=True)
            raise typer.Exit(1)
        model = models[model_choice - 1]
    elif model not in models:
        typer.echo(f"Warning: {model} is not in the list of known models for {llm_provider.value}")
        if not typer.confirm("Continue anyway?", default=False):
            raise typer.Exit(0)

    try:
        global_config.set_provider_and_model(llm_provider, model)
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Provider set to: {llm_provider.value}")
    typer.echo(f"✓ Model set to: {model}")


@config_app.command("set-language")
def config_set_language(
    language: str = typer.Argument(..., help=f"Language preference ({VALID_LANGUAGES})"),
    custom: Optional[str] = typer.Option(
        None,
        "--custom",
        "-c",
        help="Language name when the preference is 'custom'",
    ),
) -> None:
    """Set the commit message language preference."""
    try:
        preference = LanguagePreference(language.lower())
    except ValueError:
        typer.echo(f"Invalid language preference: {language}", err=True)
        typer.echo(f"Valid preferences: {VALID_LANGUAGES}")
        raise typer.Exit(1)

    custom_language = None
    if preference == LanguagePreference.CUSTOM:
        custom_language = (custom or "").strip() or prompt_custom_language()

    try:
        global_config.set_language_preference(preference, custom_language)
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Language set to: {_format_language(preference, custom_language)}")


@config_app.command("set-editor")
def config_set_editor(
    editor: str = typer.Argument(..., help="Editor command (e.g., nano, 'code --wait')"),
) -> None:
    """Set the editor used to edit generated messages."""
    try:
        global_config.set_editor_preference(editor)
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Editor set to: {editor}")


@config_app.command("list-models")
def config_list_models(
    provider: Optional[str] = typer.Argument(
        None,
        help="Provider name (optional, shows all if not provided)",
    ),
) -> None:
    """List available models for a provider (or all providers)."""
    providers = [_parse_provider(provider)] if provider else list(LLMProvider)
    for llm_provider in providers:
        typer.echo(f"{llm_provider.value}:")
        for model in AVAILABLE_MODELS[llm_provider]:
            typer.echo(f"  • {model}")
        typer.echo()
