"""CLI commands that report on language detection and provider health."""

import typer

from commitor.config import CommitorConfig, LANGUAGE_LABELS, load_config
from commitor.exceptions import ConfigurationMissingError
from commitor.generator import CommitGenerator
from commitor.git import GitRepository
from commitor.global_config import GlobalConfigError
from commitor.llm import provider_from_config


def _config_or_default() -> CommitorConfig:
    try:
        return load_config()
    except ConfigurationMissingError:
        return CommitorConfig()
    except GlobalConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)


def _language_label(code: str | None) -> str:
    return LANGUAGE_LABELS.get(code, code) if code else "undecided"


def detect_language_command() -> None:
    """Show the language detected from the README and recent commits."""
    config = _config_or_default()
    generator = CommitGenerator(config, GitRepository(), provider_from_config(config))
    detection = generator.detect_language()

    typer.echo(f"Detected language: {_language_label(detection.language)}")
    typer.echo(f"Confidence: {detection.confidence:.0%}")
    typer.echo()
    for detail in detection.details:
        typer.echo(
            f"  {detail.source}: {_language_label(detail.language)} "
            f"(confidence {detail.confidence:.0%}, "
            f"scores {detail.score.target}/{detail.score.other})"
        )


def health_command() -> None:
    """Check that the configured provider accepts the API key."""
    try:
        config = load_config()
    except (ConfigurationMissingError, GlobalConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    provider = provider_from_config(config)
    typer.echo(f"Checking {provider.name} ({provider.model})...")
    status = CommitGenerator(config, GitRepository(), provider).check_provider_health()

    if status.ok:
        typer.echo("✓ Provider is reachable and the API key is valid")
        return

    typer.echo(f"✗ {status.message} ({status.error.value})", err=True)
    raise typer.Exit(1)
