"""Main CLI command for generating commit messages."""

from typing import Optional

import typer

from commitor.config import (
    LANGUAGE_LABELS,
    CommitorConfig,
    LanguagePreference,
    load_config,
    resolve_language_label,
)
from commitor.exceptions import ConfigurationMissingError
from commitor.generator import CommitGenerator, RetryPolicy
from commitor.git import GitError, GitRepository, NoStagedChangesError, NotARepositoryError
from commitor.global_config import GlobalConfigError
from commitor.llm import (
    GenerationAuthError,
    GenerationRateLimitedError,
    LLMError,
    MissingAPIKeyError,
    provider_from_config,
)
from commitor.llm.prompts import DEFAULT_MAX_DIFF_CHARS
from commitor.models import ChangeSet, CommitMessage
from commitor.cli.utils import (
    display_change_set,
    display_message,
    display_violations,
    edit_message,
    prompt_custom_language,
    prompt_language,
    setup_logging,
)

ACTIONS = {
    "c": "commit",
    "e": "edit",
    "r": "regenerate",
    "q": "cancel",
}


def _load_config_or_exit() -> CommitorConfig:
    try:
        return load_config()
    except ConfigurationMissingError:
        typer.echo("No configuration found.", err=True)
        typer.echo("Run 'commitor init' to set up commitor.", err=True)
        raise typer.Exit(1)
    except GlobalConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)


def _confirm_retry(error: LLMError, attempts: int) -> bool:
    typer.echo(f"Generation failed: {error}", err=True)
    return typer.confirm("Retry?", default=True)


def _choose_language(
    generator: CommitGenerator,
    config: CommitorConfig,
    override: Optional[str],
    interactive: bool,
) -> str:
    """Pick the display name of the language for this run."""
    if override:
        return resolve_language_label(override.strip()) or LANGUAGE_LABELS["en"]

    language = generator.resolve_language()
    if language:
        return language

    if not interactive:
        return LANGUAGE_LABELS["en"]

    if config.language == LanguagePreference.CUSTOM:
        typer.echo("Custom language is not set. Please enter the language you want to use.", err=True)
        return prompt_custom_language()

    typer.echo("Automatic language detection failed. Please choose a language.", err=True)
    return prompt_language()


def _generate_or_exit(
    generator: CommitGenerator,
    change_set: ChangeSet,
    language: str,
    show_raw: bool,
) -> CommitMessage:
    typer.echo(f"Generating commit message with {generator.provider.name} ({language})...", err=True)
    try:
        message = generator.generate_message(change_set, language)
    except GenerationAuthError:
        typer.echo("Invalid API key. Please run 'commitor init' to reconfigure.", err=True)
        raise typer.Exit(1)
    except GenerationRateLimitedError:
        typer.echo("Rate limit exceeded. Please try again later.", err=True)
        raise typer.Exit(1)
    except MissingAPIKeyError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"LLM error: {e}", err=True)
        if e.attempts >= generator.retry_policy.max_attempts:
            typer.echo("Maximum retry attempts reached.", err=True)
        raise typer.Exit(1)
    finally:
        if show_raw and generator.last_result is not None:
            typer.echo("\n[RAW LLM RESPONSE]", err=True)
            typer.echo(generator.last_result.text, err=True)

    return message


def _commit_or_exit(generator: CommitGenerator, message: CommitMessage) -> None:
    typer.echo("Committing changes...", err=True)
    try:
        result = generator.commit(message)
    except GitError as e:
        typer.echo(f"Commit failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Committed successfully: {result.hash}", err=True)
    typer.echo(f"  Branch: {result.branch}", err=True)
    typer.echo(f"  Hash: {result.hash}", err=True)


def _prompt_action() -> str:
    while True:
        answer = typer.prompt(
            "[c]ommit, [e]dit, [r]egenerate or [q] cancel?",
            default="c",
        ).strip().lower()
        if answer in ACTIONS:
            return ACTIONS[answer]
        if answer in ACTIONS.values():
            return answer
        typer.echo("Please answer c, e, r or q.", err=True)


def main_command(
    ctx: typer.Context,
    language: Optional[str] = typer.Option(
        None,
        "--language",
        "-l",
        help="Language for this commit (tr, en or any language name)",
    ),
    max_diff_chars: int = typer.Option(
        DEFAULT_MAX_DIFF_CHARS,
        "--max-diff-chars",
        help="Maximum characters of diff text sent to the LLM",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Commit the generated message without prompting",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output to stderr",
    ),
    show_raw: bool = typer.Option(
        False,
        "--show-raw",
        help="Show the raw LLM response",
    ),
) -> None:
    """Generate an AI-powered commit message from staged changes and commit it."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    setup_logging(verbose)
    config = _load_config_or_exit()

    repository = GitRepository()
    retry_policy = RetryPolicy(
        max_attempts=config.max_attempts,
        should_retry=None if yes else _confirm_retry,
    )
    generator = CommitGenerator(
        config,
        repository,
        provider_from_config(config),
        retry_policy=retry_policy,
        max_diff_chars=max_diff_chars,
    )

    # Step 1: Analyze staged changes
    typer.echo("Analyzing git changes...", err=True)
    try:
        change_set = generator.analyze()
    except NotARepositoryError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except NoStagedChangesError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("", err=True)
    display_change_set(change_set)
    typer.echo("", err=True)

    # Step 2: Resolve the language and generate
    language_name = _choose_language(generator, config, language, interactive=not yes)
    message = _generate_or_exit(generator, change_set, language_name, show_raw)

    display_message(message)
    display_violations(generator.validate(message))

    if yes:
        _commit_or_exit(generator, message)
        return

    # Step 3: Commit, edit, regenerate or cancel
    while True:
        action = _prompt_action()

        if action == "commit":
            _commit_or_exit(generator, message)
            return

        if action == "edit":
            message = edit_message(message, config.editor)
            display_message(message)
            display_violations(generator.validate(message))

        elif action == "regenerate":
            typer.echo("Regenerating message...", err=True)
            try:
                message = generator.generate_message(change_set, language_name)
            except LLMError as e:
                typer.echo(f"Regeneration failed: {e}", err=True)
                continue
            display_message(message)
            display_violations(generator.validate(message))

        else:
            typer.echo("Commit cancelled.", err=True)
            raise typer.Exit(0)
