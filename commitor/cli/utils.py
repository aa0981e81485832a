"""Shared utility functions for CLI commands."""

import logging
import os
import shlex
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

import typer

from commitor.config import LANGUAGE_LABELS, LanguagePreference, resolve_language_label
from commitor.models import ChangeKind, ChangeSet, CommitMessage
from commitor.validation import ValidationResult

DEBUG_ENV_VAR = "COMMITOR_DEBUG"

_KIND_MARKERS = {
    ChangeKind.ADDED: "A",
    ChangeKind.MODIFIED: "M",
    ChangeKind.DELETED: "D",
    ChangeKind.RENAMED: "R",
}


def setup_logging(verbose: bool = False) -> None:
    """Send debug logging to stderr when --verbose or COMMITOR_DEBUG=1 is set."""
    if verbose or os.environ.get(DEBUG_ENV_VAR) == "1":
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def find_editor(preferred: Optional[str] = None) -> list[str]:
    """Find an available text editor.

    Preference order:
    1. The editor from ~/.commitor/config.yaml
    2. $VISUAL, then $EDITOR
    3. nano, falling back to vi

    Returns:
        List of command parts to run the editor.
    """
    for candidate in (preferred, os.environ.get("VISUAL"), os.environ.get("EDITOR")):
        if candidate:
            return shlex.split(candidate)

    # noinspection PyArgumentList
    if shutil.which("nano"):
        return ["nano"]

    return ["vi"]


def open_editor(file_path: Path, preferred: Optional[str] = None) -> None:
    """Open the file in an editor and wait for it to close.

    Args:
        file_path: Path to the file to edit.
        preferred: Editor command from configuration, if any.
    """
    editor_cmd = find_editor(preferred)

    typer.echo(f"Opening editor: {' '.join(editor_cmd)}", err=True)

    try:
        result = subprocess.run(editor_cmd + [str(file_path)], check=False)
        if result.returncode != 0:
            typer.echo(f"Warning: Editor exited with code {result.returncode}", err=True)
    except FileNotFoundError:
        typer.echo(f"Error: Editor not found: {editor_cmd[0]}", err=True)
        raise typer.Exit(1)


def edit_message(message: CommitMessage, preferred: Optional[str] = None) -> CommitMessage:
    """Let the user edit a message in their editor.

    Returns:
        The edited message, or the original one if the edit left no text.
    """
    with tempfile.TemporaryDirectory(prefix="commitor-") as tmp:
        message_file = Path(tmp) / "COMMIT_EDITMSG"
        message_file.write_text(message.raw_message + "\n", encoding="utf-8")
        open_editor(message_file, preferred)
        edited = message_file.read_text(encoding="utf-8")

    try:
        return CommitMessage.from_raw(edited)
    except ValueError:
        typer.echo("Edited message is empty, keeping the previous message.", err=True)
        return message


def display_change_set(change_set: ChangeSet) -> None:
    """Print the staged files and aggregate statistics."""
    typer.echo("Changed files:", err=True)
    for f in change_set.files:
        label = f"{f.old_path} -> {f.path}" if f.old_path else f.path
        marker = _KIND_MARKERS[f.kind]
        typer.echo(f"  {marker} {label} (+{f.additions} -{f.deletions})", err=True)

    stats = change_set.stats
    typer.echo("", err=True)
    typer.echo(
        f"{stats.file_count} file(s), +{stats.total_additions} -{stats.total_deletions}, "
        f"detected type: {change_set.commit_type.value}",
        err=True,
    )


def display_message(message: CommitMessage) -> None:
    """Print the commit message preview to stdout."""
    typer.echo("")
    typer.echo("=" * 60)
    typer.echo(message.raw_message)
    typer.echo("=" * 60)
    typer.echo("")


def display_violations(result: ValidationResult) -> None:
    """Print validation warnings, if any."""
    for violation in result.violations:
        typer.echo(f"Warning: {violation.message}", err=True)


def prompt_language(message: str = "Select language for this commit") -> str:
    """Ask the user to choose a language for this commit.

    Returns:
        The display name of the chosen language.
    """
    choices = list(LANGUAGE_LABELS.items()) + [(LanguagePreference.CUSTOM.value, "Other...")]
    typer.echo(f"{message}:", err=True)
    for i, (_, label) in enumerate(choices, 1):
        typer.echo(f"  {i}. {label}", err=True)

    choice = typer.prompt(f"Choice (1-{len(choices)})", type=int, default=2)
    if choice < 1 or choice > len(choices):
        typer.echo("Invalid choice, using English.", err=True)
        return LANGUAGE_LABELS["en"]

    code = choices[choice - 1][0]
    if code == LanguagePreference.CUSTOM.value:
        return prompt_custom_language()
    return resolve_language_label(code)


def prompt_custom_language() -> str:
    """Ask for a free-text language name until a non-blank one is given."""
    while True:
        value = typer.prompt("Enter the language for commit messages (e.g. German)").strip()
        if value:
            return value
        typer.echo("Language cannot be empty.", err=True)


def mask_key(api_key: str) -> str:
    """Mask an API key for display."""
    return api_key[:8] + "..." + api_key[-4:] if len(api_key) > 12 else "***"
