"""CLI entry point for commitor.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from commitor.cli.config import config_app
from commitor.cli.diagnostics import detect_language_command, health_command
from commitor.cli.ignore import ignore_app
from commitor.cli.init import init_config, logout
from commitor.cli.main import main_command

# Main application
app = typer.Typer(
    name="commitor",
    help="commitor: AI-powered Git commit message generator",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(ignore_app, name="ignore")
app.add_typer(config_app, name="config")

# Add individual commands
app.command("init")(init_config)
app.command("logout")(logout)
app.command("detect-language")(detect_language_command)
app.command("health")(health_command)

# Set the main callback for default behavior
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "ignore_app",
    "init_config",
    "logout",
    "detect_language_command",
    "health_command",
    "main_command",
]
