"""Taboo CLI - Main application entry point.

Registers the commands and loads configuration once per invocation:

    taboo play      play a game (setup options are remembered)
    taboo deck      fetch a deck without playing
    taboo prefs     show or reset the saved setup
    taboo config    show or create taboo.yaml
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from taboo.cli import config_cmd, deck, play, prefs
from taboo.cli.console import ErrorRenderer, set_verbose_mode
from taboo.core.config_loaders import load_config
from taboo.core.exceptions import ConfigurationError
from taboo.core.logging import configure_logging

app = typer.Typer(
    name="taboo",
    help="The party word-guessing game, with decks written by Claude",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from taboo import __version__

        typer.echo(f"taboo version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Debug logging and full tracebacks on errors"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to taboo.yaml (default: ./taboo.yaml)"
    ),
) -> None:
    """Taboo - describe the word without saying the taboo words.

    Examples:
        # Play with your last settings
        taboo play

        # Offline game with the built-in word bank
        taboo play --mock

        # See what the next game starts with
        taboo prefs show

    For help on a specific command:
        taboo <command> --help
    """
    set_verbose_mode(debug)
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        ErrorRenderer.render(e, context="While loading configuration")
        raise typer.Exit(code=1)

    configure_logging(
        level="DEBUG" if debug else config.logging.level,
        log_file=config.log_path,
    )
    ctx.obj = {"config": config, "debug": debug}


app.command("play")(play.command)
app.command("deck")(deck.command)
app.add_typer(prefs.app, name="prefs")
app.add_typer(config_cmd.app, name="config")


def cli_main() -> None:
    """Entry point for console_scripts."""
    app()


if __name__ == "__main__":
    cli_main()
