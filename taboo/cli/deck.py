"""Deck command - fetch a deck without playing.

Useful for checking the API key, previewing a category or saving a deck
to print. The deck is written as JSON in the provider's wire format.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.table import Table

from taboo.cli.base import TabooCommand
from taboo.cli.console import ProgressManager
from taboo.cli.play import build_setup_changes
from taboo.core.exceptions import ConfigurationError, ProviderError
from taboo.game.models import Deck
from taboo.setup.form import SetupForm


class DeckCommand(TabooCommand):
    """Fetch a deck and show or save it."""

    def execute(
        self,
        changes: Dict[str, Any],
        output: Optional[Path] = None,
        seed: Optional[int] = None,
    ) -> int:
        """
        Fetch one deck with the saved setup plus any changes.

        Returns:
            Exit code (0 = success)
        """
        form = SetupForm.from_config(self.config, seed=seed)
        try:
            _, deck = ProgressManager.run_with_spinner(
                lambda: form.start_session(**changes),
                "Generating words...",
            )
        except (ConfigurationError, ProviderError) as e:
            return self.handle_error(e, "Could not fetch a deck")

        if output is None:
            self._display_deck(deck)
            return 0

        try:
            self._save_deck(output, deck)
        except OSError as e:
            return self.handle_error(e, f"While writing {output}")
        self.print_success(f"Deck saved to: {output}")
        return 0

    def _display_deck(self, deck: Deck) -> None:
        table = Table(title=f"Deck ({len(deck)} cards)")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Word", style="bold")
        table.add_column("Taboo words", style="red")
        for i, card in enumerate(deck, start=1):
            table.add_row(str(i), card.word, ", ".join(card.taboo_words))
        self.console.print(table)

    @staticmethod
    def _save_deck(output: Path, deck: Deck) -> None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(
            json.dumps(deck.to_list(), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )


def command(
    ctx: typer.Context,
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="Word theme, e.g. movies, sports"
    ),
    difficulty: Optional[str] = typer.Option(
        None, "--difficulty", "-d", help="Word difficulty (easy/medium/hard)"
    ),
    words: Optional[int] = typer.Option(
        None, "--words", "-n", help="Number of cards in the deck"
    ),
    taboo_words: Optional[int] = typer.Option(
        None, "--taboo-words", "-t", help="Taboo words per card (0-10)"
    ),
    mock: Optional[bool] = typer.Option(
        None, "--mock/--no-mock", help="Use the built-in word bank instead of Claude"
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Shuffle seed for the built-in word bank"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the deck to this JSON file"
    ),
) -> None:
    """Fetch a deck without playing.

    Examples:
        # Preview ten sports cards
        taboo deck -c sports -n 10

        # Save a deck for later
        taboo deck -c movies -o movies.json
    """
    cmd = DeckCommand(ctx.obj["config"])
    changes = build_setup_changes(
        category=category,
        difficulty=difficulty,
        words=words,
        taboo_words=taboo_words,
        mock=mock,
    )
    exit_code = cmd.execute(changes, output=output, seed=seed)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
