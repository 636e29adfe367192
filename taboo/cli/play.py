"""Play command - the interactive Taboo game.

Setup options given on the command line are saved as the new defaults;
anything left out comes from the last game. The deck is fetched behind a
spinner, then the play screen reads one key per line:

    c  correct
    s  skip (or rotate to the next skipped card while reviewing)
    q  quit

After the summary the player can play again with the same setup; every
round gets a brand-new session.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import typer
from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

from taboo.cli.base import TabooCommand
from taboo.cli.console import ProgressManager, tip
from taboo.core.exceptions import ConfigurationError, ProviderError
from taboo.core.logging import get_logger
from taboo.game.models import EndReason
from taboo.game.scoring import SessionSummary
from taboo.game.session import TabooSession
from taboo.game.timer import format_time, timer_panel
from taboo.setup.form import SetupForm

logger = get_logger(__name__)

KEY_CORRECT = "c"
KEY_SKIP = "s"
KEY_QUIT = "q"

_END_REASON_TEXT = {
    EndReason.DECK_EXHAUSTED: "You went through the whole deck.",
    EndReason.REVIEW_RESOLVED: "Every skipped card is resolved.",
    EndReason.TIME_EXPIRED: "Time's up!",
    EndReason.ABANDONED: "Game stopped.",
}


def build_setup_changes(
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    words: Optional[int] = None,
    taboo_words: Optional[int] = None,
    time_limit: Optional[int] = None,
    skips: Optional[int] = None,
    unlimited_time: bool = False,
    unlimited_skips: bool = False,
    mock: Optional[bool] = None,
) -> Dict[str, Any]:
    """Map command-line options onto preference changes.

    Options left as None keep their saved value.

    Raises:
        ConfigurationError: If a limit and its "unlimited" flag are both given
    """
    if unlimited_time and time_limit is not None:
        raise ConfigurationError(
            "Use either --time or --unlimited-time, not both",
            field="time_limit_seconds",
        )
    if unlimited_skips and skips is not None:
        raise ConfigurationError(
            "Use either --skips or --unlimited-skips, not both",
            field="skip_budget",
        )

    options = {
        "category": category,
        "difficulty": difficulty.lower() if difficulty else None,
        "word_count": words,
        "taboo_word_count": taboo_words,
        "time_limit_seconds": time_limit,
        "skip_budget": skips,
        "use_mock_data": mock,
    }
    changes = {key: value for key, value in options.items() if value is not None}
    if unlimited_time:
        changes["time_limit_seconds"] = None
    if unlimited_skips:
        changes["skip_budget"] = None
    return changes


class PlayScreen:
    """Renders a session and feeds key presses into it."""

    def __init__(self, command: TabooCommand, warning_threshold: int = 10) -> None:
        self.command = command
        self.console = command.console
        self.warning_threshold = warning_threshold

    def render(self, session: TabooSession) -> None:
        """Draw the status line, the card and the available keys."""
        self.console.print()
        self.console.print(self._status_line(session))
        if session.config.timed:
            self.console.print(
                timer_panel(session.time_remaining, self.warning_threshold)
            )
        self.console.print(self._card_panel(session))
        self.console.print(
            f"[bold]\\[{KEY_CORRECT}][/bold] Correct   "
            f"[bold]\\[{KEY_SKIP}][/bold] {session.skip_label}   "
            f"[bold]\\[{KEY_QUIT}][/bold] Quit"
        )

    def _status_line(self, session: TabooSession) -> Text:
        text = Text()
        text.append(f"Card {session.progress}/{session.deck_size}", style="bold cyan")
        text.append("   Correct ", style="dim")
        text.append(str(session.state.correct_count), style="bold green")

        remaining = session.skips_remaining
        text.append("   Skips left ", style="dim")
        text.append(
            format_time(None) if remaining is None else str(remaining),
            style="bold yellow",
        )

        # Timed games get the countdown panel instead
        if not session.config.timed:
            text.append("   Time ", style="dim")
            text.append(format_time(None), style="bold green")
        return text

    def _card_panel(self, session: TabooSession) -> Panel:
        card = session.current_card

        body = Text(justify="center")
        body.append(f"{card.word.upper()}\n", style="bold white")
        if card.taboo_words:
            body.append("\n")
            for word in card.taboo_words:
                body.append(f"{word}\n", style="red")
        else:
            body.append("\n(no taboo words)\n", style="dim")

        position = session.review_position
        if position is not None:
            title = f"[bold yellow]Skipped card {position[0]}/{position[1]}[/bold yellow]"
            border = "yellow"
        else:
            title = "[bold]Taboo[/bold]"
            border = "blue"
        return Panel(body, title=title, border_style=border, width=40)

    def play(self, session: TabooSession) -> SessionSummary:
        """Run the input loop until the session ends."""
        actions = {
            KEY_CORRECT: session.mark_correct,
            KEY_SKIP: session.skip,
            KEY_QUIT: session.abandon,
        }

        session.start()
        try:
            while not session.ended:
                self.render(session)
                try:
                    key = self.console.input("> ").strip().lower()
                except EOFError:
                    session.abandon()
                    break

                if session.ended:
                    break
                action = actions.get(key)
                if action is None:
                    self.command.print_warning(
                        f"Press {KEY_CORRECT}, {KEY_SKIP} or {KEY_QUIT} then Enter"
                    )
                    continue
                action()
        finally:
            session.close()

        return session.summary()

    def show_summary(self, summary: SessionSummary) -> None:
        """Draw the game-over panel."""
        table = Table.grid(padding=(0, 4))
        table.add_column(justify="center")
        table.add_column(justify="center")
        table.add_column(justify="center")
        table.add_row(
            f"[bold green]{summary.correct}[/bold green]",
            f"[bold yellow]{summary.skipped}[/bold yellow]",
            f"[bold cyan]{summary.percentage}%[/bold cyan]",
        )
        table.add_row("Correct", "Skipped", "Success Rate")

        reason = _END_REASON_TEXT.get(summary.end_reason, "") if summary.end_reason else ""
        content = Group(
            Text(reason, style="dim", justify="center"),
            Text(""),
            table,
            Text(""),
            Text(summary.message, style="bold", justify="center"),
        )
        self.console.print()
        self.console.print(
            Panel(content, title="[bold]Game Over![/bold]", border_style="green")
        )


class PlayCommand(TabooCommand):
    """Set up and play rounds of Taboo."""

    def execute(
        self,
        changes: Dict[str, Any],
        seed: Optional[int] = None,
        play_again_prompt: bool = True,
    ) -> int:
        """
        Play until the player declines another round.

        Args:
            changes: Setup values to save before the first round
            seed: Shuffle seed for the built-in word bank
            play_again_prompt: Ask "Play again?" after each round

        Returns:
            Exit code (0 = success)
        """
        form = SetupForm.from_config(self.config, seed=seed)
        screen = PlayScreen(self, warning_threshold=self.config.game.warning_threshold)

        while True:
            try:
                session = self._new_session(form, changes)
            except (ConfigurationError, ProviderError) as e:
                return self.handle_error(e, "Could not start the game")
            changes = {}

            summary = screen.play(session)
            screen.show_summary(summary)

            if not play_again_prompt or not self._ask_play_again():
                return 0

    def _new_session(self, form: SetupForm, changes: Dict[str, Any]) -> TabooSession:
        """Save the setup and fetch a deck behind a spinner."""
        if changes:
            form.update(**changes)
        values = form.values

        use_mock = (
            self.config.use_mock_data
            if self.config.use_mock_data is not None
            else values.use_mock_data
        )
        description = (
            "Shuffling the word bank..."
            if use_mock
            else f"Generating {values.word_count} {values.difficulty} words..."
        )
        session = ProgressManager.run_with_spinner(
            lambda: form.new_session(on_end=self._on_end),
            description,
        )
        self.print_success(
            f"{len(session.deck)} cards ready - category: {escape(values.category.strip())}"
        )
        if session.config.time_limit_seconds is None:
            tip("Play with a clock next time: taboo play --time 60")
        return session

    def _on_end(self, session: TabooSession) -> None:
        """Runs on whichever thread ended the session."""
        if session.state.end_reason is EndReason.TIME_EXPIRED:
            self.print_warning("Time's up! Press Enter to see your results.")

    def _ask_play_again(self) -> bool:
        try:
            return Confirm.ask("Play again?", default=False, console=self.console)
        except EOFError:
            return False


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
    time_limit: Optional[int] = typer.Option(
        None, "--time", help="Time limit in seconds"
    ),
    skips: Optional[int] = typer.Option(
        None, "--skips", help="Skips allowed before skipped cards must be reviewed"
    ),
    unlimited_time: bool = typer.Option(
        False, "--unlimited-time", help="Play without a clock"
    ),
    unlimited_skips: bool = typer.Option(
        False, "--unlimited-skips", help="Allow any number of skips"
    ),
    mock: Optional[bool] = typer.Option(
        None, "--mock/--no-mock", help="Use the built-in word bank instead of Claude"
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Shuffle seed for the built-in word bank"
    ),
) -> None:
    """Play Taboo.

    Setup options are remembered for next time.

    Examples:
        # Play with your last settings
        taboo play

        # Ten hard movie cards, one minute, three skips
        taboo play -c movies -d hard -n 10 --time 60 --skips 3

        # Offline, with the built-in word bank
        taboo play --mock
    """
    config = ctx.obj["config"]
    cmd = PlayCommand(config)
    try:
        changes = build_setup_changes(
            category,
            difficulty,
            words,
            taboo_words,
            time_limit,
            skips,
            unlimited_time,
            unlimited_skips,
            mock,
        )
    except ConfigurationError as e:
        raise typer.Exit(code=cmd.handle_error(e))

    exit_code = cmd.execute(changes, seed=seed)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
