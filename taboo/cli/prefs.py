"""Preferences subcommands - inspect or reset the saved setup."""

from __future__ import annotations

import typer
from rich.table import Table

from taboo.cli.base import TabooCommand
from taboo.game.timer import UNLIMITED
from taboo.setup.preferences import PreferencesStore

app = typer.Typer(
    name="prefs",
    help="Show or reset the saved game setup",
    add_completion=False,
)


def _display(value: object) -> str:
    return UNLIMITED if value is None else str(value)


class PrefsCommand(TabooCommand):
    """Show or reset persisted preferences."""

    def execute(self, action: str = "show") -> int:
        store = PreferencesStore(self.config.preferences_path)
        if action == "reset":
            store.reset()
            self.print_success("Preferences reset to defaults")

        table = Table(title="Saved setup")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="bold")
        for key, value in store.values.to_dict().items():
            table.add_row(key, _display(value))
        self.console.print(table)
        self.console.print(f"[dim]{store.path}[/dim]")
        return 0


@app.command("show")
def show(ctx: typer.Context) -> None:
    """Show the values the next game starts with."""
    raise typer.Exit(code=PrefsCommand(ctx.obj["config"]).execute("show"))


@app.command("reset")
def reset(ctx: typer.Context) -> None:
    """Restore the default setup."""
    raise typer.Exit(code=PrefsCommand(ctx.obj["config"]).execute("reset"))
