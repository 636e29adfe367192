"""Config subcommands - show the effective configuration or write a template."""

from __future__ import annotations

from pathlib import Path

import typer
import yaml

from taboo.cli.base import TabooCommand
from taboo.core.config_loaders import save_config

app = typer.Typer(
    name="config",
    help="Show or create taboo.yaml",
    add_completion=False,
)


class ConfigShowCommand(TabooCommand):
    """Print the configuration after file and environment overrides."""

    def execute(self) -> int:
        text = yaml.safe_dump(self.config.to_dict(), sort_keys=False)
        self.console.print(text, markup=False, highlight=False)
        return 0


class ConfigInitCommand(TabooCommand):
    """Write the current configuration to a YAML file."""

    def execute(self, path: Path, force: bool = False) -> int:
        if path.exists() and not force:
            self.print_warning(f"{path} already exists (use --force to overwrite)")
            return 1
        try:
            save_config(self.config, path)
        except OSError as e:
            return self.handle_error(e, f"While writing {path}")
        self.print_success(f"Configuration written to: {path}")
        return 0


@app.command("show")
def show(ctx: typer.Context) -> None:
    """Show the effective configuration (API key hidden)."""
    raise typer.Exit(code=ConfigShowCommand(ctx.obj["config"]).execute())


@app.command("init")
def init(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("taboo.yaml"), help="File to create"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write a taboo.yaml with the current settings."""
    raise typer.Exit(code=ConfigInitCommand(ctx.obj["config"]).execute(path, force))
