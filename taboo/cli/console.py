"""Console output helpers.

Provides consistent formatting for CLI output messages:

- get_console(): shared Rich console
- ErrorRenderer: error panels with "Why it happened" / "How to fix"
- ProgressManager: spinner while the deck is fetched, [OK]/[WARN] lines
"""

from __future__ import annotations

import traceback
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, TextColumn
from rich.text import Text

# Shared console instance
_console: Console | None = None

# Verbose mode flag (set by CLI --debug flag)
_verbose_mode: bool = False


def get_console() -> Console:
    """Get shared console instance (lazy-loaded).

    Returns:
        Rich Console instance
    """
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_verbose_mode(enabled: bool) -> None:
    """Enable or disable tracebacks in error panels."""
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose_mode() -> bool:
    return _verbose_mode


def tip(message: str) -> None:
    """Display a dim tip line."""
    get_console().print(f"  [dim]Tip: {message}[/dim]")


class ErrorRenderer:
    """Renders helpful error messages with "Why" and "How to fix" sections.

    Example
    -------
        try:
            form.start_session()
        except TabooError as e:
            ErrorRenderer.render(e, context="While fetching the deck")
            raise typer.Exit(1)
    """

    @staticmethod
    def render(
        exc: BaseException,
        context: str = "",
        show_traceback: Optional[bool] = None,
    ) -> None:
        """Render an exception as a helpful error panel.

        Args:
            exc: Exception to render
            context: Optional context message
            show_traceback: Override for verbose mode (None = use global setting)
        """
        from taboo.core.exceptions import get_error_info, get_root_cause

        console = get_console()

        error_info = get_error_info(exc)
        error_code = error_info.get("error_code", "TB-ERR-999")
        why = error_info.get("why_it_happened", "An unexpected error occurred")
        how_to_fix = error_info.get("how_to_fix", ["Check the error message"])

        root_cause = get_root_cause(exc)
        root_message = str(root_cause) if root_cause is not exc else None

        content = ErrorRenderer._build_error_content(
            message=str(exc),
            context=context,
            why=why,
            how_to_fix=how_to_fix,
            root_message=root_message,
        )

        panel = Panel(
            content,
            title=f"[bold red]Error: {error_code}[/bold red]",
            border_style="red",
            padding=(1, 2),
        )
        console.print(panel)

        should_show_traceback = (
            show_traceback if show_traceback is not None else is_verbose_mode()
        )
        if should_show_traceback:
            ErrorRenderer._render_traceback(exc)

    @staticmethod
    def _build_error_content(
        message: str,
        context: str,
        why: str,
        how_to_fix: List[str],
        root_message: Optional[str],
    ) -> Text:
        """Build the error panel content."""
        text = Text()

        if context:
            text.append(f"{context}\n", style="dim")
            text.append("\n")

        text.append(message, style="bold red")
        text.append("\n\n")

        # Root cause (if different)
        if root_message and root_message != message:
            text.append("Root cause: ", style="bold yellow")
            text.append(root_message, style="yellow")
            text.append("\n\n")

        text.append("Why it happened:\n", style="bold cyan")
        text.append(f"  {why}\n", style="cyan")
        text.append("\n")

        text.append("How to fix:\n", style="bold green")
        for fix in how_to_fix:
            text.append(f"  - {fix}\n", style="green")

        return text

    @staticmethod
    def _render_traceback(exc: BaseException) -> None:
        console = get_console()
        console.print()
        console.print("[dim]--- Traceback (--debug mode) ---[/dim]")
        tb_text = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        console.print(tb_text, style="dim", markup=False, highlight=False)


class ProgressManager:
    """Status output for CLI operations.

    All methods are static to allow usage without instantiation.

    Example:
        deck = ProgressManager.run_with_spinner(
            lambda: form.start_session(), "Generating words..."
        )
        ProgressManager.print_success("Deck ready")
    """

    @staticmethod
    @contextmanager
    def spinner(description: str = "Processing...") -> Iterator[Tuple[Progress, Any]]:
        """Create spinner progress indicator context.

        Yields:
            Tuple of (Progress instance, task_id)
        """
        # Plain text indicator; Unicode spinners break some Windows terminals
        with Progress(
            TextColumn("[cyan][...][/cyan]"),
            TextColumn("[progress.description]{task.description}"),
            console=get_console(),
            transient=True,
        ) as progress:
            task = progress.add_task(description, total=None)
            yield progress, task

    @staticmethod
    def run_with_spinner(
        operation: Callable[[], Any],
        description: str = "Processing...",
        success_message: Optional[str] = None,
    ) -> Any:
        """Execute operation with spinner and optional success message.

        Raises:
            Exception: Re-raises any exception from operation
        """
        if not callable(operation):
            raise TypeError("operation must be callable")

        with ProgressManager.spinner(description):
            result = operation()

        if success_message:
            ProgressManager.print_success(success_message)

        return result

    @staticmethod
    def print_success(message: str) -> None:
        get_console().print(f"[green][OK][/green] {message}")

    @staticmethod
    def print_error(message: str) -> None:
        get_console().print(f"[red][ERROR][/red] {message}")

    @staticmethod
    def print_warning(message: str) -> None:
        get_console().print(f"[yellow][WARN][/yellow] {message}")

    @staticmethod
    def print_info(message: str) -> None:
        get_console().print(f"[blue][INFO][/blue] {message}")
