"""Base class for CLI commands.

Every command runs through execute() and returns an exit code. Errors the
player can act on (bad setup values, deck unavailable) are rendered as
panels and turned into exit code 1 instead of a traceback.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from rich.console import Console

from taboo.cli.console import ErrorRenderer, ProgressManager, get_console
from taboo.core.config import Config
from taboo.core.logging import get_logger

logger = get_logger(__name__)


class TabooCommand(ABC):
    """Abstract base class for Taboo CLI commands.

    Example:
        class MyCommand(TabooCommand):
            def execute(self, name: str) -> int:
                self.print_success(f"Hello {name}")
                return 0
    """

    def __init__(self, config: Config, console: Optional[Console] = None) -> None:
        """Initialize command.

        Args:
            config: Loaded configuration
            console: Rich console (for testing, inject a recording console)
        """
        self.config = config
        self.console = console or get_console()

    @abstractmethod
    def execute(self, *args: Any, **kwargs: Any) -> int:
        """Run the command and return an exit code (0 = success)."""
        pass

    # === Output Methods ===

    def print_success(self, message: str) -> None:
        ProgressManager.print_success(message)

    def print_error(self, message: str) -> None:
        ProgressManager.print_error(message)

    def print_warning(self, message: str) -> None:
        ProgressManager.print_warning(message)

    def print_info(self, message: str) -> None:
        ProgressManager.print_info(message)

    # === Error Handling ===

    def handle_error(self, error: Exception, context: str = "") -> int:
        """Render the error and return exit code 1.

        Does not exit - returns exit code for caller to decide.
        """
        logger.debug(
            "Command failed",
            command=type(self).__name__,
            error=f"{type(error).__name__}: {error}",
        )
        ErrorRenderer.render(error, context=context)
        return 1
