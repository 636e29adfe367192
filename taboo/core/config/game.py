"""
Game configuration.

Choices offered on the setup screen and play-screen tuning.
"""

from dataclasses import dataclass, field
from typing import List

VALID_DIFFICULTIES = ["easy", "medium", "hard"]


@dataclass
class GameConfig:
    """Setup choices and play-screen settings."""

    word_count_options: List[int] = field(default_factory=lambda: [5, 10, 15, 20])
    time_limit_options: List[int] = field(default_factory=lambda: [15, 30, 60, 120])
    max_taboo_words: int = 10
    max_word_count: int = 50
    warning_threshold: int = 10  # seconds left before the timer turns yellow
    tick_seconds: float = 1.0


@dataclass
class PreferencesConfig:
    """Where the last-used setup values are stored."""

    path: str = "~/.taboo/preferences.json"


@dataclass
class LoggingConfig:
    """Log level and optional log file."""

    level: str = "WARNING"
    file: str = ""
