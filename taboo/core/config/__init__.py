"""
Configuration Management for the Taboo game.

Dataclass hierarchy mapped from an optional taboo.yaml file, with
environment variable expansion for secrets.

    from taboo.core.config import Config
    from taboo.core.config_loaders import load_config

    config = load_config()
    model = config.llm.claude.model
"""

from taboo.core.config.config import Config
from taboo.core.config.game import (
    VALID_DIFFICULTIES,
    GameConfig,
    LoggingConfig,
    PreferencesConfig,
)
from taboo.core.config.llm import LLMConfig, LLMProviderConfig

__all__ = [
    "Config",
    "GameConfig",
    "LoggingConfig",
    "PreferencesConfig",
    "LLMConfig",
    "LLMProviderConfig",
    "VALID_DIFFICULTIES",
]

# NOTE: load_config lives in taboo.core.config_loaders to avoid circular imports.
