"""
Main configuration class for the Taboo game.

Architecture Context
--------------------
Configuration is created once at startup and handed to the pieces that
need it:

    taboo.yaml (optional)
           ↓
    load_config() → Config object
           ↓
    Passed to: deck provider factory, preferences store, play screen

Configuration Hierarchy
-----------------------
    Config
    ├── LLMConfig          # Provider, model, API key
    ├── GameConfig         # Setup choices, timer warning threshold
    ├── PreferencesConfig  # Path of the persisted setup values
    └── LoggingConfig      # Level and log file

Environment Variables
---------------------
Secrets use ${VAR_NAME} syntax in taboo.yaml:

    llm:
      claude:
        api_key: ${ANTHROPIC_API_KEY}
        model: ${TABOO_LLM_MODEL:claude-sonnet-4-0}
"""

from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional

from taboo.core.config.game import (
    GameConfig,
    LoggingConfig,
    PreferencesConfig,
)
from taboo.core.config.llm import LLMConfig, LLMProviderConfig
from taboo.core.exceptions import ConfigurationError

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class Config:
    """Main game configuration."""

    llm: LLMConfig = field(default_factory=LLMConfig)
    game: GameConfig = field(default_factory=GameConfig)
    preferences: PreferencesConfig = field(default_factory=PreferencesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    use_mock_data: Optional[bool] = None  # None = follow persisted preference

    _base_path: Path = field(default_factory=Path.cwd, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # JPL #5: Assertions for nested config types
        assert isinstance(self.llm, LLMConfig), "llm must be LLMConfig"
        assert isinstance(self.game, GameConfig), "game must be GameConfig"

        if self.llm.default_provider != "claude":
            raise ConfigurationError(
                f"Unsupported LLM provider: {self.llm.default_provider}",
                field="llm.default_provider",
                value=self.llm.default_provider,
            )
        if not 0.0 <= self.llm.claude.temperature <= 1.0:
            raise ConfigurationError(
                "llm.claude.temperature must be between 0.0 and 1.0",
                field="llm.claude.temperature",
                value=self.llm.claude.temperature,
            )
        if self.llm.claude.max_tokens <= 0:
            raise ConfigurationError(
                "llm.claude.max_tokens must be positive",
                field="llm.claude.max_tokens",
                value=self.llm.claude.max_tokens,
            )
        self._validate_game()

        if self.logging.level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"logging.level must be one of {sorted(VALID_LOG_LEVELS)}",
                field="logging.level",
                value=self.logging.level,
            )

    def _validate_game(self) -> None:
        """Validate setup choices and timer settings."""
        game = self.game
        if not game.word_count_options or any(
            n <= 0 or n > game.max_word_count for n in game.word_count_options
        ):
            raise ConfigurationError(
                f"game.word_count_options must be between 1 and {game.max_word_count}",
                field="game.word_count_options",
                value=game.word_count_options,
            )
        if any(t <= 0 for t in game.time_limit_options):
            raise ConfigurationError(
                "game.time_limit_options must be positive",
                field="game.time_limit_options",
                value=game.time_limit_options,
            )
        if not 0 <= game.max_taboo_words <= 10:
            raise ConfigurationError(
                "game.max_taboo_words must be between 0 and 10",
                field="game.max_taboo_words",
                value=game.max_taboo_words,
            )
        if game.tick_seconds <= 0:
            raise ConfigurationError(
                "game.tick_seconds must be positive",
                field="game.tick_seconds",
                value=game.tick_seconds,
            )

    @property
    def preferences_path(self) -> Path:
        """Absolute path of the preferences file."""
        path = Path(self.preferences.path).expanduser()
        if path.is_absolute():
            return path
        return self._base_path / path

    @property
    def log_path(self) -> Optional[Path]:
        """Absolute path of the log file, if one is configured."""
        if not self.logging.file:
            return None
        path = Path(self.logging.file).expanduser()
        if path.is_absolute():
            return path
        return self._base_path / path

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary (API key masked)."""
        result: dict[str, Any] = {}
        for key, value in asdict(self).items():
            if key.startswith("_"):
                continue
            result[key] = value
        if result["llm"]["claude"]["api_key"]:
            result["llm"]["claude"]["api_key"] = "<hidden>"
        return result

    @staticmethod
    def _filter_fields(cls_type: Any, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Filter dict to only keys that match dataclass fields, handling None."""
        if not data:
            return {}
        valid_keys = {f.name for f in fields(cls_type)}
        return {k: v for k, v in data.items() if k in valid_keys}

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], base_path: Optional[Path] = None
    ) -> "Config":
        """Create Config from dictionary."""
        # Import here to avoid circular dependency
        from taboo.core.config_loaders import expand_env_vars

        data = expand_env_vars(data or {})

        llm_data = data.get("llm") or {}
        claude = LLMProviderConfig(
            **cls._filter_fields(
                LLMProviderConfig,
                llm_data.get("claude") or {"model": "claude-sonnet-4-0"},
            )
        )
        if not claude.model:
            claude.model = "claude-sonnet-4-0"
        llm = LLMConfig(
            default_provider=llm_data.get("default_provider", "claude"),
            claude=claude,
        )

        try:
            config = cls(
                llm=llm,
                game=GameConfig(**cls._filter_fields(GameConfig, data.get("game"))),
                preferences=PreferencesConfig(
                    **cls._filter_fields(PreferencesConfig, data.get("preferences"))
                ),
                logging=LoggingConfig(
                    **cls._filter_fields(LoggingConfig, data.get("logging"))
                ),
                use_mock_data=data.get("use_mock_data"),
            )
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e

        if base_path:
            config._base_path = base_path

        return config
