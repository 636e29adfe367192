"""
Configuration Loading Functions.

Loads taboo.yaml, expands ${VAR} references and applies environment
variable overrides.

Configuration precedence: 1. Env vars, 2. YAML file, 3. Defaults

Environment Variables
---------------------
    ANTHROPIC_API_KEY       API key for the Claude deck provider
    TABOO_LLM_MODEL         Model name override
    TABOO_LLM_TEMPERATURE   Generation temperature (0.0-1.0)
    TABOO_USE_MOCK          Force the built-in word bank (true/false)
    TABOO_LOG_LEVEL         DEBUG, INFO, WARNING, ERROR, CRITICAL
"""

import os
import re
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

import yaml

from taboo.core.exceptions import ConfigurationError
from taboo.core.logging import get_logger

if TYPE_CHECKING:
    from taboo.core.config import Config

logger = get_logger(__name__)

CONFIG_FILENAMES = ("taboo.yaml", "taboo.yml")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Handles strings with ${VAR_NAME} or ${VAR_NAME:default} syntax inside
    nested dictionaries and lists.

    Args:
        value: Configuration value (string, dict, list, or primitive)

    Returns:
        Value with all environment variables expanded
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

        def replace_env_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def get_env_float(
    name: str,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> Optional[float]:
    """Get a float from the environment, clamped to bounds.

    Returns None when unset or unparseable.
    """
    value = os.environ.get(name)
    if value is None:
        return None

    try:
        float_value = float(value)
    except ValueError:
        logger.warning(f"Invalid float value for {name}={value}, ignoring")
        return None

    if min_value is not None and float_value < min_value:
        float_value = min_value
    if max_value is not None and float_value > max_value:
        float_value = max_value
    return float_value


def get_env_bool(name: str) -> Optional[bool]:
    """Get a boolean from the environment.

    Returns None when unset or unrecognized.
    """
    value = os.environ.get(name)
    if value is None:
        return None

    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    logger.warning(f"Invalid boolean value for {name}={value}, ignoring")
    return None


def _apply_env_overrides(config: "Config") -> "Config":
    """
    Apply environment variable overrides to configuration.

    Environment variables take precedence over config file values.
    """
    anthropic_key = os.environ.get("ANTHROPIC_API_KEY")
    if anthropic_key:
        config.llm.claude.api_key = anthropic_key

    llm_model = os.environ.get("TABOO_LLM_MODEL")
    if llm_model and re.match(r"^[a-zA-Z0-9._:\-/]+$", llm_model):
        config.llm.claude.model = llm_model

    llm_temp = get_env_float("TABOO_LLM_TEMPERATURE", min_value=0.0, max_value=1.0)
    if llm_temp is not None:
        config.llm.claude.temperature = llm_temp

    use_mock = get_env_bool("TABOO_USE_MOCK")
    if use_mock is not None:
        config.use_mock_data = use_mock

    log_level = os.environ.get("TABOO_LOG_LEVEL")
    if log_level and log_level.upper() in {
        "DEBUG",
        "INFO",
        "WARNING",
        "ERROR",
        "CRITICAL",
    }:
        config.logging.level = log_level.upper()

    return config


def _find_config_file(base_path: Path) -> Optional[Path]:
    """Return the first taboo.yaml candidate that exists in base_path."""
    for filename in CONFIG_FILENAMES:
        candidate = base_path / filename
        if candidate.exists():
            return candidate
    return None


def load_config(
    config_path: Optional[Path] = None, base_path: Optional[Path] = None
) -> "Config":
    """
    Load configuration from YAML file with environment variable overrides.

    An explicitly requested file must exist and parse; a file discovered
    in base_path that fails to parse is logged and defaults are used.

    Args:
        config_path: Path to config file. Defaults to taboo.yaml in base_path.
        base_path: Base path for relative settings. Defaults to current directory.

    Returns:
        Config object with all settings.

    Raises:
        ConfigurationError: If an explicit config_path is missing or invalid
    """
    # Lazy import to avoid circular dependency
    from taboo.core.config import Config

    base_path = base_path or Path.cwd()
    explicit = config_path is not None

    if config_path is None:
        config_path = _find_config_file(base_path)
        if config_path is None:
            return _create_default_config(base_path)
    elif not config_path.exists():
        raise ConfigurationError(
            f"Config file not found: {config_path}",
            field="config_path",
            value=str(config_path),
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file must contain a mapping: {config_path}"
            )
        config = Config.from_dict(data, base_path)
        return _apply_env_overrides(config)

    except (yaml.YAMLError, ConfigurationError) as e:
        if explicit:
            if isinstance(e, ConfigurationError):
                raise
            raise ConfigurationError(
                f"Could not parse config file {config_path}: {e}"
            ) from e
        logger.warning(
            f"Could not load config from {config_path}, using defaults",
            error=str(e),
        )
        return _create_default_config(base_path)


def _create_default_config(base_path: Path) -> "Config":
    """Create default configuration with environment overrides."""
    from taboo.core.config import Config

    config = Config()
    config._base_path = base_path
    return _apply_env_overrides(config)


def save_config(config: "Config", config_path: Path) -> None:
    """Write configuration to YAML (API key never written)."""
    data = config.to_dict()
    data["llm"]["claude"]["api_key"] = "${ANTHROPIC_API_KEY}"
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False)
