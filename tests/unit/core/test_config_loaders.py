"""Tests for loading taboo.yaml and environment overrides."""

from pathlib import Path

import pytest
import yaml

from taboo.core.config import Config
from taboo.core.config_loaders import (
    expand_env_vars,
    get_env_bool,
    get_env_float,
    load_config,
    save_config,
)
from taboo.core.exceptions import ConfigurationError


class TestExpandEnvVars:
    """Test ${VAR} expansion."""

    def test_nested_expansion(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TABOO_TEST_VALUE", "x")
        data = {"a": "${TABOO_TEST_VALUE}", "b": ["${TABOO_TEST_VALUE}-y"], "c": 3}
        assert expand_env_vars(data) == {"a": "x", "b": ["x-y"], "c": 3}

    def test_default_value(self) -> None:
        assert expand_env_vars("${TABOO_UNSET_VAR:fallback}") == "fallback"

    def test_missing_without_default(self) -> None:
        assert expand_env_vars("${TABOO_UNSET_VAR}") == ""


class TestEnvHelpers:
    """Test get_env_float and get_env_bool."""

    def test_float_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TABOO_LLM_TEMPERATURE", "3")
        assert get_env_float("TABOO_LLM_TEMPERATURE", 0.0, 1.0) == 1.0

    def test_float_invalid(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TABOO_LLM_TEMPERATURE", "warm")
        assert get_env_float("TABOO_LLM_TEMPERATURE") is None

    def test_float_unset(self) -> None:
        assert get_env_float("TABOO_LLM_TEMPERATURE") is None

    @pytest.mark.parametrize(
        "raw,expected",
        [("1", True), ("TRUE", True), ("yes", True), ("0", False), ("off", False), ("maybe", None)],
    )
    def test_bool(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected) -> None:
        monkeypatch.setenv("TABOO_USE_MOCK", raw)
        assert get_env_bool("TABOO_USE_MOCK") is expected


class TestLoadConfig:
    """Test load_config."""

    def test_no_file_gives_defaults(self, temp_dir: Path) -> None:
        config = load_config(base_path=temp_dir)
        assert isinstance(config, Config)
        assert config._base_path == temp_dir

    def test_discovers_taboo_yaml(self, temp_dir: Path) -> None:
        (temp_dir / "taboo.yaml").write_text(
            "game:\n  warning_threshold: 3\n", encoding="utf-8"
        )
        assert load_config(base_path=temp_dir).game.warning_threshold == 3

    def test_explicit_file(self, config_file: Path, prefs_path: Path) -> None:
        config = load_config(config_file)
        assert config.preferences_path == prefs_path

    def test_explicit_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(temp_dir / "missing.yaml")

    def test_explicit_invalid_yaml(self, temp_dir: Path) -> None:
        path = temp_dir / "bad.yaml"
        path.write_text("llm: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Could not parse"):
            load_config(path)

    def test_explicit_invalid_value(self, temp_dir: Path) -> None:
        path = temp_dir / "bad.yaml"
        path.write_text("logging:\n  level: LOUD\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_explicit_non_mapping(self, temp_dir: Path) -> None:
        path = temp_dir / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_discovered_invalid_file_falls_back(self, temp_dir: Path) -> None:
        (temp_dir / "taboo.yaml").write_text("llm: [unclosed", encoding="utf-8")
        config = load_config(base_path=temp_dir)
        assert config.llm.claude.model == "claude-sonnet-4-0"

    def test_env_overrides(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (temp_dir / "taboo.yaml").write_text(
            "llm:\n  claude:\n    model: from-file\n", encoding="utf-8"
        )
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-env")
        monkeypatch.setenv("TABOO_LLM_MODEL", "from-env")
        monkeypatch.setenv("TABOO_LLM_TEMPERATURE", "0.25")
        monkeypatch.setenv("TABOO_USE_MOCK", "true")
        monkeypatch.setenv("TABOO_LOG_LEVEL", "debug")

        config = load_config(base_path=temp_dir)

        assert config.llm.claude.api_key == "sk-ant-env"
        assert config.llm.claude.model == "from-env"
        assert config.llm.claude.temperature == 0.25
        assert config.use_mock_data is True
        assert config.logging.level == "DEBUG"

    def test_invalid_model_name_ignored(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TABOO_LLM_MODEL", "bad model; rm -rf")
        assert load_config(base_path=temp_dir).llm.claude.model == "claude-sonnet-4-0"


class TestSaveConfig:
    """Test save_config."""

    def test_round_trip_without_secret(self, temp_dir: Path) -> None:
        config = Config()
        config.llm.claude.api_key = "sk-ant-secret"
        config.game.warning_threshold = 7
        path = temp_dir / "out" / "taboo.yaml"

        save_config(config, path)

        text = path.read_text(encoding="utf-8")
        assert "sk-ant-secret" not in text
        assert yaml.safe_load(text)["llm"]["claude"]["api_key"] == "${ANTHROPIC_API_KEY}"
        assert load_config(path).game.warning_threshold == 7
