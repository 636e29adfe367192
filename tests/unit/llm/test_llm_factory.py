"""Tests for the LLM client factory."""

import pytest

from taboo.core.config import Config
from taboo.core.exceptions import ConfigurationError
from taboo.llm.claude import ClaudeClient
from taboo.llm.factory import get_generation_config, get_llm_client


class TestGetLLMClient:
    """Test get_llm_client."""

    def test_claude_client(self) -> None:
        config = Config()
        config.llm.claude.api_key = "sk-ant-test"
        config.llm.claude.model = "claude-test"

        client = get_llm_client(config)

        assert isinstance(client, ClaudeClient)
        assert client.model_name == "claude-test"
        assert client.api_key == "sk-ant-test"

    def test_empty_key_falls_back_to_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-env")
        client = get_llm_client(Config())
        assert client.api_key == "sk-ant-env"

    def test_unknown_provider(self) -> None:
        config = Config()
        config.llm.default_provider = "gpt"
        with pytest.raises(ConfigurationError, match="Unknown LLM provider"):
            get_llm_client(config)


class TestGetGenerationConfig:
    """Test get_generation_config."""

    def test_from_config(self) -> None:
        config = Config()
        config.llm.claude.temperature = 0.4
        config.llm.claude.max_tokens = 2048

        generation = get_generation_config(config)

        assert generation.temperature == 0.4
        assert generation.max_tokens == 2048

    def test_overrides(self) -> None:
        generation = get_generation_config(Config(), temperature=0.1, top_p=0.5)
        assert generation.temperature == 0.1
        assert generation.top_p == 0.5
