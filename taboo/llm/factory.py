"""
LLM provider factory.

Create and configure LLM clients based on configuration.
"""

from taboo.core.config import Config
from taboo.core.exceptions import ConfigurationError
from taboo.core.logging import get_logger
from taboo.llm.base import GenerationConfig, LLMClient

logger = get_logger(__name__)


def get_generation_config(config: Config, **overrides) -> GenerationConfig:
    """
    Get a GenerationConfig for deck generation.

    Args:
        config: Game configuration
        **overrides: Additional overrides for GenerationConfig fields

    Returns:
        GenerationConfig with the configured temperature and token limit
    """
    claude = config.llm.claude
    values = {"temperature": claude.temperature, "max_tokens": claude.max_tokens}
    values.update(overrides)
    return GenerationConfig(**values)


def _create_claude_client(config: Config) -> LLMClient:
    """Create Claude client."""
    from taboo.llm.claude import ClaudeClient

    return ClaudeClient(
        api_key=config.llm.claude.api_key or None,
        model=config.llm.claude.model,
    )


_PROVIDERS = {
    "claude": _create_claude_client,
}


def get_llm_client(config: Config) -> LLMClient:
    """
    Create the configured LLM client.

    Rule #1: Dictionary dispatch eliminates nesting

    Raises:
        ConfigurationError: If the provider name is unknown
    """
    provider = config.llm.default_provider
    factory = _PROVIDERS.get(provider)
    if factory is None:
        raise ConfigurationError(
            f"Unknown LLM provider: {provider}",
            field="llm.default_provider",
            value=provider,
        )

    client = factory(config)
    logger.debug("Created LLM client", provider=provider, model=client.model_name)
    return client
