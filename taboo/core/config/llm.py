"""
LLM configuration.

Provider settings for the model that writes the word cards.
"""

from dataclasses import dataclass, field


@dataclass
class LLMProviderConfig:
    """Individual LLM provider configuration."""

    model: str = ""
    api_key: str = ""
    temperature: float = 0.9  # Higher than factual work; decks should vary
    max_tokens: int = 4096


@dataclass
class LLMConfig:
    """LLM providers configuration."""

    default_provider: str = "claude"
    claude: LLMProviderConfig = field(
        default_factory=lambda: LLMProviderConfig(model="claude-sonnet-4-0")
    )
