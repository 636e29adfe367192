"""
Base LLM Provider Interface.

This module defines the LLMClient interface the deck provider talks to.
Only Claude ships today, but the deck provider depends on this interface,
not on the Anthropic SDK.

Architecture Context
--------------------

                    ┌──────────────────────┐
                    │  ClaudeDeckProvider  │
                    └──────────┬───────────┘
                               │
                    ┌──────────┴──────────┐
                    │     LLMClient       │
                    │   (abstract base)   │
                    └──────────┬──────────┘
                               │
                          ┌─────────┐
                          │  Claude │
                          │  Client │
                          └─────────┘

Exception Hierarchy
-------------------
    LLMError (base)
    ├── CredentialsError    # Missing API key
    └── RateLimitError      # Rate limited / overloaded (retried)

Interface Contract
------------------
Implementations must provide:
- generate_with_context(): Generation with system prompt and context
- is_available(): Check if provider is ready
- model_name
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from taboo.core.exceptions import CredentialsError, LLMError, RateLimitError

__all__ = [
    "CredentialsError",
    "GenerationConfig",
    "LLMClient",
    "LLMError",
    "RateLimitError",
]


@dataclass
class GenerationConfig:
    """
    Configuration for text generation.

    Attributes:
        max_tokens: Maximum tokens to generate
        temperature: Creativity (0=deterministic, 1=creative)
        top_p: Nucleus sampling parameter
        stop_sequences: Strings that stop generation
    """

    max_tokens: int = 4096
    temperature: float = 0.9
    top_p: Optional[float] = None
    stop_sequences: Optional[List[str]] = None


class LLMClient(ABC):
    """
    Abstract base class for LLM providers.
    """

    def _get_usage(self) -> Dict[str, int]:
        """Get or initialize the usage accumulator."""
        if not hasattr(self, "_usage"):
            self._usage = {
                "prompt_tokens": 0,
                "completion_tokens": 0,
                "total_tokens": 0,
            }
        return self._usage

    def _record_usage(
        self,
        prompt_tokens: int = 0,
        completion_tokens: int = 0,
    ) -> None:
        """Record token usage from a generation call."""
        usage = self._get_usage()
        usage["prompt_tokens"] += prompt_tokens
        usage["completion_tokens"] += completion_tokens
        usage["total_tokens"] += prompt_tokens + completion_tokens

    def get_usage(self) -> Dict[str, int]:
        """
        Get cumulative token usage.

        Returns:
            Dict with prompt_tokens, completion_tokens, total_tokens
        """
        return dict(self._get_usage())

    def generate(
        self,
        prompt: str,
        config: Optional[GenerationConfig] = None,
        **kwargs: Any,
    ) -> str:
        """Generate text from a bare prompt."""
        return self.generate_with_context(
            system_prompt="You are a helpful assistant.",
            user_prompt=prompt,
            config=config,
            **kwargs,
        )

    @abstractmethod
    def generate_with_context(
        self,
        system_prompt: str,
        user_prompt: str,
        context: Optional[str] = None,
        config: Optional[GenerationConfig] = None,
        **kwargs: Any,
    ) -> str:
        """
        Generate text with system prompt and context.

        Args:
            system_prompt: System instructions
            user_prompt: User request
            context: Additional context prepended to the request
            config: Generation configuration

        Returns:
            Generated text
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is available and configured."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name."""
        pass
