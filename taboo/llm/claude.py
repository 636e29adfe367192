"""
Anthropic Claude LLM provider.

Uses the Anthropic SDK for API access.
"""

import os
from typing import Any, Optional

from taboo.core.exceptions import RetryError
from taboo.core.logging import get_logger
from taboo.core.retry import llm_retry
from taboo.shared.lazy_imports import lazy_property
from taboo.llm.base import (
    CredentialsError,
    GenerationConfig,
    LLMClient,
    LLMError,
    RateLimitError,
)

logger = get_logger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-0"

_RETRYABLE_TERMS = ("rate limit", "rate_limit", "overloaded", "429", "529")


class ClaudeClient(LLMClient):
    """
    Anthropic Claude API client.

    Requires ANTHROPIC_API_KEY environment variable (or an explicit key).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
    ):
        """
        Initialize Claude client.

        Args:
            api_key: API key (defaults to ANTHROPIC_API_KEY env var)
            model: Model name
        """
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY", "")
        self._model_name = model

    @lazy_property
    def client(self) -> Any:
        """Lazy-load Anthropic client."""
        from anthropic import Anthropic

        if not self.api_key:
            raise CredentialsError(
                "ANTHROPIC_API_KEY not set. Set it in environment or taboo.yaml."
            )

        return Anthropic(api_key=self.api_key)

    @property
    def model_name(self) -> str:
        return self._model_name

    def is_available(self) -> bool:
        """Check if Claude is configured."""
        return bool(self.api_key)

    def generate_with_context(
        self,
        system_prompt: str,
        user_prompt: str,
        context: Optional[str] = None,
        config: Optional[GenerationConfig] = None,
        **kwargs: Any,
    ) -> str:
        """
        Generate with system prompt and context.

        Rate-limit and overload responses are retried with backoff; when
        retries run out a RateLimitError is raised.

        Raises:
            CredentialsError: If no API key is configured
            RateLimitError: If the API stayed rate limited through all retries
            LLMError: For any other failure or an empty response
        """
        config = config or GenerationConfig()

        user_message = user_prompt
        if context:
            user_message = f"{context}\n\n{user_prompt}"

        try:
            return self._create_message(system_prompt, user_message, config)
        except RetryError as e:
            raise RateLimitError(f"Max retries exceeded: {e.last_exception}") from e

    @llm_retry
    def _create_message(
        self, system_prompt: str, user_message: str, config: GenerationConfig
    ) -> str:
        """Send one request; retried by @llm_retry on transient errors."""
        client = self.client
        params = self._build_claude_params(system_prompt, user_message, config)
        logger.debug("Sending Claude request", model=self._model_name)

        try:
            response = client.messages.create(**params)
        except Exception as e:
            error_msg = str(e).lower()
            if any(term in error_msg for term in _RETRYABLE_TERMS):
                raise RateLimitError(f"Claude is rate limited: {e}") from e
            raise LLMError(f"Claude generation failed: {e}") from e

        return self._extract_and_record_response(response)

    def _build_claude_params(
        self, system_prompt: str, user_message: str, config: GenerationConfig
    ) -> dict[str, Any]:
        """Build Claude API request parameters."""
        params: dict[str, Any] = {
            "model": self._model_name,
            "max_tokens": config.max_tokens,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_message}],
        }

        if config.temperature is not None:
            params["temperature"] = config.temperature
        if config.top_p is not None:
            params["top_p"] = config.top_p
        if config.stop_sequences:
            params["stop_sequences"] = config.stop_sequences

        return params

    def _extract_and_record_response(self, response: Any) -> str:
        """Extract text from response and record usage."""
        output = ""
        for block in response.content:
            if hasattr(block, "text"):
                output += block.text

        if not output:
            raise LLMError("Empty response from Claude")

        if getattr(response, "usage", None):
            self._record_usage(
                prompt_tokens=getattr(response.usage, "input_tokens", 0) or 0,
                completion_tokens=getattr(response.usage, "output_tokens", 0) or 0,
            )
        return output.strip()
