"""
Deck providers.

A deck provider turns setup parameters into an ordered deck of cards:

    request = DeckRequest(category="movies", difficulty="hard",
                          word_count=10, taboo_word_count=5)
    deck = provider.fetch_deck(request)

Two implementations ship:

    ClaudeDeckProvider   asks the language model and validates its answer
    MockDeckProvider     draws from the built-in word bank (offline play)

Every failure of the Claude provider (missing key, rate limit after
retries, network error, malformed answer) surfaces as ProviderError.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field, ValidationError, field_validator

from taboo.core.config import Config
from taboo.core.exceptions import ConfigurationError, LLMError, ProviderError
from taboo.core.logging import get_logger
from taboo.deck.mock import MockDeckProvider
from taboo.deck.parser import parse_deck_response
from taboo.deck.prompts import SYSTEM_PROMPT, build_deck_prompt
from taboo.game.models import MAX_TABOO_WORDS, Deck, Difficulty
from taboo.llm.base import GenerationConfig, LLMClient

logger = get_logger(__name__)

MAX_CATEGORY_LENGTH = 100
MAX_WORD_COUNT = 50


class DeckRequest(BaseModel):
    """
    Validated parameters for one deck fetch.

    Use DeckRequest.create() to get ConfigurationError instead of
    pydantic's ValidationError.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    category: str = Field(
        ..., min_length=1, max_length=MAX_CATEGORY_LENGTH, description="Word theme"
    )
    difficulty: Difficulty = Field(Difficulty.MEDIUM, description="Word difficulty")
    word_count: int = Field(
        20, ge=1, le=MAX_WORD_COUNT, description="Exact number of cards"
    )
    taboo_word_count: int = Field(
        5, ge=0, le=MAX_TABOO_WORDS, description="Exact taboo words per card"
    )

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v: Any) -> Any:
        """Trim whitespace; an all-blank category fails min_length."""
        if isinstance(v, str):
            return v.strip()
        return v

    @classmethod
    def create(cls, **values: Any) -> "DeckRequest":
        """
        Build a request, mapping validation failures to ConfigurationError.

        Raises:
            ConfigurationError: If any parameter is missing or out of range
        """
        try:
            return cls(**values)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first.get("loc", ())) or None
            if field == "category" and first.get("type") != "string_too_long":
                message = "Please enter a category"
            else:
                message = f"Invalid {field}: {first.get('msg')}"
            raise ConfigurationError(
                message, field=field, value=first.get("input")
            ) from e


@runtime_checkable
class DeckProvider(Protocol):
    """Anything that can produce a deck for a request."""

    def fetch_deck(self, request: DeckRequest) -> Deck:
        ...


class ClaudeDeckProvider:
    """
    Deck provider backed by an LLM client.

    Attributes:
        llm_client: Client used to generate the cards
        generation_config: Temperature and token limit for the request
    """

    def __init__(
        self,
        llm_client: LLMClient,
        generation_config: Optional[GenerationConfig] = None,
    ) -> None:
        self.llm_client = llm_client
        self.generation_config = generation_config or GenerationConfig()

    def fetch_deck(self, request: DeckRequest) -> Deck:
        """
        Generate and validate a deck.

        Raises:
            ProviderError: If generation fails or the answer does not match
                the requested counts exactly
        """
        prompt = build_deck_prompt(
            category=request.category,
            difficulty=request.difficulty.value,
            word_count=request.word_count,
            taboo_word_count=request.taboo_word_count,
        )

        logger.info(
            "Requesting deck",
            model=self.llm_client.model_name,
            category=request.category,
            difficulty=request.difficulty.value,
            words=request.word_count,
            taboo_words=request.taboo_word_count,
        )

        try:
            response = self.llm_client.generate_with_context(
                system_prompt=SYSTEM_PROMPT,
                user_prompt=prompt,
                config=self.generation_config,
            )
        except LLMError as e:
            logger.warning("Deck generation failed", error=str(e))
            raise ProviderError(
                f"Could not generate words: {e}",
                how_to_fix=e.how_to_fix + ProviderError.how_to_fix[-1:],
            ) from e

        try:
            deck = parse_deck_response(
                response, request.word_count, request.taboo_word_count
            )
        except ProviderError as e:
            logger.warning("Rejected malformed deck", error=str(e))
            raise

        logger.info("Deck ready", cards=len(deck))
        logger.debug("Token usage", **self.llm_client.get_usage())
        return deck


def get_deck_provider(
    config: Config,
    use_mock: Optional[bool] = None,
    seed: Optional[int] = None,
) -> DeckProvider:
    """
    Select the deck provider.

    Precedence for the mock toggle: config.use_mock_data (TABOO_USE_MOCK or
    taboo.yaml), then the use_mock argument (CLI flag or preference).

    Args:
        config: Game configuration
        use_mock: Mock-data toggle from the caller
        seed: Shuffle seed for the mock provider

    Returns:
        MockDeckProvider or ClaudeDeckProvider
    """
    mock = config.use_mock_data if config.use_mock_data is not None else use_mock
    if mock:
        logger.debug("Using built-in word bank", seed=seed)
        return MockDeckProvider(seed=seed)

    # Lazy import keeps the LLM stack out of mock-only runs
    from taboo.llm.factory import get_generation_config, get_llm_client

    return ClaudeDeckProvider(
        llm_client=get_llm_client(config),
        generation_config=get_generation_config(config),
    )
