"""
Setup form.

Collects play parameters, keeps them in the preferences store and turns
them into a deck plus a session configuration:

    form = SetupForm.from_config(config)
    form.update(category="movies")              # persisted immediately
    session_config, deck = form.start_session(word_count=10)

A failed start (bad values, deck unavailable) raises and starts nothing;
the preferences keep whatever was last written.
"""

from typing import Any, Callable, Optional, Tuple

from taboo.core.config import Config
from taboo.core.exceptions import ProviderError
from taboo.core.logging import get_logger
from taboo.deck.provider import DeckProvider, DeckRequest, get_deck_provider
from taboo.game.models import Deck, SessionConfig
from taboo.game.session import TabooSession
from taboo.setup.preferences import PreferencesStore, SetupValues

logger = get_logger(__name__)

ProviderFactory = Callable[[bool], DeckProvider]


class SetupForm:
    """
    Setup screen backed by persisted preferences.

    Attributes:
        preferences: Store holding the last-used values
        provider_factory: Builds a deck provider from the mock-data toggle
    """

    def __init__(
        self,
        preferences: PreferencesStore,
        provider_factory: ProviderFactory,
        tick_seconds: float = 1.0,
    ) -> None:
        self.preferences = preferences
        self.provider_factory = provider_factory
        self.tick_seconds = tick_seconds

    @classmethod
    def from_config(cls, config: Config, seed: Optional[int] = None) -> "SetupForm":
        """Build a form wired to the configured preferences file and providers."""

        def _factory(use_mock: bool) -> DeckProvider:
            return get_deck_provider(config, use_mock=use_mock, seed=seed)

        return cls(
            preferences=PreferencesStore(config.preferences_path),
            provider_factory=_factory,
            tick_seconds=config.game.tick_seconds,
        )

    @property
    def values(self) -> SetupValues:
        """Current field values, pre-filled from the last game."""
        return self.preferences.values

    def update(self, **changes: Any) -> SetupValues:
        """Change fields; each change is validated and persisted."""
        return self.preferences.update(**changes)

    def start_session(self, **changes: Any) -> Tuple[SessionConfig, Deck]:
        """
        Validate the setup, fetch a deck and describe the session to run.

        Args:
            **changes: Field overrides applied (and persisted) first

        Returns:
            Tuple of (SessionConfig, Deck)

        Raises:
            ConfigurationError: If the category is blank or a value is invalid
            ProviderError: If the deck could not be fetched or is malformed
        """
        if changes:
            self.update(**changes)
        values = self.values

        request = DeckRequest.create(
            category=values.category,
            difficulty=values.difficulty,
            word_count=values.word_count,
            taboo_word_count=values.taboo_word_count,
        )
        session_config = SessionConfig(
            deck_size=values.word_count,
            skip_budget=values.skip_budget,
            time_limit_seconds=values.time_limit_seconds,
        )

        provider = self.provider_factory(values.use_mock_data)
        deck = provider.fetch_deck(request)
        if len(deck) != session_config.deck_size:
            raise ProviderError(
                f"Expected {session_config.deck_size} cards but got {len(deck)}"
            )

        logger.info(
            "Setup complete",
            category=request.category,
            difficulty=request.difficulty.value,
            words=len(deck),
            mock=values.use_mock_data,
        )
        return session_config, deck

    def new_session(
        self,
        on_change: Optional[Callable[[TabooSession], None]] = None,
        on_end: Optional[Callable[[TabooSession], None]] = None,
        **changes: Any,
    ) -> TabooSession:
        """
        Start from scratch: fetch a deck and return a fresh, unstarted session.

        Each call returns a new TabooSession; nothing carries over from a
        previous game.
        """
        session_config, deck = self.start_session(**changes)
        return TabooSession(
            deck,
            session_config,
            tick_seconds=self.tick_seconds,
            on_change=on_change,
            on_end=on_end,
        )
