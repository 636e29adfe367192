"""Tests for the setup form."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from taboo.core.exceptions import ConfigurationError, ProviderError
from taboo.deck.mock import MockDeckProvider
from taboo.game.models import Difficulty
from taboo.game.session import TabooSession
from taboo.setup.form import SetupForm
from taboo.setup.preferences import PreferencesStore
from tests.fixtures.decks import build_deck


@pytest.fixture
def provider() -> Mock:
    provider = Mock()
    provider.fetch_deck.side_effect = lambda request: build_deck(request.word_count)
    return provider


@pytest.fixture
def form(prefs_path: Path, provider: Mock) -> SetupForm:
    return SetupForm(PreferencesStore(prefs_path), lambda use_mock: provider)


class TestSetupForm:
    """Test SetupForm."""

    def test_values_prefilled_from_last_game(self, prefs_path: Path, provider) -> None:
        PreferencesStore(prefs_path).update(category="movies", word_count=8)
        form = SetupForm(PreferencesStore(prefs_path), lambda use_mock: provider)
        assert form.values.category == "movies"
        assert form.values.word_count == 8

    def test_start_session(self, form: SetupForm, provider: Mock) -> None:
        session_config, deck = form.start_session(
            category="animals",
            difficulty="hard",
            word_count=6,
            taboo_word_count=2,
            skip_budget=1,
            time_limit_seconds=30,
        )

        assert len(deck) == 6
        assert session_config.deck_size == 6
        assert session_config.skip_budget == 1
        assert session_config.time_limit_seconds == 30

        request = provider.fetch_deck.call_args.args[0]
        assert request.category == "animals"
        assert request.difficulty is Difficulty.HARD
        assert request.taboo_word_count == 2

    def test_blank_category_rejected(self, form: SetupForm, provider: Mock) -> None:
        with pytest.raises(ConfigurationError, match="Please enter a category"):
            form.start_session(category="   ")
        provider.fetch_deck.assert_not_called()

    def test_changes_persist_even_when_start_fails(
        self, form: SetupForm, prefs_path: Path
    ) -> None:
        with pytest.raises(ConfigurationError):
            form.start_session(category="", word_count=7)
        assert PreferencesStore(prefs_path).values.word_count == 7

    def test_provider_error_propagates(self, form: SetupForm, provider: Mock) -> None:
        provider.fetch_deck.side_effect = ProviderError("Could not generate words")
        with pytest.raises(ProviderError):
            form.start_session()

    def test_short_deck_rejected(self, form: SetupForm, provider: Mock) -> None:
        provider.fetch_deck.side_effect = lambda request: build_deck(3)
        with pytest.raises(ProviderError, match="Expected 20 cards but got 3"):
            form.start_session()

    def test_mock_toggle_reaches_factory(self, prefs_path: Path, provider) -> None:
        calls = []

        def factory(use_mock: bool) -> Mock:
            calls.append(use_mock)
            return provider

        form = SetupForm(PreferencesStore(prefs_path), factory)
        form.start_session(use_mock_data=True)
        assert calls == [True]

    def test_new_session_is_fresh(self, form: SetupForm) -> None:
        first = form.new_session(word_count=4)
        first.skip()
        second = form.new_session()

        assert isinstance(second, TabooSession)
        assert second is not first
        assert second.state.skipped_pool == ()
        assert second.state.skip_count == 0
        assert second.deck_size == 4

    def test_from_config_with_mock_data(self, config) -> None:
        form = SetupForm.from_config(config, seed=1)
        session = form.new_session(category="anything", use_mock_data=True, word_count=5)
        assert len(session.deck) == 5
        assert form.preferences.path == config.preferences_path

    def test_from_config_uses_mock_provider(self, config) -> None:
        form = SetupForm.from_config(config, seed=1)
        assert isinstance(form.provider_factory(True), MockDeckProvider)
