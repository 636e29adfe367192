"""Tests for the built-in word bank provider."""

import pytest

from taboo.deck.mock import WORD_BANK, MockDeckProvider
from taboo.deck.provider import DeckProvider, DeckRequest


def _request(**overrides) -> DeckRequest:
    values = {
        "category": "anything",
        "difficulty": "easy",
        "word_count": 10,
        "taboo_word_count": 5,
    }
    values.update(overrides)
    return DeckRequest.create(**values)


class TestWordBank:
    """Test the bank itself."""

    @pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
    def test_bank_entries_have_six_taboo_words(self, difficulty: str) -> None:
        for word, taboo in WORD_BANK[difficulty]:
            assert word.strip()
            assert len(taboo) == 6
            assert len(set(taboo)) == 6


class TestMockDeckProvider:
    """Test MockDeckProvider."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MockDeckProvider(), DeckProvider)

    def test_exact_counts(self) -> None:
        deck = MockDeckProvider(seed=1).fetch_deck(_request())
        assert len(deck) == 10
        assert all(len(card.taboo_words) == 5 for card in deck)

    @pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
    def test_words_come_from_difficulty_bank(self, difficulty: str) -> None:
        bank_words = {word for word, _ in WORD_BANK[difficulty]}
        deck = MockDeckProvider(seed=3).fetch_deck(_request(difficulty=difficulty))
        assert {card.word for card in deck} <= bank_words

    def test_deck_within_bank_has_no_repeats(self) -> None:
        deck = MockDeckProvider(seed=2).fetch_deck(_request(word_count=20))
        assert len({card.word for card in deck}) == 20

    def test_large_deck_reshuffles(self) -> None:
        """Decks bigger than the bank still have exactly word_count cards."""
        deck = MockDeckProvider(seed=4).fetch_deck(_request(word_count=50))
        assert len(deck) == 50

    def test_same_seed_same_deck(self) -> None:
        first = MockDeckProvider(seed=7).fetch_deck(_request())
        second = MockDeckProvider(seed=7).fetch_deck(_request())
        assert first == second

    def test_zero_taboo_words(self) -> None:
        deck = MockDeckProvider(seed=1).fetch_deck(_request(taboo_word_count=0))
        assert all(card.taboo_words == () for card in deck)

    def test_padding_beyond_bank(self) -> None:
        """Ten taboo words are padded from other cards, never the card's word."""
        deck = MockDeckProvider(seed=5).fetch_deck(
            _request(difficulty="medium", taboo_word_count=10)
        )
        for card in deck:
            assert len(card.taboo_words) == 10
            assert len(set(card.taboo_words)) == 10
            assert card.word not in card.taboo_words

    def test_category_is_ignored(self) -> None:
        first = MockDeckProvider(seed=9).fetch_deck(_request(category="movies"))
        second = MockDeckProvider(seed=9).fetch_deck(_request(category="sports"))
        assert first == second
