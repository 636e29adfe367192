"""Tests for deck response parsing and validation."""

import json

import pytest

from taboo.core.exceptions import ProviderError
from taboo.deck.parser import parse_deck_response, strip_code_fences
from tests.fixtures.decks import deck_json


class TestStripCodeFences:
    """Test markdown code-block removal."""

    def test_plain_json_untouched(self) -> None:
        assert strip_code_fences('  [{"word": "a"}]  ') == '[{"word": "a"}]'

    def test_json_fence(self) -> None:
        text = 'Here you go:\n```json\n[1, 2]\n```\nEnjoy!'
        assert strip_code_fences(text) == "[1, 2]"

    def test_bare_fence(self) -> None:
        assert strip_code_fences("```\n[1]\n```") == "[1]"


class TestParseDeckResponse:
    """Test exact-count validation."""

    def test_valid_response(self) -> None:
        deck = parse_deck_response(deck_json(5, 3), word_count=5, taboo_word_count=3)
        assert len(deck) == 5
        assert deck[0].word == "Word 0"
        assert deck[4].taboo_words == ("T4-0", "T4-1", "T4-2")

    def test_fenced_response(self) -> None:
        text = f"```json\n{deck_json(2, 1)}\n```"
        deck = parse_deck_response(text, word_count=2, taboo_word_count=1)
        assert len(deck) == 2

    def test_zero_taboo_words(self) -> None:
        deck = parse_deck_response(deck_json(3, 0), word_count=3, taboo_word_count=0)
        assert all(card.taboo_words == () for card in deck)

    def test_invalid_json(self) -> None:
        with pytest.raises(ProviderError, match="not valid JSON"):
            parse_deck_response("Sorry, I can't help", 5, 3)

    def test_not_an_array(self) -> None:
        with pytest.raises(ProviderError, match="expected a JSON array"):
            parse_deck_response('{"word": "Ocean"}', 1, 0)

    @pytest.mark.parametrize("count", [4, 6])
    def test_wrong_word_count(self, count: int) -> None:
        """Short and long answers are both rejected; no partial deck."""
        with pytest.raises(ProviderError, match="expected array of 5 words"):
            parse_deck_response(deck_json(count, 3), 5, 3)

    def test_wrong_taboo_count(self) -> None:
        items = json.loads(deck_json(3, 3))
        items[1]["tabooWords"] = ["only", "two"]
        with pytest.raises(ProviderError, match="index 1: expected 3 taboo words"):
            parse_deck_response(json.dumps(items), 3, 3)

    def test_missing_taboo_words(self) -> None:
        with pytest.raises(ProviderError, match="index 0"):
            parse_deck_response('[{"word": "Ocean"}]', 1, 0)

    def test_non_object_item(self) -> None:
        with pytest.raises(ProviderError, match="expected an object"):
            parse_deck_response('["Ocean"]', 1, 0)

    def test_non_string_taboo_word(self) -> None:
        with pytest.raises(ProviderError, match="must be strings"):
            parse_deck_response('[{"word": "Ocean", "tabooWords": [1]}]', 1, 1)

    def test_missing_word(self) -> None:
        with pytest.raises(ProviderError, match="missing word"):
            parse_deck_response('[{"tabooWords": []}]', 1, 0)

    def test_blank_word(self) -> None:
        with pytest.raises(ProviderError, match="index 0"):
            parse_deck_response('[{"word": "  ", "tabooWords": []}]', 1, 0)

    def test_error_carries_help(self) -> None:
        with pytest.raises(ProviderError) as exc_info:
            parse_deck_response("[]", 1, 0)
        assert exc_info.value.error_code == "TB-DECK-001"
        assert any("--mock" in step for step in exc_info.value.how_to_fix)
