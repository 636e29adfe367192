"""
Parse and validate a generated deck.

The provider's answer is accepted only when it matches the request
exactly: a JSON array of `word_count` cards, each with a non-empty word
and exactly `taboo_word_count` taboo words. Anything else raises
ProviderError; a partial deck is never returned.
"""

import json
from typing import Any, List

from pydantic import ValidationError

from taboo.core.exceptions import ProviderError
from taboo.core.logging import get_logger
from taboo.game.models import Card, Deck

logger = get_logger(__name__)


def strip_code_fences(response: str) -> str:
    """Remove a surrounding markdown code block, if any."""
    response = response.strip()

    if "```json" in response:
        start = response.find("```json") + 7
        end = response.find("```", start)
        if end > start:
            return response[start:end].strip()
    elif "```" in response:
        start = response.find("```") + 3
        end = response.find("```", start)
        if end > start:
            return response[start:end].strip()

    return response


def _load_array(text: str) -> List[Any]:
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise ProviderError(f"Deck response is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ProviderError(
            f"Invalid response format: expected a JSON array, got {type(data).__name__}"
        )
    return data


def _parse_card(item: Any, index: int, taboo_word_count: int) -> Card:
    if not isinstance(item, dict):
        raise ProviderError(f"Invalid word format at index {index}: expected an object")

    taboo_words = item.get("tabooWords")
    if not isinstance(taboo_words, list) or len(taboo_words) != taboo_word_count:
        raise ProviderError(
            f"Invalid word format at index {index}: "
            f"expected {taboo_word_count} taboo words"
        )
    if not all(isinstance(w, str) for w in taboo_words):
        raise ProviderError(
            f"Invalid word format at index {index}: taboo words must be strings"
        )
    if not isinstance(item.get("word"), str):
        raise ProviderError(f"Invalid word format at index {index}: missing word")

    try:
        return Card.model_validate(item)
    except ValidationError as e:
        raise ProviderError(f"Invalid word format at index {index}: {e}") from e


def parse_deck_response(text: str, word_count: int, taboo_word_count: int) -> Deck:
    """
    Parse a provider answer into a Deck.

    Args:
        text: Raw provider text (may be wrapped in a ```json block)
        word_count: Exact number of cards required
        taboo_word_count: Exact number of taboo words per card

    Returns:
        Deck with exactly word_count cards

    Raises:
        ProviderError: If the answer is not parseable or the counts differ
    """
    items = _load_array(text)
    if len(items) != word_count:
        raise ProviderError(
            f"Invalid response format: expected array of {word_count} words, "
            f"got {len(items)}"
        )

    cards = [_parse_card(item, i, taboo_word_count) for i, item in enumerate(items)]
    logger.debug("Parsed deck", cards=len(cards), taboo_words=taboo_word_count)
    return Deck(cards)
