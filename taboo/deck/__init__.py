"""Deck providers: generated decks from Claude, or the built-in word bank."""

from taboo.deck.mock import MockDeckProvider
from taboo.deck.parser import parse_deck_response
from taboo.deck.provider import (
    ClaudeDeckProvider,
    DeckProvider,
    DeckRequest,
    get_deck_provider,
)

__all__ = [
    "ClaudeDeckProvider",
    "DeckProvider",
    "DeckRequest",
    "MockDeckProvider",
    "get_deck_provider",
    "parse_deck_response",
]
