"""
Deck builders for Taboo tests.

Usage Example
-------------
    from tests.fixtures.decks import build_deck, deck_json

    deck = build_deck(5)                  # word0 .. word4
    text = deck_json(5, taboo_count=3)    # what the provider answers with
"""

import json

from taboo.game.models import Card, Deck


def build_deck(size: int, taboo_count: int = 2) -> Deck:
    """Deck of `size` cards named word0, word1, ..."""
    return Deck(
        [
            Card(
                word=f"word{i}",
                taboo_words=tuple(f"taboo{i}-{j}" for j in range(taboo_count)),
            )
            for i in range(size)
        ]
    )


def deck_json(word_count: int, taboo_count: int) -> str:
    """A provider answer with exactly the requested counts."""
    return json.dumps(
        [
            {
                "word": f"Word {i}",
                "tabooWords": [f"T{i}-{j}" for j in range(taboo_count)],
            }
            for i in range(word_count)
        ]
    )
