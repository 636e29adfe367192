"""
Fixture modules for Taboo tests.

Modules
-------
- decks: Deck builders and provider-format JSON
- timers: Timer stand-in that never starts a thread
"""

from tests.fixtures.decks import build_deck, deck_json
from tests.fixtures.timers import FakeTimer

__all__ = ["FakeTimer", "build_deck", "deck_json"]
