"""
Game data models.

Cards and decks are immutable once fetched; the session only ever moves
its own cursors over deck indices.

    Card      one word plus the words the clue-giver may not say
    Deck      ordered, fixed-length tuple of cards
    SessionConfig
              deck size, optional skip budget, optional time limit
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, field_validator

from taboo.core.exceptions import ConfigurationError

MAX_TABOO_WORDS = 10


class Difficulty(str, Enum):
    """How obscure the generated words are."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Event(str, Enum):
    """Inputs that drive a session."""

    CORRECT = "correct"
    SKIP = "skip"
    TICK = "tick"
    ABANDON = "abandon"


class EndReason(str, Enum):
    """Why a session reached its terminal state."""

    DECK_EXHAUSTED = "deck_exhausted"
    REVIEW_RESOLVED = "review_resolved"
    TIME_EXPIRED = "time_expired"
    ABANDONED = "abandoned"


class Card(BaseModel):
    """
    One word card.

    Serialises as {"word": ..., "tabooWords": [...]}, the shape the deck
    provider answers with.
    """

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    word: str = Field(..., min_length=1, description="Word to be guessed")
    taboo_words: Tuple[str, ...] = Field(
        default=(),
        alias="tabooWords",
        max_length=MAX_TABOO_WORDS,
        description="Words that may not be said while giving clues",
    )

    @field_validator("word")
    @classmethod
    def validate_word(cls, v: str) -> str:
        """Strip the word and reject blanks."""
        v = v.strip()
        if not v:
            raise ValueError("word cannot be empty")
        return v

    @field_validator("taboo_words")
    @classmethod
    def validate_taboo_words(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Strip each taboo word and reject blanks."""
        cleaned = tuple(w.strip() for w in v)
        if any(not w for w in cleaned):
            raise ValueError("taboo words cannot be empty")
        return cleaned

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the provider wire format."""
        return {"word": self.word, "tabooWords": list(self.taboo_words)}


class Deck:
    """
    Ordered, immutable sequence of cards.

    Supports len(), indexing and iteration. A deck is never empty.
    """

    __slots__ = ("_cards",)

    def __init__(self, cards: Sequence[Card]) -> None:
        if not cards:
            raise ValueError("A deck needs at least one card")
        self._cards: Tuple[Card, ...] = tuple(cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __getitem__(self, index: int) -> Card:
        return self._cards[index]

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Deck):
            return NotImplemented
        return self._cards == other._cards

    def __hash__(self) -> int:
        return hash(self._cards)

    def __repr__(self) -> str:
        return f"Deck({len(self._cards)} cards)"

    @property
    def cards(self) -> Tuple[Card, ...]:
        return self._cards

    def to_list(self) -> List[Dict[str, Any]]:
        """Convert to a JSON-ready list of cards."""
        return [card.to_dict() for card in self._cards]

    @classmethod
    def from_list(cls, items: Sequence[Dict[str, Any]]) -> "Deck":
        """Build a deck from wire-format dictionaries.

        Raises:
            pydantic.ValidationError: If any card is malformed
            ValueError: If the list is empty
        """
        return cls([Card.model_validate(item) for item in items])


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class SessionConfig:
    """
    Parameters fixed at session start.

    Attributes:
        deck_size: Number of cards in the deck (> 0)
        skip_budget: Skips allowed before forced review (None = unlimited)
        time_limit_seconds: Countdown length (None = no timer)
    """

    deck_size: int
    skip_budget: Optional[int] = None
    time_limit_seconds: Optional[int] = None

    def __post_init__(self) -> None:
        if not _is_int(self.deck_size) or self.deck_size <= 0:
            raise ConfigurationError(
                "Deck size must be a positive integer",
                field="deck_size",
                value=self.deck_size,
            )
        if self.skip_budget is not None and (
            not _is_int(self.skip_budget) or self.skip_budget < 0
        ):
            raise ConfigurationError(
                "Skip allowance must be zero or more",
                field="skip_budget",
                value=self.skip_budget,
            )
        if self.time_limit_seconds is not None and (
            not _is_int(self.time_limit_seconds) or self.time_limit_seconds <= 0
        ):
            raise ConfigurationError(
                "Time limit must be a positive number of seconds",
                field="time_limit_seconds",
                value=self.time_limit_seconds,
            )

    @property
    def unlimited_skips(self) -> bool:
        return self.skip_budget is None

    @property
    def timed(self) -> bool:
        return self.time_limit_seconds is not None
