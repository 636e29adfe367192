"""Play-screen logic: cards, the session state machine, timer and score."""

from taboo.game.models import (
    Card,
    Deck,
    Difficulty,
    EndReason,
    Event,
    SessionConfig,
)
from taboo.game.scoring import SessionSummary, percentage, summary_message
from taboo.game.session import SessionState, TabooSession, reduce
from taboo.game.timer import CountdownTimer, format_time, is_warning

__all__ = [
    "Card",
    "CountdownTimer",
    "Deck",
    "Difficulty",
    "EndReason",
    "Event",
    "SessionConfig",
    "SessionState",
    "SessionSummary",
    "TabooSession",
    "format_time",
    "is_warning",
    "percentage",
    "reduce",
    "summary_message",
]
