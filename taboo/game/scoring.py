"""Score and summary for a finished session."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from taboo.game.models import EndReason

# (minimum percentage, message), checked top-down
MESSAGE_BANDS = (
    (80, "Outstanding performance!"),
    (60, "Great job!"),
    (40, "Good effort!"),
    (0, "Keep practicing!"),
)


def percentage(correct: int, deck_size: int) -> int:
    """Percentage of the deck answered correctly, rounded half up.

    Integer arithmetic avoids float rounding at exact halves (1/8 -> 13).
    """
    if deck_size <= 0:
        raise ValueError("deck_size must be positive")
    return (correct * 200 + deck_size) // (2 * deck_size)


def summary_message(pct: int) -> str:
    """Encouragement line for a percentage."""
    for threshold, message in MESSAGE_BANDS:
        if pct >= threshold:
            return message
    return MESSAGE_BANDS[-1][1]


@dataclass(frozen=True)
class SessionSummary:
    """Terminal tallies of one session.

    Attributes:
        correct: Cards answered correctly
        skipped: Skips still charged against the player
        deck_size: Number of cards in the deck
        percentage: Rounded success rate
        message: Encouragement line for the percentage
        end_reason: Why the session ended (None while still running)
        elapsed_seconds: Wall-clock play time
    """

    correct: int
    skipped: int
    deck_size: int
    percentage: int
    message: str
    end_reason: Optional[EndReason] = None
    elapsed_seconds: float = 0.0

    @classmethod
    def build(
        cls,
        correct: int,
        skipped: int,
        deck_size: int,
        end_reason: Optional[EndReason] = None,
        elapsed_seconds: float = 0.0,
    ) -> "SessionSummary":
        pct = percentage(correct, deck_size)
        return cls(
            correct=correct,
            skipped=skipped,
            deck_size=deck_size,
            percentage=pct,
            message=summary_message(pct),
            end_reason=end_reason,
            elapsed_seconds=round(elapsed_seconds, 1),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["end_reason"] = self.end_reason.value if self.end_reason else None
        return data
