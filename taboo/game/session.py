"""
Card-sequencing and skip/review state machine.

Every transition goes through one pure function:

    new_state = reduce(state, event, config)

TabooSession wraps it as the single dispatch point for player actions
and timer ticks, and owns the countdown.

Traversal Modes
---------------

    ┌──────────────┐   budget exhausted on skip     ┌──────────────┐
    │   Primary    │ ─────────────────────────────→ │    Review    │
    │ (forward     │   deck exhausted, pool left    │ (rotate the  │
    │  through     │ ─────────────────────────────→ │  skipped     │
    │  unvisited)  │ ←───────────────────────────── │  pool)       │
    └──────────────┘   skipped card resolved        └──────────────┘

Primary
    CORRECT   count it, move to the next unvisited card
    SKIP      charge the budget, park the card in the skipped pool, move on;
              with no budget left, enter Review on this very card instead

Review
    CORRECT   resolve the card under the cursor; a card that had really
              been skipped refunds one unit of skip budget
    SKIP      rotate the cursor through the pool, no tally change

TICK counts the timer down and ends the session at zero whatever the mode.
ABANDON ends the session when the player quits. Once ended, every event
is ignored.

Parked Cards
------------
Resolving a genuinely skipped card during Review returns to Primary on
the card under the primary cursor, which stays there until the next
press. The session ends instead when the pool is empty and no unvisited
card lies ahead.
"""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from taboo.core.exceptions import InternalConsistencyError
from taboo.core.logging import get_logger
from taboo.game.models import Card, Deck, EndReason, Event, SessionConfig
from taboo.game.scoring import SessionSummary
from taboo.game.timer import CountdownTimer

logger = get_logger(__name__)

SKIP_LABEL = "Skip"
REVIEW_LABEL = "Review Skipped"
NEXT_SKIPPED_LABEL = "Next Skipped Card"


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SessionState:
    """
    Immutable snapshot of one session.

    Attributes:
        current_index: Primary traversal cursor into the deck
        visited: Indices that have been the primary target at least once
        skipped_pool: Deferred indices, unique, in the order they were skipped
        cycling_mode: True while reviewing the skipped pool
        cycle_cursor: Position in skipped_pool while reviewing
        correct_count: Cards answered correctly
        skip_count: Skip budget consumed (refunds lower it)
        ended: Terminal flag
        time_remaining_seconds: Countdown value (None when untimed)
        end_reason: Why the session ended
    """

    current_index: int = 0
    visited: FrozenSet[int] = field(default_factory=lambda: frozenset({0}))
    skipped_pool: Tuple[int, ...] = ()
    cycling_mode: bool = False
    cycle_cursor: int = 0
    correct_count: int = 0
    skip_count: int = 0
    ended: bool = False
    time_remaining_seconds: Optional[int] = None
    end_reason: Optional[EndReason] = None

    @classmethod
    def initial(cls, config: SessionConfig) -> "SessionState":
        """Fresh state on the first card of the deck."""
        return cls(time_remaining_seconds=config.time_limit_seconds)


def can_skip(state: SessionState, config: SessionConfig) -> bool:
    """True when a primary skip would still be charged to the budget."""
    return config.skip_budget is None or state.skip_count < config.skip_budget


def review_target(state: SessionState) -> int:
    """Deck index under the review cursor.

    Raises:
        InternalConsistencyError: If not reviewing or the cursor is out of range
    """
    if not state.cycling_mode:
        raise InternalConsistencyError("Review target requested outside review mode")
    if not 0 <= state.cycle_cursor < len(state.skipped_pool):
        raise InternalConsistencyError(
            f"Review cursor {state.cycle_cursor} outside skipped pool "
            f"of size {len(state.skipped_pool)}"
        )
    return state.skipped_pool[state.cycle_cursor]


def _normalize_cursor(cursor: int, pool: Tuple[int, ...]) -> int:
    """Keep the cursor inside the pool after the pool changes."""
    if 0 <= cursor < len(pool):
        return cursor
    return 0


def _with_pool(state: SessionState, pool: Tuple[int, ...], **changes) -> SessionState:
    """Replace the skipped pool and renormalise the review cursor."""
    cursor = changes.pop("cycle_cursor", state.cycle_cursor)
    return replace(
        state,
        skipped_pool=pool,
        cycle_cursor=_normalize_cursor(cursor, pool),
        **changes,
    )


def _end(state: SessionState, reason: EndReason) -> SessionState:
    return replace(state, ended=True, end_reason=reason)


def _has_unvisited_after(state: SessionState, config: SessionConfig) -> bool:
    return any(
        i not in state.visited
        for i in range(state.current_index + 1, config.deck_size)
    )


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def _advance(state: SessionState, config: SessionConfig) -> SessionState:
    """Move the primary cursor to the next unvisited card.

    With no unvisited card left, review the skipped pool if there is one,
    otherwise end the session.
    """
    for index in range(state.current_index + 1, config.deck_size):
        if index not in state.visited:
            return replace(
                state, current_index=index, visited=state.visited | {index}
            )

    if state.skipped_pool and not state.cycling_mode:
        return replace(state, cycling_mode=True, cycle_cursor=0)
    return _end(state, EndReason.DECK_EXHAUSTED)


def _mark_correct(state: SessionState, config: SessionConfig) -> SessionState:
    if not state.cycling_mode:
        state = replace(state, correct_count=state.correct_count + 1)
        return _advance(state, config)

    idx = review_target(state)
    was_current_card = idx == state.current_index
    pool = tuple(i for i in state.skipped_pool if i != idx)

    skip_count = state.skip_count
    if not was_current_card:
        # Refund the skip this card was charged; the tally never goes negative
        skip_count = max(0, skip_count - 1)

    state = _with_pool(
        state,
        pool,
        correct_count=state.correct_count + 1,
        skip_count=skip_count,
        cycle_cursor=0,
    )

    if was_current_card:
        if pool:
            return state
        return _advance(replace(state, cycling_mode=False), config)

    state = replace(state, cycling_mode=False)
    if not pool and not _has_unvisited_after(state, config):
        return _end(state, EndReason.REVIEW_RESOLVED)
    # Parked on the primary card until the next press
    return state


def _skip(state: SessionState, config: SessionConfig) -> SessionState:
    if state.cycling_mode:
        if not state.skipped_pool:
            return state
        review_target(state)
        return replace(
            state,
            cycle_cursor=(state.cycle_cursor + 1) % len(state.skipped_pool),
        )

    pool = state.skipped_pool
    if state.current_index not in pool:
        pool = pool + (state.current_index,)

    if not can_skip(state, config):
        # Forced review on this card; the budget is not charged again
        return _with_pool(state, pool, cycling_mode=True, cycle_cursor=0)

    state = _with_pool(state, pool, skip_count=state.skip_count + 1)
    return _advance(state, config)


def _tick(state: SessionState, config: SessionConfig) -> SessionState:
    if state.time_remaining_seconds is None:
        return state
    remaining = max(0, state.time_remaining_seconds - 1)
    state = replace(state, time_remaining_seconds=remaining)
    if remaining == 0:
        return _end(state, EndReason.TIME_EXPIRED)
    return state


def _abandon(state: SessionState, config: SessionConfig) -> SessionState:
    return _end(state, EndReason.ABANDONED)


_TRANSITIONS: Dict[Event, Callable[[SessionState, SessionConfig], SessionState]] = {
    Event.CORRECT: _mark_correct,
    Event.SKIP: _skip,
    Event.TICK: _tick,
    Event.ABANDON: _abandon,
}


def reduce(state: SessionState, event: Event, config: SessionConfig) -> SessionState:
    """
    Apply one event to a session state.

    Pure: the input state is never modified. Events on an ended session
    return the state unchanged.

    Args:
        state: Current state
        event: Player action or timer tick
        config: Session parameters

    Returns:
        The next state

    Raises:
        InternalConsistencyError: If the state violates a session invariant
    """
    if state.ended:
        return state
    return _TRANSITIONS[Event(event)](state, config)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


TimerFactory = Callable[[int, Callable[[], None], float], CountdownTimer]


class TabooSession:
    """
    One play-through of a deck.

    Events are applied one at a time under a lock, whether they come from
    the player or from the countdown thread. A finished session cancels
    its timer before the call that ended it returns.

    Attributes:
        deck: Cards for this session
        config: Deck size, skip budget and time limit
        session_id: Short identifier used in log lines
    """

    def __init__(
        self,
        deck: Deck,
        config: SessionConfig,
        *,
        tick_seconds: float = 1.0,
        timer_factory: TimerFactory = CountdownTimer,
        on_change: Optional[Callable[["TabooSession"], None]] = None,
        on_end: Optional[Callable[["TabooSession"], None]] = None,
    ) -> None:
        if len(deck) != config.deck_size:
            raise InternalConsistencyError(
                f"Deck has {len(deck)} cards but the session expects "
                f"{config.deck_size}"
            )

        self.deck = deck
        self.config = config
        self.session_id = uuid.uuid4().hex[:8]
        self.on_change = on_change
        self.on_end = on_end
        self._tick_seconds = tick_seconds
        self._timer_factory = timer_factory
        self._timer: Optional[CountdownTimer] = None
        self._lock = threading.RLock()
        self._state = SessionState.initial(config)
        self._started_at: Optional[float] = None
        self._ended_at: Optional[float] = None

    # -- lifecycle ---------------------------------------------------------

    def start(self) -> None:
        """Start the clock and, when a time limit is set, the countdown."""
        with self._lock:
            if self._started_at is not None or self._state.ended:
                return
            self._started_at = time.monotonic()
            logger.info(
                "Session started",
                session_id=self.session_id,
                deck_size=self.config.deck_size,
                skip_budget=self.config.skip_budget,
                time_limit=self.config.time_limit_seconds,
            )
            if self.config.time_limit_seconds is not None:
                self._timer = self._timer_factory(
                    self.config.time_limit_seconds, self.tick, self._tick_seconds
                )
                self._timer.start()

    def close(self) -> None:
        """Tear down the session. Ends it as abandoned if still running."""
        self.abandon()
        self._cancel_timer()

    def __enter__(self) -> "TabooSession":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -- events ------------------------------------------------------------

    def dispatch(self, event: Event) -> SessionState:
        """Apply one event and return the resulting state."""
        event = Event(event)
        with self._lock:
            before = self._state
            after = reduce(before, event, self.config)
            if after is before:
                return after
            self._state = after
            if event is not Event.TICK:
                logger.debug(
                    "Session transition",
                    session_id=self.session_id,
                    event=event.value,
                    index=after.current_index,
                    cycling=after.cycling_mode,
                    pool=list(after.skipped_pool),
                    correct=after.correct_count,
                    skips=after.skip_count,
                )
            if after.ended:
                self._finish()

        if self.on_change is not None:
            self.on_change(self)
        if after.ended and not before.ended and self.on_end is not None:
            self.on_end(self)
        return after

    def mark_correct(self) -> SessionState:
        return self.dispatch(Event.CORRECT)

    def skip(self) -> SessionState:
        return self.dispatch(Event.SKIP)

    def tick(self) -> SessionState:
        return self.dispatch(Event.TICK)

    def abandon(self) -> SessionState:
        return self.dispatch(Event.ABANDON)

    def _finish(self) -> None:
        """Runs under the lock on the transition into ended."""
        self._cancel_timer()
        self._ended_at = time.monotonic()
        logger.info(
            "Session ended",
            session_id=self.session_id,
            reason=self._state.end_reason.value if self._state.end_reason else None,
            correct=self._state.correct_count,
            skipped=self._state.skip_count,
        )

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()

    # -- views -------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def ended(self) -> bool:
        return self.state.ended

    @property
    def deck_size(self) -> int:
        return self.config.deck_size

    @property
    def current_deck_index(self) -> int:
        """Deck index of the card on screen."""
        state = self.state
        if state.cycling_mode:
            return review_target(state)
        return state.current_index

    @property
    def current_card(self) -> Card:
        return self.deck[self.current_deck_index]

    @property
    def progress(self) -> int:
        """1-based position of the primary cursor."""
        return self.state.current_index + 1

    @property
    def can_skip(self) -> bool:
        return can_skip(self.state, self.config)

    @property
    def skips_remaining(self) -> Optional[int]:
        if self.config.skip_budget is None:
            return None
        return self.config.skip_budget - self.state.skip_count

    @property
    def skip_label(self) -> str:
        state = self.state
        if state.cycling_mode:
            return NEXT_SKIPPED_LABEL
        if not can_skip(state, self.config) and state.skipped_pool:
            return REVIEW_LABEL
        return SKIP_LABEL

    @property
    def review_position(self) -> Optional[Tuple[int, int]]:
        """(1-based cursor, pool size) while reviewing, else None."""
        state = self.state
        if not state.cycling_mode:
            return None
        review_target(state)
        return state.cycle_cursor + 1, len(state.skipped_pool)

    @property
    def time_remaining(self) -> Optional[int]:
        return self.state.time_remaining_seconds

    @property
    def timer(self) -> Optional[CountdownTimer]:
        return self._timer

    def elapsed_seconds(self) -> float:
        with self._lock:
            if self._started_at is None:
                return 0.0
            end = self._ended_at if self._ended_at is not None else time.monotonic()
            return end - self._started_at

    def summary(self) -> SessionSummary:
        """Tallies for the summary screen."""
        state = self.state
        return SessionSummary.build(
            correct=state.correct_count,
            skipped=state.skip_count,
            deck_size=self.config.deck_size,
            end_reason=state.end_reason,
            elapsed_seconds=self.elapsed_seconds(),
        )
