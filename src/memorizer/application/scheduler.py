"""
FSRS-inspired review scheduler.

A pure computation module with no I/O: every function takes a card value
and returns a new one, so previews and commits share the same code path.
"""

import math
from dataclasses import replace
from datetime import datetime

from ulid import ULID

from memorizer.application.utils.text import (
    normalize_bounded_text,
    normalize_optional_bounded_text,
)
from memorizer.application.utils.time import add_days, days_between, require_instant
from memorizer.domain.constants import (
    DIFFICULTY_DELTAS,
    DIFFICULTY_MAX,
    DIFFICULTY_MIN,
    ELAPSED_BOOST_CAP,
    ELAPSED_BOOST_WEIGHT,
    GAIN_BASE_EASY,
    GAIN_BASE_GOOD,
    HARD_STABILITY_FACTOR,
    HARD_STABILITY_FLOOR,
    INITIAL_DIFFICULTY,
    INITIAL_STABILITY,
    LEARNING_INTERVALS,
    MEANING_MAX_LENGTH,
    MIN_STABILITY_PROGRESS,
    NOTES_MAX_LENGTH,
    OVERDUE_RETRIEVABILITY_PENALTY,
    RELEARNING_INTERVALS,
    STABILITY_MAX,
    STABILITY_MIN,
    WORD_MAX_LENGTH,
)
from memorizer.domain.errors import InvalidCardError
from memorizer.domain.models import Card, Rating, ReviewResult, ReviewState


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def generate_card_id() -> str:
    """Generate a stable card identifier using ULID."""
    return f"card_{ULID()}"


def create_card(word: str, meaning: str, now: datetime, notes: str | None = None) -> Card:
    """
    Create a fresh card in the learning state, due immediately.

    Raises:
        InvalidCardError: If word or meaning is blank after normalization.
    """
    clean_word = normalize_bounded_text(word, WORD_MAX_LENGTH)
    clean_meaning = normalize_bounded_text(meaning, MEANING_MAX_LENGTH)
    if not clean_word:
        raise InvalidCardError("word must not be blank")
    if not clean_meaning:
        raise InvalidCardError("meaning must not be blank")

    created_at = require_instant(now, "now")
    return Card(
        id=generate_card_id(),
        word=clean_word,
        meaning=clean_meaning,
        notes=normalize_optional_bounded_text(notes, NOTES_MAX_LENGTH),
        created_at=created_at,
        updated_at=created_at,
        due_at=created_at,
        difficulty=INITIAL_DIFFICULTY,
        stability=INITIAL_STABILITY,
        state=ReviewState.LEARNING,
        reps=0,
        lapses=0,
    )


def next_difficulty(difficulty: float, rating: Rating) -> float:
    """Lower difficulty means easier to remember."""
    return _clamp(difficulty + DIFFICULTY_DELTAS[rating], DIFFICULTY_MIN, DIFFICULTY_MAX)


def next_stability(
    stability: float,
    difficulty: float,
    rating: Rating,
    elapsed_days: int,
    was_review: bool,
) -> float:
    """
    Compute the post-review stability.

    Args:
        stability: Stability before this review.
        difficulty: Difficulty before this review.
        rating: Recall quality.
        elapsed_days: Whole days since the previous review.
        was_review: Whether the card was in the review state.
    """
    if rating == Rating.AGAIN:
        return STABILITY_MIN

    if rating == Rating.HARD:
        shrunk = max(HARD_STABILITY_FLOOR, stability * HARD_STABILITY_FACTOR)
        return _clamp(shrunk, STABILITY_MIN, STABILITY_MAX)

    # Reviewed later than the card's own forgetting horizon.
    penalty = OVERDUE_RETRIEVABILITY_PENALTY if was_review and elapsed_days > stability else 1.0
    gain_base = GAIN_BASE_EASY if rating == Rating.EASY else GAIN_BASE_GOOD
    difficulty_factor = (11 - difficulty) / 10
    elapsed_boost = 1 + min(elapsed_days / max(stability, 1), ELAPSED_BOOST_CAP) * ELAPSED_BOOST_WEIGHT
    growth = 1 + gain_base * difficulty_factor * penalty * elapsed_boost

    grown = max(stability + MIN_STABILITY_PROGRESS, stability * growth)
    return _clamp(grown, STABILITY_MIN, STABILITY_MAX)


def next_state(state: ReviewState, rating: Rating) -> ReviewState:
    if rating == Rating.AGAIN:
        return ReviewState.RELEARNING
    if state in (ReviewState.LEARNING, ReviewState.RELEARNING) and rating >= Rating.GOOD:
        return ReviewState.REVIEW
    return state


def select_interval(card: Card, rating: Rating, state: ReviewState, stability: float) -> int:
    """Pick the interval in whole days for the post-review card."""
    if card.reps == 0 or card.state == ReviewState.LEARNING:
        return LEARNING_INTERVALS[rating]

    if card.state == ReviewState.RELEARNING or state == ReviewState.RELEARNING:
        return RELEARNING_INTERVALS[rating]

    base = max(1, _round_half_up(stability))
    if rating == Rating.HARD:
        return max(1, base // 2)
    return base


def review_card(card: Card, rating: Rating, now: datetime) -> ReviewResult:
    """
    Apply one review to ``card`` and return the updated copy plus its interval.

    ``now`` must be a valid instant no earlier than ``card.updated_at``;
    the caller's time source is responsible for that. The input card is
    never mutated.
    """
    rating = Rating(rating)
    elapsed_days = days_between(card.updated_at, now)
    was_review = card.state == ReviewState.REVIEW

    difficulty = next_difficulty(card.difficulty, rating)
    stability = next_stability(card.stability, card.difficulty, rating, elapsed_days, was_review)
    state = next_state(card.state, rating)
    interval = select_interval(card, rating, state, stability)

    updated = replace(
        card,
        difficulty=difficulty,
        stability=stability,
        state=state,
        updated_at=now,
        due_at=add_days(now, interval),
        reps=card.reps + 1,
        lapses=card.lapses + (1 if rating == Rating.AGAIN else 0),
    )
    return ReviewResult(card=updated, scheduled_days=interval)


def preview_intervals(card: Card, now: datetime) -> dict[Rating, int]:
    """
    Interval each rating would schedule, without committing anything.

    Raises:
        ScheduleRepairError: If ``now``, ``card.updated_at`` or ``card.due_at``
            is not a valid aware instant.
    """
    require_instant(now, "now")
    require_instant(card.updated_at, "updated_at")
    require_instant(card.due_at, "due_at")
    return {rating: review_card(card, rating, now).scheduled_days for rating in Rating}
