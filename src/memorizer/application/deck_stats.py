"""
Deck statistics and due-queue ordering.

This is a pure computation module with no I/O.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from functools import cmp_to_key

from memorizer.application.utils.time import is_due, parse_instant
from memorizer.domain.constants import DEFAULT_UPCOMING_WINDOW_HOURS
from memorizer.domain.models import Card, DeckStats, ReviewState

_STATE_FIELDS = {
    ReviewState.LEARNING: "learning",
    ReviewState.REVIEW: "review",
    ReviewState.RELEARNING: "relearning",
}


def compute_deck_stats(
    cards: Iterable[Card],
    now: datetime,
    repairs: Sequence[object] = (),
) -> DeckStats:
    """
    Count cards by state and due-ness.

    Records that need schedule repair are counted as due: they must be
    surfaced to the learner rather than silently hidden.
    """
    stats = DeckStats()
    for card in cards:
        stats.total += 1
        if is_due(card.due_at, now):
            stats.due_now += 1
        state_field = _STATE_FIELDS.get(card.state)
        if state_field:
            setattr(stats, state_field, getattr(stats, state_field) + 1)

    stats.needs_repair = len(repairs)
    stats.total += stats.needs_repair
    stats.due_now += stats.needs_repair
    return stats


def _sort_instant(value: object) -> tuple[int, datetime | None]:
    # Malformed timestamps sort after every valid one.
    parsed = parse_instant(value)
    return (0, parsed) if parsed is not None else (1, None)


def compare_due_cards(a: Card, b: Card) -> int:
    """Order by due_at, then updated_at, then created_at, then id."""
    for attr in ("due_at", "updated_at", "created_at"):
        left = _sort_instant(getattr(a, attr))
        right = _sort_instant(getattr(b, attr))
        if left[0] != right[0]:
            return left[0] - right[0]
        if left[1] is not None and right[1] is not None and left[1] != right[1]:
            return -1 if left[1] < right[1] else 1
    if a.id == b.id:
        return 0
    return -1 if a.id < b.id else 1


def due_cards(cards: Iterable[Card], now: datetime) -> list[Card]:
    """Cards due at ``now`` in review-queue order."""
    return sorted((c for c in cards if is_due(c.due_at, now)), key=cmp_to_key(compare_due_cards))


def count_upcoming_due_cards(
    cards: Iterable[Card],
    now: datetime,
    hours: float = DEFAULT_UPCOMING_WINDOW_HOURS,
) -> int:
    """Cards that become due after ``now`` and within the next ``hours``."""
    current = parse_instant(now)
    if current is None:
        return 0
    if not isinstance(hours, (int, float)) or not hours > 0 or hours == float("inf"):
        hours = DEFAULT_UPCOMING_WINDOW_HOURS
    cutoff = current + timedelta(hours=hours)

    count = 0
    for card in cards:
        due = parse_instant(card.due_at)
        if due is not None and current < due <= cutoff:
            count += 1
    return count
