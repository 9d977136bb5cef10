"""
Study Service — Application layer orchestrator.

Coordinates loading the deck, running the scheduler and quiz composer,
and persisting committed reviews.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from memorizer.application.config import AppConfig
from memorizer.application.deck_stats import (
    compute_deck_stats,
    count_upcoming_due_cards,
    due_cards,
)
from memorizer.application.quiz import compose_quiz_options
from memorizer.application.scheduler import create_card, preview_intervals, review_card
from memorizer.application.selection import QuizSession
from memorizer.domain.errors import (
    CardNotFoundError,
    NoSelectionError,
    ReviewInFlightError,
    ScheduleRepairError,
)
from memorizer.domain.models import Card, Deck, DeckStats, Rating, ReviewResult
from memorizer.domain.ports import DeckRepository

logger = logging.getLogger(__name__)


class StudyService:
    """
    Application service for a learner's study sessions.

    Depends on the DeckRepository abstraction, not a concrete store. At most
    one review per card may be committed at a time; the scheduler reads
    ``updated_at``/``reps`` at call time, so interleaved commits would
    double-count a rep.
    """

    def __init__(self, repository: DeckRepository, config: AppConfig | None = None):
        """
        Args:
            repository: The port used to load and save the deck.
            config: Study settings; defaults are used if not provided.
        """
        self._repo = repository
        self._config = config or AppConfig()
        self._in_flight: set[str] = set()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load_deck(self) -> Deck:
        return self._repo.load()

    def get_card(self, card_id: str, deck: Deck | None = None) -> Card:
        """
        Raises:
            ScheduleRepairError: If the card exists but its timestamps are malformed.
            CardNotFoundError: If no card has this id.
        """
        deck = deck or self.load_deck()
        for card in deck.cards:
            if card.id == card_id:
                return card
        for record in deck.repairs:
            if record.id == card_id:
                raise ScheduleRepairError(", ".join(record.invalid_timestamps()))
        raise CardNotFoundError(card_id)

    def due_queue(self, now: datetime) -> list[Card]:
        return due_cards(self.load_deck().cards, now)

    def next_due_card(self, now: datetime) -> Card | None:
        queue = self.due_queue(now)
        return queue[0] if queue else None

    def stats(self, now: datetime) -> DeckStats:
        deck = self.load_deck()
        return compute_deck_stats(deck.cards, now, deck.repairs)

    def upcoming_count(self, now: datetime) -> int:
        return count_upcoming_due_cards(
            self.load_deck().cards, now, self._config.upcoming_window_hours
        )

    def preview(self, card_id: str, now: datetime) -> dict[Rating, int]:
        card = self.get_card(card_id)
        return preview_intervals(card, max(now, card.updated_at))

    def quiz_for(self, card_id: str, now: datetime) -> QuizSession:
        """Fresh multiple-choice session for one card presentation."""
        deck = self.load_deck()
        card = self.get_card(card_id, deck)
        options = compose_quiz_options(
            card, deck.cards, self._config.quiz_seed, self._config.distractor_count
        )
        return QuizSession(options=options, card_id=card.id, card_updated_at=card.updated_at)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_card(self, word: str, meaning: str, now: datetime, notes: str | None = None) -> Card:
        deck = self.load_deck()
        card = create_card(word, meaning, now, notes)
        deck.cards.append(card)
        self._repo.save(deck)
        logger.info(f"Added card {card.id} ({card.word!r})")
        return card

    @contextmanager
    def _review_slot(self, card_id: str) -> Iterator[None]:
        with self._lock:
            if card_id in self._in_flight:
                raise ReviewInFlightError(f"A review for card {card_id} is already in progress")
            self._in_flight.add(card_id)
        try:
            yield
        finally:
            with self._lock:
                self._in_flight.discard(card_id)

    def record_review(self, card_id: str, rating: Rating, now: datetime) -> ReviewResult:
        """
        Commit one review and persist the updated card.

        Early reviews are allowed. A clock that reads earlier than the card's
        last review is pinned to ``updated_at`` so elapsed time never goes
        negative.
        """
        with self._review_slot(card_id):
            deck = self.load_deck()
            card = self.get_card(card_id, deck)
            result = review_card(card, rating, max(now, card.updated_at))

            deck.cards = [result.card if c is card else c for c in deck.cards]
            if deck.last_reviewed_at is None or result.card.updated_at > deck.last_reviewed_at:
                deck.last_reviewed_at = result.card.updated_at
            self._repo.save(deck)

        logger.info(
            f"Reviewed {card_id}: rating={Rating(rating).name} "
            f"interval={result.scheduled_days}d state={result.card.state.value}"
        )
        return result

    def record_quiz_review(
        self,
        card_id: str,
        session: QuizSession,
        requested_rating: object,
        now: datetime,
    ) -> ReviewResult:
        """
        Resolve the locked quiz pick into a rating and commit it.

        Raises:
            NoSelectionError: If nothing is locked, or the session was composed
                for another card or an earlier revision of this one.
        """
        card = self.get_card(card_id)
        if session.card_id != card_id or session.card_updated_at != card.updated_at:
            raise NoSelectionError(f"Quiz options are stale for card {card_id}; reload the quiz")
        rating = session.resolve_rating(requested_rating)
        session.busy = True
        try:
            return self.record_review(card_id, rating, now)
        finally:
            session.busy = False

    def repair_schedules(self, now: datetime) -> int:
        """Reset malformed timestamps to ``now``. Returns the number of cards repaired."""
        deck = self.load_deck()
        if not deck.repairs:
            return 0
        repaired = [record.repaired(now) for record in deck.repairs]
        deck.cards.extend(repaired)
        deck.repairs = []
        self._repo.save(deck)
        logger.info(f"Repaired schedules on {len(repaired)} card(s)")
        return len(repaired)
