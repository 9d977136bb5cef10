"""
Domain models for the memorizer core.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum


class Rating(IntEnum):
    """Learner-reported recall quality for one review."""

    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4


class ReviewState(str, Enum):
    LEARNING = "learning"
    REVIEW = "review"
    RELEARNING = "relearning"


class StudyMode(str, Enum):
    FLASHCARD = "flashcard"
    MULTIPLE_CHOICE = "multiple-choice"


class PartOfSpeech(str, Enum):
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Card:
    """
    A vocabulary entry under study.

    Attributes:
        id: Opaque identifier, assigned once and never reused.
        word: Short prompt text.
        meaning: Answer text shown on the back and in quizzes.
        difficulty: Resistance to stability growth, bounded [1, 10].
        stability: Days until recall probability decays to the reference threshold.
        state: Lifecycle state (learning, review, relearning).
        reps: Completed reviews.
        lapses: "Again" ratings ever recorded.
    """

    id: str
    word: str
    meaning: str
    created_at: datetime
    updated_at: datetime
    due_at: datetime
    difficulty: float
    stability: float
    state: ReviewState = ReviewState.LEARNING
    reps: int = 0
    lapses: int = 0
    notes: str | None = None


@dataclass(frozen=True)
class ReviewResult:
    """Outcome of one scheduler run: the new card value and its interval."""

    card: Card
    scheduled_days: int


@dataclass(frozen=True)
class QuizOption:
    """
    One multiple-choice option. Ephemeral, never persisted.

    `id` is unique within one option set; `card_id` may repeat.
    """

    id: str
    card_id: str
    text: str
    is_correct: bool


@dataclass
class DeckStats:
    total: int = 0
    due_now: int = 0
    learning: int = 0
    review: int = 0
    relearning: int = 0
    needs_repair: int = 0


@dataclass
class Deck:
    """
    A loaded card collection.

    `repairs` holds raw records whose timestamps could not be parsed; they
    are kept so a save round-trip never drops learner data.
    """

    cards: list[Card] = field(default_factory=list)
    repairs: list = field(default_factory=list)
    last_reviewed_at: datetime | None = None
