# Domain Package
from .errors import (
    CardNotFoundError,
    DeckStorageError,
    InvalidCardError,
    MemorizerError,
    NoSelectionError,
    ReviewInFlightError,
    ScheduleRepairError,
)
from .models import (
    Card,
    Deck,
    DeckStats,
    PartOfSpeech,
    QuizOption,
    Rating,
    ReviewResult,
    ReviewState,
    StudyMode,
)
from .ports import DeckRepository

__all__ = [
    "Card",
    "Deck",
    "DeckStats",
    "PartOfSpeech",
    "QuizOption",
    "Rating",
    "ReviewResult",
    "ReviewState",
    "StudyMode",
    "DeckRepository",
    "MemorizerError",
    "InvalidCardError",
    "ScheduleRepairError",
    "CardNotFoundError",
    "ReviewInFlightError",
    "DeckStorageError",
    "NoSelectionError",
]
