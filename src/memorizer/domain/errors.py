"""Exception hierarchy for the memorizer package."""


class MemorizerError(Exception):
    """Base class for all memorizer errors."""


class InvalidCardError(MemorizerError, ValueError):
    """Raised when card content is missing or blank after normalization."""


class ScheduleRepairError(MemorizerError, ValueError):
    """A card timestamp cannot be read as a valid instant.

    Presentation code catches this to show a "needs repair" state
    instead of a schedule.
    """

    def __init__(self, field: str, value: object = None):
        self.field = field
        self.value = value
        detail = f" ({value!r})" if value is not None else ""
        super().__init__(f"Card needs schedule repair: invalid {field}{detail}")


class CardNotFoundError(MemorizerError, KeyError):
    """Raised when a card id is not present in the deck."""

    def __str__(self) -> str:
        return f"Card not found: {self.args[0]}"


class ReviewInFlightError(MemorizerError, RuntimeError):
    """Raised when a review for the same card is already being committed."""


class DeckStorageError(MemorizerError):
    """Raised when the deck file cannot be read or written."""


class NoSelectionError(MemorizerError, ValueError):
    """Raised when a multiple-choice review is submitted without a locked option."""
