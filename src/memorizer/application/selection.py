"""
Quiz selection locking and rating resolution.

None of these functions raise on malformed option ids or ratings: the
review-recording path must always be completable, so bad values fall
back to safe defaults.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from memorizer.application.utils.rating import coerce_rating
from memorizer.domain.errors import NoSelectionError
from memorizer.domain.models import QuizOption, Rating, StudyMode


def _option_id(option: object) -> str | None:
    try:
        value = option.id  # type: ignore[attr-defined]
    except Exception:
        return None
    return value if isinstance(value, str) else None


def has_valid_quiz_selection(selected_id: object, options: Sequence[QuizOption]) -> bool:
    """True if ``selected_id`` (trimmed, non-empty) matches a trimmed option id."""
    if not isinstance(selected_id, str):
        return False
    wanted = selected_id.strip()
    if not wanted:
        return False
    for option in options:
        option_id = _option_id(option)
        if option_id is not None and option_id.strip() == wanted:
            return True
    return False


def find_quiz_option_by_id(options: Sequence[QuizOption], option_id: object) -> QuizOption | None:
    """
    Look up an option by id.

    An exact match always wins; the trimmed comparison is only a fallback,
    so a trim collision can never shadow the exact option.
    """
    if not isinstance(option_id, str) or not option_id.strip():
        return None

    for option in options:
        if _option_id(option) == option_id:
            return option

    wanted = option_id.strip()
    for option in options:
        candidate = _option_id(option)
        if candidate is not None and candidate.strip() == wanted:
            return option
    return None


def resolve_locked_quiz_selection(
    options: Sequence[QuizOption],
    current_locked_id: str | None,
    requested_id: str | None,
) -> str | None:
    """
    Return the id that should be locked after a selection request.

    A still-valid lock never changes. A stale lock (e.g. after a reseed) is
    replaced by a valid request; with neither valid there is no selection.
    """
    if has_valid_quiz_selection(current_locked_id, options):
        return current_locked_id
    if has_valid_quiz_selection(requested_id, options):
        return requested_id
    return None


def resolve_multiple_choice_rating(rating: object, was_selection_correct: bool) -> Rating:
    """
    Effective rating for a multiple-choice review.

    A wrong pick is always a full lapse (Again). For a correct pick the
    requested rating is normalized; anything unreadable becomes Good.
    """
    if not was_selection_correct:
        return Rating.AGAIN
    return coerce_rating(rating) or Rating.GOOD


def is_study_mode_switch_locked(mode: StudyMode | str, has_selection: bool, is_busy: bool) -> bool:
    if is_busy:
        return True
    return mode == StudyMode.MULTIPLE_CHOICE and bool(has_selection)


@dataclass
class QuizSession:
    """
    Locked-selection state for one active multiple-choice review.

    Owned by the presentation layer for the lifetime of a single card
    presentation; replace ``options`` via ``reseed`` when the card changes.
    ``card_id`` and ``card_updated_at`` record which card revision the
    options were composed for.
    """

    options: list[QuizOption] = field(default_factory=list)
    locked_id: str | None = None
    busy: bool = False
    card_id: str | None = None
    card_updated_at: datetime | None = None

    def select(self, option_id: str | None) -> str | None:
        self.locked_id = resolve_locked_quiz_selection(self.options, self.locked_id, option_id)
        return self.locked_id

    def reseed(self, options: list[QuizOption], card_updated_at: datetime | None = None) -> None:
        self.options = options
        if card_updated_at is not None:
            self.card_updated_at = card_updated_at
        if not has_valid_quiz_selection(self.locked_id, options):
            self.locked_id = None

    @property
    def selected_option(self) -> QuizOption | None:
        return find_quiz_option_by_id(self.options, self.locked_id)

    @property
    def has_selection(self) -> bool:
        return self.selected_option is not None

    def resolve_rating(self, requested: object) -> Rating:
        option = self.selected_option
        if option is None:
            raise NoSelectionError("Pick an option before rating this card")
        return resolve_multiple_choice_rating(requested, option.is_correct)

    def mode_switch_locked(self, mode: StudyMode | str) -> bool:
        return is_study_mode_switch_locked(mode, self.has_selection, self.busy)
