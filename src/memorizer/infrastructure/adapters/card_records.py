"""
Boundary adapter between loosely-typed stored records and the typed core.

Everything that reads untrusted runtime values lives here, so the core
engines can keep a narrow, typed contract.
"""

import logging
import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from memorizer.application.utils.text import (
    normalize_bounded_text,
    normalize_optional_bounded_text,
)
from memorizer.application.utils.time import format_instant, parse_instant, require_instant
from memorizer.domain.constants import (
    DIFFICULTY_MAX,
    DIFFICULTY_MIN,
    INITIAL_DIFFICULTY,
    INITIAL_STABILITY,
    MEANING_MAX_LENGTH,
    NOTES_MAX_LENGTH,
    STABILITY_MAX,
    STABILITY_MIN,
    WORD_MAX_LENGTH,
)
from memorizer.domain.models import Card, ReviewState

logger = logging.getLogger(__name__)

TIMESTAMP_FIELDS = ("created_at", "updated_at", "due_at")


def _finite_or(value: Any, fallback: float) -> float:
    if isinstance(value, bool):
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    return number if math.isfinite(number) else fallback


class CardRecord(BaseModel):
    """
    A stored card as read from disk.

    Content fields are validated strictly (a record without a usable id,
    word or meaning is rejected). Memory-state numbers are clamped into
    range. Timestamps are kept raw: a malformed timestamp marks the record
    as needing schedule repair instead of failing the load.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    word: str
    meaning: str
    notes: str | None = None

    created_at: Any = None
    updated_at: Any = None
    due_at: Any = None

    state: ReviewState = ReviewState.LEARNING
    reps: int = 0
    lapses: int = 0
    difficulty: float = INITIAL_DIFFICULTY
    stability: float = INITIAL_STABILITY

    @field_validator("id", mode="after")
    @classmethod
    def require_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("id must not be blank")
        return v

    @field_validator("word", mode="after")
    @classmethod
    def require_word(cls, v: str) -> str:
        v = normalize_bounded_text(v, WORD_MAX_LENGTH)
        if not v:
            raise ValueError("word must not be blank")
        return v

    @field_validator("meaning", mode="after")
    @classmethod
    def require_meaning(cls, v: str) -> str:
        v = normalize_bounded_text(v, MEANING_MAX_LENGTH)
        if not v:
            raise ValueError("meaning must not be blank")
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def clean_notes(cls, v: Any) -> str | None:
        return normalize_optional_bounded_text(v, NOTES_MAX_LENGTH)

    @field_validator("state", mode="before")
    @classmethod
    def known_state(cls, v: Any) -> ReviewState:
        try:
            return ReviewState(v)
        except ValueError:
            logger.warning(f"Unknown review state {v!r}; treating card as learning")
            return ReviewState.LEARNING

    @field_validator("reps", "lapses", mode="before")
    @classmethod
    def non_negative_count(cls, v: Any) -> int:
        return max(0, math.floor(_finite_or(v, 0.0)))

    @field_validator("difficulty", mode="before")
    @classmethod
    def bounded_difficulty(cls, v: Any) -> float:
        return min(DIFFICULTY_MAX, max(DIFFICULTY_MIN, _finite_or(v, INITIAL_DIFFICULTY)))

    @field_validator("stability", mode="before")
    @classmethod
    def bounded_stability(cls, v: Any) -> float:
        return min(STABILITY_MAX, max(STABILITY_MIN, _finite_or(v, INITIAL_STABILITY)))

    def invalid_timestamps(self) -> list[str]:
        return [name for name in TIMESTAMP_FIELDS if parse_instant(getattr(self, name)) is None]

    @property
    def needs_repair(self) -> bool:
        return bool(self.invalid_timestamps())

    def to_card(self) -> Card:
        """
        Raises:
            ScheduleRepairError: If any timestamp is malformed.
        """
        return Card(
            id=self.id,
            word=self.word,
            meaning=self.meaning,
            notes=self.notes,
            created_at=require_instant(self.created_at, "created_at"),
            updated_at=require_instant(self.updated_at, "updated_at"),
            due_at=require_instant(self.due_at, "due_at"),
            state=self.state,
            reps=self.reps,
            lapses=self.lapses,
            difficulty=self.difficulty,
            stability=self.stability,
        )

    def repaired(self, now: datetime) -> Card:
        """Card with every malformed timestamp reset to ``now`` (due immediately)."""
        fixes = {name: format_instant(now) for name in self.invalid_timestamps()}
        if fixes:
            logger.info(f"Repairing {', '.join(fixes)} on card {self.id}")
            fixes["due_at"] = format_instant(now)
        return self.model_copy(update=fixes).to_card()

    @classmethod
    def from_card(cls, card: Card) -> "CardRecord":
        return cls(
            id=card.id,
            word=card.word,
            meaning=card.meaning,
            notes=card.notes,
            created_at=format_instant(card.created_at),
            updated_at=format_instant(card.updated_at),
            due_at=format_instant(card.due_at),
            state=card.state,
            reps=card.reps,
            lapses=card.lapses,
            difficulty=card.difficulty,
            stability=card.stability,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
