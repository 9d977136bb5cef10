"""
Multiple-choice quiz composition.

Combines the correct meaning with ranked distractors into a fixed-size
option set whose order is a seeded, reproducible permutation.
"""

from collections.abc import Sequence
from typing import TypeVar

from memorizer.application.distractors import generate_distractors
from memorizer.application.utils.text import normalize_bounded_text
from memorizer.application.utils.time import format_instant, parse_instant
from memorizer.domain.constants import (
    DEFAULT_DISTRACTOR_COUNT,
    INVALID_MEANING_PLACEHOLDER,
    MEANING_MAX_LENGTH,
)
from memorizer.domain.models import Card, QuizOption

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 0x01000193
_GOLDEN_GAMMA = 0x9E3779B9
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def hash_string(value: str) -> int:
    """32-bit FNV-1a hash of the string's code points."""
    h = _FNV_OFFSET
    for ch in value:
        h ^= ord(ch)
        h = (h * _FNV_PRIME) & _MASK32
    return h


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class SeededRandom:
    """
    Small counter-based PRNG (mulberry32) keyed by a string seed.

    Same seed, same sequence; never touches global randomness.
    """

    def __init__(self, seed: str):
        self._state = hash_string(seed) or _GOLDEN_GAMMA

    def random(self) -> float:
        """Next float in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296

    def shuffled(self, items: Sequence[T]) -> list[T]:
        """Fisher-Yates permutation of a copy of ``items``."""
        values = list(items)
        for i in range(len(values) - 1, 0, -1):
            j = int(self.random() * (i + 1))
            values[i], values[j] = values[j], values[i]
        return values


def sanitize_option_text(value: object) -> str:
    """Display text for an option: collapsed, zero-width free, length capped."""
    return normalize_bounded_text(value, MEANING_MAX_LENGTH) or INVALID_MEANING_PLACEHOLDER


def _read_text(entry: object, attr: str) -> str | None:
    try:
        value = getattr(entry, attr)
    except Exception:
        return None
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def _updated_at_token(target: Card) -> str:
    try:
        updated_at = parse_instant(target.updated_at)
    except Exception:
        updated_at = None
    return format_instant(updated_at) if updated_at else "invalid-updated-at"


def _unique_id(base_id: str, position: int, used: set[str]) -> str:
    candidate = base_id
    suffix = position
    while candidate in used:
        candidate = f"{base_id}:{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def compose_quiz_options(
    target: Card,
    deck: Sequence[Card],
    seed: str,
    distractor_count: float = DEFAULT_DISTRACTOR_COUNT,
) -> list[QuizOption]:
    """
    Build the option set for one multiple-choice presentation.

    The seed is combined with the target's id and last-updated instant, so
    reviewing the card reseeds the quiz and invalidates old option ids.

    Args:
        target: Card being quizzed; its meaning is the correct option.
        deck: Full deck used as the distractor pool.
        seed: Caller-chosen seed string.
        distractor_count: Wrong options wanted; 0 yields only the correct one.

    Returns:
        Options in seeded presentation order, exactly one marked correct.
    """
    target_id = _read_text(target, "id") or "target-missing-id"
    option_seed = f"{seed}:{target_id}:{_updated_at_token(target)}"
    used_ids: set[str] = set()

    correct_text = sanitize_option_text(_read_text(target, "meaning"))
    options = [
        QuizOption(
            id=_unique_id(
                f"{target_id}:correct:{to_base36(hash_string(f'{option_seed}:correct'))}",
                0,
                used_ids,
            ),
            card_id=target_id,
            text=correct_text,
            is_correct=True,
        )
    ]

    for position, card in enumerate(generate_distractors(target, deck, distractor_count), start=1):
        card_id = _read_text(card, "id") or f"distractor-{position}"
        text = sanitize_option_text(_read_text(card, "meaning"))
        digest = to_base36(hash_string(f"{option_seed}:distractor:{card_id}:{text}"))
        options.append(
            QuizOption(
                id=_unique_id(f"{card_id}:distractor:{digest}", position, used_ids),
                card_id=card_id,
                text=text,
                is_correct=False,
            )
        )

    return SeededRandom(option_seed).shuffled(options)
