"""
Distractor selection for multiple-choice review.

Ranks deck cards against a target by meaning similarity and returns
plausible wrong answers in rank order. Malformed deck entries are skipped
one by one; the batch never raises.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from memorizer.application.similarity import infer_part_of_speech, normalized_token_overlap
from memorizer.application.utils.text import collapse_whitespace
from memorizer.domain.constants import DEFAULT_DISTRACTOR_COUNT, PLACEHOLDER_MEANINGS
from memorizer.domain.models import Card, PartOfSpeech

logger = logging.getLogger(__name__)

_PLACEHOLDER_KEYS = frozenset(p.casefold() for p in PLACEHOLDER_MEANINGS)


@dataclass
class _Candidate:
    index: int
    card: Card
    meaning: str
    meaning_key: str


def meaning_key(meaning: str) -> str:
    """Case-folded, whitespace-collapsed meaning used for duplicate detection."""
    return collapse_whitespace(meaning).casefold()


def _is_usable_meaning(key: str) -> bool:
    return bool(key) and key not in _PLACEHOLDER_KEYS


def _read_candidate(index: int, entry: object) -> _Candidate | None:
    try:
        card_id = entry.id  # type: ignore[attr-defined]
        word = entry.word  # type: ignore[attr-defined]
        meaning = entry.meaning  # type: ignore[attr-defined]
    except Exception as e:
        logger.debug(f"Skipping deck entry #{index}: unreadable ({e!r})")
        return None

    if not isinstance(card_id, str) or not card_id.strip():
        logger.debug(f"Skipping deck entry #{index}: missing id")
        return None
    if not isinstance(word, str) or not isinstance(meaning, str):
        logger.debug(f"Skipping deck entry #{index} ({card_id}): non-text content")
        return None

    key = meaning_key(meaning)
    if not _is_usable_meaning(key):
        return None
    return _Candidate(index=index, card=entry, meaning=meaning, meaning_key=key)  # type: ignore[arg-type]


def _floor_count(count: float) -> int:
    try:
        return max(0, math.floor(count))
    except (TypeError, ValueError, OverflowError):
        return 0


def generate_distractors(
    target: Card,
    deck: Sequence[Card],
    count: float = DEFAULT_DISTRACTOR_COUNT,
) -> list[Card]:
    """
    Select up to ``count`` wrong answers for ``target`` from ``deck``.

    Ranking: meaning token overlap (descending), then part-of-speech match
    with the target, then original deck order. Two distractors never share
    a case-folded meaning. When the ranked pool runs short, remaining slots
    are backfilled in deck order from any unused valid candidate; shared
    card ids do not disqualify a candidate, only shared meanings do.

    Args:
        target: Card being quizzed.
        deck: Full deck, which may contain the target itself.
        count: Requested distractor count; floored, <= 0 yields [].

    Returns:
        Distractor cards in final rank order.
    """
    wanted = _floor_count(count)
    if wanted == 0:
        return []

    try:
        target_meaning = target.meaning
    except Exception:
        target_meaning = ""
    if not isinstance(target_meaning, str):
        target_meaning = ""
    target_key = meaning_key(target_meaning)
    target_pos = infer_part_of_speech(target_meaning)

    candidates: list[_Candidate] = []
    for index, entry in enumerate(deck):
        if entry is target:
            continue
        candidate = _read_candidate(index, entry)
        if candidate is None or candidate.meaning_key == target_key:
            continue
        candidates.append(candidate)

    scored: list[tuple[float, int, _Candidate]] = []
    for candidate in candidates:
        overlap = normalized_token_overlap(target_meaning, candidate.meaning)
        pos_match = int(
            target_pos != PartOfSpeech.UNKNOWN
            and infer_part_of_speech(candidate.meaning) == target_pos
        )
        if overlap > 0 or pos_match:
            scored.append((overlap, pos_match, candidate))

    scored.sort(key=lambda item: (-item[0], -item[1], item[2].index))

    selected: list[_Candidate] = []
    seen_keys: set[str] = set()
    for _, _, candidate in scored:
        if len(selected) >= wanted:
            break
        if candidate.meaning_key in seen_keys:
            continue
        seen_keys.add(candidate.meaning_key)
        selected.append(candidate)

    if len(selected) < wanted:
        used = {c.index for c in selected}
        for candidate in candidates:
            if len(selected) >= wanted:
                break
            if candidate.index in used or candidate.meaning_key in seen_keys:
                continue
            seen_keys.add(candidate.meaning_key)
            selected.append(candidate)

    return [c.card for c in selected]
