"""
Lexical similarity heuristics for ranking quiz distractors.

Deterministic and dependency free: tokens are Unicode word runs, so
non-Latin scripts pass through intact (no stemming of any kind).
"""

import unicodedata

from memorizer.domain.models import PartOfSpeech

STOP_WORDS = frozenset(
    {
        "a", "an", "the", "to", "of", "for", "on", "in", "at", "from",
        "by", "with", "and", "or", "that", "this", "is", "are", "be",
    }
)

VERB_LEADS = ("to", "be", "become")
NOUN_LEADS = ("a", "an", "the", "someone", "something")
ADJECTIVE_SUFFIXES = ("ous", "ive", "able", "ible", "al", "ic", "ish", "less", "ful", "ary")
ADVERB_SUFFIX = "ly"
# Common -ly words that are not adverbs.
NOT_ADVERBS = frozenset({"family", "only", "reply", "supply", "apply", "belly", "jelly", "ally"})

_SEPARATOR_CATEGORIES = ("P", "S", "Z")


def _is_separator(ch: str) -> bool:
    category = unicodedata.category(ch)
    return ch.isspace() or ch == "_" or category == "Cc" or category[0] in _SEPARATOR_CATEGORIES


def _words(text: str) -> list[str]:
    """
    Case-folded word runs. Combining marks stay attached to their base
    letters, so scripts such as Devanagari or Thai are not split apart.
    """
    words: list[str] = []
    current: list[str] = []
    for ch in text.casefold():
        if _is_separator(ch):
            if current:
                words.append("".join(current))
                current = []
        elif unicodedata.category(ch) != "Cf":
            current.append(ch)
    if current:
        words.append("".join(current))
    return words


def tokenize(text: str) -> list[str]:
    """Case-folded content tokens: stop words and single ASCII characters dropped."""
    return [
        token
        for token in _words(text)
        if token not in STOP_WORDS and not (len(token) == 1 and token.isascii())
    ]


def normalized_token_overlap(left: str, right: str) -> float:
    """
    Jaccard ratio of distinct tokens shared by both strings.

    Returns 0.0 when either side yields no tokens.
    """
    a = set(tokenize(left))
    b = set(tokenize(right))
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def _is_adverb(token: str) -> bool:
    return len(token) > 3 and token.endswith(ADVERB_SUFFIX) and token not in NOT_ADVERBS


def _is_adjective(token: str) -> bool:
    return any(
        token.endswith(suffix) and len(token) >= len(suffix) + 3 for suffix in ADJECTIVE_SUFFIXES
    )


def infer_part_of_speech(meaning: str) -> PartOfSpeech:
    """
    Best-effort part-of-speech tag for a meaning.

    An infinitive lead ("to ...") marks a verb. Otherwise adverb and
    adjective suffixes are counted over every token; the larger count wins
    and a tie yields UNKNOWN. Article leads mark a noun when no suffix
    signal is present.
    """
    words = _words(meaning)
    if not words:
        return PartOfSpeech.UNKNOWN

    if words[0] in VERB_LEADS and len(words) > 1:
        return PartOfSpeech.VERB

    adverbs = sum(1 for w in words if _is_adverb(w))
    adjectives = sum(1 for w in words if not _is_adverb(w) and _is_adjective(w))
    if adverbs > adjectives:
        return PartOfSpeech.ADVERB
    if adjectives > adverbs:
        return PartOfSpeech.ADJECTIVE
    if adverbs:
        return PartOfSpeech.UNKNOWN

    if words[0] in NOUN_LEADS and len(words) > 1:
        return PartOfSpeech.NOUN
    return PartOfSpeech.UNKNOWN
