import math
import re

# Zero-width space, non-joiner, joiner, and BOM.
INVISIBLE_CHARACTERS = re.compile("[\u200b-\u200d\ufeff]")
# Non-whitespace C0/C1 control characters.
CONTROL_CHARACTERS = re.compile(r"[\x00-\x08\x0e-\x1b\x7f-\x84\x86-\x9f]")
_WHITESPACE_RUN = re.compile(r"\s+")


def _clamp_max_length(max_length: float) -> int:
    if not isinstance(max_length, (int, float)) or not math.isfinite(max_length):
        return 0
    return max(0, math.floor(max_length))


def collapse_whitespace(text: str) -> str:
    """Strip zero-width and control characters, then trim and collapse whitespace runs."""
    visible = CONTROL_CHARACTERS.sub("", INVISIBLE_CHARACTERS.sub("", text))
    return _WHITESPACE_RUN.sub(" ", visible.strip())


def normalize_bounded_text(value: object, max_length: float) -> str:
    if not isinstance(value, str):
        return ""
    return collapse_whitespace(value)[: _clamp_max_length(max_length)].rstrip()


def normalize_optional_bounded_text(value: object, max_length: float) -> str | None:
    normalized = normalize_bounded_text(value, max_length)
    return normalized or None
