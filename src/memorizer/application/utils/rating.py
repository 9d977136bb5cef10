"""Lenient parsing of rating values that arrive from untyped sources."""

import math
import re

from memorizer.domain.constants import RATING_INTEGER_TOLERANCE
from memorizer.domain.models import Rating

_NUMERIC_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def parse_rating_value(value: object) -> float | None:
    """
    Read a number out of ``value``.

    Accepts ints, finite floats, and decimal strings (scientific notation
    included). Booleans, hex, ``"Infinity"``, NaN, ints too large for a
    float, and everything else yield None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not _NUMERIC_RE.match(text):
            return None
        try:
            parsed = float(text)
        except (OverflowError, ValueError):
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def coerce_rating(value: object) -> Rating | None:
    """Snap ``value`` to a Rating when it is within tolerance of 1-4, else None."""
    parsed = parse_rating_value(value)
    if parsed is None:
        return None
    nearest = round(parsed)
    if abs(parsed - nearest) > RATING_INTEGER_TOLERANCE:
        return None
    if not Rating.AGAIN <= nearest <= Rating.EASY:
        return None
    return Rating(nearest)
