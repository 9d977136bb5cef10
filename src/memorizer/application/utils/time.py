"""Timestamp helpers.

All instants are timezone-aware ``datetime`` values. Parsing never raises:
malformed input yields ``None`` so callers can branch to a
"needs schedule repair" state.
"""

import re
from datetime import datetime, timedelta, timezone

from memorizer.domain.errors import ScheduleRepairError

ONE_DAY = timedelta(days=1)

_ISO_DATETIME_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2})T(\d{2}:\d{2}:\d{2})(?:\.(\d{1,6}))?([Zz]|[+-]\d{2}:\d{2})$"
)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def parse_instant(value: object) -> datetime | None:
    """Return an aware datetime for ``value``, or None if it is not a valid instant.

    Accepts aware datetimes and ISO-8601 strings with a mandatory timezone
    designator (``Z`` or ``+HH:MM``). Naive datetimes are rejected.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            return None
        return value

    if not isinstance(value, str):
        return None

    m = _ISO_DATETIME_RE.match(value.strip())
    if not m:
        return None

    date_part, time_part, fraction, offset = m.groups()
    fraction = (fraction or "").ljust(6, "0")
    if offset in ("Z", "z"):
        offset = "+00:00"

    try:
        return datetime.fromisoformat(f"{date_part}T{time_part}.{fraction}{offset}")
    except ValueError:
        # Shape matched but the calendar value is impossible (e.g. month 13).
        return None


def is_iso_datetime(value: object) -> bool:
    return isinstance(value, str) and parse_instant(value) is not None


def require_instant(value: object, field: str) -> datetime:
    """Like parse_instant, but raise ScheduleRepairError naming ``field``."""
    parsed = parse_instant(value)
    if parsed is None:
        raise ScheduleRepairError(field, value)
    return parsed


def format_instant(instant: datetime) -> str:
    """UTC ISO text with millisecond precision, e.g. ``2026-02-24T12:00:00.000Z``."""
    utc = instant.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S") + f".{utc.microsecond // 1000:03d}Z"


def days_between(start: datetime, end: datetime) -> int:
    """Whole days elapsed from ``start`` to ``end`` (floor)."""
    return (end - start) // ONE_DAY


def add_days(instant: datetime, days: int) -> datetime:
    return instant + timedelta(days=days)


def is_due(due_at: object, now: object) -> bool:
    due = parse_instant(due_at)
    current = parse_instant(now)
    if due is None or current is None:
        return False
    return due <= current
