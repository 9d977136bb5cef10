"""
Human-readable interval and due labels, plus schedule health.

Pure presentation helpers; malformed timestamps degrade to a label, never
an exception.
"""

import math
from enum import Enum

from memorizer.application.utils.time import parse_instant
from memorizer.domain.constants import DUE_NOW_THRESHOLD_SECONDS
from memorizer.domain.models import Card

MINUTE_IN_DAYS = 1 / 1440
HOUR_IN_DAYS = 1 / 24
WEEK_IN_DAYS = 7
YEAR_IN_DAYS = 365

MINUTE_SECONDS = 60
HOUR_SECONDS = 60 * 60
DAY_SECONDS = 24 * 60 * 60


class ScheduleStatus(str, Enum):
    DUE = "due"
    SCHEDULED = "scheduled"
    NEEDS_REPAIR = "needs_repair"


def format_interval_label(days: float) -> str:
    """Compact label for an interval: ``<1m``, ``5m``, ``3h``, ``2d``, ``3w``, ``4mo``, ``1y``."""
    if not isinstance(days, (int, float)) or not math.isfinite(days) or days < MINUTE_IN_DAYS:
        return "<1m"
    if days < HOUR_IN_DAYS:
        return f"{max(1, round(days * 1440))}m"
    if days < 1:
        return f"{max(1, round(days * 24))}h"
    if days < WEEK_IN_DAYS:
        return f"{max(1, math.floor(days))}d"
    if days < 60:
        return f"{max(1, math.floor(days / WEEK_IN_DAYS))}w"
    if days >= YEAR_IN_DAYS:
        return f"{max(1, math.floor(days / YEAR_IN_DAYS))}y"
    return f"{max(1, math.floor(days / 30))}mo"


def format_due_label(due_at: object, now: object) -> str:
    due = parse_instant(due_at)
    current = parse_instant(now)
    if due is None or current is None:
        return "Due date unavailable"

    delta = (due - current).total_seconds()
    overdue = abs(delta)
    if overdue <= DUE_NOW_THRESHOLD_SECONDS:
        return "Due now"
    if delta < 0:
        if overdue < HOUR_SECONDS:
            return f"Overdue {max(1, math.floor(overdue / MINUTE_SECONDS))}m"
        if overdue < DAY_SECONDS:
            return f"Overdue {max(1, math.floor(overdue / HOUR_SECONDS))}h"
        return f"Overdue {max(1, math.floor(overdue / DAY_SECONDS))}d"
    if delta < HOUR_SECONDS:
        return f"Due in {math.ceil(delta / MINUTE_SECONDS)}m"
    if delta < DAY_SECONDS:
        return f"Due in {math.ceil(delta / HOUR_SECONDS)}h"
    return f"Due in {math.ceil(delta / DAY_SECONDS)}d"


def schedule_status(card: Card, now: object) -> ScheduleStatus:
    due = parse_instant(card.due_at)
    if due is None or parse_instant(card.updated_at) is None:
        return ScheduleStatus.NEEDS_REPAIR
    current = parse_instant(now)
    if current is None:
        return ScheduleStatus.NEEDS_REPAIR
    return ScheduleStatus.DUE if due <= current else ScheduleStatus.SCHEDULED
