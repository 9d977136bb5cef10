"""Tests for interval/due labels and schedule status."""

from datetime import timedelta

import pytest

from memorizer.application.labels import (
    ScheduleStatus,
    format_due_label,
    format_interval_label,
    schedule_status,
)


@pytest.mark.parametrize(
    "days, label",
    [
        (0, "<1m"),
        (-3, "<1m"),
        (float("nan"), "<1m"),
        (5 / 1440, "5m"),
        (0.5, "12h"),
        (1, "1d"),
        (6, "6d"),
        (7, "1w"),
        (59, "8w"),
        (60, "2mo"),
        (364, "12mo"),
        (365, "1y"),
        (3650, "10y"),
    ],
)
def test_format_interval_label(days, label):
    assert format_interval_label(days) == label


class TestFormatDueLabel:
    @pytest.mark.parametrize(
        "offset, label",
        [
            (timedelta(0), "Due now"),
            (timedelta(seconds=45), "Due now"),
            (timedelta(seconds=-60), "Due now"),
            (timedelta(minutes=-30), "Overdue 30m"),
            (timedelta(hours=-3, minutes=-10), "Overdue 3h"),
            (timedelta(days=-2, hours=-5), "Overdue 2d"),
            (timedelta(minutes=30), "Due in 30m"),
            (timedelta(hours=4, minutes=1), "Due in 5h"),
            (timedelta(days=2, hours=1), "Due in 3d"),
        ],
    )
    def test_labels(self, now, offset, label):
        assert format_due_label(now + offset, now) == label

    def test_malformed(self, now):
        assert format_due_label("garbage", now) == "Due date unavailable"
        assert format_due_label(now, None) == "Due date unavailable"


class TestScheduleStatus:
    def test_due_and_scheduled(self, card_factory, now):
        assert schedule_status(card_factory(due_at=now), now) == ScheduleStatus.DUE
        later = card_factory(due_at=now + timedelta(days=1))
        assert schedule_status(later, now) == ScheduleStatus.SCHEDULED

    def test_needs_repair(self, card_factory, now):
        assert schedule_status(card_factory(due_at="tomorrow"), now) == ScheduleStatus.NEEDS_REPAIR
        assert schedule_status(card_factory(updated_at=None), now) == ScheduleStatus.NEEDS_REPAIR
