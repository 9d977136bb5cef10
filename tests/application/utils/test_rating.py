"""Tests for memorizer.application.utils.rating."""

import pytest

from memorizer.application.utils.rating import coerce_rating, parse_rating_value
from memorizer.domain.models import Rating


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, Rating.AGAIN),
        (4, Rating.EASY),
        ("2", Rating.HARD),
        (" 3 ", Rating.GOOD),
        ("4e0", Rating.EASY),
        ("+4.0", Rating.EASY),
        (4 - 1e-7, Rating.EASY),
        (2.00005, Rating.HARD),
        (3.99995, Rating.EASY),
        (Rating.HARD, Rating.HARD),
    ],
)
def test_coerce_accepts_near_integers(value, expected):
    assert coerce_rating(value) == expected


@pytest.mark.parametrize(
    "value",
    [
        0,
        5,
        -1,
        2.5,
        2.0002,
        3.999,
        "0x4",
        "Infinity",
        "-Infinity",
        "NaN",
        float("nan"),
        float("inf"),
        "",
        "good",
        None,
        True,
        False,
        [3],
        10**400,
        -(10**400),
    ],
)
def test_coerce_rejects_everything_else(value):
    assert coerce_rating(value) is None


def test_parse_rating_value():
    assert parse_rating_value("1.5") == 1.5
    assert parse_rating_value(".5") == 0.5
    assert parse_rating_value("1e400") is None
    assert parse_rating_value(True) is None


def test_parse_huge_int_is_unreadable():
    assert parse_rating_value(10**400) is None
    assert parse_rating_value("1" * 400) is None
