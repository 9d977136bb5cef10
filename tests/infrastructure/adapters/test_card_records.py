"""Tests for the CardRecord boundary model."""

import pytest
from pydantic import ValidationError

from memorizer.domain.errors import ScheduleRepairError
from memorizer.domain.models import ReviewState
from memorizer.infrastructure.adapters.card_records import CardRecord

VALID = {
    "id": "card_1",
    "word": "anchor",
    "meaning": "to fix firmly in place",
    "created_at": "2026-02-20T08:00:00.000Z",
    "updated_at": "2026-02-24T12:00:00.000Z",
    "due_at": "2026-02-26T12:00:00.000Z",
    "state": "review",
    "reps": 3,
    "lapses": 1,
    "difficulty": 4.5,
    "stability": 2.0,
}


def test_valid_record_to_card(now):
    card = CardRecord.model_validate(VALID).to_card()
    assert card.id == "card_1"
    assert card.state == ReviewState.REVIEW
    assert card.updated_at == now
    assert card.reps == 3


def test_round_trip_through_card():
    record = CardRecord.model_validate(VALID)
    assert CardRecord.from_card(record.to_card()).to_dict() == record.to_dict()


def test_to_dict_omits_missing_notes():
    assert "notes" not in CardRecord.model_validate(VALID).to_dict()


@pytest.mark.parametrize(
    "field, value",
    [("id", "   "), ("id", None), ("word", ""), ("meaning", "\u200b "), ("meaning", 12)],
)
def test_unusable_content_rejected(field, value):
    with pytest.raises(ValidationError):
        CardRecord.model_validate({**VALID, field: value})


def test_text_is_normalized():
    record = CardRecord.model_validate(
        {**VALID, "word": "  an  chor ", "meaning": "x" * 500, "notes": "   "}
    )
    assert record.word == "an chor"
    assert len(record.meaning) == 180
    assert record.notes is None


@pytest.mark.parametrize(
    "field, raw, expected",
    [
        ("difficulty", 42, 10.0),
        ("difficulty", "nan", 5.0),
        ("difficulty", None, 5.0),
        ("stability", -3, 0.1),
        ("stability", 1e9, 3650.0),
        ("reps", -2, 0),
        ("reps", 2.7, 2),
        ("lapses", True, 0),
    ],
)
def test_numbers_are_clamped(field, raw, expected):
    record = CardRecord.model_validate({**VALID, field: raw})
    assert getattr(record, field) == expected


def test_unknown_state_becomes_learning():
    assert CardRecord.model_validate({**VALID, "state": "suspended"}).state == ReviewState.LEARNING


def test_malformed_timestamps_need_repair(now):
    record = CardRecord.model_validate({**VALID, "updated_at": "yesterday", "due_at": None})
    assert record.needs_repair
    assert record.invalid_timestamps() == ["updated_at", "due_at"]
    with pytest.raises(ScheduleRepairError, match="updated_at"):
        record.to_card()

    repaired = record.repaired(now)
    assert repaired.updated_at == now
    assert repaired.due_at == now
    assert repaired.created_at == CardRecord.model_validate(VALID).to_card().created_at


def test_repair_forces_due_now(now):
    record = CardRecord.model_validate({**VALID, "created_at": "bad"})
    repaired = record.repaired(now)
    assert repaired.created_at == now
    assert repaired.due_at == now
