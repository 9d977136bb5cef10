from datetime import datetime, timezone

import pytest

from memorizer.domain.models import Card, ReviewState

NOW = datetime(2026, 2, 24, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def card_factory():
    """Build review-state cards with sensible defaults; any field can be overridden."""

    def _make(card_id: str = "c1", word: str = "word", meaning: str = "meaning", **overrides):
        fields = dict(
            id=card_id,
            word=word,
            meaning=meaning,
            created_at=NOW,
            updated_at=NOW,
            due_at=NOW,
            state=ReviewState.REVIEW,
            reps=4,
            lapses=0,
            stability=8.0,
            difficulty=4.0,
        )
        fields.update(overrides)
        return Card(**fields)

    return _make


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Points Path.home() at a temp dir and clears MEMORIZER_* env vars."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in (
        "MEMORIZER_DECK_PATH",
        "MEMORIZER_DISTRACTOR_COUNT",
        "MEMORIZER_QUIZ_SEED",
        "MEMORIZER_UPCOMING_WINDOW_HOURS",
        "MEMORIZER_VERBOSE",
    ):
        monkeypatch.delenv(key, raising=False)
    return home
