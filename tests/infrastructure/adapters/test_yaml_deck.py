"""Tests for the YAML deck repository."""

from datetime import timedelta

import pytest
import yaml

from memorizer.application.scheduler import review_card
from memorizer.domain.errors import DeckStorageError
from memorizer.domain.models import Deck, Rating
from memorizer.infrastructure.adapters.yaml_deck import YamlDeckRepository


@pytest.fixture
def deck_file(tmp_path):
    return tmp_path / "decks" / "deck.yaml"


def test_missing_file_is_empty_deck(deck_file):
    deck = YamlDeckRepository(deck_file).load()
    assert deck.cards == []
    assert deck.repairs == []
    assert deck.last_reviewed_at is None


def test_save_then_load(deck_file, card_factory, now):
    repo = YamlDeckRepository(deck_file)
    card = card_factory("c1", "anchor", "to fix firmly in place", notes="nautical")
    reviewed = review_card(card, Rating.GOOD, now + timedelta(days=8)).card
    repo.save(Deck(cards=[reviewed, card_factory("c2")], last_reviewed_at=reviewed.updated_at))

    loaded = repo.load()
    assert loaded.cards[0] == reviewed
    assert loaded.cards[1].id == "c2"
    assert loaded.last_reviewed_at == reviewed.updated_at

    data = yaml.safe_load(deck_file.read_text())
    assert data["version"] == 1
    assert data["cards"][0]["state"] == "review"
    assert data["cards"][0]["due_at"].endswith("Z")


def test_save_leaves_no_temp_files(deck_file, card_factory):
    YamlDeckRepository(deck_file).save(Deck(cards=[card_factory()]))
    assert [p.name for p in deck_file.parent.iterdir()] == ["deck.yaml"]


def test_malformed_records_skipped(deck_file):
    deck_file.parent.mkdir(parents=True)
    deck_file.write_text(
        yaml.safe_dump(
            {
                "cards": [
                    "just a string",
                    {"id": "no-meaning", "word": "x"},
                    {
                        "id": "ok",
                        "word": "pin",
                        "meaning": "to fasten with a pin",
                        "created_at": "2026-02-24T12:00:00Z",
                        "updated_at": "2026-02-24T12:00:00Z",
                        "due_at": "2026-02-24T12:00:00Z",
                    },
                ]
            }
        )
    )
    deck = YamlDeckRepository(deck_file).load()
    assert [c.id for c in deck.cards] == ["ok"]


def test_bad_timestamps_kept_for_repair(deck_file):
    deck_file.parent.mkdir(parents=True)
    record = {
        "id": "broken",
        "word": "anchor",
        "meaning": "to fix firmly in place",
        "created_at": "2026-02-24T12:00:00Z",
        "updated_at": "2026-02-24T12:00:00Z",
        "due_at": "someday",
    }
    deck_file.write_text(yaml.safe_dump({"cards": [record]}))

    repo = YamlDeckRepository(deck_file)
    deck = repo.load()
    assert deck.cards == []
    assert [r.id for r in deck.repairs] == ["broken"]

    # Saving must not drop the broken record
    repo.save(deck)
    assert yaml.safe_load(deck_file.read_text())["cards"][0]["due_at"] == "someday"


@pytest.mark.parametrize(
    "content",
    ["cards: [unclosed", "- just\n- a list\n", "cards: {id: 1}\n"],
)
def test_unreadable_deck_raises(deck_file, content):
    deck_file.parent.mkdir(parents=True)
    deck_file.write_text(content)
    with pytest.raises(DeckStorageError):
        YamlDeckRepository(deck_file).load()


def test_empty_file_is_empty_deck(deck_file):
    deck_file.parent.mkdir(parents=True)
    deck_file.write_text("")
    assert YamlDeckRepository(deck_file).load().cards == []


def test_write_failure_raises(tmp_path, card_factory):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    with pytest.raises(DeckStorageError):
        YamlDeckRepository(blocker / "deck.yaml").save(Deck(cards=[card_factory()]))
