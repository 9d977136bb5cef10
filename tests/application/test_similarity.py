"""Tests for meaning tokenization, overlap, and part-of-speech heuristics."""

import pytest

from memorizer.application.similarity import (
    infer_part_of_speech,
    normalized_token_overlap,
    tokenize,
)
from memorizer.domain.models import PartOfSpeech


def test_tokenize_drops_stop_words_and_punctuation():
    assert set(tokenize("To write a word, incorrectly!")) == {"write", "word", "incorrectly"}


def test_tokenize_is_case_insensitive():
    assert tokenize("Keyboard KEYBOARD keyboard") == ["keyboard"] * 3


def test_overlap_is_jaccard():
    assert normalized_token_overlap(
        "to write a word incorrectly", "to write text incorrectly by mistake"
    ) == pytest.approx(2 / 5)


def test_overlap_empty_is_zero():
    assert normalized_token_overlap("", "anything") == 0.0
    assert normalized_token_overlap("the a an", "of to") == 0.0


def test_overlap_identical_is_one():
    assert normalized_token_overlap("bright light", "Light  bright") == 1.0


@pytest.mark.parametrize(
    "meaning, expected",
    [
        ("to write a word incorrectly", PartOfSpeech.VERB),
        ("To remove mistakes from text", PartOfSpeech.VERB),
        ("a small bird that sings", PartOfSpeech.NOUN),
        ("the largest city", PartOfSpeech.NOUN),
        ("the capital city", PartOfSpeech.ADJECTIVE),
        ("quickly and quietly", PartOfSpeech.ADVERB),
        ("joyful and dangerous", PartOfSpeech.ADJECTIVE),
        ("present everywhere", PartOfSpeech.UNKNOWN),
        ("", PartOfSpeech.UNKNOWN),
    ],
)
def test_infer_part_of_speech(meaning, expected):
    assert infer_part_of_speech(meaning) == expected


def test_verb_lead_beats_suffixes():
    assert infer_part_of_speech("to act quickly and carefully") == PartOfSpeech.VERB


class TestNonLatinScripts:
    def test_devanagari_words_stay_whole(self):
        assert tokenize("हिन्दी भाषा") == ["हिन्दी", "भाषा"]

    def test_thai_word_stays_whole(self):
        assert tokenize("สวัสดี") == ["สวัสดี"]

    def test_combining_marks_do_not_create_false_overlap(self):
        # Different words sharing base consonants must not match.
        assert normalized_token_overlap("हिन्दी भाषा", "हिन्द नदी") == 0.0
        assert normalized_token_overlap("हिन्दी भाषा", "भाषा सीखना") == pytest.approx(1 / 3)

    def test_punctuation_and_symbols_split(self):
        assert tokenize("write\u2014text, \u00abquickly\u00bb; 55+5") == ["write", "text", "quickly", "55"]
