"""Tests for part-of-speech resolution."""

import pytest

from vocab_notes.domain.services.part_of_speech import (
    derive_part_of_speech,
    part_of_speech_from_hint,
)
from vocab_notes.models import GrammarAnalysis, PartOfSpeech, WordRecord


@pytest.mark.parametrize(
    ("hint", "expected"),
    [
        ("sloveso", PartOfSpeech.VERB),
        ("Přísl.", PartOfSpeech.ADVERB),
        ("číslovka", PartOfSpeech.NUMERAL),
        ("citoslovce", PartOfSpeech.INTERJECTION),
        ("podst. jm.", PartOfSpeech.NOUN),
        ("předložka", PartOfSpeech.PREPOSITION),
        ("zájmeno", PartOfSpeech.PRONOUN),
        ("spojka", PartOfSpeech.CONJUNCTION),
        ("částice", PartOfSpeech.PARTICLE),
        ("adverb", PartOfSpeech.ADVERB),
        ("pronoun", PartOfSpeech.PRONOUN),
        ("noun", PartOfSpeech.NOUN),
        ("Adjective", PartOfSpeech.ADJECTIVE),
        ("conjunction", PartOfSpeech.CONJUNCTION),
        ("interjection", PartOfSpeech.INTERJECTION),
        ("сущ.", PartOfSpeech.NOUN),
        ("глагол", PartOfSpeech.VERB),
        ("частица", PartOfSpeech.PARTICLE),
        ("xyz", PartOfSpeech.NOT_DEFINED),
        ("", PartOfSpeech.NOT_DEFINED),
    ],
)
def test_part_of_speech_from_hint(hint: str, expected: PartOfSpeech) -> None:
    assert part_of_speech_from_hint(hint) is expected


class TestDerivePartOfSpeech:
    """Analyzer category versus table hint."""

    def test_analyzer_category_wins(self, verb_grammar) -> None:
        word = WordRecord(headword="dělat", part_of_speech_raw="noun")

        assert derive_part_of_speech(word, verb_grammar) is PartOfSpeech.VERB

    def test_hint_used_when_analyzer_is_undecided(self) -> None:
        word = WordRecord(headword="dělat", part_of_speech_raw="sloveso")
        grammar = GrammarAnalysis(word="dělat")

        assert derive_part_of_speech(word, grammar) is PartOfSpeech.VERB

    def test_nothing_known(self) -> None:
        assert derive_part_of_speech(WordRecord(headword="x"), None) is PartOfSpeech.NOT_DEFINED
