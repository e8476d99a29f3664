"""Pytest configuration and fixtures for the test suite."""

from pathlib import Path

import pytest

from tests.fixtures import VOCABULARY_TABLE_NOTE
from vocab_notes.cli_commands.shared import reset_cli_state
from vocab_notes.config import Config
from vocab_notes.models import GrammarAnalysis, PartOfSpeech, WordRecord


@pytest.fixture
def verb_word() -> WordRecord:
    """A verb as read from a vocabulary table row."""
    return WordRecord(
        headword="dělat",
        translation="to do",
        example_phrase="Co děláš?",
        example_phrase_translation="What are you doing?",
        theme="## Basic Verbs",
    )


@pytest.fixture
def verb_grammar() -> GrammarAnalysis:
    """Analyzer answer for "dělat"."""
    return GrammarAnalysis(
        word="dělat",
        part_of_speech_full="Sloveso nedokonavé",
        part_of_speech_type=PartOfSpeech.VERB,
        conjugation_group=1,
        conjugation_pattern="Dělat",
        is_irregular=False,
        formatted_result="Vzor: Dělat",
    )


@pytest.fixture
def noun_word() -> WordRecord:
    return WordRecord(
        headword="kniha",
        translation="book",
        example_phrase="Čtu knihu.",
        example_phrase_translation="I am reading a book.",
        theme="## Škola",
    )


@pytest.fixture
def noun_grammar() -> GrammarAnalysis:
    return GrammarAnalysis(
        word="kniha",
        part_of_speech_full="Podstatné jméno rodu ženského",
        part_of_speech_type=PartOfSpeech.NOUN,
        gender="ženský",
        gender_full="rod ženský",
        declension_pattern="Žena",
    )


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    """Empty vault directory."""
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def config(vault: Path) -> Config:
    """Configuration pointing at the temporary vault, remote analysis off."""
    return Config(vault_path=vault, analysis_request_delay=0, analysis_retry_delay=0)


@pytest.fixture
def table_note(vault: Path) -> Path:
    """Note with a two-row vocabulary table inside the vault."""
    path = vault / "Inbox" / "lesson3.md"
    path.parent.mkdir(parents=True)
    path.write_text(VOCABULARY_TABLE_NOTE, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_cli_state():
    """Drop cached CLI config between tests."""
    reset_cli_state()
    yield
    reset_cli_state()
