"""Data models for word notes and grammar analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

NOT_DEFINED = "NOT_DEFINED"
NO_GRAMMAR_TABLE = "NO_GRAMMAR_TABLE"

# Values the analyzer uses for "could not be determined"
SENTINEL_VALUES = frozenset({NOT_DEFINED, NO_GRAMMAR_TABLE})


class PartOfSpeech(str, Enum):
    """Czech part-of-speech categories recognised by the analyzer."""

    VERB = "Sloveso"
    NOUN = "Podstatné jméno"
    ADJECTIVE = "Přídavné jméno"
    ADVERB = "Příslovce"
    NUMERAL = "Číslovka"
    PREPOSITION = "Předložka"
    PRONOUN = "Zájmeno"
    CONJUNCTION = "Spojka"
    PARTICLE = "Částice"
    INTERJECTION = "Citoslovce"
    NOT_DEFINED = NOT_DEFINED

    @property
    def is_defined(self) -> bool:
        return self is not PartOfSpeech.NOT_DEFINED

    @classmethod
    def from_full_text(cls, text: str | None) -> PartOfSpeech:
        """Map a free-text description such as "Sloveso nedokonavé" to a category.

        The first category whose name occurs in the text wins.
        """
        if not text or text == NOT_DEFINED:
            return cls.NOT_DEFINED
        lowered = text.lower()
        for member in cls:
            if member.is_defined and member.value.lower() in lowered:
                return member
        return cls.NOT_DEFINED


def is_known(value: Any) -> bool:
    """True when an analyzer value carries information."""
    if value is None or value == "":
        return False
    return not (isinstance(value, str) and value in SENTINEL_VALUES)


@dataclass
class WordRecord:
    """A word under study, read from a vocabulary table row or note frontmatter."""

    headword: str
    translation: str = ""
    example_phrase: str = ""
    example_phrase_translation: str = ""
    theme: str = ""  # raw table heading, e.g. "## Basic Verbs"
    theme_tag: str = ""  # slug of theme; derived from it when empty
    part_of_speech_raw: str = ""
    note_link_hint: str | None = None

    @property
    def theme_title(self) -> str:
        """The theme heading without its leading ``#`` markers."""
        return self.theme.strip().lstrip("#").strip()


class GrammarAnalysis(BaseModel):
    """Result of the remote grammar analyzer for one word.

    Field aliases follow the analyzer's JSON. Verb-only fields are kept only
    for verbs and noun-only fields only for nouns.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    word: str = ""
    part_of_speech_full: str = Field(default=NOT_DEFINED, alias="partOfSpeechFull")
    part_of_speech_type: PartOfSpeech = Field(
        default=PartOfSpeech.NOT_DEFINED, alias="partOfSpeechType"
    )

    # Verb-only
    conjugation_group: int | str | None = Field(default=None, alias="verbConjugationGroup")
    conjugation_pattern: str | None = Field(default=None, alias="verbVzor")
    is_irregular: bool | str | None = Field(default=None, alias="isIrregularVerb")
    suffix_group: int | str | None = Field(default=None, alias="verbSuffixGroup")
    second_person_singular: str | None = Field(default=None, alias="osoba2jednCislo")

    # Noun-only
    gender_full: str | None = Field(default=None, alias="nounRodFull")
    gender: str | None = Field(default=None, alias="nounRod")
    declension_pattern: str | None = Field(default=None, alias="nounVzor")

    paradigm: dict[str, list[str]] | None = Field(default=None, alias="priruckaData")
    formatted_result: str | None = Field(default=None, alias="formattedResult")

    @field_validator("part_of_speech_type", mode="before")
    @classmethod
    def _coerce_part_of_speech(cls, value: Any) -> Any:
        if isinstance(value, PartOfSpeech):
            return value
        if value is None or value == "":
            return PartOfSpeech.NOT_DEFINED
        if isinstance(value, str):
            try:
                return PartOfSpeech(value)
            except ValueError:
                return PartOfSpeech.from_full_text(value)
        return value

    @field_validator("paradigm", mode="before")
    @classmethod
    def _coerce_paradigm(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return None
        return {
            str(key): [str(cell) if cell is not None else "" for cell in cells]
            for key, cells in value.items()
            if isinstance(cells, list)
        }

    @model_validator(mode="after")
    def _drop_foreign_fields(self) -> GrammarAnalysis:
        if self.part_of_speech_type is not PartOfSpeech.VERB:
            self.conjugation_group = None
            self.conjugation_pattern = None
            self.is_irregular = None
            self.suffix_group = None
            self.second_person_singular = None
        if self.part_of_speech_type is not PartOfSpeech.NOUN:
            self.gender_full = None
            self.gender = None
            self.declension_pattern = None
        return self

    @property
    def pattern(self) -> str | None:
        """Declension or conjugation pattern (vzor), whichever applies."""
        return self.declension_pattern or self.conjugation_pattern


@dataclass
class NoteReconciliationRequest:
    """Unit of work for the note reconciler."""

    existing_text: str | None
    word: WordRecord
    grammar: GrammarAnalysis | None = None
    flashcards_section_name: str = "Flashcards"


@dataclass
class ProcessingReport:
    """Outcome of a batch of word notes."""

    processed: int = 0
    failed: int = 0
    analysis_failed: int = 0
    written_paths: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.processed + self.failed

    def merge(self, other: ProcessingReport) -> None:
        self.processed += other.processed
        self.failed += other.failed
        self.analysis_failed += other.analysis_failed
        self.written_paths.extend(other.written_paths)
        self.failures.update(other.failures)
