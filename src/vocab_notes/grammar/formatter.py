"""Derived fields and the human-readable report for grammar analyses."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..models import (
    NO_GRAMMAR_TABLE,
    NOT_DEFINED,
    GrammarAnalysis,
    PartOfSpeech,
    is_known,
)

PARADIGM_COLUMNS = ("", "jednotné číslo", "množné číslo")
SECOND_PERSON_ROW = "2. osoba"

# Ending of the 2nd person singular -> (pattern verb, conjugation group)
CONJUGATION_BY_ENDING: tuple[tuple[str, str, int], ...] = (
    ("ješ", "Studovat", 3),
    ("áš", "Dělat", 1),
    ("íš", "Mluvit", 2),
)

# Infinitive ending -> suffix group; longer endings first
SUFFIX_GROUPS: tuple[tuple[str, int], ...] = (
    ("ovat", 3),
    ("nout", 3),
    ("at", 1),
    ("it", 2),
    ("et", 2),
    ("ět", 2),
)


def verb_suffix_group(infinitive: str) -> int | str:
    for ending, group in SUFFIX_GROUPS:
        if infinitive.endswith(ending):
            return group
    return NOT_DEFINED


def verb_conjugation(second_person_singular: str) -> tuple[str, int | str]:
    """Return ``(vzor, group)`` from the 2nd person singular present form."""
    for ending, vzor, group in CONJUGATION_BY_ENDING:
        if second_person_singular.endswith(ending):
            return vzor, group
    return NOT_DEFINED, NOT_DEFINED


def is_irregular_verb(suffix_group: Any, conjugation_group: Any) -> bool | str:
    """A verb is irregular when its infinitive and conjugation groups differ."""
    if not is_known(suffix_group) or not is_known(conjugation_group):
        return NOT_DEFINED
    return str(suffix_group) != str(conjugation_group)


def _first_cell(cells: Any) -> str:
    if isinstance(cells, list) and cells and isinstance(cells[0], str) and cells[0]:
        return cells[0]
    return NOT_DEFINED


def complete_analysis(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Fill the derived fields an analyzer answer may leave out.

    Accepts either an already analyzed payload or the raw dictionary data
    (``slovnikData``/``priruckaData``). Fields present in the payload win.
    """
    data = dict(payload)
    slovnik = data.get("slovnikData") if isinstance(data.get("slovnikData"), Mapping) else {}

    full = data.get("partOfSpeechFull") or slovnik.get("partOfSpeech") or NOT_DEFINED
    data["partOfSpeechFull"] = full
    if not is_known(data.get("partOfSpeechType")):
        data["partOfSpeechType"] = PartOfSpeech.from_full_text(full).value

    if data["partOfSpeechType"] == PartOfSpeech.VERB.value:
        word = str(data.get("word") or "")
        if not is_known(data.get("verbSuffixGroup")):
            data["verbSuffixGroup"] = verb_suffix_group(word)

        paradigm = data.get("priruckaData")
        if isinstance(paradigm, Mapping) and paradigm:
            if not data.get("osoba2jednCislo"):
                data["osoba2jednCislo"] = _first_cell(paradigm.get(SECOND_PERSON_ROW))
            vzor, group = verb_conjugation(str(data["osoba2jednCislo"]))
        else:
            vzor, group = NO_GRAMMAR_TABLE, NO_GRAMMAR_TABLE
        if not data.get("verbVzor"):
            data["verbVzor"] = vzor
        if data.get("verbConjugationGroup") in (None, ""):
            data["verbConjugationGroup"] = group

        if data.get("isIrregularVerb") is None:
            data["isIrregularVerb"] = is_irregular_verb(
                data["verbSuffixGroup"], data["verbConjugationGroup"]
            )

    return data


def paradigm_table(paradigm: Mapping[str, list[str]]) -> str:
    """Render analyzer table data as a Markdown table.

    The first entry holds the analyzer's own column labels and is replaced by
    the fixed singular/plural header.
    """
    rows = list(paradigm.items())
    width = len(rows[0][1]) if rows else 0
    lines = [
        "| " + " | ".join(PARADIGM_COLUMNS) + " |",
        "| " + " | ".join("------" for _ in PARADIGM_COLUMNS) + " |",
    ]
    for label, cells in rows[1:]:
        row = [label, *(cells[i] if i < len(cells) else "" for i in range(width))]
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines)


def _yes_no(value: Any) -> str:
    return "Ano" if value is True or value == "true" else "Ne"


def format_grammar_result(analysis: GrammarAnalysis) -> str:
    """Build the report shown in a word note's Grammar section."""
    lines = [
        f"Část řeči: {analysis.part_of_speech_full} ({analysis.part_of_speech_type.value})"
    ]

    if analysis.part_of_speech_type is PartOfSpeech.NOUN:
        lines.append(f"Vzor: {analysis.declension_pattern}")
        lines.append(f"Rod: {analysis.gender_full} ({analysis.gender})")
    elif analysis.part_of_speech_type is PartOfSpeech.VERB:
        lines.append(f"Vzor: {analysis.conjugation_pattern}")
        lines.append(f"Nepravidelné sloveso: {_yes_no(analysis.is_irregular)}")
        if analysis.second_person_singular:
            lines.append(f"2. osoba jednotného čísla: {analysis.second_person_singular}")

    if analysis.paradigm:
        lines.append("")
        lines.append(paradigm_table(analysis.paradigm))

    return "\n".join(lines)
