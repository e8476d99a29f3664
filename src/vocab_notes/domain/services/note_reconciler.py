"""Note reconciliation: merge new word data into an existing word note.

``reconcile`` is pure. Given the same request it always returns the same text,
and feeding its output back in as ``existing_text`` returns that output
unchanged. User edits survive because frontmatter is merged fill-only and
only the three generated sections are replaced.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import quote

from vocab_notes.error_codes import ErrorCode
from vocab_notes.exceptions import MissingRequiredFieldError
from vocab_notes.models import (
    GrammarAnalysis,
    NoteReconciliationRequest,
    PartOfSpeech,
    WordRecord,
    is_known,
)
from vocab_notes.obsidian.frontmatter import (
    merge_frontmatter,
    parse_frontmatter_block,
    serialize_frontmatter,
    split_frontmatter,
)
from vocab_notes.obsidian.sections import normalize_note, upsert_section

from .part_of_speech import derive_part_of_speech
from .tag_generator import PHRASE_DECK, WORD_DECK, build_tags

GRAMMAR_SECTION = "Grammar"
PRIRUCKA_URL = "https://prirucka.ujc.cas.cz/?slovo={word}"
SLOVNIK_URL = "https://slovnik.seznam.cz/preklad/cesky_anglicky/{word}"

# Input-field placeholders rendered by the vault's form plugin
PART_OF_SPEECH_INPUTS = (
    "Part Of Speech: `INPUT[partOfSpeechSelect][:partOfSpeech]` "
    "Noun gender: `INPUT[nounGenderSelect][:nounRod]`"
)
PATTERN_INPUT = "Grammar pattern is: `INPUT[grammarPatternSelect][:vzor]`"

_MARKDOWN_LINK_RE = re.compile(r"\[(.*?)\]\((.*?)\)")


def _encode_uri_component(text: str) -> str:
    return quote(text, safe="!~*'()")


def build_frontmatter(word: WordRecord, grammar: GrammarAnalysis | None) -> dict[str, Any]:
    """Compute the target frontmatter of a word note.

    Keys with no value are omitted so the merge never sees them.
    """
    part_of_speech = derive_part_of_speech(word, grammar)
    fields: dict[str, Any] = {
        "slovo": word.headword,
        "translation": word.translation,
        "theme": word.theme_title,
        "phrase": word.example_phrase,
        "phrase_translation": word.example_phrase_translation,
        "partOfSpeech": part_of_speech.value,
        "partOfSpeechVerbose": grammar.part_of_speech_full if grammar else None,
    }

    if grammar is not None:
        if part_of_speech is PartOfSpeech.VERB:
            fields["verbConjugationGroup"] = grammar.conjugation_group
            fields["vzor"] = grammar.conjugation_pattern
            fields["isIrregularVerb"] = grammar.is_irregular
        elif part_of_speech is PartOfSpeech.NOUN:
            fields["nounRod"] = grammar.gender
            fields["nounRodFull"] = grammar.gender_full
            fields["vzor"] = grammar.declension_pattern

    return {key: value for key, value in fields.items() if value is not None}


def _summary_line(grammar: GrammarAnalysis | None) -> str:
    if grammar is None:
        return ""
    if is_known(grammar.pattern):
        return f"{grammar.part_of_speech_full}. Grammar pattern is: {grammar.pattern}"
    return grammar.part_of_speech_full


def _headword_body(word: WordRecord, grammar: GrammarAnalysis | None) -> str:
    return "\n".join(
        [
            f"Theme note: [[{word.theme_title}]]",
            _summary_line(grammar),
            PART_OF_SPEECH_INPUTS,
            PATTERN_INPUT,
        ]
    )


def _card_line(front: str, back: str) -> str:
    # "\#" keeps a card line from parsing as a heading
    shown = "\\" + front if front.startswith("#") else front
    return f"{shown} !speak[{front}] ::: {back}"


def _flashcards_body(word: WordRecord, grammar: GrammarAnalysis | None) -> str:
    word_tags = " ".join(build_tags(word, grammar, WORD_DECK))
    phrase_tags = " ".join(build_tags(word, grammar, PHRASE_DECK))
    return "\n".join(
        [
            word_tags,
            _card_line(word.headword, word.translation),
            "",
            phrase_tags,
            _card_line(word.example_phrase, word.example_phrase_translation),
        ]
    )


def _grammar_body(word: WordRecord, grammar: GrammarAnalysis | None) -> str:
    encoded = _encode_uri_component(word.headword)
    lines = [
        f"link to prirucka: {PRIRUCKA_URL.format(word=encoded)}",
        f"link to slovnik: {SLOVNIK_URL.format(word=encoded)}",
    ]
    if grammar is not None and grammar.formatted_result and grammar.formatted_result.strip():
        lines.append(grammar.formatted_result.strip())
    return "\n".join(lines)


def reconcile(request: NoteReconciliationRequest) -> str:
    """Produce the updated text of a word note.

    Raises:
        MissingRequiredFieldError: If the word has no headword
    """
    word = request.word
    if not word.headword or not word.headword.strip():
        raise MissingRequiredFieldError(
            "Word has no headword",
            suggestion="Fill the word column of the table row or the 'slovo' field",
            error_code=ErrorCode.NOTE_MISSING_HEADWORD.value,
            context={"theme": word.theme_title},
        )
    grammar = request.grammar

    block, body = split_frontmatter(request.existing_text)
    existing = parse_frontmatter_block(block)
    merged = merge_frontmatter(existing, build_frontmatter(word, grammar))

    content = f"---\n{serialize_frontmatter(merged)}\n---\n\n{body.strip()}"
    content = upsert_section(content, "#", word.headword, _headword_body(word, grammar))
    content = upsert_section(
        content,
        "##",
        request.flashcards_section_name,
        _flashcards_body(word, grammar),
    )
    content = upsert_section(content, "##", GRAMMAR_SECTION, _grammar_body(word, grammar))
    return normalize_note(content)


def resolve_note_path(
    word: WordRecord,
    header_columns: list[str],
    note_link_column: str,
    words_folder: str,
) -> str:
    """Vault-relative path of the note for a word.

    A ``[text](folder/file.md)`` link in the note-link column wins when the
    table has that column; otherwise the note goes to
    ``{words_folder}/{headword}.md``.
    """
    if note_link_column in header_columns and word.note_link_hint:
        match = _MARKDOWN_LINK_RE.search(word.note_link_hint)
        if match and "/" in match.group(2):
            link = PurePosixPath(match.group(2).strip())
            name = link.name if link.suffix == ".md" else f"{link.name}.md"
            return str(link.parent / name)
    return f"{words_folder.rstrip('/')}/{word.headword}.md"
