"""Part-of-speech resolution for word records."""

from __future__ import annotations

from vocab_notes.models import GrammarAnalysis, PartOfSpeech, WordRecord

# Substring keywords checked in order against the lowercased hint. Keywords
# for words that also contain a shorter keyword come first ("přísl", "čís" and
# "citos" before "slov"; "adv" before "verb"; "pron" before "noun").
PART_OF_SPEECH_KEYWORDS: tuple[tuple[str, PartOfSpeech], ...] = (
    # Czech abbreviations
    ("přísl", PartOfSpeech.ADVERB),
    ("čís", PartOfSpeech.NUMERAL),
    ("citos", PartOfSpeech.INTERJECTION),
    ("slov", PartOfSpeech.VERB),
    ("pod", PartOfSpeech.NOUN),
    ("příd", PartOfSpeech.ADJECTIVE),
    ("předl", PartOfSpeech.PREPOSITION),
    ("záj", PartOfSpeech.PRONOUN),
    ("spoj", PartOfSpeech.CONJUNCTION),
    ("část", PartOfSpeech.PARTICLE),
    # English and Russian
    ("adv", PartOfSpeech.ADVERB),
    ("verb", PartOfSpeech.VERB),
    ("глаг", PartOfSpeech.VERB),
    ("pron", PartOfSpeech.PRONOUN),
    ("noun", PartOfSpeech.NOUN),
    ("сущ", PartOfSpeech.NOUN),
    ("подст", PartOfSpeech.NOUN),
    ("adj", PartOfSpeech.ADJECTIVE),
    ("прил", PartOfSpeech.ADJECTIVE),
    ("нар", PartOfSpeech.ADVERB),
    ("num", PartOfSpeech.NUMERAL),
    ("числ", PartOfSpeech.NUMERAL),
    ("prep", PartOfSpeech.PREPOSITION),
    ("пред", PartOfSpeech.PREPOSITION),
    ("мест", PartOfSpeech.PRONOUN),
    ("conj", PartOfSpeech.CONJUNCTION),
    ("союз", PartOfSpeech.CONJUNCTION),
    ("interj", PartOfSpeech.INTERJECTION),
    ("part", PartOfSpeech.PARTICLE),
    ("част", PartOfSpeech.PARTICLE),
    ("межд", PartOfSpeech.INTERJECTION),
)


def part_of_speech_from_hint(hint: str | None) -> PartOfSpeech:
    """Match a free-text hint such as "sloveso", "adv." or "сущ." to a category."""
    if not hint:
        return PartOfSpeech.NOT_DEFINED
    lowered = hint.strip().lower()
    for keyword, part_of_speech in PART_OF_SPEECH_KEYWORDS:
        if keyword in lowered:
            return part_of_speech
    return PartOfSpeech.NOT_DEFINED


def derive_part_of_speech(
    word: WordRecord, grammar: GrammarAnalysis | None
) -> PartOfSpeech:
    """Resolve the part of speech of a word.

    The analyzer's category wins when it is known; otherwise the word's raw
    hint is matched against the keyword table. First match wins.
    """
    if grammar is not None and grammar.part_of_speech_type.is_defined:
        return grammar.part_of_speech_type
    return part_of_speech_from_hint(word.part_of_speech_raw)
