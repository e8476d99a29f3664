"""Flashcard deck tag generation for word notes."""

from __future__ import annotations

import re
import unicodedata

from vocab_notes.models import GrammarAnalysis, PartOfSpeech, WordRecord, is_known

from .part_of_speech import derive_part_of_speech

WORD_DECK = "czwords"
PHRASE_DECK = "czphrase"

_NON_WORD_RUN_RE = re.compile(r"[\W_]+")


def slugify_tag(text: str) -> str:
    """Turn a heading or label into a tag segment.

    Leading ``#`` markers are dropped, diacritics folded, every run of
    non-alphanumeric characters collapsed to ``_`` and the result lowercased.
    Letters of non-Latin scripts stay letters.

    >>> slugify_tag("## Čísla a barvy!")
    'cisla_a_barvy'
    """
    stripped = text.strip().lstrip("#").strip()
    decomposed = unicodedata.normalize("NFKD", stripped)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_WORD_RUN_RE.sub("_", folded).strip("_").lower()


def build_tags(
    word: WordRecord, grammar: GrammarAnalysis | None, deck_kind: str
) -> list[str]:
    """Build the ordered tag list for one deck kind.

    Order: theme, part of speech, grammar pattern, verb group, noun gender,
    ``all``. Unknown values are skipped.
    """
    base = f"#flashcards/{deck_kind}"
    part_of_speech = derive_part_of_speech(word, grammar)
    theme_tag = word.theme_tag or slugify_tag(word.theme)
    tags = [f"{base}/theme/{theme_tag}"]

    if part_of_speech.is_defined:
        pos_slug = slugify_tag(part_of_speech.value)
        tags.append(f"{base}/{pos_slug}")

        if grammar is not None and is_known(grammar.pattern):
            vzor_kind = (
                "sloveso_vzor"
                if part_of_speech is PartOfSpeech.VERB
                else "podstatne_jmeno_vzor"
            )
            tags.append(f"{base}/{vzor_kind}/{grammar.pattern}")

    if grammar is not None:
        if is_known(grammar.conjugation_group):
            tags.append(f"{base}/verbgroup/{grammar.conjugation_group}")
        if is_known(grammar.gender):
            tags.append(f"{base}/nounrod/{grammar.gender}")

    tags.append(f"{base}/all")
    return tags
