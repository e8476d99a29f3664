"""Prompt context for pattern generation: word list plus request parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from ..error_codes import ErrorCode
from ..exceptions import PatternGenerationError
from ..models import PartOfSpeech
from ..utils.logging import get_logger

logger = get_logger(__name__)

MAX_CONTEXT_WORDS = 50
UNDEFINED_GROUP = "Undefined"


def _as_list(value: Any) -> list[str]:
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


@dataclass
class WordlistParameters:
    """Which word notes the request note wants patterns for."""

    parts_of_speech: list[str] = field(default_factory=list)
    themes: list[str] = field(default_factory=list)
    noun_genders: list[str] = field(default_factory=list)
    verb_conjugation_groups: list[str] = field(default_factory=list)

    def accepts(self, metadata: dict[str, Any]) -> bool:
        """True when a word note's frontmatter passes every non-empty filter."""
        part_of_speech = str(metadata.get("partOfSpeech", ""))
        if self.parts_of_speech and part_of_speech not in self.parts_of_speech:
            return False
        if self.themes and str(metadata.get("theme", "")) not in self.themes:
            return False
        if (
            self.noun_genders
            and part_of_speech == PartOfSpeech.NOUN.value
            and str(metadata.get("nounRod", "")) not in self.noun_genders
        ):
            return False
        return not (
            self.verb_conjugation_groups
            and part_of_speech == PartOfSpeech.VERB.value
            and str(metadata.get("verbConjugationGroup", "")) not in self.verb_conjugation_groups
        )


@dataclass
class GrammarRequirements:
    noun_cases: list[str] = field(default_factory=list)
    verb_persons: list[str] = field(default_factory=list)
    verb_tenses: list[str] = field(default_factory=list)
    additional_prompt: str = ""


@dataclass
class GenerationContext:
    """Everything the generation prompt is built from."""

    wordlist: dict[str, list[dict[str, Any]]]
    parameters: WordlistParameters
    requirements: GrammarRequirements

    @property
    def word_count(self) -> int:
        return sum(len(words) for words in self.wordlist.values())

    def to_prompt_dict(self) -> dict[str, Any]:
        return {
            "wordlist": self.wordlist,
            "wordlistParameters": {
                "partsOfSpeechList": self.parameters.parts_of_speech,
                "themeList": self.parameters.themes,
                "nounGenderList": self.parameters.noun_genders,
                "verbConjugationGroups": self.parameters.verb_conjugation_groups,
            },
            "patternsGrammarRequirements": {
                "patternSklonovaniPads": self.requirements.noun_cases,
                "patternVerbPersons": self.requirements.verb_persons,
                "patternVerbTenses": self.requirements.verb_tenses,
                "additionalAIPromptForPatterns": self.requirements.additional_prompt,
            },
        }


def _load_metadata(path: Path) -> dict[str, Any]:
    post = frontmatter.load(str(path))
    return {str(key): value for key, value in post.metadata.items()}


def collect_words(
    words_folder: Path,
    parameters: WordlistParameters,
    limit: int = MAX_CONTEXT_WORDS,
) -> dict[str, list[dict[str, Any]]]:
    """Select word notes matching ``parameters``, grouped by part of speech.

    Notes are read in file name order; groups are sorted by name.
    """
    groups: dict[str, list[dict[str, Any]]] = {}
    selected = 0
    for path in sorted(words_folder.rglob("*.md")):
        if selected >= limit:
            break
        try:
            metadata = _load_metadata(path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning("word_note_unreadable", file=str(path), error=str(e))
            continue
        if not metadata.get("slovo") or not parameters.accepts(metadata):
            continue

        entry = {
            "file": path.relative_to(words_folder).as_posix(),
            "word": metadata.get("slovo"),
            **metadata,
        }
        group = str(metadata.get("partOfSpeech") or UNDEFINED_GROUP)
        groups.setdefault(group, []).append(entry)
        selected += 1

    return dict(sorted(groups.items()))


def build_generation_context(
    request_note: Path, words_folder: Path, limit: int = MAX_CONTEXT_WORDS
) -> GenerationContext:
    """Build the prompt context from a pattern request note.

    Raises:
        PatternGenerationError: If the request note cannot be read
    """
    try:
        metadata = _load_metadata(request_note)
    except (OSError, ValueError, yaml.YAMLError) as e:
        msg = f"Cannot read pattern request note {request_note}"
        raise PatternGenerationError(
            msg,
            error_code=ErrorCode.PAT_CONTEXT_INVALID.value,
            context={"file": str(request_note)},
        ) from e

    parameters = WordlistParameters(
        parts_of_speech=_as_list(metadata.get("partsOfSpeechList")),
        themes=_as_list(metadata.get("themeList")),
        noun_genders=_as_list(metadata.get("nounGenderList")),
        verb_conjugation_groups=_as_list(metadata.get("verbConjugationGroups")),
    )
    requirements = GrammarRequirements(
        noun_cases=_as_list(metadata.get("patternSklonovaniPads")),
        verb_persons=_as_list(metadata.get("patternVerbPersons")),
        verb_tenses=_as_list(metadata.get("patternVerbTenses")),
        additional_prompt=str(metadata.get("additionalAIPromptForPatterns") or ""),
    )

    wordlist = collect_words(words_folder, parameters, limit) if words_folder.is_dir() else {}
    context = GenerationContext(wordlist=wordlist, parameters=parameters, requirements=requirements)
    logger.info(
        "pattern_context_built",
        file=str(request_note),
        words=context.word_count,
        groups={name: len(words) for name, words in wordlist.items()},
    )
    return context
