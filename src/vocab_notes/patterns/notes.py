"""Render and write pattern collection and pattern notes."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from ..obsidian.frontmatter import serialize_frontmatter
from ..utils.io import write_text_atomic
from ..utils.logging import get_logger
from .generator import GrammarPattern

logger = get_logger(__name__)

PATTERN_TAG = "#grammar_pattern"

_KNOWLEDGE_LEVEL_INPUT = (
    '"`INPUT[knowledgeLevel][:" + file.name + "#toTranslationKnowledgeLevel]`" as "Hard ➡️ Easy"'
)
_PATTERN_SOURCE = (
    "FROM #grammar_pattern AND [[]]\n"
    "WHERE contains(file.outlinks, this.file.link)"
)


def _translation_query(first: str, second: str) -> str:
    return (
        "```dataview\n"
        f"table without id {first}, {second}, {_KNOWLEDGE_LEVEL_INPUT}, "
        '"!speak[" + czech + "]" as 🔈, '
        '"[[" + file.name + "|" + link + "]]" as Link\n'
        f"{_PATTERN_SOURCE}\n"
        "```"
    )


def render_collection_note() -> str:
    """Collection note listing every pattern note that links back to it."""
    return "\n".join(
        [
            "---",
            serialize_frontmatter({"tags": "pattern_grammar_collection"}),
            "---",
            "",
            "# Grammar Pattern Collection",
            "",
            "## Czech ➡️ Russian",
            "",
            _translation_query("czech", "russian"),
            "",
            "## Russian ➡️ Czech",
            "",
            _translation_query("russian", "czech"),
            "",
            "#### pattern files",
            "```dataview",
            "LIST",
            _PATTERN_SOURCE,
            "```",
            "",
        ]
    )


def pattern_frontmatter(pattern: GrammarPattern) -> dict[str, Any]:
    grammar = pattern.grammar
    return {
        "czech": pattern.czech,
        "russian": pattern.russian,
        "grammar": {"structure": grammar.structure},
        "nouns": grammar.nouns,
        "verbs": grammar.verbs,
        "otherWords": grammar.other_words,
    }


def render_pattern_note(pattern: GrammarPattern, collection_file_name: str) -> str:
    """Pattern note with its grammar in frontmatter and a link to its collection."""
    return "\n".join(
        [
            "---",
            serialize_frontmatter(pattern_frontmatter(pattern)),
            "---",
            "",
            f"{pattern.czech} - {pattern.russian}",
            "",
            PATTERN_TAG,
            "",
            f"from pattern collection [[{collection_file_name}]]",
        ]
    )


def write_pattern_notes(
    vault_path: Path,
    patterns: list[GrammarPattern],
    collections_folder: str = "a2_pattern_collections",
    patterns_folder: str = "a2_grammar_patterns",
    now: datetime | None = None,
) -> tuple[Path, list[Path]]:
    """Write the collection note and one note per pattern.

    Returns:
        Tuple of (collection note path, pattern note paths)
    """
    now = now or datetime.now()
    collection_dir = vault_path / collections_folder
    pattern_dir = vault_path / patterns_folder
    collection_dir.mkdir(parents=True, exist_ok=True)
    pattern_dir.mkdir(parents=True, exist_ok=True)

    collection_name = f"{now:%Y%m%d%H%M}_pattern_collection.md"
    collection_path = collection_dir / collection_name
    write_text_atomic(collection_path, render_collection_note())

    pattern_paths: list[Path] = []
    for counter, pattern in enumerate(patterns, start=1):
        path = pattern_dir / f"{now:%Y%m%d%H%M%S}_grammar_pattern_{counter:03d}.md"
        write_text_atomic(path, render_pattern_note(pattern, collection_name))
        pattern_paths.append(path)

    logger.info(
        "patterns_written",
        collection=str(collection_path),
        patterns=len(pattern_paths),
    )
    return collection_path, pattern_paths
