"""Read vocabulary tables out of Markdown notes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..domain.services.tag_generator import slugify_tag
from ..models import WordRecord
from ..utils.logging import get_logger

logger = get_logger(__name__)

# A table header row must appear within this many lines after its heading
HEADER_SEARCH_WINDOW = 5

_SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")
_TABLE_HEADING_PREFIXES = ("## ", "### ")


@dataclass(frozen=True)
class TableColumns:
    """Header texts of the vocabulary table columns."""

    word: str = "Slovo"
    translation: str = "Překlad"
    phrase: str = "Výraz"
    phrase_translation: str = "Překlad Výrazu"
    note_link: str = "Poznámka"
    part_of_speech: str = "Slovní druh"

    @classmethod
    def from_mapping(cls, names: dict[str, str]) -> TableColumns:
        return cls(**names)


@dataclass
class VocabularyTable:
    """A vocabulary table found in a note."""

    heading: str
    columns: list[str]
    rows: list[WordRecord] = field(default_factory=list)

    @property
    def theme(self) -> str:
        return self.heading.strip().lstrip("#").strip()


def split_table_row(line: str) -> list[str] | None:
    """Split a ``| a | b |`` row into trimmed cells, keeping empty cells.

    Returns None for lines that are not table rows.
    """
    stripped = line.strip()
    if not stripped.startswith("|"):
        return None
    inner = stripped[1:-1] if stripped.endswith("|") and len(stripped) > 1 else stripped[1:]
    return [cell.strip() for cell in inner.split("|")]


def _is_separator(cells: list[str]) -> bool:
    filled = [cell for cell in cells if cell]
    return bool(filled) and all(_SEPARATOR_CELL_RE.match(cell) for cell in filled)


def _is_heading(line: str) -> bool:
    return line.startswith(_TABLE_HEADING_PREFIXES)


def _cell(cells: list[str], columns: list[str], name: str) -> str:
    if name not in columns:
        return ""
    index = columns.index(name)
    return cells[index] if index < len(cells) else ""


def _row_to_record(
    cells: list[str], header: list[str], columns: TableColumns, heading: str
) -> WordRecord | None:
    headword = _cell(cells, header, columns.word)
    if not headword:
        return None
    note_link = _cell(cells, header, columns.note_link)
    return WordRecord(
        headword=headword,
        translation=_cell(cells, header, columns.translation),
        example_phrase=_cell(cells, header, columns.phrase),
        example_phrase_translation=_cell(cells, header, columns.phrase_translation),
        theme=heading,
        theme_tag=slugify_tag(heading),
        part_of_speech_raw=_cell(cells, header, columns.part_of_speech),
        note_link_hint=note_link or None,
    )


def find_vocabulary_table(
    content: str, columns: TableColumns | None = None
) -> VocabularyTable | None:
    """Find the first vocabulary table of a note.

    The table must sit under a ``##``/``###`` heading with its header row
    (holding both the word and the translation column) at most five lines
    below. Data rows end at the next heading or the first non-table line.
    """
    columns = columns or TableColumns()
    lines = content.split("\n")

    for i, line in enumerate(lines):
        if not _is_heading(line):
            continue
        for j in range(i + 1, min(i + 1 + HEADER_SEARCH_WINDOW, len(lines))):
            header = split_table_row(lines[j])
            if header and columns.word in header and columns.translation in header:
                table = VocabularyTable(heading=line.strip(), columns=header)
                table.rows = _read_rows(lines[j + 1 :], table, columns)
                logger.debug(
                    "vocabulary_table_found",
                    heading=table.heading,
                    header_line=j,
                    rows=len(table.rows),
                )
                return table
    return None


def _read_rows(
    lines: list[str], table: VocabularyTable, columns: TableColumns
) -> list[WordRecord]:
    rows: list[WordRecord] = []
    for line in lines:
        if _is_heading(line):
            break
        cells = split_table_row(line)
        if cells is None:
            break
        if _is_separator(cells):
            continue
        record = _row_to_record(cells, table.columns, columns, table.heading)
        if record is None:
            logger.debug("table_row_skipped", reason="empty_word", row=line.strip())
            continue
        rows.append(record)
    return rows
