"""Create and update word notes from vocabulary tables and existing notes."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

from ..config_settings import Config
from ..domain.services.note_reconciler import reconcile, resolve_note_path
from ..domain.services.tag_generator import slugify_tag
from ..error_codes import ErrorCode
from ..exceptions import (
    MalformedInputError,
    MissingRequiredFieldError,
    TableNotFoundError,
    VocabNotesError,
)
from ..grammar.queue import AnalysisQueue
from ..models import GrammarAnalysis, NoteReconciliationRequest, ProcessingReport, WordRecord
from ..obsidian.frontmatter import parse_frontmatter_block, split_frontmatter
from ..obsidian.vocabulary_table import TableColumns, find_vocabulary_table
from ..utils.io import read_text_if_exists, write_text_atomic
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def word_from_frontmatter(frontmatter: dict[str, Any]) -> WordRecord:
    """Rebuild a word record from the frontmatter of a word note."""
    headword = _text(frontmatter.get("slovo")).strip()
    if not headword:
        raise MissingRequiredFieldError(
            "No 'slovo' property found in frontmatter",
            suggestion="Add 'slovo: <word>' to the note's frontmatter",
            error_code=ErrorCode.NOTE_MISSING_HEADWORD.value,
        )
    return WordRecord(
        headword=headword,
        translation=_text(frontmatter.get("translation")),
        example_phrase=_text(frontmatter.get("phrase")),
        example_phrase_translation=_text(frontmatter.get("phrase_translation")),
        theme=_text(frontmatter.get("theme")),
        theme_tag=slugify_tag(_text(frontmatter.get("theme"))),
        part_of_speech_raw=_text(frontmatter.get("partOfSpeech")),
    )


class WordNoteService:
    """Batch orchestration around the note reconciler.

    A word that fails (missing headword, unwritable file) is counted and
    skipped; its note is left untouched and the batch carries on. When remote
    analysis fails the note is still written without grammar data.
    """

    def __init__(self, config: Config, queue: AnalysisQueue | None = None):
        self.config = config
        self.queue = queue
        self.columns = TableColumns.from_mapping(config.column_names)

    @property
    def remote_enabled(self) -> bool:
        return self.queue is not None

    async def _analyze(self, word: WordRecord, report: ProcessingReport) -> GrammarAnalysis | None:
        if self.queue is None:
            return None
        grammar = await self.queue.submit(word.headword)
        if grammar is None:
            report.analysis_failed += 1
        return grammar

    def _write_note(
        self, path: Path, word: WordRecord, grammar: GrammarAnalysis | None
    ) -> None:
        request = NoteReconciliationRequest(
            existing_text=read_text_if_exists(path),
            word=word,
            grammar=grammar,
            flashcards_section_name=self.config.flashcards_note_section,
        )
        text = reconcile(request)
        path.parent.mkdir(parents=True, exist_ok=True)
        write_text_atomic(path, text)

    async def _process_word(
        self,
        word: WordRecord,
        path: Path,
        report: ProcessingReport,
    ) -> None:
        try:
            grammar = await self._analyze(word, report)
            self._write_note(path, word, grammar)
        except (VocabNotesError, OSError) as e:
            report.failed += 1
            report.failures[word.headword or str(path)] = str(e)
            logger.error(
                "word_note_failed",
                word=word.headword,
                note_path=str(path),
                error=str(e),
                error_type=type(e).__name__,
            )
            return

        report.processed += 1
        report.written_paths.append(str(path))
        logger.info(
            "word_note_written",
            word=word.headword,
            note_path=str(path),
            with_grammar=grammar is not None,
        )

    async def process_table_note(self, note_path: Path) -> ProcessingReport:
        """Create or update a word note for every row of a note's vocabulary table.

        Raises:
            TableNotFoundError: If the note has no vocabulary table
        """
        content = note_path.read_text(encoding="utf-8")
        table = find_vocabulary_table(content, self.columns)
        if table is None:
            msg = f"No suitable table found in {note_path.name}"
            raise TableNotFoundError(
                msg,
                suggestion=(
                    f"Add a table with '{self.columns.word}' and "
                    f"'{self.columns.translation}' columns under a ## heading"
                ),
                error_code=ErrorCode.TBL_NOT_FOUND.value,
                context={"file": str(note_path)},
            )

        logger.info(
            "table_processing_started",
            file=str(note_path),
            theme=table.theme,
            words=len(table.rows),
            remote=self.remote_enabled,
        )
        report = ProcessingReport()
        for word in table.rows:
            relative = resolve_note_path(
                word,
                table.columns,
                self.columns.note_link,
                self.config.new_words_folder,
            )
            await self._process_word(word, self.config.vault_path / relative, report)

        logger.info(
            "table_processing_completed",
            file=str(note_path),
            processed=report.processed,
            failed=report.failed,
            analysis_failed=report.analysis_failed,
        )
        return report

    async def process_folder(self, folder: Path) -> ProcessingReport:
        """Process every table note directly inside ``folder``.

        Notes whose table was processed are moved into the processed tables
        subfolder; notes without a table stay where they are.
        """
        processed_dir = folder / self.config.processed_tables_folder
        processed_dir.mkdir(parents=True, exist_ok=True)
        files = sorted(p for p in folder.iterdir() if p.is_file() and p.suffix == ".md")

        report = ProcessingReport()
        moved = 0
        for note_path in files:
            try:
                report.merge(await self.process_table_note(note_path))
                shutil.move(str(note_path), str(processed_dir / note_path.name))
                moved += 1
            except TableNotFoundError as e:
                logger.info("table_note_skipped", file=str(note_path), reason=e.message)
            except (VocabNotesError, OSError) as e:
                report.failures[str(note_path)] = str(e)
                logger.error(
                    "table_note_failed",
                    file=str(note_path),
                    error=str(e),
                    error_type=type(e).__name__,
                )

        logger.info(
            "folder_processing_completed",
            folder=str(folder),
            files=len(files),
            moved=moved,
            processed=report.processed,
            failed=report.failed,
        )
        return report

    async def update_word_note(self, note_path: Path) -> ProcessingReport:
        """Re-process a single word note from its own frontmatter.

        Raises:
            MalformedInputError: If the note has no frontmatter block
            MissingRequiredFieldError: If the frontmatter has no ``slovo``
        """
        content = note_path.read_text(encoding="utf-8")
        block, _ = split_frontmatter(content)
        if block is None:
            raise MalformedInputError(
                f"{note_path.name} has no frontmatter",
                suggestion="Word notes start with a --- fenced frontmatter block",
                error_code=ErrorCode.NOTE_MALFORMED_FRONTMATTER.value,
                context={"file": str(note_path)},
            )
        word = word_from_frontmatter(parse_frontmatter_block(block))

        report = ProcessingReport()
        await self._process_word(word, note_path, report)
        return report
