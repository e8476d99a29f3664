"""Handlers behind the word note commands."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path

from vocab_notes.application.word_note_service import WordNoteService
from vocab_notes.config import Config
from vocab_notes.grammar.client import GrammarAnalysisClient
from vocab_notes.grammar.queue import AnalysisQueue
from vocab_notes.models import ProcessingReport


async def _run_with_service(
    config: Config,
    remote: bool,
    action: Callable[[WordNoteService], Awaitable[ProcessingReport]],
) -> ProcessingReport:
    if not remote:
        return await action(WordNoteService(config))

    async with GrammarAnalysisClient(
        config.server_urls,
        timeout=config.analysis_timeout,
        retries=config.analysis_retries,
        retry_delay=config.analysis_retry_delay,
    ) as client:
        queue = AnalysisQueue(client, delay=config.analysis_request_delay)
        return await action(WordNoteService(config, queue))


def run_process_table(config: Config, note: Path, remote: bool) -> ProcessingReport:
    return asyncio.run(
        _run_with_service(config, remote, lambda service: service.process_table_note(note))
    )


def run_process_folder(config: Config, folder: Path, remote: bool) -> ProcessingReport:
    return asyncio.run(
        _run_with_service(config, remote, lambda service: service.process_folder(folder))
    )


def run_update_note(config: Config, note: Path, remote: bool) -> ProcessingReport:
    return asyncio.run(
        _run_with_service(config, remote, lambda service: service.update_word_note(note))
    )
