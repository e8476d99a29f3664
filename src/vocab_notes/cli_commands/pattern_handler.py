"""Handler behind the generate-patterns command."""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx

from vocab_notes.config import Config
from vocab_notes.patterns.context import build_generation_context
from vocab_notes.patterns.generator import PatternGenerator
from vocab_notes.patterns.notes import write_pattern_notes


async def _generate(config: Config, request_note: Path) -> tuple[Path, list[Path]]:
    api_key = config.require_openai_key()
    context = build_generation_context(request_note, config.words_folder_path)

    async with httpx.AsyncClient(timeout=config.llm_timeout) as client:
        generator = PatternGenerator(
            client,
            api_key=api_key,
            base_url=config.openai_base_url,
            model=config.pattern_model,
            pattern_count=config.pattern_count,
            timeout=config.llm_timeout,
        )
        patterns = await generator.generate(context)

    return write_pattern_notes(
        config.vault_path,
        patterns,
        collections_folder=config.pattern_collections_folder,
        patterns_folder=config.grammar_patterns_folder,
    )


def run_generate_patterns(config: Config, request_note: Path) -> tuple[Path, list[Path]]:
    return asyncio.run(_generate(config, request_note))
