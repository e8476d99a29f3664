"""Grammar drill pattern generation with an LLM chat API."""

from .context import GenerationContext, build_generation_context
from .generator import GrammarPattern, PatternGenerator, parse_patterns_json
from .notes import render_collection_note, render_pattern_note, write_pattern_notes

__all__ = [
    "GenerationContext",
    "GrammarPattern",
    "PatternGenerator",
    "build_generation_context",
    "parse_patterns_json",
    "render_collection_note",
    "render_pattern_note",
    "write_pattern_notes",
]
