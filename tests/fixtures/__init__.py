"""Test fixtures package."""

from .mock_analyzer import MockAnalyzer, RecordingSleep
from .sample_notes import VOCABULARY_TABLE_NOTE

__all__ = [
    "VOCABULARY_TABLE_NOTE",
    "MockAnalyzer",
    "RecordingSleep",
]
