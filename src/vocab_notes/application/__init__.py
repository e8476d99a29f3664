"""Application layer: batch processing of vocabulary tables and word notes."""

from .word_note_service import WordNoteService

__all__ = ["WordNoteService"]
