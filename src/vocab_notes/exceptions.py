"""Centralized exception hierarchy for vocab-notes.

Exception Hierarchy:
    VocabNotesError (base)
     ConfigurationError - Configuration loading/validation errors
     NoteError - Word note errors
        MalformedInputError - Frontmatter or table text that cannot be read as expected
        MissingRequiredFieldError - Word without a headword
        TableNotFoundError - Note without a usable vocabulary table
     GrammarServiceError - Grammar analysis service errors
        GrammarServiceTimeoutError - Analysis request timed out
        GrammarResponseError - Analysis response could not be used
     PatternGenerationError - LLM pattern generation errors

Usage Examples:
    try:
        text = reconcile(request)
    except MissingRequiredFieldError as e:
        logger.error("word_skipped", error=str(e))

    raise GrammarServiceTimeoutError(
        "Grammar analysis timed out",
        error_code=ErrorCode.GRM_TIMEOUT.value,
        context={"word": "dělat", "timeout_seconds": 10},
    )
"""

from typing import Any


class VocabNotesError(Exception):
    """Base exception for all vocab-notes errors.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
        error_code: Structured error code for machine-readable handling
        context: Additional context for debugging (e.g., file paths, words)
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.message = message
        self.suggestion = suggestion
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with error code and suggestion if available."""
        parts = []
        if self.error_code:
            parts.append(f"[{self.error_code}] {self.message}")
        else:
            parts.append(self.message)
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)


# Configuration Errors


class ConfigurationError(VocabNotesError):
    """Configuration loading or validation errors.

    Raised when:
    - Config file is missing or malformed
    - Remote analysis is enabled without server URLs
    - Pattern generation is requested without an API key
    """


# Note Errors


class NoteError(VocabNotesError):
    """Base class for word note errors."""


class MalformedInputError(NoteError):
    """Input text does not have the expected shape.

    The reconciliation core never raises this for frontmatter (it degrades to a
    partial mapping); it is raised by readers that need a specific structure.
    """


class MissingRequiredFieldError(NoteError):
    """A word has no headword.

    The only condition that aborts reconciliation of a single word.
    """


class TableNotFoundError(NoteError):
    """No vocabulary table with the configured columns exists in a note."""


# Grammar Service Errors


class GrammarServiceError(VocabNotesError):
    """Grammar analysis service communication errors.

    Raised when:
    - The server cannot be reached
    - The server answers with a non-success status after all retries
    """


class GrammarServiceTimeoutError(GrammarServiceError):
    """Grammar analysis request timed out after all retries."""


class GrammarResponseError(GrammarServiceError):
    """Grammar analysis response body is not a usable analysis."""


# Pattern Generation Errors


class PatternGenerationError(VocabNotesError):
    """LLM pattern generation errors.

    Raised when:
    - The chat completion request fails
    - The completion does not contain a JSON array of patterns
    - The pattern request note is missing or unreadable
    """
