"""Structured error codes for machine-readable error handling.

Error codes follow the format: {DOMAIN}-{CATEGORY}-{NUMBER}

Error Domains:
    NOTE - Word note reconciliation errors
    TBL  - Vocabulary table errors
    GRM  - Grammar analysis service errors
    PAT  - Pattern generation errors
    CFG  - Configuration errors

Usage:
    from vocab_notes.error_codes import ErrorCode

    logger.error(
        "grammar_request_timeout",
        error_code=ErrorCode.GRM_TIMEOUT.value,
        word="dělat",
    )
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes for machine-readable handling.

    All error codes inherit from str for JSON serialization compatibility.
    """

    # =========================================================================
    # Note Errors (NOTE-xxx-xxx)
    # =========================================================================
    NOTE_MISSING_HEADWORD = "NOTE-FIELD-001"
    """Word record or note frontmatter has no headword."""

    NOTE_MALFORMED_FRONTMATTER = "NOTE-YAML-001"
    """Word note has no frontmatter block to read the word from."""

    # =========================================================================
    # Table Errors (TBL-xxx-xxx)
    # =========================================================================
    TBL_NOT_FOUND = "TBL-FIND-001"
    """No vocabulary table with the configured columns was found."""

    # =========================================================================
    # Grammar Service Errors (GRM-xxx-xxx)
    # =========================================================================
    GRM_TIMEOUT = "GRM-TIMEOUT-001"
    """Grammar analysis request timed out."""

    GRM_CONNECTION_FAILED = "GRM-CONN-001"
    """Grammar analysis server could not be reached."""

    GRM_HTTP_STATUS = "GRM-HTTP-001"
    """Grammar analysis server answered with a non-success status."""

    GRM_BAD_RESPONSE = "GRM-BODY-001"
    """Grammar analysis response body was not a valid analysis."""

    # =========================================================================
    # Pattern Generation Errors (PAT-xxx-xxx)
    # =========================================================================
    PAT_LLM_FAILED = "PAT-LLM-001"
    """Chat completion request failed."""

    PAT_BAD_JSON = "PAT-JSON-001"
    """Chat completion did not contain a usable JSON array."""

    PAT_CONTEXT_INVALID = "PAT-CTX-001"
    """Pattern request note could not be turned into a prompt context."""

    # =========================================================================
    # Configuration Errors (CFG-xxx-xxx)
    # =========================================================================
    CFG_INVALID = "CFG-INVALID-001"
    """Configuration value is invalid."""

    CFG_MISSING_KEY = "CFG-KEY-001"
    """Required configuration key is missing."""

