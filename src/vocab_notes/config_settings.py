"""Settings model for vocab-notes."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .error_codes import ErrorCode
from .exceptions import ConfigurationError


class Config(BaseSettings):
    """Tool configuration using pydantic-settings.

    Values come from (highest priority first) explicit keyword arguments,
    ``VOCAB_NOTES_*`` environment variables, ``.env`` and field defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="VOCAB_NOTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Vault layout
    vault_path: Path = Field(default=Path(), description="Path to Obsidian vault")
    new_words_folder: str = Field(
        default="CzechGrammarWords",
        description="Vault-relative folder for generated word notes",
    )
    processed_tables_folder: str = Field(
        default="processed word tables",
        description="Subfolder (inside a processed folder) for finished table notes",
    )
    flashcards_note_section: str = Field(
        default="Flashcards", description="Heading of the flashcards section"
    )

    # Vocabulary table columns
    word_column: str = "Slovo"
    translation_column: str = "Překlad"
    phrase_column: str = "Výraz"
    phrase_translation_column: str = "Překlad Výrazu"
    note_link_column: str = "Poznámka"
    part_of_speech_column: str = "Slovní druh"

    # Remote grammar analysis
    use_remote_grammar_analysis: bool = False
    server_urls: list[str] = Field(default_factory=list)
    analysis_request_delay: float = Field(default=10.0, ge=0)
    analysis_timeout: float = Field(default=10.0, gt=0)
    analysis_retries: int = Field(default=1, ge=0)
    analysis_retry_delay: float = Field(default=10.0, ge=0)

    # Pattern generation
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    pattern_model: str = "gpt-4"
    pattern_count: int = Field(default=20, ge=1)
    pattern_collections_folder: str = "a2_pattern_collections"
    grammar_patterns_folder: str = "a2_grammar_patterns"
    llm_timeout: float = Field(default=120.0, gt=0)

    # Logging
    log_level: str = "INFO"
    log_dir: Path | None = None

    @field_validator("vault_path", mode="before")
    @classmethod
    def parse_vault_path(cls, v: Any) -> Path:
        """Convert string to an expanded Path."""
        if v is None or v == "":
            return Path()
        return Path(str(v)).expanduser()

    @field_validator("log_dir", mode="before")
    @classmethod
    def parse_log_dir(cls, v: Any) -> Path | None:
        if v is None or v == "":
            return None
        return Path(str(v)).expanduser()

    @field_validator("server_urls", mode="before")
    @classmethod
    def parse_server_urls(cls, v: Any) -> list[str]:
        """Accept a list or a comma-separated string; drop trailing slashes."""
        if v is None:
            return []
        if isinstance(v, str):
            v = [part for part in v.split(",")]
        return [str(url).strip().rstrip("/") for url in v if str(url).strip()]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Invalid log level: {v}"
            raise ValueError(msg)
        return level

    @property
    def words_folder_path(self) -> Path:
        return self.vault_path / self.new_words_folder

    @property
    def column_names(self) -> dict[str, str]:
        """Logical column -> configured header text."""
        return {
            "word": self.word_column,
            "translation": self.translation_column,
            "phrase": self.phrase_column,
            "phrase_translation": self.phrase_translation_column,
            "note_link": self.note_link_column,
            "part_of_speech": self.part_of_speech_column,
        }

    def validate_config(self) -> None:
        """Check settings that depend on each other."""
        if self.use_remote_grammar_analysis and not self.server_urls:
            msg = "Remote grammar analysis is enabled but no server URLs are configured"
            raise ConfigurationError(
                msg,
                suggestion="Set server_urls in config.yaml or disable use_remote_grammar_analysis",
                error_code=ErrorCode.CFG_MISSING_KEY.value,
            )
        if self.vault_path != Path() and not self.vault_path.is_dir():
            msg = f"Vault path does not exist: {self.vault_path}"
            raise ConfigurationError(
                msg,
                suggestion="Point vault_path at an existing Obsidian vault directory",
                error_code=ErrorCode.CFG_INVALID.value,
                context={"vault_path": str(self.vault_path)},
            )
        if self.word_column == self.translation_column:
            msg = "Word and translation columns must differ"
            raise ConfigurationError(msg, error_code=ErrorCode.CFG_INVALID.value)

    def require_openai_key(self) -> str:
        """Return the LLM API key or raise when it is missing."""
        if not self.openai_api_key:
            msg = "OpenAI API key is not configured"
            raise ConfigurationError(
                msg,
                suggestion="Set openai_api_key in config.yaml or VOCAB_NOTES_OPENAI_API_KEY",
                error_code=ErrorCode.CFG_MISSING_KEY.value,
            )
        return self.openai_api_key
