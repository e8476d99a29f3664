"""Generate grammar patterns: prompt the LLM, review the draft, validate JSON."""

from __future__ import annotations

import json
import re
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..error_codes import ErrorCode
from ..exceptions import PatternGenerationError
from ..utils.logging import get_logger
from .context import GenerationContext
from .llm_client import chat_completion
from .prompts import build_generation_messages, build_review_messages

logger = get_logger(__name__)

_JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


class PatternGrammar(BaseModel):
    """Grammar breakdown of a pattern; unknown keys from the model are kept."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    structure: str = ""
    nouns: list[dict[str, Any]] = Field(default_factory=list)
    verbs: list[dict[str, Any]] = Field(default_factory=list)
    other_words: list[dict[str, Any]] = Field(default_factory=list, alias="otherWords")

    @field_validator("nouns", "verbs", "other_words", mode="before")
    @classmethod
    def _as_object_list(cls, value: Any) -> list[dict[str, Any]]:
        if value is None:
            return []
        if isinstance(value, dict):
            return [value]
        if isinstance(value, list):
            return [item for item in value if isinstance(item, dict)]
        return []


class GrammarPattern(BaseModel):
    """One drill phrase with its translation."""

    model_config = ConfigDict(extra="ignore")

    czech: str = Field(min_length=1)
    russian: str = Field(min_length=1)
    grammar: PatternGrammar = Field(default_factory=PatternGrammar)


def clean_json_response(text: str) -> str:
    """Strip Markdown code fences around a JSON answer."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        end_fence = cleaned.rfind("```")
        if end_fence > 3:
            first_newline = cleaned.find("\n")
            start = first_newline + 1 if 0 <= first_newline < end_fence else 3
            cleaned = cleaned[start:end_fence].strip()
    return cleaned


def parse_patterns_json(text: str) -> list[dict[str, Any]]:
    """Extract the JSON array of patterns from an LLM answer.

    Raises:
        PatternGenerationError: If no JSON array can be read
    """
    cleaned = clean_json_response(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        match = _JSON_ARRAY_RE.search(cleaned)
        if not match:
            raise PatternGenerationError(
                "LLM answer contains no JSON array",
                error_code=ErrorCode.PAT_BAD_JSON.value,
                context={"preview": cleaned[:200]},
            ) from None
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise PatternGenerationError(
                "LLM answer contains malformed JSON",
                suggestion=str(e),
                error_code=ErrorCode.PAT_BAD_JSON.value,
                context={"preview": cleaned[:200]},
            ) from e

    if not isinstance(data, list):
        raise PatternGenerationError(
            f"Expected a JSON array of patterns, got {type(data).__name__}",
            error_code=ErrorCode.PAT_BAD_JSON.value,
        )
    return [item for item in data if isinstance(item, dict)]


def validate_patterns(items: list[dict[str, Any]]) -> list[GrammarPattern]:
    """Validate raw pattern dicts, dropping the ones without czech/russian text.

    Raises:
        PatternGenerationError: If no item is a valid pattern
    """
    patterns: list[GrammarPattern] = []
    for index, item in enumerate(items):
        try:
            patterns.append(GrammarPattern.model_validate(item))
        except ValidationError as e:
            logger.warning("pattern_dropped", index=index, error=str(e))
    if not patterns:
        raise PatternGenerationError(
            "LLM returned no valid patterns",
            error_code=ErrorCode.PAT_BAD_JSON.value,
            context={"items": len(items)},
        )
    return patterns


class PatternGenerator:
    """Two-pass pattern generation: draft, then review and enrichment."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4",
        pattern_count: int = 20,
        timeout: float = 120.0,
    ):
        self.client = client
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.pattern_count = pattern_count
        self.timeout = timeout

    async def _ask(self, messages: list[dict[str, str]], stage: str) -> list[dict[str, Any]]:
        result = await chat_completion(
            self.client,
            self.base_url,
            self.api_key,
            self.model,
            messages,
            timeout=self.timeout,
        )
        if not result:
            raise PatternGenerationError(
                f"Pattern {stage} request failed: {result.error}",
                suggestion="Check openai_api_key, openai_base_url and pattern_model",
                error_code=ErrorCode.PAT_LLM_FAILED.value,
                context={"stage": stage, "status_code": result.status_code},
            )
        return parse_patterns_json(result.content)

    async def generate(self, context: GenerationContext) -> list[GrammarPattern]:
        """Generate and review patterns for the given context.

        Raises:
            PatternGenerationError: If a request fails or its answer is unusable
        """
        draft = await self._ask(
            build_generation_messages(context, self.pattern_count), stage="generation"
        )
        logger.info("patterns_drafted", count=len(draft), model=self.model)

        reviewed = await self._ask(build_review_messages(draft), stage="review")
        patterns = validate_patterns(reviewed)
        logger.info("patterns_reviewed", count=len(patterns), dropped=len(reviewed) - len(patterns))
        return patterns
