"""Async HTTP client for the remote Czech grammar analyzer."""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from ..error_codes import ErrorCode
from ..exceptions import (
    ConfigurationError,
    GrammarResponseError,
    GrammarServiceError,
    GrammarServiceTimeoutError,
)
from ..models import GrammarAnalysis
from ..utils.logging import get_logger
from ..utils.retry import SleepFunc, retry_async
from .formatter import complete_analysis, format_grammar_result

logger = get_logger(__name__)

ANALYZE_PATH = "/api/analyze"


@dataclass(frozen=True)
class EndpointRotation:
    """Round-robin position over the configured analyzer endpoints."""

    endpoints: tuple[str, ...]
    next_index: int = 0

    def pick_next(self) -> tuple[str, EndpointRotation]:
        """Return the endpoint to use now and the rotation for the next call."""
        if not self.endpoints:
            msg = "No grammar analysis server URLs configured"
            raise ConfigurationError(
                msg,
                suggestion="Add at least one entry to server_urls",
                error_code=ErrorCode.CFG_MISSING_KEY.value,
            )
        index = self.next_index % len(self.endpoints)
        endpoint = self.endpoints[index]
        return endpoint, EndpointRotation(self.endpoints, (index + 1) % len(self.endpoints))


class GrammarAnalysisClient:
    """Client for ``GET {server}/api/analyze?word=...``.

    Each call picks the next endpoint round-robin and retries network errors
    and non-success answers with exponential backoff before giving up.
    """

    def __init__(
        self,
        endpoints: list[str] | tuple[str, ...],
        timeout: float = 10.0,
        retries: int = 1,
        retry_delay: float = 10.0,
        sleep: SleepFunc | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the client.

        Args:
            endpoints: Analyzer base URLs
            timeout: Per-request timeout in seconds
            retries: Retries after the first attempt
            retry_delay: Delay before the first retry, doubled for each next one
            sleep: Awaitable sleep used between retries
            http_client: Shared httpx client; one is created when omitted
        """
        self.rotation = EndpointRotation(tuple(url.rstrip("/") for url in endpoints))
        self.timeout = timeout
        self.retries = retries
        self.retry_delay = retry_delay
        self._sleep = sleep
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

        logger.debug(
            "grammar_client_initialized",
            endpoints=len(self.rotation.endpoints),
            timeout=timeout,
            retries=retries,
        )

    async def __aenter__(self) -> GrammarAnalysisClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _next_endpoint(self) -> str:
        endpoint, self.rotation = self.rotation.pick_next()
        return endpoint

    async def _fetch(self, url: str, word: str) -> Any:
        response = await self._client.get(url, params={"word": word}, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    async def analyze(self, word: str) -> GrammarAnalysis:
        """Analyze one word.

        Raises:
            GrammarServiceTimeoutError: If every attempt timed out
            GrammarServiceError: If the server was unreachable or kept failing
            GrammarResponseError: If the answer is not a usable analysis
        """
        endpoint = self._next_endpoint()
        url = f"{endpoint}{ANALYZE_PATH}"
        context = {"word": word, "endpoint": endpoint}
        retry_kwargs: dict[str, Any] = {}
        if self._sleep is not None:
            retry_kwargs["sleep"] = self._sleep

        try:
            payload = await retry_async(
                lambda: self._fetch(url, word),
                retries=self.retries,
                initial_delay=self.retry_delay,
                exceptions=(httpx.RequestError, httpx.HTTPStatusError),
                operation="grammar_analyze",
                **retry_kwargs,
            )
        except httpx.TimeoutException as e:
            logger.error("grammar_request_timeout", word=word, endpoint=endpoint)
            msg = f"Grammar analysis timed out for '{word}'"
            raise GrammarServiceTimeoutError(
                msg,
                suggestion="The analyzer may be overloaded; try again later",
                error_code=ErrorCode.GRM_TIMEOUT.value,
                context={**context, "timeout_seconds": self.timeout},
            ) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("grammar_request_status_error", word=word, endpoint=endpoint, status=status)
            msg = f"Grammar analysis failed for '{word}' with status {status}"
            raise GrammarServiceError(
                msg,
                error_code=ErrorCode.GRM_HTTP_STATUS.value,
                context={**context, "status": status},
            ) from e
        except httpx.RequestError as e:
            logger.error("grammar_request_failed", word=word, endpoint=endpoint, error=str(e))
            msg = f"Cannot reach grammar analyzer at {endpoint}"
            raise GrammarServiceError(
                msg,
                suggestion="Check server_urls and that the analyzer is running",
                error_code=ErrorCode.GRM_CONNECTION_FAILED.value,
                context=context,
            ) from e
        except ValueError as e:
            msg = f"Grammar analyzer returned invalid JSON for '{word}'"
            raise GrammarResponseError(
                msg, error_code=ErrorCode.GRM_BAD_RESPONSE.value, context=context
            ) from e

        return self._to_analysis(word, payload, context)

    def _to_analysis(self, word: str, payload: Any, context: dict[str, Any]) -> GrammarAnalysis:
        if not isinstance(payload, dict):
            msg = f"Grammar analyzer returned {type(payload).__name__} instead of an object"
            raise GrammarResponseError(
                msg, error_code=ErrorCode.GRM_BAD_RESPONSE.value, context=context
            )
        payload.setdefault("word", word)
        try:
            analysis = GrammarAnalysis.model_validate(complete_analysis(payload))
            analysis.formatted_result = format_grammar_result(analysis)
        except (ValidationError, TypeError, KeyError, ValueError, AttributeError) as e:
            msg = f"Grammar analysis for '{word}' has an unexpected shape"
            raise GrammarResponseError(
                msg,
                suggestion=str(e),
                error_code=ErrorCode.GRM_BAD_RESPONSE.value,
                context=context,
            ) from e

        logger.debug(
            "grammar_analysis_received",
            word=word,
            part_of_speech=analysis.part_of_speech_type.value,
            pattern=analysis.pattern,
        )
        return analysis
