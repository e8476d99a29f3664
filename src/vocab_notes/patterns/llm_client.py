"""Chat completion call against an OpenAI-compatible API."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ChatCompletionResult:
    """Result of a chat completion call.

    Attributes:
        success: Whether the call succeeded
        content: Generated text content
        error: Error message (if failed)
        status_code: HTTP status code
        model: Model that answered
        usage: Token usage statistics
        latency_ms: Request latency in milliseconds
    """

    success: bool
    content: str = ""
    error: str | None = None
    status_code: int | None = None
    model: str = ""
    usage: dict[str, int] = field(default_factory=dict)
    latency_ms: float = 0.0

    def __bool__(self) -> bool:
        return self.success


async def chat_completion(
    client: httpx.AsyncClient,
    base_url: str,
    api_key: str,
    model: str,
    messages: list[dict[str, str]],
    temperature: float = 0.7,
    timeout: float = 120.0,
) -> ChatCompletionResult:
    """Make a chat completion API call.

    Transport and HTTP errors are reported in the result, never raised.

    Args:
        client: HTTP client instance
        base_url: API base URL, e.g. ``https://api.openai.com/v1``
        api_key: Bearer token
        model: Model identifier
        messages: List of message dicts with role and content
        temperature: Sampling temperature
        timeout: Request timeout in seconds
    """
    start_time = time.perf_counter()
    payload: dict[str, Any] = {
        "model": model,
        "messages": messages,
        "temperature": temperature,
    }

    try:
        response = await client.post(
            f"{base_url.rstrip('/')}/chat/completions",
            headers={"Authorization": f"Bearer {api_key}"},
            json=payload,
            timeout=timeout,
        )
    except httpx.TimeoutException:
        logger.warning("chat_completion_timeout", model=model, timeout=timeout)
        return ChatCompletionResult(
            success=False,
            error=f"Request timeout after {timeout}s",
            model=model,
            latency_ms=(time.perf_counter() - start_time) * 1000,
        )
    except httpx.RequestError as e:
        logger.error("chat_completion_request_error", model=model, error=str(e))
        return ChatCompletionResult(
            success=False,
            error=str(e),
            model=model,
            latency_ms=(time.perf_counter() - start_time) * 1000,
        )

    latency_ms = (time.perf_counter() - start_time) * 1000
    if response.status_code != 200:
        error_text = response.text[:500]
        logger.warning(
            "chat_completion_error",
            status_code=response.status_code,
            error=error_text,
            model=model,
        )
        return ChatCompletionResult(
            success=False,
            error=f"HTTP {response.status_code}: {error_text}",
            status_code=response.status_code,
            model=model,
            latency_ms=latency_ms,
        )

    try:
        data = response.json()
    except ValueError:
        return ChatCompletionResult(
            success=False,
            error="Response body is not JSON",
            status_code=response.status_code,
            model=model,
            latency_ms=latency_ms,
        )

    choices = data.get("choices") or []
    if not choices:
        return ChatCompletionResult(
            success=False,
            error="No choices in response",
            status_code=200,
            model=model,
            latency_ms=latency_ms,
        )

    content = (choices[0].get("message") or {}).get("content") or ""
    usage = data.get("usage") or {}
    logger.info(
        "chat_completion",
        model=data.get("model", model),
        prompt_tokens=usage.get("prompt_tokens"),
        completion_tokens=usage.get("completion_tokens"),
        latency_ms=round(latency_ms, 2),
    )
    return ChatCompletionResult(
        success=True,
        content=content,
        status_code=200,
        model=data.get("model", model),
        usage=usage,
        latency_ms=latency_ms,
    )
