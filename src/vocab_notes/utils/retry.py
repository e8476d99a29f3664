"""Bounded retry loop with exponential backoff."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from vocab_notes.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[None]]


async def retry_async(
    func: Callable[[], Awaitable[T]],
    *,
    retries: int = 1,
    initial_delay: float = 10.0,
    backoff_factor: float = 2.0,
    exceptions: tuple[type[BaseException], ...] = (Exception,),
    sleep: SleepFunc = asyncio.sleep,
    operation: str = "",
) -> T:
    """Call ``func`` until it succeeds or ``retries`` extra attempts are used up.

    The first retry waits ``initial_delay`` seconds, every following one
    ``backoff_factor`` times longer. The last exception is re-raised once the
    attempts are exhausted.

    Args:
        func: Zero-argument coroutine factory to call
        retries: Number of retries after the first attempt
        initial_delay: Delay before the first retry, in seconds
        backoff_factor: Multiplier applied to the delay after each retry
        exceptions: Exception types that trigger a retry
        sleep: Awaitable sleep function, injected so tests do not wait
        operation: Name used in log events
    """
    if retries < 0:
        msg = f"retries must be >= 0, got {retries}"
        raise ValueError(msg)

    max_attempts = retries + 1
    delay = initial_delay
    retry_start_time = time.monotonic()
    cumulative_wait_time = 0.0

    for attempt in range(1, max_attempts + 1):
        try:
            result = await func()
        except exceptions as e:
            if attempt == max_attempts:
                logger.error(
                    "retry_exhausted",
                    operation=operation,
                    attempts=attempt,
                    error=str(e),
                    error_type=type(e).__name__,
                    cumulative_wait_time=round(cumulative_wait_time, 2),
                )
                raise

            logger.warning(
                "retry_attempt",
                operation=operation,
                attempt=attempt,
                max_attempts=max_attempts,
                delay=delay,
                error=str(e),
                error_type=type(e).__name__,
            )
            await sleep(delay)
            cumulative_wait_time += delay
            delay *= backoff_factor
        else:
            if attempt > 1:
                logger.info(
                    "retry_succeeded",
                    operation=operation,
                    attempt=attempt,
                    total_retry_time=round(time.monotonic() - retry_start_time, 2),
                )
            return result

    # Unreachable: the loop either returns or re-raises on the last attempt.
    msg = "retry loop exited without a result"
    raise RuntimeError(msg)
