"""Single-concurrency request queue in front of the grammar analyzer."""

from __future__ import annotations

import asyncio
from typing import Protocol

from ..exceptions import GrammarServiceError
from ..models import GrammarAnalysis
from ..utils.logging import get_logger
from ..utils.retry import SleepFunc

logger = get_logger(__name__)


class Analyzer(Protocol):
    async def analyze(self, word: str) -> GrammarAnalysis: ...


class AnalysisQueue:
    """Funnel analysis requests through one slot with a fixed gap between them.

    The analyzer is rate limited, so requests never overlap and consecutive
    requests are ``delay`` seconds apart. A failed analysis is logged and
    reported as None so the note can still be written without grammar data.
    """

    def __init__(
        self,
        analyzer: Analyzer,
        delay: float = 10.0,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self.analyzer = analyzer
        self.delay = delay
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._has_run = False
        self.completed = 0
        self.failed = 0

    async def submit(self, word: str) -> GrammarAnalysis | None:
        """Analyze ``word`` once the previous request has finished."""
        async with self._lock:
            if self._has_run and self.delay > 0:
                await self._sleep(self.delay)
            self._has_run = True

            try:
                analysis = await self.analyzer.analyze(word)
            except GrammarServiceError as e:
                self.failed += 1
                logger.warning(
                    "word_analysis_failed",
                    word=word,
                    error=e.message,
                    error_code=e.error_code,
                )
                return None

            self.completed += 1
            return analysis
