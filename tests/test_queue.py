"""Tests for the single-slot analysis queue."""

import asyncio

import pytest

from tests.fixtures import MockAnalyzer, RecordingSleep
from vocab_notes.grammar.queue import AnalysisQueue
from vocab_notes.models import GrammarAnalysis


class TestAnalysisQueue:
    """Spacing, serialization and failure handling."""

    @pytest.mark.asyncio
    async def test_requests_are_spaced(self) -> None:
        """No delay before the first request, ``delay`` before every later one."""
        sleep = RecordingSleep()
        queue = AnalysisQueue(MockAnalyzer(), delay=10.0, sleep=sleep)

        for word in ("a", "b", "c"):
            await queue.submit(word)

        assert sleep.delays == [10.0, 10.0]
        assert queue.completed == 3

    @pytest.mark.asyncio
    async def test_requests_never_overlap(self) -> None:
        analyzer = MockAnalyzer()
        queue = AnalysisQueue(analyzer, delay=0)

        await asyncio.gather(*(queue.submit(word) for word in ("a", "b", "c", "d")))

        assert analyzer.max_active == 1
        assert analyzer.call_history == ["a", "b", "c", "d"]

    @pytest.mark.asyncio
    async def test_failure_returns_none(self) -> None:
        analyzer = MockAnalyzer(failing={"b"})
        queue = AnalysisQueue(analyzer, delay=0)

        results = [await queue.submit(word) for word in ("a", "b", "c")]

        assert results[1] is None
        assert isinstance(results[0], GrammarAnalysis)
        assert isinstance(results[2], GrammarAnalysis)
        assert queue.failed == 1
        assert queue.completed == 2

    @pytest.mark.asyncio
    async def test_zero_delay_never_sleeps(self) -> None:
        sleep = RecordingSleep()
        queue = AnalysisQueue(MockAnalyzer(), delay=0, sleep=sleep)

        await queue.submit("a")
        await queue.submit("b")

        assert sleep.delays == []
