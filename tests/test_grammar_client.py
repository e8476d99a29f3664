"""Tests for the grammar analyzer HTTP client."""

import httpx
import pytest
import respx

from tests.fixtures import RecordingSleep
from vocab_notes.exceptions import (
    ConfigurationError,
    GrammarResponseError,
    GrammarServiceError,
    GrammarServiceTimeoutError,
)
from vocab_notes.grammar.client import EndpointRotation, GrammarAnalysisClient
from vocab_notes.models import PartOfSpeech

SERVER = "http://grammar.test"
ANALYZE_URL = f"{SERVER}/api/analyze"

DELAT_PAYLOAD = {
    "word": "dělat",
    "slovnikData": {"partOfSpeech": "sloveso nedokonavé"},
    "priruckaData": {
        "": ["jednotné", "množné"],
        "1. osoba": ["dělám", "děláme"],
        "2. osoba": ["děláš", "děláte"],
    },
}


def _client(sleep, **kwargs) -> GrammarAnalysisClient:
    return GrammarAnalysisClient(kwargs.pop("endpoints", [SERVER]), sleep=sleep, **kwargs)


class TestEndpointRotation:
    """Round-robin value object."""

    def test_pick_next_cycles(self) -> None:
        rotation = EndpointRotation(("a", "b"))

        first, rotation = rotation.pick_next()
        second, rotation = rotation.pick_next()
        third, rotation = rotation.pick_next()

        assert [first, second, third] == ["a", "b", "a"]

    def test_pick_next_does_not_mutate(self) -> None:
        rotation = EndpointRotation(("a", "b"))
        rotation.pick_next()

        assert rotation.next_index == 0

    def test_no_endpoints(self) -> None:
        with pytest.raises(ConfigurationError):
            EndpointRotation(()).pick_next()


class TestGrammarAnalysisClient:
    """Requests, retries and error mapping."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_analyze_success(self) -> None:
        route = respx.get(ANALYZE_URL).mock(
            return_value=httpx.Response(200, json=DELAT_PAYLOAD)
        )

        async with _client(RecordingSleep()) as client:
            analysis = await client.analyze("dělat")

        assert route.calls.last.request.url.params["word"] == "dělat"
        assert analysis.part_of_speech_type is PartOfSpeech.VERB
        assert analysis.conjugation_pattern == "Dělat"
        assert analysis.conjugation_group == 1
        assert analysis.is_irregular is False
        assert analysis.formatted_result.startswith(
            "Část řeči: sloveso nedokonavé (Sloveso)\nVzor: Dělat\n"
        )
        assert "| 2. osoba | děláš | děláte |" in analysis.formatted_result

    @pytest.mark.asyncio
    @respx.mock
    async def test_endpoints_are_used_round_robin(self) -> None:
        route_a = respx.get("http://a.test/api/analyze").mock(
            return_value=httpx.Response(200, json={"word": "x"})
        )
        route_b = respx.get("http://b.test/api/analyze").mock(
            return_value=httpx.Response(200, json={"word": "x"})
        )

        async with _client(RecordingSleep(), endpoints=["http://a.test", "http://b.test/"]) as client:
            for _ in range(3):
                await client.analyze("x")

        assert route_a.call_count == 2
        assert route_b.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_retry_then_success(self) -> None:
        respx.get(ANALYZE_URL).mock(
            side_effect=[httpx.Response(500), httpx.Response(200, json=DELAT_PAYLOAD)]
        )
        sleep = RecordingSleep()

        async with _client(sleep, retries=1, retry_delay=10.0) as client:
            analysis = await client.analyze("dělat")

        assert analysis.conjugation_pattern == "Dělat"
        assert sleep.delays == [10.0]

    @pytest.mark.asyncio
    @respx.mock
    async def test_status_error_after_retries(self) -> None:
        """Backoff doubles and the last status is reported."""
        route = respx.get(ANALYZE_URL).mock(return_value=httpx.Response(503))
        sleep = RecordingSleep()

        async with _client(sleep, retries=2, retry_delay=10.0) as client:
            with pytest.raises(GrammarServiceError) as exc_info:
                await client.analyze("dělat")

        assert route.call_count == 3
        assert sleep.delays == [10.0, 20.0]
        assert exc_info.value.error_code == "GRM-HTTP-001"
        assert exc_info.value.context["status"] == 503

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout(self) -> None:
        respx.get(ANALYZE_URL).mock(side_effect=httpx.ReadTimeout)

        async with _client(RecordingSleep(), retries=0) as client:
            with pytest.raises(GrammarServiceTimeoutError) as exc_info:
                await client.analyze("dělat")

        assert exc_info.value.error_code == "GRM-TIMEOUT-001"

    @pytest.mark.asyncio
    @respx.mock
    async def test_connection_error(self) -> None:
        respx.get(ANALYZE_URL).mock(side_effect=httpx.ConnectError)

        async with _client(RecordingSleep(), retries=0) as client:
            with pytest.raises(GrammarServiceError) as exc_info:
                await client.analyze("dělat")

        assert not isinstance(exc_info.value, GrammarServiceTimeoutError)
        assert exc_info.value.error_code == "GRM-CONN-001"

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json_is_not_retried(self) -> None:
        route = respx.get(ANALYZE_URL).mock(
            return_value=httpx.Response(200, text="<html>oops</html>")
        )
        sleep = RecordingSleep()

        async with _client(sleep, retries=2) as client:
            with pytest.raises(GrammarResponseError):
                await client.analyze("dělat")

        assert route.call_count == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_object_body(self) -> None:
        respx.get(ANALYZE_URL).mock(return_value=httpx.Response(200, json=["dělat"]))

        async with _client(RecordingSleep()) as client:
            with pytest.raises(GrammarResponseError) as exc_info:
                await client.analyze("dělat")

        assert exc_info.value.error_code == "GRM-BODY-001"

    @pytest.mark.asyncio
    @respx.mock
    async def test_unexpected_field_type(self) -> None:
        respx.get(ANALYZE_URL).mock(
            return_value=httpx.Response(200, json={"partOfSpeechType": 5})
        )

        async with _client(RecordingSleep()) as client:
            with pytest.raises(GrammarResponseError):
                await client.analyze("dělat")

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_paradigm_cells_are_ignored(self) -> None:
        respx.get(ANALYZE_URL).mock(
            return_value=httpx.Response(
                200, json={"partOfSpeechFull": "Sloveso", "priruckaData": {"2. osoba": 5}}
            )
        )

        async with _client(RecordingSleep()) as client:
            analysis = await client.analyze("dělat")

        assert analysis.part_of_speech_type is PartOfSpeech.VERB
        assert analysis.second_person_singular == "NOT_DEFINED"
        assert analysis.conjugation_pattern == "NOT_DEFINED"
        assert analysis.paradigm == {}

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_text_part_of_speech(self) -> None:
        respx.get(ANALYZE_URL).mock(
            return_value=httpx.Response(200, json={"partOfSpeechFull": 5})
        )

        async with _client(RecordingSleep()) as client:
            with pytest.raises(GrammarResponseError) as exc_info:
                await client.analyze("dělat")

        assert exc_info.value.error_code == "GRM-BODY-001"
