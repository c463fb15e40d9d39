"""Unit tests for fetching rankings pages."""

import httpx
import pytest

from dinkrank.config import settings
from dinkrank.errors import FetchFailed, InvalidRequest
from dinkrank.scrape.source import RankingsSource, normalize_mode

URLS = {
    "doubles": "https://rankings.test/doubles",
    "singles": "https://rankings.test/singles",
}


def _source(handler, sleeps=None, max_attempts=3):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return RankingsSource(
        client=client,
        urls=URLS,
        max_attempts=max_attempts,
        retry_delay=0.0,
        sleep=(sleeps.append if sleeps is not None else lambda _: None),
    )


class TestNormalizeMode:
    def test_valid(self):
        assert normalize_mode("doubles") == "doubles"
        assert normalize_mode(" Singles ") == "singles"

    def test_default(self):
        assert normalize_mode(None) == "doubles"
        assert normalize_mode("") == "doubles"

    def test_invalid(self):
        with pytest.raises(InvalidRequest) as exc_info:
            normalize_mode("mixed")
        assert exc_info.value.code == "BAD_MODE"


class TestRankingsSource:
    """Tests for RankingsSource.fetch with a mocked transport."""

    def test_fetch_by_mode(self):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, text="| Name | Rating |")

        with _source(handler) as source:
            assert source.fetch("singles") == "| Name | Rating |"
            source.fetch("DOUBLES")

        assert requested == [URLS["singles"], URLS["doubles"]]

    def test_client_error_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(404)

        source = _source(handler)
        with pytest.raises(FetchFailed) as exc_info:
            source.fetch("doubles")

        assert len(calls) == 1
        assert "HTTP 404" in str(exc_info.value)
        assert exc_info.value.code == "FETCH_FAIL"

    def test_server_error_retried(self):
        responses = [httpx.Response(503), httpx.Response(200, text="ok")]
        sleeps = []

        source = _source(lambda request: responses.pop(0), sleeps=sleeps)

        assert source.fetch("doubles") == "ok"
        assert len(sleeps) == 1

    def test_gives_up_after_max_attempts(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        sleeps = []
        source = _source(handler, sleeps=sleeps, max_attempts=3)
        with pytest.raises(FetchFailed) as exc_info:
            source.fetch("doubles")

        assert len(calls) == 3
        assert len(sleeps) == 2
        assert "ConnectError" in str(exc_info.value)

    def test_attempts_setting_counts_first_try(self, monkeypatch):
        monkeypatch.setattr(settings, "fetch_max_attempts", 2)
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        source = RankingsSource(
            client=httpx.Client(transport=httpx.MockTransport(handler)),
            urls=URLS,
            retry_delay=0.0,
            sleep=lambda _: None,
        )
        with pytest.raises(FetchFailed):
            source.fetch("singles")

        assert source.max_attempts == 2
        assert len(calls) == 2

    def test_unknown_mode(self):
        source = _source(lambda request: httpx.Response(200))
        with pytest.raises(InvalidRequest):
            source.fetch("mixed")
