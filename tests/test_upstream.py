"""Tests for the FMP upstream client."""

import httpx
import pytest
from gold_api.services.errors import UpstreamError
from gold_api.services.upstream import FmpClient

BASE_URL = "https://fmp.test/api/v3"


def _client(handler) -> FmpClient:
    return FmpClient(
        api_key="test-key",
        base_url=BASE_URL,
        timeout=1,
        transport=httpx.MockTransport(handler),
    )


class TestFetchQuote:
    @pytest.mark.asyncio
    async def test_returns_first_quote(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["apikey"] = request.url.params["apikey"]
            return httpx.Response(200, json=[{"symbol": "GCUSD", "price": 2001.5}])

        quote = await _client(handler).fetch_quote("GCUSD")
        assert quote == {"symbol": "GCUSD", "price": 2001.5}
        assert seen == {"path": "/api/v3/quote/GCUSD", "apikey": "test-key"}

    @pytest.mark.asyncio
    async def test_empty_list_is_none(self):
        client = _client(lambda request: httpx.Response(200, json=[]))
        assert await client.fetch_quote("GLD") is None

    @pytest.mark.asyncio
    async def test_http_error_raises(self):
        client = _client(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(UpstreamError, match="HTTP 500"):
            await client.fetch_quote("GCUSD")

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(UpstreamError, match="Timeout"):
            await _client(handler).fetch_quote("GCUSD")

    @pytest.mark.asyncio
    async def test_error_body_raises(self):
        client = _client(
            lambda request: httpx.Response(200, json={"Error Message": "Invalid API KEY."})
        )
        with pytest.raises(UpstreamError, match="Invalid API KEY"):
            await client.fetch_quote("GCUSD")

    @pytest.mark.asyncio
    async def test_non_json_raises(self):
        client = _client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(UpstreamError):
            await client.fetch_quote("GCUSD")


class TestFetchHistorical:
    @pytest.mark.asyncio
    async def test_passes_date_range_and_returns_raw_payload(self):
        payload = {"symbol": "GCUSD", "historical": [{"date": "2026-01-02", "close": 2050.0}]}
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["from"] = request.url.params["from"]
            seen["to"] = request.url.params["to"]
            return httpx.Response(200, json=payload)

        result = await _client(handler).fetch_historical("GCUSD", "2026-01-01", "2026-01-31")
        assert result == payload
        assert seen == {
            "path": "/api/v3/historical-price-full/GCUSD",
            "from": "2026-01-01",
            "to": "2026-01-31",
        }

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(UpstreamError):
            await _client(handler).fetch_historical("GLD", "2026-01-01", "2026-01-31")


def test_configured():
    assert FmpClient(api_key="k").configured
    assert not FmpClient(api_key=None).configured
