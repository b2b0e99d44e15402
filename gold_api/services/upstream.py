"""Financial Modeling Prep client for gold quotes and daily history."""

import logging
from typing import Any

import httpx

from gold_api.config import FMP_API_KEY, FMP_BASE_URL, REQUEST_TIMEOUT
from gold_api.services.errors import UpstreamError

logger = logging.getLogger(__name__)


class FmpClient:
    """Thin async wrapper around the FMP REST endpoints.

    Failures (network, timeout, non-2xx, error bodies) raise UpstreamError.
    A successful call with no data returns None or an empty payload, so
    callers can tell "nothing there" apart from "could not ask".
    """

    def __init__(
        self,
        api_key: str | None = FMP_API_KEY,
        base_url: str = FMP_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def _get_json(self, path: str, params: dict[str, str]) -> Any:
        params = {**params, "apikey": self._api_key or ""}
        url = f"{self._base_url}/{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(url, params=params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Timeout requesting {path}") from e
        except httpx.HTTPStatusError as e:
            raise UpstreamError(f"{path} returned HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(f"Request to {path} failed: {e}") from e

        # FMP reports bad keys and limits as a 200 with an error body
        if isinstance(data, dict) and "Error Message" in data:
            raise UpstreamError(f"{path}: {data['Error Message']}")
        return data

    async def fetch_quote(self, symbol: str) -> dict[str, Any] | None:
        """Latest quote for a symbol, or None when the API has nothing for it."""
        data = await self._get_json(f"quote/{symbol}", {})
        if not isinstance(data, list):
            raise UpstreamError(f"Unexpected quote payload for {symbol}")
        return data[0] if data else None

    async def fetch_historical(self, symbol: str, start: str, end: str) -> list | dict:
        """Daily history between two ISO dates, inclusive.

        Returned as received: either a bare list of days or an object holding
        the list under "historical".
        """
        return await self._get_json(
            f"historical-price-full/{symbol}", {"from": start, "to": end}
        )


# Global instance
fmp_client = FmpClient()
