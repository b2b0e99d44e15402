"""Read-through fetching of gold prices.

Each data kind checks the cache, and on a miss asks the quote API,
normalizes the answer into canonical records and caches it:

    kind            cache key               sources                     TTL
    current quote   current_gold_price      GCUSD and GLD concurrently  CURRENT_PRICE_TTL
    history         historical:<TOKEN>      GCUSD, then GLD on error    HISTORICAL_DATA_TTL
    single day      date:<YYYY-MM-DD>       GCUSD                       DATE_SPECIFIC_TTL

Concurrent misses on the same key share one in-flight fetch.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, NamedTuple

from pydantic import ValidationError

from gold_api.config import (
    CURRENT_PRICE_TTL,
    DATE_SPECIFIC_TTL,
    HISTORICAL_DATA_TTL,
    PROXY_GOLD_SYMBOL,
    SPOT_GOLD_SYMBOL,
)
from gold_api.models.records import PricePoint, Quote
from gold_api.services.cache import CacheService, gold_cache
from gold_api.services.errors import NotFoundError, UpstreamUnavailableError
from gold_api.services.timeframes import get_date_range, normalize_timeframe, validate_iso_date
from gold_api.services.upstream import FmpClient, fmp_client

logger = logging.getLogger(__name__)

CURRENT_PRICE_KEY = "current_gold_price"


def historical_key(timeframe: str) -> str:
    return f"historical:{normalize_timeframe(timeframe)}"


def date_key(iso_date: str) -> str:
    return f"date:{iso_date}"


class Fetched(NamedTuple):
    data: Any
    cached: bool


def normalize_history(payload: Any) -> tuple[PricePoint, ...]:
    """Turn either history shape into date-ordered PricePoints.

    FMP answers with a bare list of days or with {"symbol": ..., "historical": [...]}.
    Rows that don't validate are skipped.
    """
    if isinstance(payload, dict):
        rows = payload.get("historical") or []
    elif isinstance(payload, list):
        rows = payload
    else:
        rows = []

    points = []
    for row in rows:
        try:
            points.append(PricePoint.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping malformed price row {row!r}: {e}")
    points.sort(key=lambda p: p.date)
    return tuple(points)


class GoldDataService:
    """Serves gold quotes and history through the cache."""

    def __init__(
        self,
        cache: CacheService,
        client: FmpClient,
        current_ttl: float = CURRENT_PRICE_TTL,
        historical_ttl: float = HISTORICAL_DATA_TTL,
        date_ttl: float = DATE_SPECIFIC_TTL,
    ):
        self._cache = cache
        self._client = client
        self._current_ttl = current_ttl
        self._historical_ttl = historical_ttl
        self._date_ttl = date_ttl
        self._inflight: dict[str, asyncio.Task] = {}

    async def _read_through(
        self, key: str, ttl: float, loader: Callable[[], Awaitable[Any]]
    ) -> Fetched:
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return Fetched(cached, True)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._load(key, ttl, loader))
            self._inflight[key] = task
            task.add_done_callback(lambda t: self._forget(key, t))
        else:
            logger.debug(f"Joining in-flight fetch for {key}")

        # A caller that gives up must not cancel the fetch other callers share
        data = await asyncio.shield(task)
        return Fetched(data, False)

    def _forget(self, key: str, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        if not task.cancelled():
            # Mark the error retrieved even if every waiter went away
            task.exception()

    async def _load(self, key: str, ttl: float, loader: Callable[[], Awaitable[Any]]) -> Any:
        data = await loader()
        self._cache.set(key, data, ttl)
        return data

    async def get_current_quote(self) -> Fetched:
        return await self._read_through(
            CURRENT_PRICE_KEY, self._current_ttl, self._fetch_current_quote
        )

    async def _fetch_current_quote(self) -> Quote:
        logger.info("Fetching fresh current gold price from API")
        spot, proxy = await asyncio.gather(
            self._client.fetch_quote(SPOT_GOLD_SYMBOL),
            self._client.fetch_quote(PROXY_GOLD_SYMBOL),
            return_exceptions=True,
        )

        for symbol, result in ((SPOT_GOLD_SYMBOL, spot), (PROXY_GOLD_SYMBOL, proxy)):
            if isinstance(result, BaseException):
                logger.warning(f"Quote request for {symbol} failed: {result}")
                continue
            if not result:
                logger.warning(f"Quote request for {symbol} returned no data")
                continue
            if not isinstance(result, dict):
                logger.warning(f"Unexpected quote shape for {symbol}: {result!r}")
                continue
            try:
                return Quote.model_validate({"symbol": symbol, **result})
            except ValidationError as e:
                logger.warning(f"Unusable quote for {symbol}: {e}")

        raise UpstreamUnavailableError("No gold data available from API")

    async def get_historical(self, timeframe: str) -> Fetched:
        token = normalize_timeframe(timeframe)
        return await self._read_through(
            historical_key(token),
            self._historical_ttl,
            lambda: self._fetch_historical(token),
        )

    async def _fetch_historical(self, timeframe: str) -> tuple[PricePoint, ...]:
        start, end = get_date_range(timeframe)
        logger.info(f"Fetching fresh historical data for {timeframe} ({start}..{end}) from API")

        try:
            payload = await self._client.fetch_historical(SPOT_GOLD_SYMBOL, start, end)
        except Exception as e:
            logger.warning(
                f"Historical request for {SPOT_GOLD_SYMBOL} failed ({e}), "
                f"falling back to {PROXY_GOLD_SYMBOL}"
            )
            try:
                payload = await self._client.fetch_historical(PROXY_GOLD_SYMBOL, start, end)
            except Exception as e2:
                logger.error(f"Historical request for {PROXY_GOLD_SYMBOL} failed: {e2}")
                raise UpstreamUnavailableError("No historical data available from API") from e2

        points = normalize_history(payload)
        if not points:
            raise UpstreamUnavailableError("No historical data available from API")
        return points

    async def get_for_date(self, iso_date: str) -> Fetched:
        iso_date = validate_iso_date(iso_date)
        return await self._read_through(
            date_key(iso_date),
            self._date_ttl,
            lambda: self._fetch_for_date(iso_date),
        )

    async def _fetch_for_date(self, iso_date: str) -> PricePoint:
        logger.info(f"Fetching fresh data for date {iso_date} from API")
        try:
            payload = await self._client.fetch_historical(SPOT_GOLD_SYMBOL, iso_date, iso_date)
        except Exception as e:
            logger.error(f"Request for {iso_date} failed: {e}")
            raise UpstreamUnavailableError(f"Price data source unavailable for {iso_date}") from e

        points = normalize_history(payload)
        if not points:
            raise NotFoundError(f"No data found for date {iso_date}")
        return points[0]

    def cache_stats(self) -> dict[str, Any]:
        return self._cache.stats()

    def cache_clear(self) -> None:
        self._cache.clear()
        logger.info("Cache cleared")


# Global instance
gold_data_service = GoldDataService(gold_cache, fmp_client)


def get_gold_data_service() -> GoldDataService:
    """Dependency for FastAPI routes."""
    return gold_data_service
