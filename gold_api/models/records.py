"""Canonical records stored in the cache.

Upstream payloads use camelCase keys; these models accept them by alias and
are frozen, so a cached record can be shared between requests safely.
"""

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Quote(_Record):
    """Latest quote for one instrument."""

    symbol: str
    name: str | None = None
    price: float
    change: float | None = None
    changes_percentage: float | None = Field(default=None, alias="changesPercentage")
    open: float | None = None
    day_high: float | None = Field(default=None, alias="dayHigh")
    day_low: float | None = Field(default=None, alias="dayLow")
    previous_close: float | None = Field(default=None, alias="previousClose")
    volume: float | None = None
    timestamp: int | None = None


class PricePoint(_Record):
    """One trading day of OHLC data."""

    date: str
    open: float | None = None
    high: float | None = None
    low: float | None = None
    close: float
    adj_close: float | None = Field(default=None, alias="adjClose")
    volume: float | None = None
    change: float | None = None
    change_percent: float | None = Field(default=None, alias="changePercent")
    vwap: float | None = None
