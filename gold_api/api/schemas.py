"""Pydantic schemas for API responses."""

from pydantic import BaseModel


class GoldQuoteResponse(BaseModel):
    price: float
    currency: str = "USD"
    unit: str
    unit_code: str
    price_change: float | None = None
    percent_change: float | None = None
    open: float | None = None
    high: float | None = None
    low: float | None = None
    previous_close: float | None = None
    volume: float | None = None


class CurrentPriceResponse(BaseModel):
    gold: GoldQuoteResponse
    timestamp: int | None = None
    cached: bool


class ChartPoint(BaseModel):
    date: str
    display_date: str
    price: float
    open: float | None = None
    high: float | None = None
    low: float | None = None
    close: float


class HistoricalResponse(BaseModel):
    timeframe: str
    unit: str
    unit_label: str
    current_price: float
    price_change: float
    percent_change: float
    data: list[ChartPoint]
    timestamp: int
    cached: bool


class Period(BaseModel):
    start: str
    end: str


class FluctuationResponse(BaseModel):
    timeframe: str
    period: Period
    unit: str
    unit_label: str
    start_price: float
    end_price: float
    change: float
    change_percent: float
    cached: bool


class DatePriceResponse(BaseModel):
    date: str
    unit: str
    unit_label: str
    price: float
    currency: str = "USD"
    open: float | None = None
    high: float | None = None
    low: float | None = None
    volume: float | None = None
    timestamp: int
    cached: bool


class UnitInfo(BaseModel):
    code: str
    label: str
    conversion_factor: float


class UnitsResponse(BaseModel):
    supported_units: list[UnitInfo]
    default_unit: str
    base_unit: str = "troy ounce"


class CacheEntryStats(BaseModel):
    key: str
    age: float
    ttl: float
    expired: bool


class CacheSnapshot(BaseModel):
    size: int
    max_size: int
    entries: list[CacheEntryStats]


class CacheConfigResponse(BaseModel):
    current_price_ttl: int
    historical_data_ttl: int
    date_specific_ttl: int
    max_cache_size: int
    cleanup_interval: int


class CacheStatsResponse(BaseModel):
    cache: CacheSnapshot
    config: CacheConfigResponse
