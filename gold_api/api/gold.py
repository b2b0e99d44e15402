"""Gold price API routes.

Prices come out of the cache per troy ounce; every response is converted to
the requested unit on a copy, never on the cached record.
"""

import time
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from gold_api.api.schemas import (
    ChartPoint,
    CurrentPriceResponse,
    DatePriceResponse,
    FluctuationResponse,
    GoldQuoteResponse,
    HistoricalResponse,
    Period,
    UnitInfo,
    UnitsResponse,
)
from gold_api.models.records import PricePoint
from gold_api.services.errors import (
    GoldDataError,
    InvalidParameterError,
    NotFoundError,
    UpstreamUnavailableError,
)
from gold_api.services.gold_data import GoldDataService, get_gold_data_service
from gold_api.services.timeframes import DEFAULT_TIMEFRAME, get_date_range, normalize_timeframe
from gold_api.services.units import (
    DEFAULT_UNIT,
    UNIT_CONVERSIONS,
    convert_price,
    get_unit_label,
    validate_unit,
)

router = APIRouter(prefix="/api/gold", tags=["gold"])

_STATUS_CODES = {
    InvalidParameterError: 400,
    NotFoundError: 404,
    UpstreamUnavailableError: 503,
}


def _http_error(error: GoldDataError) -> HTTPException:
    status_code = _STATUS_CODES.get(type(error), 500)
    return HTTPException(status_code=status_code, detail=str(error))


def _unit_or_400(unit: str) -> str:
    try:
        return validate_unit(unit)
    except InvalidParameterError as e:
        raise _http_error(e)


def _display_date(iso_date: str) -> str:
    """US-style M/D/YYYY label for chart axes."""
    try:
        d = date.fromisoformat(iso_date[:10])
    except ValueError:
        return iso_date
    return f"{d.month}/{d.day}/{d.year}"


def _change(first: float, last: float) -> tuple[float, float]:
    change = round(last - first, 2)
    percent = round(change / first * 100, 2) if first else 0.0
    return change, percent


@router.get("/current", response_model=CurrentPriceResponse)
async def get_current_price(
    unit: str = Query(DEFAULT_UNIT),
    service: GoldDataService = Depends(get_gold_data_service),
):
    target = _unit_or_400(unit)
    try:
        quote, cached = await service.get_current_quote()
    except GoldDataError as e:
        raise _http_error(e)

    return CurrentPriceResponse(
        gold=GoldQuoteResponse(
            price=convert_price(quote.price, target),
            unit=get_unit_label(target),
            unit_code=target,
            price_change=convert_price(quote.change, target),
            # A percentage is the same in every unit
            percent_change=quote.changes_percentage,
            open=convert_price(quote.open, target),
            high=convert_price(quote.day_high, target),
            low=convert_price(quote.day_low, target),
            previous_close=convert_price(quote.previous_close, target),
            volume=quote.volume,
        ),
        timestamp=quote.timestamp,
        cached=cached,
    )


def _chart_points(points: tuple[PricePoint, ...], unit: str) -> list[ChartPoint]:
    return [
        ChartPoint(
            date=p.date,
            display_date=_display_date(p.date),
            price=convert_price(p.close, unit),
            open=convert_price(p.open, unit),
            high=convert_price(p.high, unit),
            low=convert_price(p.low, unit),
            close=convert_price(p.close, unit),
        )
        for p in sorted(points, key=lambda p: p.date)
    ]


@router.get("/historical", response_model=HistoricalResponse)
async def get_historical(
    timeframe: str = Query(DEFAULT_TIMEFRAME),
    unit: str = Query(DEFAULT_UNIT),
    service: GoldDataService = Depends(get_gold_data_service),
):
    target = _unit_or_400(unit)
    token = normalize_timeframe(timeframe)
    try:
        points, cached = await service.get_historical(token)
    except GoldDataError as e:
        raise _http_error(e)

    chart = _chart_points(points, target)
    price_change, percent_change = 0.0, 0.0
    if len(chart) > 1:
        price_change, percent_change = _change(chart[0].price, chart[-1].price)

    return HistoricalResponse(
        timeframe=timeframe,
        unit=target,
        unit_label=get_unit_label(target),
        current_price=chart[-1].price,
        price_change=price_change,
        percent_change=percent_change,
        data=chart,
        timestamp=int(time.time() * 1000),
        cached=cached,
    )


@router.get("/fluctuation", response_model=FluctuationResponse)
async def get_fluctuation(
    timeframe: str = Query(DEFAULT_TIMEFRAME),
    unit: str = Query(DEFAULT_UNIT),
    service: GoldDataService = Depends(get_gold_data_service),
):
    """Price move between the first and last day of a timeframe."""
    target = _unit_or_400(unit)
    token = normalize_timeframe(timeframe)
    try:
        points, cached = await service.get_historical(token)
    except GoldDataError as e:
        raise _http_error(e)

    ordered = sorted(points, key=lambda p: p.date)
    start_price = convert_price(ordered[0].close, target)
    end_price = convert_price(ordered[-1].close, target)
    change, change_percent = _change(start_price, end_price)
    start, end = get_date_range(token)

    return FluctuationResponse(
        timeframe=timeframe,
        period=Period(start=start, end=end),
        unit=target,
        unit_label=get_unit_label(target),
        start_price=start_price,
        end_price=end_price,
        change=change,
        change_percent=change_percent,
        cached=cached,
    )


@router.get("/date/{iso_date}", response_model=DatePriceResponse)
async def get_price_for_date(
    iso_date: str,
    unit: str = Query(DEFAULT_UNIT),
    service: GoldDataService = Depends(get_gold_data_service),
):
    target = _unit_or_400(unit)
    try:
        point, cached = await service.get_for_date(iso_date)
    except GoldDataError as e:
        raise _http_error(e)

    return DatePriceResponse(
        date=iso_date,
        unit=target,
        unit_label=get_unit_label(target),
        price=convert_price(point.close, target),
        open=convert_price(point.open, target),
        high=convert_price(point.high, target),
        low=convert_price(point.low, target),
        volume=point.volume,
        timestamp=int(time.time() * 1000),
        cached=cached,
    )


@router.get("/units", response_model=UnitsResponse)
async def get_units():
    return UnitsResponse(
        supported_units=[
            UnitInfo(code=code, label=get_unit_label(code), conversion_factor=factor)
            for code, factor in UNIT_CONVERSIONS.items()
        ],
        default_unit=DEFAULT_UNIT,
    )
