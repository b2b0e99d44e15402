"""Cache inspection and management routes."""

from fastapi import APIRouter, Depends

from gold_api.api.schemas import CacheConfigResponse, CacheSnapshot, CacheStatsResponse
from gold_api.config import (
    CACHE_CLEANUP_INTERVAL,
    CURRENT_PRICE_TTL,
    DATE_SPECIFIC_TTL,
    HISTORICAL_DATA_TTL,
    MAX_CACHE_SIZE,
)
from gold_api.services.gold_data import GoldDataService, get_gold_data_service

router = APIRouter(prefix="/api/cache", tags=["cache"])


@router.get("/stats", response_model=CacheStatsResponse)
async def get_cache_stats(service: GoldDataService = Depends(get_gold_data_service)):
    return CacheStatsResponse(
        cache=CacheSnapshot(**service.cache_stats()),
        config=CacheConfigResponse(
            current_price_ttl=CURRENT_PRICE_TTL,
            historical_data_ttl=HISTORICAL_DATA_TTL,
            date_specific_ttl=DATE_SPECIFIC_TTL,
            max_cache_size=MAX_CACHE_SIZE,
            cleanup_interval=CACHE_CLEANUP_INTERVAL,
        ),
    )


@router.post("/clear")
async def clear_cache(service: GoldDataService = Depends(get_gold_data_service)):
    service.cache_clear()
    return {"status": "ok", "message": "Cache cleared successfully"}
