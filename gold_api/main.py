"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gold_api.api.cache_routes import router as cache_router
from gold_api.api.gold import router as gold_router
from gold_api.config import (
    CURRENT_PRICE_TTL,
    DATE_SPECIFIC_TTL,
    HISTORICAL_DATA_TTL,
    HOST,
    LOG_LEVEL,
    MAX_CACHE_SIZE,
    PORT,
)
from gold_api.services.cache import gold_cache
from gold_api.services.upstream import fmp_client
from gold_api.tasks.scheduler import start_scheduler, stop_scheduler

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger(__name__)

_started_at = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"API key configured: {fmp_client.configured}")
    logger.info(
        f"Cache: current {CURRENT_PRICE_TTL}s, historical {HISTORICAL_DATA_TTL}s, "
        f"date {DATE_SPECIFIC_TTL}s, max {MAX_CACHE_SIZE} entries"
    )
    start_scheduler()
    yield
    logger.info("Shutting down")
    await stop_scheduler()
    gold_cache.clear()


app = FastAPI(title="Gold Price API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(gold_router)
app.include_router(cache_router)


@app.get("/api/health")
async def health_check():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "api_configured": fmp_client.configured,
        "cache_size": len(gold_cache),
        "uptime": round(time.monotonic() - _started_at, 1),
    }


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("gold_api.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
