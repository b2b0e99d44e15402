"""Application configuration."""

import os

# Upstream quote API (Financial Modeling Prep)
FMP_API_KEY = os.getenv("FMP_API_KEY")
FMP_BASE_URL = os.getenv("FMP_BASE_URL", "https://financialmodelingprep.com/api/v3")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))  # seconds

# Spot gold is preferred, the GLD ETF stands in when spot data is missing
SPOT_GOLD_SYMBOL = "GCUSD"
PROXY_GOLD_SYMBOL = "GLD"

# Cache settings (in-memory, per process)
CURRENT_PRICE_TTL = int(os.getenv("CURRENT_PRICE_TTL", str(5 * 60)))  # seconds
HISTORICAL_DATA_TTL = int(os.getenv("HISTORICAL_DATA_TTL", str(30 * 60)))  # seconds
DATE_SPECIFIC_TTL = int(os.getenv("DATE_SPECIFIC_TTL", str(24 * 60 * 60)))  # seconds
MAX_CACHE_SIZE = int(os.getenv("MAX_CACHE_SIZE", "1000"))  # entries
CACHE_CLEANUP_INTERVAL = int(os.getenv("CACHE_CLEANUP_INTERVAL", str(60 * 60)))  # seconds

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# HTTP server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
