"""
API limits and client defaults.
"""

from datetime import timedelta

DEFAULT_BASE_URL = "https://api.rawg.io/api"

# Pagination
MAX_PAGE_SIZE = 40
DEFAULT_PAGE_SIZE = 20
MIN_PAGE = 1
MAX_PAGE = 10_000

# Metacritic scores
MIN_METACRITIC_SCORE = 0
MAX_METACRITIC_SCORE = 100

# Cache
DEFAULT_CACHE_TTL = timedelta(minutes=5)
DEFAULT_CACHE_LIMIT = 100
DEFAULT_CACHE_COST_LIMIT = 10 * 1024 * 1024  # 10 MiB

# Network
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BASE_DELAY = 1.0
DEFAULT_RETRY_MAX_DELAY = 60.0
