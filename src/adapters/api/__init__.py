"""
Client du catalogue externe (TMDB) et son infrastructure.

- TMDBClient: Implementation de ICatalogClient (core/ports/api_clients.py)
- APICache: Cache persistant avec TTL par type de requete
- QueryKeys: Fabrique de cles de cache hierarchiques
- RateLimitError / request_with_retry: Relance sur HTTP 429
"""

from src.adapters.api.cache import APICache
from src.adapters.api.query_keys import QueryKeys, cache_key
from src.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from src.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "APICache",
    "QueryKeys",
    "cache_key",
    "RateLimitError",
    "request_with_retry",
    "with_retry",
    "TMDBClient",
]
