"""
Cache module.

In-process TTL cache for theme analysis, mood and similar-movie results.
"""

from cinediscover.cache.cache_manager import (
    CacheEntry,
    CacheManager,
    hash_query,
    RECOMMENDATIONS_PREFIX,
    MOOD_PREFIX,
    SIMILAR_PREFIX,
)

__all__ = [
    "CacheEntry",
    "CacheManager",
    "hash_query",
    "RECOMMENDATIONS_PREFIX",
    "MOOD_PREFIX",
    "SIMILAR_PREFIX",
]
