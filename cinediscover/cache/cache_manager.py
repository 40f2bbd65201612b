"""
In-process TTL result cache for CineDiscover.

Stores recommendation results keyed by string with a per-entry time-to-live
and a maximum entry count. Expiry is lazy: entries are only checked when
accessed or when cleanup() runs. There are no background timers.

Eviction happens in two phases:
1. Remove every expired entry.
2. If the cache is still at capacity, remove the oldest quarter of the
   capacity by creation time.

The cache never raises to callers. A failed lookup (absent, expired or
evicted) simply returns None.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from cinediscover.config import (
    CACHE_DEFAULT_TTL,
    CACHE_MAX_SIZE,
    MOOD_TTL_MULTIPLIER,
    SIMILAR_TTL_MULTIPLIER,
)


# =============================================================================
# Key Namespaces
# =============================================================================

RECOMMENDATIONS_PREFIX = "recommendations"
MOOD_PREFIX = "mood"
SIMILAR_PREFIX = "similar"

# Fraction of capacity removed when expiry alone does not free space
EVICTION_FRACTION: int = 4

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class CacheEntry:
    """
    A single cached value.

    Entries are immutable: replacing a key stores a new entry.

    Attributes:
        key: Cache key.
        data: Cached value (opaque to the cache).
        created_at: Clock reading when the entry was stored (seconds).
        ttl: Time-to-live in seconds.
    """
    key: str
    data: Any
    created_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        """True once more than ttl seconds have passed since creation."""
        return now - self.created_at > self.ttl

    def age(self, now: float) -> float:
        """Seconds since this entry was stored."""
        return now - self.created_at


# =============================================================================
# Query Hashing
# =============================================================================

def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def hash_query(query: str) -> str:
    """
    Hash free-text query into a short, stable cache key fragment.

    Rolling hash ``h = h * 31 + unit`` over the UTF-16 code units of the
    query, wrapped to a signed 32-bit integer. The absolute value is
    rendered in base 36.

    Args:
        query: Free-text query.

    Returns:
        Base-36 hash string.

    Example:
        >>> hash_query("ab")
        '2e9'
    """
    encoded = query.encode("utf-16-le")
    value = 0
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF

    if value >= 0x80000000:
        value -= 0x100000000

    return _to_base36(abs(value))


# =============================================================================
# Cache Manager
# =============================================================================

class CacheManager:
    """
    Bounded key/value cache with per-entry TTL.

    Usage:
        cache = CacheManager(max_size=50, default_ttl=60)
        cache.set("key", {"movies": []})
        cache.get("key")   # -> {"movies": []} until 60 seconds pass

    A fake clock can be injected for tests:
        now = [0.0]
        cache = CacheManager(clock=lambda: now[0])

    Every public operation runs under a single re-entrant lock so the
    size check, eviction and insert in set() happen atomically when the
    host serves requests from several threads.
    """

    def __init__(
        self,
        max_size: Optional[int] = None,
        default_ttl: Optional[float] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries. Defaults to CACHE_MAX_SIZE.
            default_ttl: TTL in seconds when set() gets none. Defaults to CACHE_DEFAULT_TTL.
            clock: Callable returning the current time in seconds. Defaults to time.time.

        Raises:
            ValueError: If max_size is below 1 or default_ttl is not positive.
        """
        self.max_size = CACHE_MAX_SIZE if max_size is None else max_size
        self.default_ttl = CACHE_DEFAULT_TTL if default_ttl is None else default_ttl
        if self.max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {self.max_size}")
        if self.default_ttl <= 0:
            raise ValueError(f"default_ttl must be positive, got {self.default_ttl}")
        self._clock = clock or time.time
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._entries)

    # -------------------------------------------------------------------------
    # Core Operations
    # -------------------------------------------------------------------------

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """
        Store a value.

        If the cache is at capacity, cleanup() runs first to make room.

        Args:
            key: Cache key.
            value: Value to store.
            ttl: Time-to-live in seconds (default: default_ttl).
        """
        with self._lock:
            if len(self._entries) >= self.max_size:
                self.cleanup()

            # Re-inserting moves the key to the end of the eviction order
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(
                key=key,
                data=value,
                created_at=self._clock(),
                ttl=ttl or self.default_ttl,
            )

    def get(self, key: str) -> Optional[Any]:
        """
        Return the cached value, or None if absent or expired.

        Expired entries are removed on access.
        """
        with self._lock:
            entry = self._live_entry(key)
            return entry.data if entry else None

    def has(self, key: str) -> bool:
        """Check whether a live entry exists (removes it if expired)."""
        with self._lock:
            return self._live_entry(key) is not None

    def delete(self, key: str) -> bool:
        """
        Remove an entry.

        Returns:
            True if an entry was removed, False if the key was absent.
        """
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    def cleanup(self) -> None:
        """
        Reclaim space.

        Phase 1 removes all expired entries. If the cache is still at or
        above max_size, phase 2 removes the oldest max_size // 4 entries
        (at least one) by creation time. Ties keep insertion order.
        """
        with self._lock:
            now = self._clock()
            expired_keys = [
                key for key, entry in self._entries.items() if entry.is_expired(now)
            ]
            for key in expired_keys:
                del self._entries[key]

            if len(self._entries) >= self.max_size:
                oldest = sorted(self._entries.values(), key=lambda e: e.created_at)
                remove_count = max(1, self.max_size // EVICTION_FRACTION)
                for entry in oldest[:remove_count]:
                    del self._entries[entry.key]

    def get_stats(self) -> dict:
        """
        Get cache statistics for observability.

        Returns:
            Dictionary with size, max_size and per-entry age/ttl (seconds).
        """
        with self._lock:
            now = self._clock()
            return {
                "size": len(self._entries),
                "max_size": self.max_size,
                "entries": [
                    {"key": entry.key, "age": entry.age(now), "ttl": entry.ttl}
                    for entry in self._entries.values()
                ],
            }

    def keys(self) -> List[str]:
        """Keys currently stored (expired entries included until accessed)."""
        with self._lock:
            return list(self._entries)

    def _live_entry(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None

        return entry

    # -------------------------------------------------------------------------
    # Namespaced Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def recommendations_key(query: str) -> str:
        return f"{RECOMMENDATIONS_PREFIX}:{hash_query(query)}"

    @staticmethod
    def mood_key(mood: str, language: str) -> str:
        return f"{MOOD_PREFIX}:{mood}:{language}"

    @staticmethod
    def similar_key(movie_id: Any) -> str:
        return f"{SIMILAR_PREFIX}:{movie_id}"

    def cache_movie_recommendations(self, query: str, result: Any, ttl: Optional[float] = None) -> None:
        """Cache a free-text recommendation result under its query hash."""
        self.set(self.recommendations_key(query), result, ttl)

    def get_cached_recommendations(self, query: str) -> Optional[Any]:
        return self.get(self.recommendations_key(query))

    def cache_mood_recommendations(self, mood: str, language: str, movies: Any) -> None:
        """Cache mood results for MOOD_TTL_MULTIPLIER times the default TTL."""
        self.set(self.mood_key(mood, language), movies, self.default_ttl * MOOD_TTL_MULTIPLIER)

    def get_cached_mood_recommendations(self, mood: str, language: str) -> Optional[Any]:
        return self.get(self.mood_key(mood, language))

    def cache_similar_movies(self, movie_id: Any, movies: Any) -> None:
        """Cache similar-movie results for SIMILAR_TTL_MULTIPLIER times the default TTL."""
        self.set(self.similar_key(movie_id), movies, self.default_ttl * SIMILAR_TTL_MULTIPLIER)

    def get_cached_similar_movies(self, movie_id: Any) -> Optional[Any]:
        return self.get(self.similar_key(movie_id))
