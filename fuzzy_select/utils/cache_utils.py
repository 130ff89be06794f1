"""Memoization utilities for scorer functions.

This module provides an LRU cache with optional per-entry expiry and a
decorator that memoizes any function on its call arguments. Nothing in
the scoring or selection engine caches implicitly; callers opt in by
wrapping a scorer.
"""

import functools
import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any, NamedTuple, Optional

from fuzzy_select.utils.logging_utils import get_logger

logger = get_logger(__name__)

_MISSING = object()
# Separates positional from keyword arguments in cache keys
_KWD_MARK = object()


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    max_size: int
    current_size: int


class LRUCache:
    """Least-recently-used cache with optional time-to-live per entry.

    Expired entries are removed lazily when read, or in bulk by
    cleanup_expired(). TTLs are in seconds on the monotonic clock.
    """

    def __init__(self, capacity: int, clock: Callable[[], float] = time.monotonic):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._clock = clock
        # key -> (value, expires_at or None); order is least- to most-recent
        self._entries: "OrderedDict[Hashable, tuple[Any, Optional[float]]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self._live_entry(key) is not None

    def _live_entry(self, key: Hashable) -> Optional[tuple[Any, Optional[float]]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at = entry[1]
        if expires_at is not None and expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry

    def get(self, key: Hashable, default: Any = None) -> Any:
        entry = self._live_entry(key)
        if entry is None:
            return default
        self._entries.move_to_end(key)
        return entry[0]

    def set(self, key: Hashable, value: Any, ttl: Optional[float] = None) -> None:
        """Store a value, evicting the least recently used entry when full.

        Args:
            key: Cache key
            value: Value to store (None is a valid value)
            ttl: Seconds until the entry expires; None keeps it until evicted

        """
        expires_at = self._clock() + ttl if ttl is not None else None
        if key in self._entries:
            self._entries.move_to_end(key)
        elif len(self._entries) >= self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"LRU cache full ({self.capacity}), evicted {evicted!r}")
        self._entries[key] = (value, expires_at)

    def delete(self, key: Hashable) -> bool:
        return self._entries.pop(key, _MISSING) is not _MISSING

    def clear(self) -> None:
        self._entries.clear()

    def cleanup_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        expired = [
            key
            for key, (_, expires_at) in self._entries.items()
            if expires_at is not None and expires_at <= now
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)


def make_cache_key(args: tuple, kwargs: dict[str, Any]) -> Hashable:
    """Build a hashable key from call arguments.

    Keyword order does not matter. Unhashable arguments surface as
    TypeError when the key is used, as with functools.lru_cache.
    """
    if not kwargs:
        return args
    return args + (_KWD_MARK,) + tuple(sorted(kwargs.items()))


def cached(
    max_size: int = 1000,
    ttl: Optional[float] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Memoize a function on its arguments with LRU eviction and optional expiry.

    Args:
        max_size: Maximum number of cached results
        ttl: Seconds each result stays valid; None for no expiry

    Returns:
        Decorator. The wrapped function exposes ``cache``, ``cache_info()``
        and ``cache_clear()``.

    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        cache = LRUCache(max_size)
        stats = {"hits": 0, "misses": 0}

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            key = make_cache_key(args, kwargs)
            value = cache.get(key, _MISSING)
            if value is not _MISSING:
                stats["hits"] += 1
                return value

            stats["misses"] += 1
            value = func(*args, **kwargs)
            cache.set(key, value, ttl)
            return value

        def cache_info() -> CacheInfo:
            return CacheInfo(stats["hits"], stats["misses"], max_size, len(cache))

        def cache_clear() -> None:
            cache.clear()
            stats["hits"] = 0
            stats["misses"] = 0

        wrapper.cache = cache  # type: ignore[attr-defined]
        wrapper.cache_info = cache_info  # type: ignore[attr-defined]
        wrapper.cache_clear = cache_clear  # type: ignore[attr-defined]
        return wrapper

    return decorator
