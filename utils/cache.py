"""
TTL-based caching utilities for openFDA lookups.
"""

from __future__ import annotations

import time
from typing import Dict, Tuple, Any, Optional

from config import DRUG_CACHE_TTL, CACHE_SWEEP_INTERVAL


class TTLCache:
    """
    Simple TTL-based cache for drug label, recall and interaction lookups.
    Expiry is checked lazily on read; an expired entry is a miss, never a stale hit.
    Writes also sweep out expired entries at most once per sweep interval.
    Same-key writes are last-write-wins.
    """

    def __init__(self, ttl_seconds: int = 3600, sweep_interval: float = CACHE_SWEEP_INTERVAL):
        # key -> (expires_at, value)
        self._cache: Dict[str, Tuple[float, Any]] = {}
        self._ttl = ttl_seconds
        self._sweep_interval = min(sweep_interval, ttl_seconds)
        self._next_sweep: Optional[float] = None

    @property
    def ttl(self) -> int:
        return self._ttl

    def get(self, key: str) -> Optional[Any]:
        """Get cached value if not expired."""
        entry = self._cache.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if time.time() >= expires_at:
            self._cache.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any):
        """Cache a value; TTL is measured from this call."""
        now = time.time()
        if self._next_sweep is None:
            self._next_sweep = now + self._sweep_interval
        elif now >= self._next_sweep:
            self.purge_expired(now)
        self._cache[key] = (now + self._ttl, value)

    def purge_expired(self, now: Optional[float] = None) -> int:
        """Drop every expired entry; returns how many were removed."""
        now = time.time() if now is None else now
        expired = [k for k, (expires_at, _) in list(self._cache.items()) if expires_at <= now]
        for k in expired:
            self._cache.pop(k, None)
        self._next_sweep = now + self._sweep_interval
        return len(expired)

    def size(self) -> int:
        """Number of live (unexpired) entries."""
        now = time.time()
        return sum(1 for expires_at, _ in list(self._cache.values()) if expires_at > now)


def create_cache(ttl_seconds: int = DRUG_CACHE_TTL) -> TTLCache:
    return TTLCache(ttl_seconds=ttl_seconds)


# Global drug lookup cache, created at process start
drug_cache = create_cache()
