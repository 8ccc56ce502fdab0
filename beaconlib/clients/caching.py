"""TTL-memoizing source decorator.

Chain info and per-round beacons are immutable once published, so they can
be served from memory for a while. The latest beacon changes every period
and is never cached.

Not thread-safe: concurrent callers may both miss and both fetch the same
immutable value.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from beaconlib.clients.base import Source, check_round
from beaconlib.models import Beacon, ChainDescriptor

log = logging.getLogger("beaconlib.cache")

T = TypeVar("T")

CHAIN_INFO_KEY = "chain-info"


def beacon_key(round: int) -> str:
    return f"beacon:{round}"


@dataclass(frozen=True)
class CacheEntry:
    """TTL-based cache entry."""

    key: str
    value: Any
    expires_at: float


class ResponseCache:
    """Simple in-memory TTL cache keyed by logical request identity."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._store: dict[str, CacheEntry] = {}
        self._clock = clock

    def get(self, key: str) -> CacheEntry | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._store[key]
            return None
        return entry

    def set(self, key: str, value: Any, ttl_seconds: float) -> CacheEntry:
        entry = CacheEntry(key=key, value=value, expires_at=self._clock() + ttl_seconds)
        self._store[key] = entry
        return entry

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


class CachingSource(Source):
    """Wraps one Source with separate chain-info and beacon TTLs (seconds)."""

    def __init__(
        self,
        source: Source,
        chain_info_ttl: float = 300,
        beacon_ttl: float = 30,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.source = source
        self.chain_info_ttl = chain_info_ttl
        self.beacon_ttl = beacon_ttl
        self._cache = ResponseCache(clock=clock)

    def fetch_chain_info(self) -> ChainDescriptor:
        return self._cached(CHAIN_INFO_KEY, self.source.fetch_chain_info, self.chain_info_ttl)

    def fetch_beacon(self, round: int) -> Beacon:
        check_round(round)
        return self._cached(
            beacon_key(round), lambda: self.source.fetch_beacon(round), self.beacon_ttl,
        )

    def fetch_latest_beacon(self) -> Beacon:
        return self.source.fetch_latest_beacon()

    def clear_cache(self) -> None:
        self._cache.clear()

    def _cached(self, key: str, fetch: Callable[[], T], ttl: float) -> T:
        entry = self._cache.get(key)
        if entry is not None:
            log.debug("Cache hit: %s", key)
            return entry.value

        log.debug("Cache miss: %s", key)
        value = fetch()
        self._cache.set(key, value, ttl)
        return value
