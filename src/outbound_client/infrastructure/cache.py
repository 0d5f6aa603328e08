"""In-memory response cache for successful GET requests.

Usage example:
    from outbound_client.infrastructure.cache import ResponseCache

    cache = ResponseCache(ttl_seconds=120, max_entries=100)
    cache.store('get_/campaigns_null', {"items": []})
    cached = cache.lookup('get_/campaigns_null')
    cache.invalidate("campaigns")
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing_extensions import override

from ..protocols import Cache, Clock

DEFAULT_TTL_SECONDS = 120.0
DEFAULT_MAX_ENTRIES = 100


@dataclass(frozen=True)
class CacheEntry:
    """A stored payload and when it was stored."""

    key: str
    payload: object
    stored_at: float


def _empty_entries() -> dict[str, CacheEntry]:
    return {}


@dataclass
class ResponseCache(Cache):
    """Bounded, TTL-aware cache with first-in-first-out eviction.

    Entries are read only while `now - stored_at < ttl_seconds`; an expired
    entry is purged by the lookup that finds it. When the store grows past
    `max_entries` the oldest-inserted entry goes, regardless of how recently
    it was read.
    """

    ttl_seconds: float = DEFAULT_TTL_SECONDS
    max_entries: int = DEFAULT_MAX_ENTRIES
    clock: Clock = time.monotonic
    _entries: dict[str, CacheEntry] = field(default_factory=_empty_entries, init=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.max_entries < 1:
            raise ValueError("max_entries must be at least 1.")
        if self.ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive.")

    @override
    def lookup(self, key: str) -> object | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self.clock() - entry.stored_at < self.ttl_seconds:
                return entry.payload
            self._entries.pop(key, None)
            return None

    @override
    def store(self, key: str, payload: object) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(key=key, payload=payload, stored_at=self.clock())
            if len(self._entries) > self.max_entries:
                oldest = next(iter(self._entries))
                del self._entries[oldest]

    @override
    def invalidate(self, pattern: str) -> int:
        with self._lock:
            doomed = [key for key in self._entries if pattern in key]
            for key in doomed:
                del self._entries[key]
            return len(doomed)

    @override
    def clear_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> list[str]:
        """Return keys in insertion order, fresh or not."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
