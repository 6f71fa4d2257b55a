"""
Memory cache — in-process Cache with TTL and LRU eviction.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

# ═══════════════════════════════════════════════════════════════════════════════
# Entry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Stored value with its absolute expiry (clock seconds), if any."""
    value: Any
    expires_at: float | None


# ═══════════════════════════════════════════════════════════════════════════════
# MemoryCache
# ═══════════════════════════════════════════════════════════════════════════════


class MemoryCache:
    """
    In-memory cache satisfying the Cache protocol.

    Expired keys are dropped lazily on read. With max_size set, the least
    recently used key is evicted to make room.

    Example:
        cache = MemoryCache(max_size=1000, default_ttl=60)
        await cache.set("user:1", payload, ttl=5)
        await cache.get("user:1")
    """

    def __init__(
        self,
        max_size: int | None = None,
        default_ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size is not None and max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and self._clock() >= entry.expires_at:
            del self._entries[key]
            return None
        # Move to end (most recent)
        self._entries.move_to_end(key)
        return entry.value

    async def set(self, key: str, value: Any, ttl: float | None = None) -> str:
        ttl = ttl if ttl is not None else self._default_ttl
        # Zero or negative TTL means no expiry
        expires_at = self._clock() + ttl if ttl is not None and ttl > 0 else None

        if key in self._entries:
            self._entries.move_to_end(key)
        elif self._max_size is not None and len(self._entries) >= self._max_size:
            # Evict oldest
            self._entries.popitem(last=False)

        self._entries[key] = CacheEntry(value=value, expires_at=expires_at)
        return "OK"

    async def delete(self, key: str | Sequence[str]) -> int:
        keys = [key] if isinstance(key, str) else list(key)
        deleted = 0
        for k in keys:
            if self._entries.pop(k, None) is not None:
                deleted += 1
        return deleted

    def clear(self) -> None:
        self._entries.clear()


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("CacheEntry", "MemoryCache")
