"""
Core types for effect_chain.

Dependency keys, the dependency map, and the service protocols the core
reads from it. The core never implements these services.
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping, Sequence
from typing import Any, Literal, Protocol, TypedDict

# ═══════════════════════════════════════════════════════════════════════════════
# Dependency Keys
# ═══════════════════════════════════════════════════════════════════════════════

type DependencyKey = Literal["store", "cache", "log", "transport"]
"""Name of a service category in the dependency map."""

DEPENDENCY_KEYS: tuple[DependencyKey, ...] = ("store", "cache", "log", "transport")

type Dependencies = Mapping[str, Any]
"""Any runtime mapping handed to Effect.run (full, projected, or with extras)."""

# ═══════════════════════════════════════════════════════════════════════════════
# Service Protocols — External Collaborators Implement These
# ═══════════════════════════════════════════════════════════════════════════════


class Store(Protocol):
    """
    Persistent store handle.

    Opaque to the core: only caller callbacks talk to it.
    """


class Cache(Protocol):
    """
    Cache handle.

    Example:
        class RedisCache:
            def __init__(self, client: Redis) -> None:
                self.client = client

            async def get(self, key: str) -> str | None:
                return await self.client.get(key)

            async def set(self, key: str, value: str, ttl: int | None = None) -> str:
                await self.client.set(key, value, ex=ttl)
                return "OK"

            async def delete(self, key: str | Sequence[str]) -> int:
                keys = [key] if isinstance(key, str) else list(key)
                return await self.client.delete(*keys)
    """

    async def get(self, key: str) -> Any | None:
        """Get value. Returns None on miss or expiry."""
        ...

    async def set(self, key: str, value: Any, ttl: float | None = None) -> str:
        """Set value with optional TTL in seconds. Returns an ack."""
        ...

    async def delete(self, key: str | Sequence[str]) -> int:
        """Delete one key or many. Returns count removed."""
        ...


class Log(Protocol):
    """Log sink."""

    def info(self, message: str, *details: object) -> None: ...

    def warn(self, message: str, *details: object) -> None: ...

    def error(self, message: str, *details: object) -> None: ...

    def debug(self, message: str, *details: object) -> None: ...


class Transport(Protocol):
    """Outbound HTTP transport."""

    def get(self, url: str, **options: Any) -> Awaitable[Any]: ...

    def post(self, url: str, body: Any = None, **options: Any) -> Awaitable[Any]: ...

    def put(self, url: str, body: Any = None, **options: Any) -> Awaitable[Any]: ...

    def delete(self, url: str, **options: Any) -> Awaitable[Any]: ...


# ═══════════════════════════════════════════════════════════════════════════════
# Dependency Map
# ═══════════════════════════════════════════════════════════════════════════════


class DependencyMap(TypedDict, total=False):
    """
    Named service handles supplied at run time.

    Every key is optional so a projected map (only the keys an Effect
    requires) is also a valid DependencyMap.
    """

    store: Store
    cache: Cache
    log: Log
    transport: Transport


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "DependencyKey",
    "DEPENDENCY_KEYS",
    "Dependencies",
    "DependencyMap",
    "Store",
    "Cache",
    "Log",
    "Transport",
)
