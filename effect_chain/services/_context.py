"""Dependency Context — caller-owned wiring of the four services.

Invariants:
    - No module-level instance: callers create, connect, pass and disconnect
    - dependencies is only available between connect() and disconnect()
    - disconnect() is idempotent and always releases every service
    - Any handle satisfying the service protocols can be supplied; lifecycle
      hooks (connect, aclose, dispose, clear) are called only where present

Usage:
    async with create_context() as ctx:
        user = await load_user(1).run(ctx.dependencies)
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

from effect_chain._effect import Effect, settle
from effect_chain._types import DEPENDENCY_KEYS, Cache, DependencyMap, Log, Store, Transport
from effect_chain.config import Settings, get_settings
from effect_chain.errors import ContextError
from effect_chain.services._cache import MemoryCache
from effect_chain.services._log import LoggerLog
from effect_chain.services._store import SqlStore
from effect_chain.services._transport import HttpTransport

logger = logging.getLogger(__name__)


async def _call_hook(handle: Any, name: str) -> None:
    hook = getattr(handle, name, None)
    if hook is not None:
        await settle(hook())


class DependencyContext:
    """Owns the service handles behind a DependencyMap."""

    def __init__(
        self,
        *,
        store: Store,
        cache: Cache,
        log: Log,
        transport: Transport,
    ) -> None:
        self.store = store
        self.cache = cache
        self.log = log
        self.transport = transport
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def dependencies(self) -> DependencyMap:
        if not self._connected:
            raise ContextError("Dependency context is not connected")
        return DependencyMap(
            store=self.store,
            cache=self.cache,
            log=self.log,
            transport=self.transport,
        )

    async def connect(self) -> DependencyContext:
        if self._connected:
            return self
        await _call_hook(self.store, "connect")
        self._connected = True
        logger.info("Dependency context connected", extra={"keys": list(DEPENDENCY_KEYS)})
        return self

    async def disconnect(self) -> None:
        if not self._connected:
            return
        self._connected = False
        try:
            await _call_hook(self.transport, "aclose")
        finally:
            try:
                await _call_hook(self.store, "dispose")
            finally:
                await _call_hook(self.cache, "clear")
        logger.info("Dependency context disconnected")

    async def run[T](self, effect: Effect[T]) -> T:
        """Run effect against this context's dependencies."""
        return await effect.run(self.dependencies)

    async def __aenter__(self) -> DependencyContext:
        return await self.connect()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.disconnect()


# ═══════════════════════════════════════════════════════════════════════════════
# Factories
# ═══════════════════════════════════════════════════════════════════════════════


def create_context(settings: Settings | None = None) -> DependencyContext:
    """Production wiring from settings. Returned unconnected."""
    settings = settings or get_settings()
    return DependencyContext(
        store=SqlStore(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        ),
        cache=MemoryCache(
            max_size=settings.cache_max_size,
            default_ttl=settings.cache_default_ttl_seconds,
        ),
        log=LoggerLog(settings.logger_name),
        transport=HttpTransport(
            base_url=settings.http_base_url,
            timeout=settings.http_timeout_seconds,
        ),
    )


def create_test_context(settings: Settings | None = None) -> DependencyContext:
    """In-memory SQLite store and a fresh cache. Returned unconnected."""
    settings = settings or get_settings()
    return DependencyContext(
        store=SqlStore(settings.test_database_url),
        cache=MemoryCache(),
        log=LoggerLog(f"{settings.logger_name}.test"),
        transport=HttpTransport(
            base_url=settings.http_base_url,
            timeout=settings.http_timeout_seconds,
        ),
    )


__all__ = ("DependencyContext", "create_context", "create_test_context")
