"""
Services — concrete handles for the dependency map.

    from effect_chain import services as S

    async with S.create_context() as ctx:
        await effect.run(ctx.dependencies)
"""

from __future__ import annotations

from effect_chain.services._cache import CacheEntry, MemoryCache
from effect_chain.services._log import LoggerLog
from effect_chain.services._store import SqlStore
from effect_chain.services._transport import HttpTransport
from effect_chain.services._context import (
    DependencyContext,
    create_context,
    create_test_context,
)

__all__ = (
    "CacheEntry",
    "MemoryCache",
    "LoggerLog",
    "SqlStore",
    "HttpTransport",
    "DependencyContext",
    "create_context",
    "create_test_context",
)
