"""
Dependency accessors — one Effect constructor per service.

    from effect_chain import access as A

    cached = A.with_cache(lambda cache: cache.get("user:1"))
    logged = A.with_log(lambda log: log.info("loaded"))
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from effect_chain._effect import Effect
from effect_chain._types import Cache, DependencyKey, Log, Store, Transport


def with_store[T](fn: Callable[[Store], Awaitable[T] | T]) -> Effect[T]:
    """Effect over the persistent store."""
    return Effect.with_dependency("store", fn)


def with_cache[T](fn: Callable[[Cache], Awaitable[T] | T]) -> Effect[T]:
    """Effect over the cache."""
    return Effect.with_dependency("cache", fn)


def with_log[T](fn: Callable[[Log], Awaitable[T] | T]) -> Effect[T]:
    """Effect over the log sink."""
    return Effect.with_dependency("log", fn)


def with_transport[T](fn: Callable[[Transport], Awaitable[T] | T]) -> Effect[T]:
    """Effect over the outbound transport."""
    return Effect.with_dependency("transport", fn)


def with_dependencies[T](
    fn: Callable[[Mapping[str, Any]], Awaitable[T] | T],
    *names: DependencyKey,
) -> Effect[T]:
    """Effect over several services; all of them when names is empty."""
    return Effect.with_dependencies(fn, *names)


__all__ = (
    "with_store",
    "with_cache",
    "with_log",
    "with_transport",
    "with_dependencies",
)
