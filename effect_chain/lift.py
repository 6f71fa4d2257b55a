"""
Lift — helpers for lifting values and awaitables into Effects.

    from effect_chain import lift as L

    answer = L.pure(42)
    health = L.from_awaitable(lambda: client.get("/health"))
    broken = L.fail(ValueError("boom"))
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Never

from effect_chain._effect import Effect
from effect_chain._types import Dependencies


def pure[T](value: T) -> Effect[T]:
    """Lift a value into an Effect that requires nothing."""
    return Effect.pure(value)


def from_awaitable[T](factory: Callable[[], Awaitable[T] | T]) -> Effect[T]:
    """Lift an async factory; it is called once per run."""
    return Effect.from_awaitable(factory)


def fail(error: BaseException) -> Effect[Never]:
    """Effect that raises error on every run."""

    async def _fail(_: Dependencies) -> Never:
        raise error

    return Effect(_fail)


__all__ = ("pure", "from_awaitable", "fail")
