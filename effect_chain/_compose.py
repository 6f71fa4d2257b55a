"""
Aggregate combinators — many Effects into one.

    parallel()  run together, all must succeed
    race()      first to settle wins
    sequence()  one after another, stop at first failure

Members of parallel()/race() are not cancelled when the aggregate settles
early: they run to completion and their outcome is discarded.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Any

from effect_chain._effect import Effect
from effect_chain._types import Dependencies, DependencyKey

# ═══════════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════════


def _union(effects: Iterable[Effect[Any]]) -> frozenset[DependencyKey]:
    return frozenset().union(*(e.requires for e in effects))


def _discard(task: asyncio.Future[Any]) -> None:
    """Mark a straggler's outcome as retrieved."""
    if not task.cancelled():
        task.exception()


# ═══════════════════════════════════════════════════════════════════════════════
# parallel() — All Must Succeed
# ═══════════════════════════════════════════════════════════════════════════════


def parallel[T](*effects: Effect[T]) -> Effect[list[T]]:
    """
    Run effects concurrently, collect results in input order.

    The first failure fails the aggregate immediately.

    Example:
        user, orders = await parallel(load_user(uid), load_orders(uid)).run(deps)
    """
    members = effects

    async def _parallel(deps: Dependencies) -> list[T]:
        return list(await asyncio.gather(*(e.run(deps) for e in members)))

    return Effect(_parallel, _union(members))


# ═══════════════════════════════════════════════════════════════════════════════
# race() — First Settlement Wins
# ═══════════════════════════════════════════════════════════════════════════════


def race[T](*effects: Effect[T]) -> Effect[T]:
    """
    Run effects concurrently, adopt whichever settles first.

    Success and failure count alike. When several settle in the same
    loop iteration the earliest in argument order wins.

    Example:
        price = await race(primary_quote(sku), fallback_quote(sku)).run(deps)
    """
    if not effects:
        raise ValueError("race() needs at least one effect")
    members = effects

    async def _race(deps: Dependencies) -> T:
        tasks = [asyncio.ensure_future(e.run(deps)) for e in members]
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        winner = next(t for t in tasks if t in done)
        for task in done:
            if task is not winner:
                _discard(task)
        for task in pending:
            task.add_done_callback(_discard)
        return winner.result()

    return Effect(_race, _union(members))


# ═══════════════════════════════════════════════════════════════════════════════
# sequence() — In Order, Stop On Failure
# ═══════════════════════════════════════════════════════════════════════════════


def sequence[T](*effects: Effect[T]) -> Effect[list[T]]:
    """
    Run effects one at a time in argument order.

    Effects after a failure never start.
    """
    members = effects

    async def _sequence(deps: Dependencies) -> list[T]:
        results: list[T] = []
        for e in members:
            results.append(await e.run(deps))
        return results

    return Effect(_sequence, _union(members))


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("parallel", "race", "sequence")
