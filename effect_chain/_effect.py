"""
Effect — lazy async computation with declared dependencies.

An Effect is a function from a dependency map to an awaitable, plus the
set of dependency keys it needs. Nothing runs until .run() is awaited;
every operator builds a new Effect around the old one.

    from effect_chain import Effect

    greeting = (
        Effect.with_dependency("store", lambda store: store.fetch_user(1))
        .transform(lambda user: user.name)
        .chain(lambda name: Effect.with_dependency("log", lambda log: log.info(name)))
    )

    await greeting.run({"store": store, "log": log})
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, cast

from effect_chain._types import DEPENDENCY_KEYS, Dependencies, DependencyKey
from effect_chain.errors import MissingDependencyError

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════════

type RunFn[T] = Callable[[Dependencies], Awaitable[T]]
"""The suspended computation inside an Effect."""


async def settle[T](value: T | Awaitable[T]) -> T:
    """Await value if it is awaitable, else return it as is."""
    if inspect.isawaitable(value):
        return await value
    return cast(T, value)


def dependency_keys(names: str | Iterable[str]) -> frozenset[DependencyKey]:
    """Validate and freeze a dependency name or a collection of them."""
    keys = frozenset((names,) if isinstance(names, str) else names)
    unknown = keys.difference(DEPENDENCY_KEYS)
    if unknown:
        raise ValueError(f"Unknown dependency keys: {', '.join(sorted(unknown))}")
    return cast(frozenset[DependencyKey], keys)


# ═══════════════════════════════════════════════════════════════════════════════
# Effect
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Effect[T]:
    """
    Suspended computation producing T from a dependency map.

    `requires` holds the dependency keys checked by run(). Derived Effects
    carry the union of the keys of the Effects they are built from.
    """

    _run: RunFn[T] = field(repr=False)
    requires: frozenset[DependencyKey] = frozenset()

    # ───────────────────────────────────────────────────────────────────────────
    # Constructors
    # ───────────────────────────────────────────────────────────────────────────

    @staticmethod
    def pure[R](value: R) -> Effect[R]:
        """Effect that resolves to value. Requires nothing, never fails."""

        async def _pure(_: Dependencies) -> R:
            return value

        return Effect(_pure)

    @staticmethod
    def from_awaitable[R](factory: Callable[[], Awaitable[R] | R]) -> Effect[R]:
        """
        Effect that calls factory on every run and adopts its outcome.

        Example:
            fetch = Effect.from_awaitable(lambda: client.get("/health"))
        """

        async def _from_awaitable(_: Dependencies) -> R:
            return await settle(factory())

        return Effect(_from_awaitable)

    @staticmethod
    def with_dependency[R](
        name: DependencyKey,
        fn: Callable[[Any], Awaitable[R] | R],
    ) -> Effect[R]:
        """
        Effect that hands the named service to fn.

        The base constructor for most Effects; see effect_chain.access for
        the per-service shorthands.
        """
        requires = dependency_keys((name,))

        async def _with_dependency(deps: Dependencies) -> R:
            return await settle(fn(deps[name]))

        return Effect(_with_dependency, requires)

    @staticmethod
    def with_dependencies[R](
        fn: Callable[[Mapping[str, Any]], Awaitable[R] | R],
        *names: DependencyKey,
    ) -> Effect[R]:
        """
        Effect that hands several services to fn at once.

        fn receives a read-only map restricted to `names`. With no names it
        requires every dependency key and sees the whole map, extras included.
        """
        requires = dependency_keys(names or DEPENDENCY_KEYS)

        async def _with_dependencies(deps: Dependencies) -> R:
            if names:
                projected = MappingProxyType({key: deps[key] for key in requires})
            else:
                projected = MappingProxyType(dict(deps))
            return await settle(fn(projected))

        return Effect(_with_dependencies, requires)

    # ───────────────────────────────────────────────────────────────────────────
    # Operators
    # ───────────────────────────────────────────────────────────────────────────

    def transform[U](self, fn: Callable[[T], U]) -> Effect[U]:
        """Apply fn to the result. Same requirements as self."""
        run = self._run

        async def _transform(deps: Dependencies) -> U:
            return fn(await run(deps))

        return Effect(_transform, self.requires)

    def chain[U](
        self,
        fn: Callable[[T], Effect[U]],
        requires: DependencyKey | Iterable[DependencyKey] = (),
    ) -> Effect[U]:
        """
        Monadic bind: run self, then the Effect fn builds from its result.

        Both stages see the same dependency map. The second stage is only
        known after the first succeeds, so its keys are checked when it
        starts; pass `requires` to have them checked up front as well.
        """
        run = self._run

        async def _chain(deps: Dependencies) -> U:
            value = await run(deps)
            next_effect = fn(value)
            if not isinstance(next_effect, Effect):
                raise TypeError(
                    f"chain() callback must return an Effect, got {type(next_effect).__name__}"
                )
            return await next_effect.run(deps)

        return Effect(_chain, self.requires | dependency_keys(requires))

    # ───────────────────────────────────────────────────────────────────────────
    # Execution
    # ───────────────────────────────────────────────────────────────────────────

    async def run(self, dependencies: Dependencies) -> T:
        """
        Execute the Effect against a dependency map.

        Extra entries are ignored. Each call is an independent execution.

        Raises:
            MissingDependencyError: a required key is absent or None.
        """
        missing = [key for key in self.requires if dependencies.get(key) is None]
        if missing:
            raise MissingDependencyError(missing)
        logger.debug("Running effect", extra={"requires": sorted(self.requires)})
        return await self._run(dependencies)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("Effect", "RunFn", "settle", "dependency_keys")
