"""
effect_chain — lazy async effects with declared dependencies.

    from effect_chain import Effect, parallel
    from effect_chain import access as A   # Per-service constructors
    from effect_chain import lift as L     # pure / fail / from_awaitable
    from effect_chain import services as S # Concrete handles and context
"""

from effect_chain import access
from effect_chain import lift
from effect_chain import services
from effect_chain._effect import Effect
from effect_chain._compose import parallel, race, sequence
from effect_chain._types import (
    DEPENDENCY_KEYS,
    Cache,
    Dependencies,
    DependencyKey,
    DependencyMap,
    Log,
    Store,
    Transport,
)
from effect_chain.errors import (
    ContextError,
    EffectChainError,
    MissingDependencyError,
    StoreError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = (
    "access",
    "lift",
    "services",
    "Effect",
    "parallel",
    "race",
    "sequence",
    "DEPENDENCY_KEYS",
    "Cache",
    "Dependencies",
    "DependencyKey",
    "DependencyMap",
    "Log",
    "Store",
    "Transport",
    "ContextError",
    "EffectChainError",
    "MissingDependencyError",
    "StoreError",
    "TransportError",
)
