"""Error Hierarchy — exceptions raised by effect_chain itself.

Invariants:
    - Every error has a code (str) and a category (ErrorCategory)
    - Errors raised inside user steps are never wrapped in these types;
      an Effect run re-raises the original exception unchanged
    - to_dict() gives a flat envelope for logs and API responses
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """High-level error categories."""
    DEPENDENCY = "dependency"
    LIFECYCLE = "lifecycle"
    STORE = "store"
    TRANSPORT = "transport"


class EffectChainError(Exception):
    """Base exception for all effect_chain errors."""

    def __init__(self, message: str, code: str, category: ErrorCategory):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
        }


class MissingDependencyError(EffectChainError):
    """Dependency map lacks keys the Effect requires."""
    def __init__(self, missing: Iterable[str]):
        self.missing = tuple(sorted(missing))
        super().__init__(
            f"Missing dependencies: {', '.join(self.missing)}",
            "MISSING_DEPENDENCY", ErrorCategory.DEPENDENCY,
        )

    def to_dict(self) -> dict[str, Any]:
        return {**EffectChainError.to_dict(self), "missing": list(self.missing)}


class ContextError(EffectChainError):
    """Dependency context used outside its connect/disconnect window."""
    def __init__(self, message: str):
        super().__init__(message, "CONTEXT_ERROR", ErrorCategory.LIFECYCLE)


class StoreError(EffectChainError):
    """Persistent store operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.STORE,
        )
        self.operation = operation


class TransportError(EffectChainError):
    """Outbound HTTP call returned a non-success status."""
    def __init__(self, status: int, reason: str, url: str = ""):
        super().__init__(
            f"HTTP Error: {status} {reason}",
            "TRANSPORT_ERROR", ErrorCategory.TRANSPORT,
        )
        self.status = status
        self.reason = reason
        self.url = url

    def to_dict(self) -> dict[str, Any]:
        return {**EffectChainError.to_dict(self), "status": self.status, "url": self.url}


__all__ = (
    "ErrorCategory",
    "EffectChainError",
    "MissingDependencyError",
    "ContextError",
    "StoreError",
    "TransportError",
)
