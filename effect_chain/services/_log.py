"""
Logger sink — the Log protocol over a stdlib logger.
"""

from __future__ import annotations

import logging
from typing import Any


class LoggerLog:
    """
    Log sink backed by logging.Logger.

    Positional details are attached to the record as `details` rather than
    interpolated, so messages containing '%' are safe.
    """

    def __init__(self, logger: logging.Logger | str = "effect_chain") -> None:
        self.logger = logging.getLogger(logger) if isinstance(logger, str) else logger

    @staticmethod
    def _extra(details: tuple[object, ...]) -> dict[str, Any] | None:
        return {"details": list(details)} if details else None

    def info(self, message: str, *details: object) -> None:
        self.logger.info(message, extra=self._extra(details))

    def warn(self, message: str, *details: object) -> None:
        self.logger.warning(message, extra=self._extra(details))

    def error(self, message: str, *details: object) -> None:
        self.logger.error(message, extra=self._extra(details))

    def debug(self, message: str, *details: object) -> None:
        self.logger.debug(message, extra=self._extra(details))


__all__ = ("LoggerLog",)
