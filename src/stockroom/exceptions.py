"""Domain exceptions for Stockroom.

Every error raised by the stores and the take processor derives from
``StockroomError`` and carries a human-readable ``message`` plus optional
structured ``details``. The API layer maps each class to an HTTP status.
"""

from typing import Any


class StockroomError(Exception):
    """Base exception for all Stockroom errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(StockroomError):
    """Malformed or missing input."""


class NotFound(StockroomError):
    """No item or transaction matches the requested key."""


class InsufficientStock(StockroomError):
    """Requested amount exceeds the item's current stock."""


class PersistenceError(StockroomError):
    """Stored collection could not be read or written."""


class LockTimeout(PersistenceError):
    """A collection lock could not be acquired in time."""
