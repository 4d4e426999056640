"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Errors that a caller can recover from carry the quantities needed to retry
(e.g. how many units are still available).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainException):
    """Input had the wrong shape, type or range."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "NOT_FOUND"


class ItemNotFoundError(NotFoundError):

    code = "ITEM_NOT_FOUND"

    def __init__(self, item_id: Any) -> None:
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class BorrowNotFoundError(NotFoundError):

    code = "BORROW_NOT_FOUND"

    def __init__(self, activity_id: Any, item_id: Any = None) -> None:
        if item_id is None:
            message = f"Borrow record #{activity_id} not found"
        else:
            message = (
                f"Borrow record #{activity_id} not found or does not match "
                f"item {item_id}"
            )
        super().__init__(message)
        self.activity_id = activity_id
        self.item_id = item_id


class UserNotFoundError(NotFoundError):

    code = "USER_NOT_FOUND"

    def __init__(self, user_id: Any) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class AuthenticationError(DomainException):
    """Passcode unknown or not valid for the user's role."""

    code = "AUTHENTICATION_FAILED"


class InsufficientStockError(DomainException):
    """Borrow asked for more units than are free to lend."""

    code = "INSUFFICIENT_STOCK"

    def __init__(self, item_id: int, item_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Cannot borrow {requested} of {item_name} "
            f"— only {available} currently available"
        )
        self.item_id = item_id
        self.requested = requested
        self.available = available


class OverSettlementError(DomainException):
    """Settlement would exceed the unsettled quantity of a borrow."""

    code = "OVER_SETTLEMENT"

    def __init__(self, borrow_activity_id: int, requested: int, remaining: int) -> None:
        super().__init__(
            f"Cannot process {requested} items — only {remaining} pending "
            f"action from borrow #{borrow_activity_id}"
        )
        self.borrow_activity_id = borrow_activity_id
        self.requested = requested
        self.remaining = remaining


class PersistenceError(DomainException):
    """Writing to (or reading from) durable storage failed.

    When raised from a write, in-memory state is already updated; ``record``
    holds whatever was stored in memory so callers can carry on.
    """

    code = "PERSISTENCE_FAILED"

    def __init__(self, path: Path | str, reason: str, record: Any = None) -> None:
        super().__init__(f"Storage error in {path}: {reason}")
        self.path = str(path)
        self.reason = reason
        self.record = record
