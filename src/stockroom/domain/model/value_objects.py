"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from stockroom.domain.exceptions import ValidationError


class ActivityAction(Enum):
    """The closed set of things that can happen to borrowed stock."""

    BORROWED = "Borrowed"
    RETURNED = "Returned"
    USED = "Used"
    LOST = "Lost"

    @property
    def is_settlement(self) -> bool:
        return self in SETTLEMENT_ACTIONS

    @staticmethod
    def parse(raw: str) -> ActivityAction:
        """Case-insensitive lookup by display value."""
        for action in ActivityAction:
            if action.value.lower() == str(raw).strip().lower():
                return action
        raise ValidationError(f"Unknown action: {raw!r}", field="action")


SETTLEMENT_ACTIONS = frozenset(
    {ActivityAction.RETURNED, ActivityAction.USED, ActivityAction.LOST}
)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot borrow or settle zero or
    negative items.
    """

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass but never a meaningful quantity
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}",
                field="qty",
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive", field="qty")

    def __str__(self) -> str:
        return str(self.value)
