"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Self
from uuid import UUID

UNIVERSITY_WIDE = "University Wide"


class EventStatus(Enum):
    """Lifecycle state of an event."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not EventStatus.PENDING


class Role(Enum):
    """Role stored on a user profile."""

    USER = "user"
    CREW = "crew"


class PaymentStatus(Enum):
    PAID = "paid"


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=Decimal("0"))

    def times(self, count: int) -> "Money":
        return Money(amount=self.amount * count)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing remaining tickets."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")

    def take(self, count: "TicketCount") -> "Capacity":
        return Capacity(value=self.value - count.value)


@dataclass(frozen=True)
class TicketCount:
    """Positive number of tickets in one booking."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Ticket count must be an integer")
        if self.value <= 0:
            raise ValueError("Ticket count must be positive")
