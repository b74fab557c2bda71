"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in univista/models.py (persistence layer).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID

from univista.domain.errors import InsufficientInventoryError, InvalidTransitionError
from univista.domain.value_objects import (
    Capacity,
    EventId,
    EventStatus,
    Money,
    PaymentStatus,
    Role,
    TicketCount,
)


@dataclass(frozen=True)
class EventDraft:
    """Submitted event details before the store assigns an ID."""

    name: str
    faculty: str
    description: str
    date: str
    time: str
    location: str
    has_tickets: bool = False
    ticket_price: Money = field(default_factory=Money.zero)
    available_tickets: Capacity = field(default_factory=lambda: Capacity(0))
    category: str = ""
    contact: str = ""
    audience_type: str = ""


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    name: str
    faculty: str
    description: str
    date: str
    time: str
    location: str
    poster_image_url: str
    has_tickets: bool
    ticket_price: Money
    available_tickets: Capacity
    status: EventStatus
    posted_by_uid: str
    posted_by_name: str
    submitted_at: datetime
    approved_by: str | None = None
    rejection_reason: str | None = None
    approved_at: datetime | None = None
    category: str = ""
    contact: str = ""
    audience_type: str = ""

    def __post_init__(self) -> None:
        if (self.status is EventStatus.REJECTED) != bool(self.rejection_reason):
            raise ValueError("rejection_reason must be set exactly when status is rejected")

    def approve(
        self, approver_uid: str, at: datetime, available_tickets: Capacity | None = None
    ) -> "Event":
        """Return the approved event; approving an approved event is a no-op."""
        if self.status is EventStatus.APPROVED:
            return self
        if self.status.is_terminal:
            raise InvalidTransitionError(self.status.value, EventStatus.APPROVED.value)
        return replace(
            self,
            status=EventStatus.APPROVED,
            approved_by=approver_uid,
            approved_at=at,
            rejection_reason=None,
            available_tickets=(
                available_tickets if available_tickets is not None else self.available_tickets
            ),
        )

    def reject(self, approver_uid: str, reason: str, at: datetime) -> "Event":
        """Return the rejected event; rejecting a rejected event is a no-op."""
        if self.status is EventStatus.REJECTED:
            return self
        if self.status.is_terminal:
            raise InvalidTransitionError(self.status.value, EventStatus.REJECTED.value)
        return replace(
            self,
            status=EventStatus.REJECTED,
            approved_by=approver_uid,
            approved_at=at,
            rejection_reason=reason,
        )

    def take_tickets(self, count: TicketCount) -> "Event":
        if self.available_tickets.value < count.value:
            raise InsufficientInventoryError(self.available_tickets.value, count.value)
        return replace(self, available_tickets=self.available_tickets.take(count))

    def price_for(self, count: TicketCount) -> Money:
        if not self.has_tickets:
            return Money.zero()
        return self.ticket_price.times(count.value)


@dataclass(frozen=True)
class BuyerInfo:
    """Contact details collected on the booking form."""

    email: str
    name: str
    phone: str


@dataclass(frozen=True)
class Ticket:
    """Domain representation of a booked Ticket."""

    id: UUID
    ticket_id: str
    event_id: EventId
    user_id: str
    user_email: str
    user_name: str
    user_phone: str
    ticket_count: TicketCount
    amount_paid: Money
    payment_status: PaymentStatus
    booked_at: datetime

    @property
    def qr_code_data(self) -> str:
        return self.ticket_id


@dataclass(frozen=True)
class UserProfile:
    """Profile document keyed by the identity provider's uid."""

    uid: str
    name: str
    email: str
    role: Role
    faculty: str
    created_at: datetime
    username: str | None = None


@dataclass(frozen=True)
class CrewUsername:
    """Allowlist entry that lets one crew account register."""

    username: str
    is_registered: bool = False
    uid: str | None = None

    def consume(self, uid: str) -> "CrewUsername":
        return replace(self, is_registered=True, uid=uid)


@dataclass(frozen=True)
class Identity:
    """What the identity provider hands back: an opaque key and an email."""

    uid: str
    email: str


@dataclass(frozen=True)
class Principal:
    """The caller of a service operation."""

    uid: str
    email: str
    role: Role = Role.USER
    faculty: str = ""
    name: str = ""

    @property
    def is_crew(self) -> bool:
        return self.role is Role.CREW

    @property
    def display_name(self) -> str:
        return self.name or self.email

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "Principal":
        return cls(
            uid=profile.uid,
            email=profile.email,
            role=profile.role,
            faculty=profile.faculty,
            name=profile.name or profile.username or "",
        )
