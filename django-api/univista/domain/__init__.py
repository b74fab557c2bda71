from univista.domain.models import (
    BuyerInfo,
    CrewUsername,
    Event,
    EventDraft,
    Identity,
    Principal,
    Ticket,
    UserProfile,
)
from univista.domain.value_objects import (
    UNIVERSITY_WIDE,
    Capacity,
    EventId,
    EventStatus,
    Money,
    PaymentStatus,
    Role,
    TicketCount,
)

__all__ = [
    "Event",
    "EventDraft",
    "Ticket",
    "BuyerInfo",
    "UserProfile",
    "CrewUsername",
    "Identity",
    "Principal",
    "EventId",
    "EventStatus",
    "Money",
    "Capacity",
    "TicketCount",
    "PaymentStatus",
    "Role",
    "UNIVERSITY_WIDE",
]
