"""Booking service: the ticket inventory transaction.

The availability check, the decrement and the ticket record are written in
one store transaction, and the amount charged is computed from the stored
ticket price rather than taken from the caller.
"""

import logging
import secrets
import string
import uuid
from datetime import datetime, timezone

from univista.conf import app_settings
from univista.domain import (
    BuyerInfo,
    EventStatus,
    Money,
    PaymentStatus,
    Principal,
    Ticket,
    TicketCount,
)
from univista.domain.errors import (
    EventNotBookableError,
    EventNotFoundError,
    InsufficientInventoryError,
    InvalidArgumentError,
    TicketNotFoundError,
    TransientStoreError,
    UnauthenticatedError,
)
from univista.services.event_service import parse_event_id
from univista.stores.interfaces import DocumentStore, StoreTransaction

logger = logging.getLogger(__name__)

TICKET_ID_ALPHABET = string.ascii_uppercase + string.digits
GUEST_ID_ALPHABET = string.ascii_lowercase + string.digits
MAX_TICKET_ID_ATTEMPTS = 5


def generate_ticket_id() -> str:
    suffix = "".join(
        secrets.choice(TICKET_ID_ALPHABET) for _ in range(app_settings.TICKET_ID_LENGTH)
    )
    return f"{app_settings.TICKET_ID_PREFIX}{suffix}"


def generate_guest_id() -> str:
    suffix = "".join(
        secrets.choice(GUEST_ID_ALPHABET) for _ in range(app_settings.GUEST_ID_LENGTH)
    )
    return f"{app_settings.GUEST_ID_PREFIX}{suffix}"


def _ticket_count(requested_count) -> TicketCount:
    try:
        return TicketCount(requested_count)
    except ValueError as exc:
        raise InvalidArgumentError(str(exc)) from exc


class BookingService:
    """Service for ticket booking operations."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def quote(self, event_id: str, requested_count: int) -> Money:
        """Return the amount due for requested_count tickets.

        Raises:
            InvalidArgumentError: If requested_count is not a positive integer.
            InvalidEventIdError, EventNotFoundError
        """
        count = _ticket_count(requested_count)
        key = parse_event_id(event_id)
        event = self._store.get_event(key)
        if event is None:
            raise EventNotFoundError(event_id)
        return event.price_for(count)

    def book_tickets(
        self,
        principal: Principal | None,
        event_id: str,
        requested_count: int,
        buyer: BuyerInfo,
    ) -> Ticket:
        """Take requested_count tickets from an event and record the ticket.

        Guests (principal is None) are booked under a generated guest ID.

        Raises:
            InvalidArgumentError: For a non-positive count or missing buyer details.
            InvalidEventIdError, EventNotFoundError
            EventNotBookableError: If the event is not approved.
            InsufficientInventoryError: If fewer tickets remain than requested.
            TransientStoreError: If the store keeps conflicting.
        """
        count = _ticket_count(requested_count)
        if not (buyer.email.strip() and buyer.name.strip() and buyer.phone.strip()):
            raise InvalidArgumentError("Email, name and phone are required")
        key = parse_event_id(event_id)
        user_id = principal.uid if principal is not None else generate_guest_id()

        def reserve(tx: StoreTransaction) -> Ticket:
            event = tx.get_event(key)
            if event is None:
                raise EventNotFoundError(event_id)
            if event.status is not EventStatus.APPROVED:
                raise EventNotBookableError(event_id)

            tx.update_event(event.take_tickets(count))

            ticket = Ticket(
                id=uuid.uuid4(),
                ticket_id=self._unused_ticket_id(tx),
                event_id=key,
                user_id=user_id,
                user_email=buyer.email.strip(),
                user_name=buyer.name.strip(),
                user_phone=buyer.phone.strip(),
                ticket_count=count,
                amount_paid=event.price_for(count),
                payment_status=PaymentStatus.PAID,
                booked_at=datetime.now(timezone.utc),
            )
            tx.add_ticket(ticket)
            return ticket

        try:
            ticket = self._store.run_transaction(reserve)
        except InsufficientInventoryError as exc:
            logger.warning("Booking of %d for event %s refused: %s", count.value, key, exc.message)
            raise

        logger.info(
            "Booked %d ticket(s) for event %s as %s (%s)",
            count.value,
            key,
            ticket.ticket_id,
            user_id,
        )
        return ticket

    def list_tickets(self, principal: Principal | None) -> list[Ticket]:
        """Return the principal's tickets, newest first."""
        if principal is None:
            raise UnauthenticatedError()
        return self._store.list_tickets_for_user(principal.uid)

    def get_ticket(self, ticket_id: str) -> Ticket:
        """Look up a ticket by the ID printed on it (QR code data)."""
        ticket = self._store.get_ticket(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket

    def _unused_ticket_id(self, tx: StoreTransaction) -> str:
        for _ in range(MAX_TICKET_ID_ATTEMPTS):
            ticket_id = generate_ticket_id()
            if not tx.ticket_id_exists(ticket_id):
                return ticket_id
        raise TransientStoreError("Could not allocate a unique ticket ID")
