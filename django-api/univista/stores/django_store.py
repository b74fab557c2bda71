"""Django ORM implementation of the DocumentStore.

Rows are converted to domain models on the way out; a row that violates a
domain invariant raises MalformedDocumentError instead of leaking through.
"""

import logging
from typing import Callable, TypeVar

from django.db import IntegrityError, OperationalError, transaction
from django.utils import timezone

from univista import models
from univista.domain import (
    Capacity,
    CrewUsername,
    Event,
    EventDraft,
    EventId,
    EventStatus,
    Money,
    PaymentStatus,
    Role,
    Ticket,
    TicketCount,
    UserProfile,
)
from univista.conf import app_settings
from univista.domain.errors import MalformedDocumentError, TransientStoreError
from univista.stores.interfaces import DocumentStore, StoreTransaction

logger = logging.getLogger(__name__)

T = TypeVar("T")


def event_to_domain(row: models.Event) -> Event:
    try:
        return Event(
            id=EventId(value=row.id),
            name=row.name,
            faculty=row.faculty,
            description=row.description,
            date=row.date,
            time=row.time,
            location=row.location,
            poster_image_url=row.poster_image_url,
            has_tickets=row.has_tickets,
            ticket_price=Money(amount=row.ticket_price),
            available_tickets=Capacity(value=row.available_tickets),
            status=EventStatus(row.status),
            posted_by_uid=row.posted_by_uid,
            posted_by_name=row.posted_by_name,
            submitted_at=row.submitted_at,
            approved_by=row.approved_by,
            rejection_reason=row.rejection_reason,
            approved_at=row.approved_at,
            category=row.category,
            contact=row.contact,
            audience_type=row.audience_type,
        )
    except ValueError as exc:
        raise MalformedDocumentError("events", str(row.pk), str(exc)) from exc


def ticket_to_domain(row: models.Ticket) -> Ticket:
    try:
        return Ticket(
            id=row.id,
            ticket_id=row.ticket_id,
            event_id=EventId(value=row.event_id),
            user_id=row.user_id,
            user_email=row.user_email,
            user_name=row.user_name,
            user_phone=row.user_phone,
            ticket_count=TicketCount(value=row.ticket_count),
            amount_paid=Money(amount=row.amount_paid),
            payment_status=PaymentStatus(row.payment_status),
            booked_at=row.booked_at,
        )
    except ValueError as exc:
        raise MalformedDocumentError("tickets", str(row.pk), str(exc)) from exc


def profile_to_domain(row: models.UserProfile) -> UserProfile:
    try:
        return UserProfile(
            uid=row.uid,
            name=row.name,
            email=row.email,
            role=Role(row.role),
            faculty=row.faculty,
            created_at=row.created_at,
            username=row.username,
        )
    except ValueError as exc:
        raise MalformedDocumentError("users", row.uid, str(exc)) from exc


def crew_username_to_domain(row: models.CrewUsername) -> CrewUsername:
    return CrewUsername(username=row.username, is_registered=row.is_registered, uid=row.uid)


def _save_profile(profile: UserProfile) -> None:
    models.UserProfile.objects.update_or_create(
        uid=profile.uid,
        defaults={
            "name": profile.name,
            "email": profile.email,
            "role": profile.role.value,
            "faculty": profile.faculty,
            "username": profile.username,
            "created_at": profile.created_at,
        },
    )


class DjangoTransaction(StoreTransaction):
    """Transaction handle; reads lock their rows until the atomic block ends."""

    def get_event(self, event_id: EventId) -> Event | None:
        row = models.Event.objects.select_for_update().filter(pk=event_id.value).first()
        return event_to_domain(row) if row else None

    def update_event(self, event: Event) -> None:
        models.Event.objects.filter(pk=event.id.value).update(
            status=event.status.value,
            approved_by=event.approved_by,
            approved_at=event.approved_at,
            rejection_reason=event.rejection_reason,
            available_tickets=event.available_tickets.value,
        )

    def ticket_id_exists(self, ticket_id: str) -> bool:
        return models.Ticket.objects.filter(ticket_id=ticket_id).exists()

    def add_ticket(self, ticket: Ticket) -> None:
        models.Ticket.objects.create(
            id=ticket.id,
            ticket_id=ticket.ticket_id,
            event_id=ticket.event_id.value,
            user_id=ticket.user_id,
            user_email=ticket.user_email,
            user_name=ticket.user_name,
            user_phone=ticket.user_phone,
            ticket_count=ticket.ticket_count.value,
            amount_paid=ticket.amount_paid.amount,
            payment_status=ticket.payment_status.value,
            booked_at=ticket.booked_at,
        )

    def get_crew_username(self, username: str) -> CrewUsername | None:
        row = models.CrewUsername.objects.select_for_update().filter(pk=username).first()
        return crew_username_to_domain(row) if row else None

    def update_crew_username(self, record: CrewUsername) -> None:
        models.CrewUsername.objects.filter(pk=record.username).update(
            is_registered=record.is_registered,
            uid=record.uid,
        )

    def set_profile(self, profile: UserProfile) -> None:
        _save_profile(profile)


class DjangoDocumentStore(DocumentStore):
    """Relational-database-backed document store using Django ORM."""

    def add_event(
        self,
        draft: EventDraft,
        *,
        status: EventStatus,
        posted_by_uid: str,
        posted_by_name: str,
        poster_image_url: str = "",
        approved_by: str | None = None,
    ) -> Event:
        row = models.Event.objects.create(
            name=draft.name,
            faculty=draft.faculty,
            description=draft.description,
            date=draft.date,
            time=draft.time,
            location=draft.location,
            poster_image_url=poster_image_url,
            category=draft.category,
            contact=draft.contact,
            audience_type=draft.audience_type,
            has_tickets=draft.has_tickets,
            ticket_price=draft.ticket_price.amount,
            available_tickets=draft.available_tickets.value,
            status=status.value,
            posted_by_uid=posted_by_uid,
            posted_by_name=posted_by_name,
            approved_by=approved_by,
            approved_at=timezone.now() if approved_by else None,
        )
        return event_to_domain(row)

    def get_event(self, event_id: EventId) -> Event | None:
        row = models.Event.objects.filter(pk=event_id.value).first()
        return event_to_domain(row) if row else None

    def list_events(
        self,
        *,
        status: EventStatus,
        faculties: list[str] | None = None,
        has_tickets: bool | None = None,
    ) -> list[Event]:
        rows = models.Event.objects.filter(status=status.value)
        if faculties is not None:
            rows = rows.filter(faculty__in=faculties)
        if has_tickets is not None:
            rows = rows.filter(has_tickets=has_tickets)
        return [event_to_domain(row) for row in rows.order_by("date")]

    def list_pending_events(self, faculty: str) -> list[Event]:
        rows = models.Event.objects.filter(
            status=models.Event.Status.PENDING, faculty=faculty
        ).order_by("submitted_at")
        return [event_to_domain(row) for row in rows]

    def list_events_posted_by(self, uid: str) -> list[Event]:
        rows = models.Event.objects.filter(posted_by_uid=uid).order_by("-submitted_at")
        return [event_to_domain(row) for row in rows]

    def list_tickets_for_user(self, user_id: str) -> list[Ticket]:
        rows = models.Ticket.objects.filter(user_id=user_id).order_by("-booked_at")
        return [ticket_to_domain(row) for row in rows]

    def list_tickets_for_event(self, event_id: EventId) -> list[Ticket]:
        rows = models.Ticket.objects.filter(event_id=event_id.value)
        return [ticket_to_domain(row) for row in rows]

    def get_ticket(self, ticket_id: str) -> Ticket | None:
        row = models.Ticket.objects.filter(ticket_id=ticket_id).first()
        return ticket_to_domain(row) if row else None

    def get_profile(self, uid: str) -> UserProfile | None:
        row = models.UserProfile.objects.filter(pk=uid).first()
        return profile_to_domain(row) if row else None

    def set_profile(self, profile: UserProfile) -> None:
        _save_profile(profile)

    def find_crew_profile(self, username: str) -> UserProfile | None:
        row = models.UserProfile.objects.filter(
            username=username, role=models.UserProfile.Role.CREW
        ).first()
        return profile_to_domain(row) if row else None

    def get_crew_username(self, username: str) -> CrewUsername | None:
        row = models.CrewUsername.objects.filter(pk=username).first()
        return crew_username_to_domain(row) if row else None

    def run_transaction(self, fn: Callable[[StoreTransaction], T]) -> T:
        attempts = app_settings.TRANSACTION_MAX_ATTEMPTS
        for attempt in range(1, attempts + 1):
            try:
                with transaction.atomic():
                    return fn(DjangoTransaction())
            except OperationalError as exc:
                logger.warning("Transaction attempt %d/%d failed: %s", attempt, attempts, exc)
            except IntegrityError as exc:
                # A unique or check constraint lost a race; the next attempt re-reads.
                logger.warning("Transaction attempt %d/%d conflicted: %s", attempt, attempts, exc)
        raise TransientStoreError("Transaction aborted after repeated conflicts")
