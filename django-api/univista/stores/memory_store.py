"""In-process collaborators.

MemoryDocumentStore gives the same optimistic transaction guarantees as a
hosted document database: every document carries a version, a transaction
remembers the versions it read, and commit fails if any of them moved. The
transaction function is then re-run against fresh state.
"""

import logging
import posixpath
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, TypeVar

from univista.conf import app_settings
from univista.domain import (
    CrewUsername,
    Event,
    EventDraft,
    EventId,
    EventStatus,
    Identity,
    Role,
    Ticket,
    UserProfile,
)
from univista.domain.errors import IdentityExistsError, TransientStoreError
from univista.stores.interfaces import (
    BlobStore,
    DocumentStore,
    IdentityProvider,
    StoredBlob,
    StoreTransaction,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

EVENTS = "events"
TICKETS = "tickets"
PROFILES = "users"
CREW_USERNAMES = "crew_usernames"


class TransactionConflict(Exception):
    """A document read by the transaction changed before commit."""


class _Document:
    __slots__ = ("value", "version")

    def __init__(self, value, version: int = 1) -> None:
        self.value = value
        self.version = version


class MemoryTransaction(StoreTransaction):
    def __init__(self, store: "MemoryDocumentStore") -> None:
        self._store = store
        self._reads: dict[tuple[str, str], int] = {}
        self._writes: dict[tuple[str, str], object] = {}

    def _read(self, collection: str, key: str):
        slot = (collection, key)
        if slot in self._writes:
            return self._writes[slot]
        with self._store._lock:
            doc = self._store._collections[collection].get(key)
            self._reads.setdefault(slot, doc.version if doc else 0)
            return doc.value if doc else None

    def _write(self, collection: str, key: str, value) -> None:
        self._writes[(collection, key)] = value

    def get_event(self, event_id: EventId) -> Event | None:
        return self._read(EVENTS, str(event_id))

    def update_event(self, event: Event) -> None:
        self._write(EVENTS, str(event.id), event)

    def ticket_id_exists(self, ticket_id: str) -> bool:
        return self._read(TICKETS, ticket_id) is not None

    def add_ticket(self, ticket: Ticket) -> None:
        self._write(TICKETS, ticket.ticket_id, ticket)

    def get_crew_username(self, username: str) -> CrewUsername | None:
        return self._read(CREW_USERNAMES, username)

    def update_crew_username(self, record: CrewUsername) -> None:
        self._write(CREW_USERNAMES, record.username, record)

    def set_profile(self, profile: UserProfile) -> None:
        self._write(PROFILES, profile.uid, profile)

    def commit(self) -> None:
        with self._store._lock:
            for (collection, key), version in self._reads.items():
                doc = self._store._collections[collection].get(key)
                if (doc.version if doc else 0) != version:
                    raise TransactionConflict(f"{collection}/{key}")
            for (collection, key), value in self._writes.items():
                self._store._put(collection, key, value)


class MemoryDocumentStore(DocumentStore):
    """Thread-safe document store kept in dictionaries."""

    def __init__(self, max_attempts: int | None = None) -> None:
        self._lock = threading.RLock()
        self._collections: dict[str, dict[str, _Document]] = {
            EVENTS: {},
            TICKETS: {},
            PROFILES: {},
            CREW_USERNAMES: {},
        }
        self._max_attempts = max_attempts or app_settings.TRANSACTION_MAX_ATTEMPTS

    def _put(self, collection: str, key: str, value) -> None:
        docs = self._collections[collection]
        current = docs.get(key)
        docs[key] = _Document(value, current.version + 1 if current else 1)

    def _values(self, collection: str) -> list:
        with self._lock:
            return [doc.value for doc in self._collections[collection].values()]

    def _get(self, collection: str, key: str):
        with self._lock:
            doc = self._collections[collection].get(key)
            return doc.value if doc else None

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
        now = datetime.now(timezone.utc)
        event = Event(
            id=EventId(value=uuid.uuid4()),
            name=draft.name,
            faculty=draft.faculty,
            description=draft.description,
            date=draft.date,
            time=draft.time,
            location=draft.location,
            poster_image_url=poster_image_url,
            has_tickets=draft.has_tickets,
            ticket_price=draft.ticket_price,
            available_tickets=draft.available_tickets,
            status=status,
            posted_by_uid=posted_by_uid,
            posted_by_name=posted_by_name,
            submitted_at=now,
            approved_by=approved_by,
            approved_at=now if approved_by else None,
            category=draft.category,
            contact=draft.contact,
            audience_type=draft.audience_type,
        )
        with self._lock:
            self._put(EVENTS, str(event.id), event)
        return event

    def put_event(self, event: Event) -> None:
        """Seed an event as-is."""
        with self._lock:
            self._put(EVENTS, str(event.id), event)

    def get_event(self, event_id: EventId) -> Event | None:
        return self._get(EVENTS, str(event_id))

    def list_events(
        self,
        *,
        status: EventStatus,
        faculties: list[str] | None = None,
        has_tickets: bool | None = None,
    ) -> list[Event]:
        events = [
            event
            for event in self._values(EVENTS)
            if event.status is status
            and (faculties is None or event.faculty in faculties)
            and (has_tickets is None or event.has_tickets == has_tickets)
        ]
        return sorted(events, key=lambda event: event.date)

    def list_pending_events(self, faculty: str) -> list[Event]:
        events = [
            event
            for event in self._values(EVENTS)
            if event.status is EventStatus.PENDING and event.faculty == faculty
        ]
        return sorted(events, key=lambda event: event.submitted_at)

    def list_events_posted_by(self, uid: str) -> list[Event]:
        events = [event for event in self._values(EVENTS) if event.posted_by_uid == uid]
        # Reversed insertion order keeps same-instant writes newest first.
        return sorted(reversed(events), key=lambda event: event.submitted_at, reverse=True)

    def list_tickets_for_user(self, user_id: str) -> list[Ticket]:
        tickets = [ticket for ticket in self._values(TICKETS) if ticket.user_id == user_id]
        return sorted(reversed(tickets), key=lambda ticket: ticket.booked_at, reverse=True)

    def list_tickets_for_event(self, event_id: EventId) -> list[Ticket]:
        return [ticket for ticket in self._values(TICKETS) if ticket.event_id == event_id]

    def get_ticket(self, ticket_id: str) -> Ticket | None:
        return self._get(TICKETS, ticket_id)

    def get_profile(self, uid: str) -> UserProfile | None:
        return self._get(PROFILES, uid)

    def set_profile(self, profile: UserProfile) -> None:
        with self._lock:
            self._put(PROFILES, profile.uid, profile)

    def find_crew_profile(self, username: str) -> UserProfile | None:
        for profile in self._values(PROFILES):
            if profile.username == username and profile.role is Role.CREW:
                return profile
        return None

    def get_crew_username(self, username: str) -> CrewUsername | None:
        return self._get(CREW_USERNAMES, username)

    def put_crew_username(self, record: CrewUsername) -> None:
        """Provision an allowlist entry."""
        with self._lock:
            self._put(CREW_USERNAMES, record.username, record)

    def run_transaction(self, fn: Callable[[StoreTransaction], T]) -> T:
        for attempt in range(1, self._max_attempts + 1):
            tx = MemoryTransaction(self)
            result = fn(tx)
            try:
                tx.commit()
            except TransactionConflict as exc:
                logger.debug("Transaction conflict on %s (attempt %d)", exc, attempt)
                continue
            return result
        raise TransientStoreError("Transaction aborted after repeated conflicts")


class MemoryIdentityProvider(IdentityProvider):
    """Identity provider keeping credentials in a dictionary."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_email: dict[str, tuple[Identity, str]] = {}
        self.password_resets: list[str] = []

    def create_identity(self, email: str, password: str) -> Identity:
        key = email.strip().lower()
        with self._lock:
            if key in self._by_email:
                raise IdentityExistsError(email)
            identity = Identity(uid=uuid.uuid4().hex, email=key)
            self._by_email[key] = (identity, password)
        return identity

    def authenticate(self, email: str, password: str) -> Identity | None:
        entry = self._by_email.get(email.strip().lower())
        if entry is None or entry[1] != password:
            return None
        return entry[0]

    def delete_identity(self, uid: str) -> None:
        with self._lock:
            for key, (identity, _) in list(self._by_email.items()):
                if identity.uid == uid:
                    del self._by_email[key]

    def send_password_reset(self, email: str) -> None:
        self.password_resets.append(email)


class MemoryBlobStore(BlobStore):
    def __init__(self, base_url: str = "memory://") -> None:
        self.base_url = base_url
        self.blobs: dict[str, bytes] = {}

    def upload(self, path: str, data: bytes) -> StoredBlob:
        name, suffix = path, 1
        stem, ext = posixpath.splitext(path)
        while name in self.blobs:
            name = f"{stem}_{suffix}{ext}"
            suffix += 1
        self.blobs[name] = data
        return StoredBlob(name=name, url=f"{self.base_url}{name}")

    def delete(self, name: str) -> None:
        self.blobs.pop(name, None)
