"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Services only ever see
these interfaces; concrete collaborators are chosen in univista.wiring.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, TypeVar

from univista.domain import (
    CrewUsername,
    Event,
    EventDraft,
    EventId,
    EventStatus,
    Identity,
    Ticket,
    UserProfile,
)

T = TypeVar("T")


class StoreTransaction(ABC):
    """Read/write handle passed to a function run by DocumentStore.run_transaction.

    Reads see committed state; writes become visible only when the whole
    function returns and the store commits.
    """

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        ...

    @abstractmethod
    def update_event(self, event: Event) -> None:
        ...

    @abstractmethod
    def ticket_id_exists(self, ticket_id: str) -> bool:
        ...

    @abstractmethod
    def add_ticket(self, ticket: Ticket) -> None:
        ...

    @abstractmethod
    def get_crew_username(self, username: str) -> CrewUsername | None:
        ...

    @abstractmethod
    def update_crew_username(self, record: CrewUsername) -> None:
        ...

    @abstractmethod
    def set_profile(self, profile: UserProfile) -> None:
        ...


class DocumentStore(ABC):
    """Interface for document persistence operations."""

    @abstractmethod
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
        """Create an event from a draft and return it with its new ID."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def list_events(
        self,
        *,
        status: EventStatus,
        faculties: list[str] | None = None,
        has_tickets: bool | None = None,
    ) -> list[Event]:
        """Return events with a status, ordered by date ascending."""
        ...

    @abstractmethod
    def list_pending_events(self, faculty: str) -> list[Event]:
        """Return pending events of a faculty, oldest submission first."""
        ...

    @abstractmethod
    def list_events_posted_by(self, uid: str) -> list[Event]:
        """Return events posted by a uid, newest submission first."""
        ...

    @abstractmethod
    def list_tickets_for_user(self, user_id: str) -> list[Ticket]:
        """Return tickets booked by a user, newest first."""
        ...

    @abstractmethod
    def list_tickets_for_event(self, event_id: EventId) -> list[Ticket]:
        """Return every ticket booked against an event."""
        ...

    @abstractmethod
    def get_ticket(self, ticket_id: str) -> Ticket | None:
        """Return a ticket by its human-facing ticket ID."""
        ...

    @abstractmethod
    def get_profile(self, uid: str) -> UserProfile | None:
        ...

    @abstractmethod
    def set_profile(self, profile: UserProfile) -> None:
        ...

    @abstractmethod
    def find_crew_profile(self, username: str) -> UserProfile | None:
        """Return the crew profile registered under a username."""
        ...

    @abstractmethod
    def get_crew_username(self, username: str) -> CrewUsername | None:
        ...

    @abstractmethod
    def run_transaction(self, fn: Callable[[StoreTransaction], T]) -> T:
        """Run fn atomically and return its result.

        fn may be invoked more than once when a concurrent writer touches a
        document it read, so it must not have side effects outside the
        transaction handle. Raises TransientStoreError once retries run out.
        """
        ...


class IdentityProvider(ABC):
    """Interface for the authentication service."""

    @abstractmethod
    def create_identity(self, email: str, password: str) -> Identity:
        """Raises IdentityExistsError if the email is taken."""
        ...

    @abstractmethod
    def authenticate(self, email: str, password: str) -> Identity | None:
        """Return the identity for valid credentials, or None."""
        ...

    @abstractmethod
    def delete_identity(self, uid: str) -> None:
        ...

    @abstractmethod
    def send_password_reset(self, email: str) -> None:
        ...


@dataclass(frozen=True)
class StoredBlob:
    """Where an upload actually landed; name may differ from the requested path."""

    name: str
    url: str


class BlobStore(ABC):
    """Interface for poster image storage."""

    @abstractmethod
    def upload(self, path: str, data: bytes) -> StoredBlob:
        """Store bytes at path, or a free name derived from it."""
        ...

    @abstractmethod
    def delete(self, name: str) -> None:
        ...
