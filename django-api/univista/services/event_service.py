"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from univista.conf import app_settings
from univista.domain import (
    UNIVERSITY_WIDE,
    Capacity,
    Event,
    EventDraft,
    EventId,
    EventStatus,
    Principal,
)
from univista.domain.errors import (
    EventNotFoundError,
    InvalidArgumentError,
    InvalidEventIdError,
    UnauthenticatedError,
    UnauthorizedError,
)
from univista.stores.interfaces import BlobStore, DocumentStore, StoreTransaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PosterUpload:
    """Raw poster image attached to a submission."""

    filename: str
    data: bytes


def parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(event_id)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidEventIdError() from exc


class EventService:
    """Service for event submission, review and listing."""

    def __init__(self, store: DocumentStore, blobs: BlobStore) -> None:
        self._store = store
        self._blobs = blobs

    def submit(
        self,
        principal: Principal | None,
        draft: EventDraft,
        poster: PosterUpload | None = None,
    ) -> Event:
        """Create an event on behalf of principal.

        Users' events start pending. Crew events for their own faculty or
        University Wide start approved with the crew member recorded as
        approver; other faculties' events go to that faculty's review queue.
        Free events posted without an allocation get FREE_EVENT_CAPACITY.

        Raises:
            UnauthenticatedError: If no principal is attached.
        """
        if principal is None:
            raise UnauthenticatedError("Sign in to submit an event")

        if _publishes_for(principal, draft.faculty):
            status, approved_by = EventStatus.APPROVED, principal.uid
        else:
            status, approved_by = EventStatus.PENDING, None

        if not draft.has_tickets and draft.available_tickets.value == 0:
            draft = replace(draft, available_tickets=Capacity(app_settings.FREE_EVENT_CAPACITY))

        stored, poster_url = None, ""
        if poster is not None:
            stored = self._blobs.upload(self._poster_path(principal, poster), poster.data)
            poster_url = stored.url

        try:
            event = self._store.add_event(
                draft,
                status=status,
                posted_by_uid=principal.uid,
                posted_by_name=principal.display_name,
                poster_image_url=poster_url,
                approved_by=approved_by,
            )
        except Exception:
            if stored is not None:
                logger.error("Event write failed, removing orphaned poster %s", stored.name)
                self._blobs.delete(stored.name)
            raise

        logger.info("Event %s submitted by %s as %s", event.id, principal.uid, status.value)
        return event

    def post_approved(
        self,
        principal: Principal | None,
        draft: EventDraft,
        poster: PosterUpload | None = None,
    ) -> Event:
        """Crew-only direct posting that skips the review queue.

        Raises:
            UnauthenticatedError: If no principal is attached.
            UnauthorizedError: If the principal is not crew, or the event
                belongs to another faculty.
        """
        if principal is None:
            raise UnauthenticatedError("Sign in to post an event")
        if not principal.is_crew:
            raise UnauthorizedError("Only crew members can post directly")
        if not _publishes_for(principal, draft.faculty):
            logger.warning("Crew %s attempted to post for %s", principal.uid, draft.faculty)
            raise UnauthorizedError("Crew can only post events for their own faculty")
        return self.submit(principal, draft, poster)

    def approve(
        self,
        principal: Principal | None,
        event_id: str,
        available_tickets: int | None = None,
    ) -> Event:
        """Approve a pending event.

        Approving an approved event returns it unchanged.

        Raises:
            InvalidArgumentError: If available_tickets is negative.
            InvalidEventIdError, EventNotFoundError
            UnauthenticatedError, UnauthorizedError
            InvalidTransitionError: If the event was already rejected.
        """
        allocation = None
        if available_tickets is not None:
            try:
                allocation = Capacity(available_tickets)
            except ValueError as exc:
                raise InvalidArgumentError(str(exc)) from exc

        key = parse_event_id(event_id)
        self._require_crew(principal)

        def transition(tx: StoreTransaction) -> Event:
            event = self._load_for_review(tx, key, principal)
            updated = event.approve(principal.uid, _now(), allocation)
            if updated is not event:
                tx.update_event(updated)
            return updated

        event = self._store.run_transaction(transition)
        logger.info("Event %s approved by %s", key, principal.uid)
        return event

    def reject(self, principal: Principal | None, event_id: str, reason: str) -> Event:
        """Reject a pending event with a reason.

        Rejecting a rejected event returns it unchanged.

        Raises:
            InvalidArgumentError: If the reason is blank.
            InvalidEventIdError, EventNotFoundError
            UnauthenticatedError, UnauthorizedError
            InvalidTransitionError: If the event was already approved.
        """
        reason = (reason or "").strip()
        if not reason:
            raise InvalidArgumentError("Rejection reason is required")

        key = parse_event_id(event_id)
        self._require_crew(principal)

        def transition(tx: StoreTransaction) -> Event:
            event = self._load_for_review(tx, key, principal)
            updated = event.reject(principal.uid, reason, _now())
            if updated is not event:
                tx.update_event(updated)
            return updated

        event = self._store.run_transaction(transition)
        logger.info("Event %s rejected by %s", key, principal.uid)
        return event

    def list_pending(self, principal: Principal | None) -> list[Event]:
        """Return the crew member's review queue, oldest first."""
        self._require_crew(principal)
        return self._store.list_pending_events(principal.faculty)

    def list_approved(self, faculty: str | None = None, ticket: str | None = None) -> list[Event]:
        """Return approved events ordered by date.

        A faculty filter also matches University Wide events. ticket may be
        "paid" or "free"; anything else means no ticket filter.
        """
        faculties = None
        if faculty and faculty != "all":
            faculties = [faculty, UNIVERSITY_WIDE]
        has_tickets = {"paid": True, "free": False}.get(ticket or "")
        return self._store.list_events(
            status=EventStatus.APPROVED, faculties=faculties, has_tickets=has_tickets
        )

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        key = parse_event_id(event_id)
        event = self._store.get_event(key)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def list_submitted(self, principal: Principal | None) -> list[Event]:
        """Return the principal's own submissions, newest first."""
        if principal is None:
            raise UnauthenticatedError()
        return self._store.list_events_posted_by(principal.uid)

    def _require_crew(self, principal: Principal | None) -> None:
        if principal is None:
            raise UnauthenticatedError()
        if not principal.is_crew:
            logger.warning("Non-crew %s attempted a review action", principal.uid)
            raise UnauthorizedError("Only crew members can review events")

    def _load_for_review(
        self, tx: StoreTransaction, key: EventId, principal: Principal
    ) -> Event:
        event = tx.get_event(key)
        if event is None:
            raise EventNotFoundError(str(key))
        if event.faculty != principal.faculty:
            raise UnauthorizedError("Crew can only review events of their own faculty")
        return event

    def _poster_path(self, principal: Principal, poster: PosterUpload) -> str:
        stamp = int(time.time() * 1000)
        return f"{app_settings.POSTER_PATH_PREFIX}/{principal.uid}/{stamp}_{poster.filename}"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _publishes_for(principal: Principal, faculty: str) -> bool:
    return principal.is_crew and faculty in (principal.faculty, UNIVERSITY_WIDE)
