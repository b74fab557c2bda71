"""Pytest configuration and shared fixtures."""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from univista.domain import (
    Capacity,
    CrewUsername,
    EventDraft,
    EventStatus,
    Money,
    Principal,
    Role,
)
from univista.services import AccountService, BookingService, EventService
from univista.stores.memory_store import (
    MemoryBlobStore,
    MemoryDocumentStore,
    MemoryIdentityProvider,
)

FACULTY = "Faculty of Science"


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def blobs() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def identities() -> MemoryIdentityProvider:
    return MemoryIdentityProvider()


@pytest.fixture
def event_service(store, blobs) -> EventService:
    return EventService(store, blobs)


@pytest.fixture
def booking_service(store) -> BookingService:
    return BookingService(store)


@pytest.fixture
def account_service(store, identities) -> AccountService:
    return AccountService(store, identities)


@pytest.fixture
def user() -> Principal:
    return Principal(uid="user-1", email="ama@uni.lk", role=Role.USER, faculty=FACULTY, name="Ama")


@pytest.fixture
def crew() -> Principal:
    return Principal(uid="crew-1", email="crew@uni.lk", role=Role.CREW, faculty=FACULTY, name="")


@pytest.fixture
def other_crew() -> Principal:
    return Principal(uid="crew-2", email="arts@uni.lk", role=Role.CREW, faculty="Faculty of Arts")


def make_draft(**overrides) -> EventDraft:
    fields = {
        "name": "Science Day",
        "faculty": FACULTY,
        "description": "Open labs and talks",
        "date": "2026-11-20",
        "time": "09:00",
        "location": "Main Hall",
        "has_tickets": True,
        "ticket_price": Money(Decimal("250.00")),
        "available_tickets": Capacity(5),
    }
    fields.update(overrides)
    return EventDraft(**fields)


@pytest.fixture
def draft() -> EventDraft:
    return make_draft()


@pytest.fixture
def pending_event(store, user, draft):
    return store.add_event(
        draft,
        status=EventStatus.PENDING,
        posted_by_uid=user.uid,
        posted_by_name=user.display_name,
    )


@pytest.fixture
def approved_event_factory(store, crew):
    def factory(**overrides):
        return store.add_event(
            make_draft(**overrides),
            status=EventStatus.APPROVED,
            posted_by_uid=crew.uid,
            posted_by_name=crew.display_name,
            approved_by=crew.uid,
        )

    return factory


@pytest.fixture
def crew_username(store) -> CrewUsername:
    record = CrewUsername(username="science_crew")
    store.put_crew_username(record)
    return record
