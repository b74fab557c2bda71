"""Composition root: builds services from the Django-backed collaborators."""

from functools import lru_cache

from univista.services import AccountService, BookingService, EventService
from univista.stores.django_blob import DjangoBlobStore
from univista.stores.django_identity import DjangoIdentityProvider
from univista.stores.django_store import DjangoDocumentStore


@lru_cache(maxsize=None)
def document_store() -> DjangoDocumentStore:
    return DjangoDocumentStore()


@lru_cache(maxsize=None)
def identity_provider() -> DjangoIdentityProvider:
    return DjangoIdentityProvider()


def event_service() -> EventService:
    return EventService(document_store(), DjangoBlobStore())


def booking_service() -> BookingService:
    return BookingService(document_store())


def account_service() -> AccountService:
    return AccountService(document_store(), identity_provider())
