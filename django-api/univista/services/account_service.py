"""Account service: user and crew registration, sign-in and profile lookup."""

import logging
from datetime import datetime, timezone

from univista.domain import Principal, Role, UserProfile
from univista.domain.errors import (
    InvalidArgumentError,
    InvalidOrUsedUsernameError,
    UnauthenticatedError,
)
from univista.stores.interfaces import DocumentStore, IdentityProvider, StoreTransaction

logger = logging.getLogger(__name__)


class AccountService:
    """Service for identities and the profiles attached to them."""

    def __init__(self, store: DocumentStore, identities: IdentityProvider) -> None:
        self._store = store
        self._identities = identities

    def register_user(self, name: str, email: str, password: str, faculty: str) -> Principal:
        """Create a standard user account.

        Raises:
            InvalidArgumentError: If name, email, password or faculty is blank.
            IdentityExistsError: If the email is already registered.
        """
        if not faculty:
            raise InvalidArgumentError("Please select your faculty")
        if not (name and email and password):
            raise InvalidArgumentError("Name, email and password are required")

        identity = self._identities.create_identity(email, password)
        profile = UserProfile(
            uid=identity.uid,
            name=name,
            email=identity.email,
            role=Role.USER,
            faculty=faculty,
            created_at=datetime.now(timezone.utc),
        )
        try:
            self._store.set_profile(profile)
        except Exception:
            logger.error("Profile write failed for %s, deleting identity", identity.uid)
            self._identities.delete_identity(identity.uid)
            raise
        logger.info("Registered user %s (%s)", identity.uid, faculty)
        return Principal.from_profile(profile)

    def register_crew(self, username: str, email: str, password: str, faculty: str) -> Principal:
        """Create a crew account from a pre-provisioned username.

        The profile write and the allowlist flip happen in one transaction.
        If that transaction fails the new identity is deleted again.

        Raises:
            InvalidOrUsedUsernameError: If the username is unknown or consumed.
            InvalidArgumentError: If faculty, email or password is blank.
            IdentityExistsError: If the email is already registered.
        """
        if not (faculty and email and password):
            raise InvalidArgumentError("Faculty, email and password are required")

        record = self._store.get_crew_username(username)
        if record is None or record.is_registered:
            logger.warning("Crew registration refused for username %r", username)
            raise InvalidOrUsedUsernameError(username)

        identity = self._identities.create_identity(email, password)
        profile = UserProfile(
            uid=identity.uid,
            name="",
            email=identity.email,
            role=Role.CREW,
            faculty=faculty,
            created_at=datetime.now(timezone.utc),
            username=username,
        )

        def claim(tx: StoreTransaction) -> None:
            current = tx.get_crew_username(username)
            if current is None or current.is_registered:
                raise InvalidOrUsedUsernameError(username)
            tx.set_profile(profile)
            tx.update_crew_username(current.consume(identity.uid))

        try:
            self._store.run_transaction(claim)
        except Exception:
            logger.error("Crew claim of %r failed, deleting identity %s", username, identity.uid)
            self._identities.delete_identity(identity.uid)
            raise

        logger.info("Registered crew %s for %s", username, faculty)
        return Principal.from_profile(profile)

    def sign_in(self, email: str, password: str) -> Principal:
        """Raises UnauthenticatedError for bad credentials."""
        identity = self._identities.authenticate(email, password)
        if identity is None:
            raise UnauthenticatedError("Invalid email or password")
        return self.resolve_principal(identity.uid, identity.email)

    def crew_sign_in(self, username: str, password: str) -> Principal:
        """Sign a crew member in by username instead of email."""
        profile = self._store.find_crew_profile(username)
        if profile is None:
            raise UnauthenticatedError("Invalid username or not a crew member")
        identity = self._identities.authenticate(profile.email, password)
        if identity is None or identity.uid != profile.uid:
            raise UnauthenticatedError("Invalid username or password")
        return Principal.from_profile(profile)

    def send_password_reset(self, email: str) -> None:
        if not email:
            raise InvalidArgumentError("Email is required")
        self._identities.send_password_reset(email)

    def resolve_principal(self, uid: str | None, email: str = "") -> Principal | None:
        """Return the principal for an authenticated uid, or None for guests.

        A signed-in identity without a profile is treated as a plain user.
        """
        if not uid:
            return None
        profile = self._store.get_profile(uid)
        if profile is None:
            return Principal(uid=uid, email=email)
        return Principal.from_profile(profile)
