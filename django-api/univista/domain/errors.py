"""Domain error codes for the univista app."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    UNAUTHORIZED = "UNAUTHORIZED"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INVALID_OR_USED_USERNAME = "INVALID_OR_USED_USERNAME"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    EVENT_NOT_BOOKABLE = "EVENT_NOT_BOOKABLE"
    INSUFFICIENT_INVENTORY = "INSUFFICIENT_INVENTORY"
    IDENTITY_EXISTS = "IDENTITY_EXISTS"
    MALFORMED_DOCUMENT = "MALFORMED_DOCUMENT"
    TRANSIENT_STORE_FAILURE = "TRANSIENT_STORE_FAILURE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class UnauthenticatedError(DomainError):
    """Raised when an operation needs an identity and none is attached."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(code=ErrorCode.UNAUTHENTICATED, message=message)


class UnauthorizedError(DomainError):
    """Raised when the identity lacks the role for an operation."""

    def __init__(self, message: str = "Not allowed") -> None:
        super().__init__(code=ErrorCode.UNAUTHORIZED, message=message)


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        object.__setattr__(self, "event_id", event_id)


class TicketNotFoundError(DomainError):
    """Raised when a ticket lookup by ticket ID finds nothing."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_FOUND,
            message="Ticket not found",
        )
        object.__setattr__(self, "ticket_id", ticket_id)


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class InvalidArgumentError(DomainError):
    """Raised for caller input that can never succeed."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_ARGUMENT, message=message)


class InvalidOrUsedUsernameError(DomainError):
    """Raised when a crew username is unknown or already consumed."""

    def __init__(self, username: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_OR_USED_USERNAME,
            message="Invalid or already registered username",
        )
        object.__setattr__(self, "username", username)


class InvalidTransitionError(DomainError):
    """Raised when an event status change leaves a terminal state."""

    def __init__(self, from_status: str, to_status: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=f"Event is already {from_status} and cannot become {to_status}",
        )
        object.__setattr__(self, "from_status", from_status)
        object.__setattr__(self, "to_status", to_status)


class EventNotBookableError(DomainError):
    """Raised when tickets are requested for an event that is not approved."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_BOOKABLE,
            message="Event is not open for booking",
        )
        object.__setattr__(self, "event_id", event_id)


class InsufficientInventoryError(DomainError):
    """Raised when a booking asks for more tickets than remain."""

    def __init__(self, remaining: int, requested: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_INVENTORY,
            message=f"Only {remaining} ticket(s) remaining. Cannot book {requested}.",
        )
        object.__setattr__(self, "remaining", remaining)
        object.__setattr__(self, "requested", requested)


class IdentityExistsError(DomainError):
    """Raised when an identity with the same email already exists."""

    def __init__(self, email: str) -> None:
        super().__init__(
            code=ErrorCode.IDENTITY_EXISTS,
            message="An account with this email already exists",
        )
        object.__setattr__(self, "email", email)


class MalformedDocumentError(DomainError):
    """Raised when a stored document cannot be turned into a domain model."""

    def __init__(self, collection: str, key: str, detail: str) -> None:
        super().__init__(
            code=ErrorCode.MALFORMED_DOCUMENT,
            message=f"Malformed {collection} document",
        )
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "detail", detail)


class TransientStoreError(DomainError):
    """Raised when a collaborator fails in a way a later retry may not."""

    def __init__(self, message: str = "Store temporarily unavailable") -> None:
        super().__init__(code=ErrorCode.TRANSIENT_STORE_FAILURE, message=message)
