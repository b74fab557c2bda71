"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from django.contrib.auth import login, logout
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from univista import wiring
from univista.domain import BuyerInfo, Principal
from univista.domain.errors import DomainError, ErrorCode, UnauthorizedError
from univista.handlers.serializers import (
    ApproveSerializer,
    BookingSerializer,
    CrewRegisterSerializer,
    CrewSignInSerializer,
    EventDraftSerializer,
    EventSerializer,
    PasswordResetSerializer,
    PrincipalSerializer,
    RegisterSerializer,
    RejectSerializer,
    SignInSerializer,
    TicketSerializer,
)
from univista.services import PosterUpload

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TICKET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_OR_USED_USERNAME: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.EVENT_NOT_BOOKABLE: status.HTTP_409_CONFLICT,
    ErrorCode.INSUFFICIENT_INVENTORY: status.HTTP_409_CONFLICT,
    ErrorCode.IDENTITY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.MALFORMED_DOCUMENT: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.TRANSIENT_STORE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def domain_error_response(exc: DomainError) -> Response:
    code = ERROR_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST)
    if code >= 500:
        logger.error("Domain error %s: %s", exc.code.value, exc)
        message = "Service temporarily unavailable"
    else:
        message = exc.message
    return Response({"code": exc.code.value, "message": message}, status=code)


class DomainAPIView(APIView):
    """Base view that turns DomainError into a JSON error response."""

    permission_classes = [AllowAny]

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            return domain_error_response(exc)
        return super().handle_exception(exc)

    def principal(self, request: Request) -> Principal | None:
        user = request.user
        if not user.is_authenticated:
            return None
        return wiring.account_service().resolve_principal(str(user.pk), user.email)


def _poster(serializer: EventDraftSerializer) -> PosterUpload | None:
    upload = serializer.validated_data.get("poster")
    if upload is None:
        return None
    return PosterUpload(filename=upload.name, data=upload.read())


class EventListView(DomainAPIView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        events = wiring.event_service().list_approved(
            faculty=request.query_params.get("faculty"),
            ticket=request.query_params.get("ticket"),
        )
        return Response(EventSerializer(events, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = EventDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = wiring.event_service().submit(
            self.principal(request), serializer.to_draft(), _poster(serializer)
        )
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(DomainAPIView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        event = wiring.event_service().get_event(event_id)
        return Response(EventSerializer(event).data)


class CrewEventView(DomainAPIView):
    """Handler for POST /api/crew/events"""

    def post(self, request: Request) -> Response:
        serializer = EventDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = wiring.event_service().post_approved(
            self.principal(request), serializer.to_draft(), _poster(serializer)
        )
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class PendingEventListView(DomainAPIView):
    """Handler for GET /api/crew/pending"""

    def get(self, request: Request) -> Response:
        events = wiring.event_service().list_pending(self.principal(request))
        return Response(EventSerializer(events, many=True).data)


class ApproveEventView(DomainAPIView):
    """Handler for POST /api/events/{event_id}/approve"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = ApproveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = wiring.event_service().approve(
            self.principal(request),
            event_id,
            available_tickets=serializer.validated_data.get("available_tickets"),
        )
        return Response(EventSerializer(event).data)


class RejectEventView(DomainAPIView):
    """Handler for POST /api/events/{event_id}/reject"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = RejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = wiring.event_service().reject(
            self.principal(request), event_id, serializer.validated_data["reason"]
        )
        return Response(EventSerializer(event).data)


class QuoteView(DomainAPIView):
    """Handler for GET /api/events/{event_id}/quote?count=N"""

    def get(self, request: Request, event_id: str) -> Response:
        try:
            count = int(request.query_params.get("count", "1"))
        except ValueError:
            count = 0
        total = wiring.booking_service().quote(event_id, count)
        return Response({"count": count, "total": str(total)})


class BookingView(DomainAPIView):
    """Handler for POST /api/events/{event_id}/bookings"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = BookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        ticket = wiring.booking_service().book_tickets(
            self.principal(request),
            event_id,
            data["count"],
            BuyerInfo(email=data["email"], name=data["name"], phone=data["phone"]),
        )
        return Response(TicketSerializer(ticket).data, status=status.HTTP_201_CREATED)


class TicketDetailView(DomainAPIView):
    """Handler for GET /api/tickets/{ticket_id}"""

    def get(self, request: Request, ticket_id: str) -> Response:
        principal = self.principal(request)
        ticket = wiring.booking_service().get_ticket(ticket_id)
        if principal is None or not (principal.is_crew or principal.uid == ticket.user_id):
            raise UnauthorizedError("Not your ticket")
        return Response(TicketSerializer(ticket).data)


class MyTicketsView(DomainAPIView):
    """Handler for GET /api/me/tickets"""

    def get(self, request: Request) -> Response:
        tickets = wiring.booking_service().list_tickets(self.principal(request))
        return Response(TicketSerializer(tickets, many=True).data)


class MyEventsView(DomainAPIView):
    """Handler for GET /api/me/events"""

    def get(self, request: Request) -> Response:
        events = wiring.event_service().list_submitted(self.principal(request))
        return Response(EventSerializer(events, many=True).data)


class MeView(DomainAPIView):
    """Handler for GET /api/me"""

    def get(self, request: Request) -> Response:
        principal = self.principal(request)
        if principal is None:
            return Response({"role": "guest"})
        return Response(PrincipalSerializer(principal).data)


class RegisterView(DomainAPIView):
    """Handler for POST /api/auth/register"""

    def post(self, request: Request) -> Response:
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        principal = wiring.account_service().register_user(
            data["name"], data["email"], data["password"], data["faculty"]
        )
        login(request, wiring.identity_provider().user_for(principal.uid))
        return Response(PrincipalSerializer(principal).data, status=status.HTTP_201_CREATED)


class CrewRegisterView(DomainAPIView):
    """Handler for POST /api/auth/crew/register"""

    def post(self, request: Request) -> Response:
        serializer = CrewRegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        principal = wiring.account_service().register_crew(
            data["username"], data["email"], data["password"], data["faculty"]
        )
        return Response(PrincipalSerializer(principal).data, status=status.HTTP_201_CREATED)


class SignInView(DomainAPIView):
    """Handler for POST /api/auth/sign-in"""

    def post(self, request: Request) -> Response:
        serializer = SignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        principal = wiring.account_service().sign_in(
            serializer.validated_data["email"], serializer.validated_data["password"]
        )
        login(request, wiring.identity_provider().user_for(principal.uid))
        return Response(PrincipalSerializer(principal).data)


class CrewSignInView(DomainAPIView):
    """Handler for POST /api/auth/crew/sign-in"""

    def post(self, request: Request) -> Response:
        serializer = CrewSignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        principal = wiring.account_service().crew_sign_in(
            serializer.validated_data["username"], serializer.validated_data["password"]
        )
        login(request, wiring.identity_provider().user_for(principal.uid))
        return Response(PrincipalSerializer(principal).data)


class SignOutView(DomainAPIView):
    """Handler for POST /api/auth/sign-out"""

    def post(self, request: Request) -> Response:
        logout(request)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PasswordResetView(DomainAPIView):
    """Handler for POST /api/auth/password-reset"""

    def post(self, request: Request) -> Response:
        serializer = PasswordResetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        wiring.account_service().send_password_reset(serializer.validated_data["email"])
        return Response(status=status.HTTP_202_ACCEPTED)
