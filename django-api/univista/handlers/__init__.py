from univista.handlers.views import (
    ApproveEventView,
    BookingView,
    CrewEventView,
    CrewRegisterView,
    CrewSignInView,
    EventDetailView,
    EventListView,
    MeView,
    MyEventsView,
    MyTicketsView,
    PasswordResetView,
    PendingEventListView,
    QuoteView,
    RegisterView,
    RejectEventView,
    SignInView,
    SignOutView,
    TicketDetailView,
)

__all__ = [
    "ApproveEventView",
    "BookingView",
    "CrewEventView",
    "CrewRegisterView",
    "CrewSignInView",
    "EventDetailView",
    "EventListView",
    "MeView",
    "MyEventsView",
    "MyTicketsView",
    "PasswordResetView",
    "PendingEventListView",
    "QuoteView",
    "RegisterView",
    "RejectEventView",
    "SignInView",
    "SignOutView",
    "TicketDetailView",
]
