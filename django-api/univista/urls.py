from django.urls import path

from univista.handlers import (
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

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/approve", ApproveEventView.as_view(), name="event-approve"),
    path("events/<str:event_id>/reject", RejectEventView.as_view(), name="event-reject"),
    path("events/<str:event_id>/quote", QuoteView.as_view(), name="event-quote"),
    path("events/<str:event_id>/bookings", BookingView.as_view(), name="event-bookings"),
    path("tickets/<str:ticket_id>", TicketDetailView.as_view(), name="ticket-detail"),
    path("crew/events", CrewEventView.as_view(), name="crew-events"),
    path("crew/pending", PendingEventListView.as_view(), name="crew-pending"),
    path("me", MeView.as_view(), name="me"),
    path("me/tickets", MyTicketsView.as_view(), name="my-tickets"),
    path("me/events", MyEventsView.as_view(), name="my-events"),
    path("auth/register", RegisterView.as_view(), name="register"),
    path("auth/crew/register", CrewRegisterView.as_view(), name="crew-register"),
    path("auth/sign-in", SignInView.as_view(), name="sign-in"),
    path("auth/crew/sign-in", CrewSignInView.as_view(), name="crew-sign-in"),
    path("auth/sign-out", SignOutView.as_view(), name="sign-out"),
    path("auth/password-reset", PasswordResetView.as_view(), name="password-reset"),
]
