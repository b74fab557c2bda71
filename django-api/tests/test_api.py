"""Integration tests for the HTTP handlers.

Run with: pytest tests/test_api.py -v
"""

import pytest
from rest_framework.test import APIClient

from univista import models

FACULTY = "Faculty of Science"

EVENT_PAYLOAD = {
    "name": "Science Day",
    "faculty": FACULTY,
    "description": "Open labs and talks",
    "date": "2026-11-20",
    "time": "09:00",
    "location": "Main Hall",
    "has_tickets": True,
    "ticket_price": "250.00",
    "available_tickets": 5,
}

BOOKING_PAYLOAD = {"count": 2, "email": "ama@uni.lk", "name": "Ama", "phone": "0771234567"}


def register_user(client: APIClient, email: str = "ama@uni.lk") -> dict:
    response = client.post(
        "/api/auth/register",
        {
            "name": "Ama",
            "email": email,
            "password": "a-long-password",
            "confirm_password": "a-long-password",
            "faculty": FACULTY,
        },
        format="json",
    )
    assert response.status_code == 201
    return response.json()


def crew_client() -> APIClient:
    models.CrewUsername.objects.create(username="science_crew")
    client = APIClient()
    response = client.post(
        "/api/auth/crew/register",
        {
            "username": "science_crew",
            "email": "crew@uni.lk",
            "password": "a-long-password",
            "faculty": FACULTY,
        },
        format="json",
    )
    assert response.status_code == 201
    response = client.post(
        "/api/auth/crew/sign-in",
        {"username": "science_crew", "password": "a-long-password"},
        format="json",
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def user_client(api_client: APIClient) -> APIClient:
    register_user(api_client)
    return api_client


@pytest.mark.django_db
class TestEventList:
    """Tests for GET/POST /api/events"""

    def test_list_events_empty_catalog(self, api_client: APIClient):
        response = api_client.get("/api/events")
        assert response.status_code == 200
        assert response.json() == []

    def test_submitted_event_is_pending_and_hidden(self, user_client: APIClient):
        response = user_client.post("/api/events", EVENT_PAYLOAD, format="json")

        assert response.status_code == 201
        assert response.json()["status"] == "pending"
        assert user_client.get("/api/events").json() == []

    def test_guest_cannot_submit(self, api_client: APIClient):
        response = api_client.post("/api/events", EVENT_PAYLOAD, format="json")
        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHENTICATED"

    def test_invalid_payload_is_400(self, user_client: APIClient):
        response = user_client.post("/api/events", {"name": "x"}, format="json")
        assert response.status_code == 400

    def test_faculty_and_ticket_filters(self):
        client = crew_client()
        client.post("/api/crew/events", EVENT_PAYLOAD, format="json")
        client.post(
            "/api/crew/events",
            {**EVENT_PAYLOAD, "name": "Free talk", "has_tickets": False, "ticket_price": "0"},
            format="json",
        )

        paid = client.get("/api/events", {"faculty": FACULTY, "ticket": "paid"}).json()
        other = client.get("/api/events", {"faculty": "Faculty of Arts"}).json()

        assert [event["name"] for event in paid] == ["Science Day"]
        assert other == []

    def test_crew_cannot_post_for_other_faculty(self):
        client = crew_client()
        response = client.post(
            "/api/crew/events", {**EVENT_PAYLOAD, "faculty": "Faculty of Arts"}, format="json"
        )

        assert response.status_code == 403
        assert models.Event.objects.count() == 0

    def test_free_event_without_allocation_is_bookable(self, api_client: APIClient):
        payload = {**EVENT_PAYLOAD, "has_tickets": False, "ticket_price": "0", "available_tickets": 0}
        event_id = crew_client().post("/api/crew/events", payload, format="json").json()["id"]

        response = api_client.post(f"/api/events/{event_id}/bookings", BOOKING_PAYLOAD, format="json")

        assert response.status_code == 201
        assert response.json()["amount_paid"] == "0.00"


@pytest.mark.django_db
class TestEventDetail:
    """Tests for GET /api/events/{id}"""

    def test_get_event_not_found(self, api_client: APIClient):
        response = api_client.get("/api/events/8f14e45f-ceea-467f-a8f5-2d3c2b7b0f7c")
        assert response.status_code == 404
        assert response.json() == {"code": "EVENT_NOT_FOUND", "message": "Event not found"}

    def test_get_event_invalid_id_format(self, api_client: APIClient):
        response = api_client.get("/api/events/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_EVENT_ID"


@pytest.mark.django_db
class TestReviewFlow:
    def test_crew_approves_pending_event(self, user_client: APIClient):
        event_id = user_client.post("/api/events", EVENT_PAYLOAD, format="json").json()["id"]
        crew = crew_client()

        queue = crew.get("/api/crew/pending").json()
        response = crew.post(f"/api/events/{event_id}/approve", {"available_tickets": 30}, format="json")

        assert [event["id"] for event in queue] == [event_id]
        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        assert response.json()["available_tickets"] == 30
        assert crew.get("/api/crew/pending").json() == []

    def test_user_cannot_approve(self, user_client: APIClient):
        event_id = user_client.post("/api/events", EVENT_PAYLOAD, format="json").json()["id"]
        response = user_client.post(f"/api/events/{event_id}/approve", {}, format="json")
        assert response.status_code == 403

    def test_blank_rejection_reason(self, user_client: APIClient):
        event_id = user_client.post("/api/events", EVENT_PAYLOAD, format="json").json()["id"]
        crew = crew_client()

        response = crew.post(f"/api/events/{event_id}/reject", {"reason": "  "}, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ARGUMENT"
        assert models.Event.objects.get(pk=event_id).status == "pending"

    def test_reject_after_approve_conflicts(self, user_client: APIClient):
        event_id = user_client.post("/api/events", EVENT_PAYLOAD, format="json").json()["id"]
        crew = crew_client()
        crew.post(f"/api/events/{event_id}/approve", {}, format="json")

        response = crew.post(f"/api/events/{event_id}/reject", {"reason": "Late"}, format="json")

        assert response.status_code == 409
        assert response.json()["code"] == "INVALID_TRANSITION"

    def test_rejection_shows_in_my_events(self, user_client: APIClient):
        event_id = user_client.post("/api/events", EVENT_PAYLOAD, format="json").json()["id"]
        crew_client().post(f"/api/events/{event_id}/reject", {"reason": "Duplicate"}, format="json")

        [mine] = user_client.get("/api/me/events").json()

        assert mine["status"] == "rejected"
        assert mine["rejection_reason"] == "Duplicate"


@pytest.mark.django_db
class TestBooking:
    @pytest.fixture
    def event_id(self) -> str:
        client = crew_client()
        return client.post("/api/crew/events", EVENT_PAYLOAD, format="json").json()["id"]

    def test_guest_booking(self, api_client: APIClient, event_id: str):
        response = api_client.post(f"/api/events/{event_id}/bookings", BOOKING_PAYLOAD, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["ticket_id"].startswith("TICKET-")
        assert body["qr_code_data"] == body["ticket_id"]
        assert body["amount_paid"] == "500.00"
        assert body["user_id"].startswith("GUEST_")

    def test_client_total_is_ignored(self, api_client: APIClient, event_id: str):
        response = api_client.post(
            f"/api/events/{event_id}/bookings",
            {**BOOKING_PAYLOAD, "total": "0.01"},
            format="json",
        )
        assert response.json()["amount_paid"] == "500.00"

    def test_over_booking_conflicts(self, api_client: APIClient, event_id: str):
        response = api_client.post(
            f"/api/events/{event_id}/bookings", {**BOOKING_PAYLOAD, "count": 6}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Only 5 ticket(s) remaining. Cannot book 6."
        assert api_client.get(f"/api/events/{event_id}").json()["available_tickets"] == 5

    def test_zero_count_is_invalid(self, api_client: APIClient, event_id: str):
        response = api_client.post(
            f"/api/events/{event_id}/bookings", {**BOOKING_PAYLOAD, "count": 0}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ARGUMENT"

    def test_quote(self, api_client: APIClient, event_id: str):
        response = api_client.get(f"/api/events/{event_id}/quote", {"count": 3})
        assert response.json() == {"count": 3, "total": "750.00"}

    def test_signed_in_tickets_listed(self, user_client: APIClient, event_id: str):
        ticket_id = user_client.post(
            f"/api/events/{event_id}/bookings", BOOKING_PAYLOAD, format="json"
        ).json()["ticket_id"]

        tickets = user_client.get("/api/me/tickets").json()
        detail = user_client.get(f"/api/tickets/{ticket_id}")

        assert [ticket["ticket_id"] for ticket in tickets] == [ticket_id]
        assert detail.status_code == 200

    def test_other_users_cannot_read_ticket(self, api_client: APIClient, event_id: str):
        ticket_id = api_client.post(
            f"/api/events/{event_id}/bookings", BOOKING_PAYLOAD, format="json"
        ).json()["ticket_id"]
        other = APIClient()
        register_user(other, "other@uni.lk")

        assert other.get(f"/api/tickets/{ticket_id}").status_code == 403


@pytest.mark.django_db
class TestAuth:
    def test_me_as_guest(self, api_client: APIClient):
        assert api_client.get("/api/me").json() == {"role": "guest"}

    def test_register_signs_in(self, user_client: APIClient):
        me = user_client.get("/api/me").json()
        assert me["role"] == "user"
        assert me["faculty"] == FACULTY

    def test_password_mismatch(self, api_client: APIClient):
        response = api_client.post(
            "/api/auth/register",
            {
                "name": "Ama",
                "email": "ama@uni.lk",
                "password": "a-long-password",
                "confirm_password": "different",
                "faculty": FACULTY,
            },
            format="json",
        )
        assert response.status_code == 400

    def test_sign_out_then_sign_in(self, user_client: APIClient):
        assert user_client.post("/api/auth/sign-out").status_code == 204
        assert user_client.get("/api/me").json() == {"role": "guest"}

        response = user_client.post(
            "/api/auth/sign-in",
            {"email": "ama@uni.lk", "password": "a-long-password"},
            format="json",
        )

        assert response.status_code == 200
        assert user_client.get("/api/me").json()["email"] == "ama@uni.lk"

    def test_bad_credentials(self, api_client: APIClient):
        response = api_client.post(
            "/api/auth/sign-in", {"email": "ama@uni.lk", "password": "nope"}, format="json"
        )
        assert response.status_code == 401

    def test_used_crew_username(self, api_client: APIClient):
        crew_client()
        response = api_client.post(
            "/api/auth/crew/register",
            {
                "username": "science_crew",
                "email": "second@uni.lk",
                "password": "a-long-password",
                "faculty": FACULTY,
            },
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_OR_USED_USERNAME"

    def test_password_reset_accepted(self, api_client: APIClient):
        response = api_client.post(
            "/api/auth/password-reset", {"email": "nobody@uni.lk"}, format="json"
        )
        assert response.status_code == 202
