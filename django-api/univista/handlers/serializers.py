"""Serializers for transforming domain models to API responses and parsing input."""

from rest_framework import serializers

from univista.domain import Capacity, EventDraft, Money


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    faculty = serializers.CharField()
    description = serializers.CharField()
    date = serializers.CharField()
    time = serializers.CharField()
    location = serializers.CharField()
    category = serializers.CharField()
    contact = serializers.CharField()
    audience_type = serializers.CharField()
    poster_image_url = serializers.CharField()
    has_tickets = serializers.BooleanField()
    ticket_price = serializers.DecimalField(
        source="ticket_price.amount", max_digits=10, decimal_places=2
    )
    available_tickets = serializers.IntegerField(source="available_tickets.value")
    status = serializers.CharField(source="status.value")
    posted_by_uid = serializers.CharField()
    posted_by_name = serializers.CharField()
    approved_by = serializers.CharField(allow_null=True)
    rejection_reason = serializers.CharField(allow_null=True)
    submitted_at = serializers.DateTimeField()
    approved_at = serializers.DateTimeField(allow_null=True)


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    ticket_id = serializers.CharField()
    event_id = serializers.UUIDField(source="event_id.value")
    user_id = serializers.CharField()
    user_email = serializers.EmailField()
    user_name = serializers.CharField()
    user_phone = serializers.CharField()
    ticket_count = serializers.IntegerField(source="ticket_count.value")
    amount_paid = serializers.DecimalField(
        source="amount_paid.amount", max_digits=10, decimal_places=2
    )
    payment_status = serializers.CharField(source="payment_status.value")
    qr_code_data = serializers.CharField()
    booked_at = serializers.DateTimeField()


class PrincipalSerializer(serializers.Serializer):
    uid = serializers.CharField()
    email = serializers.CharField()
    name = serializers.CharField()
    role = serializers.CharField(source="role.value")
    faculty = serializers.CharField()


class EventDraftSerializer(serializers.Serializer):
    """Input for event submission and crew posting."""

    name = serializers.CharField(max_length=255)
    faculty = serializers.CharField(max_length=100)
    description = serializers.CharField()
    date = serializers.DateField()
    time = serializers.CharField(max_length=8, required=False, allow_blank=True, default="")
    location = serializers.CharField(max_length=255)
    has_tickets = serializers.BooleanField(default=False)
    ticket_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, default=0
    )
    available_tickets = serializers.IntegerField(min_value=0, default=0)
    category = serializers.CharField(required=False, allow_blank=True, default="")
    contact = serializers.CharField(required=False, allow_blank=True, default="")
    audience_type = serializers.CharField(required=False, allow_blank=True, default="")
    poster = serializers.FileField(required=False)

    def to_draft(self) -> EventDraft:
        data = self.validated_data
        return EventDraft(
            name=data["name"],
            faculty=data["faculty"],
            description=data["description"],
            date=data["date"].isoformat(),
            time=data["time"],
            location=data["location"],
            has_tickets=data["has_tickets"],
            ticket_price=Money(amount=data["ticket_price"]),
            available_tickets=Capacity(value=data["available_tickets"]),
            category=data["category"],
            contact=data["contact"],
            audience_type=data["audience_type"],
        )


class ApproveSerializer(serializers.Serializer):
    available_tickets = serializers.IntegerField(required=False, allow_null=True)


class RejectSerializer(serializers.Serializer):
    reason = serializers.CharField(allow_blank=True, trim_whitespace=False, default="")


class BookingSerializer(serializers.Serializer):
    """Input for a ticket booking; the amount is always computed server-side."""

    count = serializers.IntegerField()
    email = serializers.EmailField()
    name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=32)


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    confirm_password = serializers.CharField(write_only=True)
    faculty = serializers.CharField(max_length=100)

    def validate(self, attrs):
        if attrs["password"] != attrs["confirm_password"]:
            raise serializers.ValidationError("Passwords do not match")
        return attrs


class CrewRegisterSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=64)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    faculty = serializers.CharField(max_length=100)


class SignInSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class CrewSignInSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=64)
    password = serializers.CharField(write_only=True)


class PasswordResetSerializer(serializers.Serializer):
    email = serializers.EmailField()
