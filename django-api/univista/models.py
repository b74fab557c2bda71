"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Event(models.Model):
    """Persistence model for events."""

    class Status(models.TextChoices):
        PENDING = "pending"
        APPROVED = "approved"
        REJECTED = "rejected"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    faculty = models.CharField(max_length=100)
    description = models.TextField()
    date = models.CharField(max_length=10)
    time = models.CharField(max_length=8, blank=True)
    location = models.CharField(max_length=255)
    poster_image_url = models.URLField(max_length=500, blank=True)
    category = models.CharField(max_length=100, blank=True)
    contact = models.CharField(max_length=255, blank=True)
    audience_type = models.CharField(max_length=100, blank=True)
    has_tickets = models.BooleanField(default=False)
    ticket_price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    available_tickets = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    posted_by_uid = models.CharField(max_length=64)
    posted_by_name = models.CharField(max_length=255)
    approved_by = models.CharField(max_length=64, blank=True, null=True)
    rejection_reason = models.TextField(blank=True, null=True)
    submitted_at = models.DateTimeField(auto_now_add=True)
    approved_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        ordering = ["date"]
        indexes = [
            models.Index(
                fields=["status", "faculty", "submitted_at"],
                name="univista_ev_status_5c2a1e_idx",
            ),
            models.Index(fields=["status", "date"], name="univista_ev_status_8d0f3b_idx"),
            models.Index(fields=["posted_by_uid"], name="univista_ev_posted__b71c4e_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(available_tickets__gte=0),
                name="event_available_tickets_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return self.name


class Ticket(models.Model):
    """Persistence model for booked tickets."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    ticket_id = models.CharField(max_length=32, unique=True)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="tickets")
    user_id = models.CharField(max_length=64)
    user_email = models.EmailField()
    user_name = models.CharField(max_length=255)
    user_phone = models.CharField(max_length=32)
    ticket_count = models.PositiveIntegerField()
    amount_paid = models.DecimalField(max_digits=10, decimal_places=2)
    payment_status = models.CharField(max_length=16, default="paid")
    booked_at = models.DateTimeField()

    class Meta:
        ordering = ["-booked_at"]
        indexes = [
            models.Index(fields=["user_id", "-booked_at"], name="univista_ti_user_id_3e9a7d_idx"),
        ]

    def __str__(self) -> str:
        return self.ticket_id


class UserProfile(models.Model):
    """Persistence model for user profiles, keyed by identity uid."""

    class Role(models.TextChoices):
        USER = "user"
        CREW = "crew"

    uid = models.CharField(primary_key=True, max_length=64)
    name = models.CharField(max_length=255, blank=True)
    email = models.EmailField()
    role = models.CharField(max_length=8, choices=Role.choices, default=Role.USER)
    faculty = models.CharField(max_length=100, blank=True)
    username = models.CharField(max_length=64, blank=True, null=True, unique=True)
    created_at = models.DateTimeField()

    def __str__(self) -> str:
        return self.username or self.email


class CrewUsername(models.Model):
    """Pre-provisioned crew username allowlist entry."""

    username = models.CharField(primary_key=True, max_length=64)
    is_registered = models.BooleanField(default=False)
    uid = models.CharField(max_length=64, blank=True, null=True)

    def __str__(self) -> str:
        return self.username
