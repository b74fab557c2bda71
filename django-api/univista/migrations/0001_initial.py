import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CrewUsername",
            fields=[
                ("username", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("is_registered", models.BooleanField(default=False)),
                ("uid", models.CharField(blank=True, max_length=64, null=True)),
            ],
        ),
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                ("uid", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("name", models.CharField(blank=True, max_length=255)),
                ("email", models.EmailField(max_length=254)),
                (
                    "role",
                    models.CharField(
                        choices=[("user", "User"), ("crew", "Crew")], default="user", max_length=8
                    ),
                ),
                ("faculty", models.CharField(blank=True, max_length=100)),
                ("username", models.CharField(blank=True, max_length=64, null=True, unique=True)),
                ("created_at", models.DateTimeField()),
            ],
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("faculty", models.CharField(max_length=100)),
                ("description", models.TextField()),
                ("date", models.CharField(max_length=10)),
                ("time", models.CharField(blank=True, max_length=8)),
                ("location", models.CharField(max_length=255)),
                ("poster_image_url", models.URLField(blank=True, max_length=500)),
                ("category", models.CharField(blank=True, max_length=100)),
                ("contact", models.CharField(blank=True, max_length=255)),
                ("audience_type", models.CharField(blank=True, max_length=100)),
                ("has_tickets", models.BooleanField(default=False)),
                (
                    "ticket_price",
                    models.DecimalField(decimal_places=2, default=0, max_digits=10),
                ),
                ("available_tickets", models.PositiveIntegerField(default=0)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("posted_by_uid", models.CharField(max_length=64)),
                ("posted_by_name", models.CharField(max_length=255)),
                ("approved_by", models.CharField(blank=True, max_length=64, null=True)),
                ("rejection_reason", models.TextField(blank=True, null=True)),
                ("submitted_at", models.DateTimeField(auto_now_add=True)),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "ordering": ["date"],
                "indexes": [
                    models.Index(
                        fields=["status", "faculty", "submitted_at"],
                        name="univista_ev_status_5c2a1e_idx",
                    ),
                    models.Index(fields=["status", "date"], name="univista_ev_status_8d0f3b_idx"),
                    models.Index(fields=["posted_by_uid"], name="univista_ev_posted__b71c4e_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(available_tickets__gte=0),
                        name="event_available_tickets_non_negative",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Ticket",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("ticket_id", models.CharField(max_length=32, unique=True)),
                ("user_id", models.CharField(max_length=64)),
                ("user_email", models.EmailField(max_length=254)),
                ("user_name", models.CharField(max_length=255)),
                ("user_phone", models.CharField(max_length=32)),
                ("ticket_count", models.PositiveIntegerField()),
                ("amount_paid", models.DecimalField(decimal_places=2, max_digits=10)),
                ("payment_status", models.CharField(default="paid", max_length=16)),
                ("booked_at", models.DateTimeField()),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="tickets",
                        to="univista.event",
                    ),
                ),
            ],
            options={
                "ordering": ["-booked_at"],
                "indexes": [
                    models.Index(
                        fields=["user_id", "-booked_at"], name="univista_ti_user_id_3e9a7d_idx"
                    )
                ],
            },
        ),
    ]
