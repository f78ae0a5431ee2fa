import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("slug", models.SlugField(max_length=255, unique=True)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("overview", models.TextField()),
                ("venue", models.CharField(max_length=255)),
                ("location", models.CharField(max_length=255)),
                ("date", models.CharField(max_length=32)),
                ("time", models.CharField(max_length=32)),
                ("starts_at", models.DateTimeField()),
                (
                    "mode",
                    models.CharField(
                        choices=[("offline", "Offline"), ("online", "Online"), ("hybrid", "Hybrid")],
                        max_length=16,
                    ),
                ),
                ("audience", models.CharField(max_length=255)),
                ("organizer", models.CharField(max_length=255)),
                ("image_url", models.URLField(max_length=500)),
                ("tags", models.JSONField(default=list)),
                ("agenda", models.JSONField(default=list)),
                ("capacity", models.PositiveIntegerField(blank=True, null=True)),
                ("booking_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField()),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["-created_at"], name="event_created_at_idx")],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("email", models.EmailField(max_length=254)),
                ("created_at", models.DateTimeField()),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to="eventbooking.event",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [models.Index(fields=["event", "created_at"], name="booking_event_created_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("event", "email"), name="uniq_booking_event_email"),
                ],
            },
        ),
    ]
