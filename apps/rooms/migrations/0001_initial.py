import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hotels", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("Single", "Single"),
                            ("Double", "Double"),
                            ("Suite", "Suite"),
                            ("Deluxe", "Deluxe"),
                            ("Presidential", "Presidential"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Nightly rate.",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "total_rooms",
                    models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)]),
                ),
                (
                    "available_rooms",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Advertised count; live availability is computed from bookings.",
                    ),
                ),
                ("description", models.TextField(blank=True, max_length=500)),
                ("amenities", models.JSONField(blank=True, default=list)),
                ("images", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "hotel",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rooms",
                        to="hotels.hotel",
                    ),
                ),
            ],
            options={
                "verbose_name": "Room",
                "verbose_name_plural": "Rooms",
                "ordering": ["price"],
                "indexes": [models.Index(fields=["hotel", "type"], name="room_hotel_type_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("total_rooms__gte", 1)),
                        name="room_total_rooms_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("available_rooms__lte", models.F("total_rooms"))),
                        name="room_available_within_total",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("price__gte", 0)),
                        name="room_price_non_negative",
                    ),
                ],
            },
        ),
    ]
