import uuid
from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Hotel",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "name",
                    models.CharField(max_length=100, validators=[django.core.validators.MinLengthValidator(2)]),
                ),
                (
                    "city",
                    models.CharField(
                        db_index=True, max_length=50, validators=[django.core.validators.MinLengthValidator(2)]
                    ),
                ),
                (
                    "address",
                    models.CharField(max_length=200, validators=[django.core.validators.MinLengthValidator(5)]),
                ),
                (
                    "rating",
                    models.DecimalField(
                        decimal_places=1,
                        default=Decimal("0.0"),
                        max_digits=2,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("5")),
                        ],
                    ),
                ),
                ("description", models.TextField(blank=True, max_length=1000)),
                ("image", models.URLField(blank=True, max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Hotel",
                "verbose_name_plural": "Hotels",
                "ordering": ["-rating", "name"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("rating__gte", 0), ("rating__lte", 5)),
                        name="hotel_rating_range",
                    )
                ],
            },
        ),
    ]
