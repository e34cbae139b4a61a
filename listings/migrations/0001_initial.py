import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Listing",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField()),
                ("price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("brand", models.CharField(help_text="Car catalog brand id", max_length=64)),
                ("model", models.CharField(help_text="Car catalog model id", max_length=64)),
                ("year", models.PositiveIntegerField()),
                ("mileage", models.PositiveIntegerField()),
                ("fuel_type", models.CharField(max_length=30)),
                ("transmission", models.CharField(max_length=30)),
                ("color", models.CharField(max_length=30)),
                ("location", models.CharField(max_length=200)),
                ("engine_volume", models.DecimalField(blank=True, decimal_places=1, max_digits=4, null=True)),
                ("power", models.PositiveIntegerField(blank=True, null=True)),
                ("images", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="listings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Favorite",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "listing",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="favorites",
                        to="listings.listing",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="favorites",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.AddIndex(
            model_name="listing",
            index=models.Index(fields=["deleted_at", "-created_at"], name="listing_active_idx"),
        ),
        migrations.AddIndex(
            model_name="listing",
            index=models.Index(fields=["user", "-created_at"], name="listing_owner_idx"),
        ),
        migrations.AddIndex(
            model_name="listing",
            index=models.Index(fields=["brand", "model"], name="listing_brand_model_idx"),
        ),
        migrations.AddConstraint(
            model_name="favorite",
            constraint=models.UniqueConstraint(
                fields=("user", "listing"), name="unique_favorite_per_user_listing"
            ),
        ),
    ]
