# listings/models.py
import uuid
import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from model_utils import FieldTracker

logger = logging.getLogger(__name__)


class ListingQuerySet(models.QuerySet):
    def active(self):
        """Listings visible in browse/search results."""
        return self.filter(deleted_at__isnull=True)

    def deleted(self):
        return self.filter(deleted_at__isnull=False)


class Listing(models.Model):
    """A vehicle-for-sale post."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField()
    price = models.DecimalField(max_digits=12, decimal_places=2)
    brand = models.CharField(max_length=64, help_text="Car catalog brand id")
    model = models.CharField(max_length=64, help_text="Car catalog model id")
    year = models.PositiveIntegerField()
    mileage = models.PositiveIntegerField()
    fuel_type = models.CharField(max_length=30)
    transmission = models.CharField(max_length=30)
    color = models.CharField(max_length=30)
    location = models.CharField(max_length=200)
    engine_volume = models.DecimalField(
        max_digits=4, decimal_places=1, null=True, blank=True
    )
    power = models.PositiveIntegerField(null=True, blank=True)
    images = models.JSONField(default=list, blank=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="listings",
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    tracker = FieldTracker(["deleted_at"])

    objects = ListingQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["deleted_at", "-created_at"], name="listing_active_idx"),
            models.Index(fields=["user", "-created_at"], name="listing_owner_idx"),
            models.Index(fields=["brand", "model"], name="listing_brand_model_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.year})"

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def save(self, *args, **kwargs):
        # Deletion is monotonic: a listing is never un-deleted
        if (
            not self._state.adding
            and self.tracker.previous("deleted_at") is not None
            and self.deleted_at is None
        ):
            raise ValidationError("A deleted listing cannot be restored.")
        super().save(*args, **kwargs)


class Favorite(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="favorites",
    )
    listing = models.ForeignKey(
        Listing, on_delete=models.CASCADE, related_name="favorites"
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "listing"], name="unique_favorite_per_user_listing"
            ),
        ]

    def __str__(self):
        return f"{self.user} - {self.listing_id}"
