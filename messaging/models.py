# messaging/models.py
import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class Message(models.Model):
    """
    One immutable chat message about a listing.

    Conversations are not stored: they are derived from the
    (listing, sender, receiver) triple at query time.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    content = models.TextField()
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_messages",
    )
    # Messages outlive listing deletion, so the reference never cascades
    listing = models.ForeignKey(
        "listings.Listing",
        on_delete=models.PROTECT,
        related_name="messages",
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["sender", "-created_at"], name="message_sender_idx"),
            models.Index(fields=["receiver", "-created_at"], name="message_receiver_idx"),
            models.Index(fields=["listing", "created_at"], name="message_thread_idx"),
        ]

    def __str__(self):
        return f"{self.sender_id} -> {self.receiver_id} about {self.listing_id}: {self.content[:50]}"

    def other_participant_id(self, user_id):
        """The counterparty of ``user_id`` in this message."""
        return self.receiver_id if self.sender_id == user_id else self.sender_id
