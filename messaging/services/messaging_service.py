# messaging/services/messaging_service.py
import json
import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone
from rest_framework.renderers import JSONRenderer

from listings.services import listing_lifecycle
from messaging.exceptions import (
    AdminMessagingError,
    DeletedListingMessageError,
    InvalidReceiverError,
    ReceiverNotFound,
)
from messaging.models import Message
from messaging.serializers import MessageSerializer
from .message_delivery import MessageDeliveryService, message_delivery_service

logger = logging.getLogger(__name__)
User = get_user_model()


class MessagingService:
    """
    Validated creation of chat messages and their real-time fan-out.

    The message is committed before anything is pushed to the listing room;
    a failed push never undoes or fails the send.
    """

    def __init__(self, delivery: Optional[MessageDeliveryService] = None):
        self.delivery = delivery or message_delivery_service

    def _resolve_receiver(self, listing, principal, receiver_id):
        # A buyer always writes to the seller
        if listing.user_id != principal.id:
            if receiver_id is not None and str(receiver_id) != str(listing.user_id):
                logger.debug(
                    f"Ignoring receiverId {receiver_id} from non-owner {principal.id}, "
                    f"routing to owner {listing.user_id}"
                )
            return listing.user_id

        # The seller replies to a specific buyer
        if receiver_id is None:
            raise InvalidReceiverError("receiverId is required when replying as the listing owner")
        if str(receiver_id) == str(principal.id):
            raise InvalidReceiverError("You cannot message yourself")

        try:
            receiver = User.objects.only("id", "role").get(pk=receiver_id)
        except (User.DoesNotExist, ValueError, DjangoValidationError):
            raise ReceiverNotFound()
        if receiver.is_admin:
            raise AdminMessagingError("Administrators cannot receive messages")
        return receiver.id

    def send(self, listing_id, principal, content: str, receiver_id=None) -> Message:
        """
        Persist a message about ``listing_id`` from ``principal``.

        Raises ``ListingNotFound`` for a missing listing, then
        ``DeletedListingMessageError`` for a deleted one, then
        ``AdminMessagingError`` for admin senders.
        """
        with transaction.atomic():
            listing = listing_lifecycle.get_listing(listing_id, for_update=True)
            if listing.is_deleted:
                logger.info(
                    f"User {principal.id} tried to message deleted listing {listing.id}"
                )
                raise DeletedListingMessageError()
            if principal.is_admin:
                raise AdminMessagingError()

            resolved_receiver_id = self._resolve_receiver(listing, principal, receiver_id)

            message = Message.objects.create(
                content=content,
                sender_id=principal.id,
                receiver_id=resolved_receiver_id,
                listing=listing,
                created_at=timezone.now(),
            )
            message = (
                Message.objects.select_related(
                    "sender", "receiver", "listing", "listing__user"
                ).get(pk=message.pk)
            )
            logger.info(
                f"Message {message.id} sent by {principal.id} to {resolved_receiver_id} on listing {listing.id}"
            )

            transaction.on_commit(lambda: self.publish(message), robust=True)

        return message

    def publish(self, message: Message) -> bool:
        """Push a committed message to its listing room."""
        # Channel layers carry plain JSON types only (no Decimal or UUID)
        payload = json.loads(JSONRenderer().render(MessageSerializer(message).data))
        return self.delivery.broadcast(message.listing_id, payload)


messaging_service = MessagingService()
