# messaging/services/message_delivery.py
import logging
from typing import Dict, Any

from channels.layers import get_channel_layer
from asgiref.sync import async_to_sync

from messaging.exceptions import MessageDeliveryError

logger = logging.getLogger(__name__)

NEW_MESSAGE_EVENT = "new_message"


def chat_room_name(listing_id) -> str:
    """Channel-layer group every socket viewing a listing's chat joins."""
    return f"chat_{listing_id}"


class MessageDeliveryService:
    """
    Centralized service for pushing chat events to listing rooms.

    Delivery is best-effort: the persisted message is the source of truth and
    clients reconcile by re-fetching threads, so callers use ``broadcast`` which
    never raises.
    """

    def __init__(self, channel_layer=None):
        self._channel_layer = channel_layer

    @property
    def channel_layer(self):
        # Resolved per call so a reconfigured CHANNEL_LAYERS setting is picked up
        return self._channel_layer or get_channel_layer()

    def send_new_message(self, listing_id, message_data: Dict[str, Any]) -> None:
        """
        Emit ``new_message`` to room ``chat_<listing_id>``.

        Raises:
            MessageDeliveryError: If the channel layer is missing or the send fails
        """
        if not self.channel_layer:
            raise MessageDeliveryError("No channel layer available for WebSocket delivery")

        group_name = chat_room_name(listing_id)
        try:
            async_to_sync(self.channel_layer.group_send)(
                group_name,
                {
                    "type": "chat.new_message",
                    "event": NEW_MESSAGE_EVENT,
                    "message": message_data,
                },
            )
        except Exception as e:
            raise MessageDeliveryError(
                f"Error sending WebSocket message to {group_name}: {str(e)}"
            ) from e

        logger.debug(f"Sent {NEW_MESSAGE_EVENT} to {group_name}")

    def broadcast(self, listing_id, message_data: Dict[str, Any]) -> bool:
        """Fire-and-forget variant of ``send_new_message``; failures are logged."""
        try:
            self.send_new_message(listing_id, message_data)
            return True
        except MessageDeliveryError as e:
            logger.error(f"Failed to deliver WebSocket message: {str(e)}", exc_info=True)
            return False


# Singleton instance for use throughout the application
message_delivery_service = MessageDeliveryService()
