# messaging/exceptions.py
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError


class DeletedListingMessageError(PermissionDenied):
    default_detail = "Cannot message a deleted listing"
    default_code = "listing_deleted"


class AdminMessagingError(PermissionDenied):
    default_detail = "Administrators cannot send messages"
    default_code = "admin_messaging"


class ReceiverNotFound(NotFound):
    default_detail = "Receiver not found"
    default_code = "receiver_not_found"


class InvalidReceiverError(ValidationError):
    default_detail = "A valid receiverId is required"
    default_code = "invalid_receiver"


class WebSocketAuthenticationError(Exception):
    """Exception raised when WebSocket authentication fails."""
    pass


class MessageDeliveryError(Exception):
    """Exception raised when a message cannot be delivered."""
    pass
