# messaging/services/__init__.py
from .conversation_resolver import (
    ConversationResolver,
    Thread,
    conversation_key,
    conversation_resolver,
    group_latest,
)
from .message_delivery import MessageDeliveryService, chat_room_name, message_delivery_service
from .messaging_service import MessagingService, messaging_service

__all__ = [
    "ConversationResolver",
    "Thread",
    "conversation_key",
    "conversation_resolver",
    "group_latest",
    "MessageDeliveryService",
    "chat_room_name",
    "message_delivery_service",
    "MessagingService",
    "messaging_service",
]
