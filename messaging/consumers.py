# messaging/consumers.py
import json
import logging
import asyncio
import uuid
from channels.generic.websocket import AsyncWebsocketConsumer
from channels.db import database_sync_to_async
from django.utils import timezone
from django.conf import settings

from listings.exceptions import ListingNotFound
from listings.services import listing_lifecycle
from messaging.services.message_delivery import chat_room_name

logger = logging.getLogger(__name__)

# Application close code for sockets without a valid access token
UNAUTHORIZED_CLOSE_CODE = 4401


class ChatConsumer(AsyncWebsocketConsumer):
    """
    Real-time channel for listing chats.

    A client opens one socket and joins the room of every listing whose chat
    it is viewing. Messages are never sent through the socket; they are
    created over REST and pushed here as ``new_message`` events.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.joined_rooms = set()

    async def connect(self):
        """Handle WebSocket connection"""
        self.user = self.scope.get("user")
        self.last_ping = timezone.now()
        self.heartbeat_interval = getattr(settings, "WEBSOCKET_HEARTBEAT_INTERVAL", 30)
        self.heartbeat_task = None

        if self.user is None or self.user.is_anonymous:
            logger.warning("Anonymous WebSocket connection rejected")
            await self.close(code=UNAUTHORIZED_CLOSE_CODE)
            return

        await self.accept()

        if self.heartbeat_interval:
            self.heartbeat_task = asyncio.create_task(self.send_heartbeat())

        logger.info(f"User {self.user.id} connected to chat socket")

    async def disconnect(self, close_code):
        """Handle WebSocket disconnection"""
        if getattr(self, "heartbeat_task", None):
            self.heartbeat_task.cancel()
            try:
                await self.heartbeat_task
            except asyncio.CancelledError:
                pass

        for room in list(self.joined_rooms):
            await self.channel_layer.group_discard(room, self.channel_name)
        self.joined_rooms.clear()

        user = getattr(self, "user", None)
        if user is not None and not user.is_anonymous:
            logger.info(f"User {user.id} disconnected from chat socket ({close_code})")

    async def receive(self, text_data=None, bytes_data=None):
        """Dispatch an incoming frame by its ``type``."""
        try:
            data = json.loads(text_data or "")
        except json.JSONDecodeError:
            logger.error("Invalid JSON received")
            await self.send_error("Invalid JSON")
            return

        if not isinstance(data, dict):
            await self.send_error("Invalid payload")
            return

        self.last_ping = timezone.now()
        message_type = data.get("type", "")

        if message_type == "ping":
            await self.send(text_data=json.dumps({"type": "pong"}))
        elif message_type in ("pong", "heartbeat"):
            return
        elif message_type == "join_chat":
            await self.handle_join_chat(data)
        elif message_type == "leave_chat":
            await self.handle_leave_chat(data)
        else:
            logger.warning(f"Unknown message type received: {message_type}")
            await self.send_error(f"Unknown message type: {message_type}")

    async def handle_join_chat(self, data):
        listing_id = data.get("listingId")
        if not listing_id:
            await self.send_error("listingId is required")
            return

        user_id = data.get("userId")
        if user_id and str(user_id) != str(self.user.id):
            # The room is keyed by listing only, the authenticated user wins
            logger.warning(
                f"join_chat userId {user_id} does not match socket user {self.user.id}"
            )

        listing = await self.find_listing(listing_id)
        if listing is None:
            await self.send_error("Listing not found")
            return

        # Rooms are keyed by the canonical id, the one broadcasts use
        listing_id = str(listing.id)
        room = chat_room_name(listing_id)
        await self.channel_layer.group_add(room, self.channel_name)
        self.joined_rooms.add(room)
        logger.debug(f"User {self.user.id} joined {room}")

        await self.send(
            text_data=json.dumps({"type": "joined", "listingId": listing_id})
        )

    async def handle_leave_chat(self, data):
        listing_id = data.get("listingId")
        if not listing_id:
            await self.send_error("listingId is required")
            return

        try:
            listing_id = str(uuid.UUID(str(listing_id)))
        except ValueError:
            await self.send_error("Listing not found")
            return

        room = chat_room_name(listing_id)
        if room in self.joined_rooms:
            await self.channel_layer.group_discard(room, self.channel_name)
            self.joined_rooms.discard(room)
            logger.debug(f"User {self.user.id} left {room}")

        await self.send(
            text_data=json.dumps({"type": "left", "listingId": listing_id})
        )

    async def send_error(self, error):
        await self.send(text_data=json.dumps({"type": "error", "error": error}))

    async def send_heartbeat(self):
        """Send periodic heartbeats while the socket is open"""
        try:
            while True:
                await asyncio.sleep(self.heartbeat_interval)

                idle = (timezone.now() - self.last_ping).total_seconds()
                if idle > self.heartbeat_interval * 5:
                    logger.info(
                        f"Connection idle for user {self.user.id} ({idle}s), sending heartbeat"
                    )

                try:
                    await self.send(text_data=json.dumps({"type": "heartbeat"}))
                except Exception as send_error:
                    logger.error(f"Failed to send heartbeat: {str(send_error)}")
                    break

        except asyncio.CancelledError:
            logger.debug("Heartbeat task cancelled normally")

    @database_sync_to_async
    def find_listing(self, listing_id):
        try:
            return listing_lifecycle.get_listing(listing_id)
        except ListingNotFound:
            return None

    # Event handlers for messages sent via channel layer

    async def chat_new_message(self, event):
        """Handle chat.new_message event"""
        await self.send(
            text_data=json.dumps(
                {"type": event.get("event", "new_message"), "message": event["message"]}
            )
        )
