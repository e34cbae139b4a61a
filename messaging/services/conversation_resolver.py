# messaging/services/conversation_resolver.py
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from django.db.models import Q

from listings.models import Listing
from listings.services import listing_lifecycle
from messaging.models import Message

logger = logging.getLogger(__name__)


def conversation_key(message, user_id) -> str:
    """
    Key of the conversation ``message`` belongs to, seen from ``user_id``.

    Two buyers writing to the same seller about the same listing produce
    two different keys.
    """
    return f"{message.listing_id}-{message.other_participant_id(user_id)}"


def group_latest(messages: Iterable[Message], user_id) -> List[Message]:
    """
    Keep the first message per conversation key.

    ``messages`` must be ordered most recent first, so the survivor of each
    key is that conversation's latest message. Output order follows input.
    """
    latest: Dict[str, Message] = {}
    for message in messages:
        key = conversation_key(message, user_id)
        if key not in latest:
            latest[key] = message
    return list(latest.values())


@dataclass
class Thread:
    """Ordered history between two users about one listing."""

    listing: Listing
    messages: List[Message] = field(default_factory=list)

    @property
    def listing_status(self) -> Dict[str, Any]:
        return listing_lifecycle.status(self.listing)


class ConversationResolver:
    """Read side of messaging: conversation lists and per-thread history."""

    def _with_details(self, queryset):
        return queryset.select_related(
            "sender", "receiver", "listing", "listing__user"
        )

    def list_conversations(self, principal) -> List[Message]:
        """
        One representative message (the latest) per (listing, counterparty),
        most recent conversation first.
        """
        messages = self._with_details(
            Message.objects.filter(
                Q(sender_id=principal.id) | Q(receiver_id=principal.id)
            )
        ).order_by("-created_at", "-id")

        conversations = group_latest(messages, principal.id)
        logger.debug(
            f"Resolved {len(conversations)} conversations for user {principal.id}"
        )
        return conversations

    def get_thread(self, listing_id, principal, other_participant_id: Optional[Any] = None) -> Thread:
        """
        Messages about ``listing_id`` exchanged between the principal and
        ``other_participant_id`` in either direction, oldest first.

        Soft-deleted listings are a normal state here; only a missing listing
        row raises ``ListingNotFound``. Without ``other_participant_id`` every
        message on the listing that involves the principal is returned.
        """
        listing = listing_lifecycle.get_listing(listing_id)

        if other_participant_id is not None:
            pair = Q(sender_id=principal.id, receiver_id=other_participant_id) | Q(
                sender_id=other_participant_id, receiver_id=principal.id
            )
        else:
            pair = Q(sender_id=principal.id) | Q(receiver_id=principal.id)

        messages = list(
            self._with_details(Message.objects.filter(pair, listing=listing)).order_by(
                "created_at", "id"
            )
        )
        return Thread(listing=listing, messages=messages)


conversation_resolver = ConversationResolver()
