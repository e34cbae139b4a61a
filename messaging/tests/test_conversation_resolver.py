import uuid
from datetime import timedelta

import pytest
from django.utils import timezone

from listings.exceptions import ListingNotFound
from listings.services import listing_lifecycle
from messaging.models import Message
from messaging.services import conversation_key, conversation_resolver, group_latest
from users.principal import Principal


def _message(listing_id, sender_id, receiver_id):
    return Message(listing_id=listing_id, sender_id=sender_id, receiver_id=receiver_id)


class TestGroupLatest:
    def test_key_uses_counterparty_from_either_side(self):
        listing_id, a, b = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()

        sent = _message(listing_id, a, b)
        received = _message(listing_id, b, a)

        assert conversation_key(sent, a) == f"{listing_id}-{b}"
        assert conversation_key(received, a) == f"{listing_id}-{b}"

    def test_same_listing_different_counterparties_are_separate(self):
        listing_id, a, b, c = (uuid.uuid4() for _ in range(4))
        messages = [
            _message(listing_id, b, a),
            _message(listing_id, c, a),
            _message(listing_id, a, b),
        ]

        latest = group_latest(messages, a)

        assert latest == messages[:2]

    def test_first_message_per_key_wins(self):
        l1, l2, a, b = (uuid.uuid4() for _ in range(4))
        newest = _message(l1, a, b)
        older = _message(l1, b, a)
        other_listing = _message(l2, b, a)

        latest = group_latest([newest, other_listing, older], a)

        assert latest == [newest, other_listing]
        keys = [conversation_key(m, a) for m in latest]
        assert len(keys) == len(set(keys))


@pytest.mark.django_db
class TestConversationResolver:
    def test_owner_sees_one_conversation_per_buyer(
        self, listing, seller, buyer, other_buyer, message_factory
    ):
        now = timezone.now()
        message_factory(listing, buyer, seller, "Is it available?", created_at=now - timedelta(minutes=5))
        message_factory(listing, seller, buyer, "Yes", created_at=now - timedelta(minutes=4))
        latest_c = message_factory(listing, other_buyer, seller, "Price?", created_at=now - timedelta(minutes=3))

        conversations = conversation_resolver.list_conversations(Principal.from_user(seller))

        assert [m.id for m in conversations][0] == latest_c.id
        assert {m.other_participant_id(seller.id) for m in conversations} == {
            buyer.id,
            other_buyer.id,
        }
        assert len(conversations) == 2

    def test_representative_is_latest_message(
        self, listing, seller, buyer, message_factory
    ):
        now = timezone.now()
        message_factory(listing, buyer, seller, "first", created_at=now - timedelta(minutes=2))
        latest = message_factory(listing, seller, buyer, "second", created_at=now - timedelta(minutes=1))

        conversations = conversation_resolver.list_conversations(Principal.from_user(buyer))

        assert [m.id for m in conversations] == [latest.id]

    def test_conversations_across_listings_newest_first(
        self, listing_factory, seller, buyer, message_factory
    ):
        now = timezone.now()
        first = listing_factory(seller, title="First")
        second = listing_factory(seller, title="Second")
        message_factory(first, buyer, seller, created_at=now - timedelta(minutes=2))
        newer = message_factory(second, buyer, seller, created_at=now - timedelta(minutes=1))

        conversations = conversation_resolver.list_conversations(Principal.from_user(buyer))

        assert conversations[0].id == newer.id
        assert len(conversations) == 2

    def test_user_without_messages_has_no_conversations(self, buyer):
        assert conversation_resolver.list_conversations(Principal.from_user(buyer)) == []

    def test_thread_is_exclusive_to_the_pair_and_ascending(
        self, listing, seller, buyer, other_buyer, message_factory
    ):
        now = timezone.now()
        m1 = message_factory(listing, buyer, seller, "hi", created_at=now - timedelta(minutes=3))
        message_factory(listing, other_buyer, seller, "other", created_at=now - timedelta(minutes=2))
        m2 = message_factory(listing, seller, buyer, "hello", created_at=now - timedelta(minutes=1))

        thread = conversation_resolver.get_thread(
            listing.id, Principal.from_user(seller), buyer.id
        )

        assert [m.id for m in thread.messages] == [m1.id, m2.id]
        assert thread.listing_status == {"isDeleted": False, "deletedAt": None}

    def test_thread_without_counterparty_returns_all_user_messages(
        self, listing, seller, buyer, other_buyer, message_factory
    ):
        now = timezone.now()
        message_factory(listing, buyer, seller, created_at=now - timedelta(minutes=2))
        message_factory(listing, other_buyer, seller, created_at=now - timedelta(minutes=1))

        seller_thread = conversation_resolver.get_thread(listing.id, Principal.from_user(seller))
        buyer_thread = conversation_resolver.get_thread(listing.id, Principal.from_user(buyer))

        assert len(seller_thread.messages) == 2
        assert len(buyer_thread.messages) == 1

    def test_thread_for_missing_listing_raises(self, buyer):
        with pytest.raises(ListingNotFound):
            conversation_resolver.get_thread(uuid.uuid4(), Principal.from_user(buyer))

    def test_soft_delete_keeps_history(self, listing, seller, buyer, message_factory):
        message = message_factory(listing, buyer, seller)
        principal = Principal.from_user(buyer)

        before = conversation_resolver.get_thread(listing.id, principal, seller.id)
        listing_lifecycle.soft_delete(listing.id, Principal.from_user(seller))
        after = conversation_resolver.get_thread(listing.id, principal, seller.id)

        assert [m.id for m in before.messages] == [m.id for m in after.messages] == [message.id]
        assert after.listing_status["isDeleted"] is True
        assert after.listing_status["deletedAt"] is not None

        conversations = conversation_resolver.list_conversations(principal)
        assert conversations[0].listing.deleted_at is not None


@pytest.mark.django_db
class TestTimestampTies:
    def test_thread_breaks_ties_by_id(self, listing, seller, buyer, message_factory):
        at = timezone.now()
        first = message_factory(listing, buyer, seller, "a", created_at=at)
        second = message_factory(listing, seller, buyer, "b", created_at=at)

        thread = conversation_resolver.get_thread(
            listing.id, Principal.from_user(buyer), seller.id
        )

        assert [m.id for m in thread.messages] == sorted([first.id, second.id])

    def test_latest_pick_breaks_ties_by_id(self, listing, seller, buyer, message_factory):
        at = timezone.now()
        first = message_factory(listing, buyer, seller, "a", created_at=at)
        second = message_factory(listing, seller, buyer, "b", created_at=at)

        for _ in range(3):
            conversations = conversation_resolver.list_conversations(
                Principal.from_user(buyer)
            )
            assert [m.id for m in conversations] == [max(first.id, second.id)]
