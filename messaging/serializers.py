# messaging/serializers.py
from rest_framework import serializers

from listings.serializers import ListingSerializer
from users.serializers import UserSerializer
from .models import Message


class MessageSerializer(serializers.ModelSerializer):
    senderId = serializers.UUIDField(source="sender_id", read_only=True)
    receiverId = serializers.UUIDField(source="receiver_id", read_only=True)
    listingId = serializers.UUIDField(source="listing_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    sender = UserSerializer(read_only=True)
    receiver = UserSerializer(read_only=True)
    listing = ListingSerializer(read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "content",
            "senderId",
            "receiverId",
            "listingId",
            "createdAt",
            "sender",
            "receiver",
            "listing",
        ]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=5000, trim_whitespace=True)
    receiverId = serializers.UUIDField(required=False, allow_null=True)


class ThreadQuerySerializer(serializers.Serializer):
    otherParticipantId = serializers.UUIDField(required=False, allow_null=True)
