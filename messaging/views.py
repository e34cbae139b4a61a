# messaging/views.py
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema

from users.principal import Principal
from .serializers import (
    MessageCreateSerializer,
    MessageSerializer,
    ThreadQuerySerializer,
)
from .services import conversation_resolver, messaging_service
from .throttling import MessageRateThrottle
import logging

logger = logging.getLogger(__name__)


class ConversationListView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        description="Latest message of each conversation the user takes part in. "
        "A conversation is one listing with one counterparty.",
        summary="List Conversations",
        tags=["Messages"],
        responses=MessageSerializer(many=True),
    )
    def get(self, request):
        conversations = conversation_resolver.list_conversations(
            Principal.from_user(request.user)
        )
        return Response(MessageSerializer(conversations, many=True).data)


class ListingMessagesView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get_throttles(self):
        if self.request.method == "POST":
            return [MessageRateThrottle()]
        return super().get_throttles()

    @extend_schema(
        description="Messages exchanged with otherParticipantId about a listing, oldest first. "
        "Works for deleted listings; listingStatus tells the client whether replies are possible.",
        summary="Get Thread",
        tags=["Messages"],
        parameters=[
            OpenApiParameter(
                name="otherParticipantId",
                type=OpenApiTypes.UUID,
                location=OpenApiParameter.QUERY,
                required=False,
            )
        ],
    )
    def get(self, request, listing_id):
        query = ThreadQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        thread = conversation_resolver.get_thread(
            listing_id,
            Principal.from_user(request.user),
            query.validated_data.get("otherParticipantId"),
        )
        return Response(
            {
                "data": MessageSerializer(thread.messages, many=True).data,
                "listingStatus": thread.listing_status,
            }
        )

    @extend_schema(
        description="Send a message about a listing. The listing owner must name the receiverId "
        "they are replying to; anyone else always writes to the owner.",
        summary="Send Message",
        tags=["Messages"],
        request=MessageCreateSerializer,
        responses={201: MessageSerializer},
    )
    def post(self, request, listing_id):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        message = messaging_service.send(
            listing_id,
            Principal.from_user(request.user),
            serializer.validated_data["content"],
            receiver_id=serializer.validated_data.get("receiverId"),
        )
        return Response(
            {"data": MessageSerializer(message).data}, status=status.HTTP_201_CREATED
        )
