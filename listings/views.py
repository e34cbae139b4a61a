# listings/views.py
from rest_framework import permissions, status, viewsets
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view

from users.permissions import IsMarketplaceUser
from users.principal import Principal
from .exceptions import ListingDeleted, NotListingOwner
from .filters import ListingFilter
from .models import Listing
from .serializers import (
    ListingCreateSerializer,
    ListingSerializer,
    ListingUpdateSerializer,
)
from .services import favorite_service, listing_lifecycle
import logging

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        description="Browse listings that are not deleted, newest first, with optional filters.",
        summary="List Listings",
        tags=["Listings"],
    ),
    retrieve=extend_schema(
        description="Get a single listing. Deleted listings stay addressable so conversations and favorites can show them.",
        summary="Retrieve Listing",
        tags=["Listings"],
    ),
    create=extend_schema(
        description="Create a listing with 1-5 photos (multipart field 'images').",
        summary="Create Listing",
        tags=["Listings"],
        request=ListingCreateSerializer,
    ),
    partial_update=extend_schema(
        description="Update whitelisted fields of your own listing.",
        summary="Update Listing",
        tags=["Listings"],
        request=ListingUpdateSerializer,
    ),
    destroy=extend_schema(
        description="Soft delete a listing (owner or admin). Existing conversations stay readable.",
        summary="Delete Listing",
        tags=["Listings"],
    ),
)
class ListingViewSet(viewsets.GenericViewSet):
    queryset = Listing.objects.select_related("user")
    serializer_class = ListingSerializer
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ListingFilter

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [permissions.AllowAny()]
        if self.action in ("create", "favorites", "favorite", "unfavorite"):
            return [permissions.IsAuthenticated(), IsMarketplaceUser()]
        return [permissions.IsAuthenticated()]

    def get_queryset(self):
        if self.action == "list":
            return self.queryset.active().order_by("-created_at")
        return self.queryset

    def list(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = ListingSerializer(queryset, many=True)
        return Response(serializer.data)

    def retrieve(self, request, pk=None):
        listing = listing_lifecycle.get_listing(pk)
        return Response(ListingSerializer(listing).data)

    def create(self, request):
        serializer = ListingCreateSerializer(
            data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)
        listing = serializer.save()
        return Response(ListingSerializer(listing).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        listing = listing_lifecycle.get_listing(pk)
        if listing.user_id != request.user.id:
            raise NotListingOwner("Not authorized")
        if listing.is_deleted:
            raise ListingDeleted("Cannot update a deleted listing")

        serializer = ListingUpdateSerializer(listing, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        listing = serializer.save()
        logger.info(f"Listing {listing.id} updated by {request.user.id}")
        return Response(ListingSerializer(listing).data)

    def destroy(self, request, pk=None):
        listing_lifecycle.soft_delete(pk, Principal.from_user(request.user))
        return Response({"message": "Listing deleted successfully"})

    @extend_schema(
        description="Remove every favorite of the listing and mark it deleted. Messages are kept.",
        summary="Permanently Delete Listing",
        tags=["Listings"],
    )
    def permanent_destroy(self, request, pk=None):
        purged = listing_lifecycle.permanent_delete(
            pk, Principal.from_user(request.user)
        )
        return Response(
            {"message": "Listing permanently deleted", "favoritesRemoved": purged}
        )

    @extend_schema(
        description="Listings owned by the authenticated user, including deleted ones.",
        summary="My Listings",
        tags=["Listings"],
    )
    def mine(self, request):
        queryset = self.queryset.filter(user=request.user).order_by("-created_at")
        return Response(ListingSerializer(queryset, many=True).data)

    @extend_schema(
        description="Listings the authenticated user has favorited, most recent first.",
        summary="My Favorites",
        tags=["Favorites"],
    )
    def favorites(self, request):
        listings = favorite_service.listings_for(Principal.from_user(request.user))
        return Response(ListingSerializer(listings, many=True).data)

    @extend_schema(
        description="Add a listing to favorites. Adding twice is a no-op.",
        summary="Add Favorite",
        tags=["Favorites"],
        request=None,
    )
    def favorite(self, request, pk=None):
        _, created = favorite_service.add(pk, Principal.from_user(request.user))
        return Response(
            {"message": "Added to favorites"},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    @extend_schema(
        description="Remove a listing from favorites. Removing a missing favorite is a no-op.",
        summary="Remove Favorite",
        tags=["Favorites"],
    )
    def unfavorite(self, request, pk=None):
        favorite_service.remove(pk, Principal.from_user(request.user))
        return Response({"message": "Removed from favorites"})
