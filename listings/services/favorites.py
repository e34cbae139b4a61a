# listings/services/favorites.py
import logging

from django.db import IntegrityError, transaction

from listings.exceptions import AdminRestricted, ListingDeleted, OwnListingFavorite
from listings.models import Favorite
from .lifecycle import listing_lifecycle

logger = logging.getLogger(__name__)


class FavoriteService:
    """Idempotent add/remove of (user, listing) favorites."""

    def add(self, listing_id, principal):
        """Returns ``(favorite, created)``."""
        if principal.is_admin:
            raise AdminRestricted("Administrators cannot add favorites")

        listing = listing_lifecycle.get_listing(listing_id)
        if listing.is_deleted:
            raise ListingDeleted("Cannot favorite a deleted listing")
        if listing.user_id == principal.id:
            raise OwnListingFavorite()

        try:
            with transaction.atomic():
                favorite, created = Favorite.objects.get_or_create(
                    user_id=principal.id, listing=listing
                )
        except IntegrityError:
            # Lost a race with a concurrent add of the same pair
            favorite, created = (
                Favorite.objects.get(user_id=principal.id, listing=listing),
                False,
            )

        if created:
            logger.info(f"User {principal.id} favorited listing {listing.id}")
        return favorite, created

    def remove(self, listing_id, principal) -> bool:
        deleted, _ = Favorite.objects.filter(
            user_id=principal.id, listing_id=listing_id
        ).delete()
        if deleted:
            logger.info(f"User {principal.id} unfavorited listing {listing_id}")
        return bool(deleted)

    def listings_for(self, principal):
        return [
            favorite.listing
            for favorite in Favorite.objects.filter(user_id=principal.id)
            .select_related("listing", "listing__user")
            .order_by("-created_at")
        ]


favorite_service = FavoriteService()
