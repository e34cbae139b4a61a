# listings/services/lifecycle.py
import logging
from typing import Dict, Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone

from listings.exceptions import ListingNotFound, NotListingOwner
from listings.models import Favorite, Listing

logger = logging.getLogger(__name__)


class ListingLifecycleManager:
    """
    Soft-delete / permanent-delete semantics for listings.

    Messaging and conversation code only consume ``is_deleted`` and
    ``get_owner``; deletion itself happens here. Deletion is monotonic,
    a listing is never restored once ``deleted_at`` is set.
    """

    def get_listing(self, listing_id, for_update=False) -> Listing:
        queryset = Listing.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=listing_id)
        except (Listing.DoesNotExist, ValueError, DjangoValidationError):
            raise ListingNotFound()

    def is_deleted(self, listing_id) -> bool:
        return self.get_listing(listing_id).is_deleted

    def get_owner(self, listing_id):
        return self.get_listing(listing_id).user_id

    def status(self, listing: Listing) -> Dict[str, Any]:
        return {
            "isDeleted": listing.is_deleted,
            "deletedAt": listing.deleted_at.isoformat() if listing.deleted_at else None,
        }

    def _check_can_delete(self, listing, principal):
        if principal.is_admin or listing.user_id == principal.id:
            return
        logger.warning(
            f"User {principal.id} tried to delete listing {listing.id} owned by {listing.user_id}"
        )
        raise NotListingOwner("Not authorized to delete this listing")

    @transaction.atomic
    def soft_delete(self, listing_id, principal) -> Listing:
        """Mark a listing deleted. Deleting an already deleted listing is a no-op."""
        listing = self.get_listing(listing_id, for_update=True)
        self._check_can_delete(listing, principal)

        if listing.is_deleted:
            return listing

        listing.deleted_at = timezone.now()
        listing.save(update_fields=["deleted_at", "updated_at"])
        logger.info(f"Listing {listing.id} soft-deleted by {principal.id}")
        return listing

    @transaction.atomic
    def permanent_delete(self, listing_id, principal) -> int:
        """
        Purge every favorite of the listing and mark it deleted.

        The row itself and its messages are kept so existing conversations
        remain readable. Returns the number of favorites removed.
        """
        listing = self.get_listing(listing_id, for_update=True)
        self._check_can_delete(listing, principal)

        purged, _ = Favorite.objects.filter(listing=listing).delete()
        if not listing.is_deleted:
            listing.deleted_at = timezone.now()
            listing.save(update_fields=["deleted_at", "updated_at"])

        logger.info(
            f"Listing {listing.id} permanently deleted by {principal.id}, {purged} favorites purged"
        )
        return purged


# Singleton instance for use throughout the application
listing_lifecycle = ListingLifecycleManager()
