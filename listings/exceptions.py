# listings/exceptions.py
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError


class ListingNotFound(NotFound):
    default_detail = "Listing not found"
    default_code = "listing_not_found"


class ListingDeleted(PermissionDenied):
    default_detail = "This listing has been deleted"
    default_code = "listing_deleted"


class NotListingOwner(PermissionDenied):
    default_detail = "Not authorized to modify this listing"
    default_code = "not_listing_owner"


class AdminRestricted(PermissionDenied):
    default_detail = "Administrators cannot perform this action"
    default_code = "admin_restricted"


class OwnListingFavorite(ValidationError):
    default_detail = "You cannot add your own listing to favorites"
    default_code = "own_listing_favorite"
