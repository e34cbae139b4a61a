import uuid

import pytest
from django.core.exceptions import ValidationError

from listings.exceptions import ListingNotFound, NotListingOwner
from listings.models import Favorite
from listings.services import listing_lifecycle
from users.principal import Principal

pytestmark = pytest.mark.django_db


def test_status_of_live_listing(listing):
    assert listing_lifecycle.is_deleted(listing.id) is False
    assert listing_lifecycle.get_owner(listing.id) == listing.user_id
    assert listing_lifecycle.status(listing) == {"isDeleted": False, "deletedAt": None}


def test_soft_delete_is_idempotent(listing, seller):
    first = listing_lifecycle.soft_delete(listing.id, Principal.from_user(seller))
    deleted_at = first.deleted_at

    second = listing_lifecycle.soft_delete(listing.id, Principal.from_user(seller))

    assert second.deleted_at == deleted_at
    assert listing_lifecycle.is_deleted(listing.id) is True


def test_only_owner_or_admin_may_delete(listing, buyer, marketplace_admin):
    with pytest.raises(NotListingOwner):
        listing_lifecycle.soft_delete(listing.id, Principal.from_user(buyer))

    listing_lifecycle.soft_delete(listing.id, Principal.from_user(marketplace_admin))
    assert listing_lifecycle.is_deleted(listing.id)


def test_deletion_is_monotonic(listing, seller):
    listing_lifecycle.soft_delete(listing.id, Principal.from_user(seller))
    listing.refresh_from_db()

    listing.deleted_at = None
    with pytest.raises(ValidationError):
        listing.save()


def test_permanent_delete_keeps_original_deletion_time(listing, seller, buyer):
    Favorite.objects.create(user=buyer, listing=listing)
    deleted = listing_lifecycle.soft_delete(listing.id, Principal.from_user(seller))

    purged = listing_lifecycle.permanent_delete(listing.id, Principal.from_user(seller))

    listing.refresh_from_db()
    assert purged == 1
    assert listing.deleted_at == deleted.deleted_at
    assert not Favorite.objects.filter(listing=listing).exists()


@pytest.mark.parametrize("listing_id", [uuid.uuid4(), "not-a-uuid"])
def test_unknown_listing(listing_id):
    with pytest.raises(ListingNotFound):
        listing_lifecycle.get_listing(listing_id)
