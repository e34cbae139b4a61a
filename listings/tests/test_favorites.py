import pytest

from listings.models import Favorite
from listings.services import listing_lifecycle
from users.principal import Principal

pytestmark = pytest.mark.django_db


def _favorite_url(listing):
    return f"/api/listings/{listing.id}/favorite"


def test_add_is_idempotent(auth_client, listing, buyer):
    client = auth_client(buyer)

    first = client.post(_favorite_url(listing))
    second = client.post(_favorite_url(listing))

    assert first.status_code == 201
    assert second.status_code == 200
    assert Favorite.objects.filter(user=buyer, listing=listing).count() == 1


def test_favorites_list(auth_client, listing, buyer):
    client = auth_client(buyer)
    client.post(_favorite_url(listing))

    response = client.get("/api/listings/favorites")

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [str(listing.id)]


def test_remove(auth_client, listing, buyer):
    client = auth_client(buyer)
    client.post(_favorite_url(listing))

    response = client.delete(_favorite_url(listing))
    again = client.delete(_favorite_url(listing))

    assert response.status_code == 200
    assert again.status_code == 200
    assert not Favorite.objects.exists()


def test_own_listing_cannot_be_favorited(auth_client, listing, seller):
    response = auth_client(seller).post(_favorite_url(listing))

    assert response.status_code == 400


def test_deleted_listing_cannot_be_favorited(auth_client, listing, seller, buyer):
    listing_lifecycle.soft_delete(listing.id, Principal.from_user(seller))

    response = auth_client(buyer).post(_favorite_url(listing))

    assert response.status_code == 403


def test_admin_cannot_favorite(auth_client, listing, marketplace_admin):
    response = auth_client(marketplace_admin).post(_favorite_url(listing))

    assert response.status_code == 403
