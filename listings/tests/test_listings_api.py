import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from listings.models import Listing

pytestmark = pytest.mark.django_db


def _image(name="car.jpg", content_type="image/jpeg", size=128):
    return SimpleUploadedFile(name, b"\xff" * size, content_type=content_type)


def _listing_form(**overrides):
    form = {
        "title": "Kia Rio 2020",
        "description": "Garage kept",
        "price": "950000",
        "brand": "KIA",
        "model": "KIA_RIO",
        "year": 2020,
        "mileage": 30000,
        "fuelType": "petrol",
        "transmission": "manual",
        "color": "red",
        "location": "Kazan",
    }
    form.update(overrides)
    return form


class TestCreateListing:
    def test_create_with_images(self, auth_client, seller):
        response = auth_client(seller).post(
            "/api/listings",
            _listing_form(images=[_image(), _image("side.png", "image/png")]),
            format="multipart",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["userId"] == str(seller.id)
        assert len(data["images"]) == 2
        assert all(url.startswith("/uploads/cars/") for url in data["images"])
        assert data["brandName"] == "Kia"
        assert data["deletedAt"] is None

    def test_create_requires_images(self, auth_client, seller):
        response = auth_client(seller).post(
            "/api/listings", _listing_form(), format="multipart"
        )

        assert response.status_code == 400
        assert "No images uploaded" in response.json()["error"]

    def test_create_rejects_too_many_images(self, auth_client, seller):
        response = auth_client(seller).post(
            "/api/listings",
            _listing_form(images=[_image(f"{i}.jpg") for i in range(6)]),
            format="multipart",
        )

        assert response.status_code == 400
        assert not Listing.objects.exists()

    def test_create_rejects_wrong_file_type(self, auth_client, seller):
        response = auth_client(seller).post(
            "/api/listings",
            _listing_form(images=[_image("doc.pdf", "application/pdf")]),
            format="multipart",
        )

        assert response.status_code == 400

    def test_create_rejects_oversized_image(self, auth_client, seller, settings):
        settings.MAX_IMAGE_UPLOAD_SIZE = 100

        response = auth_client(seller).post(
            "/api/listings",
            _listing_form(images=[_image(size=101)]),
            format="multipart",
        )

        assert response.status_code == 400

    def test_admin_cannot_create(self, auth_client, marketplace_admin):
        response = auth_client(marketplace_admin).post(
            "/api/listings", _listing_form(images=[_image()]), format="multipart"
        )

        assert response.status_code == 403

    def test_anonymous_cannot_create(self, api_client):
        response = api_client.post(
            "/api/listings", _listing_form(images=[_image()]), format="multipart"
        )

        assert response.status_code == 401


class TestBrowseListings:
    def test_list_excludes_deleted_and_is_newest_first(
        self, api_client, listing_factory, seller
    ):
        now = timezone.now()
        older = listing_factory(seller, title="Older", created_at=now - timedelta(hours=1))
        newer = listing_factory(seller, title="Newer", created_at=now)
        listing_factory(seller, title="Gone", deleted_at=now)

        response = api_client.get("/api/listings")

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [str(newer.id), str(older.id)]

    def test_filters(self, api_client, listing_factory, seller):
        cheap = listing_factory(seller, price=Decimal("300000"), year=2010, mileage=200000)
        listing_factory(seller, price=Decimal("3000000"), year=2022, mileage=1000)

        response = api_client.get(
            "/api/listings", {"maxPrice": 500000, "minMileage": 100000, "maxYear": 2015}
        )

        assert [item["id"] for item in response.json()] == [str(cheap.id)]

    def test_search_matches_title_and_description(
        self, api_client, listing_factory, seller
    ):
        match = listing_factory(seller, title="Rare convertible")
        listing_factory(seller, title="Sedan")

        response = api_client.get("/api/listings", {"search": "convertible"})

        assert [item["id"] for item in response.json()] == [str(match.id)]

    def test_brand_and_model_names_are_resolved(self, api_client, listing):
        item = api_client.get(f"/api/listings/{listing.id}").json()

        assert item["brandName"] == "Toyota"
        assert item["modelName"] == "Camry"
        assert item["price"] == 1500000.0

    def test_deleted_listing_is_still_addressable(
        self, api_client, listing_factory, seller
    ):
        deleted = listing_factory(seller, deleted_at=seller.created_at)

        response = api_client.get(f"/api/listings/{deleted.id}")

        assert response.status_code == 200
        assert response.json()["deletedAt"] is not None

    def test_unknown_listing(self, api_client):
        response = api_client.get(f"/api/listings/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"error": "Listing not found"}

    def test_user_listings_include_deleted(
        self, auth_client, listing_factory, seller, buyer
    ):
        own = listing_factory(seller)
        deleted = listing_factory(seller, deleted_at=seller.created_at)
        listing_factory(buyer)

        response = auth_client(seller).get("/api/listings/user")

        assert {item["id"] for item in response.json()} == {str(own.id), str(deleted.id)}


class TestUpdateListing:
    def test_owner_updates_whitelisted_fields(self, auth_client, listing, seller):
        response = auth_client(seller).patch(
            f"/api/listings/{listing.id}",
            {"price": "1400000", "fuelType": "hybrid"},
            format="json",
        )

        assert response.status_code == 200
        listing.refresh_from_db()
        assert listing.price == Decimal("1400000")
        assert listing.fuel_type == "hybrid"

    def test_unknown_field_is_rejected(self, auth_client, listing, seller):
        response = auth_client(seller).patch(
            f"/api/listings/{listing.id}", {"userId": str(uuid.uuid4())}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid updates"

    def test_non_owner_cannot_update(self, auth_client, listing, buyer):
        response = auth_client(buyer).patch(
            f"/api/listings/{listing.id}", {"price": "1"}, format="json"
        )

        assert response.status_code == 403

    def test_deleted_listing_cannot_be_updated(self, auth_client, listing, seller):
        auth_client(seller).delete(f"/api/listings/{listing.id}")

        response = auth_client(seller).patch(
            f"/api/listings/{listing.id}", {"price": "1"}, format="json"
        )

        assert response.status_code == 403


class TestDeleteListing:
    def test_owner_soft_deletes(self, auth_client, listing, seller):
        response = auth_client(seller).delete(f"/api/listings/{listing.id}")

        assert response.status_code == 200
        listing.refresh_from_db()
        assert listing.deleted_at is not None

    def test_admin_soft_deletes(self, auth_client, listing, marketplace_admin):
        response = auth_client(marketplace_admin).delete(f"/api/listings/{listing.id}")

        assert response.status_code == 200

    def test_stranger_cannot_delete(self, auth_client, listing, buyer):
        response = auth_client(buyer).delete(f"/api/listings/{listing.id}")

        assert response.status_code == 403
        listing.refresh_from_db()
        assert listing.deleted_at is None

    def test_permanent_delete_purges_favorites_and_keeps_messages(
        self, auth_client, listing, seller, buyer, message_factory
    ):
        auth_client(buyer).post(f"/api/listings/{listing.id}/favorite")
        message_factory(listing, buyer, seller)

        response = auth_client(seller).delete(f"/api/listings/{listing.id}/permanent")

        assert response.status_code == 200
        assert response.json()["favoritesRemoved"] == 1
        listing.refresh_from_db()
        assert listing.deleted_at is not None
        assert listing.messages.count() == 1


class TestListingRoutes:
    @pytest.mark.parametrize("path", ["/api/listings", "/api/listings/"])
    def test_collection_with_and_without_slash(self, api_client, path):
        assert api_client.get(path).status_code == 200

    @pytest.mark.parametrize("path", ["/api/listingsuser", "/api/listingsfavorites"])
    def test_unseparated_prefix_does_not_resolve(self, auth_client, buyer, path):
        assert auth_client(buyer).get(path).status_code == 404
