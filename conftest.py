# conftest.py
import itertools
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from listings.models import Listing
from messaging.models import Message
from users.serializers import issue_token

User = get_user_model()

_sequence = itertools.count()


@pytest.fixture(autouse=True)
def _isolated_runtime(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path / "uploads")
    settings.CHANNEL_LAYERS = {
        "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}
    }
    settings.WEBSOCKET_HEARTBEAT_INTERVAL = 0
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user_factory(db):
    def create(**kwargs):
        n = next(_sequence)
        kwargs.setdefault("email", f"user{n}@example.com")
        kwargs.setdefault("first_name", f"First{n}")
        kwargs.setdefault("last_name", f"Last{n}")
        password = kwargs.pop("password", "Str0ng-pass!")
        return User.objects.create_user(password=password, **kwargs)

    return create


@pytest.fixture
def seller(user_factory):
    return user_factory(email="seller@example.com")


@pytest.fixture
def buyer(user_factory):
    return user_factory(email="buyer@example.com")


@pytest.fixture
def other_buyer(user_factory):
    return user_factory(email="other.buyer@example.com")


@pytest.fixture
def marketplace_admin(db):
    return User.objects.create_admin(email="admin@example.com", password="Adm1n-pass!")


@pytest.fixture
def listing_factory(db):
    def create(user, **kwargs):
        defaults = {
            "title": "Toyota Camry 2018",
            "description": "One owner, full service history",
            "price": Decimal("1500000.00"),
            "brand": "TOYOTA",
            "model": "TOYOTA_CAMRY",
            "year": 2018,
            "mileage": 85000,
            "fuel_type": "petrol",
            "transmission": "automatic",
            "color": "white",
            "location": "Moscow",
            "images": ["/uploads/cars/example.jpg"],
        }
        defaults.update(kwargs)
        return Listing.objects.create(user=user, **defaults)

    return create


@pytest.fixture
def listing(listing_factory, seller):
    return listing_factory(seller)


@pytest.fixture
def message_factory(db):
    def create(listing, sender, receiver, content="Hello", **kwargs):
        return Message.objects.create(
            listing=listing, sender=sender, receiver=receiver, content=content, **kwargs
        )

    return create


@pytest.fixture
def auth_client():
    """APIClient authenticated with a real access token for ``user``."""

    def create(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")
        return client

    return create
