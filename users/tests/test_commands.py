import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError

from listings.models import Favorite, Listing
from messaging.models import Message

pytestmark = pytest.mark.django_db

User = get_user_model()


def test_createadmin_creates_admin():
    call_command("createadmin", email="boss@example.com", password="Adm1n-pass!")

    admin = User.objects.get(email="boss@example.com")
    assert admin.is_admin
    assert admin.is_staff
    assert admin.check_password("Adm1n-pass!")


def test_createadmin_promotes_existing_user(buyer):
    call_command("createadmin", email=buyer.email, password="N3w-pass!")

    buyer.refresh_from_db()
    assert buyer.role == User.Role.ADMIN


def test_setpassword(buyer):
    call_command("setpassword", email=buyer.email, password="An0ther-pass!")

    buyer.refresh_from_db()
    assert buyer.check_password("An0ther-pass!")


def test_setpassword_unknown_user(db):
    with pytest.raises(CommandError):
        call_command("setpassword", email="ghost@example.com", password="x")


def test_cleardatabase(listing, seller, buyer, message_factory):
    message_factory(listing, buyer, seller)
    Favorite.objects.create(user=buyer, listing=listing)

    call_command("cleardatabase", yes=True)

    assert not Message.objects.exists()
    assert not Favorite.objects.exists()
    assert not Listing.objects.exists()
    assert not User.objects.exists()
