import shutil
from pathlib import Path

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
import logging

from listings.models import Favorite, Listing
from messaging.models import Message

logger = logging.getLogger(__name__)
User = get_user_model()


class Command(BaseCommand):
    help = "Delete all messages, favorites, listings, users and uploaded listing images"

    def add_arguments(self, parser):
        parser.add_argument(
            "--yes",
            action="store_true",
            help="Do not prompt for confirmation",
        )

    def handle(self, *args, **options):
        if not options["yes"]:
            answer = input("This removes ALL marketplace data. Type 'yes' to continue: ")
            if answer.strip().lower() != "yes":
                raise CommandError("Aborted")

        # Messages first, they protect the listings they reference
        with transaction.atomic():
            messages, _ = Message.objects.all().delete()
            favorites, _ = Favorite.objects.all().delete()
            listings, _ = Listing.objects.all().delete()
            users, _ = User.objects.all().delete()

        self.stdout.write(f"Deleted {messages} messages")
        self.stdout.write(f"Deleted {favorites} favorites")
        self.stdout.write(f"Deleted {listings} listings")
        self.stdout.write(f"Deleted {users} users")

        uploads = Path(settings.MEDIA_ROOT) / "cars"
        if uploads.exists():
            shutil.rmtree(uploads)
            self.stdout.write(f"Removed {uploads}")

        logger.warning("Marketplace database cleared")
        self.stdout.write(self.style.SUCCESS("Database cleared"))
