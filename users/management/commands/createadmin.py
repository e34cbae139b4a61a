from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
import logging

logger = logging.getLogger(__name__)
User = get_user_model()


class Command(BaseCommand):
    help = "Create a marketplace administrator, or promote an existing user to ADMIN"

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--password", required=True)

    @transaction.atomic
    def handle(self, *args, **options):
        email = User.objects.normalize_email(options["email"])
        if not email:
            raise CommandError("--email must not be empty")

        user = User.objects.filter(email=email).first()
        if user is None:
            user = User.objects.create_admin(email=email, password=options["password"])
            self.stdout.write(self.style.SUCCESS(f"Admin {email} created"))
        else:
            user.role = User.Role.ADMIN
            user.is_staff = True
            user.set_password(options["password"])
            user.save()
            self.stdout.write(self.style.SUCCESS(f"User {email} promoted to admin"))

        logger.info(f"Admin account ready for {user.id}")
