from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

User = get_user_model()


class Command(BaseCommand):
    help = "Reset a user's password"

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--password", required=True)

    def handle(self, *args, **options):
        email = User.objects.normalize_email(options["email"])
        try:
            user = User.objects.get(email=email)
        except User.DoesNotExist:
            raise CommandError(f"User {email} not found")

        user.set_password(options["password"])
        user.save(update_fields=["password"])
        self.stdout.write(self.style.SUCCESS(f"Password updated for {email}"))
