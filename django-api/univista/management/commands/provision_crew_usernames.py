"""Create crew username allowlist entries.

    python manage.py provision_crew_usernames fos_crew foe_crew ...
"""

from django.core.management.base import BaseCommand

from univista.models import CrewUsername


class Command(BaseCommand):
    help = "Provision one-time crew registration usernames."

    def add_arguments(self, parser):
        parser.add_argument("usernames", nargs="+")

    def handle(self, *args, **options):
        for username in options["usernames"]:
            _, created = CrewUsername.objects.get_or_create(username=username)
            if created:
                self.stdout.write(self.style.SUCCESS(f"Provisioned {username}"))
            else:
                self.stdout.write(f"{username} already exists, left unchanged")
