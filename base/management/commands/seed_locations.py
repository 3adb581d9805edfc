from django.core.management.base import BaseCommand
from django.db import DatabaseError, connection, transaction

from base.countries import COUNTRY_NAMES
from base.models import LocationModel

class Command(BaseCommand):
    help = "Loads the ISO 3166 country names into the location table."

    def add_arguments(self, parser):
        parser.add_argument(
            "codes",
            nargs="*",
            help="Only seed these two letter country codes (default: all).",
        )

    def handle(self, *args, **options):
        try:
            connection.ensure_connection()
        except DatabaseError as e:
            self.stdout.write(self.style.ERROR(f"Failed to connect to database: {e}"))
            return

        codes = [code.upper() for code in options["codes"]]
        unknown = [code for code in codes if code not in COUNTRY_NAMES]
        if unknown:
            self.stdout.write(self.style.ERROR(f"Unknown country codes: {', '.join(unknown)}"))
            return

        names = {code: COUNTRY_NAMES[code] for code in codes} if codes else COUNTRY_NAMES

        with transaction.atomic():
            created, updated = LocationModel.objects.seed(names)

        self.stdout.write(self.style.SUCCESS(f"Seeded locations: {created} created, {updated} updated."))
