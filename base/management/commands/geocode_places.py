import logging

from django.core.management.base import BaseCommand
from django.db.models import Q

from base import Constants
from base.models import PlaceModel
from base.services.geocoding_service import GeocodingService, get_geocoding_provider

logger = logging.getLogger(__name__)

class Command(BaseCommand):
    help = "Geocodes stored places that have an address but no location."

    def add_arguments(self, parser):
        parser.add_argument(
            "--all",
            action="store_true",
            help="Re-geocode every place with an address, not only those without a location.",
        )
        parser.add_argument(
            "--geocoder",
            help="Provider to use instead of settings.ADDRESSABLE['GEOCODER'].",
        )

    def handle(self, *args, **options):
        provider = get_geocoding_provider(options.get("geocoder"))

        places = (
            PlaceModel.objects
            .filter(coordinate_manually_set=False)
            .exclude(address_line1="")
            .exclude(country="")
        )
        if not options["all"]:
            places = places.filter(Q(coordinate_lat__isnull=True) | Q(coordinate_lng__isnull=True))

        updated = failed = 0
        for place in places.iterator():
            if GeocodingService.geocode_record(place, provider=provider):
                place.save(update_fields=list(Constants.COORDINATE_FIELDS))
                updated += 1
            else:
                failed += 1
                logger.info(f"Could not geocode place {place.pk}")

        self.stdout.write(self.style.SUCCESS(f"Geocoded {updated} places, {failed} could not be resolved."))
