"""
Tests for the seed_locations and geocode_places management commands.
"""
from io import StringIO

import pytest
from django.core.management import call_command

from base.countries import COUNTRY_NAMES
from base.models import LocationModel, PlaceModel
from base.services.geocoding_service import GeocodeResult
from base.values import Coordinate
from tests.conftest import FakeGeocodingProvider
from tests.factories import LocationFactory, PlaceFactory


pytestmark = pytest.mark.django_db


def run(*args, **kwargs):
    out = StringIO()
    call_command(*args, stdout=out, **kwargs)
    return out.getvalue()


class TestSeedLocations:

    def test_seeds_every_country(self):
        output = run("seed_locations")

        assert LocationModel.objects.count() == len(COUNTRY_NAMES)
        assert f"{len(COUNTRY_NAMES)} created" in output

    def test_seeds_selected_codes(self):
        run("seed_locations", "gb", "ie")

        assert set(LocationModel.objects.values_list("country_code", flat=True)) == {"GB", "IE"}

    def test_resets_renamed_country(self):
        LocationFactory(country_code="GB", country_name="Great Britain")

        output = run("seed_locations", "GB")

        assert LocationModel.objects.name_of("GB") == "United Kingdom"
        assert "0 created, 1 updated" in output

    def test_rejects_unknown_codes(self):
        output = run("seed_locations", "GB", "QQ")

        assert "QQ" in output
        assert not LocationModel.objects.exists()


class TestGeocodePlaces:

    @pytest.fixture
    def provider(self, monkeypatch):
        provider = FakeGeocodingProvider(result=GeocodeResult(lat=48.85, lng=2.35))
        monkeypatch.setattr(
            "base.management.commands.geocode_places.get_geocoding_provider",
            lambda name=None: provider,
        )
        return provider

    def test_geocodes_places_without_location(self, provider):
        place = PlaceFactory()

        output = run("geocode_places")

        assert PlaceModel.objects.get(pk=place.pk).coordinate == Coordinate(lat=48.85, lng=2.35)
        assert "Geocoded 1 places" in output

    def test_skips_located_places_unless_all(self, provider):
        place = PlaceFactory.build()
        place.coordinate = Coordinate(lat=1.0, lng=2.0)
        place.save()

        run("geocode_places")
        assert PlaceModel.objects.get(pk=place.pk).coordinate == Coordinate(lat=1.0, lng=2.0)

        run("geocode_places", "--all")
        assert PlaceModel.objects.get(pk=place.pk).coordinate == Coordinate(lat=48.85, lng=2.35)

    def test_never_touches_manual_locations(self, provider):
        place = PlaceFactory.build()
        place.coordinate = Coordinate(lat=1.0, lng=None, manually_set=True)
        place.save()

        run("geocode_places", "--all")

        assert provider.calls == []
        assert PlaceModel.objects.get(pk=place.pk).coordinate == Coordinate(lat=1.0, lng=None, manually_set=True)

    def test_skips_places_without_address(self, provider):
        PlaceFactory(address_line1="")

        run("geocode_places")

        assert provider.calls == []

    def test_reports_failures(self, monkeypatch):
        monkeypatch.setattr(
            "base.management.commands.geocode_places.get_geocoding_provider",
            lambda name=None: FakeGeocodingProvider(result=None),
        )
        PlaceFactory()

        output = run("geocode_places")

        assert "Geocoded 0 places, 1 could not be resolved" in output
