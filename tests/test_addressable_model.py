"""
Tests for AddressableModel behaviour, exercised through PlaceModel.
"""
import pytest
from django.core.exceptions import ImproperlyConfigured, ValidationError

from base.config import AddressConfig
from base.models import PlaceModel
from base.values import Coordinate
from tests.factories import LocationFactory, PlaceFactory


pytestmark = pytest.mark.django_db


class TestFullAddress:

    def test_country_is_rendered_by_name(self):
        place = PlaceModel(name="Holmes", address_line1="221B Baker St", city="London", country="GB")

        assert place.get_full_address() == "221B Baker St, London, United Kingdom"

    def test_all_fields_in_order(self):
        place = PlaceModel(
            name="Office",
            address_line1="1 Main St",
            address_line2="Suite 4",
            city="Springfield",
            region="IL",
            postcode="62704",
            country="US",
        )

        assert place.get_full_address() == "1 Main St, Suite 4, Springfield, IL, 62704, United States"

    def test_location_table_overrides_bundled_name(self):
        LocationFactory(country_code="GB", country_name="Great Britain")
        place = PlaceModel(name="Holmes", address_line1="221B Baker St", country="GB")

        assert place.get_full_address() == "221B Baker St, Great Britain"
        assert place.get_country_name() == "Great Britain"

    def test_unknown_country_code_is_kept(self):
        place = PlaceModel(name="Nowhere", city="Atlantis", country="QQ")

        assert place.get_full_address() == "Atlantis, QQ"


class TestHasAddress:

    def test_needs_line1(self):
        assert not PlaceModel(name="x", country="GB").has_address()

    def test_needs_country(self):
        assert not PlaceModel(name="x", address_line1="221B Baker St").has_address()

    def test_line1_and_country(self):
        assert PlaceModel(name="x", address_line1="221B Baker St", country="GB").has_address()


class TestAddressChanged:

    def test_new_record_with_address_is_changed(self):
        assert PlaceModel(name="x", city="London").is_address_changed()

    def test_new_record_without_address_is_not_changed(self):
        assert not PlaceModel(name="x").is_address_changed()

    def test_loaded_record_is_unchanged(self):
        place = PlaceFactory()

        assert not PlaceModel.objects.get(pk=place.pk).is_address_changed()

    def test_saved_record_is_unchanged(self):
        place = PlaceFactory()

        assert not place.is_address_changed()

    @pytest.mark.parametrize("field, value", [
        ("address_line1", "10 Downing St"),
        ("address_line2", "Flat 2"),
        ("city", "Westminster"),
        ("region", "Greater London"),
        ("postcode", "12345"),
        ("country", "IE"),
    ])
    def test_each_address_field_counts(self, field, value):
        place = PlaceModel.objects.get(pk=PlaceFactory().pk)

        setattr(place, field, value)

        assert place.is_address_changed()

    def test_coordinate_change_is_not_an_address_change(self):
        place = PlaceModel.objects.get(pk=PlaceFactory().pk)

        place.coordinate = Coordinate(lat=1.0, lng=2.0, manually_set=True)

        assert not place.is_address_changed()

    def test_name_change_is_not_an_address_change(self):
        place = PlaceModel.objects.get(pk=PlaceFactory().pk)

        place.name = "Renamed"

        assert not place.is_address_changed()

    def test_reverting_a_change(self):
        place = PlaceModel.objects.get(pk=PlaceFactory(city="London").pk)

        place.city = "Leeds"
        place.city = "London"

        assert not place.is_address_changed()

    def test_deeper_level_compares_with_older_save(self):
        place = PlaceFactory(city="London")
        place.city = "Leeds"
        place.save()

        assert not place.is_address_changed()
        assert place.is_address_changed(level=2)

        place.city = "London"
        assert place.is_address_changed()
        assert not place.is_address_changed(level=2)

    def test_partial_save_without_address_keeps_change_pending(self):
        place = PlaceModel.objects.get(pk=PlaceFactory(city="London").pk)

        place.city = "Leeds"
        place.save(update_fields=["name"])

        assert PlaceModel.objects.get(pk=place.pk).city == "London"
        assert place.is_address_changed()
        assert place.changed_address_fields() == ["city"]

    def test_partial_save_remembers_written_address_fields(self):
        place = PlaceModel.objects.get(pk=PlaceFactory(city="London").pk)

        place.city = "Leeds"
        place.address_line2 = "Flat 2"
        place.save(update_fields=["city"])

        assert place.changed_address_fields() == ["address_line2"]
        assert place.is_address_changed(level=2)

    def test_level_beyond_history_uses_oldest_state(self):
        place = PlaceModel.objects.get(pk=PlaceFactory(city="London").pk)

        assert not place.is_address_changed(level=10)

    def test_level_must_be_positive(self):
        with pytest.raises(ValueError):
            PlaceModel(name="x").is_address_changed(level=0)


class TestConfiguration:

    def test_literal_country_is_prefilled(self):
        place = PlaceModel(name="x")
        place.set_allowed_countries("GB")

        assert place.country == "GB"

    def test_literal_defaults_from_settings(self, settings):
        settings.ADDRESSABLE = {**settings.ADDRESSABLE, "ALLOWED_REGIONS": "Kent", "ALLOWED_COUNTRIES": "GB"}

        place = PlaceModel(name="x")

        assert place.region == "Kent"
        assert place.country == "GB"

    def test_literal_does_not_override_explicit_value(self, settings):
        settings.ADDRESSABLE = {**settings.ADDRESSABLE, "ALLOWED_COUNTRIES": "GB"}

        place = PlaceModel(name="x", country="IE")

        assert place.country == "IE"

    def test_loaded_record_is_not_prefilled(self, settings):
        place = PlaceFactory(region="")
        settings.ADDRESSABLE = {**settings.ADDRESSABLE, "ALLOWED_REGIONS": "Kent"}

        loaded = PlaceModel.objects.get(pk=place.pk)

        assert loaded.region == ""
        assert not loaded.is_address_changed()

    def test_class_configuration_overrides_settings(self, monkeypatch):
        monkeypatch.setattr(PlaceModel, "address_config", AddressConfig(allowed_countries="NZ", postcode_regex=None))

        place = PlaceModel(name="x", postcode="AB1 2CD")

        assert place.country == "NZ"
        place.full_clean()

    def test_bad_instance_configuration_raises(self):
        place = PlaceModel(name="x")

        with pytest.raises(ImproperlyConfigured):
            place.set_postcode_regex("(")

    def test_instance_configuration_does_not_leak(self):
        first = PlaceModel(name="a")
        first.set_allowed_regions(["Kent"])

        assert PlaceModel(name="b").address_settings.allowed_regions is None


class TestClean:

    def test_default_postcode_pattern_rejects_letters(self):
        place = PlaceModel(name="x", address_line1="221B Baker St", postcode="AB1 2CD", country="GB")

        with pytest.raises(ValidationError) as excinfo:
            place.full_clean()

        assert "postcode" in excinfo.value.message_dict

    def test_reconfigured_postcode_pattern_accepts_letters(self):
        place = PlaceModel(name="x", address_line1="221B Baker St", postcode="AB1 2CD", country="GB")
        place.set_postcode_regex(r"^[A-Z]{1,2}[0-9][A-Z0-9]? ?[0-9][A-Z]{2}$")

        place.full_clean()

    def test_country_is_upper_cased(self):
        place = PlaceModel(name="x", country="gb")

        place.full_clean()

        assert place.country == "GB"

    def test_region_outside_allowed_list(self):
        place = PlaceModel(name="x", region="Essex")
        place.set_allowed_regions(["Kent", "Surrey"])

        with pytest.raises(ValidationError) as excinfo:
            place.full_clean()

        assert "region" in excinfo.value.message_dict

    def test_literal_country_is_forced(self):
        place = PlaceModel(name="x", country="FR")
        place.set_allowed_countries("GB")

        place.full_clean()

        assert place.country == "GB"

    def test_manual_location_needs_both_numbers(self):
        place = PlaceModel(name="x")
        place.coordinate = Coordinate(lat=1.0, lng=None, manually_set=True)

        with pytest.raises(ValidationError) as excinfo:
            place.full_clean()

        assert "__all__" in excinfo.value.message_dict


class TestRendering:

    def test_full_address_html(self):
        place = PlaceModel(name="x", address_line1="221B Baker St", city="London", country="GB")

        html = place.get_full_address_html()

        assert html == '<address class="address">221B Baker St<br>London<br>United Kingdom</address>'

    def test_localised_html_uses_country_layout(self):
        place = PlaceModel(
            name="x", address_line1="1 Main St", city="Springfield", region="IL",
            postcode="62704", country="US",
        )

        html = place.get_localised_full_address_html()

        assert "Springfield, IL 62704" in html

    def test_localised_html_falls_back_to_default_layout(self):
        place = PlaceModel(name="x", address_line1="221B Baker St", city="London", country="GB")

        assert place.get_localised_full_address_html() == place.get_full_address_html()

    def test_html_is_escaped(self):
        place = PlaceModel(name="x", address_line1="<script>", country="GB")

        assert "<script>" not in place.get_full_address_html()

    def test_address_map(self):
        place = PlaceModel(name="x", address_line1="221B Baker St", city="London", country="GB")

        html = place.address_map(300, 200)

        assert 'width="300"' in html
        assert 'height="200"' in html
        assert "size=300x200" in html
        assert "q=221B%20Baker%20St%2C%20London%2C%20United%20Kingdom" in html
