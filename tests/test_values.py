"""
Tests for the Address and Coordinate value objects.
"""
import pytest

from base.values import Address, Coordinate


def country_name(code):
    return {"GB": "United Kingdom", "US": "United States"}.get(code, code)


class TestAddress:

    def test_format_omits_empty_fields(self):
        address = Address(address_line1="221B Baker St", city="London", country="GB")

        assert address.format(country_name) == "221B Baker St, London, United Kingdom"

    def test_format_keeps_field_order(self):
        address = Address(
            address_line1="1 Main St",
            address_line2="Suite 4",
            city="Springfield",
            region="IL",
            postcode="62704",
            country="US",
        )

        assert address.parts(country_name) == [
            "1 Main St", "Suite 4", "Springfield", "IL", "62704", "United States",
        ]

    def test_format_without_country(self):
        assert Address(city="London", postcode="12345").format(country_name) == "London, 12345"

    def test_empty_address_formats_to_empty_string(self):
        assert Address().format(country_name) == ""

    @pytest.mark.parametrize("line1, country, expected", [
        ("221B Baker St", "GB", True),
        ("", "GB", False),
        ("221B Baker St", "", False),
        ("", "", False),
    ])
    def test_has_address_needs_line1_and_country(self, line1, country, expected):
        assert Address(address_line1=line1, country=country).has_address() is expected

    def test_from_record_reads_none_as_empty(self):
        class Record:
            address_line1 = "221B Baker St"
            address_line2 = None
            city = "London"

        address = Address.from_record(Record())

        assert address == Address(address_line1="221B Baker St", city="London")

    def test_changed_fields(self):
        before = Address(address_line1="221B Baker St", city="London", country="GB")
        after = Address(address_line1="221B Baker St", city="Manchester", country="GB")

        assert after.changed_fields(before) == ["city"]
        assert before.changed_fields(before) == []


class TestCoordinate:

    def test_new_coordinate_is_empty_and_automatic(self):
        coordinate = Coordinate()

        assert coordinate.is_empty
        assert coordinate.manually_set is False

    def test_from_mapping(self):
        coordinate = Coordinate.from_value({"lat": "51.5", "lng": -0.1, "manually_set": True})

        assert coordinate == Coordinate(lat=51.5, lng=-0.1, manually_set=True)

    def test_from_mapping_without_manual_flag(self):
        assert Coordinate.from_value({"lat": 1, "lng": 2}).manually_set is False

    def test_from_mapping_with_blank_numbers(self):
        assert Coordinate.from_value({"lat": "", "lng": None}).is_empty

    def test_from_coordinate_returns_it(self):
        coordinate = Coordinate(lat=1.0, lng=2.0)

        assert Coordinate.from_value(coordinate) is coordinate

    def test_from_unsupported_value(self):
        with pytest.raises(TypeError):
            Coordinate.from_value(42)

    def test_manual_edit_replaces_stored_pair(self):
        stored = Coordinate(lat=51.5, lng=-0.1)

        result = stored.apply_edit(Coordinate(lat=48.85, lng=2.35, manually_set=True))

        assert result == Coordinate(lat=48.85, lng=2.35, manually_set=True)

    def test_automatic_edit_keeps_stored_pair(self):
        stored = Coordinate(lat=51.5, lng=-0.1, manually_set=True)

        result = stored.apply_edit(Coordinate(lat=0.0, lng=0.0, manually_set=False))

        assert result == Coordinate(lat=51.5, lng=-0.1, manually_set=False)
