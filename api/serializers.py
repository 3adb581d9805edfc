from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from base import Constants
from base.models import LocationModel, PlaceModel
from base.services.country_service import CountryService
from base.values import Coordinate

"""
Serializers for the corresponding models.
Converts model instances to and from JSON format for API interactions.
"""

class LocationSerializer(serializers.ModelSerializer):
    class Meta:
        model = LocationModel
        fields = ["country_code", "country_name"]

    def validate_country_code(self, value):
        value = value.upper()
        if not CountryService.is_known(value):
            raise serializers.ValidationError("Not an ISO 3166 country code.")
        return value


class CoordinateSerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90, allow_null=True, required=False)
    lng = serializers.FloatField(min_value=-180, max_value=180, allow_null=True, required=False)
    manually_set = serializers.BooleanField(default=False)

    def to_representation(self, instance):
        return Coordinate.from_value(instance).as_dict()

    def validate(self, attrs):
        if attrs.get("manually_set") and (attrs.get("lat") is None or attrs.get("lng") is None):
            raise serializers.ValidationError(
                "Enter both a latitude and a longitude to set the location manually."
            )
        return attrs


class PlaceSerializer(serializers.ModelSerializer):
    location = CoordinateSerializer(source="coordinate", required=False)
    fullAddress = serializers.CharField(source="get_full_address", read_only=True)
    hasAddress = serializers.BooleanField(source="has_address", read_only=True)
    countryName = serializers.CharField(source="get_country_name", read_only=True)

    class Meta:
        model = PlaceModel
        fields = [
            "id", "name", *Constants.ADDRESS_FIELDS,
            "location", "fullAddress", "hasAddress", "countryName",
            "createdAt", "updatedAt",
        ]
        read_only_fields = ["id", "createdAt", "updatedAt"]

    def create(self, validated_data):
        return self._save(PlaceModel(), validated_data)

    def update(self, instance, validated_data):
        return self._save(instance, validated_data)

    def _save(self, instance, validated_data):
        """
        Apply the submitted fields, validate against the place's address
        configuration and save. A submitted location only replaces the stored
        one when it is marked as manually set.
        """
        location = validated_data.pop("coordinate", None)

        for field, value in validated_data.items():
            setattr(instance, field, value)

        if location is not None:
            instance.coordinate = instance.coordinate.apply_edit(Coordinate.from_value(location))

        try:
            instance.full_clean()
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.message_dict)

        instance.save()
        return instance
