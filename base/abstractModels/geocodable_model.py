from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.db import models

from base import Constants
from base.services.geocoding_service import GeocodingService, get_geocoding_provider
from base.values import Coordinate

from .addressable_model import AddressableModel


class GeocodableModel(AddressableModel):
    """
    Abstract addressable model whose coordinate is looked up automatically
    when its address changes.

    Each save() geocodes the full address if any address field changed and
    the coordinate was not set manually. A failed lookup never fails the save.
    """
    coordinate_lat = models.FloatField(null=True, blank=True)
    coordinate_lng = models.FloatField(null=True, blank=True)
    coordinate_manually_set = models.BooleanField(default=False)

    # Provider override for this class, None uses settings.ADDRESSABLE["GEOCODER"]
    geocoding_provider = None

    class Meta:
        abstract = True

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(
            lat=self.coordinate_lat,
            lng=self.coordinate_lng,
            manually_set=self.coordinate_manually_set,
        )

    @coordinate.setter
    def coordinate(self, value):
        value = Coordinate.from_value(value)
        self.coordinate_lat = value.lat
        self.coordinate_lng = value.lng
        self.coordinate_manually_set = value.manually_set

    def get_geocoding_provider(self):
        return self.geocoding_provider or get_geocoding_provider()

    def clean(self):
        errors = {}
        try:
            super().clean()
        except ValidationError as e:
            errors = e.update_error_dict(errors)

        if self.coordinate_manually_set and (self.coordinate_lat is None or self.coordinate_lng is None):
            errors.setdefault(NON_FIELD_ERRORS, []).append(
                "A manually set location needs both a latitude and a longitude."
            )

        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        update_fields = kwargs.get("update_fields")
        # A partial save that leaves changed address columns unwritten keeps the
        # old coordinate, the save that writes them geocodes instead
        if update_fields is not None and not set(self.changed_address_fields()) <= set(update_fields):
            super().save(*args, **kwargs)
            return

        if GeocodingService.update_coordinate(self) and update_fields is not None:
            kwargs["update_fields"] = set(update_fields) | set(Constants.COORDINATE_FIELDS)

        super().save(*args, **kwargs)
