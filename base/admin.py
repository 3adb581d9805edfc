from django.contrib import admin

from base import Constants
from base.forms import GeocodableModelForm, PlaceForm, address_form_field_names
from base.forms.address_form import COORDINATE_FORM_FIELD
from base.models import LocationModel, PlaceModel


class GeocodableAdminMixin:
    """
    Groups the address inputs and the location field of a GeocodableModel
    admin under their own "Address" heading.
    """
    form = GeocodableModelForm
    address_fieldset_label = Constants.ADDRESS_TAB_LABEL

    def get_fieldsets(self, request, obj=None):
        if self.fieldsets:
            return self.fieldsets

        config = (obj or self.model()).address_settings
        grouped = {*Constants.ADDRESS_FIELDS, *Constants.COORDINATE_FIELDS, COORDINATE_FORM_FIELD}
        other = [name for name in self.get_fields(request, obj) if name not in grouped]

        return [
            (None, {"fields": other}),
            (self.address_fieldset_label, {"fields": [*address_form_field_names(config), COORDINATE_FORM_FIELD]}),
        ]


@admin.register(PlaceModel)
class PlaceAdmin(GeocodableAdminMixin, admin.ModelAdmin):
    form = PlaceForm
    list_display = ("name", "city", "country", "coordinate_lat", "coordinate_lng", "coordinate_manually_set")
    list_filter = ("country", "coordinate_manually_set")
    search_fields = ("name", "address_line1", "city", "postcode")
    readonly_fields = ("createdAt", "updatedAt")


@admin.register(LocationModel)
class LocationAdmin(admin.ModelAdmin):
    list_display = ("country_code", "country_name")
    search_fields = ("country_code", "country_name")
