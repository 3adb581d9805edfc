from django import forms

from base import Constants
from base.enums import INPUT_MODE
from base.services.country_service import CountryService

from .coordinate_field import CoordinateFormField

ADDRESS_LABELS = {
    Constants.FieldName.ADDRESS_LINE1: "Address Line 1",
    Constants.FieldName.ADDRESS_LINE2: "Address Line 2",
    Constants.FieldName.CITY: "Town/City",
    Constants.FieldName.REGION: "County/State",
    Constants.FieldName.POSTCODE: "Postcode",
    Constants.FieldName.COUNTRY: "Country",
}

COORDINATE_FORM_FIELD = "location"


def address_form_field_names(config):
    """
    Names of the address inputs shown for a configuration, in display order.
    Literal region/country values are not shown.
    """
    hidden = set()
    if config.region_mode == INPUT_MODE.LITERAL:
        hidden.add(Constants.FieldName.REGION)
    if config.country_mode == INPUT_MODE.LITERAL:
        hidden.add(Constants.FieldName.COUNTRY)
    return [name for name in Constants.ADDRESS_FIELDS if name not in hidden]


class AddressableModelForm(forms.ModelForm):
    """
    ModelForm for AddressableModel subclasses. Region and country inputs are
    text boxes, dropdowns or left out depending on the instance's AddressConfig.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        config = self.instance.address_settings

        for name in Constants.ADDRESS_FIELDS:
            if name not in address_form_field_names(config):
                self.fields.pop(name, None)

        region = Constants.FieldName.REGION
        if region in self.fields and config.region_mode == INPUT_MODE.CHOICE:
            self.fields[region] = forms.ChoiceField(
                choices=[("", "---------")] + config.region_choices(),
                required=False,
            )

        country = Constants.FieldName.COUNTRY
        if country in self.fields:
            if config.country_mode == INPUT_MODE.CHOICE:
                self.fields[country] = forms.ChoiceField(
                    choices=[("", "---------")] + config.country_choices(CountryService.name_of),
                    required=False,
                )
            else:
                self.fields[country].help_text = "Two letter country code, e.g. GB"

        for name, label in ADDRESS_LABELS.items():
            if name in self.fields:
                self.fields[name].label = label

    def clean_country(self):
        return (self.cleaned_data.get(Constants.FieldName.COUNTRY) or "").upper()


class GeocodableModelForm(AddressableModelForm):
    """
    AddressableModelForm for GeocodableModel subclasses with a combined
    location input in place of the raw coordinate columns.
    """
    location = CoordinateFormField(label="Location")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in Constants.COORDINATE_FIELDS:
            self.fields.pop(name, None)
        if COORDINATE_FORM_FIELD in self.fields:
            self.initial.setdefault(COORDINATE_FORM_FIELD, self.instance.coordinate)

    def save(self, commit=True):
        # Coordinate first, so geocoding in instance.save() sees the final manual flag
        if COORDINATE_FORM_FIELD in self.fields:
            self.fields[COORDINATE_FORM_FIELD].save_into(
                self.instance, self.cleaned_data.get(COORDINATE_FORM_FIELD)
            )
        return super().save(commit=commit)
