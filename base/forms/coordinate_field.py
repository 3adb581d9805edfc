from django import forms
from django.core.exceptions import ValidationError

from base import Constants
from base.utils import normalise_dimension
from base.values import Coordinate

MANUAL_HELP = (
    "By ticking this box, you can update the location by dragging and dropping the marker "
    "on the map. While this box is ticked, the location will not update automatically when "
    "the address changes."
)


class CoordinateWidget(forms.MultiWidget):
    """
    Latitude, longitude and manual-override inputs next to a map preview.
    """
    template_name = "base/widgets/coordinate_widget.html"
    labels = ("Latitude", "Longitude", "Manually set location")

    def __init__(self, attrs=None, start_lat=0, start_lng=0,
                 map_width=Constants.DEFAULT_MAP_WIDTH, map_height=Constants.DEFAULT_MAP_HEIGHT,
                 zoom=Constants.DEFAULT_MAP_ZOOM):
        widgets = {
            "lat": forms.NumberInput(attrs={"step": "any"}),
            "lng": forms.NumberInput(attrs={"step": "any"}),
            "manually_set": forms.CheckboxInput(),
        }
        super().__init__(widgets, attrs)
        self.start_lat = start_lat
        self.start_lng = start_lng
        self.map_width = normalise_dimension(map_width)
        self.map_height = normalise_dimension(map_height)
        self.zoom = zoom

    def decompress(self, value):
        """
        Split a Coordinate, or a mapping with lat/lng/manually_set keys, into
        the three input values.
        """
        if value is None:
            return [None, None, False]
        coordinate = Coordinate.from_value(value)
        return [coordinate.lat, coordinate.lng, coordinate.manually_set]

    def get_context(self, name, value, attrs):
        context = super().get_context(name, value, attrs)
        for subwidget, label in zip(context["widget"]["subwidgets"], self.labels):
            subwidget["label"] = label

        # Centre on the start point until the record has a location
        if isinstance(value, (list, tuple)):
            should_use_start = value[0] in (None, "") and value[1] in (None, "")
        else:
            should_use_start = Coordinate.from_value(value).is_empty

        context["widget"].update({
            "start_lat": self.start_lat,
            "start_lng": self.start_lng,
            "should_use_start": should_use_start,
            "zoom": self.zoom,
            "map_width": self.map_width,
            "map_height": self.map_height,
            "manual_help": MANUAL_HELP,
        })
        return context


class CoordinateFormField(forms.MultiValueField):
    """
    Form field for a record's coordinate.

    Cleans to a Coordinate. save_into() writes it to the record: the edited
    latitude/longitude only when "manually set" is ticked, otherwise the
    record keeps its stored pair and automatic geocoding decides on save.
    """
    default_error_messages = {
        "incomplete": "Enter both a latitude and a longitude to set the location manually.",
    }

    def __init__(self, *, start_lat=0, start_lng=0,
                 map_width=Constants.DEFAULT_MAP_WIDTH, map_height=Constants.DEFAULT_MAP_HEIGHT,
                 zoom=Constants.DEFAULT_MAP_ZOOM, **kwargs):
        fields = (
            forms.FloatField(min_value=-90, max_value=90, required=False),
            forms.FloatField(min_value=-180, max_value=180, required=False),
            forms.BooleanField(required=False),
        )
        kwargs.setdefault("required", False)
        kwargs.setdefault("widget", CoordinateWidget(
            start_lat=start_lat,
            start_lng=start_lng,
            map_width=map_width,
            map_height=map_height,
            zoom=zoom,
        ))
        super().__init__(fields=fields, require_all_fields=False, **kwargs)

    def compress(self, data_list):
        if not data_list:
            return Coordinate()

        lat, lng, manually_set = data_list
        manually_set = bool(manually_set)
        if manually_set and (lat is None or lng is None):
            raise ValidationError(self.error_messages["incomplete"], code="incomplete")

        return Coordinate(lat=lat, lng=lng, manually_set=manually_set)

    def save_into(self, record, value):
        """
        Write the submitted coordinate into a GeocodableModel record.

        Args:
            record: The record being saved
            value: Cleaned Coordinate, or a mapping with lat/lng/manually_set
        """
        edited = Coordinate.from_value(value)
        record.coordinate = record.coordinate.apply_edit(edited)
