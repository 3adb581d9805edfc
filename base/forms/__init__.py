from .coordinate_field import CoordinateFormField, CoordinateWidget
from .address_form import AddressableModelForm, GeocodableModelForm, address_form_field_names
from .place_form import PlaceForm
