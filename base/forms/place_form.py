from base import Constants
from base.models import PlaceModel

from .address_form import GeocodableModelForm


class PlaceForm(GeocodableModelForm):

    class Meta:
        model = PlaceModel
        fields = ["name", *Constants.ADDRESS_FIELDS]
