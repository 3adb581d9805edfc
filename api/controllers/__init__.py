from .location_view import LocationViewSet
from .place_view import PlaceViewSet
