from .location_model import LocationModel
from .place_model import PlaceModel
