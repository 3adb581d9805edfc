from .PagedList import PagedList
from .addressable_model import AddressableModel
from .geocodable_model import GeocodableModel
