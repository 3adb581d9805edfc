from enum import Enum

class GEOCODER(Enum):
    """
    Geocoding providers available through ADDRESSABLE["GEOCODER"]
    """
    GOOGLE = "google"
    OPENCAGE = "opencage"
    NOMINATIM = "nominatim"
    NONE = "none"
