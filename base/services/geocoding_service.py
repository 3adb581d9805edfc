"""
Address to coordinate lookups and the policy deciding when a record's
coordinate is refreshed.
"""
import hashlib
import logging
import math
from dataclasses import dataclass
from typing import Optional

import requests
from django.core.cache import cache
from django.core.exceptions import ImproperlyConfigured

from base import Constants
from base.enums import GEOCODER
from base.utils import addressable_setting
from base.values import Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeocodeResult:
    lat: float
    lng: float


def _result(lat, lng) -> GeocodeResult:
    lat, lng = float(lat), float(lng)
    if not (math.isfinite(lat) and math.isfinite(lng)) or abs(lat) > 90 or abs(lng) > 180:
        raise ValueError(f"coordinate out of range: {lat}, {lng}")
    return GeocodeResult(lat=lat, lng=lng)


class GeocodingProvider:
    """
    Resolves a formatted address to a coordinate through a mapping API.

    resolve() is best-effort: network errors, timeouts, empty results and
    malformed responses all return None. Subclasses only implement _lookup(),
    which may raise.
    """
    name = "base"
    requires_key = True

    def __init__(self, api_key=None, timeout=Constants.DEFAULT_GEOCODER_TIMEOUT,
                 cache_ttl=Constants.DEFAULT_GEOCODER_CACHE_TTL):
        self.api_key = api_key
        self.timeout = timeout
        self.cache_ttl = cache_ttl

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name}>"

    def _cache_key(self, address: str, region_hint: str) -> str:
        digest = hashlib.sha256(f"{region_hint}|{address}".encode("utf-8")).hexdigest()
        return f"geocode:{self.name}:{digest}"

    def resolve(self, address: str, region_hint: str = "") -> Optional[GeocodeResult]:
        """
        Look up the coordinate of an address.

        Args:
            address: Full address, comma separated
            region_hint: Lower case country code used to bias results

        Returns:
            GeocodeResult, or None when the address could not be resolved
        """
        address = (address or "").strip()
        region_hint = (region_hint or "").strip().lower()
        if not address:
            return None

        if self.requires_key and not self.api_key:
            logger.warning(f"Geocoder {self.name} has no API key configured, skipping {address!r}")
            return None

        cache_key = self._cache_key(address, region_hint)
        cached = cache.get(cache_key)
        if cached:
            return GeocodeResult(**cached)

        try:
            result = self._lookup(address, region_hint)
        except requests.Timeout:
            logger.warning(f"Geocoder {self.name} timed out after {self.timeout}s for {address!r}")
            return None
        except requests.RequestException as e:
            logger.warning(f"Geocoder {self.name} request failed for {address!r}: {e}")
            return None
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning(f"Geocoder {self.name} returned a malformed response for {address!r}: {e}")
            return None

        if result is None:
            logger.info(f"Geocoder {self.name} found no match for {address!r}")
            return None

        if self.cache_ttl:
            cache.set(cache_key, {"lat": result.lat, "lng": result.lng}, self.cache_ttl)

        logger.debug(f"Geocoded {address!r} to {result.lat}, {result.lng} with {self.name}")
        return result

    def _lookup(self, address: str, region_hint: str) -> Optional[GeocodeResult]:
        raise NotImplementedError


class GoogleGeocodingProvider(GeocodingProvider):
    name = GEOCODER.GOOGLE.value
    BASE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

    def _lookup(self, address, region_hint):
        params = {"address": address, "key": self.api_key}
        if region_hint:
            params["region"] = region_hint

        response = requests.get(self.BASE_URL, params=params, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()

        status = data.get("status")
        if status == "ZERO_RESULTS":
            return None
        if status != "OK":
            logger.warning(
                f"Google geocoding returned {status} for {address!r}: {data.get('error_message', '')}"
            )
            return None

        results = data.get("results") or []
        if not results:
            return None

        location = results[0]["geometry"]["location"]
        return _result(location["lat"], location["lng"])


class OpenCageGeocodingProvider(GeocodingProvider):
    name = GEOCODER.OPENCAGE.value
    BASE_URL = "https://api.opencagedata.com/geocode/v1/json"

    def _lookup(self, address, region_hint):
        params = {
            "q": address,
            "key": self.api_key,
            "limit": 1,
            "no_annotations": 1,
        }
        if region_hint:
            params["countrycode"] = region_hint

        response = requests.get(self.BASE_URL, params=params, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()

        results = data.get("results") or []
        if not results:
            return None

        geometry = results[0]["geometry"]
        return _result(geometry["lat"], geometry["lng"])


class NominatimGeocodingProvider(GeocodingProvider):
    """
    OpenStreetMap Nominatim. Needs no key, but the usage policy asks for an
    identifying User-Agent and at most one request per second.
    """
    name = GEOCODER.NOMINATIM.value
    requires_key = False
    BASE_URL = "https://nominatim.openstreetmap.org/search"
    USER_AGENT = "addressable-backend/1.0"

    def _lookup(self, address, region_hint):
        params = {"q": address, "format": "jsonv2", "limit": 1}
        if region_hint:
            params["countrycodes"] = region_hint

        response = requests.get(
            self.BASE_URL,
            params=params,
            headers={"User-Agent": self.USER_AGENT},
            timeout=self.timeout,
        )
        response.raise_for_status()
        results = response.json()

        if not results:
            return None

        return _result(results[0]["lat"], results[0]["lon"])


class NullGeocodingProvider(GeocodingProvider):
    """Never resolves anything. For offline environments and tests."""
    name = GEOCODER.NONE.value
    requires_key = False

    def resolve(self, address, region_hint=""):
        return None


PROVIDERS = {
    GEOCODER.GOOGLE.value: GoogleGeocodingProvider,
    GEOCODER.OPENCAGE.value: OpenCageGeocodingProvider,
    GEOCODER.NOMINATIM.value: NominatimGeocodingProvider,
    GEOCODER.NONE.value: NullGeocodingProvider,
}


def get_geocoding_provider(name=None) -> GeocodingProvider:
    """
    Build the provider named in settings.ADDRESSABLE["GEOCODER"].

    Raises:
        ImproperlyConfigured: If the name is not a known provider
    """
    name = name or addressable_setting("GEOCODER", Constants.DEFAULT_GEOCODER)
    try:
        provider_class = PROVIDERS[name]
    except KeyError:
        raise ImproperlyConfigured(
            f"Unknown geocoder {name!r}, expected one of: {', '.join(PROVIDERS)}"
        ) from None

    return provider_class(
        api_key=addressable_setting("GEOCODER_API_KEY"),
        timeout=addressable_setting("GEOCODER_TIMEOUT", Constants.DEFAULT_GEOCODER_TIMEOUT),
        cache_ttl=addressable_setting("GEOCODER_CACHE_TTL", Constants.DEFAULT_GEOCODER_CACHE_TTL),
    )


class GeocodingService:
    """
    Keeps a geocodable record's coordinate in step with its address.
    """

    @classmethod
    def update_coordinate(cls, record, provider=None) -> bool:
        """
        Refresh the coordinate of a record that is about to be saved.

        Nothing happens unless the address changed since it was loaded, and a
        manually set coordinate is never overwritten. A failed lookup leaves
        the stored coordinate as it was.

        Args:
            record: A GeocodableModel instance
            provider: GeocodingProvider to use instead of the record's own

        Returns:
            bool: True if the coordinate was changed
        """
        if not record.is_address_changed():
            return False

        return cls.geocode_record(record, provider)

    @classmethod
    def geocode_record(cls, record, provider=None) -> bool:
        """
        Resolve the record's current address regardless of whether it changed.
        Still honours the manual override.

        Returns:
            bool: True if the coordinate was changed
        """
        if record.coordinate.manually_set:
            logger.debug(f"Skipping geocoding of {record!r}, location was set manually")
            return False

        provider = provider or record.get_geocoding_provider()
        address = record.get_full_address()
        region_hint = (record.country or "").lower()

        try:
            result = provider.resolve(address, region_hint)
        except Exception as e:  # custom providers may raise anything
            logger.error(f"Geocoder {provider!r} raised for {address!r}: {e}", exc_info=True)
            return False

        if result is None:
            return False

        record.coordinate = Coordinate(lat=result.lat, lng=result.lng, manually_set=False)
        return True
