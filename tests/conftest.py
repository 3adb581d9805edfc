"""
Shared fixtures for the addressable test suite.
"""
import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from base.models import PlaceModel
from base.services.geocoding_service import GeocodeResult


class FakeGeocodingProvider:
    """
    Stands in for a mapping API. Records every lookup and answers with a
    fixed result, or raises a fixed error.
    """

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def resolve(self, address, region_hint=""):
        self.calls.append((address, region_hint))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def london():
    return GeocodeResult(lat=51.5, lng=-0.1)


@pytest.fixture
def fake_geocoder(monkeypatch, london):
    """Every PlaceModel save geocodes to (51.5, -0.1) through a fake provider."""
    provider = FakeGeocodingProvider(result=london)
    monkeypatch.setattr(PlaceModel, "geocoding_provider", provider)
    return provider


@pytest.fixture
def failing_geocoder(monkeypatch):
    """Every PlaceModel lookup comes back empty."""
    provider = FakeGeocodingProvider(result=None)
    monkeypatch.setattr(PlaceModel, "geocoding_provider", provider)
    return provider


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def editor(django_user_model):
    return django_user_model.objects.create_user(username="editor", password="editor-pass")


@pytest.fixture
def auth_client(api_client, editor):
    api_client.force_authenticate(user=editor)
    return api_client
