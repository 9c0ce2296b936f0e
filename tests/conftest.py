import pytest
from rest_framework.test import APIClient

from location.models import Location, LocationCategory
from locator.models import Locator


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_category(db):
    def _make(name):
        return LocationCategory.objects.create(name=name)
    return _make


@pytest.fixture
def make_location(db):
    def _make(name="Spot", lat=10, lng=10, categories=(), **extra):
        loc = Location.objects.create(name=name, latitude=lat, longitude=lng, **extra)
        if categories:
            loc.categories.set(categories)
        return loc
    return _make


@pytest.fixture
def make_locator(db):
    def _make(slug="stores", categories=(), **extra):
        locator = Locator.objects.create(title=slug.replace("-", " ").title(), slug=slug, **extra)
        if categories:
            locator.categories.set(categories)
        return locator
    return _make
