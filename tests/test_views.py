from unittest import mock
from xml.etree import ElementTree

import pytest
from django.db import OperationalError

from location.exceptions import DependencyUnavailable
from locator.views import LocatorViewSet

pytestmark = pytest.mark.django_db


def test_locator_detail(api_client, make_locator, make_category):
    cafe = make_category("Cafe")
    make_locator(slug="stores", categories=[cafe], unit="km")

    resp = api_client.get("/api/locators/stores/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["slug"] == "stores"
    assert body["unit"] == "km"
    assert body["categories"] == ["Cafe"]


def test_feed_returns_visible_locations(api_client, make_locator, make_location):
    make_locator(slug="stores")
    shown = make_location("Shown", lat=20, lng=5)
    make_location("No coordinates", lat=0)

    resp = api_client.get("/api/locators/stores/feed/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 1
    assert body["unit"] == "m"
    assert body["locations"][0]["id"] == shown.pk
    assert body["locations"][0]["lat"] == 20.0


def test_feed_category_selection(api_client, make_locator, make_location, make_category):
    cafe, diner = make_category("Cafe"), make_category("Diner")
    make_locator(slug="stores")
    make_location("Cafe spot", categories=[cafe])
    diner_spot = make_location("Diner spot", categories=[diner])

    resp = api_client.get("/api/locators/stores/feed/", {"category": "Diner"})
    assert [loc["id"] for loc in resp.json()["locations"]] == [diner_spot.pk]


def test_feed_rejects_category_not_offered(api_client, make_locator, make_category):
    make_category("Cafe")
    make_locator(slug="stores")
    resp = api_client.get("/api/locators/stores/feed/", {"category": "Pizza"})
    assert resp.status_code == 400


def test_feed_filter_params(api_client, make_locator, make_location):
    make_locator(slug="stores")
    star = make_location("Star", featured=True, city="Austin")
    make_location("Plain", city="Austin")
    make_location("Other star", featured=True, city="Dallas")

    resp = api_client.get("/api/locators/stores/feed/", {"filter": "featured:true", "exclude": "city:Dallas"})
    assert [loc["id"] for loc in resp.json()["locations"]] == [star.pk]


@pytest.mark.parametrize("params", [
    {"filter": "colour:red"},
    {"filter": "featured"},
    {"exclude": "featured:maybe"},
    {"lat": "abc", "lng": "1"},
    {"lat": "1"},
    {"lat": "1", "lng": "1", "radius": "far"},
    {"lat": "nan", "lng": "0", "radius": "5"},
    {"lat": "0", "lng": "inf"},
    {"lat": "91", "lng": "0"},
    {"lat": "0", "lng": "-180.5"},
    {"lat": "0", "lng": "0", "radius": "-1"},
    {"lat": "0", "lng": "0", "radius": "nan"},
])
def test_feed_bad_requests(api_client, make_locator, params):
    make_locator(slug="stores")
    resp = api_client.get("/api/locators/stores/feed/", params)
    assert resp.status_code == 400
    assert "detail" in resp.json()


def test_feed_with_origin_includes_distance(api_client, make_locator, make_location):
    make_locator(slug="stores", unit="km")
    near = make_location("Near", lat=1, lng=0)
    make_location("Far", lat=10, lng=0)

    resp = api_client.get("/api/locators/stores/feed/", {"lat": "0", "lng": "0", "radius": "200"})
    locations = resp.json()["locations"]
    assert [loc["id"] for loc in locations] == [near.pk]
    assert locations[0]["distance"] == pytest.approx(111.19, abs=0.05)


def test_feed_unknown_locator(api_client):
    assert api_client.get("/api/locators/missing/feed/").status_code == 404


def test_feed_store_unavailable(api_client, make_locator):
    make_locator(slug="stores")
    with mock.patch("locator.views.locator_feed", side_effect=DependencyUnavailable("down")):
        resp = api_client.get("/api/locators/stores/feed/")
    assert resp.status_code == 503


def test_xml_feed(client, make_locator, make_location, make_category):
    cafe = make_category("Cafe")
    make_locator(slug="stores")
    loc = make_location("Joe's & Co", lat=20, lng=-97.5, featured=True, categories=[cafe])

    resp = client.get("/api/locators/stores/xml.xml")
    assert resp.status_code == 200
    assert resp["Content-Type"].startswith("application/xml")

    root = ElementTree.fromstring(resp.content)
    assert root.tag == "markers"
    markers = root.findall("marker")
    assert len(markers) == 1
    assert markers[0].get("id") == str(loc.pk)
    assert markers[0].get("name") == "Joe's & Co"
    assert float(markers[0].get("lat")) == 20.0
    assert markers[0].get("category") == "Cafe"
    assert markers[0].get("featured") == "true"
    assert markers[0].get("distance") is None


def test_xml_feed_bad_filter(client, make_locator):
    make_locator(slug="stores")
    assert client.get("/api/locators/stores/xml.xml", {"filter": "colour:red"}).status_code == 400


def test_xml_feed_store_unavailable(client, make_locator):
    make_locator(slug="stores")
    with mock.patch("locator.views.locator_feed", side_effect=DependencyUnavailable("down")):
        assert client.get("/api/locators/stores/xml.xml").status_code == 503


def test_search_form(api_client, make_locator, make_category):
    make_category("Diner")
    make_category("Cafe")
    make_locator(slug="stores")

    resp = api_client.get("/api/locators/stores/search-form/")
    assert resp.status_code == 200
    assert resp.json() == {"address_field": True, "category_options": ["Cafe", "Diner"], "extra_fields": []}


def test_search_form_single_category(api_client, make_locator, make_category):
    cafe = make_category("Cafe")
    make_locator(slug="cafes", categories=[cafe])
    assert api_client.get("/api/locators/cafes/search-form/").json()["category_options"] is None


def test_map_options(api_client, settings, make_locator, make_location):
    settings.LOCATOR = {"GOOGLE_API_KEY": "k3y"}
    make_locator(slug="stores", unit="km")
    make_location("Star", featured=True)

    resp = api_client.get("/api/locators/stores/map-options/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["has_locations"] is True
    assert body["script_url"].endswith("key=k3y")
    assert body["options"]["dataLocation"] == "/api/locators/stores/xml.xml"
    assert body["options"]["autoGeocode"] is False
    assert body["options"]["storeLimit"] == 1000
    assert body["options"]["lengthUnit"] == "km"


def test_map_options_misconfigured(api_client, settings, make_locator):
    settings.LOCATOR = {"FULL_LIST_STORE_LIMIT": 0}
    make_locator(slug="stores")
    assert api_client.get("/api/locators/stores/map-options/").status_code == 500


def test_feed_lists_multi_category_location_once(api_client, make_locator, make_location, make_category):
    make_locator(slug="stores")
    loc = make_location("Both", categories=[make_category("Cafe"), make_category("Cafe")])

    resp = api_client.get("/api/locators/stores/feed/", {"filter": "categories__name:Cafe"})
    body = resp.json()
    assert body["count"] == 1
    assert [r["id"] for r in body["locations"]] == [loc.pk]


def test_map_options_store_unavailable(api_client, make_locator):
    make_locator(slug="stores")
    with mock.patch("locator.views.get_locations", side_effect=OperationalError("down")):
        assert api_client.get("/api/locators/stores/map-options/").status_code == 503


@pytest.mark.parametrize("url", [
    "/api/locators/stores/search-form/",
    "/api/locators/stores/feed/",
])
def test_search_form_reads_store_unavailable(api_client, make_locator, url):
    make_locator(slug="stores")
    with mock.patch("locator.views.describe_search_form", side_effect=OperationalError("down")):
        assert api_client.get(url).status_code == 503


def test_locator_lookup_store_unavailable(api_client, make_locator):
    make_locator(slug="stores")
    with mock.patch.object(LocatorViewSet, "get_object", side_effect=OperationalError("down")):
        assert api_client.get("/api/locators/stores/feed/").status_code == 503


def test_xml_feed_search_form_store_unavailable(client, make_locator):
    make_locator(slug="stores")
    with mock.patch("locator.views.describe_search_form", side_effect=OperationalError("down")):
        assert client.get("/api/locators/stores/xml.xml").status_code == 503
