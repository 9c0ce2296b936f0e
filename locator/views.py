import logging
import math

from django.http import HttpResponse, HttpResponseBadRequest
from django.shortcuts import get_object_or_404
from django.template.loader import render_to_string
from django.urls import reverse
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from location.exceptions import DependencyUnavailable, LocationFilterError
from location.filters import FilterBag, get_locations, read_snapshot

from .conf import get_locator_config
from .forms import LocationSearchForm
from .models import Locator
from .serializers import LocatorSerializer, SearchFormSerializer
from .services import (
    build_map_options, describe_search_form, evaluate_locator, locator_feed, maps_script_url
)

logger = logging.getLogger(__name__)


class InvalidFeedRequest(ValueError):
    pass


def _finite(raw) -> float:
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"{raw!r} is not a finite number")
    return value


def _feed_kwargs(locator, params):
    """Translate feed query params into ``locator_feed`` keyword arguments."""
    form = LocationSearchForm(params, descriptor=describe_search_form(locator))
    if not form.is_valid():
        raise InvalidFeedRequest(form.errors.as_text())

    kwargs = {
        "category": form.cleaned_data.get("category") or None,
        "required": FilterBag.from_query(params.getlist("filter")),
        "excluded": FilterBag.from_query(params.getlist("exclude")),
    }

    if "lat" in params or "lng" in params:
        try:
            lat, lng = _finite(params["lat"]), _finite(params["lng"])
        except (KeyError, ValueError):
            raise InvalidFeedRequest("Invalid coordinates.")
        if not (-90 <= lat <= 90 and -180 <= lng <= 180):
            raise InvalidFeedRequest("Invalid coordinates.")
        kwargs["origin"] = (lat, lng)
    if params.get("radius"):
        try:
            radius = _finite(params["radius"])
        except ValueError:
            raise InvalidFeedRequest("Invalid radius.")
        if radius < 0:
            raise InvalidFeedRequest("Invalid radius.")
        kwargs["radius"] = radius
    return kwargs


class LocatorViewSet(mixins.RetrieveModelMixin, mixins.ListModelMixin, viewsets.GenericViewSet):
    queryset = Locator.objects.prefetch_related("categories").all()
    serializer_class = LocatorSerializer
    permission_classes = [AllowAny]
    lookup_field = "slug"

    @action(detail=True, methods=["get"])
    def feed(self, request, slug=None):
        locator = self.get_object()
        try:
            kwargs = _feed_kwargs(locator, request.query_params)
        except InvalidFeedRequest as e:
            return Response({"detail": str(e)}, status=400)
        result = locator_feed(locator, **kwargs)
        return Response({
            "unit": result.settings.unit,
            "count": len(result.records),
            "locations": result.records,
        })

    @action(detail=True, methods=["get"], url_path="search-form")
    def search_form(self, request, slug=None):
        with read_snapshot():
            descriptor = describe_search_form(self.get_object())
        return Response(SearchFormSerializer(descriptor).data)

    @action(detail=True, methods=["get"], url_path="map-options")
    def map_options(self, request, slug=None):
        """
        Bootstrap for the map widget. The widget scripts are only needed when
        at least one location can be shown.
        """
        config = get_locator_config()
        with read_snapshot():
            locator = self.get_object()
            settings = evaluate_locator(locator, config)
            has_locations = get_locations().exists()
        data_location = reverse("locator-xml", kwargs={"slug": locator.slug})
        return Response({
            "has_locations": has_locations,
            "script_url": maps_script_url(config),
            "options": build_map_options(locator, settings, data_location, config),
        })


def location_xml(request, slug):
    """XML feed of the locator's locations for the map widget."""
    try:
        with read_snapshot():
            locator = get_object_or_404(Locator, slug=slug)
            result = locator_feed(locator, **_feed_kwargs(locator, request.GET))
    except DependencyUnavailable:
        return HttpResponse("Location store unavailable.", status=503, content_type="text/plain")
    except (InvalidFeedRequest, LocationFilterError) as e:
        return HttpResponseBadRequest(str(e))
    xml = render_to_string("locator/locations.xml", {"locations": result.records})
    return HttpResponse(xml, content_type="application/xml; charset=utf-8")
