from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from location.distance import rank_by_distance
from location.filters import CATEGORY_KEY, FilterBag, get_locations, read_snapshot
from location.models import LocationCategory

from .conf import LocatorConfig, get_locator_config
from .exceptions import InvalidConfiguration
from .feed import assemble_feed
from .models import DisplayMode, DistanceUnit, Locator
from .signals import map_options_built, search_form_described

logger = logging.getLogger(__name__)


# ---- Locator evaluation ----

@dataclass(frozen=True)
class LocatorSettings:
    auto_geocode: bool
    featured_locations: bool
    store_limit: int
    max_distance: bool
    unit: str
    display_mode: str

    @property
    def full_map_start(self) -> bool:
        return not self.auto_geocode

    @property
    def modal_window(self) -> bool:
        return self.display_mode == DisplayMode.MODAL


def effective_unit(locator: Locator) -> str:
    if locator.unit not in DistanceUnit.values:
        raise InvalidConfiguration(f"Locator {locator.pk} has unknown unit {locator.unit!r}")
    return DistanceUnit.KILOMETERS.value if locator.unit == DistanceUnit.KILOMETERS else DistanceUnit.MILES.value


def evaluate_locator(locator: Locator, config: Optional[LocatorConfig] = None) -> LocatorSettings:
    """
    Derive the effective map settings for a locator. Any featured location
    switches auto-geocode off and puts the map into full-list mode.
    """
    config = config or get_locator_config()
    unit = effective_unit(locator)
    featured_count = get_locations(FilterBag.of(featured=True)).count()
    auto_geocode = bool(locator.auto_geocode) and featured_count == 0

    if locator.auto_geocode and not auto_geocode:
        logger.debug("Locator %s: auto geocode disabled by %d featured location(s)", locator.pk, featured_count)

    return LocatorSettings(
        auto_geocode=auto_geocode,
        featured_locations=featured_count > 0,
        store_limit=config.auto_geocode_store_limit if auto_geocode else config.full_list_store_limit,
        max_distance=not auto_geocode,
        unit=unit,
        display_mode=DisplayMode.MODAL.value if locator.modal_window else DisplayMode.INLINE.value,
    )


# ---- Category search ----

def resolve_search_categories(categories: Iterable[LocationCategory]) -> FilterBag:
    """Match-any bag admitting locations in any of ``categories``."""
    bag = FilterBag()
    for category in categories:
        bag.add(CATEGORY_KEY, category.pk)
    return bag


def resolve_request_categories(locator: Locator, category_name: Optional[str] = None) -> FilterBag:
    """
    Match-any bag for one request: the user's category choice when one is
    made, the locator's own categories otherwise.
    """
    if not category_name:
        return resolve_search_categories(locator.categories.all())
    bag = resolve_search_categories(LocationCategory.objects.filter(name=category_name))
    if not bag:
        # unknown name: keep the restriction so nothing matches
        bag.add(f"{CATEGORY_KEY}__name", category_name)
    return bag


# ---- Search form ----

@dataclass
class SearchFormDescriptor:
    address_field: bool = True
    category_options: Optional[List[str]] = None
    extra_fields: List[dict] = field(default_factory=list)

    @property
    def has_category_dropdown(self) -> bool:
        return self.category_options is not None


def describe_search_form(locator: Locator) -> SearchFormDescriptor:
    """
    A locator restricted to exactly one category gets no category picker;
    otherwise every category is offered, sorted by name.
    """
    descriptor = SearchFormDescriptor()
    all_categories = LocationCategory.objects.order_by("name", "pk")
    if all_categories.exists() and locator.categories.count() != 1:
        descriptor.category_options = list(all_categories.values_list("name", flat=True))
    search_form_described.send(sender=Locator, locator=locator, descriptor=descriptor)
    return descriptor


# ---- Map widget ----

def maps_script_url(config: LocatorConfig) -> str:
    return config.maps_script_url.format(key=config.google_api_key)


def build_map_options(locator: Locator, settings: LocatorSettings, data_location: str,
                      config: Optional[LocatorConfig] = None) -> dict:
    """Options for the store locator widget."""
    options = {"autoGeocode": settings.auto_geocode, "fullMapStart": settings.full_map_start}
    if not settings.auto_geocode:
        options.update({"storeLimit": settings.store_limit, "maxDistance": settings.max_distance})
    options.update({
        "dataLocation": data_location,
        "originMarker": True,
        "modalWindow": settings.modal_window,
        "featuredLocations": settings.featured_locations,
        "slideMap": False,
        "zoomLevel": 0,
        "distanceAlert": -1,
        "formID": "Form_LocationSearch",
        "inputID": "Form_LocationSearch_address",
        "categoryID": "Form_LocationSearch_category",
        "lengthUnit": settings.unit,
    })
    map_options_built.send(sender=Locator, locator=locator, settings=settings, options=options)
    return options


# ---- Feed ----

@dataclass
class LocatorFeed:
    settings: LocatorSettings
    records: List[dict]

    def __len__(self):
        return len(self.records)


def locator_feed(locator: Locator, category: Optional[str] = None,
                 origin: Optional[Tuple[float, float]] = None, radius: Optional[float] = None,
                 required=None, excluded=None, config: Optional[LocatorConfig] = None) -> LocatorFeed:
    """
    Build the feed for one request from a single consistent read.

    With an ``origin`` the locations are ranked nearest first, trimmed to
    ``radius`` and capped at the store limit. Without one, full-list mode is
    capped at the store limit and auto-geocode mode returns every location.
    """
    config = config or get_locator_config()
    with read_snapshot():
        settings = evaluate_locator(locator, config)
        match_any = resolve_request_categories(locator, category)
        qs = get_locations(required, excluded, match_any).prefetch_related("categories")

        distances = None
        if origin is not None:
            ranked = rank_by_distance(qs, origin, settings.unit, radius)[:settings.store_limit]
            locations = [loc for loc, _ in ranked]
            distances = {loc.pk: dist for loc, dist in ranked}
        elif settings.auto_geocode:
            locations = list(qs)
        else:
            locations = list(qs[:settings.store_limit])

        records = assemble_feed(locations, distances)

    logger.info("Locator %s feed: %d location(s), auto_geocode=%s", locator.pk, len(records), settings.auto_geocode)
    return LocatorFeed(settings=settings, records=records)
