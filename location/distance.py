from __future__ import annotations

from math import radians, sin, cos, asin, sqrt
from typing import Iterable, List, Optional, Tuple

EARTH_RADIUS_KM = 6371.0
KM_PER_MILE = 1.609344

MILES = "m"
KILOMETERS = "km"


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    lat1, lng1, lat2, lng2 = map(radians, [lat1, lng1, lat2, lng2])
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlng / 2) ** 2
    c = 2 * asin(sqrt(a))
    return EARTH_RADIUS_KM * c


def to_unit(distance_km: float, unit: str) -> float:
    if unit == KILOMETERS:
        return distance_km
    if unit == MILES:
        return distance_km / KM_PER_MILE
    raise ValueError(f"Unknown distance unit: {unit!r}")


def rank_by_distance(locations: Iterable, origin: Tuple[float, float], unit: str = MILES,
                     radius: Optional[float] = None) -> List[Tuple[object, float]]:
    """
    Pair each location with its great-circle distance from ``origin`` in
    ``unit`` and sort nearest first (ties broken by id). Locations farther
    than ``radius`` are dropped when a radius is given.
    """
    origin_lat, origin_lng = origin
    ranked = []
    for loc in locations:
        dist = round(to_unit(haversine_km(origin_lat, origin_lng, float(loc.latitude), float(loc.longitude)), unit), 2)
        if radius is not None and dist > radius:
            continue
        ranked.append((loc, dist))
    ranked.sort(key=lambda pair: (pair[1], pair[0].pk))
    return ranked
