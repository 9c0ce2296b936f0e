from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .serializers import LocationFeedSerializer


def assemble_feed(locations: Iterable, distances: Optional[Dict[int, float]] = None) -> List[dict]:
    """
    Serialize locations into feed records, one per location and in the
    order given. ``distances`` maps location ids to their distance from the
    search origin; records without one carry ``distance: None``.
    """
    data = LocationFeedSerializer(list(locations), many=True, context={"distances": distances or {}}).data
    return [dict(record) for record in data]
