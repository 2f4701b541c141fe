"""
Purpose: Great-circle math shared by the fallback route and tour sequencing.
Pure functions, no dependencies on the rest of the package.
"""

from __future__ import annotations

import math

from .models import GeoPoint

EARTH_RADIUS_M = 6371000.0


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance in meters between two WGS84 points."""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)

    x = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(x), math.sqrt(1 - x))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive costs."""
    return int(math.floor(value + 0.5))
