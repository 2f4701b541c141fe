"""
Purpose: Value objects for the routing capability.
What it does:
- GeoPoint (lat, lng in WGS84 degrees)
- RouteSegment / RouteResult (output of route computation)
- RouteSource: whether a result came from the backend or the local fallback
- TourResult (output of tour sequencing)

Rule: No HTTP calls, no cost math. Models only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float

    def is_valid(self) -> bool:
        return -90 <= self.lat <= 90 and -180 <= self.lng <= 180

    def as_lng_lat(self) -> str:
        """Backend coordinate format 'lng,lat'."""
        return f"{self.lng},{self.lat}"


class RouteProfile(str, Enum):
    FASTEST = "fastest"
    SHORTEST = "shortest"
    RECOMMENDED = "recommended"


class RouteSource(str, Enum):
    BACKEND = "backend"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class RouteSegment:
    distance: float  # meters
    duration: float  # seconds
    instructions: List[str] = field(default_factory=list)
    geometry: List[GeoPoint] = field(default_factory=list)


@dataclass(frozen=True)
class RouteResult:
    """
    A computed route between two points for one transport mode.

    source tells the caller which path produced it; failure carries the
    reason the backend could not be used (None for backend results).
    """

    distance_m: float
    duration_s: float
    geometry: List[GeoPoint]
    segments: List[RouteSegment]
    cost: int
    source: RouteSource = RouteSource.BACKEND
    failure: Optional[str] = None

    @property
    def distance_km(self) -> float:
        return self.distance_m / 1000

    @property
    def duration_hr(self) -> float:
        return self.duration_s / 3600

    @property
    def is_fallback(self) -> bool:
        return self.source is RouteSource.FALLBACK

    @property
    def instructions(self) -> List[str]:
        """All turn instructions, flattened across segments."""
        return [text for segment in self.segments for text in segment.instructions]


@dataclass(frozen=True)
class TourResult:
    order: List[int]
    total_distance: float  # meters
    total_duration: float  # seconds
    total_cost: int
