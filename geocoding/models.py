"""
Purpose: Domain models for the Geocoding capability.
What it does:
- GeocodeResult / ReverseGeocodeResult (normalized backend answers)
- GeocodeOptions (hashable search options, part of the cache key)
- ParsedInput + InputKind (classification of free text typed by a user)
- RegionBounds (operating bounding box)
- RoadAccess (outcome of the road access check)

Rule: No HTTP calls, no caching. Models only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

Address = Dict[str, str]


@dataclass(frozen=True)
class GeocodeResult:
    lat: float
    lng: float
    display_name: str
    address: Address = field(default_factory=dict)
    place_id: str = ""
    importance: float = 0.0
    category: str = "unknown"


@dataclass(frozen=True)
class ReverseGeocodeResult:
    display_name: str
    address: Address = field(default_factory=dict)


@dataclass(frozen=True)
class GeocodeOptions:
    """
    Search options. None means "use the configured default".
    Frozen so it can be part of the cache key.
    """
    limit: Optional[int] = None
    countrycodes: Optional[str] = None
    bounded: bool = False
    viewbox: Optional[str] = None


class InputKind(str, Enum):
    COORDINATES = "coordinates"
    POSTAL_CODE = "pincode"
    ADDRESS = "address"


@dataclass(frozen=True)
class ParsedInput:
    kind: InputKind
    lat: Optional[float] = None
    lng: Optional[float] = None
    postal_code: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class RegionBounds:
    """Inclusive lat/lng bounding box."""
    south: float
    west: float
    north: float
    east: float

    @classmethod
    def from_tuple(cls, bounds: Tuple[float, float, float, float]) -> RegionBounds:
        sw_lat, sw_lng, ne_lat, ne_lng = bounds
        return cls(south=sw_lat, west=sw_lng, north=ne_lat, east=ne_lng)

    def contains(self, lat: float, lng: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lng <= self.east

    @property
    def viewbox(self) -> str:
        return f"{self.south},{self.west},{self.north},{self.east}"


@dataclass(frozen=True)
class RoadAccess:
    accessible: bool
    road_type: str
    restrictions: List[str] = field(default_factory=list)
