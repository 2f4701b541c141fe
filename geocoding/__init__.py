"""
Geocoding subpackage.

Public API:
- GeocodingService
- GeocodeCache
- NominatimClient
- parse_input
- CurrentLocationResolver (+ LocationError)
"""

from .cache import GeocodeCache
from .input_parser import parse_input
from .location import CurrentLocationResolver, LocationError
from .models import (
    GeocodeOptions,
    GeocodeResult,
    InputKind,
    ParsedInput,
    RegionBounds,
    ReverseGeocodeResult,
    RoadAccess,
)
from .nominatim_client import GeocodingError, NominatimClient
from .service import GeocodingService

__all__ = [
    "CurrentLocationResolver",
    "LocationError",
    "GeocodeCache",
    "GeocodeOptions",
    "GeocodeResult",
    "GeocodingError",
    "GeocodingService",
    "InputKind",
    "NominatimClient",
    "ParsedInput",
    "RegionBounds",
    "ReverseGeocodeResult",
    "RoadAccess",
    "parse_input",
]
