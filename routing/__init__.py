#Marks routing as a package.
#Re-exports the public APIs (RouteProvider, optimize_route, the transport mode
#registry) so other modules import from routing without knowing internal file names.
#No business logic.

from .geo import distance
from .models import GeoPoint, RouteProfile, RouteResult, RouteSegment, RouteSource, TourResult
from .ors_client import ORSClient, RoutingError
from .route_service import RouteProvider
from .tour import optimize_route, sequence_stops
from .transport_modes import (
    DEFAULT_MODE,
    DEFAULT_REGISTRY,
    TransportMode,
    TransportModeConfig,
    TransportModeRegistry,
    lookup,
)

__all__ = [
    "DEFAULT_MODE",
    "DEFAULT_REGISTRY",
    "GeoPoint",
    "ORSClient",
    "RouteProfile",
    "RouteProvider",
    "RouteResult",
    "RouteSegment",
    "RouteSource",
    "RoutingError",
    "TourResult",
    "TransportMode",
    "TransportModeConfig",
    "TransportModeRegistry",
    "distance",
    "lookup",
    "optimize_route",
    "sequence_stops",
]
