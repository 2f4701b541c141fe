#Purpose: Route computation for downstream use.
#Returns the "best route" information needed by:
#map display / polyline geometry
#turn-by-turn instructions (segments)
#cost of moving goods along the route for a given transport mode
#Uses the directions backend primarily; when it cannot be used, builds a
#straight-line route locally so callers never see a failure.

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from config.settings import Settings, default_settings

from . import geo
from .models import GeoPoint, RouteProfile, RouteResult, RouteSegment, RouteSource
from .ors_client import BackendRoute, ORSClient, RoutingError
from .transport_modes import DEFAULT_MODE, DEFAULT_REGISTRY, TransportMode, TransportModeRegistry

logger = logging.getLogger(__name__)


class RouteProvider:
    """
    Computes a routed path between two points for a transport mode.

    calculate_route is total: backend failures of any kind are recovered
    with a straight-line fallback and reported through RouteResult.source
    and RouteResult.failure instead of an exception.
    """

    def __init__(
        self,
        client: Optional[ORSClient] = None,
        registry: TransportModeRegistry = DEFAULT_REGISTRY,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or (client.settings if client else default_settings())
        self.client = client or ORSClient(self.settings)
        self.registry = registry
        self.hourly_surcharge = self.settings.hourly_surcharge

    async def calculate_route(
        self,
        start: GeoPoint,
        end: GeoPoint,
        mode: TransportMode = DEFAULT_MODE,
        profile: RouteProfile = RouteProfile.RECOMMENDED,
    ) -> RouteResult:
        mode_config = self.registry.lookup(mode)

        try:
            # requests is blocking; keep the event loop free while it waits
            route = await asyncio.to_thread(
                self.client.compute_route, start, end, mode_config.backend_profile, profile
            )
        except RoutingError as exc:
            logger.warning("Routing backend unavailable for %s, using fallback: %s", mode_config.name, exc)
            return self.fallback_route(start, end, mode, reason=str(exc))

        return self._from_backend(route, mode)

    def fallback_route(
        self,
        start: GeoPoint,
        end: GeoPoint,
        mode: TransportMode = DEFAULT_MODE,
        reason: Optional[str] = None,
    ) -> RouteResult:
        """
        Straight-line route built locally from haversine distance and the
        mode's max speed. No hourly surcharge is applied on this path.
        """
        mode_config = self.registry.lookup(mode)

        distance_m = geo.distance(start, end)
        distance_km = distance_m / 1000
        duration_s = distance_km / mode_config.max_speed_kmh * 3600
        cost = geo.round_half_up(distance_km * mode_config.cost_per_km)

        segment = RouteSegment(
            distance=distance_m,
            duration=duration_s,
            instructions=[f"Travel {distance_km:.1f}km from start to destination"],
            geometry=[start, end],
        )
        return RouteResult(
            distance_m=distance_m,
            duration_s=duration_s,
            geometry=[start, end],
            segments=[segment],
            cost=cost,
            source=RouteSource.FALLBACK,
            failure=reason,
        )

    def _from_backend(self, route: BackendRoute, mode: TransportMode) -> RouteResult:
        mode_config = self.registry.lookup(mode)

        distance_km = route.distance_m / 1000
        duration_hr = route.duration_s / 3600
        base_cost = distance_km * mode_config.cost_per_km
        time_cost = duration_hr * self.hourly_surcharge

        return RouteResult(
            distance_m=route.distance_m,
            duration_s=route.duration_s,
            geometry=route.geometry,
            segments=route.segments,
            cost=geo.round_half_up(base_cost + time_cost),
            source=RouteSource.BACKEND,
        )
