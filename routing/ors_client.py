#Purpose: The routing backend "adapter/client" (OpenRouteService directions API).
#Sole responsibility: talk to the backend via HTTP and return normalized outputs.
#Encapsulates backend-specific details:
#coordinate formatting (lng,lat)
#URL construction (/{profile})
#timeouts and error handling
#parsing + validating the response JSON into the internal shape
#It should not contain cost rules or fallback policy.

from __future__ import annotations

import math
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from config.settings import Settings, default_settings

from .models import GeoPoint, RouteProfile, RouteSegment


class RoutingError(Exception):
    """Base class for routing backend errors."""
    pass


class RoutingBackendError(RoutingError):
    """Network error, timeout or non-success HTTP status."""
    pass


class RoutingEmptyResult(RoutingError):
    """Backend answered but returned no candidate routes."""
    pass


class MalformedRouteResponse(RoutingError):
    """Backend answered with a payload missing required fields."""
    pass


@dataclass(frozen=True)
class BackendRoute:
    """
    First candidate route of a backend response, already validated.
    """
    distance_m: float
    duration_s: float
    geometry: List[GeoPoint]
    segments: List[RouteSegment]


class ORSClient:
    """
    Routing backend adapter / client

    Sole responsibility:
    - Talk to the directions API via HTTP
    - Convert internal GeoPoint -> backend 'lng,lat'
    - Return a validated BackendRoute or raise a RoutingError
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[Any] = None):
        self.settings = settings or default_settings()
        self.base_url = self.settings.ors_base_url.rstrip("/")
        self.api_key = self.settings.ors_api_key
        self.timeout = self.settings.http_timeout_s
        # anything with requests.Session's get(url, params=, timeout=) works
        self._session = session
        self._local = threading.local()

    def session_for_thread(self) -> Any:
        """
        The injected session, or one requests.Session per worker thread.
        Requests run concurrently in asyncio.to_thread and Session is not
        documented as thread-safe.
        """
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def build_params(self, start: GeoPoint, end: GeoPoint, profile: RouteProfile) -> Dict[str, str]:
        return {
            "api_key": self.api_key,
            "start": start.as_lng_lat(),
            "end": end.as_lng_lat(),
            "format": "json",
            "geometry": "true",
            "instructions": "true",
            "preference": RouteProfile(profile).value,
        }

    def compute_route(
        self,
        start: GeoPoint,
        end: GeoPoint,
        backend_profile: str,
        profile: RouteProfile = RouteProfile.RECOMMENDED,
    ) -> BackendRoute:
        """
        Calls GET {base_url}/{backend_profile} and returns the first candidate route.

        Raises:
            RoutingBackendError: transport failure or non-success status
            RoutingEmptyResult: zero candidate routes
            MalformedRouteResponse: required fields missing / not numeric
        """
        url = f"{self.base_url}/{backend_profile}"

        try:
            response = self.session_for_thread().get(
                url,
                params=self.build_params(start, end, profile),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise RoutingBackendError(f"Routing request failed: {exc}") from exc

        if not response.ok:
            raise RoutingBackendError(f"Routing API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedRouteResponse("Routing API returned invalid JSON") from exc

        return parse_route_response(data)


def parse_route_response(data: Any) -> BackendRoute:
    """
    Validate a directions payload and convert its first route.

    Expected shape:
        {routes: [{summary: {distance, duration},
                   geometry: {coordinates: [[lng, lat], ...]},
                   segments: [{distance, duration,
                               steps: [{instruction, way_points: [i, j]}]}]}]}
    """
    if not isinstance(data, dict):
        raise MalformedRouteResponse("response is not a JSON object")

    routes = data.get("routes")
    if not routes:
        raise RoutingEmptyResult("No route found")
    if not isinstance(routes, list):
        raise MalformedRouteResponse("'routes' is not a list")

    route = routes[0]  # take the first candidate
    if not isinstance(route, dict):
        raise MalformedRouteResponse("route entry is not an object")

    summary = route.get("summary")
    if not isinstance(summary, dict):
        raise MalformedRouteResponse("route has no summary")
    distance_m = _number(summary, "distance")
    duration_s = _number(summary, "duration")
    if distance_m < 0 or duration_s < 0:
        raise MalformedRouteResponse("route summary has negative distance or duration")

    geometry = _parse_geometry(route.get("geometry"))
    segments = [_parse_segment(segment, geometry) for segment in _list(route, "segments")]

    return BackendRoute(
        distance_m=distance_m,
        duration_s=duration_s,
        geometry=geometry,
        segments=segments,
    )


#----------------
# Internal helpers
#----------------

def _number(payload: Dict[str, Any], key: str) -> float:
    value = payload.get(key)
    # bool is an int subclass; a flag is never a distance
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedRouteResponse(f"'{key}' missing or not numeric")
    # json accepts bare NaN and Infinity tokens
    if not math.isfinite(value):
        raise MalformedRouteResponse(f"'{key}' is not finite")
    return float(value)


def _list(payload: Dict[str, Any], key: str) -> List[Any]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedRouteResponse(f"'{key}' is not a list")
    return value


def _parse_geometry(raw: Any) -> List[GeoPoint]:
    if not isinstance(raw, dict) or not isinstance(raw.get("coordinates"), list):
        raise MalformedRouteResponse("route geometry has no coordinate list")

    points: List[GeoPoint] = []
    for coord in raw["coordinates"]:
        if not isinstance(coord, (list, tuple)) or len(coord) < 2:
            raise MalformedRouteResponse("geometry coordinate is not a [lng, lat] pair")
        lng, lat = coord[0], coord[1]
        if not isinstance(lng, (int, float)) or not isinstance(lat, (int, float)):
            raise MalformedRouteResponse("geometry coordinate is not numeric")
        if not (math.isfinite(lng) and math.isfinite(lat)):
            raise MalformedRouteResponse("geometry coordinate is not finite")
        points.append(GeoPoint(lat=float(lat), lng=float(lng)))
    return points


def _parse_segment(raw: Any, geometry: List[GeoPoint]) -> RouteSegment:
    if not isinstance(raw, dict):
        raise MalformedRouteResponse("segment is not an object")

    instructions: List[str] = []
    points: List[GeoPoint] = []
    for step in _list(raw, "steps"):
        if not isinstance(step, dict):
            raise MalformedRouteResponse("step is not an object")
        instructions.append(str(step.get("instruction", "")))

        # each step references the geometry points it spans
        for index in _list(step, "way_points"):
            if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(geometry):
                raise MalformedRouteResponse(f"way_point index {index!r} outside geometry")
            points.append(geometry[index])

    return RouteSegment(
        distance=_number(raw, "distance"),
        duration=_number(raw, "duration"),
        instructions=instructions,
        geometry=points,
    )
