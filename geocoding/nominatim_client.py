#Purpose: The geocoding backend "adapter/client" (Nominatim search + reverse).
#Sole responsibility: talk to the backend via HTTP and return normalized outputs.
#Encapsulates backend-specific details:
#query parameter naming (q, lat/lon, viewbox, bounded, accept-language)
#User-Agent header
#timeouts and error handling
#parsing + validating JSON into GeocodeResult / ReverseGeocodeResult
#It should not contain caching or region filtering.

from __future__ import annotations

import math
import threading
from typing import Any, Dict, List, Optional

import requests

from config.settings import Settings, default_settings

from .models import GeocodeResult, ReverseGeocodeResult


class GeocodingError(Exception):
    """Custom exception for geocoding client errors."""
    pass


class NominatimClient:
    """
    Geocoding adapter / client

    Sole responsibility:
    - Talk to the search and reverse endpoints via HTTP
    - Return parsed results or raise GeocodingError
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[Any] = None):
        self.settings = settings or default_settings()
        self.base_url = self.settings.nominatim_base_url.rstrip("/")
        self.timeout = self.settings.http_timeout_s
        self.headers = {"User-Agent": self.settings.user_agent}
        self._session = session
        self._local = threading.local()

    def search(
        self,
        query: str,
        *,
        limit: int,
        countrycodes: str,
        bounded: bool,
        viewbox: str,
    ) -> List[GeocodeResult]:
        """
        Calls GET {base_url}/search. Returns results in backend order.
        """
        params = {
            "q": query,
            "format": "json",
            "addressdetails": "1",
            "limit": str(limit),
            "countrycodes": countrycodes,
            "bounded": "1" if bounded else "0",
            "viewbox": viewbox,
            "accept-language": "en",
        }
        data = self._get("search", params)

        if not isinstance(data, list):
            raise GeocodingError("search response is not a list")
        return [_parse_place(item) for item in data]

    def reverse(self, lat: float, lng: float) -> ReverseGeocodeResult:
        """
        Calls GET {base_url}/reverse for a single coordinate.
        """
        params = {
            "lat": str(lat),
            "lon": str(lng),
            "format": "json",
            "addressdetails": "1",
            "accept-language": "en",
        }
        data = self._get("reverse", params)

        if not isinstance(data, dict) or "error" in data:
            raise GeocodingError("reverse geocoding found no place")
        display_name = data.get("display_name")
        if not isinstance(display_name, str):
            raise GeocodingError("reverse response has no display_name")

        return ReverseGeocodeResult(display_name=display_name, address=_parse_address(data.get("address")))

    def session_for_thread(self) -> Any:
        # one requests.Session per asyncio.to_thread worker unless injected
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def _get(self, endpoint: str, params: Dict[str, str]) -> Any:
        try:
            response = self.session_for_thread().get(
                f"{self.base_url}/{endpoint}",
                params=params,
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise GeocodingError(f"Geocoding request failed: {exc}") from exc

        if not response.ok:
            raise GeocodingError(f"Geocoding failed: {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            raise GeocodingError("Geocoding backend returned invalid JSON") from exc


def _parse_address(raw: Any) -> Dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {str(key): str(value) for key, value in raw.items()}


def _parse_place(item: Any) -> GeocodeResult:
    if not isinstance(item, dict):
        raise GeocodingError("search result is not an object")
    try:
        # Nominatim sends lat/lon as strings
        lat = float(item["lat"])
        lng = float(item["lon"])
    except (KeyError, TypeError, ValueError) as exc:
        raise GeocodingError("search result has no usable lat/lon") from exc
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise GeocodingError("search result lat/lon is not finite")

    return GeocodeResult(
        lat=lat,
        lng=lng,
        display_name=str(item.get("display_name", "")),
        address=_parse_address(item.get("address")),
        place_id=str(item.get("place_id", "")),
        importance=_importance(item.get("importance")),
        category=str(item.get("type") or "unknown"),
    )


def _importance(raw: Any) -> float:
    # ranking hint only; anything unusable ranks lowest
    if isinstance(raw, bool):
        return 0.0
    try:
        value = float(raw or 0)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0
