"""
Purpose: Memoized address resolution for the operating region.
What it does:

- geocode(query, options): forward search, memoized by (query, options),
  results restricted to the operating region
- reverse_geocode(lat, lng): memoized by coordinate rounded to 6 decimals
- parse_input / is_within_region: synchronous classification helpers
- get_suggestions(text): autocomplete dispatch by input kind
- search_places / validate_road_access: convenience lookups

Failure policy: backend failures never reach the caller. geocode returns []
and reverse_geocode returns None; neither outcome is cached.

The caches are plain objects handed in by whoever composes the application
(one GeocodingService per process is typical, not enforced).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

from config.settings import Settings, default_settings

from .cache import GeocodeCache
from .input_parser import parse_input
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

logger = logging.getLogger(__name__)

ForwardKey = Tuple[str, GeocodeOptions]
ReverseKey = Tuple[float, float]

# Extra search terms per place category.
PLACE_CATEGORY_QUERIES: Dict[str, str] = {
    "industrial": "{query} industrial area OR manufacturing OR factory",
    "commercial": "{query} commercial complex OR business park",
    "retail": "{query} mall OR market OR shopping",
    "warehouse": "{query} warehouse OR godown OR storage",
    "fuel_station": "{query} petrol pump OR fuel station OR gas station",
}

MIN_SUGGESTION_LENGTH = 3


class GeocodingService:
    def __init__(
        self,
        client: Optional[NominatimClient] = None,
        settings: Optional[Settings] = None,
        forward_cache: Optional[GeocodeCache[List[GeocodeResult]]] = None,
        reverse_cache: Optional[GeocodeCache[ReverseGeocodeResult]] = None,
    ):
        self.settings = settings or (client.settings if client else default_settings())
        self.client = client or NominatimClient(self.settings)
        self.region = RegionBounds.from_tuple(self.settings.region_bounds)
        self.forward_cache = (
            forward_cache if forward_cache is not None else GeocodeCache(self.settings.geocode_cache_size)
        )
        self.reverse_cache = (
            reverse_cache if reverse_cache is not None else GeocodeCache(self.settings.geocode_cache_size)
        )

    async def geocode(self, query: str, options: Optional[GeocodeOptions] = None) -> List[GeocodeResult]:
        options = options or GeocodeOptions()
        key: ForwardKey = (query, options)

        cached = self.forward_cache.get(key)
        if cached is not None:
            logger.debug("geocode cache hit for %r", query)
            return list(cached)

        try:
            results = await asyncio.to_thread(
                self.client.search,
                query,
                limit=options.limit or self.settings.geocode_limit,
                countrycodes=options.countrycodes or self.settings.country_codes,
                bounded=options.bounded,
                viewbox=options.viewbox or self.region.viewbox,
            )
        except GeocodingError as exc:
            logger.warning("Geocoding error for %r: %s", query, exc)
            return []

        # the backend may still return out-of-region matches
        in_region = [result for result in results if self.is_within_region(result.lat, result.lng)]

        self.forward_cache.put(key, in_region)
        return list(in_region)

    async def reverse_geocode(self, lat: float, lng: float) -> Optional[ReverseGeocodeResult]:
        key: ReverseKey = (round(lat, 6), round(lng, 6))

        cached = self.reverse_cache.get(key)
        if cached is not None:
            logger.debug("reverse geocode cache hit for %s", key)
            return cached

        try:
            result = await asyncio.to_thread(self.client.reverse, lat, lng)
        except GeocodingError as exc:
            logger.warning("Reverse geocoding error for (%s, %s): %s", lat, lng, exc)
            return None

        self.reverse_cache.put(key, result)
        return result

    def parse_input(self, text: str) -> ParsedInput:
        return parse_input(text)

    def is_within_region(self, lat: float, lng: float) -> bool:
        return self.region.contains(lat, lng)

    async def get_suggestions(self, text: str) -> List[GeocodeResult]:
        """
        Autocomplete suggestions for partially typed input.
        """
        if len(text) < MIN_SUGGESTION_LENGTH:
            return []

        parsed = self.parse_input(text)

        if parsed.kind is InputKind.COORDINATES:
            reverse = await self.reverse_geocode(parsed.lat, parsed.lng)
            if reverse is None:
                return []
            return [
                GeocodeResult(
                    lat=parsed.lat,
                    lng=parsed.lng,
                    display_name=reverse.display_name,
                    address=reverse.address,
                    place_id="coordinates",
                    importance=1.0,
                    category="coordinates",
                )
            ]

        if parsed.kind is InputKind.POSTAL_CODE:
            return await self.geocode(
                f"{parsed.postal_code} {self.settings.locality_suffix}",
                GeocodeOptions(limit=self.settings.postal_code_limit),
            )

        return await self.geocode(text, GeocodeOptions(limit=self.settings.address_limit))

    async def search_places(self, query: str, category: str) -> List[GeocodeResult]:
        """
        Search for a kind of place (industrial, commercial, retail, warehouse,
        fuel_station) near the query text.
        """
        template = PLACE_CATEGORY_QUERIES[category]
        return await self.geocode(
            template.format(query=query),
            GeocodeOptions(limit=self.settings.place_search_limit),
        )

    def validate_road_access(self, lat: float, lng: float) -> RoadAccess:
        # Region membership only; no road-type lookup yet.
        if self.is_within_region(lat, lng):
            return RoadAccess(accessible=True, road_type="accessible", restrictions=[])
        return RoadAccess(
            accessible=False,
            road_type="out_of_bounds",
            restrictions=["Outside operating region limits"],
        )
