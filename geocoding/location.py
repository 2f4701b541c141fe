"""
Purpose: Current-location acquisition for "use my location" flows.
What it does:

Wraps a device position source (an async callable returning a GeoPoint)
with two rules:
- a fix younger than maximum_age_s is reused without asking the device
- a fresh fix must arrive within timeout_s, otherwise there is no location
- a source that raises LocationError or OSError yields no location

describe() turns the fix into a human readable label via reverse geocoding,
falling back to the raw coordinates when the address cannot be resolved.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional, Tuple

from routing.models import GeoPoint

from .service import GeocodingService

logger = logging.getLogger(__name__)

PositionSource = Callable[[], Awaitable[GeoPoint]]


class LocationError(Exception):
    """Raised by a position source that cannot produce a fix (denied, unavailable)."""
    pass

DEFAULT_TIMEOUT_S = 10.0
DEFAULT_MAXIMUM_AGE_S = 60.0


class CurrentLocationResolver:
    def __init__(
        self,
        position_source: PositionSource,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        maximum_age_s: float = DEFAULT_MAXIMUM_AGE_S,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.position_source = position_source
        self.timeout_s = timeout_s
        self.maximum_age_s = maximum_age_s
        self.clock = clock
        self._last_fix: Optional[Tuple[GeoPoint, float]] = None

    async def resolve(self) -> Optional[GeoPoint]:
        if self._last_fix is not None:
            point, taken_at = self._last_fix
            if self.clock() - taken_at <= self.maximum_age_s:
                return point

        try:
            point = await asyncio.wait_for(self.position_source(), timeout=self.timeout_s)
        except asyncio.TimeoutError:
            logger.warning("Current location not available within %.0fs", self.timeout_s)
            return None
        except (LocationError, OSError) as exc:
            logger.warning("Failed to get current location: %s", exc)
            return None

        self._last_fix = (point, self.clock())
        return point

    async def describe(self, geocoder: GeocodingService) -> Optional[Tuple[GeoPoint, str]]:
        """
        Resolve the current location and a display label for it.
        """
        point = await self.resolve()
        if point is None:
            return None

        reverse = await geocoder.reverse_geocode(point.lat, point.lng)
        if reverse is None:
            # still usable as bare coordinates
            return point, f"{point.lat:.6f}, {point.lng:.6f}"
        return point, reverse.display_name
