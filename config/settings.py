"""
Purpose: Runtime configuration for the routing and geocoding backends.
What it does:

Reads tunables from the environment (a local .env file is loaded first):

ORS_BASE_URL = https://api.openrouteservice.org/v2/directions
ORS_API_KEY = <key>
NOMINATIM_BASE_URL = https://nominatim.openstreetmap.org
REGION_BOUNDS = 12.7342,77.4272,13.1394,77.7814   (sw_lat,sw_lng,ne_lat,ne_lng)
HOURLY_SURCHARGE = 50

Rule: No logic here beyond parsing and sanity checks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

DEFAULT_ORS_BASE_URL = "https://api.openrouteservice.org/v2/directions"
DEFAULT_NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"

# Bengaluru operating region: SW lat, SW lng, NE lat, NE lng
DEFAULT_REGION_BOUNDS: Tuple[float, float, float, float] = (12.7342, 77.4272, 13.1394, 77.7814)


@dataclass(frozen=True)
class Settings:
    """
    Central configuration for the backends and the cost model.

    Keep every externally overridable constant here so the services
    can be tuned without touching routing/geocoding logic.
    """

    # --- Routing backend ---
    ors_base_url: str = DEFAULT_ORS_BASE_URL
    ors_api_key: str = ""

    # --- Geocoding backend ---
    nominatim_base_url: str = DEFAULT_NOMINATIM_BASE_URL
    user_agent: str = "Supply-Chain-Optimizer/1.0"
    country_codes: str = "in"
    locality_suffix: str = "Bengaluru Karnataka"

    # the time to wait for a backend response before giving up (seconds)
    http_timeout_s: float = 10.0

    # --- Operating region ---
    region_bounds: Tuple[float, float, float, float] = DEFAULT_REGION_BOUNDS

    # --- Cost model ---
    # operational cost per hour of travel, applied uniformly across modes
    hourly_surcharge: float = 50.0

    # --- Result limits ---
    geocode_limit: int = 5
    postal_code_limit: int = 5
    address_limit: int = 8
    place_search_limit: int = 10

    # Max entries per geocode cache map; 0 keeps everything.
    geocode_cache_size: int = 512

    @property
    def viewbox(self) -> str:
        return ",".join(str(value) for value in self.region_bounds)

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup.
        """
        sw_lat, sw_lng, ne_lat, ne_lng = self.region_bounds
        if not (-90 <= sw_lat <= ne_lat <= 90):
            raise ValueError("region_bounds latitudes must satisfy -90 <= sw_lat <= ne_lat <= 90")
        if not (-180 <= sw_lng <= ne_lng <= 180):
            raise ValueError("region_bounds longitudes must satisfy -180 <= sw_lng <= ne_lng <= 180")

        if self.http_timeout_s <= 0:
            raise ValueError("http_timeout_s must be > 0")

        if self.hourly_surcharge < 0:
            raise ValueError("hourly_surcharge must be >= 0")

        for name in ("geocode_limit", "postal_code_limit", "address_limit", "place_search_limit"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0")

        if self.geocode_cache_size < 0:
            raise ValueError("geocode_cache_size must be >= 0")


def _parse_bounds(raw: str) -> Tuple[float, float, float, float]:
    parts = [part.strip() for part in raw.split(",")]
    if len(parts) != 4:
        raise ValueError(f"REGION_BOUNDS must have 4 comma separated values, got {raw!r}")
    sw_lat, sw_lng, ne_lat, ne_lng = (float(part) for part in parts)
    return (sw_lat, sw_lng, ne_lat, ne_lng)


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value not in (None, "") else default


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Build Settings from the environment (after loading .env).
    Missing variables fall back to the defaults above.
    """
    load_dotenv(env_file)

    defaults = Settings()
    settings = Settings(
        ors_base_url=_env("ORS_BASE_URL", defaults.ors_base_url),
        ors_api_key=_env("ORS_API_KEY", defaults.ors_api_key),
        nominatim_base_url=_env("NOMINATIM_BASE_URL", defaults.nominatim_base_url),
        user_agent=_env("GEOCODER_USER_AGENT", defaults.user_agent),
        country_codes=_env("COUNTRY_CODES", defaults.country_codes),
        locality_suffix=_env("LOCALITY_SUFFIX", defaults.locality_suffix),
        http_timeout_s=float(_env("HTTP_TIMEOUT_S", str(defaults.http_timeout_s))),
        region_bounds=_parse_bounds(_env("REGION_BOUNDS", defaults.viewbox)),
        hourly_surcharge=float(_env("HOURLY_SURCHARGE", str(defaults.hourly_surcharge))),
        geocode_limit=int(_env("GEOCODE_LIMIT", str(defaults.geocode_limit))),
        postal_code_limit=int(_env("POSTAL_CODE_LIMIT", str(defaults.postal_code_limit))),
        address_limit=int(_env("ADDRESS_LIMIT", str(defaults.address_limit))),
        place_search_limit=int(_env("PLACE_SEARCH_LIMIT", str(defaults.place_search_limit))),
        geocode_cache_size=int(_env("GEOCODE_CACHE_SIZE", str(defaults.geocode_cache_size))),
    )
    settings.validate()
    return settings


def default_settings() -> Settings:
    """
    Convenience factory for the built-in defaults (ignores the environment).
    """
    s = Settings()
    s.validate()
    return s
