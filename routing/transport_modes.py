"""
Purpose: Static table of vehicle classes (the transport mode registry).
What it does:

Holds, per transport mode:
- cost per km (currency units)
- max speed (km/h), used by the straight-line fallback and tour sequencing
- label / icon / color / description for presentation
- the routing backend profile that serves it

Rule: No logic here - just parameters. Iteration order is fixed and is the
tie-break priority used by the network optimizer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional


class TransportMode(str, Enum):
    HEAVY_GOODS_VEHICLE = "driving-hgv"
    LIGHT_COMMERCIAL_VEHICLE = "driving-car"
    BICYCLE = "cycling"
    WALKING_DELIVERY = "foot-walking"


@dataclass(frozen=True)
class TransportModeConfig:
    name: str
    icon: str
    cost_per_km: float
    max_speed_kmh: float
    description: str
    color: str
    backend_profile: str


DEFAULT_MODE = TransportMode.HEAVY_GOODS_VEHICLE

_DEFAULT_TABLE: Dict[TransportMode, TransportModeConfig] = {
    TransportMode.HEAVY_GOODS_VEHICLE: TransportModeConfig(
        name="Heavy Goods Vehicle",
        icon="🚚",
        cost_per_km=25,
        max_speed_kmh=60,
        description="Large trucks for bulk transport",
        color="#DC2626",
        backend_profile="driving-hgv",
    ),
    TransportMode.LIGHT_COMMERCIAL_VEHICLE: TransportModeConfig(
        name="Light Commercial Vehicle",
        icon="🚐",
        cost_per_km=15,
        max_speed_kmh=80,
        description="Vans and small trucks",
        color="#2563EB",
        backend_profile="driving-car",
    ),
    TransportMode.BICYCLE: TransportModeConfig(
        name="Bicycle Delivery",
        icon="🚴",
        cost_per_km=5,
        max_speed_kmh=15,
        description="Eco-friendly last mile delivery",
        color="#16A34A",
        backend_profile="cycling-regular",
    ),
    TransportMode.WALKING_DELIVERY: TransportModeConfig(
        name="Walking Delivery",
        icon="🚶",
        cost_per_km=2,
        max_speed_kmh=5,
        description="Ultra-short distance delivery",
        color="#7C3AED",
        backend_profile="foot-walking",
    ),
}


class TransportModeRegistry:
    """
    Immutable lookup table of transport modes.

    A registry is built once (optionally with a custom table to override
    costs/speeds) and never changes afterwards.
    """

    def __init__(self, table: Optional[Mapping[TransportMode, TransportModeConfig]] = None):
        source = table if table is not None else _DEFAULT_TABLE
        # keep enum declaration order regardless of the caller's mapping order
        ordered = {mode: source[mode] for mode in TransportMode if mode in source}
        if not ordered:
            raise ValueError("transport mode table must contain at least one mode")
        self._table = MappingProxyType(ordered)

    def lookup(self, mode: TransportMode) -> TransportModeConfig:
        return self._table[TransportMode(mode)]

    def modes(self) -> List[TransportMode]:
        return list(self._table.keys())

    def __contains__(self, mode: object) -> bool:
        return mode in self._table

    def __len__(self) -> int:
        return len(self._table)


DEFAULT_REGISTRY = TransportModeRegistry()


def lookup(mode: TransportMode) -> TransportModeConfig:
    """Look up a mode in the default registry."""
    return DEFAULT_REGISTRY.lookup(mode)
