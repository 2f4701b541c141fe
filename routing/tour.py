"""
Purpose: Order an unordered set of stops into a single visiting sequence.
What it does:

Greedy nearest-neighbour construction over straight-line distances:
- start at index 0
- repeatedly go to the closest unvisited stop (first index wins ties)
- accumulate distance, duration at the mode's max speed, and cost

Notes:
- O(n^2); fine for networks of tens of stops.
- Heuristic, not an exact TSP solver.
- Deterministic for a fixed input order.
"""

from __future__ import annotations

from typing import List, Sequence

from . import geo
from .models import GeoPoint, TourResult
from .transport_modes import DEFAULT_MODE, DEFAULT_REGISTRY, TransportMode, TransportModeRegistry


def sequence_stops(
    points: Sequence[GeoPoint],
    mode: TransportMode = DEFAULT_MODE,
    registry: TransportModeRegistry = DEFAULT_REGISTRY,
) -> TourResult:
    """
    Nearest-neighbour tour starting from points[0].

    Fewer than three points need no sequencing: the identity order is
    returned with all totals zero.
    """
    n = len(points)
    if n <= 2:
        return TourResult(order=list(range(n)), total_distance=0.0, total_duration=0.0, total_cost=0)

    mode_config = registry.lookup(mode)

    unvisited: List[int] = list(range(1, n))
    current = 0
    order = [0]
    total_distance = 0.0
    total_duration = 0.0

    while unvisited:
        nearest = unvisited[0]
        min_distance = geo.distance(points[current], points[nearest])

        for index in unvisited[1:]:
            d = geo.distance(points[current], points[index])
            if d < min_distance:
                min_distance = d
                nearest = index

        order.append(nearest)
        total_distance += min_distance
        total_duration += (min_distance / 1000) / mode_config.max_speed_kmh * 3600
        current = nearest
        unvisited.remove(nearest)

    total_cost = geo.round_half_up((total_distance / 1000) * mode_config.cost_per_km)

    return TourResult(
        order=order,
        total_distance=total_distance,
        total_duration=total_duration,
        total_cost=total_cost,
    )


async def optimize_route(
    points: Sequence[GeoPoint],
    mode: TransportMode = DEFAULT_MODE,
    registry: TransportModeRegistry = DEFAULT_REGISTRY,
) -> TourResult:
    """Async entry point; the work itself never waits on I/O."""
    return sequence_stops(points, mode, registry)
