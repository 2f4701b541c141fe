"""
Purpose: Domain models for the Network capability.
What it does:
- Defines core data structures:
- Node (id, name, type, lat/lng, optional capacity / perishability)
- Edge (directed connection between two node names with cost/time/distance)
- OptimizationRecommendation (per-edge mode change proposal)
- NetworkMetrics / Savings / OptimizationResult (aggregates)

Defines enums/constants:
- NodeType = source | intermediate | customer
- Objective = cost | time | distance | balanced

Rule: No routing calls, no optimization logic. Models only.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from routing.models import GeoPoint
from routing.transport_modes import TransportMode


class NodeType(str, Enum):
    SOURCE = "source"
    INTERMEDIATE = "intermediate"
    CUSTOMER = "customer"


class Objective(str, Enum):
    COST = "cost"
    TIME = "time"
    DISTANCE = "distance"
    BALANCED = "balanced"


@dataclass(frozen=True)
class Node:
    """
    A fixed supply-chain location. Edges refer to nodes by name.
    """
    id: str
    name: str
    type: NodeType
    lat: float
    lng: float
    capacity: Optional[int] = None
    perishability_hours: Optional[float] = None

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng)


@dataclass(frozen=True)
class Edge:
    """
    Directed transport connection. transport_mode None means the network
    default (heavy goods vehicle).
    """
    id: str
    from_node: str
    to_node: str
    distance_km: float
    travel_time_hr: float
    cost: float
    transport_mode: Optional[TransportMode] = None
    route_geometry: Optional[List[GeoPoint]] = None
    instructions: Optional[List[str]] = None

    @staticmethod
    def new(from_node: str, to_node: str, distance_km: float, travel_time_hr: float, cost: float, **extra) -> Edge:
        return Edge(
            id=f"edge-{uuid.uuid4().hex[:12]}",
            from_node=from_node,
            to_node=to_node,
            distance_km=distance_km,
            travel_time_hr=travel_time_hr,
            cost=cost,
            **extra,
        )


@dataclass(frozen=True)
class ModeOption:
    """
    One transport mode evaluated on one edge (units: currency, hours, km).
    """
    mode: TransportMode
    cost: float
    time: float
    distance: float


@dataclass(frozen=True)
class OptimizationRecommendation:
    from_node: str
    to_node: str
    current_mode: TransportMode
    recommended_mode: TransportMode
    reason: str
    savings_score: float


@dataclass(frozen=True)
class NetworkMetrics:
    total_cost: float = 0.0
    total_time: float = 0.0  # hours
    total_distance: float = 0.0  # km


@dataclass(frozen=True)
class Savings:
    cost: float = 0.0
    time: float = 0.0
    distance: float = 0.0


@dataclass(frozen=True)
class OptimizationResult:
    """
    Output of a network optimization run.
    total_* are the current network totals minus the savings.
    """
    objective: Objective
    current: NetworkMetrics
    savings: Savings
    recommendations: List[OptimizationRecommendation] = field(default_factory=list)

    @property
    def total_cost(self) -> float:
        return self.current.total_cost - self.savings.cost

    @property
    def total_time(self) -> float:
        return self.current.total_time - self.savings.time

    @property
    def total_distance(self) -> float:
        return self.current.total_distance - self.savings.distance
