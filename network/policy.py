"""
Purpose: Central configuration for transport mode optimization.
What it does:

Stores all tunable weights:

BALANCED_COST_WEIGHT = 0.4
BALANCED_TIME_WEIGHT = 0.3
BALANCED_DISTANCE_WEIGHT = 0.3

TIME_VALUE_PER_HOUR = 50      (matches the routing hourly surcharge)
DISTANCE_VALUE_PER_KM = 10

Rule: No logic here - just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass

from routing.transport_modes import DEFAULT_MODE, TransportMode


@dataclass(frozen=True)
class OptimizerPolicy:
    """
    Central configuration for the network optimizer.

    Notes:
    - balanced score = w_cost * cost/max_cost + w_time * time/max_time
                       + w_distance * distance/max_distance
      with maxima taken over the options of a single edge.
    - the balanced savings score converts time and distance savings into
      currency: cost + time * time_value_per_hour + distance * distance_value_per_km
    """

    # --- Balanced objective weights ---
    cost_weight: float = 0.4
    time_weight: float = 0.3
    distance_weight: float = 0.3

    # --- Currency equivalents for the balanced savings score ---
    time_value_per_hour: float = 50.0
    distance_value_per_km: float = 10.0

    # Mode assumed for edges that do not carry one.
    default_mode: TransportMode = DEFAULT_MODE

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        for name in ("cost_weight", "time_weight", "distance_weight"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")

        if self.cost_weight + self.time_weight + self.distance_weight <= 0:
            raise ValueError("at least one balanced weight must be > 0")

        if self.time_value_per_hour < 0 or self.distance_value_per_km < 0:
            raise ValueError("currency equivalents must be >= 0")


def default_policy() -> OptimizerPolicy:
    """
    Convenience factory for the default policy.
    """
    p = OptimizerPolicy()
    p.validate()
    return p
