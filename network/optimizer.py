"""
Purpose: Choose the best transport mode for every edge of a network.
What it does:

For each edge:
- resolve its endpoints by node name (edges with unknown endpoints are skipped)
- route the edge once per registered transport mode, concurrently
- pick the best option for the objective (cost / time / distance / balanced)
- recommend a mode change when it differs from the current mode and
  improves at least one of cost, time or distance

Also applies accepted recommendations back onto the edges and builds new
edges from routed node pairs.

Rule: No HTTP here; all route data comes from RouteProvider, which never fails.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from routing.models import RouteResult
from routing.route_service import RouteProvider
from routing.transport_modes import TransportMode

from .models import (
    Edge,
    ModeOption,
    NetworkMetrics,
    Node,
    Objective,
    OptimizationRecommendation,
    OptimizationResult,
    Savings,
)
from .policy import OptimizerPolicy, default_policy

logger = logging.getLogger(__name__)

REASONS: Dict[Objective, str] = {
    Objective.COST: "Lowest cost option",
    Objective.TIME: "Fastest delivery time",
    Objective.DISTANCE: "Shortest distance",
    Objective.BALANCED: "Best balanced option",
}


def current_metrics(edges: Sequence[Edge]) -> NetworkMetrics:
    """Unweighted totals of the network as it is now."""
    return NetworkMetrics(
        total_cost=sum(edge.cost for edge in edges),
        total_time=sum(edge.travel_time_hr for edge in edges),
        total_distance=sum(edge.distance_km for edge in edges),
    )


def balanced_scores(options: Sequence[ModeOption], policy: OptimizerPolicy) -> np.ndarray:
    """
    Weighted score per option, each metric normalized by its maximum over
    the given options. When any metric's maximum is 0 the scores are not
    comparable and every option scores 0, so the first option is kept.
    """
    costs = np.array([option.cost for option in options], dtype=float)
    times = np.array([option.time for option in options], dtype=float)
    distances = np.array([option.distance for option in options], dtype=float)

    if min(costs.max(), times.max(), distances.max()) == 0:
        return np.zeros(len(options))

    return (
        costs / costs.max() * policy.cost_weight
        + times / times.max() * policy.time_weight
        + distances / distances.max() * policy.distance_weight
    )


def select_best_option(
    options: Sequence[ModeOption],
    objective: Objective,
    policy: Optional[OptimizerPolicy] = None,
) -> ModeOption:
    """
    Best option for the objective. Ties keep the first option, so the order
    of `options` (registry order) is the tie-break priority.
    """
    if not options:
        raise ValueError("no options to select from")

    policy = policy or default_policy()
    objective = Objective(objective)

    if objective is Objective.COST:
        values = np.array([option.cost for option in options], dtype=float)
    elif objective is Objective.TIME:
        values = np.array([option.time for option in options], dtype=float)
    elif objective is Objective.DISTANCE:
        values = np.array([option.distance for option in options], dtype=float)
    else:
        values = balanced_scores(options, policy)

    # argmin returns the first index among equal minima
    return options[int(np.argmin(values))]


class NetworkOptimizer:
    def __init__(self, route_provider: RouteProvider, policy: Optional[OptimizerPolicy] = None):
        self.route_provider = route_provider
        self.policy = policy or default_policy()
        self.registry = route_provider.registry

    async def evaluate_edge(self, edge: Edge, nodes_by_name: Dict[str, Node]) -> Optional[List[ModeOption]]:
        """
        Route the edge with every registered mode. None if an endpoint is unknown.
        """
        endpoints = _resolve_endpoints(edge, nodes_by_name)
        if endpoints is None:
            logger.info("Skipping edge %s -> %s: endpoint not found", edge.from_node, edge.to_node)
            return None
        from_node, to_node = endpoints

        modes = self.registry.modes()
        routes = await asyncio.gather(
            *(self.route_provider.calculate_route(from_node.point, to_node.point, mode) for mode in modes)
        )

        return [
            ModeOption(mode=mode, cost=route.cost, time=route.duration_hr, distance=route.distance_km)
            for mode, route in zip(modes, routes)
            if route is not None
        ]

    def recommend(
        self, edge: Edge, options: Sequence[ModeOption], objective: Objective
    ) -> Optional[Tuple[OptimizationRecommendation, Savings]]:
        """
        Recommendation for one edge, with the raw savings behind it, or None
        when the best option keeps the current mode or improves nothing.
        """
        if not options:
            return None

        best = select_best_option(options, objective, self.policy)
        current_mode = edge.transport_mode or self.policy.default_mode
        if best.mode == current_mode:
            return None

        cost_saving = edge.cost - best.cost
        time_saving = edge.travel_time_hr - best.time
        distance_saving = edge.distance_km - best.distance

        if not (cost_saving > 0 or time_saving > 0 or distance_saving > 0):
            return None

        if objective is Objective.COST:
            score = cost_saving
        elif objective is Objective.TIME:
            score = time_saving
        elif objective is Objective.DISTANCE:
            score = distance_saving
        else:
            score = (
                cost_saving
                + time_saving * self.policy.time_value_per_hour
                + distance_saving * self.policy.distance_value_per_km
            )

        recommendation = OptimizationRecommendation(
            from_node=edge.from_node,
            to_node=edge.to_node,
            current_mode=current_mode,
            recommended_mode=best.mode,
            reason=REASONS[objective],
            savings_score=score,
        )
        return recommendation, Savings(cost=cost_saving, time=time_saving, distance=distance_saving)

    async def optimize_transport_modes(
        self,
        edges: Sequence[Edge],
        nodes: Sequence[Node],
        objective: Objective = Objective.BALANCED,
    ) -> OptimizationResult:
        objective = Objective(objective)
        nodes_by_name = _index_nodes(nodes)

        # edges are independent; results come back in input order
        evaluations = await asyncio.gather(*(self.evaluate_edge(edge, nodes_by_name) for edge in edges))

        recommendations: List[OptimizationRecommendation] = []
        total_cost_savings = 0.0
        total_time_savings = 0.0
        total_distance_savings = 0.0

        for edge, options in zip(edges, evaluations):
            if options is None:
                continue
            outcome = self.recommend(edge, options, objective)
            if outcome is None:
                continue

            recommendation, savings = outcome
            recommendations.append(recommendation)
            total_cost_savings += savings.cost
            total_time_savings += savings.time
            total_distance_savings += savings.distance

        return OptimizationResult(
            objective=objective,
            current=current_metrics(edges),
            savings=Savings(cost=total_cost_savings, time=total_time_savings, distance=total_distance_savings),
            recommendations=recommendations,
        )

    async def apply_optimization(
        self,
        recommendations: Sequence[OptimizationRecommendation],
        edges: Sequence[Edge],
        nodes: Sequence[Node],
    ) -> List[Edge]:
        """
        Re-route every recommended edge at its recommended mode and return the
        updated edge list. Edges without a recommendation are returned as-is.
        """
        optimized = list(edges)
        nodes_by_name = _index_nodes(nodes)

        for rec in recommendations:
            index = next(
                (i for i, edge in enumerate(optimized) if edge.from_node == rec.from_node and edge.to_node == rec.to_node),
                None,
            )
            if index is None:
                logger.info("No edge %s -> %s to apply recommendation to", rec.from_node, rec.to_node)
                continue

            edge = optimized[index]
            endpoints = _resolve_endpoints(edge, nodes_by_name)
            if endpoints is None:
                logger.info("Cannot apply recommendation to %s -> %s: endpoint not found", rec.from_node, rec.to_node)
                continue
            from_node, to_node = endpoints

            route = await self.route_provider.calculate_route(from_node.point, to_node.point, rec.recommended_mode)
            optimized[index] = _with_route(edge, route, rec.recommended_mode)

        return optimized

    async def build_edge(self, from_node: Node, to_node: Node, mode: TransportMode) -> Edge:
        """
        Route a node pair and turn the result into a new edge.
        """
        if from_node.id == to_node.id or from_node.name == to_node.name:
            raise ValueError("Start and end nodes must be different.")

        route = await self.route_provider.calculate_route(from_node.point, to_node.point, mode)
        edge = Edge.new(from_node.name, to_node.name, 0.0, 0.0, 0.0)
        return _with_route(edge, route, mode)


#----------------
# Internal helpers
#----------------

def _index_nodes(nodes: Sequence[Node]) -> Dict[str, Node]:
    by_name: Dict[str, Node] = {}
    for node in nodes:
        # first node wins on duplicate names
        by_name.setdefault(node.name, node)
    return by_name


def _resolve_endpoints(edge: Edge, nodes_by_name: Dict[str, Node]) -> Optional[Tuple[Node, Node]]:
    from_node = nodes_by_name.get(edge.from_node)
    to_node = nodes_by_name.get(edge.to_node)
    if from_node is None or to_node is None:
        return None
    return from_node, to_node


def _with_route(edge: Edge, route: RouteResult, mode: TransportMode) -> Edge:
    return replace(
        edge,
        transport_mode=mode,
        cost=route.cost,
        travel_time_hr=round(route.duration_hr, 2),
        distance_km=round(route.distance_km, 2),
        route_geometry=list(route.geometry),
        instructions=route.instructions,
    )
