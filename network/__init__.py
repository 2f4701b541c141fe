"""
Network subpackage.

Public API:
- NetworkOptimizer
- OptimizerPolicy / default_policy
- load_network
- demo_network
"""

from .demo import demo_network
from .loader import NetworkDataError, load_edges, load_network, load_nodes
from .models import (
    Edge,
    ModeOption,
    NetworkMetrics,
    Node,
    NodeType,
    Objective,
    OptimizationRecommendation,
    OptimizationResult,
    Savings,
)
from .optimizer import NetworkOptimizer, current_metrics, select_best_option
from .policy import OptimizerPolicy, default_policy

__all__ = [
    "Edge",
    "ModeOption",
    "NetworkDataError",
    "NetworkMetrics",
    "NetworkOptimizer",
    "Node",
    "NodeType",
    "Objective",
    "OptimizationRecommendation",
    "OptimizationResult",
    "OptimizerPolicy",
    "Savings",
    "current_metrics",
    "default_policy",
    "demo_network",
    "load_edges",
    "load_network",
    "load_nodes",
    "select_best_option",
]
