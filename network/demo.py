"""
Demonstration network: food supply around Bengaluru.
"""

from __future__ import annotations

from typing import List, Tuple

from .models import Edge, Node, NodeType

DEMO_NODES: List[Node] = [
    Node("demo-src-1", "Electronics City Food Processing", NodeType.SOURCE, 12.8456, 77.6641, capacity=5000),
    Node("demo-src-2", "Peenya Industrial Area", NodeType.SOURCE, 13.0281, 77.5176, capacity=3000),
    Node("demo-hub-1", "Whitefield Distribution Hub", NodeType.INTERMEDIATE, 12.9698, 77.7499, capacity=2000),
    Node("demo-hub-2", "Hebbal Cold Storage", NodeType.INTERMEDIATE, 13.0358, 77.5972, capacity=1500),
    Node("demo-cus-1", "Forum Mall Koramangala", NodeType.CUSTOMER, 12.9349, 77.6197, perishability_hours=48),
    Node("demo-cus-2", "Brigade Road Commercial Street", NodeType.CUSTOMER, 12.9716, 77.6094, perishability_hours=24),
    Node("demo-cus-3", "Indiranagar Market", NodeType.CUSTOMER, 12.9719, 77.6412, perishability_hours=36),
]

DEMO_EDGES: List[Edge] = [
    Edge("demo-edge-1", "Electronics City Food Processing", "Whitefield Distribution Hub", 28.5, 1.2, 850),
    Edge("demo-edge-2", "Peenya Industrial Area", "Hebbal Cold Storage", 12.3, 0.8, 450),
    Edge("demo-edge-3", "Whitefield Distribution Hub", "Forum Mall Koramangala", 15.8, 0.9, 520),
    Edge("demo-edge-4", "Hebbal Cold Storage", "Brigade Road Commercial Street", 18.2, 1.1, 680),
    Edge("demo-edge-5", "Hebbal Cold Storage", "Indiranagar Market", 14.7, 0.7, 480),
]


def demo_network() -> Tuple[List[Node], List[Edge]]:
    return list(DEMO_NODES), list(DEMO_EDGES)
