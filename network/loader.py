"""
Purpose: Load a network (nodes + edges) from CSV files.
What it does:

nodes.csv columns: name, type, x (longitude), y (latitude),
                   capacity (optional), perishability_hours (optional)
edges.csv columns: from, to, distance_km, travel_time_hr, cost

Validation (row numbers count the header as row 1):
- required fields present
- node type is source / intermediate / customer
- coordinates numeric
- edge endpoints name known nodes
- distance, travel time and cost numeric and > 0

Rule: This is the only place edge invariants are enforced; the optimizer
trusts its input.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import pandas as pd

from .models import Edge, Node, NodeType


class NetworkDataError(ValueError):
    """A row of an uploaded network file failed validation."""
    pass


NODE_FIELDS = ("name", "type", "x", "y")
EDGE_FIELDS = ("from", "to", "distance_km", "travel_time_hr", "cost")


def read_table(path) -> pd.DataFrame:
    """
    Read a CSV as strings with normalized (trimmed, lower-case) headers.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    df.columns = [str(column).strip().lower() for column in df.columns]
    return df


def nodes_from_frame(df: pd.DataFrame) -> List[Node]:
    nodes: List[Node] = []

    for i, row in enumerate(df.to_dict("records")):
        row_number = i + 2
        if any(not _cell(row, name) for name in NODE_FIELDS):
            raise NetworkDataError(f"Row {row_number}: Missing required fields (name, type, x, y)")

        node_type = _cell(row, "type")
        if node_type not in {t.value for t in NodeType}:
            raise NetworkDataError(
                f"Row {row_number}: Invalid type '{node_type}'. Must be 'source', 'intermediate', or 'customer'"
            )

        lng = _number(_cell(row, "x"))
        lat = _number(_cell(row, "y"))
        if lng is None or lat is None:
            raise NetworkDataError(f"Row {row_number}: Invalid coordinates")

        capacity = _number(_cell(row, "capacity"))
        perishability = _number(_cell(row, "perishability_hours") or _cell(row, "perishabilityhours"))

        nodes.append(
            Node(
                id=f"node-{i}",
                name=_cell(row, "name"),
                type=NodeType(node_type),
                lat=lat,
                lng=lng,
                capacity=int(capacity) if capacity is not None else None,
                perishability_hours=perishability,
            )
        )

    return nodes


def edges_from_frame(df: pd.DataFrame, node_names: Sequence[str]) -> List[Edge]:
    known = set(node_names)
    edges: List[Edge] = []

    for i, row in enumerate(df.to_dict("records")):
        row_number = i + 2
        if any(not _cell(row, name) for name in ("from", "to")) or any(
            not (_cell(row, name) or _cell(row, name.replace("_", ""))) for name in EDGE_FIELDS[2:]
        ):
            raise NetworkDataError(
                f"Row {row_number}: Missing required fields (from, to, distance_km, travel_time_hr, cost)"
            )

        from_name = _cell(row, "from")
        to_name = _cell(row, "to")
        if from_name not in known:
            raise NetworkDataError(f"Row {row_number}: From node '{from_name}' not found in nodes data")
        if to_name not in known:
            raise NetworkDataError(f"Row {row_number}: To node '{to_name}' not found in nodes data")

        distance_km = _number(_cell(row, "distance_km") or _cell(row, "distancekm"))
        travel_time_hr = _number(_cell(row, "travel_time_hr") or _cell(row, "traveltimehr"))
        cost = _number(_cell(row, "cost"))

        if distance_km is None or distance_km <= 0:
            raise NetworkDataError(f"Row {row_number}: Invalid distance")
        if travel_time_hr is None or travel_time_hr <= 0:
            raise NetworkDataError(f"Row {row_number}: Invalid travel time")
        if cost is None or cost <= 0:
            raise NetworkDataError(f"Row {row_number}: Invalid cost")

        edges.append(
            Edge(
                id=f"edge-{i}",
                from_node=from_name,
                to_node=to_name,
                distance_km=distance_km,
                travel_time_hr=travel_time_hr,
                cost=cost,
            )
        )

    return edges


def load_nodes(path) -> List[Node]:
    return nodes_from_frame(read_table(path))


def load_edges(path, node_names: Sequence[str]) -> List[Edge]:
    return edges_from_frame(read_table(path), node_names)


def load_network(nodes_path, edges_path) -> Tuple[List[Node], List[Edge]]:
    nodes = load_nodes(nodes_path)
    edges = load_edges(edges_path, [node.name for node in nodes])
    return nodes, edges


#----------------
# Internal helpers
#----------------

def _cell(row: dict, name: str) -> str:
    value = row.get(name, "")
    return str(value).strip() if value is not None else ""


def _number(raw: str) -> Optional[float]:
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    # NaN never compares, reject it like a parse failure
    if value != value:
        return None
    return value
