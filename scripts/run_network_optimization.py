import argparse
import asyncio
import csv
import logging
import os
import time

from config.settings import load_settings
from geocoding.service import GeocodingService
from network.demo import demo_network
from network.loader import load_network
from network.models import Objective
from network.optimizer import NetworkOptimizer
from routing.route_service import RouteProvider
from routing.tour import optimize_route
from routing.transport_modes import lookup


async def run_optimization(nodes_path=None, edges_path=None, objective="balanced", apply=False):
    print("=== STARTING NETWORK TRANSPORT MODE OPTIMIZATION ===")

    # 1. Load Data
    if nodes_path and edges_path:
        nodes, edges = load_network(nodes_path, edges_path)
    else:
        nodes, edges = demo_network()
    print(f"Loaded {len(nodes)} Nodes and {len(edges)} Edges.\n")

    # 2. Configure System
    settings = load_settings()
    geocoder = GeocodingService(settings=settings)
    route_provider = RouteProvider(settings=settings)
    optimizer = NetworkOptimizer(route_provider)

    outside = [node.name for node in nodes if not geocoder.is_within_region(node.lat, node.lng)]
    if outside:
        print(f"[WARN] {len(outside)} node(s) outside the operating region: {outside}\n")

    # 3. Step 1: Sequence a single visiting tour over all nodes
    tour = await optimize_route([node.point for node in nodes])
    print("--- Nearest Neighbour Tour (Heavy Goods Vehicle) ---")
    print("  " + " -> ".join(nodes[i].name for i in tour.order))
    print(f"  {tour.total_distance / 1000:.1f}km, {tour.total_duration / 3600:.2f}h, cost {tour.total_cost}\n")

    # 4. Step 2: Evaluate every transport mode on every edge
    print(f"Evaluating transport modes (objective: {objective})...")
    start_time = time.time()
    result = await optimizer.optimize_transport_modes(edges, nodes, Objective(objective))
    print(f"Optimizer produced {len(result.recommendations)} recommendation(s) in {time.time() - start_time:.2f}s.\n")

    print("--- Recommendations ---")
    for rec in result.recommendations:
        current = lookup(rec.current_mode)
        recommended = lookup(rec.recommended_mode)
        print(
            f"{rec.from_node} -> {rec.to_node}: "
            f"{current.icon} {current.name} => {recommended.icon} {recommended.name} "
            f"({rec.reason}, savings {rec.savings_score:.2f})"
        )

    print("\n--- Network Totals ---")
    print(f"Cost: {result.current.total_cost:.0f} -> {result.total_cost:.0f} (saves {result.savings.cost:.0f})")
    print(f"Time: {result.current.total_time:.2f}h -> {result.total_time:.2f}h (saves {result.savings.time:.2f}h)")
    print(
        f"Distance: {result.current.total_distance:.1f}km -> {result.total_distance:.1f}km "
        f"(saves {result.savings.distance:.1f}km)"
    )

    # Save next to the scripts folder
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    output_path = os.path.join(base_dir, "optimization_results.csv")

    with open(output_path, "w", newline="") as file:
        writer = csv.writer(file)
        writer.writerow(["from", "to", "current_mode", "recommended_mode", "reason", "savings_score"])
        for rec in result.recommendations:
            writer.writerow([
                rec.from_node,
                rec.to_node,
                rec.current_mode.value,
                rec.recommended_mode.value,
                rec.reason,
                round(rec.savings_score, 2),
            ])

    if apply and result.recommendations:
        # 5. Step 3: Re-route recommended edges at their new mode
        updated = await optimizer.apply_optimization(result.recommendations, edges, nodes)
        changed = sum(1 for before, after in zip(edges, updated) if before is not after)
        print(f"\nApplied recommendations to {changed} edge(s).")

    print("\n=== OPTIMIZATION COMPLETE ===")
    print(f"Results written to '{output_path}'.")


def main():
    parser = argparse.ArgumentParser(description="Recommend transport modes for a logistics network.")
    parser.add_argument("--nodes", help="nodes CSV (name,type,x,y,capacity,perishability_hours)")
    parser.add_argument("--edges", help="edges CSV (from,to,distance_km,travel_time_hr,cost)")
    parser.add_argument("--objective", default="balanced", choices=[o.value for o in Objective])
    parser.add_argument("--apply", action="store_true", help="re-route edges with the recommended modes")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(run_optimization(args.nodes, args.edges, args.objective, args.apply))


if __name__ == "__main__":
    main()
