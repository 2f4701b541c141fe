import numpy as np
import pandas as pd

# Center of the default operating region (Bengaluru)
CENTER_LAT = 12.9716
CENTER_LON = 77.5946


def generate_mock_network(
    num_sources=3,
    num_hubs=4,
    num_customers=12,
    nodes_file="nodes_generated.csv",
    edges_file="edges_generated.csv",
    seed=None,
):
    """
    Generates a layered supply network (sources -> hubs -> customers) that
    loads with network.loader.load_network.

    Edge distance is the straight line stretched by a road factor; time and
    cost assume a heavy goods vehicle so the optimizer has room to improve.
    """
    rng = np.random.default_rng(seed)

    # 1. Generate nodes, all within ~15km of the center (roughly 0.15 degrees)
    nodes = []
    for node_type, count, prefix in (
        ("source", num_sources, "Factory"),
        ("intermediate", num_hubs, "Hub"),
        ("customer", num_customers, "Store"),
    ):
        for index in range(count):
            nodes.append({
                "name": f"{prefix} {index + 1}",
                "type": node_type,
                "x": np.round(CENTER_LON + rng.uniform(-0.15, 0.15), 6),
                "y": np.round(CENTER_LAT + rng.uniform(-0.15, 0.15), 6),
                "capacity": int(rng.integers(1000, 5000)) if node_type != "customer" else "",
                "perishability_hours": int(rng.integers(12, 72)) if node_type == "customer" else "",
            })

    nodes_df = pd.DataFrame(nodes)
    sources = nodes_df[nodes_df["type"] == "source"]
    hubs = nodes_df[nodes_df["type"] == "intermediate"]
    customers = nodes_df[nodes_df["type"] == "customer"]

    # 2. Connect every source to every hub, every customer to one random hub
    pairs = [(s, h) for _, s in sources.iterrows() for _, h in hubs.iterrows()]
    pairs += [(hubs.iloc[rng.integers(0, len(hubs))], c) for _, c in customers.iterrows()]

    edges = []
    for origin, destination in pairs:
        # ~111km per degree; road factor 1.3 on top of the straight line
        straight_km = np.hypot(
            (origin["y"] - destination["y"]) * 111.0,
            (origin["x"] - destination["x"]) * 111.0 * np.cos(np.radians(CENTER_LAT)),
        )
        distance_km = max(np.round(straight_km * 1.3, 2), 0.1)
        travel_time_hr = max(np.round(distance_km / rng.uniform(25, 40), 2), 0.01)
        edges.append({
            "from": origin["name"],
            "to": destination["name"],
            "distance_km": distance_km,
            "travel_time_hr": travel_time_hr,
            "cost": np.round(distance_km * 25 + travel_time_hr * 50),
        })

    edges_df = pd.DataFrame(edges)

    # 3. Save to CSV
    nodes_df.to_csv(nodes_file, index=False)
    edges_df.to_csv(edges_file, index=False)
    print(f"✅ Generated {len(nodes_df)} nodes -> '{nodes_file}' and {len(edges_df)} edges -> '{edges_file}'")

    # Print a quick preview of hub fan-out
    print("\nCustomers per hub:")
    counts = edges_df[edges_df["to"].isin(customers["name"])]["from"].value_counts()
    for name, count in counts.items():
        print(f"  {name}: {count} customers")


if __name__ == "__main__":
    generate_mock_network(seed=42)
