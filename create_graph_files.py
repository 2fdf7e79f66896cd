"""
Create graph files for Prim's MST algorithm
The whole graph is stored in a single graph_metadata.json
"""

import json
import os
import random
import sys

import matplotlib.pyplot as plt
import networkx as nx

from mst_graph import Graph, GraphError, GraphFileError

METADATA_FILE = "graph_metadata.json"


def create_random_graph(num_nodes=6, edge_probability=0.5, seed=42):
    """Create a random connected graph with random weights"""
    random.seed(seed)

    # Generate random graph using Erdos-Renyi model
    G = nx.erdos_renyi_graph(num_nodes, edge_probability, seed=seed)

    # Ensure the graph is connected
    attempts = 0
    while not nx.is_connected(G) and attempts < 100:
        G = nx.erdos_renyi_graph(
            num_nodes, edge_probability, seed=random.randint(0, 10000)
        )
        attempts += 1

    if not nx.is_connected(G):
        # Force connectivity by adding edges
        components = list(nx.connected_components(G))
        for i in range(len(components) - 1):
            node1 = list(components[i])[0]
            node2 = list(components[i + 1])[0]
            G.add_edge(node1, node2)

    # Assign random weights to edges
    for u, v in G.edges():
        G[u][v]["weight"] = random.randint(1, 10)

    return G


def write_graph_metadata(graph, output_dir="graph_data"):
    """
    Write every vertex and directed edge of a Graph to graph_metadata.json
    Format: {"num_nodes", "num_edges", "directed", "vertices", "edges": [[u, v, w], ...]}
    """
    os.makedirs(output_dir, exist_ok=True)

    metadata = {
        "num_nodes": graph.number_of_vertices(),
        "num_edges": graph.number_of_edges(),
        "directed": True,
        "vertices": graph.vertices,
        "edges": [[e.source, e.sink, e.weight] for e in graph.edges],
    }

    metadata_file = os.path.join(output_dir, METADATA_FILE)
    with open(metadata_file, "w") as f:
        json.dump(metadata, f, indent=2)

    print(f"  Created {metadata_file}: Graph metadata")
    return metadata_file


def load_graph_metadata(graph_dir="graph_data"):
    """
    Load graph_metadata.json into a Graph.

    Files without "directed": true hold undirected [u, v, w] triples over
    vertices 0..num_nodes-1; each triple becomes a pair of directed edges.
    """
    metadata_file = os.path.join(graph_dir, METADATA_FILE)
    with open(metadata_file, "r") as f:
        try:
            metadata = json.load(f)
        except json.JSONDecodeError as e:
            raise GraphFileError(f"{metadata_file}: invalid JSON ({e})") from e

    try:
        directed = metadata.get("directed", False)
        if "vertices" in metadata:
            vertices = [str(v) for v in metadata["vertices"]]
        else:
            vertices = [str(v) for v in range(metadata["num_nodes"])]
        rows = metadata["edges"]
    except (KeyError, TypeError) as e:
        raise GraphFileError(f"{metadata_file}: missing field {e}") from e

    graph = Graph()
    for vertex in vertices:
        graph.add_vertex(vertex)

    for row in rows:
        try:
            u, v, w = row
            w = float(w)
        except (TypeError, ValueError) as e:
            raise GraphFileError(f"{metadata_file}: bad edge row {row!r}") from e

        if directed:
            graph.add_edge(str(u), str(v), w)
        else:
            graph.add_undirected_edge(str(u), str(v), w)

    return graph


def visualize_graph(graph, output_dir):
    """Visualize the graph and save to file"""
    G = graph.to_networkx()

    plt.figure(figsize=(10, 8))
    pos = nx.spring_layout(G, seed=42)

    nx.draw(
        G,
        pos,
        with_labels=True,
        node_color="lightblue",
        node_size=700,
        font_size=12,
        font_weight="bold",
        edge_color="gray",
        width=2,
    )

    edge_labels = nx.get_edge_attributes(G, "weight")
    nx.draw_networkx_edge_labels(G, pos, edge_labels, font_size=10)

    plt.title("Input Graph for Prim's Algorithm", fontsize=14, fontweight="bold")

    output_file = os.path.join(output_dir, "input_graph.png")
    plt.savefig(output_file, dpi=150, bbox_inches="tight")
    print(f"\n  Visualization saved to {output_file}")
    plt.close()
    return output_file


def print_graph_summary(graph):
    """Print summary of the graph"""
    G = graph.to_networkx()

    print("\n" + "=" * 70)
    print("Graph Summary")
    print("=" * 70)
    print(f"Number of vertices: {graph.number_of_vertices()}")
    print(f"Number of directed edges: {graph.number_of_edges()}")
    print(f"Is connected: {nx.is_connected(G)}")

    print("\nEdge list (with weights):")
    for u, v, data in sorted(G.edges(data=True)):
        print(f"  ({u}, {v}): weight = {data['weight']:g}")

    mst = nx.minimum_spanning_tree(G, weight="weight")
    mst_weight = sum(data["weight"] for _, _, data in mst.edges(data=True))
    print(f"\nExpected MST weight (NetworkX): {mst_weight:g}")
    print("=" * 70)


def main(argv=None):
    """Main function to create graph files"""
    import argparse

    parser = argparse.ArgumentParser(
        description="Generate graph files for Prim's MST algorithm"
    )
    parser.add_argument(
        "--nodes", type=int, default=6, help="Number of nodes (default: 6)"
    )
    parser.add_argument(
        "--edge-prob", type=float, default=0.5, help="Edge probability (default: 0.5)"
    )
    parser.add_argument(
        "--seed", type=int, default=42, help="Random seed (default: 42)"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="graph_data",
        help="Output directory (default: graph_data)",
    )
    parser.add_argument(
        "--no-plot", action="store_true", help="Skip the input graph image"
    )

    args = parser.parse_args(argv)

    print("=" * 70)
    print("Graph File Generator for Prim's Algorithm")
    print("=" * 70)

    print(f"\nGenerating random graph...")
    print(f"  Nodes: {args.nodes}")
    print(f"  Edge probability: {args.edge_prob}")
    print(f"  Random seed: {args.seed}")

    try:
        graph = Graph.from_networkx(
            create_random_graph(args.nodes, args.edge_prob, args.seed)
        )
    except GraphError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print_graph_summary(graph)

    print("\n" + "=" * 70)
    write_graph_metadata(graph, args.output_dir)
    if not args.no_plot:
        visualize_graph(graph, args.output_dir)

    print("\n" + "=" * 70)
    print("Graph files created successfully!")
    print("=" * 70)
    print(f"\nTo run Prim's algorithm:")
    print(f"  python prims_implementation.py --graph-dir {args.output_dir}")
    print("=" * 70)

    return args.output_dir


if __name__ == "__main__":
    main()
