import math
import sys

import networkx as nx

from mst_graph import GraphError, total_weight


def reference_mst(graph, vertices=None):
    """NetworkX (Kruskal) MST of the undirected view of a Graph, optionally restricted to some vertices"""
    G = graph.to_networkx()
    if vertices is not None:
        G = G.subgraph(vertices)
    return nx.minimum_spanning_tree(G, weight="weight")


def check_mst(graph, mst_edges):
    """Compare a Prim's result against the NetworkX MST and print the checks"""
    G = graph.to_networkx()
    if mst_edges:
        reachable = graph.reachable_from(mst_edges[0].source)
    else:
        reachable = set()

    mst = reference_mst(graph, reachable)
    expected_weight = sum(d["weight"] for _, _, d in mst.edges(data=True))

    print("Expected MST edges:")
    for u, v in sorted(mst.edges()):
        print(f"  ({u},{v}): {G[u][v]['weight']:g}")
    print(f"\nTotal weight: {expected_weight:g}")
    print(f"Number of edges: {mst.number_of_edges()}")

    tree = nx.Graph()
    tree.add_edges_from((e.source, e.sink) for e in mst_edges)

    checks = {
        "tree_size": len(mst_edges) == max(len(reachable) - 1, 0),
        "spanning": set(tree.nodes()) == reachable,
        "acyclic": tree.number_of_nodes() == 0 or nx.is_forest(tree),
        "optimal": math.isclose(total_weight(mst_edges), expected_weight),
    }

    # Check connectivity
    print(f"\nOriginal graph connected: {G.number_of_nodes() > 0 and nx.is_connected(G)}")
    for name, ok in checks.items():
        print(f"  {name:<10} {'✓' if ok else '✗'}")

    return checks


def main(argv=None):
    import argparse

    from create_graph_files import load_graph_metadata
    from prims_implementation import prims

    parser = argparse.ArgumentParser(description="Check Prim's MST against NetworkX")
    parser.add_argument(
        "--graph-dir",
        type=str,
        default="graph_data",
        help="Graph data directory (default: graph_data)",
    )
    args = parser.parse_args(argv)

    try:
        graph = load_graph_metadata(args.graph_dir)
    except (GraphError, FileNotFoundError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    checks = check_mst(graph, prims(graph))
    if not all(checks.values()):
        sys.exit(1)
    return checks


if __name__ == "__main__":
    main()
