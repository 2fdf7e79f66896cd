"""
Prim's Algorithm Implementation for MST
Greedy frontier expansion over a directed-edge graph
"""

import heapq
import json
import math
import os
import sys
import time
from enum import Enum

import matplotlib.pyplot as plt
import networkx as nx

from mst_graph import Graph, GraphError, total_weight


class BuilderState(Enum):
    SEEDING = "SEEDING"
    EXPANDING = "EXPANDING"
    TERMINATED = "TERMINATED"


class Frontier:
    """Min-heap of candidate edges keyed by (weight, insertion sequence)"""

    def __init__(self):
        self._heap = []
        self._sequence = 0

    def push(self, edge):
        heapq.heappush(self._heap, (edge.weight, self._sequence, edge))
        self._sequence += 1

    def push_all(self, edges):
        for edge in edges:
            self.push(edge)

    def pop(self):
        return heapq.heappop(self._heap)[2]

    def __len__(self):
        return len(self._heap)


class PrimsAlgorithm:
    def __init__(self, graph):
        self.graph = graph
        self.state = BuilderState.SEEDING
        self.in_tree = set()
        self.frontier = Frontier()
        self.mst_edges = []
        self.discarded = 0

    def reset(self):
        self.state = BuilderState.SEEDING
        self.in_tree = set()
        self.frontier = Frontier()
        self.mst_edges = []
        self.discarded = 0

    def expand_from(self, vertex):
        """Push the outgoing edges of a vertex; unknown vertices are not expanded"""
        edges = self.graph.edges_from(vertex)
        if edges is not None:
            self.frontier.push_all(edges)

    def root(self):
        """Source of the first edge that is not a self-loop, or None"""
        for edge in self.graph.edges:
            if edge.source != edge.sink:
                return edge.source
        return None

    def seed(self):
        """Start the tree at the root vertex; the frontier picks the first tree edge"""
        root = self.root()
        if root is None:
            return False

        self.in_tree.add(root)
        self.expand_from(root)
        return True

    def reseed(self):
        """Start a new tree at the first vertex outside the tree with outgoing edges"""
        for vertex in self.graph.vertices:
            if vertex not in self.in_tree and self.graph.edges_from(vertex):
                self.in_tree.add(vertex)
                self.expand_from(vertex)
                return True
        return False

    def expand(self):
        """Grow the tree until the frontier is empty"""
        self.state = BuilderState.EXPANDING
        while self.frontier:
            edge = self.frontier.pop()
            if edge.sink in self.in_tree:
                # Stale entry, both endpoints already in the tree
                self.discarded += 1
                continue

            self.mst_edges.append(edge)
            self.in_tree.add(edge.sink)
            self.expand_from(edge.sink)

    def build(self, forest=False):
        """Compute the tree (or the spanning forest) and return its edges in order"""
        self.reset()
        if self.seed():
            self.expand()
            while forest and self.reseed():
                self.expand()
        self.state = BuilderState.TERMINATED
        return list(self.mst_edges)

    def run(self, forest=False):
        """Run Prim's algorithm and report progress"""
        print("Starting Prim's Algorithm...")
        print(f"Number of vertices: {self.graph.number_of_vertices()}")
        print(f"Number of edges: {self.graph.number_of_edges()}")

        start_time = time.time()
        mst_edges = self.build(forest=forest)
        elapsed = time.time() - start_time

        print(f"Algorithm completed in {elapsed:.4f} seconds")
        print(f"Discarded {self.discarded} stale frontier edges")
        print(f"Found {len(mst_edges)} MST edges")
        return mst_edges

    def verify_spanning_tree(self, mst_edges):
        """Check that the edges reach every vertex reachable from the root without a cycle"""
        if not mst_edges:
            return all(edge.source == edge.sink for edge in self.graph.edges)

        tree = nx.Graph()
        for edge in mst_edges:
            tree.add_edge(edge.source, edge.sink)

        if not nx.is_forest(tree):
            return False

        reachable = self.graph.reachable_from(mst_edges[0].source)
        return nx.is_connected(tree) and set(tree.nodes()) == reachable

    def print_debug_info(self, mst_edges):
        """Print the tree edges in the order they joined the tree"""
        print("\nTree Edges:")
        print(f"{'Step':<6} {'Source':<10} {'Sink':<10} {'Weight':<8}")
        print("-" * 40)
        for step, edge in enumerate(mst_edges):
            print(f"{step:<6} {edge.source:<10} {edge.sink:<10} {edge.weight:<8g}")

        reached = {e.source for e in mst_edges} | {e.sink for e in mst_edges}
        unreached = [v for v in self.graph.vertices if v not in reached]
        if unreached:
            print(f"⚠ Vertices outside the tree: {unreached}")
        else:
            print("✓ All vertices reached")

    def visualize(self, mst_edges, save_path="prims_mst.png"):
        """Visualize the graph and MST"""
        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))

        G = self.graph.to_networkx()
        pos = nx.spring_layout(G, seed=42)

        ax1.set_title("Original Graph", fontsize=14, fontweight="bold")
        nx.draw(
            G,
            pos,
            ax=ax1,
            with_labels=True,
            node_color="lightblue",
            node_size=700,
            font_size=12,
            font_weight="bold",
        )
        edge_labels = nx.get_edge_attributes(G, "weight")
        nx.draw_networkx_edge_labels(G, pos, edge_labels, ax=ax1)

        ax2.set_title("MST (Prim's Algorithm)", fontsize=14, fontweight="bold")
        mst_graph = nx.Graph()
        mst_graph.add_nodes_from(G.nodes())
        for edge in mst_edges:
            mst_graph.add_edge(edge.source, edge.sink, weight=edge.weight)

        nx.draw(
            mst_graph,
            pos,
            ax=ax2,
            with_labels=True,
            node_color="lightgreen",
            node_size=700,
            font_size=12,
            font_weight="bold",
            edge_color="red",
            width=3,
        )

        if mst_edges:
            edge_labels = nx.get_edge_attributes(mst_graph, "weight")
            nx.draw_networkx_edge_labels(mst_graph, pos, edge_labels, ax=ax2)

        plt.tight_layout()
        plt.savefig(save_path, dpi=150, bbox_inches="tight")
        print(f"Visualization saved to {save_path}")
        plt.close(fig)

        return mst_graph


def prims(graph):
    """
    Minimal spanning tree grown from the source of the graph's first edge.

    Edges are returned in the order they joined the tree. Equal weights are
    resolved in favour of the edge pushed onto the frontier first.
    Running time is O((|V| + |E|) log |E|).
    """
    return PrimsAlgorithm(graph).build()


def prims_forest(graph):
    """Spanning forest: one tree per component, reseeding in vertex order"""
    return PrimsAlgorithm(graph).build(forest=True)


def build_example_graph():
    """The 7-vertex demonstration graph, every connection stored in both directions"""
    g = Graph()
    for vertex in ["a", "b", "c", "d", "e", "f", "g"]:
        g.add_vertex(vertex)

    g.add_edge("a", "b", 4)
    g.add_edge("a", "c", 8)

    g.add_edge("b", "a", 4)
    g.add_edge("b", "c", 9)
    g.add_edge("b", "d", 8)
    g.add_edge("b", "e", 10)

    g.add_edge("c", "a", 8)
    g.add_edge("c", "b", 9)
    g.add_edge("c", "d", 2)
    g.add_edge("c", "f", 1)

    g.add_edge("d", "b", 8)
    g.add_edge("d", "c", 2)
    g.add_edge("d", "e", 7)
    g.add_edge("d", "f", 9)

    g.add_edge("e", "b", 10)
    g.add_edge("e", "d", 7)
    g.add_edge("e", "f", 5)
    g.add_edge("e", "g", 6)

    g.add_edge("f", "c", 1)
    g.add_edge("f", "d", 9)
    g.add_edge("f", "e", 5)
    g.add_edge("f", "g", 2)

    g.add_edge("g", "e", 6)
    g.add_edge("g", "f", 2)

    return g


def run_experiment(graph, experiment_num, debug=False, output_dir=None):
    """Run Prim's algorithm on a single graph and compare against NetworkX"""
    print(f"\n{'=' * 70}")
    print(
        f"Experiment {experiment_num}: {graph.number_of_vertices()} vertices, "
        f"{graph.number_of_edges()} edges"
    )
    print("=" * 70)

    algorithm = PrimsAlgorithm(graph)
    mst_edges = algorithm.run()

    is_spanning = algorithm.verify_spanning_tree(mst_edges)
    if debug or not is_spanning:
        print(f"\n--- Debug Info for Experiment {experiment_num} ---")
        algorithm.print_debug_info(mst_edges)

    mst_weight = total_weight(mst_edges)

    nx_mst = nx.minimum_spanning_tree(graph.to_networkx(), weight="weight")
    nx_weight = sum(data["weight"] for _, _, data in nx_mst.edges(data=True))

    is_correct = is_spanning and math.isclose(mst_weight, nx_weight)

    for edge in mst_edges:
        print(f"  {edge}")
    print(f"\nMST Weight: {mst_weight:g}")
    print(
        f"MST Edges Found: {len(mst_edges)}/{graph.number_of_vertices() - 1} expected"
    )
    print(f"NetworkX MST Weight: {nx_weight:g}")
    print(f"Status: {'✓ CORRECT' if is_correct else '✗ INCORRECT'}")

    if output_dir is not None:
        os.makedirs(output_dir, exist_ok=True)
        filename = os.path.join(output_dir, f"prims_mst_exp{experiment_num}.png")
        algorithm.visualize(mst_edges, filename)

    return {
        "experiment": experiment_num,
        "num_vertices": graph.number_of_vertices(),
        "num_edges": graph.number_of_edges(),
        "mst_edges": [(e.source, e.sink, e.weight) for e in mst_edges],
        "mst_weight": mst_weight,
        "networkx_weight": nx_weight,
        "is_correct": is_correct,
        "edges_found": len(mst_edges),
        "edges_expected": graph.number_of_vertices() - 1,
    }


def print_summary(all_results):
    print("\n" + "=" * 70)
    print(" " * 25 + "SUMMARY")
    print("=" * 70)
    print(
        f"{'Exp':<5} {'Verts':<7} {'Edges':<7} {'MST Wt':<9} {'Found':<10} {'Status':<10}"
    )
    print("-" * 70)

    for result in all_results:
        status = "✓ PASS" if result["is_correct"] else "✗ FAIL"
        found_str = f"{result['edges_found']}/{result['edges_expected']}"
        print(
            f"{result['experiment']:<5} {result['num_vertices']:<7} {result['num_edges']:<7} "
            f"{result['mst_weight']:<9g} {found_str:<10} {status:<10}"
        )


# Random graph configurations for --experiments
GRAPH_CONFIGS = [
    {"num_nodes": 5, "edge_probability": 0.5, "seed": 42},
    {"num_nodes": 6, "edge_probability": 0.4, "seed": 100},
    {"num_nodes": 7, "edge_probability": 0.6, "seed": 200},
    {"num_nodes": 6, "edge_probability": 0.7, "seed": 300},
    {"num_nodes": 10, "edge_probability": 0.8, "seed": 400},
    {"num_nodes": 20, "edge_probability": 0.3, "seed": 500},
]


def main(argv=None):
    """Run Prim's algorithm on the example graph, a graph directory or random graphs"""
    import argparse

    from create_graph_files import create_random_graph, load_graph_metadata

    parser = argparse.ArgumentParser(description="Run Prim's MST algorithm")
    parser.add_argument(
        "--graph-dir",
        type=str,
        default=None,
        help="Graph data directory with graph_metadata.json (default: example graph)",
    )
    parser.add_argument(
        "--experiments",
        action="store_true",
        help="Run the built-in batch of random graphs",
    )
    parser.add_argument(
        "--visualize",
        type=str,
        default=None,
        help="Directory for MST visualizations (default: none)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="JSON file for the experiment results (default: none)",
    )
    parser.add_argument("--debug", action="store_true", help="Print tree tables")
    args = parser.parse_args(argv)

    print("=" * 70)
    print(" " * 15 + "Prim's Algorithm - Minimum Spanning Tree")
    print("=" * 70)

    graphs = []
    try:
        if args.experiments:
            for config in GRAPH_CONFIGS:
                graphs.append(Graph.from_networkx(create_random_graph(**config)))
        elif args.graph_dir is not None:
            graphs.append(load_graph_metadata(args.graph_dir))
        else:
            graphs.append(build_example_graph())
    except (GraphError, FileNotFoundError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    all_results = []
    for i, graph in enumerate(graphs, 1):
        result = run_experiment(graph, i, debug=args.debug, output_dir=args.visualize)
        all_results.append(result)

    print_summary(all_results)

    if args.output is not None:
        with open(args.output, "w") as f:
            json.dump(all_results, f, indent=2)
        print(f"\nAll results saved to: {args.output}")

    print("=" * 70)
    return all_results


if __name__ == "__main__":
    main()
