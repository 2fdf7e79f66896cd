"""
Adjacency-list graph of directed, weighted edges between named vertices
Used as the input of the Prim's MST builder
"""

from dataclasses import dataclass
from typing import Optional

import networkx as nx


class GraphError(Exception):
    """Base class for graph construction errors"""


class DuplicateVertexError(GraphError):
    def __init__(self, vertex):
        super().__init__(f"Vertex {vertex!r} is already registered")
        self.vertex = vertex


class UnknownVertexError(GraphError):
    def __init__(self, vertex):
        super().__init__(f"Vertex {vertex!r} is not registered")
        self.vertex = vertex


class GraphFileError(GraphError):
    """Raised when a graph metadata file cannot be turned into a Graph"""


@dataclass(frozen=True)
class Edge:
    source: str
    sink: str
    weight: float
    # Index of the paired reverse edge in Graph.edges
    reverse: Optional[int] = None

    def __str__(self):
        return f"{self.source} -> {self.sink} ({self.weight:g})"


class Graph:
    def __init__(self):
        self._edges = []
        self._adjacency = {}  # dict: {vertex: [outgoing edges]}

    @classmethod
    def from_networkx(cls, nx_graph):
        """Build a graph from an undirected networkx graph with 'weight' attributes"""
        graph = cls()
        for node in nx_graph.nodes():
            graph.add_vertex(str(node))
        for u, v, data in nx_graph.edges(data=True):
            graph.add_undirected_edge(str(u), str(v), data.get("weight", 1))
        return graph

    @property
    def edges(self):
        return tuple(self._edges)

    @property
    def vertices(self):
        return list(self._adjacency)

    def number_of_vertices(self):
        return len(self._adjacency)

    def number_of_edges(self):
        return len(self._edges)

    def has_vertex(self, vertex):
        return vertex in self._adjacency

    def add_vertex(self, vertex):
        """Register a vertex with no outgoing edges"""
        if vertex in self._adjacency:
            raise DuplicateVertexError(vertex)
        self._adjacency[vertex] = []

    def add_edge(self, source, sink, weight, reverse=None):
        """Append a directed edge source -> sink and return it"""
        for vertex in (source, sink):
            if vertex not in self._adjacency:
                raise UnknownVertexError(vertex)

        edge = Edge(source, sink, float(weight), reverse)
        self._edges.append(edge)
        self._adjacency[source].append(edge)
        return edge

    def add_undirected_edge(self, u, v, weight):
        """
        Add u -> v and v -> u as a pair, each pointing at the other
        through its reverse index
        """
        for vertex in (u, v):
            if vertex not in self._adjacency:
                raise UnknownVertexError(vertex)

        index = len(self._edges)
        forward = self.add_edge(u, v, weight, reverse=index + 1)
        backward = self.add_edge(v, u, weight, reverse=index)
        return forward, backward

    def edges_from(self, vertex):
        """
        Outgoing edges of a vertex, in insertion order.
        Returns None when the vertex was never registered.
        """
        edges = self._adjacency.get(vertex)
        if edges is None:
            return None
        return list(edges)

    def reverse_edge(self, edge):
        if edge.reverse is None:
            return None
        return self._edges[edge.reverse]

    def to_networkx(self, directed=False):
        """networkx view (undirected by default); parallel edges keep the lightest weight"""
        G = nx.DiGraph() if directed else nx.Graph()
        G.add_nodes_from(self._adjacency)
        for edge in self._edges:
            if G.has_edge(edge.source, edge.sink):
                if edge.weight >= G[edge.source][edge.sink]["weight"]:
                    continue
            G.add_edge(edge.source, edge.sink, weight=edge.weight)
        return G

    def reachable_from(self, vertex):
        """Vertices reachable from vertex along outgoing edges, vertex included"""
        return nx.descendants(self.to_networkx(directed=True), vertex) | {vertex}


def total_weight(edges):
    return sum(edge.weight for edge in edges)
