"""
Graph Topology Module

This module provides the immutable graph snapshot every engine works on:
nodes, directed weighted edges, validation of malformed input and a
random graph generator for experiments.
"""

import math
import numbers
import numpy as np
import networkx as nx
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple


MIN_RANDOM_NODES = 2
MAX_RANDOM_NODES = 50


class GraphError(ValueError):
    """Base class for malformed graph input"""


class InvalidGraphReference(GraphError):
    """Duplicate node id, or an edge pointing at a node that does not exist"""


class InvalidEdgeWeight(GraphError):
    """Edge weight that is not a positive finite number"""


@dataclass(frozen=True)
class Node:
    """
    Represents a graph node

    Attributes:
        id: Unique identifier
        label: Human-readable name
    """
    id: str
    label: str = ""

    @property
    def display_name(self) -> str:
        return self.label or self.id


@dataclass(frozen=True)
class Edge:
    """
    Represents a directed weighted edge

    Attributes:
        id: Unique identifier
        source: Source node ID
        target: Target node ID
        weight: Positive edge cost
    """
    id: str
    source: str
    target: str
    weight: float = 1.0


class Graph:
    """
    Directed weighted graph snapshot

    Parallel edges and disconnected components are allowed. Nodes are
    enumerated in the order they were given; all engines rely on that
    order to break ties, so results are reproducible.

    The graph is treated as immutable: build a new one instead of
    mutating the node or edge sequences.
    """

    def __init__(
        self,
        nodes: Iterable[Node] = (),
        edges: Iterable[Edge] = ()
    ):
        """
        Initialize and validate a graph

        Args:
            nodes: Graph nodes, ids must be unique
            edges: Directed edges between existing nodes

        Raises:
            InvalidGraphReference: duplicate node id or dangling edge
            InvalidEdgeWeight: non-positive or non-finite weight
        """
        self.nodes: Tuple[Node, ...] = tuple(nodes)
        self.edges: Tuple[Edge, ...] = tuple(edges)

        self._nodes_by_id: Dict[str, Node] = {}
        for node in self.nodes:
            if node.id in self._nodes_by_id:
                raise InvalidGraphReference(f"Duplicate node id: {node.id!r}")
            self._nodes_by_id[node.id] = node

        self._out_edges: Dict[str, List[Edge]] = {n.id: [] for n in self.nodes}
        self._neighbors: Dict[str, List[str]] = {n.id: [] for n in self.nodes}

        for edge in self.edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in self._nodes_by_id:
                    raise InvalidGraphReference(
                        f"Edge {edge.id!r} references unknown node {endpoint!r}"
                    )
            if not (isinstance(edge.weight, numbers.Real)
                    and math.isfinite(edge.weight) and edge.weight > 0):
                raise InvalidEdgeWeight(
                    f"Edge {edge.id!r} has invalid weight {edge.weight!r}"
                )
            self._out_edges[edge.source].append(edge)
            # Undirected adjacency, first-seen order
            if edge.target not in self._neighbors[edge.source]:
                self._neighbors[edge.source].append(edge.target)
            if edge.source not in self._neighbors[edge.target]:
                self._neighbors[edge.target].append(edge.source)

    @classmethod
    def from_dict(cls, data: Dict) -> "Graph":
        """
        Build a graph from the plain ``{"nodes": [...], "edges": [...]}`` form

        Presentation keys such as ``x``/``y`` are ignored.
        """
        nodes = [
            Node(id=str(n["id"]), label=str(n.get("label", "")))
            for n in data.get("nodes", [])
        ]
        edges = [
            Edge(
                id=str(e.get("id", f"edge-{i}")),
                source=str(e["source"]),
                target=str(e["target"]),
                weight=float(e.get("weight", 1.0))
            )
            for i, e in enumerate(data.get("edges", []))
        ]
        return cls(nodes, edges)

    def to_dict(self) -> Dict:
        """Convert to the plain dict form accepted by from_dict"""
        return {
            "nodes": [{"id": n.id, "label": n.label} for n in self.nodes],
            "edges": [
                {"id": e.id, "source": e.source, "target": e.target, "weight": e.weight}
                for e in self.edges
            ],
        }

    def node_ids(self) -> List[str]:
        """Node ids in enumeration order"""
        return [n.id for n in self.nodes]

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes_by_id

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes_by_id.get(node_id)

    def get_label(self, node_id: str) -> str:
        """Node label, falling back to the id"""
        node = self._nodes_by_id.get(node_id)
        return node.display_name if node else node_id

    def out_edges(self, node_id: str) -> List[Edge]:
        """Edges leaving a node, in edge-list order"""
        return self._out_edges.get(node_id, [])

    def neighbors(self, node_id: str) -> List[str]:
        """Nodes sharing an edge with node_id in either direction"""
        return self._neighbors.get(node_id, [])

    def edge_weight(self, source: str, target: str) -> Optional[float]:
        """Minimum weight over the parallel edges source -> target"""
        weights = [e.weight for e in self.out_edges(source) if e.target == target]
        return min(weights) if weights else None

    def path_weight(self, path: Sequence[str]) -> Optional[float]:
        """
        Sum of directed edge weights along a path

        Returns None if a consecutive pair is not joined by a directed edge.
        """
        total = 0
        for i in range(len(path) - 1):
            weight = self.edge_weight(path[i], path[i + 1])
            if weight is None:
                return None
            total += weight
        return total

    def format_path(self, path: Sequence[str]) -> str:
        """Human-readable path using node labels"""
        return " -> ".join(self.get_label(n) for n in path)

    def to_networkx(self) -> nx.MultiDiGraph:
        """Build a networkx snapshot (node and edge order preserved)"""
        graph = nx.MultiDiGraph()
        for node in self.nodes:
            graph.add_node(node.id, label=node.label)
        for edge in self.edges:
            graph.add_edge(edge.source, edge.target, key=edge.id, weight=edge.weight)
        return graph

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.nodes)}, edges={len(self.edges)})"


def _random_node_label(index: int) -> str:
    """A, B, ..., Z, A1, B1, ..."""
    label = chr(65 + index % 26)
    if index >= 26:
        label += str(index // 26)
    return label


def generate_random_graph(
    num_nodes: int,
    edge_factor: float = 1.5,
    max_weight: int = 20,
    seed: Optional[int] = None
) -> Graph:
    """
    Generate a random directed graph for experiments

    Args:
        num_nodes: Number of nodes (2-50)
        edge_factor: Edges to create per node
        max_weight: Weights are drawn uniformly from 1..max_weight
        seed: Random seed for reproducibility

    Returns:
        Graph with distinct directed edges and no self loops
    """
    if not MIN_RANDOM_NODES <= num_nodes <= MAX_RANDOM_NODES:
        raise ValueError(
            f"num_nodes must be between {MIN_RANDOM_NODES} and "
            f"{MAX_RANDOM_NODES}, got {num_nodes}"
        )

    rng = np.random.default_rng(seed)
    nodes = [
        Node(id=f"random-node-{i}", label=_random_node_label(i))
        for i in range(num_nodes)
    ]

    max_edges = num_nodes * (num_nodes - 1)
    edge_count = min(int(num_nodes * edge_factor), max_edges)
    used = set()
    edges = []

    while len(edges) < edge_count:
        source, target = (int(v) for v in rng.integers(0, num_nodes, size=2))
        if source == target or (source, target) in used:
            continue
        used.add((source, target))
        edges.append(Edge(
            id=f"random-edge-{len(edges)}",
            source=nodes[source].id,
            target=nodes[target].id,
            weight=float(rng.integers(1, max_weight + 1))
        ))

    return Graph(nodes, edges)
