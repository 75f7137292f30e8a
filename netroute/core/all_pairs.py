"""
All-Pairs Shortest Path Module

Floyd-Warshall over the whole graph with forward next-hop pointers for
path reconstruction.
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .topology import Graph


@dataclass
class PathPair:
    """Shortest path between an ordered pair of nodes"""
    source: str
    destination: str
    distance: float
    path: List[str]


@dataclass
class AllPairsResult:
    """
    Result of an all-pairs computation

    Attributes:
        pairs: One entry per reachable ordered pair (i != j)
        distance_matrix: Distances indexed [from][to], inf when unreachable
        next_hop_matrix: First hop on the shortest path [from][to], None when unset
    """
    pairs: List[PathPair] = field(default_factory=list)
    distance_matrix: pd.DataFrame = field(default_factory=pd.DataFrame)
    next_hop_matrix: pd.DataFrame = field(default_factory=pd.DataFrame)

    def get_distance(self, source: str, destination: str) -> float:
        return float(self.distance_matrix.at[source, destination])

    def get_pair(self, source: str, destination: str) -> Optional[PathPair]:
        for pair in self.pairs:
            if pair.source == source and pair.destination == destination:
                return pair
        return None


class AllPairsEngine:
    """
    Floyd-Warshall all-pairs engine

    Parallel edges contribute their minimum weight. Relaxation runs over
    intermediate nodes in graph node order and only accepts strictly
    shorter distances. For a fixed intermediate k the update of row/column
    k is a no-op (weights are positive), so each k step is applied to the
    whole matrix at once.

    Reported distances are re-summed along each reconstructed path, in
    path order, so they match ShortestPathEngine bit for bit.
    """

    def compute_all_pairs(self, graph: Graph) -> AllPairsResult:
        """
        Compute shortest distances and paths between every pair of nodes

        Args:
            graph: Graph snapshot

        Returns:
            AllPairsResult with reachable pairs and both matrices
        """
        nodes = graph.node_ids()
        n = len(nodes)
        index = {node_id: i for i, node_id in enumerate(nodes)}

        dist = np.full((n, n), np.inf)
        np.fill_diagonal(dist, 0.0)
        # -1 means no next hop
        next_hop = np.full((n, n), -1, dtype=int)

        for edge in graph.edges:
            i, j = index[edge.source], index[edge.target]
            if i == j:
                continue
            if edge.weight < dist[i, j]:
                dist[i, j] = edge.weight
            next_hop[i, j] = j

        for k in range(n):
            candidate = dist[:, k, None] + dist[None, k, :]
            improved = candidate < dist
            if improved.any():
                dist = np.where(improved, candidate, dist)
                next_hop = np.where(improved, next_hop[:, k, None], next_hop)

        pairs = []
        for i, source in enumerate(nodes):
            for j, destination in enumerate(nodes):
                if i == j or not np.isfinite(dist[i, j]):
                    continue
                path = self._reconstruct_path(next_hop, nodes, i, j)
                if path:
                    # Relaxation associates sums per k, not left to right
                    distance = float(graph.path_weight(path))
                    dist[i, j] = distance
                    pairs.append(PathPair(
                        source=source,
                        destination=destination,
                        distance=distance,
                        path=path
                    ))

        distance_matrix = pd.DataFrame(dist, index=nodes, columns=nodes)
        next_hop_matrix = pd.DataFrame(
            [[nodes[h] if h >= 0 else None for h in row] for row in next_hop],
            index=nodes,
            columns=nodes,
            dtype=object
        )
        return AllPairsResult(
            pairs=pairs,
            distance_matrix=distance_matrix,
            next_hop_matrix=next_hop_matrix
        )

    @staticmethod
    def _reconstruct_path(
        next_hop: np.ndarray,
        nodes: List[str],
        i: int,
        j: int
    ) -> List[str]:
        """Follow forward pointers from i until j"""
        path = [nodes[i]]
        current = i
        # A simple path never has more than n nodes
        for _ in range(len(nodes)):
            if current == j:
                return path
            current = int(next_hop[current, j])
            if current < 0:
                return []
            path.append(nodes[current])
        return path if current == j else []

    def distance_table(self, graph: Graph) -> Dict[str, Dict[str, float]]:
        """Reachable distances as nested dicts, {from: {to: distance}}"""
        result = self.compute_all_pairs(graph)
        table: Dict[str, Dict[str, float]] = {}
        for pair in result.pairs:
            table.setdefault(pair.source, {})[pair.destination] = pair.distance
        return table
