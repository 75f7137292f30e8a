"""
Shortest Path Module

Single-pair shortest path over a directed graph (Dijkstra).
"""

import heapq
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .topology import Graph


@dataclass
class PathResult:
    """
    Result of a single-pair shortest path query

    Attributes:
        found: Whether the target is reachable
        distance: Total path weight (0 when not found)
        path: Node ids from source to target (empty when not found)
    """
    found: bool
    distance: float = 0.0
    path: List[str] = field(default_factory=list)

    @property
    def hop_count(self) -> int:
        return max(len(self.path) - 1, 0)


class ShortestPathEngine:
    """
    Dijkstra shortest path engine

    Only edges leaving the settled node are relaxed (directed graph).
    Among unsettled nodes with equal tentative distance, the one that comes
    first in the graph's node order is settled first, and a tentative
    distance is only replaced by a strictly smaller one. On ties between
    equal-weight paths the path through the earlier-settled predecessor
    therefore wins.

    The engine is stateless; it never raises for unreachable or unknown
    nodes and reports failure through ``found=False``.
    """

    def find(self, graph: Graph, source: str, target: str) -> PathResult:
        """
        Compute the shortest path from source to target

        Args:
            graph: Graph snapshot
            source: Source node ID
            target: Target node ID

        Returns:
            PathResult (found=False, distance=0, path=[] if unreachable)
        """
        if not graph.has_node(source) or not graph.has_node(target):
            return PathResult(found=False)
        if source == target:
            return PathResult(found=True, distance=0, path=[source])

        order = {node_id: i for i, node_id in enumerate(graph.node_ids())}
        distances: Dict[str, float] = {source: 0}
        previous: Dict[str, Optional[str]] = {source: None}
        settled = set()
        # (distance, enumeration index, node id)
        heap = [(0, order[source], source)]

        while heap:
            dist, _, current = heapq.heappop(heap)
            if current in settled or dist > distances[current]:
                continue
            if current == target:
                break
            settled.add(current)

            for edge in graph.out_edges(current):
                neighbor = edge.target
                if neighbor in settled:
                    continue
                new_distance = dist + edge.weight
                if new_distance < distances.get(neighbor, float("inf")):
                    distances[neighbor] = new_distance
                    previous[neighbor] = current
                    heapq.heappush(heap, (new_distance, order[neighbor], neighbor))

        if target not in distances:
            return PathResult(found=False)

        path = []
        current: Optional[str] = target
        while current is not None:
            path.append(current)
            current = previous[current]
        path.reverse()

        return PathResult(found=True, distance=distances[target], path=path)

    def find_all_from(self, graph: Graph, source: str) -> Dict[str, PathResult]:
        """Shortest paths from source to every other reachable node"""
        results = {}
        for target in graph.node_ids():
            if target == source:
                continue
            result = self.find(graph, source, target)
            if result.found:
                results[target] = result
        return results
