"""
Routing Module

This module provides routing table construction and the route selection
policies used for packet transmission: fixed, random, flooding, adaptive
and experience-based routing under virtual-circuit or datagram transport.
"""

import numpy as np
import networkx as nx
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from itertools import islice
from typing import Dict, List, Optional, Union

from .topology import Graph
from .shortest_path import ShortestPathEngine


DEFAULT_MAX_HOPS = 10

Route = List[str]


class TransportMethod(Enum):
    """How a transmission request is mapped onto routes"""
    VIRTUAL_CIRCUIT = "virtual-circuit"  # Path established once before sending
    DATAGRAM = "datagram"                # Hop-by-hop routing table lookup


class RoutingAlgorithm(Enum):
    """Policy selecting which path(s) a packet takes"""
    FIXED = "fixed"
    RANDOM = "random"
    FLOODING = "flooding"
    ADAPTIVE = "adaptive"
    EXPERIENCE = "experience"


def parse_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ValueError(f"Unknown {enum_cls.__name__}: {value!r}. "
                         f"Available: {[m.value for m in enum_cls]}") from None


@dataclass(frozen=True)
class RoutingEntry:
    """Routing table entry"""
    destination: str
    next_hop: str
    distance: float


RoutingTable = Dict[str, List[RoutingEntry]]


class RoutingTableBuilder:
    """
    Builds per-node next-hop tables from shortest paths

    Unreachable destinations have no entry. The builder holds no state
    between calls; rebuild the table whenever the graph changes.
    """

    def __init__(self, engine: Optional[ShortestPathEngine] = None):
        self.engine = engine or ShortestPathEngine()

    def build(self, graph: Graph) -> RoutingTable:
        """Build the complete routing table for all node pairs"""
        table: RoutingTable = {}
        nodes = graph.node_ids()

        for src in nodes:
            entries = []
            for dst in nodes:
                if src == dst:
                    continue
                result = self.engine.find(graph, src, dst)
                if result.found and len(result.path) > 1:
                    entries.append(RoutingEntry(
                        destination=dst,
                        next_hop=result.path[1],
                        distance=result.distance
                    ))
            table[src] = entries

        return table


def lookup_entry(
    routing_table: RoutingTable,
    node_id: str,
    destination: str
) -> Optional[RoutingEntry]:
    """Find the entry for destination in node_id's table"""
    for entry in routing_table.get(node_id, []):
        if entry.destination == destination:
            return entry
    return None


class Router(ABC):
    """
    Abstract base class for routing algorithms

    All routing algorithms should inherit from this class and
    implement the compute_route method. Routers fail soft: an
    unreachable destination or a detected loop yields an empty route.
    """

    name = "BaseRouter"

    def __init__(self, graph: Graph, routing_table: Optional[RoutingTable] = None):
        """
        Initialize router

        Args:
            graph: Graph snapshot
            routing_table: Pre-built routing table (built on demand if omitted)
        """
        self.graph = graph
        self._routing_table = routing_table

    @property
    def routing_table(self) -> RoutingTable:
        if self._routing_table is None:
            self._routing_table = RoutingTableBuilder().build(self.graph)
        return self._routing_table

    @abstractmethod
    def compute_route(self, source: str, destination: str) -> Route:
        """
        Compute route from source to destination

        Args:
            source: Source node ID
            destination: Destination node ID

        Returns:
            List of node IDs, empty if no route was found
        """

    def compute_routes(self, source: str, destination: str) -> List[Route]:
        """All routes a single request spawns (one for most routers)"""
        route = self.compute_route(source, destination)
        return [route] if route else []


class FixedRouter(Router):
    """Always the Dijkstra shortest path"""

    name = "FixedRouter"

    def __init__(self, graph: Graph, routing_table: Optional[RoutingTable] = None,
                 engine: Optional[ShortestPathEngine] = None):
        super().__init__(graph, routing_table)
        self.engine = engine or ShortestPathEngine()

    def compute_route(self, source: str, destination: str) -> Route:
        result = self.engine.find(self.graph, source, destination)
        return list(result.path) if result.found else []


class TableRouter(Router):
    """
    Hop-by-hop routing table walk (datagram forwarding)

    Each hop looks up the destination in the current node's table. The
    walk keeps a visited set and stops with an empty route on a dead end
    or a loop.
    """

    name = "DatagramRouter"

    def compute_route(self, source: str, destination: str) -> Route:
        if not self.graph.has_node(source) or not self.graph.has_node(destination):
            return []

        route = [source]
        visited = {source}
        current = source

        # Each iteration visits a new node, so len(graph) bounds the walk
        for _ in range(len(self.graph)):
            if current == destination:
                return route
            entry = lookup_entry(self.routing_table, current, destination)
            if entry is None or entry.next_hop in visited:
                return []
            current = entry.next_hop
            visited.add(current)
            route.append(current)

        return route if current == destination else []


class AdaptiveRouter(TableRouter):
    """Adaptive routing; currently the same table walk as datagram forwarding"""

    name = "AdaptiveRouter"


class ExperienceRouter(TableRouter):
    """Routing by experience; currently the same table walk as datagram forwarding"""

    name = "ExperienceRouter"


class RandomRouter(Router):
    """
    Random walk over undirected adjacency

    At each hop one unvisited neighbor is chosen uniformly. Walks that
    reach a node with no unvisited neighbors return an empty route.
    """

    name = "RandomRouter"

    def __init__(self, graph: Graph, routing_table: Optional[RoutingTable] = None,
                 seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        super().__init__(graph, routing_table)
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def compute_route(self, source: str, destination: str) -> Route:
        if not self.graph.has_node(source) or not self.graph.has_node(destination):
            return []

        route = [source]
        visited = {source}
        current = source

        while current != destination:
            candidates = [n for n in self.graph.neighbors(current) if n not in visited]
            if not candidates:
                return []
            current = candidates[int(self.rng.integers(0, len(candidates)))]
            visited.add(current)
            route.append(current)

        return route


class FloodingRouter(Router):
    """
    Flooding: every simple path up to max_hops edges

    Paths are enumerated depth-first over the undirected adjacency. One
    packet is sent along each discovered path.
    """

    name = "FloodingRouter"

    def __init__(self, graph: Graph, routing_table: Optional[RoutingTable] = None,
                 max_hops: int = DEFAULT_MAX_HOPS, max_paths: Optional[int] = None):
        super().__init__(graph, routing_table)
        if max_hops < 0:
            raise ValueError(f"max_hops must be non-negative, got {max_hops}")
        self.max_hops = max_hops
        self.max_paths = max_paths
        self._undirected: Optional[nx.Graph] = None

    def _adjacency(self) -> nx.Graph:
        if self._undirected is None:
            undirected = nx.Graph()
            undirected.add_nodes_from(self.graph.node_ids())
            # Edge-list order keeps neighbor order equal to Graph.neighbors
            undirected.add_edges_from(
                (edge.source, edge.target) for edge in self.graph.edges
            )
            self._undirected = undirected
        return self._undirected

    def compute_routes(self, source: str, destination: str) -> List[Route]:
        if not self.graph.has_node(source) or not self.graph.has_node(destination):
            return []
        if source == destination:
            return [[source]]
        if self.max_hops == 0:
            return []

        paths = nx.all_simple_paths(
            self._adjacency(), source, destination, cutoff=self.max_hops
        )
        if self.max_paths is not None:
            paths = islice(paths, self.max_paths)
        return [list(path) for path in paths]

    def compute_route(self, source: str, destination: str) -> Route:
        """First discovered flooding path"""
        routes = self.compute_routes(source, destination)
        return routes[0] if routes else []


def create_router(
    algorithm: Union[str, RoutingAlgorithm],
    graph: Graph,
    routing_table: Optional[RoutingTable] = None,
    **kwargs
) -> Router:
    """
    Factory function to create router by routing algorithm

    Args:
        algorithm: Routing algorithm ("fixed", "random", "flooding",
                   "adaptive", "experience")
        graph: Graph snapshot
        routing_table: Pre-built routing table
        **kwargs: Additional arguments for specific router types

    Returns:
        Router instance
    """
    router_map = {
        RoutingAlgorithm.FIXED: FixedRouter,
        RoutingAlgorithm.RANDOM: RandomRouter,
        RoutingAlgorithm.FLOODING: FloodingRouter,
        RoutingAlgorithm.ADAPTIVE: AdaptiveRouter,
        RoutingAlgorithm.EXPERIENCE: ExperienceRouter,
    }
    algorithm = parse_enum(RoutingAlgorithm, algorithm)
    return router_map[algorithm](graph, routing_table, **kwargs)


class RouteSelector:
    """
    Maps a transport method and routing algorithm onto concrete routes

    Under virtual-circuit transport the fixed algorithm uses the shortest
    path engine directly; under datagram transport it walks the routing
    table hop by hop. The other algorithms behave the same under both
    transports. Flooding is the only algorithm that returns several routes.
    """

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)
        self.engine = ShortestPathEngine()

    def get_router(
        self,
        transport_method: Union[str, TransportMethod],
        routing_algorithm: Union[str, RoutingAlgorithm],
        graph: Graph,
        routing_table: Optional[RoutingTable] = None,
        max_hops: int = DEFAULT_MAX_HOPS,
        max_paths: Optional[int] = None
    ) -> Router:
        """Router implementing the given transport/algorithm combination"""
        transport = parse_enum(TransportMethod, transport_method)
        algorithm = parse_enum(RoutingAlgorithm, routing_algorithm)

        if algorithm is RoutingAlgorithm.FIXED and transport is TransportMethod.DATAGRAM:
            return TableRouter(graph, routing_table)
        if algorithm is RoutingAlgorithm.FIXED:
            return FixedRouter(graph, routing_table, engine=self.engine)
        if algorithm is RoutingAlgorithm.RANDOM:
            return RandomRouter(graph, routing_table, rng=self.rng)
        if algorithm is RoutingAlgorithm.FLOODING:
            return FloodingRouter(graph, routing_table,
                                  max_hops=max_hops, max_paths=max_paths)
        return create_router(algorithm, graph, routing_table)

    def select_route(
        self,
        transport_method: Union[str, TransportMethod],
        routing_algorithm: Union[str, RoutingAlgorithm],
        graph: Graph,
        routing_table: Optional[RoutingTable],
        source: str,
        destination: str,
        max_hops: int = DEFAULT_MAX_HOPS,
        max_paths: Optional[int] = None
    ) -> Union[Route, List[Route]]:
        """
        Select the route(s) a transmission request will use

        Args:
            transport_method: "virtual-circuit" or "datagram"
            routing_algorithm: "fixed", "random", "flooding", "adaptive"
                               or "experience"
            graph: Graph snapshot
            routing_table: Routing table for graph (built if None)
            source: Source node ID
            destination: Destination node ID
            max_hops: Hop bound for flooding
            max_paths: Optional cap on flooding paths

        Returns:
            A route (list of node IDs, empty if none), or for flooding a
            list of routes
        """
        router = self.get_router(transport_method, routing_algorithm, graph,
                                 routing_table, max_hops=max_hops, max_paths=max_paths)
        if isinstance(router, FloodingRouter):
            return router.compute_routes(source, destination)
        return router.compute_route(source, destination)
