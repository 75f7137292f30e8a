"""
Network Routing - Core Module

This module contains the core components for graph routing simulation:
- Topology: Graph snapshot, validation and random graph generation
- Shortest Path: Single-pair Dijkstra engine
- All Pairs: Floyd-Warshall engine with path reconstruction
- Routing: Routing tables and route selection policies
- Traffic: Packets and transmission records
- Simulator: Discrete-tick transmission simulation
- Statistics: Transmission history and algorithm comparison
"""

from .topology import (
    Node,
    Edge,
    Graph,
    GraphError,
    InvalidGraphReference,
    InvalidEdgeWeight,
    generate_random_graph
)

from .shortest_path import (
    PathResult,
    ShortestPathEngine
)

from .all_pairs import (
    PathPair,
    AllPairsResult,
    AllPairsEngine
)

from .routing import (
    TransportMethod,
    RoutingAlgorithm,
    RoutingEntry,
    RoutingTableBuilder,
    Router,
    FixedRouter,
    TableRouter,
    AdaptiveRouter,
    ExperienceRouter,
    RandomRouter,
    FloodingRouter,
    RouteSelector,
    create_router
)

from .traffic import (
    Packet,
    PacketStatus,
    TransmissionRecord
)

from .statistics import (
    StatisticsCollector,
    AlgorithmComparison,
    compare_algorithms,
    print_algorithm_comparison
)

from .simulator import TransmissionSimulator, Simulator

__all__ = [
    # Topology
    'Node',
    'Edge',
    'Graph',
    'GraphError',
    'InvalidGraphReference',
    'InvalidEdgeWeight',
    'generate_random_graph',
    # Shortest Path
    'PathResult',
    'ShortestPathEngine',
    # All Pairs
    'PathPair',
    'AllPairsResult',
    'AllPairsEngine',
    # Routing
    'TransportMethod',
    'RoutingAlgorithm',
    'RoutingEntry',
    'RoutingTableBuilder',
    'Router',
    'FixedRouter',
    'TableRouter',
    'AdaptiveRouter',
    'ExperienceRouter',
    'RandomRouter',
    'FloodingRouter',
    'RouteSelector',
    'create_router',
    # Traffic
    'Packet',
    'PacketStatus',
    'TransmissionRecord',
    # Statistics
    'StatisticsCollector',
    'AlgorithmComparison',
    'compare_algorithms',
    'print_algorithm_comparison',
    # Simulator
    'TransmissionSimulator',
    'Simulator'
]
