"""
Network Routing Simulation Framework

Shortest path engines, routing tables, route selection policies and a
discrete-time packet transmission simulator over small weighted
directed graphs.

Modules:
- core: Graph model, path engines, routing, simulation and statistics
"""

from .core import (
    # Topology
    Node,
    Edge,
    Graph,
    GraphError,
    InvalidGraphReference,
    InvalidEdgeWeight,
    generate_random_graph,
    # Path engines
    PathResult,
    ShortestPathEngine,
    PathPair,
    AllPairsResult,
    AllPairsEngine,
    # Routing
    TransportMethod,
    RoutingAlgorithm,
    RoutingEntry,
    RoutingTableBuilder,
    Router,
    RouteSelector,
    create_router,
    # Traffic
    Packet,
    PacketStatus,
    TransmissionRecord,
    # Statistics
    StatisticsCollector,
    AlgorithmComparison,
    compare_algorithms,
    print_algorithm_comparison,
    # Simulator
    TransmissionSimulator,
    Simulator
)

__version__ = "0.1.0"

__all__ = [
    # Core - Topology
    'Node',
    'Edge',
    'Graph',
    'GraphError',
    'InvalidGraphReference',
    'InvalidEdgeWeight',
    'generate_random_graph',
    # Core - Path engines
    'PathResult',
    'ShortestPathEngine',
    'PathPair',
    'AllPairsResult',
    'AllPairsEngine',
    # Core - Routing
    'TransportMethod',
    'RoutingAlgorithm',
    'RoutingEntry',
    'RoutingTableBuilder',
    'Router',
    'RouteSelector',
    'create_router',
    # Core - Traffic
    'Packet',
    'PacketStatus',
    'TransmissionRecord',
    # Core - Statistics
    'StatisticsCollector',
    'AlgorithmComparison',
    'compare_algorithms',
    'print_algorithm_comparison',
    # Core - Simulator
    'TransmissionSimulator',
    'Simulator'
]
