#!/usr/bin/env python3
"""
Example: Basic Routing Simulation

This script demonstrates the basic usage of the routing simulation
framework, including:
- Building a graph and a random test graph
- Shortest paths with Dijkstra and Floyd-Warshall
- Routing tables
- Transmitting packets under different routing policies
- Analyzing results
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from netroute import (
    Node,
    Edge,
    Graph,
    ShortestPathEngine,
    AllPairsEngine,
    RoutingTableBuilder,
    Simulator,
    compare_algorithms,
    generate_random_graph,
    print_algorithm_comparison
)


def main():
    print("="*70)
    print("Routing Simulation - Basic Example")
    print("="*70)

    # =====================================================
    # Step 1: Build Graph
    # =====================================================
    print("\n[1] Building Graph...")

    graph = Graph(
        nodes=[Node("A", "A"), Node("B", "B"), Node("C", "C"), Node("D", "D")],
        edges=[
            Edge("e1", "A", "B", 5),
            Edge("e2", "B", "C", 3),
            Edge("e3", "A", "C", 8),
            Edge("e4", "C", "D", 2),
        ]
    )
    print(f"  Created: {graph}")

    # =====================================================
    # Step 2: Shortest Paths
    # =====================================================
    print("\n[2] Shortest Paths...")

    result = ShortestPathEngine().find(graph, "A", "D")
    print(f"  Dijkstra A -> D: {graph.format_path(result.path)} "
          f"(distance {result.distance})")

    all_pairs = AllPairsEngine().compute_all_pairs(graph)
    print(f"  Floyd-Warshall reachable pairs: {len(all_pairs.pairs)}")
    print(all_pairs.distance_matrix)

    # =====================================================
    # Step 3: Routing Tables
    # =====================================================
    print("\n[3] Routing Tables...")

    table = RoutingTableBuilder().build(graph)
    for node_id, entries in table.items():
        for entry in entries:
            print(f"  {node_id}: to {entry.destination} via {entry.next_hop} "
                  f"(distance {entry.distance})")

    # =====================================================
    # Step 4: Transmit Packets
    # =====================================================
    print("\n[4] Transmitting Packets...")

    simulator = Simulator(graph, seed=42)
    simulator.verbose = True

    simulator.send("A", "D", size=1024, count=3,
                   transport="virtual-circuit", algorithm="fixed")
    simulator.send("A", "D", size=512, count=2,
                   transport="datagram", algorithm="adaptive")
    simulator.send("A", "D", size=256, count=5, algorithm="flooding", max_hops=10)

    simulator.run(progress_bar=True)

    # =====================================================
    # Step 5: Analyze Results
    # =====================================================
    print("\n[5] Simulation Results:")
    simulator.print_results()

    # =====================================================
    # Step 6: Compare Shortest Path Algorithms
    # =====================================================
    print("\n[6] Comparing Algorithms on a Random Graph...")

    random_graph = generate_random_graph(num_nodes=30, seed=42)
    comparison = compare_algorithms(random_graph)
    print_algorithm_comparison(comparison, random_graph)

    print("\n" + "="*70)
    print("Simulation Complete!")
    print("="*70)

    return simulator


if __name__ == "__main__":
    main()
