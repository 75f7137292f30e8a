"""
Statistics Collection Module

This module provides classes for collecting and analyzing transmission
history, and for comparing the single-pair and all-pairs shortest path
engines on the same graph.
"""

import time
import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .topology import Graph
from .shortest_path import ShortestPathEngine
from .all_pairs import AllPairsEngine, PathPair
from .traffic import TransmissionRecord


class StatisticsCollector:
    """
    Collects and aggregates transmission statistics

    Tracks metrics including:
    - Packets sent, delivered and dropped (no route)
    - Transmission duration
    - Hop count
    - Completed transmission history
    """

    def __init__(self):
        """Initialize statistics collector"""
        # Packet-level statistics
        self.packets_sent: int = 0
        self.packets_delivered: int = 0
        self.packets_dropped: int = 0

        # Byte-level statistics
        self.bytes_sent: int = 0
        self.bytes_delivered: int = 0
        self.bytes_dropped: int = 0

        # Per-transmission samples
        self.durations: List[float] = []
        self.hop_counts: List[int] = []
        self.records: List[TransmissionRecord] = []

    def record_packet_sent(self, packet_size: int):
        """Record packet handed to the simulator"""
        self.packets_sent += 1
        self.bytes_sent += packet_size

    def record_packet_dropped(self, packet_size: int):
        """Record packet that could not be routed"""
        self.packets_dropped += 1
        self.bytes_dropped += packet_size

    def record_transmission(self, record: TransmissionRecord):
        """Record a completed transmission"""
        self.packets_delivered += 1
        self.bytes_delivered += record.size
        self.durations.append(record.duration)
        self.hop_counts.append(record.hop_count)
        self.records.append(record)

    def get_delivery_rate(self) -> float:
        """Delivered packets over all requested packets"""
        total = self.packets_sent + self.packets_dropped
        if total == 0:
            return 0.0
        return self.packets_delivered / total

    def get_average_duration(self) -> float:
        if not self.durations:
            return 0.0
        return float(np.mean(self.durations))

    def get_duration_percentile(self, p: float) -> float:
        """Get transmission duration percentile"""
        if not self.durations:
            return 0.0
        return float(np.percentile(self.durations, p))

    def get_average_hop_count(self) -> float:
        if not self.hop_counts:
            return 0.0
        return float(np.mean(self.hop_counts))

    def get_summary(self) -> Dict:
        """Get comprehensive statistics summary"""
        return {
            "overview": {
                "total_packets_sent": self.packets_sent,
                "total_packets_delivered": self.packets_delivered,
                "total_packets_dropped": self.packets_dropped,
                "delivery_rate": self.get_delivery_rate(),
            },
            "bytes": {
                "sent": self.bytes_sent,
                "delivered": self.bytes_delivered,
                "dropped": self.bytes_dropped,
            },
            "duration": {
                "avg": self.get_average_duration(),
                "p50": self.get_duration_percentile(50),
                "p95": self.get_duration_percentile(95),
                "max": float(np.max(self.durations)) if self.durations else 0.0,
            },
            "hop_count": {
                "avg": self.get_average_hop_count(),
                "max": int(np.max(self.hop_counts)) if self.hop_counts else 0,
            },
        }

    def reset(self):
        """Reset all statistics"""
        self.packets_sent = 0
        self.packets_delivered = 0
        self.packets_dropped = 0
        self.bytes_sent = 0
        self.bytes_delivered = 0
        self.bytes_dropped = 0
        self.durations = []
        self.hop_counts = []
        self.records = []

    def to_dataframe(self) -> pd.DataFrame:
        """Convert transmission history to DataFrame"""
        return pd.DataFrame(
            [
                {
                    "packet_number": r.packet_number,
                    "path": r.path,
                    "size": r.size,
                    "start_time": r.start_time,
                    "end_time": r.end_time,
                    "duration": r.duration,
                    "hop_count": r.hop_count,
                }
                for r in self.records
            ],
            columns=["packet_number", "path", "size", "start_time",
                     "end_time", "duration", "hop_count"]
        )

    def print_summary(self):
        """Print formatted statistics summary"""
        summary = self.get_summary()

        print("\n" + "=" * 60)
        print("TRANSMISSION STATISTICS SUMMARY")
        print("=" * 60)

        print("\n--- Overview ---")
        for key, value in summary["overview"].items():
            if isinstance(value, float):
                print(f"  {key}: {value:.4f}")
            else:
                print(f"  {key}: {value}")

        print("\n--- Duration (ticks) ---")
        print(f"  Average: {summary['duration']['avg']:.2f}")
        print(f"  P50: {summary['duration']['p50']:.2f}")
        print(f"  P95: {summary['duration']['p95']:.2f}")
        print(f"  Max: {summary['duration']['max']:.2f}")

        print("\n--- Hop Count ---")
        print(f"  Average: {summary['hop_count']['avg']:.2f}")
        print(f"  Max: {summary['hop_count']['max']}")

        print("\n" + "=" * 60)


@dataclass
class AlgorithmComparison:
    """
    Dijkstra-for-every-pair vs. Floyd-Warshall on one graph

    Attributes:
        dijkstra_time_ms: Wall time of running Dijkstra for every ordered pair
        floyd_time_ms: Wall time of one Floyd-Warshall run
        dijkstra_pairs: Reachable pairs found by Dijkstra
        floyd_pairs: Reachable pairs found by Floyd-Warshall
        mismatches: (from, to) pairs whose reachability or distance differ
    """
    dijkstra_time_ms: float
    floyd_time_ms: float
    dijkstra_pairs: List[PathPair] = field(default_factory=list)
    floyd_pairs: List[PathPair] = field(default_factory=list)
    mismatches: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def faster_algorithm(self) -> str:
        return "dijkstra" if self.dijkstra_time_ms <= self.floyd_time_ms else "floyd"

    @property
    def time_difference_ms(self) -> float:
        return abs(self.dijkstra_time_ms - self.floyd_time_ms)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per ordered pair with both algorithms' results"""
        columns = ["from", "to", "distance", "path"]

        def frame(pairs: List[PathPair]) -> pd.DataFrame:
            return pd.DataFrame(
                [(p.source, p.destination, p.distance, p.path) for p in pairs],
                columns=columns
            )

        return frame(self.dijkstra_pairs).merge(
            frame(self.floyd_pairs),
            on=["from", "to"],
            how="outer",
            suffixes=("_dijkstra", "_floyd")
        )


def compare_algorithms(
    graph: Graph,
    shortest_path_engine: Optional[ShortestPathEngine] = None,
    all_pairs_engine: Optional[AllPairsEngine] = None
) -> AlgorithmComparison:
    """
    Time both shortest path engines over every ordered pair of a graph

    Args:
        graph: Graph snapshot
        shortest_path_engine: Dijkstra engine (default instance if None)
        all_pairs_engine: Floyd-Warshall engine (default instance if None)

    Returns:
        AlgorithmComparison with timings, pairs and any disagreements
    """
    dijkstra = shortest_path_engine or ShortestPathEngine()
    floyd = all_pairs_engine or AllPairsEngine()
    nodes = graph.node_ids()

    start = time.perf_counter()
    dijkstra_pairs = []
    for source in nodes:
        for destination in nodes:
            if source == destination:
                continue
            result = dijkstra.find(graph, source, destination)
            if result.found:
                dijkstra_pairs.append(PathPair(
                    source=source,
                    destination=destination,
                    distance=result.distance,
                    path=result.path
                ))
    dijkstra_time = (time.perf_counter() - start) * 1000

    start = time.perf_counter()
    floyd_result = floyd.compute_all_pairs(graph)
    floyd_time = (time.perf_counter() - start) * 1000

    dijkstra_distances = {(p.source, p.destination): p.distance for p in dijkstra_pairs}
    floyd_distances = {(p.source, p.destination): p.distance for p in floyd_result.pairs}
    mismatches = [
        key for key in sorted(set(dijkstra_distances) | set(floyd_distances))
        if dijkstra_distances.get(key) != floyd_distances.get(key)
    ]

    return AlgorithmComparison(
        dijkstra_time_ms=dijkstra_time,
        floyd_time_ms=floyd_time,
        dijkstra_pairs=dijkstra_pairs,
        floyd_pairs=floyd_result.pairs,
        mismatches=mismatches
    )


def print_algorithm_comparison(
    comparison: AlgorithmComparison,
    graph: Optional[Graph] = None
):
    """
    Print a formatted comparison of the shortest path engines

    Args:
        comparison: Result of compare_algorithms
        graph: Used for node labels when given
    """
    def label_path(path: List[str]) -> str:
        return graph.format_path(path) if graph is not None else " -> ".join(path)

    print("\n" + "=" * 80)
    print("SHORTEST PATH ALGORITHM COMPARISON")
    print("=" * 80)

    print(f"\n  Dijkstra (all pairs): {comparison.dijkstra_time_ms:.2f} ms")
    print(f"  Floyd-Warshall:       {comparison.floyd_time_ms:.2f} ms")
    print(f"  Faster: {comparison.faster_algorithm} "
          f"by {comparison.time_difference_ms:.2f} ms")

    print(f"\n--- Pairs ({len(comparison.floyd_pairs)} reachable) ---")
    print(f"{'Path':<50} {'Dijkstra':>12} {'Floyd':>12}")
    print("-" * 76)

    df = comparison.to_dataframe()
    for _, row in df.iterrows():
        path = row["path_floyd"] if isinstance(row["path_floyd"], list) else row["path_dijkstra"]
        print(f"{label_path(path):<50} {row['distance_dijkstra']:>12.2f} "
              f"{row['distance_floyd']:>12.2f}")

    if comparison.mismatches:
        print(f"\n  WARNING: {len(comparison.mismatches)} pair(s) disagree")

    print("\n" + "=" * 80)
