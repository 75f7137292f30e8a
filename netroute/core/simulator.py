"""
Network Simulator Module

This module provides the discrete-time transmission simulator that moves
packets along their routes, and the main simulation engine that ties
graph, routing table, route selection and statistics together.
"""

import warnings
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union
from tqdm import tqdm

from .topology import Graph
from .routing import (
    DEFAULT_MAX_HOPS,
    Route,
    RouteSelector,
    RoutingAlgorithm,
    RoutingTable,
    RoutingTableBuilder,
    TransportMethod,
    parse_enum,
)
from .traffic import Packet, PacketStatus, TransmissionRecord
from .statistics import StatisticsCollector


DEFAULT_STEP_SIZE = 0.1        # ten ticks per edge
DEFAULT_TIME_STEP = 1.0        # clock advance per implicit tick
DEFAULT_LAUNCH_INTERVAL = 5.0  # stagger between packets sharing a route
DEFAULT_PACKET_SIZE = 1024     # bytes

# Absorbs float drift from repeated step additions (10 * 0.1 != 1.0)
_PROGRESS_EPSILON = 1e-9


class TransmissionSimulator:
    """
    Discrete-tick packet transmission

    Packets go waiting -> transmitting -> delivered. A packet starts moving
    on the first tick whose time is strictly after its start time, then
    gains ``step_size`` progress per tick along the current edge. Finishing
    the edge into the last node of its route delivers it and emits one
    TransmissionRecord.

    The simulator is externally clocked: callers invoke ``tick`` from their
    own timer and stop once every packet is delivered.
    """

    def __init__(
        self,
        step_size: float = DEFAULT_STEP_SIZE,
        time_step: float = DEFAULT_TIME_STEP,
        launch_interval: float = DEFAULT_LAUNCH_INTERVAL,
        path_formatter: Optional[Callable[[Sequence[str]], str]] = None
    ):
        """
        Initialize transmission simulator

        Args:
            step_size: Edge progress per tick (0 < step_size <= 1)
            time_step: Clock advance when tick is called without a time
            launch_interval: Start offset between consecutive packets of a
                             single-route batch
            path_formatter: Turns a route into the record's path string
                            (defaults to joining node ids with " -> ")
        """
        if not 0 < step_size <= 1:
            raise ValueError(f"step_size must be in (0, 1], got {step_size}")
        if time_step <= 0:
            raise ValueError(f"time_step must be positive, got {time_step}")
        if launch_interval < 0:
            raise ValueError(f"launch_interval must be non-negative, got {launch_interval}")

        self.step_size = step_size
        self.time_step = time_step
        self.launch_interval = launch_interval
        self.path_formatter = path_formatter or (lambda route: " -> ".join(route))

        # Simulation state
        self.current_time: float = 0.0
        self.packet_counter: int = 0

    def create_batch(
        self,
        route_or_routes: Union[Route, List[Route]],
        size: int = DEFAULT_PACKET_SIZE,
        count: int = 1,
        start_time: Optional[float] = None,
        stagger: Optional[bool] = None
    ) -> List[Packet]:
        """
        Create the packets of one transmission request

        A single route yields ``count`` packets sharing it; a list of routes
        yields one packet per route, at most ``count``. Empty routes are
        skipped.

        Args:
            route_or_routes: A route, or a list of routes
            size: Payload size in bytes
            count: Number of packets requested
            start_time: Batch start (defaults to the current clock)
            stagger: Offset consecutive packets by launch_interval; defaults
                     to True for a single route and False for a route list

        Returns:
            List of waiting packets
        """
        if size <= 0:
            raise ValueError(f"Packet size must be positive, got {size}")
        if count < 1:
            raise ValueError(f"Packet count must be at least 1, got {count}")

        if route_or_routes and isinstance(route_or_routes[0], str):
            routes = [list(route_or_routes)] * count
            if stagger is None:
                stagger = True
        else:
            routes = [list(r) for r in route_or_routes][:count]
            if stagger is None:
                stagger = False

        batch_start = self.current_time if start_time is None else start_time
        packets = []
        for route in routes:
            if not route:
                continue
            offset = len(packets) * self.launch_interval if stagger else 0.0
            self.packet_counter += 1
            packets.append(Packet(
                id=f"packet-{self.packet_counter}",
                number=self.packet_counter,
                source=route[0],
                destination=route[-1],
                size=size,
                route=route,
                start_offset=offset,
                start_time=batch_start + offset
            ))
        return packets

    def tick(
        self,
        packets: List[Packet],
        now: Optional[float] = None
    ) -> Tuple[List[Packet], List[TransmissionRecord]]:
        """
        Advance every packet by one time step

        Args:
            packets: Packets of the active batch(es)
            now: Current time; omitted advances the clock by time_step

        Returns:
            (packets, records emitted by packets delivered on this tick)
        """
        if now is None:
            now = self.current_time + self.time_step
        self.current_time = now

        records = []
        for packet in packets:
            if packet.status is PacketStatus.DELIVERED:
                continue
            if packet.status is PacketStatus.WAITING:
                if now <= packet.start_time:
                    continue
                packet.status = PacketStatus.TRANSMITTING

            last_index = len(packet.route) - 1
            if last_index <= 0:
                records.append(self._deliver(packet, now))
                continue

            packet.progress += self.step_size
            if packet.progress >= 1.0 - _PROGRESS_EPSILON:
                if packet.route_index + 1 >= last_index:
                    packet.route_index = last_index
                    records.append(self._deliver(packet, now))
                else:
                    packet.route_index += 1
                    packet.progress = 0.0

        return packets, records

    def _deliver(self, packet: Packet, now: float) -> TransmissionRecord:
        packet.status = PacketStatus.DELIVERED
        packet.progress = 1.0
        packet.end_time = now
        return TransmissionRecord(
            packet_number=packet.number,
            path=self.path_formatter(packet.route),
            size=packet.size,
            start_time=packet.start_time,
            end_time=now,
            hop_count=packet.hop_count()
        )

    @staticmethod
    def is_complete(packets: List[Packet]) -> bool:
        """Whether every packet has been delivered"""
        return all(p.is_delivered() for p in packets)

    def run_until_complete(
        self,
        packets: List[Packet],
        max_ticks: int = 10000,
        progress_bar: bool = False
    ) -> List[TransmissionRecord]:
        """
        Tick until every packet is delivered or max_ticks is reached

        Returns:
            All records emitted, in delivery order
        """
        records = []
        iterator = range(max_ticks)
        if progress_bar:
            iterator = tqdm(iterator, desc="Transmitting", unit="tick")

        for _ in iterator:
            if self.is_complete(packets):
                break
            _, new_records = self.tick(packets)
            records.extend(new_records)
        return records

    def reset(self):
        """Reset clock and sequence numbers"""
        self.current_time = 0.0
        self.packet_counter = 0


class Simulator:
    """
    Main simulation engine

    Owns a graph snapshot and its routing table, turns transmission
    requests into packet batches and collects completed transmissions.
    """

    def __init__(
        self,
        graph: Graph,
        step_size: float = DEFAULT_STEP_SIZE,
        time_step: float = DEFAULT_TIME_STEP,
        launch_interval: float = DEFAULT_LAUNCH_INTERVAL,
        seed: Optional[int] = None
    ):
        """
        Initialize simulator

        Args:
            graph: Graph snapshot
            step_size: Edge progress per tick
            time_step: Simulation time per tick
            launch_interval: Stagger between packets sharing a route
            seed: Random seed for random routing
        """
        self.seed = seed
        self.table_builder = RoutingTableBuilder()
        self.selector = RouteSelector(seed=seed)
        self.transmitter = TransmissionSimulator(
            step_size=step_size,
            time_step=time_step,
            launch_interval=launch_interval,
            path_formatter=self._format_path
        )
        self.stats = StatisticsCollector()

        self.graph = graph
        self.routing_table: RoutingTable = self.table_builder.build(graph)

        # Simulation state
        self.packets_in_transit: List[Packet] = []
        self.history: List[TransmissionRecord] = []

        # Configuration
        self.verbose = False

    def _format_path(self, route: Sequence[str]) -> str:
        return self.graph.format_path(route)

    @property
    def current_time(self) -> float:
        return self.transmitter.current_time

    def set_graph(self, graph: Graph):
        """Replace the graph snapshot and rebuild the routing table"""
        self.graph = graph
        self.routing_table = self.table_builder.build(graph)

    def send(
        self,
        source: str,
        destination: str,
        size: int = DEFAULT_PACKET_SIZE,
        count: int = 1,
        transport: Union[str, TransportMethod] = TransportMethod.VIRTUAL_CIRCUIT,
        algorithm: Union[str, RoutingAlgorithm] = RoutingAlgorithm.FIXED,
        max_hops: int = DEFAULT_MAX_HOPS
    ) -> List[Packet]:
        """
        Start a transmission request

        Under virtual-circuit transport the route is selected once and
        shared by every packet. Under datagram transport each packet gets
        its own selection. Flooding spawns one packet per discovered path,
        at most ``count``.

        Args:
            source: Source node ID
            destination: Destination node ID
            size: Payload size in bytes
            count: Number of packets
            transport: "virtual-circuit" or "datagram"
            algorithm: Routing algorithm name
            max_hops: Hop bound for flooding

        Returns:
            Packets created (empty if no route was found)
        """
        transport = parse_enum(TransportMethod, transport)
        algorithm = parse_enum(RoutingAlgorithm, algorithm)

        def select():
            return self.selector.select_route(
                transport, algorithm, self.graph, self.routing_table,
                source, destination, max_hops=max_hops, max_paths=count
            )

        if algorithm is RoutingAlgorithm.FLOODING:
            packets = self.transmitter.create_batch(select(), size, count)
        elif transport is TransportMethod.VIRTUAL_CIRCUIT:
            route = select()
            packets = self.transmitter.create_batch(route, size, count) if route else []
        else:
            routes = [select() for _ in range(count)]
            packets = self.transmitter.create_batch(routes, size, count, stagger=True)

        if algorithm is RoutingAlgorithm.FLOODING:
            dropped = 0 if packets else count
        else:
            dropped = count - len(packets)
        for _ in range(dropped):
            self.stats.record_packet_dropped(size)

        if not packets:
            warnings.warn(
                f"No route from {source} to {destination} using "
                f"{transport.value}/{algorithm.value} routing",
                UserWarning
            )
            return []

        for packet in packets:
            self.stats.record_packet_sent(packet.size)
        self.packets_in_transit.extend(packets)

        if self.verbose:
            print(f"Sent {len(packets)} packet(s) {self.graph.get_label(source)} -> "
                  f"{self.graph.get_label(destination)} "
                  f"({transport.value}, {algorithm.value})")
        return packets

    def step(self) -> List[TransmissionRecord]:
        """Execute one simulation tick"""
        _, records = self.transmitter.tick(self.packets_in_transit)
        for record in records:
            self.history.append(record)
            self.stats.record_transmission(record)
            if self.verbose:
                print(f"  Packet #{record.packet_number} delivered via "
                      f"{record.path} in {record.duration:g}")

        # Delivered packets are discarded once their record exists
        if records:
            self.packets_in_transit = [
                p for p in self.packets_in_transit if not p.is_delivered()
            ]
        return records

    def run(
        self,
        max_ticks: int = 10000,
        progress_bar: bool = True
    ) -> StatisticsCollector:
        """
        Tick until every packet in transit is delivered

        Args:
            max_ticks: Upper bound on ticks
            progress_bar: Show progress bar

        Returns:
            Statistics collector with results
        """
        if self.verbose:
            print(f"Starting simulation: {len(self.packets_in_transit)} packets in transit")
            print(f"Topology: {self.graph}")

        iterator = range(max_ticks)
        if progress_bar:
            iterator = tqdm(iterator, desc="Simulating", unit="tick")

        for _ in iterator:
            if not self.packets_in_transit:
                break
            self.step()

        return self.stats

    def reset(self):
        """Reset simulation state"""
        self.packets_in_transit = []
        self.history = []
        self.transmitter.reset()
        self.stats.reset()

    def get_results(self) -> Dict:
        """Get comprehensive simulation results"""
        return {
            "simulation_config": {
                "duration": self.current_time,
                "time_step": self.transmitter.time_step,
                "step_size": self.transmitter.step_size,
                "launch_interval": self.transmitter.launch_interval,
                "num_nodes": len(self.graph.nodes),
                "num_edges": len(self.graph.edges),
            },
            "statistics": self.stats.get_summary(),
            "packets_in_transit": len(self.packets_in_transit),
        }

    def print_results(self):
        """Print simulation results"""
        print("\n" + "=" * 70)
        print("SIMULATION RESULTS")
        print("=" * 70)

        results = self.get_results()

        print("\n--- Configuration ---")
        for key, value in results["simulation_config"].items():
            print(f"  {key}: {value}")

        self.stats.print_summary()

        print("\n--- Transmission History ---")
        for record in self.history:
            print(f"  #{record.packet_number:<4} {record.path:<40} "
                  f"{record.size:>8} B  {record.duration:>8.2f}")
