"""
Traffic Module

This module provides the packet and transmission record types moved
around by the transmission simulator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class PacketStatus(Enum):
    """Lifecycle state of a packet"""
    WAITING = "waiting"
    TRANSMITTING = "transmitting"
    DELIVERED = "delivered"


@dataclass
class Packet:
    """
    Represents a simulated packet

    Attributes:
        id: Unique packet identifier
        number: Sequence number, increasing across batches
        source: Source node ID
        destination: Destination node ID
        size: Payload size in bytes
        route: Node IDs the packet will traverse
        route_index: Index of the node the packet last left or reached
        progress: Position along the current edge, 0 to 1
        status: Waiting, transmitting or delivered
        start_offset: Delay after batch start before the packet moves
        start_time: Absolute time the packet is scheduled to start
        end_time: Time of delivery
    """
    id: str
    number: int
    source: str
    destination: str
    size: int = 1024  # bytes
    route: List[str] = field(default_factory=list)
    route_index: int = 0
    progress: float = 0.0
    status: PacketStatus = PacketStatus.WAITING
    start_offset: float = 0.0
    start_time: float = 0.0
    end_time: Optional[float] = None

    @property
    def current_node(self) -> str:
        return self.route[self.route_index]

    def get_next_hop(self) -> Optional[str]:
        """Get next node in the route"""
        if self.route_index < len(self.route) - 1:
            return self.route[self.route_index + 1]
        return None

    def is_delivered(self) -> bool:
        return self.status is PacketStatus.DELIVERED

    def hop_count(self) -> int:
        return max(len(self.route) - 1, 0)

    def get_duration(self) -> float:
        """Elapsed time from scheduled start to delivery"""
        if self.end_time is None:
            return 0.0
        return self.end_time - self.start_time


@dataclass(frozen=True)
class TransmissionRecord:
    """
    Completed transmission

    Attributes:
        packet_number: Sequence number of the delivered packet
        path: Human-readable route, e.g. "A -> B -> C"
        size: Payload size in bytes
        start_time: Scheduled start of the packet
        end_time: Delivery time
        hop_count: Edges traversed
    """
    packet_number: int
    path: str
    size: int
    start_time: float
    end_time: float
    hop_count: int = 0

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time
