from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Protocol

from .floor import Direction, FloorDestination


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Point-in-time view of one elevator's workload, exchanged by gossip."""

    elevator_id: int
    position: FloorDestination
    direction: Direction
    priority_count: int
    pending_count: int
    floor_count: int
    requests: FrozenSet[FloorDestination] = field(default_factory=frozenset)
    created: int = 0

    def has_request(self, request: FloorDestination) -> bool:
        return request in self.requests

    def is_newer_than(self, other: "ElevatorSnapshot") -> bool:
        return other.created < self.created

    def as_dict(self) -> dict:
        return {
            "id": self.elevator_id,
            "floor": self.position.floor,
            "direction": self.direction.name.lower(),
            "priority_count": self.priority_count,
            "pending_count": self.pending_count,
            "floor_count": self.floor_count,
            "requests": [request.as_dict() for request in sorted(self.requests)],
            "created": self.created,
        }


class BidPolicy(Protocol):
    """Strategy interface for pricing a request against an elevator snapshot."""

    def cost(self, request: FloorDestination, snapshot: ElevatorSnapshot) -> float:
        """
        Return the bid cost of ``snapshot``'s elevator serving ``request``.

        Lower is more willing. Implementations must be pure functions of
        their inputs so every elevator computes identical costs for a peer.
        """
        ...
