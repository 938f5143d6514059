from __future__ import annotations

import logging
import random
import time
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from scheduler import (
    AuctionBidPolicy,
    BidPolicy,
    Direction,
    ElevatorSnapshot,
    FloorDestination,
    FloorRange,
    LookQueues,
)

from .config import GossipConfig
from .errors import BankConfigurationError, FloorOutOfRangeError

logger = logging.getLogger(__name__)


class Elevator:
    """An elevator that bids for its own work and sweeps it with LOOK.

    Every elevator keeps the last snapshot it has heard of for each member of
    its bank, refreshed by pairwise push-pull gossip with a few random peers.
    A request is accepted when no known peer already holds it and this
    elevator's bid is the lowest among everything it knows about. Knowledge
    may be stale, so two elevators can both accept a request, or neither.
    """

    def __init__(
        self,
        elevator_id: int,
        floor_range: FloorRange,
        bid_policy: Optional[BidPolicy] = None,
        gossip: Optional[GossipConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], int] = time.time_ns,
    ) -> None:
        if elevator_id < 0:
            raise ValueError(f"Elevator id must be non-negative, got {elevator_id}")
        self.elevator_id = elevator_id
        self.floor_range = floor_range
        self.position = FloorDestination(0)
        self.direction = Direction.REST
        self.queues = LookQueues()
        self.bid_policy: BidPolicy = bid_policy or AuctionBidPolicy()
        self.gossip_config = gossip or GossipConfig()
        self.random = rng or random.Random()
        self.clock = clock
        self.peers: Tuple["Elevator", ...] = ()
        self.knowledge: Dict[int, ElevatorSnapshot] = {}
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self._assembled = False

    def __repr__(self) -> str:  # pragma: no cover - convenience
        return (
            f"Elevator(id={self.elevator_id}, floor={self.position.floor}, "
            f"direction={self.direction.name}, pending={len(self.queues)})"
        )

    # Bank membership

    def set_peers(self, bank: Iterable["Elevator"]) -> None:
        """Record every other member of ``bank`` as a gossip peer.

        The bank must be non-empty and share this elevator's floor range.
        Membership is fixed once assigned.
        """
        members = list(bank)
        if not members:
            raise BankConfigurationError("Bank must have at least one member")
        if self._assembled:
            raise BankConfigurationError(f"Elevator {self.elevator_id} already belongs to a bank")
        peers: Dict[int, Elevator] = {}
        for member in members:
            if member.floor_range != self.floor_range:
                raise BankConfigurationError(
                    f"Elevator {member.elevator_id} has floor range inconsistent with "
                    f"elevator {self.elevator_id}"
                )
            if member is self:
                continue
            if member.elevator_id == self.elevator_id or member.elevator_id in peers:
                raise BankConfigurationError(f"Duplicate elevator id {member.elevator_id} in bank")
            peers[member.elevator_id] = member
        self.peers = tuple(peers[elevator_id] for elevator_id in sorted(peers))
        self._assembled = True

    @property
    def assembled(self) -> bool:
        return self._assembled

    # State dissemination

    def snapshot(self) -> ElevatorSnapshot:
        return ElevatorSnapshot(
            elevator_id=self.elevator_id,
            position=self.position,
            direction=self.direction,
            priority_count=self.queues.priority_count,
            pending_count=self.queues.ordinary_count,
            floor_count=self.floor_range.num_floors,
            requests=self.queues.pending(),
            created=self.clock(),
        )

    def known_snapshots(self) -> Dict[int, ElevatorSnapshot]:
        self._refresh_self()
        return dict(self.knowledge)

    def merge_snapshots(self, incoming: Mapping[int, ElevatorSnapshot]) -> None:
        """Keep, per elevator, whichever snapshot was created last."""
        for elevator_id, snapshot in incoming.items():
            current = self.knowledge.get(elevator_id)
            if current is None or snapshot.is_newer_than(current):
                self.knowledge[elevator_id] = snapshot
        self._refresh_self()

    def gossip(self) -> None:
        if not self.peers:
            return
        count = min(self.gossip_config.fanout, len(self.peers))
        partners = self.random.sample(self.peers, count)
        partner_ids = [partner.elevator_id for partner in partners]
        logger.debug("Elevator %d gossiping with %s", self.elevator_id, partner_ids)
        self._emit("gossip", {"elevator_id": self.elevator_id, "partners": partner_ids})
        for partner in partners:
            partner.merge_snapshots(self.known_snapshots())
            self.merge_snapshots(partner.known_snapshots())

    def _refresh_self(self) -> ElevatorSnapshot:
        snapshot = self.snapshot()
        self.knowledge[self.elevator_id] = snapshot
        return snapshot

    # Admission

    def request(
        self, floor: int, direction: Direction = Direction.REST, priority: int = 0
    ) -> bool:
        return self.submit(FloorDestination(floor, Direction.parse(direction), priority))

    def submit(self, destination: FloorDestination) -> bool:
        """Bid for ``destination`` and queue it if this elevator wins.

        Returns False without touching any state when the floor is outside
        this elevator's range.
        """
        if not isinstance(destination, FloorDestination):
            raise TypeError(f"Expected a FloorDestination, got {type(destination).__name__}")
        if destination.is_outside(self.floor_range):
            return self._reject(destination, "out_of_range")

        self.gossip()
        own = self._refresh_self()
        if self._peer_has_request(destination):
            return self._reject(destination, "duplicate")

        own_cost = self.bid_policy.cost(destination, own)
        lowest = own_cost
        for snapshot in self.knowledge.values():
            cost = self.bid_policy.cost(destination, snapshot)
            logger.debug(
                "Elevator %d prices elevator %d at %f for floor %d",
                self.elevator_id,
                snapshot.elevator_id,
                cost,
                destination.floor,
            )
            lowest = min(lowest, cost)
        self._emit(
            "bid",
            {
                "elevator_id": self.elevator_id,
                "request": destination.as_dict(),
                "cost": own_cost,
                "lowest": lowest,
            },
        )
        if own_cost > lowest:
            return self._reject(destination, "outbid")

        queue = self.queues.file(destination, self.position, self.direction)
        self._refresh_self()
        logger.debug(
            "Elevator %d accepted floor %d into %s queue", self.elevator_id, destination.floor, queue
        )
        self._emit(
            "accepted",
            {"elevator_id": self.elevator_id, "request": destination.as_dict(), "queue": queue},
        )
        return True

    def _peer_has_request(self, destination: FloorDestination) -> bool:
        return any(
            snapshot.has_request(destination)
            for elevator_id, snapshot in self.knowledge.items()
            if elevator_id != self.elevator_id
        )

    def _reject(self, destination: FloorDestination, reason: str) -> bool:
        logger.debug(
            "Elevator %d rejected floor %d (%s)", self.elevator_id, destination.floor, reason
        )
        self._emit(
            "rejected",
            {"elevator_id": self.elevator_id, "request": destination.as_dict(), "reason": reason},
        )
        return False

    # Scheduling

    def pending(self) -> FrozenSet[FloorDestination]:
        return self.queues.pending()

    def advance(self) -> Optional[FloorDestination]:
        """Move to the next destination of the LOOK sweep.

        Priority work always goes first. Returns None, and comes to rest,
        when nothing is pending.
        """
        destination = self.queues.take(self.direction)
        self._go_to(destination)
        return destination

    def drain_all(self) -> List[str]:
        """Serve every pending destination and return the visited floors in order."""
        visited: List[str] = []
        while not self.queues.is_empty():
            self.gossip()
            destination = self.advance()
            if destination is not None:
                visited.append(destination.label)
        return visited

    def _go_to(self, destination: Optional[FloorDestination]) -> None:
        if destination is None:
            self.direction = Direction.REST
            return
        if destination.is_outside(self.floor_range):
            raise FloorOutOfRangeError(
                self.elevator_id,
                destination.floor,
                self.floor_range.min_floor,
                self.floor_range.max_floor,
            )

        floors_away = self.position.floors_away(destination)
        if floors_away > 0:
            self.direction = Direction.UP
        elif floors_away < 0:
            self.direction = Direction.DOWN
        self.position = destination
        logger.debug(
            "Elevator %d moved to floor %d heading %s",
            self.elevator_id,
            destination.floor,
            self.direction.name,
        )
        self._emit(
            "move",
            {
                "elevator_id": self.elevator_id,
                "floor": destination.floor,
                "direction": self.direction.name.lower(),
            },
        )

    # Observability

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
