from __future__ import annotations

import logging
import random
import time
from typing import Callable, Iterable, List, Optional

from scheduler import Direction, FloorDestination, FloorRange

from .config import BankConfig, GossipConfig
from .elevator import Elevator
from .errors import BankConfigurationError

logger = logging.getLogger(__name__)


class ElevatorBank:
    """Group of elevators serving the same floors, each deciding on its own.

    The bank only wires peers together and fans requests out; every member
    runs its own auction, so a request can end up with zero, one or several
    acceptors.
    """

    def __init__(self, elevators: Iterable[Elevator]) -> None:
        self.elevators: List[Elevator] = sorted(elevators, key=lambda e: e.elevator_id)
        self.assemble(self.elevators)

    @classmethod
    def create(
        cls,
        elevator_count: int,
        floor_range: FloorRange,
        gossip: Optional[GossipConfig] = None,
        random_seed: Optional[int] = None,
        clock: Callable[[], int] = time.time_ns,
    ) -> "ElevatorBank":
        rng = random.Random(random_seed)
        elevators = [
            Elevator(i, floor_range, gossip=gossip, rng=rng, clock=clock)
            for i in range(elevator_count)
        ]
        return cls(elevators)

    @classmethod
    def from_config(
        cls, config: BankConfig, clock: Callable[[], int] = time.time_ns
    ) -> "ElevatorBank":
        return cls.create(
            config.elevator_count,
            config.floor_range,
            gossip=config.gossip,
            random_seed=config.random_seed,
            clock=clock,
        )

    @staticmethod
    def assemble(elevators: List[Elevator]) -> None:
        """Give every elevator the rest of the group as its peers.

        The whole group is validated before any roster is assigned.
        """
        if not elevators:
            raise BankConfigurationError("Bank must have at least one member")
        floor_range = elevators[0].floor_range
        seen = set()
        for elevator in elevators:
            if elevator.floor_range != floor_range:
                raise BankConfigurationError(
                    f"Elevator {elevator.elevator_id} has floor range {elevator.floor_range}, "
                    f"expected {floor_range}"
                )
            if elevator.elevator_id in seen:
                raise BankConfigurationError(f"Duplicate elevator id {elevator.elevator_id} in bank")
            if elevator.assembled:
                raise BankConfigurationError(
                    f"Elevator {elevator.elevator_id} already belongs to a bank"
                )
            seen.add(elevator.elevator_id)

        for elevator in elevators:
            elevator.set_peers(elevators)
        logger.info(
            "Assembled bank of %d elevators over floors [%d, %d]",
            len(elevators),
            floor_range.min_floor,
            floor_range.max_floor,
        )

    @property
    def floor_range(self) -> FloorRange:
        return self.elevators[0].floor_range

    def submit(
        self, floor: int, direction: Direction = Direction.REST, priority: int = 0
    ) -> int:
        """Offer a request to every member and return how many accepted."""
        request = FloorDestination(floor, Direction.parse(direction), priority)
        accepted = sum(1 for elevator in self.elevators if elevator.submit(request))
        logger.debug("%d elevators accepted floor %d", accepted, floor)
        return accepted

    def drain_all(self) -> List[List[str]]:
        return [elevator.drain_all() for elevator in self.elevators]

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        for elevator in self.elevators:
            elevator.on_event(event, callback)

    def get_elevator(self, elevator_id: int) -> Optional[Elevator]:
        for elevator in self.elevators:
            if elevator.elevator_id == elevator_id:
                return elevator
        return None

    def snapshot(self) -> dict:
        return {
            "floor_range": {
                "min": self.floor_range.min_floor,
                "max": self.floor_range.max_floor,
            },
            "elevators": [elevator.snapshot().as_dict() for elevator in self.elevators],
        }
