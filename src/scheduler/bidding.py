from __future__ import annotations

import sys
from dataclasses import dataclass

from .floor import Direction, FloorDestination
from .interface import ElevatorSnapshot


@dataclass(frozen=True)
class BidWeights:
    """Constants of the auction cost function."""

    with_direction: float = 1.1
    against_direction: float = 2.0
    tie_break_modulus: int = 1000
    tie_break_scale: float = 10000.0
    sentinel: float = sys.float_info.max


DEFAULT_WEIGHTS = BidWeights()


def tie_break(elevator_id: int, weights: BidWeights = DEFAULT_WEIGHTS) -> float:
    return (elevator_id % weights.tie_break_modulus) / weights.tie_break_scale


def calc_bid_cost(
    request: FloorDestination,
    snapshot: ElevatorSnapshot,
    weights: BidWeights = DEFAULT_WEIGHTS,
) -> float:
    """Price ``request`` for the elevator described by ``snapshot``.

    Elevators holding priority work bid close to ``weights.sentinel`` so any
    idle elevator wins against them; among busy elevators the one with more
    priority work queued bids higher. Otherwise the cost is the distance,
    scaled up by pending ordinary work relative to the bank size and by a
    penalty when the elevator is heading away from the request's direction.
    Resting elevators, and elevators already at the floor, skip the direction
    penalty. The identity-derived tie break keeps equal bids apart.
    """

    nudge = tie_break(snapshot.elevator_id, weights)

    if snapshot.priority_count > 0:
        return weights.sentinel - weights.sentinel / (nudge + snapshot.priority_count + 1)

    load_multiplier = 1 + snapshot.pending_count / max(1, snapshot.floor_count)
    distance = abs(snapshot.position.floors_away(request))

    if snapshot.direction == Direction.REST or snapshot.position.has_floor_number(request):
        return nudge + distance * load_multiplier

    if request.has_same_direction(snapshot.direction):
        direction_multiplier = weights.with_direction
    else:
        direction_multiplier = weights.against_direction
    return nudge + distance * direction_multiplier * load_multiplier


class AuctionBidPolicy:
    """Distance, load and direction aware pricing for the gossip auction."""

    def __init__(self, weights: BidWeights = DEFAULT_WEIGHTS) -> None:
        self.weights = weights

    def cost(self, request: FloorDestination, snapshot: ElevatorSnapshot) -> float:
        return calc_bid_cost(request, snapshot, self.weights)
