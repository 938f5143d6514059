from __future__ import annotations

from .bidding import DEFAULT_WEIGHTS, AuctionBidPolicy, BidWeights, calc_bid_cost
from .floor import Direction, FloorDestination, FloorRange
from .interface import BidPolicy, ElevatorSnapshot
from .look import LookQueues

__all__ = [
    "AuctionBidPolicy",
    "BidPolicy",
    "BidWeights",
    "DEFAULT_WEIGHTS",
    "Direction",
    "ElevatorSnapshot",
    "FloorDestination",
    "FloorRange",
    "LookQueues",
    "calc_bid_cost",
]
