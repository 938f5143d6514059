"""Decentralized elevator bank: gossiping, self-dispatching elevators."""

from .bank import ElevatorBank
from .config import BankConfig, GossipConfig
from .elevator import Elevator
from .errors import BankConfigurationError, FloorOutOfRangeError

__all__ = [
    "BankConfig",
    "BankConfigurationError",
    "Elevator",
    "ElevatorBank",
    "FloorOutOfRangeError",
    "GossipConfig",
]
