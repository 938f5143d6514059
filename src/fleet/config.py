from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from scheduler import FloorRange


@dataclass
class GossipConfig:
    """How many peers an elevator exchanges state with per gossip round."""

    fanout: int = 2

    def __post_init__(self) -> None:
        if self.fanout < 0:
            raise ValueError(f"Gossip fanout must be non-negative, got {self.fanout}")


@dataclass
class BankConfig:
    """Settings for assembling a bank of identical elevators."""

    elevator_count: int = 2
    floor_range: FloorRange = field(default_factory=lambda: FloorRange(0, 10))
    gossip: GossipConfig = field(default_factory=GossipConfig)
    random_seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "BankConfig":
        range_cfg = data.get("floor_range", {})
        return cls(
            elevator_count=data.get("elevator_count", 2),
            floor_range=FloorRange(range_cfg.get("min", 0), range_cfg.get("max", 10)),
            gossip=GossipConfig(**data.get("gossip", {})),
            random_seed=data.get("random_seed"),
        )
