from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import IntEnum
from functools import total_ordering
from typing import Union


class Direction(IntEnum):
    """Travel intent of an elevator or a hall call."""

    DOWN = -1
    REST = 0
    UP = 1

    @classmethod
    def parse(cls, value: Union["Direction", str, int, None]) -> "Direction":
        if value is None:
            return cls.REST
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown direction '{value}'. Available: up, down, rest") from None
        return cls(value)

    def compatible(self, other: "Direction") -> bool:
        """REST is compatible with everything, otherwise directions must match."""
        return self == Direction.REST or other == Direction.REST or self == other


@dataclass(frozen=True)
class FloorRange:
    """Inclusive bounds of the floors an elevator (and its bank) may visit."""

    min_floor: int
    max_floor: int

    def __post_init__(self) -> None:
        if self.max_floor < self.min_floor:
            raise ValueError(
                f"Max floor can't be less than min floor ({self.max_floor} < {self.min_floor})"
            )

    @property
    def num_floors(self) -> int:
        return self.max_floor - self.min_floor

    def contains(self, floor: int) -> bool:
        return self.min_floor <= floor <= self.max_floor


@total_ordering
@dataclass(frozen=True, eq=False)
class FloorDestination:
    """A hall call (floor plus direction) or a button press (direction REST).

    Destinations order by priority descending, then floor ascending. Equality
    and hashing use the same two fields only, so a hall call and a button press
    for one floor at one priority are the same set member.
    """

    floor: int
    direction: Direction = Direction.REST
    priority: int = 0
    requested_at: int = field(default_factory=time.time_ns)

    def __post_init__(self) -> None:
        if self.priority < 0:
            raise ValueError(f"Priority must be non-negative, got {self.priority}")
        object.__setattr__(self, "direction", Direction.parse(self.direction))

    @property
    def sort_key(self) -> tuple:
        return (-self.priority, self.floor)

    @property
    def label(self) -> str:
        return str(self.floor)

    def has_priority(self) -> bool:
        return self.priority > 0

    def has_direction(self) -> bool:
        return self.direction != Direction.REST

    def has_same_direction(self, other_direction: Direction) -> bool:
        return self.direction.compatible(other_direction)

    def has_floor_number(self, other: Union["FloorDestination", int]) -> bool:
        if isinstance(other, FloorDestination):
            return self.floor == other.floor
        return self.floor == other

    def is_outside(self, floor_range: FloorRange) -> bool:
        return not floor_range.contains(self.floor)

    def floors_away(self, other: "FloorDestination") -> int:
        """Signed distance: positive when ``other`` is above this floor."""
        return other.floor - self.floor

    def is_above_in_direction(self, other: "FloorDestination", travel_direction: Direction) -> bool:
        """Whether ``other`` is reachable ahead when travelling from here.

        Only this destination's floor is used; ``other`` must be at the same
        floor, or above with a direction compatible with ``travel_direction``.
        """
        if self.floor == other.floor:
            return True
        if self.floor < other.floor:
            return other.has_same_direction(travel_direction)
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FloorDestination):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __lt__(self, other: "FloorDestination") -> bool:
        if not isinstance(other, FloorDestination):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self) -> int:
        return hash(self.sort_key)

    def __str__(self) -> str:  # pragma: no cover - convenience
        return (
            f"Floor {self.floor}, direction {self.direction.name}, "
            f"priority {self.priority}, requested at {self.requested_at}"
        )

    def as_dict(self) -> dict:
        return {
            "floor": self.floor,
            "direction": self.direction.name.lower(),
            "priority": self.priority,
            "requested_at": self.requested_at,
        }
