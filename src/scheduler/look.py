from __future__ import annotations

import heapq
from bisect import bisect_left, insort
from typing import FrozenSet, Iterator, List, Optional

from .floor import Direction, FloorDestination


class LookQueues:
    """Pending work of one elevator, ordered for a LOOK sweep.

    Priority destinations sit in a heap and always come out first. Ordinary
    destinations are split between an ascending set, drained lowest floor
    first, and a descending set, drained highest floor first. Both sets ignore
    destinations equal to one they already hold.
    """

    def __init__(self) -> None:
        self._priority: List[FloorDestination] = []
        self._up: List[FloorDestination] = []
        self._down: List[FloorDestination] = []

    @property
    def priority_count(self) -> int:
        return len(self._priority)

    @property
    def ordinary_count(self) -> int:
        return len(self._up) + len(self._down)

    def __len__(self) -> int:
        return self.priority_count + self.ordinary_count

    def is_empty(self) -> bool:
        return not (self._priority or self._up or self._down)

    def pending(self) -> FrozenSet[FloorDestination]:
        return frozenset(self._priority) | frozenset(self._up) | frozenset(self._down)

    def iter_up(self) -> Iterator[FloorDestination]:
        return iter(list(self._up))

    def iter_down(self) -> Iterator[FloorDestination]:
        return reversed(list(self._down))

    def file(
        self, destination: FloorDestination, position: FloorDestination, direction: Direction
    ) -> str:
        """Queue an accepted destination and return the name of the queue used.

        Ordinary work reachable ahead of ``position`` while travelling in
        ``direction`` joins the ascending sweep, everything else the
        descending one.
        """
        if destination.has_priority():
            heapq.heappush(self._priority, destination)
            return "priority"
        if position.is_above_in_direction(destination, direction):
            self._add_unique(self._up, destination)
            return "up"
        self._add_unique(self._down, destination)
        return "down"

    def take(self, direction: Direction) -> Optional[FloorDestination]:
        """Remove and return the next destination for an elevator heading ``direction``."""
        if self._priority:
            return heapq.heappop(self._priority)
        if not (self._up or self._down):
            return None

        if direction == Direction.UP:
            return self.next_up() or self.next_down()
        if direction == Direction.DOWN:
            return self.next_down() or self.next_up()
        # At rest, follow whichever sweep has more work; ascending wins ties.
        if len(self._up) >= len(self._down):
            return self.next_up()
        return self.next_down()

    def next_up(self) -> Optional[FloorDestination]:
        if not self._up:
            return None
        return self._up.pop(0)

    def next_down(self) -> Optional[FloorDestination]:
        if not self._down:
            return None
        return self._down.pop()

    @staticmethod
    def _add_unique(bucket: List[FloorDestination], destination: FloorDestination) -> None:
        index = bisect_left(bucket, destination)
        if index < len(bucket) and bucket[index] == destination:
            return
        insort(bucket, destination, lo=index)
