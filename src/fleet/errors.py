from __future__ import annotations


class BankConfigurationError(ValueError):
    """Raised when a group of elevators cannot form a bank."""


class FloorOutOfRangeError(ValueError):
    """Raised when an elevator is asked to move outside its floor range."""

    def __init__(self, elevator_id: int, floor: int, min_floor: int, max_floor: int) -> None:
        super().__init__(
            f"Elevator {elevator_id} cannot move to floor {floor}: "
            f"outside range [{min_floor}, {max_floor}]"
        )
        self.elevator_id = elevator_id
        self.floor = floor
