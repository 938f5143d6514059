import itertools
import unittest

from fleet import BankConfig, BankConfigurationError, Elevator, ElevatorBank, GossipConfig
from scheduler import Direction, FloorRange


def counter_clock():
    return itertools.count(1).__next__


class TestBankAssembly(unittest.TestCase):
    """Validation of elevator groups"""

    def test_empty_bank_is_rejected(self):
        with self.assertRaises(BankConfigurationError):
            ElevatorBank([])

    def test_mismatched_ranges_are_rejected_before_wiring(self):
        first = Elevator(0, FloorRange(0, 10))
        second = Elevator(1, FloorRange(0, 11))
        with self.assertRaises(BankConfigurationError):
            ElevatorBank([first, second])
        self.assertEqual(first.peers, ())
        self.assertEqual(second.peers, ())

    def test_member_of_another_bank_is_rejected_before_wiring(self):
        used = Elevator(1, FloorRange(0, 10))
        ElevatorBank([used, Elevator(2, FloorRange(0, 10))])
        fresh = Elevator(0, FloorRange(0, 10))
        with self.assertRaises(BankConfigurationError):
            ElevatorBank([fresh, used])
        self.assertEqual(fresh.peers, ())
        self.assertFalse(fresh.assembled)
        self.assertEqual([peer.elevator_id for peer in used.peers], [2])
        ElevatorBank([fresh, Elevator(3, FloorRange(0, 10))])
        self.assertEqual([peer.elevator_id for peer in fresh.peers], [3])

    def test_duplicate_identities_are_rejected(self):
        with self.assertRaises(BankConfigurationError):
            ElevatorBank([Elevator(3, FloorRange(0, 5)), Elevator(3, FloorRange(0, 5))])

    def test_set_peers_rejects_foreign_range(self):
        elevator = Elevator(0, FloorRange(0, 10))
        with self.assertRaises(BankConfigurationError):
            elevator.set_peers([elevator, Elevator(1, FloorRange(-1, 10))])

    def test_roster_is_fixed_once_assigned(self):
        bank = ElevatorBank.create(2, FloorRange(0, 5))
        with self.assertRaises(BankConfigurationError):
            bank.elevators[0].set_peers(bank.elevators)

    def test_peers_exclude_self(self):
        bank = ElevatorBank.create(3, FloorRange(0, 5))
        for elevator in bank.elevators:
            ids = [peer.elevator_id for peer in elevator.peers]
            self.assertNotIn(elevator.elevator_id, ids)
            self.assertEqual(len(ids), 2)

    def test_from_config(self):
        config = BankConfig.from_dict(
            {
                "elevator_count": 4,
                "floor_range": {"min": -2, "max": 30},
                "gossip": {"fanout": 1},
                "random_seed": 5,
            }
        )
        bank = ElevatorBank.from_config(config)
        self.assertEqual(len(bank.elevators), 4)
        self.assertEqual(bank.floor_range, FloorRange(-2, 30))
        self.assertEqual(bank.elevators[0].gossip_config, GossipConfig(fanout=1))

    def test_negative_fanout_is_rejected(self):
        with self.assertRaises(ValueError):
            BankConfig.from_dict({"gossip": {"fanout": -1}})


class TestBankDispatch(unittest.TestCase):
    """Requests fanned out to a bank and drained"""

    def test_bank_of_one_accepts(self):
        bank = ElevatorBank.create(1, FloorRange(0, 1), clock=counter_clock())
        self.assertEqual(bank.submit(1), 1)

    def test_out_of_range_nobody_accepts(self):
        bank = ElevatorBank.create(2, FloorRange(0, 1), clock=counter_clock())
        self.assertEqual(bank.submit(-1), 0)
        self.assertEqual(bank.drain_all(), [[], []])

    def test_run_bank_of_one(self):
        bank = ElevatorBank.create(1, FloorRange(-10, 10), clock=counter_clock())
        bank.submit(10, Direction.DOWN)
        self.assertEqual(bank.drain_all(), [["10"]])

    def test_two_elevators_split_opposite_calls(self):
        bank = ElevatorBank.create(2, FloorRange(-10, 10), random_seed=1, clock=counter_clock())
        self.assertEqual(bank.submit(10, Direction.DOWN), 1)
        self.assertEqual(bank.submit(-10, Direction.UP), 1)
        traces = bank.drain_all()
        self.assertEqual(traces, [["10"], ["-10"]])
        self.assertEqual(sum(len(trace) for trace in traces), 2)

    def test_uneven_load(self):
        bank = ElevatorBank.create(2, FloorRange(-10, 10), random_seed=1, clock=counter_clock())
        bank.submit(10, Direction.DOWN)
        bank.submit(5, Direction.DOWN)
        bank.submit(-10, Direction.UP)
        traces = bank.drain_all()
        self.assertEqual(traces, [["10", "-10"], ["5"]])

    def test_priority_request_avoids_busy_elevator(self):
        bank = ElevatorBank.create(2, FloorRange(0, 20), random_seed=1, clock=counter_clock())
        self.assertEqual(bank.submit(2, Direction.UP, priority=9), 1)
        self.assertEqual(bank.submit(3, Direction.UP, priority=9), 1)
        busy = [len(elevator.queues) for elevator in bank.elevators]
        self.assertEqual(busy, [1, 1])

    def test_snapshot(self):
        bank = ElevatorBank.create(2, FloorRange(-1, 4), clock=counter_clock())
        bank.submit(3)
        state = bank.snapshot()
        self.assertEqual(state["floor_range"], {"min": -1, "max": 4})
        self.assertEqual([e["id"] for e in state["elevators"]], [0, 1])
        self.assertEqual(sum(e["pending_count"] for e in state["elevators"]), 1)

    def test_get_elevator(self):
        bank = ElevatorBank.create(2, FloorRange(0, 1))
        self.assertIs(bank.get_elevator(1), bank.elevators[1])
        self.assertIsNone(bank.get_elevator(7))


if __name__ == "__main__":
    unittest.main()
