import unittest

from scheduler import Direction, FloorDestination, LookQueues


class TestLookQueues(unittest.TestCase):
    """Queue placement and LOOK selection"""

    def setUp(self):
        self.queues = LookQueues()
        self.ground = FloorDestination(0)

    def test_starts_empty(self):
        self.assertTrue(self.queues.is_empty())
        self.assertIsNone(self.queues.take(Direction.REST))
        self.assertEqual(self.queues.pending(), frozenset())

    def test_priority_goes_to_priority_queue(self):
        self.assertEqual(self.queues.file(FloorDestination(-4, priority=1), self.ground, Direction.REST), "priority")
        self.assertEqual(self.queues.priority_count, 1)
        self.assertEqual(self.queues.ordinary_count, 0)

    def test_placement_uses_travel_direction(self):
        position = FloorDestination(3)
        self.assertEqual(self.queues.file(FloorDestination(2, Direction.UP), position, Direction.UP), "down")
        self.assertEqual(self.queues.file(FloorDestination(4, Direction.DOWN), position, Direction.UP), "down")
        self.assertEqual(self.queues.file(FloorDestination(5, Direction.UP), position, Direction.UP), "up")
        self.assertEqual(self.queues.file(FloorDestination(6), position, Direction.UP), "up")
        self.assertEqual(self.queues.file(FloorDestination(3, Direction.DOWN), position, Direction.UP), "up")

    def test_resting_elevator_files_everything_above_as_up(self):
        self.assertEqual(self.queues.file(FloorDestination(5, Direction.DOWN), self.ground, Direction.REST), "up")
        self.assertEqual(self.queues.file(FloorDestination(-5, Direction.UP), self.ground, Direction.REST), "down")

    def test_equal_destinations_are_stored_once(self):
        self.queues.file(FloorDestination(3, Direction.UP), self.ground, Direction.REST)
        self.queues.file(FloorDestination(3), self.ground, Direction.REST)
        self.assertEqual(len(self.queues), 1)

    def test_enumeration_order(self):
        for floor in (7, 2, 5):
            self.queues.file(FloorDestination(floor), self.ground, Direction.REST)
        for floor in (-7, -2, -5):
            self.queues.file(FloorDestination(floor), self.ground, Direction.REST)
        self.assertEqual([d.floor for d in self.queues.iter_up()], [2, 5, 7])
        self.assertEqual([d.floor for d in self.queues.iter_down()], [-2, -5, -7])

    def test_priority_preempts_ordinary_work(self):
        self.queues.file(FloorDestination(1), self.ground, Direction.REST)
        self.queues.file(FloorDestination(7, priority=2), self.ground, Direction.REST)
        self.queues.file(FloorDestination(9, priority=5), self.ground, Direction.REST)
        self.queues.file(FloorDestination(2, priority=5), self.ground, Direction.REST)
        taken = [self.queues.take(Direction.UP).floor for _ in range(4)]
        self.assertEqual(taken, [2, 9, 7, 1])

    def test_rest_follows_the_larger_sweep(self):
        self.queues.file(FloorDestination(4), self.ground, Direction.REST)
        self.queues.file(FloorDestination(-1), self.ground, Direction.REST)
        self.queues.file(FloorDestination(-6), self.ground, Direction.REST)
        self.assertEqual(self.queues.take(Direction.REST).floor, -1)

    def test_rest_prefers_up_on_ties(self):
        self.queues.file(FloorDestination(4), self.ground, Direction.REST)
        self.queues.file(FloorDestination(-1), self.ground, Direction.REST)
        self.assertEqual(self.queues.take(Direction.REST).floor, 4)

    def test_sweeps_reverse_when_exhausted(self):
        self.queues.file(FloorDestination(-2), self.ground, Direction.REST)
        self.queues.file(FloorDestination(-8), self.ground, Direction.REST)
        self.assertEqual(self.queues.take(Direction.UP).floor, -2)

        self.queues.file(FloorDestination(6), self.ground, Direction.REST)
        self.queues.file(FloorDestination(3), self.ground, Direction.REST)
        self.assertEqual(self.queues.take(Direction.DOWN).floor, -8)
        self.assertEqual(self.queues.take(Direction.DOWN).floor, 3)
        self.assertTrue(self.queues.take(Direction.DOWN).has_floor_number(6))
        self.assertTrue(self.queues.is_empty())


if __name__ == "__main__":
    unittest.main()
