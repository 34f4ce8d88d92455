"""
Unit tests for the order normaliser (pure, no database).
Run: cd backend && python -m pytest tests/test_ordering.py -v
"""
import unittest

from liftlog.errors import DuplicateOrder, InvalidInput
from liftlog.schemas.workout import SetIn, WorkoutExerciseIn
from liftlog.services.ordering import ensure_disjoint, normalize


def sets(*orders):
    return [SetIn(weight=100, reps=5, set_order=o) for o in orders]


class TestNormalize(unittest.TestCase):
    def test_missing_orders_follow_submission_position(self):
        out = normalize(sets(None, None, None), "set_order")
        self.assertEqual([s.set_order for s in out], [1, 2, 3])

    def test_explicit_orders_kept_verbatim_with_gaps(self):
        out = normalize(sets(10, 3, 7), "set_order")
        self.assertEqual([s.set_order for s in out], [10, 3, 7])

    def test_mixed_explicit_and_missing(self):
        out = normalize(sets(5, None, None), "set_order")
        self.assertEqual([s.set_order for s in out], [5, 2, 3])

    def test_start_offsets_missing_orders(self):
        out = normalize(sets(None, None), "set_order", start=4)
        self.assertEqual([s.set_order for s in out], [5, 6])

    def test_duplicate_explicit_rejected(self):
        with self.assertRaises(DuplicateOrder) as ctx:
            normalize(sets(2, 2), "set_order")
        self.assertEqual(ctx.exception.value, 2)
        self.assertIsInstance(ctx.exception, InvalidInput)

    def test_duplicate_between_explicit_and_assigned_rejected(self):
        # second item gets 2, which the first already claimed
        with self.assertRaises(DuplicateOrder):
            normalize(sets(2, None), "set_order")

    def test_input_not_mutated(self):
        original = sets(None)
        normalize(original, "set_order")
        self.assertIsNone(original[0].set_order)

    def test_empty_list(self):
        self.assertEqual(normalize([], "exercise_order"), [])

    def test_works_on_exercise_order(self):
        exercises = [WorkoutExerciseIn(exercise_id="a"), WorkoutExerciseIn(exercise_id="b", exercise_order=9)]
        out = normalize(exercises, "exercise_order")
        self.assertEqual([(e.exercise_id, e.exercise_order) for e in out], [("a", 1), ("b", 9)])


class TestEnsureDisjoint(unittest.TestCase):
    def test_no_collision(self):
        ensure_disjoint(sets(4, 5), "set_order", {1, 2, 3})

    def test_collision_with_existing(self):
        with self.assertRaises(DuplicateOrder):
            ensure_disjoint(sets(3, 4), "set_order", {1, 2, 3})


if __name__ == "__main__":
    unittest.main()
