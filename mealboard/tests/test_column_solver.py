import itertools
import math
import unittest

from mealboard.logic.layout.column_solver import clamp, fits, solve_column_layout


def _solve(body_height, slots=3, bounds=(20, 60), label=20, spacing=10, gap=10, target=138, minimum=100):
    return solve_column_layout(body_height, slots, bounds, label, spacing, gap, target, minimum)


class TestClamp(unittest.TestCase):

    def test_bounds(self):
        self.assertEqual(clamp(7, 1, 5), 5)
        self.assertEqual(clamp(-1, 1, 5), 1)
        self.assertEqual(clamp(3, 1, 5), 3)

    def test_non_finite_resolves_to_low(self):
        self.assertEqual(clamp(float("nan"), 1, 5), 1)
        self.assertEqual(clamp(float("inf"), 1, 5), 1)
        self.assertEqual(clamp(3, 1, float("inf")), 1)


class TestSolveColumnLayout(unittest.TestCase):

    def test_reference_case(self):
        plan = _solve(500)
        self.assertAlmostEqual(plan.donut_radius, 60)
        self.assertAlmostEqual(plan.donut_block_height, 130)
        self.assertAlmostEqual(plan.card_height, 110)
        self.assertTrue(fits(plan))

    def test_prefers_target_when_room(self):
        plan = _solve(1000)
        self.assertEqual(plan.card_height, 138)
        self.assertTrue(fits(plan))

    def test_radius_floor(self):
        plan = _solve(100)
        self.assertEqual(plan.donut_radius, 20)

    def test_shrinks_below_minimum_when_space_is_scarce(self):
        plan = _solve(300)
        self.assertAlmostEqual(plan.donut_radius, 36)
        self.assertAlmostEqual(plan.card_height, (300 - 20 - 82 - 20) / 3)
        self.assertLess(plan.card_height, 100)
        self.assertTrue(fits(plan))

    def test_gaps_larger_than_space_give_zero_cards(self):
        plan = _solve(80)
        self.assertEqual(plan.card_height, 0)

    def test_degenerate_heights_stay_real(self):
        for body in (0, -50, float("nan"), float("inf")):
            plan = _solve(body)
            self.assertTrue(math.isfinite(plan.card_height), body)
            self.assertGreaterEqual(plan.card_height, 0, body)
            self.assertEqual(plan.card_height, 100, body)

    def test_zero_body_overflow_is_reported_not_raised(self):
        plan = _solve(0)
        self.assertFalse(fits(plan))
        self.assertGreater(plan.column_usage(), plan.body_height)

    def test_slot_count_must_be_positive(self):
        with self.assertRaises(ValueError):
            _solve(500, slots=0)

    def test_fit_invariant_across_parameter_space(self):
        bodies = range(-100, 1500, 37)
        for body, slots, gap, target, minimum in itertools.product(
                bodies, (1, 2, 3, 5), (0, 5.76, 10), (50, 138, 300), (20, 104)):
            plan = _solve(body, slots=slots, gap=gap, target=target, minimum=minimum)
            self.assertTrue(math.isfinite(plan.card_height))
            self.assertGreaterEqual(plan.card_height, 0)
            available = body - plan.label_block_height - plan.donut_block_height
            if available > 0 and available >= gap * (slots - 1):
                self.assertTrue(fits(plan), (body, slots, gap, target, minimum))


if __name__ == '__main__':
    unittest.main()
