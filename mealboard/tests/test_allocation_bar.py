import unittest

from mealboard.domain.Dashboard import Breakdown
from mealboard.logic.charts.allocation_bar import proportion_bar


class TestProportionBar(unittest.TestCase):

    def test_even_split(self):
        widths = proportion_bar(Breakdown(vegFruit=25, healthyCarbs=25, protein=25, pauseFood=25), 200)
        self.assertEqual(widths, [50, 50, 50, 50])
        self.assertEqual(sum(widths), 200)

    def test_empty_breakdown(self):
        self.assertEqual(proportion_bar(Breakdown.zero(), 200), [0, 0, 0, 0])

    def test_widths_follow_category_order(self):
        # display order is vegFruit, protein, healthyCarbs, pauseFood
        widths = proportion_bar(Breakdown(vegFruit=50, pauseFood=50), 100)
        self.assertEqual(widths, [50, 0, 0, 50])
        widths = proportion_bar(Breakdown(protein=10, healthyCarbs=30), 100)
        self.assertEqual(widths, [0, 25, 75, 0])

    def test_last_nonzero_absorbs_rounding(self):
        widths = proportion_bar(Breakdown(vegFruit=1, protein=1, healthyCarbs=1), 10)
        self.assertEqual(widths[3], 0)
        self.assertAlmostEqual(widths[0], 10 / 3)
        self.assertEqual(widths[0] + widths[1] + widths[2], 10)

    def test_sum_is_total_width_for_odd_shares(self):
        widths = proportion_bar(Breakdown(vegFruit=33.3, protein=33.3, healthyCarbs=33.4), 79.77)
        self.assertAlmostEqual(sum(widths), 79.77, places=9)
        self.assertTrue(all(w >= 0 for w in widths))

    def test_negative_values_clamped(self):
        widths = proportion_bar(Breakdown(vegFruit=-10, protein=50), 80)
        self.assertEqual(widths, [0, 80, 0, 0])


if __name__ == '__main__':
    unittest.main()
