import unittest

from mealboard.logic.layout.image_placement import Box, Placement, place_image


class TestPlaceImage(unittest.TestCase):

    def test_wide_image_is_letterboxed(self):
        self.assertEqual(place_image((400, 200), Box(0, 0, 100, 100)), Placement(0, 25, 100, 50))

    def test_tall_image_is_pillarboxed(self):
        self.assertEqual(place_image((100, 400), Box(0, 0, 100, 100)), Placement(37.5, 0, 25, 100))

    def test_small_image_not_upscaled(self):
        self.assertEqual(place_image((20, 10), Box(10, 10, 100, 100)), Placement(50, 55, 20, 10))

    def test_aspect_ratio_preserved(self):
        placement = place_image((1024, 768), Box(5, 7, 79.77, 48.6))
        self.assertAlmostEqual(placement.width / placement.height, 1024 / 768)
        self.assertLessEqual(placement.width, 79.77 + 1e-9)
        self.assertLessEqual(placement.height, 48.6 + 1e-9)
        self.assertAlmostEqual(placement.y - 7, 7 + 48.6 - (placement.y + placement.height))

    def test_degenerate_image_size(self):
        placement = place_image((0, 10), Box(0, 0, 100, 50))
        self.assertEqual(placement, Placement(50, 25, 0, 0))


if __name__ == '__main__':
    unittest.main()
