import unittest
import numpy as np
from color import Color
from errors import InvalidConfigurationError, RaytracerError


class TestColor(unittest.TestCase):

    def test_scale_truncates(self):
        self.assertEqual(Color(255, 0, 51).scale(0.5), Color(127, 0, 25))
        self.assertEqual(Color(255, 0, 51) * 0.5, Color(127, 0, 25))
        self.assertEqual(0.5 * Color(10, 11, 12), Color(5, 5, 6))

    def test_scale_clamps(self):
        # would wrap with 8-bit arithmetic
        self.assertEqual(Color(100, 200, 250).scale(2), Color(200, 255, 255))
        self.assertEqual(Color(100, 200, 250).scale(-1), Color.black())

    def test_add_saturates(self):
        self.assertEqual(Color(200, 100, 0) + Color(100, 100, 0), Color(255, 200, 0))
        self.assertEqual(Color(1, 2, 3).add(Color(4, 5, 6)), Color(5, 7, 9))

    def test_is_black(self):
        self.assertTrue(Color.black().is_black())
        self.assertTrue(Color(9, 9, 9).scale(0.1).is_black())
        self.assertFalse(Color(0, 0, 1).is_black())

    def test_channels(self):
        c = Color(1, 2, 3)
        self.assertEqual((c.r, c.g, c.b), (1, 2, 3))
        self.assertEqual(tuple(c), (1, 2, 3))
        np.testing.assert_array_equal(c.as_array(), np.array([1, 2, 3], dtype=np.uint8))
        self.assertEqual(len({Color(1, 2, 3), Color(1, 2, 3), Color(3, 2, 1)}), 2)

    def test_immutable(self):
        c = Color(1, 2, 3)
        with self.assertRaises(AttributeError):
            c.r = 5

    def test_invalid(self):
        for channels in [(256, 0, 0), (-1, 0, 0), (1.5, 0, 0)]:
            with self.assertRaises(InvalidConfigurationError):
                Color(*channels)
        with self.assertRaises(RaytracerError):
            Color(1, 2, 3).scale(float('nan'))


if __name__ == '__main__':
    unittest.main()
