import io
import os
import tempfile
import unittest
import numpy as np
from cli import main
from color import Color
from errors import DegenerateGeometryError, InvalidConfigurationError
from ImLite import Image
from ray import MAX_DEPTH, PointLight, render_pixel
from scenes import FourSpheresExample, SingleSphereExample, parse_scene_file

FOUR_SPHERES = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'examples', 'four_spheres.txt')


class TestParseSceneFile(unittest.TestCase):

    def test_parse(self):
        scene_def = parse_scene_file(io.StringIO(
            "# a comment\n"
            "\n"
            "vp 2\n"
            "dep 2\n"
            "sph 0 0 5 1 255 0 0 10 0.5\n"
            "amb 0.2\n"
            "pnt 0.6 1 2 3\n"
        ))
        self.assertEqual(scene_def.viewport_size, 2.0)
        self.assertEqual(scene_def.max_depth, 2)
        self.assertEqual(len(scene_def.spheres), 1)
        sphere = scene_def.spheres[0]
        np.testing.assert_equal(sphere.center, [0, 0, 5])
        self.assertEqual(sphere.color, Color(255, 0, 0))
        self.assertEqual((sphere.radius, sphere.specular, sphere.reflective), (1.0, 10.0, 0.5))
        self.assertIsInstance(scene_def.lights[1], PointLight)
        np.testing.assert_equal(scene_def.lights[1].position, [1, 2, 3])

    def test_defaults(self):
        scene_def = parse_scene_file(io.StringIO("amb 1\n"))
        self.assertEqual(scene_def.viewport_size, 1.0)
        self.assertEqual(scene_def.max_depth, MAX_DEPTH)
        self.assertEqual(scene_def.spheres, [])

    def test_example_file_matches_builtin(self):
        with open(FOUR_SPHERES) as f:
            from_file = parse_scene_file(f).build(64, 64)
        builtin = FourSpheresExample().build(64, 64)
        for x, y in [(0, 0), (-14, -2), (14, -2), (0, -30), (25, 25)]:
            self.assertEqual(render_pixel(from_file, x, y), render_pixel(builtin, x, y))

    def assert_bad_line(self, text, error=InvalidConfigurationError, lineno=1):
        with self.assertRaises(error) as ctx:
            parse_scene_file(io.StringIO(text))
        self.assertIn(f"line {lineno}", str(ctx.exception))

    def test_errors(self):
        self.assert_bad_line("cube 1 2 3\n")
        self.assert_bad_line("amb\n")
        self.assert_bad_line("amb 0.1 0.2\n")
        self.assert_bad_line("amb bright\n")
        self.assert_bad_line("amb -1\n")
        self.assert_bad_line("dep 1.5\n")
        self.assert_bad_line("sph 0 0 5 1 300 0 0 10 0\n")
        self.assert_bad_line("amb 1\n\nsph 0 0 5 0 255 0 0 10 0\n", DegenerateGeometryError, lineno=3)

    def test_settings_checked_on_their_line(self):
        self.assert_bad_line("amb 1\nvp -1\n", lineno=2)
        self.assert_bad_line("vp 0\n")
        self.assert_bad_line("# depth\ndep -1\n", lineno=2)
        self.assertEqual(parse_scene_file(io.StringIO("dep 0\n")).max_depth, 0)

    def test_build_validates_window(self):
        with self.assertRaises(InvalidConfigurationError):
            SingleSphereExample().build(0, 100)
        with self.assertRaises(InvalidConfigurationError):
            SingleSphereExample().build(100, -5)


class TestCli(unittest.TestCase):

    def test_render_scene_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            output = os.path.join(tmp, 'out.png')
            self.assertEqual(main([FOUR_SPHERES, '-o', output, '--width', '20', '--height', '20']), 0)
            image = Image(output)
            self.assertEqual((image.height, image.width), (20, 20))

    def test_render_builtin(self):
        with tempfile.TemporaryDirectory() as tmp:
            output = os.path.join(tmp, 'out.png')
            self.assertEqual(main(['-o', output, '--width', '9', '--height', '9', '--depth', '0']), 0)
            self.assertTrue(os.path.exists(output))

    def test_failures(self):
        with tempfile.TemporaryDirectory() as tmp:
            output = os.path.join(tmp, 'out.png')
            self.assertEqual(main([os.path.join(tmp, 'missing.txt'), '-o', output]), 1)
            bad = os.path.join(tmp, 'bad.txt')
            with open(bad, 'w') as f:
                f.write("sph 0 0 5 -1 255 0 0 10 0\n")
            self.assertEqual(main([bad, '-o', output]), 1)
            self.assertEqual(main(['-o', output, '--width', '0']), 1)
            self.assertFalse(os.path.exists(output))


if __name__ == '__main__':
    unittest.main()
