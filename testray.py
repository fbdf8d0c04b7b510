import unittest
import numpy as np
from ray import *
from color import Color
from errors import DegenerateGeometryError, InvalidConfigurationError
from geometry import Sphere, closest_hit
from ImLite import Image
from scenes import FourSpheresExample, SingleSphereExample
from utils import normalize, reflect, vec

RED = Color(255, 0, 0)
TAN = Color(200, 100, 50)


def make_scene(spheres, lights, max_depth=MAX_DEPTH, window=100):
    return Scene(Viewport(1, window, window), spheres, lights, max_depth=max_depth)


def primary_hit(scene, x=0, y=0):
    direction = scene.viewport.project(x, y)
    return scene.intersect(scene.camera, direction, T_MIN, np.inf), direction


class TestSphereIntersect(unittest.TestCase):

    def confirm_hit(self, sphere, origin, direction):
        # make sure hit is self-consistent, then return it
        hit = closest_hit([sphere], vec(origin), vec(direction), 0.0, np.inf)
        self.assertIsNotNone(hit)
        np.testing.assert_almost_equal(vec(origin) + hit.t * vec(direction), hit.point)
        np.testing.assert_almost_equal(normalize(hit.point - sphere.center), hit.normal)
        self.assertAlmostEqual(np.linalg.norm(hit.point - sphere.center), sphere.radius)
        self.assertIs(hit.sphere, sphere)
        return hit

    def test_unitsphere_hits(self):
        unit_sphere = Sphere(vec([0, 0, 0]), 1.0, RED, 0)
        # dead center hit
        hit = self.confirm_hit(unit_sphere, [2.0, 0.0, 0.0], [-1.0, 0.0, 0.0])
        self.assertAlmostEqual(hit.t, 1.0)
        # dead center with non-unit direction
        hit = self.confirm_hit(unit_sphere, [3.0, 0.0, 0.0], [-2.0, 0.0, 0.0])
        self.assertAlmostEqual(hit.t, 1.0)
        # off center hit
        hit = self.confirm_hit(unit_sphere, [1.0, 0.5, 0.0], [-1.0, 0.0, 0.0])
        self.assertAlmostEqual(hit.t, 1 - np.sin(np.pi/3))
        # center hit from off axis
        hit = self.confirm_hit(unit_sphere, [2.0, 3.0, 4.0], [-2.0, -3.0, -4.0])
        self.assertAlmostEqual(hit.t, 1 - 1 / np.sqrt(29))

    def test_unitsphere_misses(self):
        unit_sphere = Sphere(vec([0, 0, 0]), 1.0, RED, 0)
        # on axis miss
        self.assertIsNone(unit_sphere.intersect(vec([2.0, 3.0, 0.0]), vec([-1.0, 0.0, 0.0])))
        self.assertIsNone(closest_hit([unit_sphere], vec([2.0, 3.0, 0.0]), vec([-1.0, 0.0, 0.0]), 0.0, np.inf))

    def test_only_smaller_root_counts(self):
        # from inside the sphere the smaller root is behind the origin
        unit_sphere = Sphere(vec([0, 0, 0]), 1.0, RED, 0)
        self.assertAlmostEqual(unit_sphere.intersect(vec([0, 0, 0]), vec([1, 0, 0])), -1.0)
        self.assertIsNone(closest_hit([unit_sphere], vec([0, 0, 0]), vec([1, 0, 0]), 0.0, np.inf))

    def test_interval_is_open(self):
        unit_sphere = Sphere(vec([0, 0, 0]), 1.0, RED, 0)
        origin, direction = vec([2, 0, 0]), vec([-1, 0, 0])
        self.assertIsNone(closest_hit([unit_sphere], origin, direction, 1.0, np.inf))
        self.assertIsNone(closest_hit([unit_sphere], origin, direction, 0.0, 1.0))
        self.assertIsNotNone(closest_hit([unit_sphere], origin, direction, 0.999, 1.001))

    def test_nearest_wins_regardless_of_order(self):
        near = Sphere(vec([0, 0, 5]), 1.0, RED, 0)
        far = Sphere(vec([0, 0, 10]), 1.0, TAN, 0)
        for spheres in ([near, far], [far, near]):
            hit = closest_hit(spheres, vec([0, 0, 0]), vec([0, 0, 1]), 0.0, np.inf)
            self.assertIs(hit.sphere, near)
            self.assertAlmostEqual(hit.t, 4.0)

    def test_tie_keeps_first(self):
        first = Sphere(vec([0, 0, 5]), 1.0, RED, 0)
        second = Sphere(vec([0, 0, 5]), 1.0, TAN, 0)
        hit = closest_hit([first, second], vec([0, 0, 0]), vec([0, 0, 1]), 0.0, np.inf)
        self.assertIs(hit.sphere, first)

    def test_black_sphere_is_still_a_hit(self):
        dark = Sphere(vec([0, 0, 5]), 1.0, Color.black(), 0)
        hit = closest_hit([dark], vec([0, 0, 0]), vec([0, 0, 1]), 0.0, np.inf)
        self.assertIsNotNone(hit)
        self.assertTrue(hit.sphere.color.is_black())

    def test_nonunit_hits(self):
        # all the same as the first case, but scaled by 3 and shifted by (-1, -5, -7)
        sphere = Sphere(vec([-1, -5, -7]), 3.0, RED, 0)
        hit = self.confirm_hit(sphere, [5.0, -5.0, -7.0], [-3.0, 0.0, 0.0])
        self.assertAlmostEqual(hit.t, 1.0)
        hit = self.confirm_hit(sphere, [8.0, -5.0, -7.0], [-6.0, 0.0, 0.0])
        self.assertAlmostEqual(hit.t, 1.0)
        hit = self.confirm_hit(sphere, [2.0, -3.5, -7.0], [-3.0, 0.0, 0.0])
        self.assertAlmostEqual(hit.t, 1 - np.sin(np.pi/3))

    def test_invalid_spheres(self):
        with self.assertRaises(DegenerateGeometryError):
            Sphere(vec([0, 0, 0]), 0.0, RED, 0)
        with self.assertRaises(DegenerateGeometryError):
            Sphere(vec([0, 0, 0]), -1.0, RED, 0)
        with self.assertRaises(InvalidConfigurationError):
            Sphere(vec([0, 0, 0]), 1.0, RED, specular=-1)
        with self.assertRaises(InvalidConfigurationError):
            Sphere(vec([0, 0, 0]), 1.0, RED, 0, reflective=1.5)
        with self.assertRaises(InvalidConfigurationError):
            Sphere(vec([0, 0, 0]), 1.0, (255, 0, 0), 0)


class TestVectors(unittest.TestCase):

    def test_normalize(self):
        np.testing.assert_almost_equal(normalize(vec([3, 4, 0])), [0.6, 0.8, 0])
        with self.assertRaises(DegenerateGeometryError):
            normalize(vec([0, 0, 0]))

    def test_reflect(self):
        # mirror about the y axis keeps y and flips the rest
        np.testing.assert_almost_equal(reflect(vec([0, 1, 0]), vec([1, 1, 0])), [-1, 1, 0])
        np.testing.assert_almost_equal(reflect(vec([0, 0, -1]), vec([0, 3, -4])), [0, -3, -4])

    def test_vec_is_read_only(self):
        v = vec([1, 2, 3])
        with self.assertRaises(ValueError):
            v[0] = 5
        np.testing.assert_equal(v + v, [2, 4, 6])


class TestViewport(unittest.TestCase):

    def test_project(self):
        viewport = Viewport(1, 100, 200)
        np.testing.assert_almost_equal(viewport.project(0, 0), [0, 0, 1])
        np.testing.assert_almost_equal(viewport.project(50, -100), [0.5, -0.5, 1])
        np.testing.assert_almost_equal(Viewport(2, 100, 100).project(-25, 10), [-0.5, 0.2, 2])

    def test_invalid(self):
        with self.assertRaises(InvalidConfigurationError):
            Viewport(0, 100, 100)
        with self.assertRaises(InvalidConfigurationError):
            Viewport(1, 0, 100)
        with self.assertRaises(InvalidConfigurationError):
            Viewport(1, 100, -1)


class TestShading(unittest.TestCase):

    def shading_test(self, lights, specular, color=TAN):
        # shade the point (0, 0, 4) of a sphere facing the camera
        scene = make_scene([Sphere(vec([0, 0, 5]), 1.0, color, specular)], lights)
        hit, direction = primary_hit(scene)
        np.testing.assert_almost_equal(hit.point, [0, 0, 4])
        return shade(scene, hit, direction)

    def test_ambient(self):
        self.assertEqual(self.shading_test([AmbientLight(0.5)], 0), Color(100, 50, 25))
        # coefficient is clamped to 1
        self.assertEqual(self.shading_test([AmbientLight(1.5)], 0), TAN)
        self.assertEqual(self.shading_test([], 0), Color.black())

    def test_diffuse(self):
        # light at cos 0.8 to the normal; a sharp highlight adds nothing here
        self.assertEqual(
            self.shading_test([DirectionalLight(0.5, vec([0, 3, -4]))], 1000), Color(80, 40, 20))
        # light from behind the sphere
        self.assertEqual(
            self.shading_test([DirectionalLight(0.5, vec([0, 0, 1]))], 1000), Color.black())

    def test_specular(self):
        # mirrored light runs straight back into the camera
        self.assertEqual(
            self.shading_test([DirectionalLight(0.25, vec([0, 0, -1]))], 10), Color(100, 50, 25))

    def test_zero_specular_adds_full_intensity(self):
        # grazing light: no diffuse, but cos ** 0 == 1 for the highlight
        self.assertEqual(
            self.shading_test([PointLight(0.3, vec([5, 0, 4]))], 0), Color(60, 30, 15))
        scene = make_scene([Sphere(vec([0, 0, 5]), 1.0, TAN, 0)], [PointLight(0.3, vec([5, 0, 4]))])
        self.assertEqual(render_pixel(scene, 0, 0), Color(60, 30, 15))

    def test_clamped_sum(self):
        lights = [AmbientLight(0.8), DirectionalLight(0.5, vec([0, 0, -1]))]
        self.assertEqual(self.shading_test(lights, 0), TAN)

    def test_invalid_lights(self):
        with self.assertRaises(InvalidConfigurationError):
            AmbientLight(-0.1)
        with self.assertRaises(InvalidConfigurationError):
            PointLight(-1, vec([0, 0, 0]))
        with self.assertRaises(DegenerateGeometryError):
            DirectionalLight(0.5, vec([0, 0, 0]))

    def test_light_on_surface_rejected(self):
        with self.assertRaises(DegenerateGeometryError):
            make_scene([Sphere(vec([0, 0, 5]), 1.0, RED, 0)], [PointLight(0.5, vec([0, 1, 5]))])


class TestShadows(unittest.TestCase):

    def setUp(self):
        self.target = Sphere(vec([0, 0, 5]), 1.0, RED, specular=10)
        self.lights = [AmbientLight(0.1), PointLight(0.5, vec([0, 3, 0]))]
        # sits halfway between (0, 0, 4) and the light
        self.occluder = Sphere(vec([0, 1.5, 2]), 0.3, TAN, 0)

    def test_occluder_removes_point_light(self):
        lit = render_pixel(make_scene([self.target], self.lights), 0, 0)
        shadowed = render_pixel(make_scene([self.target, self.occluder], self.lights), 0, 0)
        self.assertEqual(lit, RED.scale(0.1 + 0.5 * 0.8 + 0.5 * 0.8 ** 10))
        self.assertEqual(shadowed, RED.scale(0.1))
        self.assertLess(shadowed.r, lit.r)

    def test_in_shadow_bounds(self):
        scene = make_scene([self.target, self.occluder], self.lights)
        point = vec([0, 0, 4])
        self.assertTrue(in_shadow(scene, point, vec([0, 3, -4]), 1.0))
        # with the light a quarter of the way there, the occluder lies beyond it
        self.assertFalse(in_shadow(scene, point, vec([0, 3, -4]) * 0.25, 1.0))
        # a directional light is blocked anywhere along the ray
        self.assertTrue(in_shadow(scene, point, vec([0, 3, -4]) * 0.25, np.inf))
        # the surface does not shadow itself on the lit side
        self.assertFalse(in_shadow(scene, point, vec([0, 0, -1]), np.inf))


class TestTrace(unittest.TestCase):

    def mirror_scene(self, max_depth):
        mirror = Sphere(vec([0, 0, 5]), 1.0, Color(100, 100, 100), 0, reflective=0.5)
        # behind the camera, only visible in the mirror
        green = Sphere(vec([0, 0, -5]), 1.0, Color(0, 200, 0), 0)
        return make_scene([mirror, green], [AmbientLight(1.0)], max_depth=max_depth)

    def test_reflection(self):
        self.assertEqual(render_pixel(self.mirror_scene(4), 0, 0), Color(50, 150, 50))

    def test_depth_zero_never_recurses(self):
        self.assertEqual(render_pixel(self.mirror_scene(0), 0, 0), Color(100, 100, 100))
        scene = self.mirror_scene(0)
        hit, direction = primary_hit(scene)
        self.assertEqual(render_pixel(scene, 0, 0), shade(scene, hit, direction))

    def test_non_reflective_ignores_depth(self):
        scene_def = SingleSphereExample()
        for x, y in [(0, 0), (10, -7), (20, 20)]:
            colors = set()
            for depth in (0, 1, 4, 10):
                scene_def.max_depth = depth
                colors.add(render_pixel(scene_def.build(100, 100), x, y))
            self.assertEqual(len(colors), 1)

    def test_reflection_blend_identity(self):
        scene = FourSpheresExample().build(768, 768)
        hit, direction = primary_hit(scene, -175, -27)
        self.assertIsNotNone(hit)
        r = hit.sphere.reflective
        self.assertGreater(r, 0)
        local = shade(scene, hit, direction)
        bounced = trace_ray(scene, hit.point, reflect(hit.normal, -direction), EPSILON, np.inf,
                            scene.max_depth - 1)
        self.assertEqual(render_pixel(scene, -175, -27), local.scale(1 - r) + bounced.scale(r))

    def test_miss_is_black(self):
        scene = SingleSphereExample().build(100, 100)
        self.assertEqual(render_pixel(scene, 50, 50), Color.black())
        # the sphere lies outside the search interval
        self.assertEqual(trace_ray(scene, scene.camera, vec([0, 0, 1]), T_MIN, 3.0, 4), Color.black())

    def test_single_sphere_end_to_end(self):
        scene = SingleSphereExample().build(101, 101)
        self.assertEqual(render_pixel(scene, 0, 0), Color(255, 0, 0))
        self.assertEqual(render_pixel(scene, -50, 50), Color.black())
        image = render_image(scene, 101, 101)
        self.assertEqual(image.get_point(0, 0), (255, 0, 0))
        self.assertEqual(image.get_point(-50, 50), (0, 0, 0))

    def test_idempotent(self):
        scene = FourSpheresExample().build(64, 64)
        for x, y in [(0, 0), (-14, -2), (5, -20)]:
            self.assertEqual(render_pixel(scene, x, y), render_pixel(scene, x, y))
        np.testing.assert_array_equal(render_image(scene, 16, 16).pixels,
                                      render_image(scene, 16, 16).pixels)

    def test_invalid_depth(self):
        with self.assertRaises(InvalidConfigurationError):
            make_scene([], [], max_depth=-1)


class TestFrameBuffer(unittest.TestCase):

    def test_flip_and_clip(self):
        image = Image.Blank(4, 4)
        image.set_point(0, 0, RED)
        image.set_point(-2, 1, TAN)
        # both fall outside the buffer and are dropped
        image.set_point(0, -2, RED)
        image.set_point(2, 0, RED)
        np.testing.assert_array_equal(image.pixels[2, 2], [255, 0, 0])
        np.testing.assert_array_equal(image.pixels[1, 0], [200, 100, 50])
        self.assertEqual(int(image.pixels.sum()), 255 + 200 + 100 + 50)


if __name__ == '__main__':
    unittest.main()
