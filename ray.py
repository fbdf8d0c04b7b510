import logging

import numpy as np

from color import Color
from errors import DegenerateGeometryError, InvalidConfigurationError
from geometry import Sphere, closest_hit
from ImLite import Image
from utils import vec, cosine, reflect

"""
Core implementation of the ray tracer.
"""

logger = logging.getLogger(__name__)

MAX_DEPTH = 4 # default reflection depth
EPSILON = 1e-3 # for offsetting reflected rays
T_MIN = 1.0 # primary rays only see what lies beyond the viewport plane


def _check_intensity(intensity):
    if not intensity >= 0 or not np.isfinite(intensity):
        raise InvalidConfigurationError(f"light intensity must be >= 0, got {intensity}")
    return float(intensity)


class Viewport:

    def __init__(self, size, window_width, window_height):
        """Create a viewport of the given size for a window of the given pixel dimensions.

        The image plane sits at distance size from the camera and spans
        size units across the whole window in each direction.
        """
        if not size > 0 or not np.isfinite(size):
            raise InvalidConfigurationError(f"viewport size must be positive, got {size}")
        if window_width <= 0 or window_height <= 0:
            raise InvalidConfigurationError(
                f"window dimensions must be positive, got {window_width}x{window_height}")
        self.size = float(size)
        self.window_width = int(window_width)
        self.window_height = int(window_height)
        self.width_scale = self.size / self.window_width
        self.height_scale = self.size / self.window_height

    def project(self, x, y):
        """Point on the image plane seen through window pixel (x, y)."""
        return np.array([x * self.width_scale, y * self.height_scale, self.size])


class AmbientLight:

    def __init__(self, intensity):
        """Create an ambient light of given intensity
        """
        self.intensity = _check_intensity(intensity)

    def illuminate(self, scene, hit, direction):
        """Shading coefficient contributed at a hit point."""
        return self.intensity


class _DirectLight:
    """Shared shading for lights that come from a direction and cast shadows."""

    # parameter along to_light() at which the light itself sits
    shadow_bound = np.inf

    def to_light(self, point):
        raise NotImplementedError

    def illuminate(self, scene, hit, direction):
        """Diffuse plus specular coefficient at a hit point, 0 when shadowed."""
        light_vec = self.to_light(hit.point)
        if in_shadow(scene, hit.point, light_vec, self.shadow_bound):
            return 0.0
        coeff = self.intensity * cosine(light_vec, hit.normal)
        mirrored = reflect(hit.normal, light_vec)
        coeff += self.intensity * cosine(mirrored, -direction) ** hit.sphere.specular
        return coeff


class DirectionalLight(_DirectLight):

    def __init__(self, intensity, direction):
        """Create a light arriving from direction, the same everywhere in the scene."""
        self.intensity = _check_intensity(intensity)
        self.direction = vec(direction)
        if not np.any(self.direction) or not np.all(np.isfinite(self.direction)):
            raise DegenerateGeometryError(f"directional light needs a nonzero direction, got {direction}")

    def to_light(self, point):
        return self.direction


class PointLight(_DirectLight):

    shadow_bound = 1.0

    def __init__(self, intensity, position):
        """Create a point light at given position and with given intensity"""
        self.intensity = _check_intensity(intensity)
        self.position = vec(position)
        if not np.all(np.isfinite(self.position)):
            raise DegenerateGeometryError(f"point light position {position} is not finite")

    def to_light(self, point):
        return self.position - point


class Scene:

    def __init__(self, viewport, spheres, lights, max_depth=MAX_DEPTH):
        """Create a scene seen from a camera at the origin.

        Parameters:
          viewport : Viewport -- image plane used for primary rays
          spheres : sequence of Sphere
          lights : sequence of AmbientLight, DirectionalLight or PointLight
          max_depth : int -- how many times reflected rays are followed
        """
        if not isinstance(viewport, Viewport):
            raise InvalidConfigurationError(f"expected a Viewport, got {viewport!r}")
        if int(max_depth) != max_depth or max_depth < 0:
            raise InvalidConfigurationError(f"max_depth must be a non-negative integer, got {max_depth}")
        self.camera = vec([0, 0, 0])
        self.viewport = viewport
        self.spheres = tuple(spheres)
        self.lights = tuple(lights)
        self.max_depth = int(max_depth)

        for sphere in self.spheres:
            if not isinstance(sphere, Sphere):
                raise InvalidConfigurationError(f"expected a Sphere, got {sphere!r}")
        for light in self.lights:
            if not isinstance(light, (AmbientLight, DirectionalLight, PointLight)):
                raise InvalidConfigurationError(f"unsupported light {light!r}")
            if isinstance(light, PointLight):
                self._check_light_placement(light)

    def _check_light_placement(self, light):
        # a light on a surface leaves a zero-length light vector at that point
        for sphere in self.spheres:
            distance = np.linalg.norm(light.position - sphere.center)
            if np.isclose(distance, sphere.radius, rtol=1e-9, atol=1e-9):
                raise DegenerateGeometryError(
                    f"point light at {light.position} lies on the surface of a sphere")

    def intersect(self, origin, direction, t_min, t_max):
        """Computes the nearest intersection with any sphere, or None."""
        return closest_hit(self.spheres, origin, direction, t_min, t_max)


def in_shadow(scene, point, to_light, t_max):
    """Return True if any sphere blocks to_light from point before parameter t_max."""
    return scene.intersect(point, to_light, 0.0, t_max) is not None


def shade(scene, hit, direction):
    """Local color of a hit point lit by every light in the scene.

    direction is the incoming ray direction; the light coefficient is
    clamped to 1 before it scales the sphere's color.
    """
    coeff = 0.0
    for light in scene.lights:
        coeff += light.illuminate(scene, hit, direction)
    return hit.sphere.color.scale(min(coeff, 1.0))


def trace_ray(scene, origin, direction, t_min, t_max, depth):
    """Color seen along a ray, following mirror reflections depth more times."""
    hit = scene.intersect(origin, direction, t_min, t_max)
    if hit is None:
        return Color.black()

    local = shade(scene, hit, direction)
    reflective = hit.sphere.reflective
    if depth <= 0 or reflective <= 0:
        return local

    reflected = reflect(hit.normal, -direction)
    bounced = trace_ray(scene, hit.point, reflected, EPSILON, t_max, depth - 1)
    return local.scale(1 - reflective) + bounced.scale(reflective)


def render_pixel(scene, x, y):
    """Color of the window pixel (x, y), with (0, 0) at the center of the window."""
    direction = scene.viewport.project(x, y) - scene.camera
    return trace_ray(scene, scene.camera, direction, T_MIN, np.inf, scene.max_depth)


def render_image(scene, width, height):
    """
    render a ray traced image.
    """
    image = Image.Blank(width, height)
    logger.info("rendering %dx%d frame with %d spheres, %d lights, depth %d",
                width, height, len(scene.spheres), len(scene.lights), scene.max_depth)
    for y in range(-(height // 2), height // 2 + 1):
        logger.debug("rendering row %d", y)
        for x in range(-(width // 2), width // 2 + 1):
            image.set_point(x, y, render_pixel(scene, x, y))
    logger.info("frame complete")
    return image
