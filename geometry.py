import numpy as np

from color import Color
from errors import DegenerateGeometryError, InvalidConfigurationError
from utils import vec, normalize


class Hit:
    def __init__(self, t, point, normal, sphere):
        """Create a Hit with the given data.

        Parameters:
          t : float -- the t value of the intersection along the ray
          point : (3,) -- the 3D point where the intersection happens
          normal : (3,) -- the outward-facing unit normal at the hit point
          sphere : Sphere -- the sphere that was hit
        """
        self.t = t
        self.point = point
        self.normal = normal
        self.sphere = sphere


class Sphere:

    def __init__(self, center, radius, color, specular, reflective=0.):
        """Create a sphere with the given center and radius.

        Parameters:
          center : (3,) -- a 3D point specifying the sphere's center
          radius : float -- the sphere's radius, must be positive
          color : Color -- the surface color
          specular : float -- specular exponent (shininess); 0 gives a flat highlight of full intensity
          reflective : float -- fraction of the final color taken from reflections, in [0, 1]
        """
        self.center = vec(center)
        if not np.all(np.isfinite(self.center)):
            raise DegenerateGeometryError(f"sphere center {center} is not finite")
        if not radius > 0 or not np.isfinite(radius):
            raise DegenerateGeometryError(f"sphere radius must be positive, got {radius}")
        if not isinstance(color, Color):
            raise InvalidConfigurationError(f"sphere color must be a Color, got {color!r}")
        if not specular >= 0 or not np.isfinite(specular):
            raise InvalidConfigurationError(f"specular exponent must be >= 0, got {specular}")
        if not 0 <= reflective <= 1:
            raise InvalidConfigurationError(f"reflectivity must be in [0, 1], got {reflective}")
        self.radius = float(radius)
        self.color = color
        self.specular = float(specular)
        self.reflective = float(reflective)

    def intersect(self, origin, direction):
        """Return the smaller root t of the ray/sphere quadratic, or None on a miss.

        The direction does not need to be normalized; t is measured in units
        of its length.
        """
        oc = origin - self.center
        a = np.dot(direction, direction)
        if a == 0:
            raise DegenerateGeometryError("ray direction has zero length")
        b = 2 * np.dot(oc, direction)
        c = np.dot(oc, oc) - self.radius * self.radius
        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return None
        disc_sqrt = np.sqrt(discriminant)
        return float(min((-b - disc_sqrt) / (2 * a), (-b + disc_sqrt) / (2 * a)))

    def normal_at(self, point):
        """Outward unit normal at a point on the surface."""
        return normalize(point - self.center)


def closest_hit(spheres, origin, direction, t_min, t_max):
    """Computes the nearest intersection with t_min < t < t_max.

    Each sphere offers only its smaller root. On equal t the earlier sphere
    in the sequence wins.

    Return:
      Hit or None
    """
    best_t = t_max
    best = None
    for sphere in spheres:
        t = sphere.intersect(origin, direction)
        if t is not None and t_min < t < best_t:
            best_t = t
            best = sphere
    if best is None:
        return None
    point = origin + best_t * direction
    return Hit(best_t, point, best.normal_at(point), best)
