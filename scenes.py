import logging

from color import Color
from errors import InvalidConfigurationError, RaytracerError
from geometry import Sphere
from ray import Scene, Viewport, AmbientLight, DirectionalLight, PointLight, MAX_DEPTH
from utils import vec

logger = logging.getLogger(__name__)


class SceneDef(object):
    """Everything about a scene except the window it is rendered into."""

    def __init__(self, spheres, lights, viewport_size=1.0, max_depth=MAX_DEPTH):
        self.spheres = list(spheres)
        self.lights = list(lights)
        self.viewport_size = viewport_size
        self.max_depth = max_depth

    def build(self, width, height):
        """Validate the description and return a Scene for a width x height window."""
        viewport = Viewport(self.viewport_size, width, height)
        return Scene(viewport, self.spheres, self.lights, max_depth=self.max_depth)


# keyword -> number of numeric parameters
_ARITY = {
    'vp': 1,
    'dep': 1,
    'sph': 9,
    'amb': 1,
    'dir': 4,
    'pnt': 4,
}


def parse_scene_file(f):
    """Read a scene description.

    Argument is an open file. Each non-blank line not starting with '#'
    holds a keyword and its parameters:

        vp  size
        dep max_depth
        sph cx cy cz radius r g b specular reflective
        amb intensity
        dir intensity dx dy dz
        pnt intensity px py pz

    Returns a SceneDef.
    """
    spheres = []
    lights = []
    viewport_size = 1.0
    max_depth = MAX_DEPTH

    for lineno, line in enumerate(f, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split()
        obj_type = parts[0]
        if obj_type not in _ARITY:
            raise InvalidConfigurationError(f"line {lineno}: unknown object type {obj_type!r}")
        if len(parts) - 1 != _ARITY[obj_type]:
            raise InvalidConfigurationError(
                f"line {lineno}: {obj_type} takes {_ARITY[obj_type]} parameters, got {len(parts) - 1}")
        try:
            params = [float(p) for p in parts[1:]]
        except ValueError:
            raise InvalidConfigurationError(f"line {lineno}: parameters must be numbers: {line!r}") from None

        try:
            if obj_type == "vp":
                if not 0 < params[0] < float('inf'):
                    raise InvalidConfigurationError(f"viewport size must be positive, got {params[0]}")
                viewport_size = params[0]
            elif obj_type == "dep":
                if not params[0].is_integer() or params[0] < 0:
                    raise InvalidConfigurationError(f"max_depth must be a non-negative integer, got {params[0]}")
                max_depth = int(params[0])
            elif obj_type == "sph":
                spheres.append(Sphere(params[:3], params[3], Color(*params[4:7]), params[7], params[8]))
            elif obj_type == "amb":
                lights.append(AmbientLight(params[0]))
            elif obj_type == "dir":
                lights.append(DirectionalLight(params[0], params[1:4]))
            elif obj_type == "pnt":
                lights.append(PointLight(params[0], params[1:4]))
        except RaytracerError as e:
            raise type(e)(f"line {lineno}: {e}") from None

    logger.info("scene loaded: %d spheres, %d lights", len(spheres), len(lights))
    return SceneDef(spheres, lights, viewport_size=viewport_size, max_depth=max_depth)


def FourSpheresExample():
    spheres = [
        Sphere(vec([-1.6, -0.25, 7]), 0.9, Color(0xFF, 0x00, 0x33), 1000, 0.7),
        Sphere(vec([1.6, -0.25, 7]), 0.9, Color(0xFF, 0x99, 0x00), 1000, 0.7),
        Sphere(vec([0, -0.9, 6]), 0.7, Color(0x00, 0xFF, 0x00), 80, 0.45),
        # the floor
        Sphere(vec([0.4, -5001, 0]), 5000, Color(0x00, 0x00, 0xFF), 10, 0.3),
    ]
    lights = [
        AmbientLight(0.1),
        DirectionalLight(0.2, vec([-1.5, 0.8, -1.5])),
        PointLight(0.7, vec([0, 0.5, 6.5])),
    ]
    return SceneDef(spheres, lights, viewport_size=1.0)


def SingleSphereExample():
    spheres = [
        Sphere(vec([0, 0, 5]), 1, Color(0xFF, 0x00, 0x00), 0),
    ]
    lights = [
        AmbientLight(1.0),
    ]
    return SceneDef(spheres, lights, viewport_size=1.0)
