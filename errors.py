"""
Exceptions raised while building or rendering a scene.
"""


class RaytracerError(Exception):
    """Base class for all ray tracer errors."""


class InvalidConfigurationError(RaytracerError, ValueError):
    """A scene parameter is out of its allowed range (sizes, intensities, colors)."""


class DegenerateGeometryError(RaytracerError, ValueError):
    """Geometry that would divide by zero: empty spheres, zero-length directions."""
