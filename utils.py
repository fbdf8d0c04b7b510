import numpy as np

from errors import DegenerateGeometryError


def vec(list):
    """Handy shorthand to make a read-only double-precision 3-vector."""
    v = np.array(list, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"expected 3 components, got shape {v.shape}")
    v.setflags(write=False)
    return v


def dot(u, v):
    return float(np.dot(u, v))


def length(v):
    """Euclidean length of v."""
    return float(np.sqrt(np.dot(v, v)))


def normalize(v):
    """Return a unit vector in the direction of the vector v.

    Raises DegenerateGeometryError when v has zero (or non-finite) length.
    """
    norm = length(v)
    if norm == 0.0 or not np.isfinite(norm):
        raise DegenerateGeometryError(f"cannot normalize vector {v}")
    return v / norm


def reflect(normal, v):
    """Mirror v about the normal.

    The result points away from the surface when v does, so reflecting the
    light direction gives the direction light bounces off to.
    """
    return 2.0 * np.dot(normal, v) * normal - v


def cosine(u, v):
    """Cosine of the angle between u and v, clamped below at 0."""
    denom = length(u) * length(v)
    if denom == 0.0:
        raise DegenerateGeometryError("angle with a zero-length vector")
    return max(0.0, dot(u, v) / denom)
