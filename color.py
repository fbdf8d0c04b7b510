"""
8-bit RGB colors used to accumulate shading.
"""

import numpy as np

from errors import InvalidConfigurationError, RaytracerError


def clamp8(values):
    """Truncate float channel values toward zero and clamp them to 0..255."""
    return np.clip(np.trunc(values), 0, 255).astype(np.uint8)


class Color:
    """An immutable RGB color with integer channels in 0..255.

    Arithmetic saturates instead of wrapping: scaling by a factor above 1 or
    adding two bright colors stops at 255.
    """

    __slots__ = ('_rgb',)

    def __init__(self, r, g, b):
        """Create a color from three channel values in 0..255."""
        rgb = (r, g, b)
        for c in rgb:
            if not 0 <= c <= 255 or int(c) != c:
                raise InvalidConfigurationError(f"color channel {c!r} is not an integer in 0..255")
        object.__setattr__(self, '_rgb', tuple(int(c) for c in rgb))

    @classmethod
    def black(cls):
        return cls(0, 0, 0)

    @classmethod
    def _from_array(cls, rgb):
        return cls(*rgb.tolist())

    @property
    def r(self):
        return self._rgb[0]

    @property
    def g(self):
        return self._rgb[1]

    @property
    def b(self):
        return self._rgb[2]

    def __setattr__(self, name, value):
        raise AttributeError("Color is immutable")

    def as_array(self):
        return np.array(self._rgb, dtype=np.uint8)

    def scale(self, factor):
        """Multiply every channel by factor, truncating the result."""
        if not np.isfinite(factor):
            raise RaytracerError(f"cannot scale a color by {factor}")
        return Color._from_array(clamp8(np.array(self._rgb, dtype=np.float64) * factor))

    def add(self, other):
        """Channel-wise sum, saturating at 255."""
        total = np.array(self._rgb, dtype=np.int32) + np.array(other._rgb, dtype=np.int32)
        return Color._from_array(np.clip(total, 0, 255).astype(np.uint8))

    def is_black(self):
        return self._rgb == (0, 0, 0)

    __mul__ = scale
    __rmul__ = scale
    __add__ = add

    def __iter__(self):
        return iter(self._rgb)

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self._rgb == other._rgb

    def __hash__(self):
        return hash(self._rgb)

    def __repr__(self):
        return 'Color(%d, %d, %d)' % self._rgb
