"""Modifiers that transform the input coordinate before sampling the source."""

import math
from typing import Any

from pydantic import Field, PrivateAttr

from .base import Evaluation, Modifier
from .source import MAX_OCTAVE, Perlin

# Fractional offsets keep the three distorters from sampling the same point
_X_DISTORT_OFFSETS = (12414.0 / 65536.0, 65124.0 / 65536.0, 31337.0 / 65536.0)
_Y_DISTORT_OFFSETS = (26519.0 / 65536.0, 18128.0 / 65536.0, 60493.0 / 65536.0)
_Z_DISTORT_OFFSETS = (53820.0 / 65536.0, 11213.0 / 65536.0, 44845.0 / 65536.0)


class ScalePoint(Modifier, frozen=True):
    """Scales the input coordinate per axis."""

    x_scale: float = 1.0
    y_scale: float = 1.0
    z_scale: float = 1.0

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        return (yield self.source, x * self.x_scale, y * self.y_scale, z * self.z_scale)


class TranslatePoint(Modifier, frozen=True):
    """Moves the input coordinate per axis."""

    x_translation: float = 0.0
    y_translation: float = 0.0
    z_translation: float = 0.0

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        return (
            yield self.source,
            x + self.x_translation,
            y + self.y_translation,
            z + self.z_translation,
        )


class RotatePoint(Modifier, frozen=True):
    """Rotates the input coordinate around the origin.

    Angles are in degrees. The rotation matrix is computed once at
    construction.
    """

    x_angle: float = 0.0
    y_angle: float = 0.0
    z_angle: float = 0.0

    _matrix: tuple[tuple[float, float, float], ...] = PrivateAttr(default=())

    def model_post_init(self, __context: Any) -> None:
        x_cos = math.cos(math.radians(self.x_angle))
        y_cos = math.cos(math.radians(self.y_angle))
        z_cos = math.cos(math.radians(self.z_angle))
        x_sin = math.sin(math.radians(self.x_angle))
        y_sin = math.sin(math.radians(self.y_angle))
        z_sin = math.sin(math.radians(self.z_angle))

        self._matrix = (
            (
                y_sin * x_sin * z_sin + y_cos * z_cos,
                x_cos * z_sin,
                y_sin * z_cos - y_cos * x_sin * z_sin,
            ),
            (
                y_sin * x_sin * z_cos - y_cos * z_sin,
                x_cos * z_cos,
                -y_cos * x_sin * z_cos - y_sin * z_sin,
            ),
            (
                -y_sin * x_cos,
                x_sin,
                y_cos * x_cos,
            ),
        )

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        (x1, y1, z1), (x2, y2, z2), (x3, y3, z3) = self._matrix
        nx = x1 * x + y1 * y + z1 * z
        ny = x2 * x + y2 * y + z2 * z
        nz = x3 * x + y3 * y + z3 * z
        return (yield self.source, nx, ny, nz)


class Turbulence(Modifier, frozen=True):
    """Randomly displaces the input coordinate with three Perlin distorters.

    ``frequency`` sets how quickly the displacement changes, ``roughness``
    the number of distorter octaves and ``power`` the displacement scale.
    The distorters are seeded with ``seed``, ``seed + 1`` and ``seed + 2``.
    """

    power: float = Field(default=1.0, description="Scale of the displacement")
    frequency: float = Field(default=1.0, description="Frequency of the distorters")
    roughness: int = Field(
        default=3, ge=1, le=MAX_OCTAVE, description="Octave count of the distorters"
    )
    seed: int = 0

    _x_distort: Perlin = PrivateAttr()
    _y_distort: Perlin = PrivateAttr()
    _z_distort: Perlin = PrivateAttr()

    def model_post_init(self, __context: Any) -> None:
        self._x_distort = self._distorter(self.seed)
        self._y_distort = self._distorter(self.seed + 1)
        self._z_distort = self._distorter(self.seed + 2)

    def _distorter(self, seed: int) -> Perlin:
        return Perlin(frequency=self.frequency, octave_count=self.roughness, seed=seed)

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        x0, y0, z0 = x + _X_DISTORT_OFFSETS[0], y + _X_DISTORT_OFFSETS[1], z + _X_DISTORT_OFFSETS[2]
        x1, y1, z1 = x + _Y_DISTORT_OFFSETS[0], y + _Y_DISTORT_OFFSETS[1], z + _Y_DISTORT_OFFSETS[2]
        x2, y2, z2 = x + _Z_DISTORT_OFFSETS[0], y + _Z_DISTORT_OFFSETS[1], z + _Z_DISTORT_OFFSETS[2]

        x_distort = x + self._x_distort.get(x0, y0, z0) * self.power
        y_distort = y + self._y_distort.get(x1, y1, z1) * self.power
        z_distort = z + self._z_distort.get(x2, y2, z2) * self.power

        return (yield self.source, x_distort, y_distort, z_distort)
