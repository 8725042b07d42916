"""Generator modules: leaf nodes sampling the lattice kernels directly."""

import math
from typing import Any

from pydantic import Field, PrivateAttr

from ..noise import (
    gradient_coherent_noise_3d,
    lattice_floor,
    make_int32_range,
    value_noise_3d,
)
from ..simplex import simplex_style_gradient_coherent_noise_3d
from ..types import LatticeOrientation, NoiseQuality, SimplexQuality
from .base import Source

MAX_OCTAVE = 30

_SQRT_3 = 1.7320508075688772935

# Ridged multifractal shaping constants
_RIDGED_OFFSET = 1.0
_RIDGED_GAIN = 2.0


def _persistence_sum(persistence: float, octave_count: int) -> float:
    """Sum of persistence^i for i in [0, octave_count)."""
    if persistence == 1.0:
        return float(octave_count)
    return (persistence ** octave_count - 1.0) / (persistence - 1.0)


class FractalSource(Source, frozen=True):
    """Shared parameters of the octave-summing generators."""

    frequency: float = Field(default=1.0, description="Frequency of the first octave")
    lacunarity: float = Field(default=2.0, description="Frequency multiplier per octave")
    octave_count: int = Field(
        default=6, ge=1, le=MAX_OCTAVE, description="Number of octaves to sum"
    )
    seed: int = Field(default=0, description="Seed of the first octave")


class Perlin(FractalSource, frozen=True):
    """Sum of gradient coherent noise octaves."""

    persistence: float = Field(default=0.5, description="Amplitude multiplier per octave")
    quality: NoiseQuality = NoiseQuality.STANDARD

    def max_value(self) -> float:
        """Largest value this module can reach, for renormalization."""
        return _persistence_sum(self.persistence, self.octave_count)

    def get(self, x: float, y: float, z: float) -> float:
        x *= self.frequency
        y *= self.frequency
        z *= self.frequency
        value = 0.0
        cur_persistence = 1.0

        for octave in range(self.octave_count):
            signal = gradient_coherent_noise_3d(
                make_int32_range(x),
                make_int32_range(y),
                make_int32_range(z),
                self.seed + octave,
                self.quality,
            )
            value += signal * cur_persistence

            x *= self.lacunarity
            y *= self.lacunarity
            z *= self.lacunarity
            cur_persistence *= self.persistence

        return value


class Billow(FractalSource, frozen=True):
    """Octave sum of absolute-valued gradient noise, giving billowy lumps."""

    persistence: float = Field(default=0.5, description="Amplitude multiplier per octave")
    quality: NoiseQuality = NoiseQuality.STANDARD

    def get(self, x: float, y: float, z: float) -> float:
        x *= self.frequency
        y *= self.frequency
        z *= self.frequency
        value = 0.0
        cur_persistence = 1.0

        for octave in range(self.octave_count):
            signal = gradient_coherent_noise_3d(
                make_int32_range(x),
                make_int32_range(y),
                make_int32_range(z),
                self.seed + octave,
                self.quality,
            )
            signal = 2.0 * abs(signal) - 1.0
            value += signal * cur_persistence

            x *= self.lacunarity
            y *= self.lacunarity
            z *= self.lacunarity
            cur_persistence *= self.persistence

        return value + 0.5


class RidgedFractalSource(FractalSource, frozen=True):
    """Ridged multifractal octave loop over an abstract lattice kernel.

    Each octave inverts the absolute noise value into a ridge, squares it to
    sharpen the crest, and is weighted by the previous octave so detail
    gathers along ridges and fades in valleys.
    """

    lacunarity: float = Field(default=2.0, gt=0.0, description="Frequency multiplier per octave")

    _spectral_weights: tuple[float, ...] = PrivateAttr(default=())

    def model_post_init(self, __context: Any) -> None:
        self._spectral_weights = tuple(self.lacunarity ** -i for i in range(MAX_OCTAVE))

    def max_value(self) -> float:
        """Largest value this module can reach, for renormalization."""
        return sum(self._spectral_weights[: self.octave_count]) * 1.25 - 1.0

    def _signal(self, x: float, y: float, z: float, seed: int) -> float:
        raise NotImplementedError

    def get(self, x: float, y: float, z: float) -> float:
        x *= self.frequency
        y *= self.frequency
        z *= self.frequency
        value = 0.0
        weight = 1.0

        for octave in range(self.octave_count):
            seed = (self.seed + octave) & 0x7FFFFFFF
            signal = self._signal(
                make_int32_range(x), make_int32_range(y), make_int32_range(z), seed
            )

            signal = _RIDGED_OFFSET - abs(signal)
            signal *= signal
            signal *= weight

            weight = min(max(signal * _RIDGED_GAIN, 0.0), 1.0)

            value += signal * self._spectral_weights[octave]

            x *= self.lacunarity
            y *= self.lacunarity
            z *= self.lacunarity

        return value * 1.25 - 1.0


class RidgedMulti(RidgedFractalSource, frozen=True):
    """Ridged multifractal built on gradient coherent noise."""

    quality: NoiseQuality = NoiseQuality.STANDARD

    def _signal(self, x: float, y: float, z: float, seed: int) -> float:
        return gradient_coherent_noise_3d(x, y, z, seed, self.quality)


class Simplex(FractalSource, frozen=True):
    """Sum of simplex-style noise octaves."""

    persistence: float = Field(default=0.5, description="Amplitude multiplier per octave")
    orientation: LatticeOrientation = LatticeOrientation.XZ_BEFORE_Y
    quality: SimplexQuality = SimplexQuality.STANDARD

    def max_value(self) -> float:
        """Largest value this module can reach, for renormalization."""
        return _persistence_sum(self.persistence, self.octave_count)

    def get(self, x: float, y: float, z: float) -> float:
        x *= self.frequency
        y *= self.frequency
        z *= self.frequency
        value = 0.0
        cur_persistence = 1.0

        for octave in range(self.octave_count):
            signal = simplex_style_gradient_coherent_noise_3d(
                make_int32_range(x),
                make_int32_range(y),
                make_int32_range(z),
                self.seed + octave,
                self.orientation,
                self.quality,
            )
            value += signal * cur_persistence

            x *= self.lacunarity
            y *= self.lacunarity
            z *= self.lacunarity
            cur_persistence *= self.persistence

        return value


class RidgedMultiSimplex(RidgedFractalSource, frozen=True):
    """Ridged multifractal built on simplex-style noise."""

    orientation: LatticeOrientation = LatticeOrientation.XZ_BEFORE_Y
    quality: SimplexQuality = SimplexQuality.SMOOTH

    def _signal(self, x: float, y: float, z: float, seed: int) -> float:
        return simplex_style_gradient_coherent_noise_3d(
            x, y, z, seed, self.orientation, self.quality
        )


class Voronoi(Source, frozen=True):
    """Cellular noise assigning each Voronoi cell a value.

    Every unit cube holds one seed point jittered by value noise. The output
    is the nearest seed point's cell value times ``displacement``, plus the
    distance to that point when ``enable_distance`` is set.
    """

    displacement: float = Field(default=1.0, description="Scale of the per-cell value")
    enable_distance: bool = Field(default=False, description="Add distance to the seed point")
    frequency: float = Field(default=1.0, description="Seed points per unit length")
    seed: int = 0

    def get(self, x: float, y: float, z: float) -> float:
        x *= self.frequency
        y *= self.frequency
        z *= self.frequency

        x_int = lattice_floor(x)
        y_int = lattice_floor(y)
        z_int = lattice_floor(z)

        min_dist = 2147483647.0
        x_candidate = 0.0
        y_candidate = 0.0
        z_candidate = 0.0

        # Seed points can be jittered up to one cell away, so scan two
        # cubes in every direction.
        for z_cur in range(z_int - 2, z_int + 3):
            for y_cur in range(y_int - 2, y_int + 3):
                for x_cur in range(x_int - 2, x_int + 3):
                    x_pos = x_cur + value_noise_3d(x_cur, y_cur, z_cur, self.seed)
                    y_pos = y_cur + value_noise_3d(x_cur, y_cur, z_cur, self.seed + 1)
                    z_pos = z_cur + value_noise_3d(x_cur, y_cur, z_cur, self.seed + 2)
                    x_dist = x_pos - x
                    y_dist = y_pos - y
                    z_dist = z_pos - z
                    dist = x_dist * x_dist + y_dist * y_dist + z_dist * z_dist

                    if dist < min_dist:
                        min_dist = dist
                        x_candidate = x_pos
                        y_candidate = y_pos
                        z_candidate = z_pos

        if self.enable_distance:
            value = math.sqrt(min_dist) * _SQRT_3 - 1.0
        else:
            value = 0.0

        return value + self.displacement * value_noise_3d(
            math.floor(x_candidate),
            math.floor(y_candidate),
            math.floor(z_candidate),
            self.seed,
        )


class Spheres(Source, frozen=True):
    """Concentric spheres centered on the origin."""

    frequency: float = Field(default=1.0, description="Spheres per unit length")

    def get(self, x: float, y: float, z: float) -> float:
        x *= self.frequency
        y *= self.frequency
        z *= self.frequency

        dist_from_center = math.sqrt(x * x + y * y + z * z)
        dist_from_smaller = dist_from_center - math.floor(dist_from_center)
        dist_from_larger = 1.0 - dist_from_smaller
        nearest_dist = min(dist_from_smaller, dist_from_larger)
        return 1.0 - (nearest_dist * 4.0)


class Cylinders(Source, frozen=True):
    """Concentric cylinders around the y axis."""

    frequency: float = Field(default=1.0, description="Cylinders per unit length")

    def get(self, x: float, y: float, z: float) -> float:
        x *= self.frequency
        z *= self.frequency

        dist_from_center = math.sqrt(x * x + z * z)
        dist_from_smaller = dist_from_center - math.floor(dist_from_center)
        dist_from_larger = 1.0 - dist_from_smaller
        nearest_dist = min(dist_from_smaller, dist_from_larger)
        return 1.0 - (nearest_dist * 4.0)


class Checkerboard(Source, frozen=True):
    """Alternating unit cubes of 1.0 and -1.0."""

    def get(self, x: float, y: float, z: float) -> float:
        ix = math.floor(make_int32_range(x))
        iy = math.floor(make_int32_range(y))
        iz = math.floor(make_int32_range(z))
        return -1.0 if (ix & 1) ^ (iy & 1) ^ (iz & 1) else 1.0


class Const(Source, frozen=True):
    """Constant value everywhere."""

    value: float = 0.0

    def get(self, x: float, y: float, z: float) -> float:
        return self.value
