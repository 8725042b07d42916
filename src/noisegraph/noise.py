"""Lattice noise kernels.

Provides integer lattice hashing, gradient and value noise, and their
trilinearly interpolated coherent forms. All kernels are deterministic:
identical inputs always produce identical outputs.

Every kernel follows the symmetric convention: coherent noise values lie
in [-1, 1].
"""

import math

import numpy as np
from numpy.typing import NDArray

from .interpolation import linear_interp, s_curve3, s_curve5
from .types import NoiseQuality

# Lattice hash multipliers. All are primes and must stay prime.
X_NOISE_GEN = 1619
Y_NOISE_GEN = 31337
Z_NOISE_GEN = 6971
SEED_NOISE_GEN = 1013
SHIFT_NOISE_GEN = 8

# The trilinear blend of unit-gradient ramps peaks at sqrt(3) / 2, at the
# cell centre with every gradient pointing along its offset. Scaling by the
# inverse keeps coherent gradient noise inside [-1, 1].
GRADIENT_SCALE = 2.0 / math.sqrt(3.0)

_INT32_RANGE = 1073741824.0


def int_value_noise_3d(x: int, y: int, z: int, seed: int) -> int:
    """Generate an integer-valued noise value from lattice coordinates.

    Args:
        x: Integer x coordinate.
        y: Integer y coordinate.
        z: Integer z coordinate.
        seed: Random seed.

    Returns:
        Integer in [0, 2147483647].
    """
    # Only the low 31 bits survive the masks, so 32-bit overflow of the
    # intermediate products does not change the result.
    n = (X_NOISE_GEN * x + Y_NOISE_GEN * y + Z_NOISE_GEN * z + SEED_NOISE_GEN * seed) & 0x7FFFFFFF
    n = (n >> 13) ^ n
    return (n * (n * n * 60493 + 19990303) + 1376312589) & 0x7FFFFFFF


def value_noise_3d(x: int, y: int, z: int, seed: int) -> float:
    """Generate value noise in [-1, 1] from lattice coordinates."""
    return 1.0 - (int_value_noise_3d(x, y, z, seed) / 1073741824.0)


def _build_gradient_table(count: int = 256) -> NDArray[np.float64]:
    """Build a table of unit-length gradient vectors.

    Directions are spread over the sphere with a golden-angle spiral and
    then shuffled with the lattice hash so neighbouring indices point in
    unrelated directions.

    Args:
        count: Number of vectors.

    Returns:
        Array of shape (count, 3) with unit-length rows.
    """
    index = np.arange(count, dtype=np.float64) + 0.5
    polar = np.arccos(1.0 - 2.0 * index / count)
    azimuth = np.pi * (1.0 + np.sqrt(5.0)) * index

    vectors = np.column_stack((
        np.cos(azimuth) * np.sin(polar),
        np.sin(azimuth) * np.sin(polar),
        np.cos(polar),
    ))
    vectors /= np.linalg.norm(vectors, axis=1, keepdims=True)

    keys = np.array([int_value_noise_3d(i, 0, 0, 0) for i in range(count)])
    order = np.argsort(keys, kind="stable")
    return vectors[order]


GRADIENT_TABLE: NDArray[np.float64] = _build_gradient_table()

# Plain tuples index much faster than numpy scalars in the per-sample loops
RANDOM_VECTORS: tuple[tuple[float, float, float], ...] = tuple(
    (float(gx), float(gy), float(gz)) for gx, gy, gz in GRADIENT_TABLE.tolist()
)


def gradient_index(ix: int, iy: int, iz: int, seed: int) -> int:
    """Hash lattice coordinates into an index of RANDOM_VECTORS."""
    # The result depends only on the low 16 bits of the hash, which 32-bit
    # wraparound leaves untouched.
    vector_index = X_NOISE_GEN * ix + Y_NOISE_GEN * iy + Z_NOISE_GEN * iz + SEED_NOISE_GEN * seed
    vector_index ^= vector_index >> SHIFT_NOISE_GEN
    return vector_index & 0xFF


def gradient_noise_3d(
    fx: float,
    fy: float,
    fz: float,
    ix: int,
    iy: int,
    iz: int,
    seed: int,
) -> float:
    """Generate gradient noise for a point relative to one lattice corner.

    Args:
        fx: Floating-point x coordinate of the sample.
        fy: Floating-point y coordinate of the sample.
        fz: Floating-point z coordinate of the sample.
        ix: Integer x coordinate of the lattice corner.
        iy: Integer y coordinate of the lattice corner.
        iz: Integer z coordinate of the lattice corner.
        seed: Random seed.

    Returns:
        Scaled dot product of the corner gradient with the offset.
    """
    gx, gy, gz = RANDOM_VECTORS[gradient_index(ix, iy, iz, seed)]
    return ((gx * (fx - ix)) + (gy * (fy - iy)) + (gz * (fz - iz))) * GRADIENT_SCALE


def lattice_floor(value: float) -> int:
    """Integer lattice coordinate of the cell containing value.

    Truncates toward zero for positive values and steps down one cell
    otherwise, so 0.0 and negative integers map to the cell below.
    """
    return int(value) if value > 0.0 else int(value) - 1


def _fade(t: float, quality: NoiseQuality) -> float:
    if quality == NoiseQuality.FAST:
        return t
    if quality == NoiseQuality.STANDARD:
        return s_curve3(t)
    return s_curve5(t)


def gradient_coherent_noise_3d(
    x: float,
    y: float,
    z: float,
    seed: int,
    quality: NoiseQuality,
) -> float:
    """Generate gradient coherent noise by trilinear interpolation.

    Args:
        x: Sample x coordinate.
        y: Sample y coordinate.
        z: Sample z coordinate.
        seed: Random seed.
        quality: Interpolation quality.

    Returns:
        Noise value in [-1, 1].
    """
    x0 = lattice_floor(x)
    x1 = x0 + 1
    y0 = lattice_floor(y)
    y1 = y0 + 1
    z0 = lattice_floor(z)
    z1 = z0 + 1

    xs = _fade(x - x0, quality)
    ys = _fade(y - y0, quality)
    zs = _fade(z - z0, quality)

    n0 = gradient_noise_3d(x, y, z, x0, y0, z0, seed)
    n1 = gradient_noise_3d(x, y, z, x1, y0, z0, seed)
    ix0 = linear_interp(n0, n1, xs)
    n0 = gradient_noise_3d(x, y, z, x0, y1, z0, seed)
    n1 = gradient_noise_3d(x, y, z, x1, y1, z0, seed)
    ix1 = linear_interp(n0, n1, xs)
    iy0 = linear_interp(ix0, ix1, ys)

    n0 = gradient_noise_3d(x, y, z, x0, y0, z1, seed)
    n1 = gradient_noise_3d(x, y, z, x1, y0, z1, seed)
    ix0 = linear_interp(n0, n1, xs)
    n0 = gradient_noise_3d(x, y, z, x0, y1, z1, seed)
    n1 = gradient_noise_3d(x, y, z, x1, y1, z1, seed)
    ix1 = linear_interp(n0, n1, xs)
    iy1 = linear_interp(ix0, ix1, ys)

    return linear_interp(iy0, iy1, zs)


def value_coherent_noise_3d(
    x: float,
    y: float,
    z: float,
    seed: int,
    quality: NoiseQuality,
) -> float:
    """Generate value coherent noise by trilinear interpolation.

    Args:
        x: Sample x coordinate.
        y: Sample y coordinate.
        z: Sample z coordinate.
        seed: Random seed.
        quality: Interpolation quality.

    Returns:
        Noise value in [-1, 1].
    """
    x0 = lattice_floor(x)
    x1 = x0 + 1
    y0 = lattice_floor(y)
    y1 = y0 + 1
    z0 = lattice_floor(z)
    z1 = z0 + 1

    xs = _fade(x - x0, quality)
    ys = _fade(y - y0, quality)
    zs = _fade(z - z0, quality)

    n0 = value_noise_3d(x0, y0, z0, seed)
    n1 = value_noise_3d(x1, y0, z0, seed)
    ix0 = linear_interp(n0, n1, xs)
    n0 = value_noise_3d(x0, y1, z0, seed)
    n1 = value_noise_3d(x1, y1, z0, seed)
    ix1 = linear_interp(n0, n1, xs)
    iy0 = linear_interp(ix0, ix1, ys)

    n0 = value_noise_3d(x0, y0, z1, seed)
    n1 = value_noise_3d(x1, y0, z1, seed)
    ix0 = linear_interp(n0, n1, xs)
    n0 = value_noise_3d(x0, y1, z1, seed)
    n1 = value_noise_3d(x1, y1, z1, seed)
    ix1 = linear_interp(n0, n1, xs)
    iy1 = linear_interp(ix0, ix1, ys)

    return linear_interp(iy0, iy1, zs)


def make_int32_range(n: float) -> float:
    """Wrap a coordinate into (-2^30, 2^30).

    Fractal generators multiply coordinates by the lacunarity every octave;
    wrapping keeps lattice coordinates inside 32-bit integer range.
    """
    if n >= _INT32_RANGE:
        return (2.0 * math.fmod(n, _INT32_RANGE)) - _INT32_RANGE
    if n <= -_INT32_RANGE:
        return (2.0 * math.fmod(n, _INT32_RANGE)) + _INT32_RANGE
    return n
