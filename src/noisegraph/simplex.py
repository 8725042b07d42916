"""Simplex-style gradient noise on a body-centered cubic lattice.

The input point is rotated so that one body diagonal of the cubic lattice
lines up with the chosen axis, then compared against the two interleaved
cubic sub-lattices that make up the BCC lattice. Each nearby lattice point
contributes its gradient ramp attenuated by (r^2 - d^2)^4, which falls to
zero, with zero slope, at the kernel radius.
"""

import math

import numpy as np
from numpy.typing import NDArray

from .noise import RANDOM_VECTORS, gradient_index
from .types import LatticeOrientation, SimplexQuality

# Rotation constants for the planar-first orientations
_ROTATE3_ORTHOGONALIZER = -0.211324865405187
_ROOT3_OVER_3 = 0.577350269189626

# Every BCC lattice point within sqrt(0.75) of a point in [0, 0.5]^3,
# allowing a 1/32 margin on each side.
_ENVELOPE_NEIGHBOURS = np.array(
    [(cx, cy, cz) for cx in (0.0, 1.0) for cy in (0.0, 1.0) for cz in (0.0, 1.0)]
    + [(cx, cy, cz) for cx in (-0.5, 0.5) for cy in (-0.5, 0.5) for cz in (-0.5, 0.5)]
)


def _envelope_max(
    points: NDArray[np.float64], radius_sq: float
) -> tuple[float, NDArray[np.float64]]:
    """Largest envelope value over points, and the point reaching it."""
    offsets = points[:, np.newaxis, :] - _ENVELOPE_NEIGHBOURS[np.newaxis, :, :]
    dist_sq = np.einsum("ijk,ijk->ij", offsets, offsets)
    attn = np.clip(radius_sq - dist_sq, 0.0, None)
    envelope = (attn**4 * np.sqrt(dist_sq)).sum(axis=1)
    best = int(np.argmax(envelope))
    return float(envelope[best]), points[best]


def _cube_grid(center: NDArray[np.float64], half_width: float, resolution: int) -> NDArray[np.float64]:
    axis = np.linspace(-half_width, half_width, resolution)
    grid = np.stack(np.meshgrid(axis, axis, axis, indexing="ij"), axis=-1)
    return center + grid.reshape(-1, 3)


def _kernel_peak(radius_sq: float) -> float:
    """Largest possible magnitude of the unnormalized kernel sum.

    A lattice point contributes at most (r^2 - d^2)^4 * d, when its gradient
    points along the offset, so the sum of those terms bounds the noise. The
    sum repeats with period 1 and mirrors about 0.5 on every axis; a coarse
    search over [0, 0.5]^3 followed by a fine search around the best cell
    finds its maximum.
    """
    coarse_step = 0.5 / 32
    peak, best = _envelope_max(_cube_grid(np.full(3, 0.25), 0.25, 33), radius_sq)
    fine_peak, _ = _envelope_max(_cube_grid(best, coarse_step, 17), radius_sq)
    return max(peak, fine_peak)


_NORMALIZERS = {
    quality: 1.0 / _kernel_peak(quality.kernel_squared_radius) for quality in SimplexQuality
}

_CUBE_CORNERS = tuple(
    (cx, cy, cz) for cz in (0, 1) for cy in (0, 1) for cx in (0, 1)
)


def rotate_to_lattice(
    x: float,
    y: float,
    z: float,
    orientation: LatticeOrientation,
) -> tuple[float, float, float]:
    """Rotate a point into BCC lattice space.

    Args:
        x: Sample x coordinate.
        y: Sample y coordinate.
        z: Sample z coordinate.
        orientation: Which rotation to apply.

    Returns:
        Rotated (x, y, z).
    """
    if orientation == LatticeOrientation.XY_BEFORE_Z:
        xy = x + y
        s2 = xy * _ROTATE3_ORTHOGONALIZER
        zz = z * _ROOT3_OVER_3
        return x + s2 + zz, y + s2 + zz, xy * -_ROOT3_OVER_3 + zz
    if orientation == LatticeOrientation.XZ_BEFORE_Y:
        xz = x + z
        s2 = xz * _ROTATE3_ORTHOGONALIZER
        yy = y * _ROOT3_OVER_3
        return x + s2 + yy, xz * -_ROOT3_OVER_3 + yy, z + s2 + yy
    r = (2.0 / 3.0) * (x + y + z)
    return r - x, r - y, r - z


def _nearest_corners(fx: float, fy: float, fz: float) -> tuple[tuple[int, int, int], ...]:
    """Cube corners that can lie within the STANDARD kernel radius.

    Only the nearest corner and its neighbour across the axis where the
    point sits closest to the cell middle can be within sqrt(0.5); any
    other corner is at least that far away.
    """
    rx = 1 if fx >= 0.5 else 0
    ry = 1 if fy >= 0.5 else 0
    rz = 1 if fz >= 0.5 else 0
    mx = abs(fx - rx)
    my = abs(fy - ry)
    mz = abs(fz - rz)
    if mx >= my and mx >= mz:
        second = (1 - rx, ry, rz)
    elif my >= mz:
        second = (rx, 1 - ry, rz)
    else:
        second = (rx, ry, 1 - rz)
    return (rx, ry, rz), second


def bcc_noise_3d(
    x: float,
    y: float,
    z: float,
    seed: int,
    quality: SimplexQuality,
) -> float:
    """Evaluate noise on the BCC lattice for already rotated coordinates.

    Args:
        x: Rotated x coordinate.
        y: Rotated y coordinate.
        z: Rotated z coordinate.
        seed: Random seed.
        quality: Kernel size.

    Returns:
        Noise value in [-1, 1].
    """
    radius_sq = quality.kernel_squared_radius
    value = 0.0

    for lattice in (0, 1):
        # The second sub-lattice sits half a cell off on every axis. Points
        # are hashed on doubled coordinates so both sub-lattices share one
        # integer grid.
        offset = 0.5 * lattice
        px = x + offset
        py = y + offset
        pz = z + offset
        bx = math.floor(px)
        by = math.floor(py)
        bz = math.floor(pz)
        fx = px - bx
        fy = py - by
        fz = pz - bz

        if quality == SimplexQuality.STANDARD:
            corners = _nearest_corners(fx, fy, fz)
        else:
            corners = _CUBE_CORNERS

        for cx, cy, cz in corners:
            dx = fx - cx
            dy = fy - cy
            dz = fz - cz
            attn = radius_sq - (dx * dx + dy * dy + dz * dz)
            if attn <= 0.0:
                continue
            index = gradient_index(
                2 * (bx + cx) - lattice,
                2 * (by + cy) - lattice,
                2 * (bz + cz) - lattice,
                seed,
            )
            gx, gy, gz = RANDOM_VECTORS[index]
            attn *= attn
            value += attn * attn * (gx * dx + gy * dy + gz * dz)

    return value * _NORMALIZERS[quality]


def simplex_style_gradient_coherent_noise_3d(
    x: float,
    y: float,
    z: float,
    seed: int,
    orientation: LatticeOrientation,
    quality: SimplexQuality,
) -> float:
    """Generate simplex-style gradient coherent noise.

    Args:
        x: Sample x coordinate.
        y: Sample y coordinate.
        z: Sample z coordinate.
        seed: Random seed.
        orientation: Lattice rotation.
        quality: Kernel size.

    Returns:
        Noise value in [-1, 1].
    """
    xr, yr, zr = rotate_to_lattice(x, y, z, orientation)
    return bcc_noise_3d(xr, yr, zr, seed, quality)
