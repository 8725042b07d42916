"""Sampling modules over numpy coordinate arrays."""

import numpy as np
import structlog
from numpy.typing import ArrayLike, NDArray

from .modules.base import Module

logger = structlog.get_logger()


def sample(module: Module, x: ArrayLike, y: ArrayLike, z: ArrayLike) -> NDArray[np.float64]:
    """Evaluate a module at every point of broadcast coordinate arrays.

    Coordinates follow numpy broadcasting rules, so a row of x values and a
    column of z values with a scalar y sample a whole plane.

    Args:
        module: Module to evaluate.
        x: X coordinates.
        y: Y coordinates.
        z: Z coordinates.

    Returns:
        Float64 array with the broadcast shape of the inputs.
    """
    xs, ys, zs = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )
    points = zip(xs.ravel().tolist(), ys.ravel().tolist(), zs.ravel().tolist())
    values = np.fromiter(
        (module.get(px, py, pz) for px, py, pz in points),
        dtype=np.float64,
        count=xs.size,
    )
    logger.debug("grid_sampled", module=type(module).__name__, shape=xs.shape)
    return values.reshape(xs.shape)


def sample_plane(
    module: Module,
    width: int,
    height: int,
    lower_x: float = -1.0,
    upper_x: float = 1.0,
    lower_z: float = -1.0,
    upper_z: float = 1.0,
    y: float = 0.0,
) -> NDArray[np.float64]:
    """Sample a module on a regular grid of the y = const plane.

    Args:
        module: Module to evaluate.
        width: Number of samples along x.
        height: Number of samples along z.
        lower_x: Smallest x coordinate.
        upper_x: Largest x coordinate.
        lower_z: Smallest z coordinate.
        upper_z: Largest z coordinate.
        y: Plane height.

    Returns:
        Array of shape (height, width), rows indexed by z.
    """
    xs = np.linspace(lower_x, upper_x, width)
    zs = np.linspace(lower_z, upper_z, height)
    return sample(module, xs[np.newaxis, :], y, zs[:, np.newaxis])
