"""Core types shared by the noise kernels and modules."""

from enum import Enum

from pydantic import BaseModel


class NoiseQuality(str, Enum):
    """Interpolation quality for the trilinear lattice kernels.

    FAST interpolates linearly, STANDARD with a cubic S-curve and BEST with
    a quintic S-curve.
    """

    FAST = "fast"
    STANDARD = "standard"
    BEST = "best"


class LatticeOrientation(str, Enum):
    """Rotation applied to the cubic lattice before the BCC lookup.

    XZ_BEFORE_Y suits fields where Y is vertical and X/Z are sampled as a
    plane; XY_BEFORE_Z is the same with Z vertical. CLASSIC is the plain
    body-diagonal rotation.
    """

    CLASSIC = "classic"
    XZ_BEFORE_Y = "xz_before_y"
    XY_BEFORE_Z = "xy_before_z"


class SimplexQuality(str, Enum):
    """Kernel size for simplex-style noise."""

    STANDARD = "standard"
    SMOOTH = "smooth"

    @property
    def kernel_squared_radius(self) -> float:
        """Squared radius of each lattice point's contribution."""
        return _KERNEL_SQUARED_RADIUS[self]


_KERNEL_SQUARED_RADIUS = {
    SimplexQuality.STANDARD: 0.5,
    SimplexQuality.SMOOTH: 0.75,
}


class ControlPoint(BaseModel, frozen=True):
    """Immutable (input, output) pair defining a Curve."""

    input_value: float
    output_value: float

    def __str__(self) -> str:
        return f"({self.input_value}, {self.output_value})"
