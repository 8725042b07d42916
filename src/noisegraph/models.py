"""Model surfaces mapping lower-dimensional coordinates onto 3D modules."""

import math

from pydantic import BaseModel

from .modules.base import Module


def lat_lon_to_xyz(lat: float, lon: float) -> tuple[float, float, float]:
    """Convert latitude and longitude in degrees to a unit sphere point."""
    r = math.cos(math.radians(lat))
    x = r * math.cos(math.radians(lon))
    y = math.sin(math.radians(lat))
    z = r * math.sin(math.radians(lon))
    return x, y, z


class Line(BaseModel, frozen=True):
    """Samples a module along the segment from ``start`` to ``end``.

    With ``attenuate`` the value is multiplied by p * (1 - p) * 4, which is
    zero at both ends and one in the middle.
    """

    module: Module
    start: tuple[float, float, float] = (0.0, 0.0, 0.0)
    end: tuple[float, float, float] = (1.0, 1.0, 1.0)
    attenuate: bool = False

    def get(self, p: float) -> float:
        """Value at position p, where 0 is ``start`` and 1 is ``end``."""
        x0, y0, z0 = self.start
        x1, y1, z1 = self.end
        value = self.module.get(
            (x1 - x0) * p + x0,
            (y1 - y0) * p + y0,
            (z1 - z0) * p + z0,
        )
        if self.attenuate:
            return p * (1.0 - p) * 4.0 * value
        return value


class Plane(BaseModel, frozen=True):
    """Samples a module on the y = 0 plane."""

    module: Module

    def get(self, x: float, z: float) -> float:
        return self.module.get(x, 0.0, z)


class Cylinder(BaseModel, frozen=True):
    """Samples a module on the unit cylinder around the y axis."""

    module: Module

    def get(self, angle: float, height: float) -> float:
        """Value at ``angle`` degrees around the axis and ``height`` along it."""
        x = math.cos(math.radians(angle))
        z = math.sin(math.radians(angle))
        return self.module.get(x, height, z)


class Sphere(BaseModel, frozen=True):
    """Samples a module on the unit sphere."""

    module: Module

    def get(self, lat: float, lon: float) -> float:
        """Value at latitude ``lat`` and longitude ``lon``, both in degrees."""
        return self.module.get(*lat_lon_to_xyz(lat, lon))
