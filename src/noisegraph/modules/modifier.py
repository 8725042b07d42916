"""Modifiers that reshape the output value of a single source."""

from typing import Any

from pydantic import PrivateAttr, field_validator, model_validator

from ..interpolation import clamp, cubic_interp, linear_interp, real_pow
from ..types import ControlPoint
from .base import Evaluation, Modifier, Module


class ScaleBias(Modifier, frozen=True):
    """Multiplies the source value by ``scale`` and adds ``bias``."""

    scale: float = 1.0
    bias: float = 0.0

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        value = yield self.source, x, y, z
        return value * self.scale + self.bias


class Abs(Modifier, frozen=True):
    """Absolute value of the source."""

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        value = yield self.source, x, y, z
        return abs(value)


class Invert(Modifier, frozen=True):
    """Mirrors the source value around ``middle``."""

    middle: float = 0.0

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        value = yield self.source, x, y, z
        return self.middle - value


class Clamp(Modifier, frozen=True):
    """Limits the source value to [lower_bound, upper_bound]."""

    lower_bound: float = -1.0
    upper_bound: float = 1.0

    @model_validator(mode="after")
    def upper_not_below_lower(self) -> "Clamp":
        if self.upper_bound < self.lower_bound:
            raise ValueError(
                f"upper_bound {self.upper_bound} is below lower_bound {self.lower_bound}"
            )
        return self

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        value = yield self.source, x, y, z
        if value < self.lower_bound:
            return self.lower_bound
        if value > self.upper_bound:
            return self.upper_bound
        return value


class Exponent(Modifier, frozen=True):
    """Applies an exponential curve to the source value.

    The value is mapped from [-1, 1] to [0, 1], raised to ``exponent`` and
    mapped back. With a positive exponent -1 and 1 are fixed points; with a
    negative one -1 maps to inf.
    """

    exponent: float = 1.0

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        value = yield self.source, x, y, z
        return real_pow(abs((value + 1.0) / 2.0), self.exponent) * 2.0 - 1.0


class Range(Modifier, frozen=True):
    """Affinely remaps the source from one interval onto another.

    Values outside the current interval are extrapolated, not clamped.
    """

    current_lower_bound: float = -1.0
    current_upper_bound: float = 1.0
    new_lower_bound: float = 0.0
    new_upper_bound: float = 1.0

    _scale: float = PrivateAttr(default=1.0)
    _bias: float = PrivateAttr(default=0.0)

    @model_validator(mode="after")
    def bounds_not_degenerate(self) -> "Range":
        if self.current_lower_bound == self.current_upper_bound:
            raise ValueError(
                f"current bounds are equal ({self.current_lower_bound})"
            )
        if self.new_lower_bound == self.new_upper_bound:
            raise ValueError(f"new bounds are equal ({self.new_lower_bound})")

        self._scale = (self.new_upper_bound - self.new_lower_bound) / (
            self.current_upper_bound - self.current_lower_bound
        )
        self._bias = self.new_lower_bound - self.current_lower_bound * self._scale
        return self

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        value = yield self.source, x, y, z
        return value * self._scale + self._bias


class Curve(Modifier, frozen=True):
    """Maps the source value through a cubic spline.

    The spline passes through every control point. Source values outside the
    control point range return the output of the nearest end point.

    Control points may be given as ``ControlPoint`` models, mappings or
    ``(input, output)`` pairs; they are stored sorted by input.
    """

    control_points: tuple[ControlPoint, ...]

    @field_validator("control_points", mode="before")
    @classmethod
    def coerce_pairs(cls, v: Any) -> Any:
        if not isinstance(v, (list, tuple)):
            return v
        points = []
        for point in v:
            if isinstance(point, (list, tuple)) and len(point) == 2:
                point = {"input_value": point[0], "output_value": point[1]}
            points.append(point)
        return points

    @field_validator("control_points")
    @classmethod
    def sorted_unique_points(cls, v: tuple[ControlPoint, ...]) -> tuple[ControlPoint, ...]:
        points = tuple(sorted(v, key=lambda p: p.input_value))
        for prev, cur in zip(points, points[1:]):
            if prev.input_value == cur.input_value:
                raise ValueError(f"duplicate control point input {cur.input_value}")
        if len(points) < 4:
            raise ValueError(f"Curve needs at least 4 control points, got {len(points)}")
        return points

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        value = yield self.source, x, y, z
        points = self.control_points
        last = len(points) - 1

        index_pos = 0
        while index_pos <= last and value >= points[index_pos].input_value:
            index_pos += 1

        index0 = clamp(index_pos - 2, 0, last)
        index1 = clamp(index_pos - 1, 0, last)
        index2 = clamp(index_pos, 0, last)
        index3 = clamp(index_pos + 1, 0, last)

        # Outside the configured range only one end point is left
        if index1 == index2:
            return points[index1].output_value

        input0 = points[index1].input_value
        input1 = points[index2].input_value
        alpha = (value - input0) / (input1 - input0)

        return cubic_interp(
            points[index0].output_value,
            points[index1].output_value,
            points[index2].output_value,
            points[index3].output_value,
            alpha,
        )


class Terrace(Modifier, frozen=True):
    """Maps the source value onto a terrace-forming curve.

    Between each pair of adjacent control points the curve rises slowly and
    then steeply, giving flat steps. ``invert_terraces`` flips each segment.
    """

    control_points: tuple[float, ...]
    invert_terraces: bool = False

    @field_validator("control_points")
    @classmethod
    def sorted_unique_points(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        points = tuple(sorted(v))
        for prev, cur in zip(points, points[1:]):
            if prev == cur:
                raise ValueError(f"duplicate control point {cur}")
        if len(points) < 2:
            raise ValueError(f"Terrace needs at least 2 control points, got {len(points)}")
        return points

    @classmethod
    def with_steps(cls, source: Module, count: int, invert_terraces: bool = False) -> "Terrace":
        """Create a Terrace with ``count`` control points evenly spaced over [-1, 1].

        Args:
            source: Source module.
            count: Number of control points, at least 2.
            invert_terraces: Whether to invert each terrace segment.

        Returns:
            New Terrace module.

        Raises:
            ValueError: If count is below 2.
        """
        if count < 2:
            raise ValueError(f"Terrace needs at least 2 control points, got {count}")
        step = 2.0 / (count - 1)
        points = tuple(-1.0 + step * i for i in range(count))
        return cls(source=source, control_points=points, invert_terraces=invert_terraces)

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        value = yield self.source, x, y, z
        points = self.control_points
        last = len(points) - 1

        index_pos = 0
        while index_pos <= last and value >= points[index_pos]:
            index_pos += 1

        index0 = clamp(index_pos - 1, 0, last)
        index1 = clamp(index_pos, 0, last)

        if index0 == index1:
            return points[index1]

        value0 = points[index0]
        value1 = points[index1]
        alpha = (value - value0) / (value1 - value0)
        if self.invert_terraces:
            alpha = 1.0 - alpha
            value0, value1 = value1, value0

        alpha *= alpha
        return linear_interp(value0, value1, alpha)
