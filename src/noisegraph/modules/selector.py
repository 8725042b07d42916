"""Selectors and Displace: modules driven by more than two children."""

from typing import ClassVar

from pydantic import Field, ValidationInfo, field_validator, model_validator

from ..interpolation import linear_interp, s_curve3
from .base import Evaluation, Module, Selector


class Blend(Selector, frozen=True):
    """Weighted blend of two sources.

    ``control`` at -1 gives ``source_a``, at 1 gives ``source_b``, and
    values between interpolate linearly.
    """

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        a = yield self.source_a, x, y, z
        b = yield self.source_b, x, y, z
        control = yield self.control, x, y, z
        alpha = (control + 1.0) / 2.0
        return linear_interp(a, b, alpha)


class Select(Selector, frozen=True):
    """Chooses between two sources by the value of ``control``.

    Inside [lower_bound, upper_bound] the output is ``source_b``, outside it
    ``source_a``. A positive ``edge_falloff`` blends the two with a cubic
    S-curve over a band of that half-width around each bound. The falloff is
    clamped to half the bound span so the two bands never overlap.
    """

    lower_bound: float = -1.0
    upper_bound: float = 1.0
    edge_falloff: float = Field(default=0.0, ge=0.0)

    @field_validator("edge_falloff")
    @classmethod
    def falloff_within_span(cls, v: float, info: ValidationInfo) -> float:
        lower = info.data.get("lower_bound", cls.model_fields["lower_bound"].default)
        upper = info.data.get("upper_bound", cls.model_fields["upper_bound"].default)
        if upper < lower:
            return v
        return min(v, (upper - lower) / 2.0)

    @model_validator(mode="after")
    def upper_not_below_lower(self) -> "Select":
        if self.upper_bound < self.lower_bound:
            raise ValueError(
                f"upper_bound {self.upper_bound} is below lower_bound {self.lower_bound}"
            )
        return self

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        control = yield self.control, x, y, z
        lower = self.lower_bound
        upper = self.upper_bound
        falloff = self.edge_falloff

        if falloff > 0.0:
            if control < lower - falloff:
                return (yield self.source_a, x, y, z)
            if control < lower + falloff:
                alpha = s_curve3((control - (lower - falloff)) / (2.0 * falloff))
                a = yield self.source_a, x, y, z
                b = yield self.source_b, x, y, z
                return linear_interp(a, b, alpha)
            if control < upper - falloff:
                return (yield self.source_b, x, y, z)
            if control < upper + falloff:
                alpha = s_curve3((control - (upper - falloff)) / (2.0 * falloff))
                a = yield self.source_a, x, y, z
                b = yield self.source_b, x, y, z
                return linear_interp(b, a, alpha)
            return (yield self.source_a, x, y, z)

        if control < lower or control > upper:
            return (yield self.source_a, x, y, z)
        return (yield self.source_b, x, y, z)


class Displace(Module, frozen=True):
    """Offsets the input coordinate by three displacement modules.

    Each displacement module is sampled at the original coordinate and its
    value added to the matching axis before ``source`` is sampled.
    """

    source_fields: ClassVar[tuple[str, ...]] = (
        "source",
        "x_displace",
        "y_displace",
        "z_displace",
    )

    source: Module
    x_displace: Module
    y_displace: Module
    z_displace: Module

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        dx = yield self.x_displace, x, y, z
        dy = yield self.y_displace, x, y, z
        dz = yield self.z_displace, x, y, z
        return (yield self.source, x + dx, y + dy, z + dz)
