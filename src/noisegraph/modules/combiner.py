"""Combiners applying a binary operation to two sources."""

from ..interpolation import real_pow
from .base import Combiner


class Add(Combiner, frozen=True):
    """Sum of the two sources."""

    def combine(self, a: float, b: float) -> float:
        return a + b


class Multiply(Combiner, frozen=True):
    """Product of the two sources."""

    def combine(self, a: float, b: float) -> float:
        return a * b


class Max(Combiner, frozen=True):
    """Larger of the two sources."""

    def combine(self, a: float, b: float) -> float:
        return max(a, b)


class Min(Combiner, frozen=True):
    """Smaller of the two sources."""

    def combine(self, a: float, b: float) -> float:
        return min(a, b)


class Power(Combiner, frozen=True):
    """``source_a`` raised to the power of ``source_b``.

    Zero to a negative power and overflowing results evaluate to an
    infinity. A negative base with a fractional exponent has no real result
    and evaluates to NaN.
    """

    def combine(self, a: float, b: float) -> float:
        return real_pow(a, b)
