"""Tests for combiners, checked as algebraic laws over many points."""

import math

import numpy as np
import pytest

from noisegraph.modules import Abs, Add, Billow, Const, Max, Min, Multiply, Perlin, Power


@pytest.fixture
def pair() -> tuple[Perlin, Billow]:
    return Perlin(seed=1, octave_count=3), Billow(seed=2, octave_count=3)


class TestCombinerLaws:
    """Each combiner applies its operation pointwise."""

    def test_add(self, pair, random_points: np.ndarray) -> None:
        a, b = pair
        module = Add(source_a=a, source_b=b)
        swapped = Add(source_a=b, source_b=a)
        for x, y, z in random_points:
            va = a.get(x, y, z)
            vb = b.get(x, y, z)
            assert module.get(x, y, z) == va + vb
            assert swapped.get(x, y, z) == module.get(x, y, z)

    def test_multiply(self, pair, random_points: np.ndarray) -> None:
        a, b = pair
        module = Multiply(source_a=a, source_b=b)
        for x, y, z in random_points:
            assert module.get(x, y, z) == a.get(x, y, z) * b.get(x, y, z)

    def test_max_and_min(self, pair, random_points: np.ndarray) -> None:
        a, b = pair
        upper = Max(source_a=a, source_b=b)
        lower = Min(source_a=a, source_b=b)
        for x, y, z in random_points:
            va = a.get(x, y, z)
            vb = b.get(x, y, z)
            assert upper.get(x, y, z) == max(va, vb)
            assert lower.get(x, y, z) == min(va, vb)
            assert lower.get(x, y, z) <= upper.get(x, y, z)

    def test_power(self, pair, random_points: np.ndarray) -> None:
        a, b = pair
        base = Abs(source=a)
        module = Power(source_a=base, source_b=b)
        for x, y, z in random_points:
            expected = abs(a.get(x, y, z)) ** b.get(x, y, z)
            assert module.get(x, y, z) == expected


class TestPowerEdgeCases:
    """Power on inputs without a real result."""

    def test_negative_base_fractional_exponent(self) -> None:
        module = Power(source_a=Const(value=-8.0), source_b=Const(value=1.0 / 3.0))
        assert math.isnan(module.get(0.0, 0.0, 0.0))

    def test_zero_base_negative_exponent(self) -> None:
        module = Power(source_a=Const(value=0.0), source_b=Const(value=-1.0))
        assert module.get(0.0, 0.0, 0.0) == math.inf

    def test_overflow_is_infinite(self) -> None:
        module = Power(source_a=Const(value=1e10), source_b=Const(value=40.0))
        assert module.get(0.0, 0.0, 0.0) == math.inf

    def test_overflow_keeps_sign_of_odd_power(self) -> None:
        module = Power(source_a=Const(value=-1e10), source_b=Const(value=41.0))
        assert module.get(0.0, 0.0, 0.0) == -math.inf

    def test_integer_exponent(self) -> None:
        module = Power(source_a=Const(value=-2.0), source_b=Const(value=3.0))
        assert module.get(0.0, 0.0, 0.0) == -8.0


class TestCombinerStructure:
    """Combiners expose their two sources in slot order."""

    def test_sources(self) -> None:
        a, b = Const(value=1.0), Const(value=2.0)
        module = Add(source_a=a, source_b=b)
        assert module.source_count == 2
        assert module.sources == (a, b)
