"""Tests for coordinate transformers."""

import numpy as np
import pytest
from pydantic import ValidationError

from noisegraph.modules import (
    Perlin,
    RotatePoint,
    ScalePoint,
    Spheres,
    TranslatePoint,
    Turbulence,
)


class TestScalePoint:
    """Tests for ScalePoint."""

    def test_scales_each_axis(self, linear_source) -> None:
        module = ScalePoint(source=linear_source, x_scale=2.0, y_scale=3.0, z_scale=4.0)
        assert module.get(1.0, 1.0, 1.0) == 2.0 + 30.0 + 400.0

    def test_defaults_are_identity(self, linear_source) -> None:
        assert ScalePoint(source=linear_source).get(1.0, 2.0, 3.0) == 321.0


class TestTranslatePoint:
    """Tests for TranslatePoint."""

    def test_translates_each_axis(self, linear_source) -> None:
        module = TranslatePoint(
            source=linear_source, x_translation=1.0, y_translation=2.0, z_translation=3.0
        )
        assert module.get(0.0, 0.0, 0.0) == 321.0


class TestRotatePoint:
    """Tests for RotatePoint."""

    def test_zero_angles_are_identity(self, linear_source) -> None:
        module = RotatePoint(source=linear_source)
        assert module.get(1.0, 2.0, 3.0) == 321.0

    def test_quarter_turn_around_y(self, linear_source) -> None:
        """A 90 degree turn around y sends x to -z and z to x."""
        module = RotatePoint(source=linear_source, y_angle=90.0)
        assert module.get(1.0, 0.0, 0.0) == pytest.approx(-100.0)
        assert module.get(0.0, 0.0, 1.0) == pytest.approx(1.0)
        assert module.get(0.0, 1.0, 0.0) == pytest.approx(10.0)

    def test_preserves_distance_from_origin(self) -> None:
        """Rotation leaves concentric spheres unchanged."""
        spheres = Spheres(frequency=0.7)
        rotated = RotatePoint(source=spheres, x_angle=30.0, y_angle=45.0, z_angle=60.0)
        rng = np.random.default_rng(21)
        for x, y, z in rng.uniform(-5.0, 5.0, size=(100, 3)):
            assert rotated.get(x, y, z) == pytest.approx(spheres.get(x, y, z), abs=1e-9)


class TestTurbulence:
    """Tests for Turbulence."""

    def test_defaults(self) -> None:
        module = Turbulence(source=Spheres())
        assert module.power == 1.0
        assert module.frequency == 1.0
        assert module.roughness == 3
        assert module.seed == 0

    def test_zero_power_is_identity(self, linear_source) -> None:
        module = Turbulence(source=linear_source, power=0.0)
        assert module.get(0.4, 1.3, -2.2) == linear_source.get(0.4, 1.3, -2.2)

    def test_displaces_input(self, linear_source) -> None:
        module = Turbulence(source=linear_source, power=0.5, seed=3)
        values = [module.get(x * 0.37, 0.5, 0.25) for x in range(10)]
        expected = [linear_source.get(x * 0.37, 0.5, 0.25) for x in range(10)]
        assert values != expected

    def test_displacement_follows_distorters(self, linear_source) -> None:
        """The x offset is the seed distorter sampled at a fixed fractional shift."""
        module = Turbulence(source=linear_source, power=1.0, seed=4, roughness=2, frequency=0.5)
        distort = Perlin(frequency=0.5, octave_count=2, seed=4)
        y_distort = Perlin(frequency=0.5, octave_count=2, seed=5)
        z_distort = Perlin(frequency=0.5, octave_count=2, seed=6)
        x, y, z = 1.0, 2.0, 3.0
        dx = distort.get(x + 12414.0 / 65536.0, y + 65124.0 / 65536.0, z + 31337.0 / 65536.0)
        dy = y_distort.get(x + 26519.0 / 65536.0, y + 18128.0 / 65536.0, z + 60493.0 / 65536.0)
        dz = z_distort.get(x + 53820.0 / 65536.0, y + 11213.0 / 65536.0, z + 44845.0 / 65536.0)
        assert module.get(x, y, z) == pytest.approx(linear_source.get(x + dx, y + dy, z + dz))

    def test_deterministic(self) -> None:
        a = Turbulence(source=Spheres(), seed=2)
        b = Turbulence(source=Spheres(), seed=2)
        assert a.get(0.1, 0.2, 0.3) == b.get(0.1, 0.2, 0.3)

    def test_rejects_invalid_roughness(self) -> None:
        with pytest.raises(ValidationError):
            Turbulence(source=Spheres(), roughness=0)
