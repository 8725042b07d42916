"""Tests for the lattice noise kernels."""

import numpy as np
import pytest

from noisegraph.noise import (
    GRADIENT_SCALE,
    GRADIENT_TABLE,
    RANDOM_VECTORS,
    gradient_coherent_noise_3d,
    gradient_index,
    gradient_noise_3d,
    int_value_noise_3d,
    lattice_floor,
    make_int32_range,
    value_coherent_noise_3d,
    value_noise_3d,
)
from noisegraph.types import NoiseQuality


class TestIntValueNoise:
    """Tests for the integer lattice hash."""

    def test_origin_value(self) -> None:
        """Hash of the origin with seed 0 is the additive constant."""
        assert int_value_noise_3d(0, 0, 0, 0) == 1376312589

    def test_range(self) -> None:
        """Results stay within 31 bits, including for huge coordinates."""
        coords = [-(2**40), -12345, -1, 0, 1, 7919, 2**31 - 1, 2**40]
        for x in coords:
            for seed in (0, 1, -5):
                value = int_value_noise_3d(x, x // 3, -x, seed)
                assert 0 <= value <= 0x7FFFFFFF

    def test_deterministic(self) -> None:
        """Same inputs give the same hash."""
        assert int_value_noise_3d(3, -4, 5, 9) == int_value_noise_3d(3, -4, 5, 9)

    def test_seed_changes_value(self) -> None:
        """Different seeds give different hashes."""
        assert int_value_noise_3d(3, -4, 5, 9) != int_value_noise_3d(3, -4, 5, 10)


class TestValueNoise:
    """Tests for value noise."""

    def test_origin_value(self) -> None:
        assert value_noise_3d(0, 0, 0, 0) == pytest.approx(1.0 - 1376312589 / 1073741824)

    def test_range(self) -> None:
        """Values lie in [-1, 1]."""
        values = [value_noise_3d(x, y, 3, 0) for x in range(-10, 10) for y in range(-10, 10)]
        assert min(values) >= -1.0
        assert max(values) <= 1.0


class TestGradientTable:
    """Tests for the gradient vector table."""

    def test_shape(self) -> None:
        assert GRADIENT_TABLE.shape == (256, 3)
        assert len(RANDOM_VECTORS) == 256

    def test_unit_length(self) -> None:
        """Every gradient vector has unit length."""
        norms = np.linalg.norm(GRADIENT_TABLE, axis=1)
        np.testing.assert_allclose(norms, 1.0, rtol=1e-12)

    def test_tuples_match_array(self) -> None:
        np.testing.assert_array_equal(np.array(RANDOM_VECTORS), GRADIENT_TABLE)

    def test_directions_cover_sphere(self) -> None:
        """Vectors are spread over the sphere, so their mean is near zero."""
        assert np.linalg.norm(GRADIENT_TABLE.mean(axis=0)) < 0.1

    def test_index_range(self) -> None:
        for ix in (-300, -1, 0, 1, 300, 2**35):
            assert 0 <= gradient_index(ix, 2 * ix, -ix, 4) <= 255


class TestGradientNoise:
    """Tests for single-corner gradient noise."""

    def test_zero_at_corner(self) -> None:
        """A sample sitting on the corner has zero offset, so zero noise."""
        assert gradient_noise_3d(4.0, -2.0, 7.0, 4, -2, 7, 11) == 0.0

    def test_linear_in_offset(self) -> None:
        """Doubling the offset doubles the value."""
        a = gradient_noise_3d(0.1, 0.2, 0.3, 0, 0, 0, 1)
        b = gradient_noise_3d(0.2, 0.4, 0.6, 0, 0, 0, 1)
        assert b == pytest.approx(2.0 * a)

    def test_bounded_by_offset_length(self) -> None:
        value = gradient_noise_3d(0.5, 0.5, 0.5, 0, 0, 0, 3)
        assert abs(value) <= GRADIENT_SCALE * np.sqrt(0.75) + 1e-12


class TestLatticeFloor:
    """Tests for lattice cell lookup."""

    def test_positive(self) -> None:
        assert lattice_floor(1.5) == 1
        assert lattice_floor(3.0) == 3

    def test_zero_and_negative(self) -> None:
        """Zero and negative values step down one cell."""
        assert lattice_floor(0.0) == -1
        assert lattice_floor(-0.5) == -1
        assert lattice_floor(-1.0) == -2


class TestCoherentNoise:
    """Tests for trilinear coherent noise."""

    def test_deterministic(self) -> None:
        for quality in NoiseQuality:
            a = gradient_coherent_noise_3d(1.25, -3.5, 8.75, 42, quality)
            b = gradient_coherent_noise_3d(1.25, -3.5, 8.75, 42, quality)
            assert a == b

    def test_seed_changes_value(self) -> None:
        a = gradient_coherent_noise_3d(1.25, -3.5, 8.75, 42, NoiseQuality.STANDARD)
        b = gradient_coherent_noise_3d(1.25, -3.5, 8.75, 43, NoiseQuality.STANDARD)
        assert a != b

    @pytest.mark.parametrize("quality", list(NoiseQuality))
    def test_gradient_zero_at_lattice_points(self, quality: NoiseQuality) -> None:
        """Gradient coherent noise is exactly zero on positive lattice points."""
        for point in [(3.0, 5.0, 7.0), (1.0, 1.0, 1.0), (12.0, 4.0, 9.0)]:
            value = gradient_coherent_noise_3d(*point, 5, quality)
            corner = gradient_noise_3d(*point, *(int(c) for c in point), 5)
            assert value == corner == 0.0

    @pytest.mark.parametrize("quality", list(NoiseQuality))
    def test_value_matches_lattice_at_lattice_points(self, quality: NoiseQuality) -> None:
        """Value coherent noise equals the lattice value on positive lattice points."""
        for x, y, z in [(3, 5, 7), (1, 1, 1), (12, 4, 9)]:
            value = value_coherent_noise_3d(float(x), float(y), float(z), 5, quality)
            assert value == value_noise_3d(x, y, z, 5)

    @pytest.mark.parametrize("quality", list(NoiseQuality))
    def test_gradient_noise_range(self, quality: NoiseQuality) -> None:
        """Gradient coherent noise stays within [-1, 1] and uses a good part of it."""
        rng = np.random.default_rng(11)
        values = [
            gradient_coherent_noise_3d(x, y, z, 3, quality)
            for x, y, z in rng.uniform(-100.0, 100.0, size=(2000, 3))
        ]
        assert max(abs(v) for v in values) <= 1.0
        assert max(abs(v) for v in values) > 0.25

    def test_gradient_scale_matches_cell_centre_bound(self) -> None:
        """Unit ramps blended at the cell centre reach at most 1 after scaling."""
        assert GRADIENT_SCALE * np.sqrt(0.75) == pytest.approx(1.0)

    def test_value_noise_range(self) -> None:
        rng = np.random.default_rng(5)
        for x, y, z in rng.uniform(-20.0, 20.0, size=(200, 3)):
            value = value_coherent_noise_3d(x, y, z, 0, NoiseQuality.BEST)
            assert -1.0 - 1e-12 <= value <= 1.0 + 1e-12

    def test_continuous_across_cells(self) -> None:
        """Values on both sides of a cell face agree."""
        for quality in NoiseQuality:
            left = gradient_coherent_noise_3d(2.0 - 1e-9, 0.3, 0.7, 1, quality)
            right = gradient_coherent_noise_3d(2.0 + 1e-9, 0.3, 0.7, 1, quality)
            assert left == pytest.approx(right, abs=1e-7)


class TestQualityContinuity:
    """Derivative behaviour across a lattice face for each quality."""

    @staticmethod
    def _derivative_jumps(quality: NoiseQuality) -> list[float]:
        h = 1e-6
        rng = np.random.default_rng(99)
        jumps = []
        for y, z in rng.uniform(0.05, 0.95, size=(16, 2)) + 4.0:
            at = gradient_coherent_noise_3d(3.0, y, z, 0, quality)
            above = gradient_coherent_noise_3d(3.0 + h, y, z, 0, quality)
            below = gradient_coherent_noise_3d(3.0 - h, y, z, 0, quality)
            jumps.append(abs((above - at) / h - (at - below) / h))
        return jumps

    def test_best_is_smooth(self) -> None:
        """Quintic interpolation has no derivative jump at the face."""
        assert max(self._derivative_jumps(NoiseQuality.BEST)) < 1e-3

    def test_fast_has_creases(self) -> None:
        """Linear interpolation leaves a visible derivative jump."""
        assert max(self._derivative_jumps(NoiseQuality.FAST)) > 1e-2


class TestMakeInt32Range:
    """Tests for coordinate wrapping."""

    def test_in_range_unchanged(self) -> None:
        for value in (0.0, 0.5, -1234.5, 1073741823.0):
            assert make_int32_range(value) == value

    def test_wraps_large_values(self) -> None:
        assert make_int32_range(2.0**31) == -1073741824.0
        assert abs(make_int32_range(1e15)) < 1073741824.0
        assert abs(make_int32_range(-1e15)) < 1073741824.0
