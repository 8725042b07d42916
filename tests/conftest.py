"""Shared test fixtures for noisegraph tests."""

import tempfile
from pathlib import Path

import numpy as np
import pytest
from numpy.typing import NDArray
from pydantic import PrivateAttr

from noisegraph.modules import Source


class CountingSource(Source, frozen=True):
    """Constant source that counts how often it is sampled."""

    value: float = 0.0

    _calls: int = PrivateAttr(default=0)

    @property
    def calls(self) -> int:
        return self._calls

    def get(self, x: float, y: float, z: float) -> float:
        self._calls += 1
        return self.value


class LinearSource(Source, frozen=True):
    """Source encoding the sampled coordinate as x + 10y + 100z."""

    def get(self, x: float, y: float, z: float) -> float:
        return x + 10.0 * y + 100.0 * z


@pytest.fixture
def make_counter() -> type[CountingSource]:
    """Factory for call-counting constant sources."""
    return CountingSource


@pytest.fixture
def linear_source() -> LinearSource:
    """Source whose value reveals the coordinate it was sampled at."""
    return LinearSource()


@pytest.fixture
def random_points() -> NDArray[np.float64]:
    """1000 reproducible points spread over [-100, 100]^3."""
    rng = np.random.default_rng(20240611)
    return rng.uniform(-100.0, 100.0, size=(1000, 3))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_graph_toml() -> str:
    """Two-node graph: a Perlin source scaled by half."""
    return """
root = "terrain"

[nodes.base]
type = "perlin"
octave_count = 4
seed = 7

[nodes.terrain]
type = "scale_bias"
sources = ["base"]
scale = 0.5
bias = 0.25
"""
