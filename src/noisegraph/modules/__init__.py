"""Noise module classes: generators, modifiers, combiners and selectors."""

from .base import Combiner, Evaluation, Modifier, Module, Selector, Source, SourceRequest
from .cache import Cache
from .combiner import Add, Max, Min, Multiply, Power
from .modifier import Abs, Clamp, Curve, Exponent, Invert, Range, ScaleBias, Terrace
from .selector import Blend, Displace, Select
from .source import (
    MAX_OCTAVE,
    Billow,
    Checkerboard,
    Const,
    Cylinders,
    FractalSource,
    Perlin,
    RidgedFractalSource,
    RidgedMulti,
    RidgedMultiSimplex,
    Simplex,
    Spheres,
    Voronoi,
)
from .transformer import RotatePoint, ScalePoint, TranslatePoint, Turbulence

__all__ = [
    # Base
    "Module",
    "Source",
    "Modifier",
    "Combiner",
    "Selector",
    "Evaluation",
    "SourceRequest",
    # Generators
    "MAX_OCTAVE",
    "FractalSource",
    "RidgedFractalSource",
    "Perlin",
    "Billow",
    "RidgedMulti",
    "Simplex",
    "RidgedMultiSimplex",
    "Voronoi",
    "Spheres",
    "Cylinders",
    "Checkerboard",
    "Const",
    # Modifiers
    "ScaleBias",
    "Clamp",
    "Exponent",
    "Invert",
    "Range",
    "Curve",
    "Terrace",
    "Abs",
    "Cache",
    # Transformers
    "RotatePoint",
    "ScalePoint",
    "TranslatePoint",
    "Turbulence",
    # Combiners
    "Add",
    "Multiply",
    "Max",
    "Min",
    "Power",
    # Selectors
    "Blend",
    "Select",
    "Displace",
]
