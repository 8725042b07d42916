"""Composable coherent-noise module graphs."""

from .config import GraphConfig, NodeConfig, build_graph, load_graph, load_graph_config
from .evaluation import evaluate_iterative
from .exceptions import EvaluationDepthError, GraphConfigError, NoiseGraphError
from .models import Cylinder, Line, Plane, Sphere
from .modules import (
    Abs,
    Add,
    Billow,
    Blend,
    Cache,
    Checkerboard,
    Clamp,
    Const,
    Curve,
    Cylinders,
    Displace,
    Exponent,
    Invert,
    Max,
    Min,
    Module,
    Multiply,
    Perlin,
    Power,
    Range,
    RidgedMulti,
    RidgedMultiSimplex,
    RotatePoint,
    ScaleBias,
    ScalePoint,
    Select,
    Simplex,
    Spheres,
    Terrace,
    TranslatePoint,
    Turbulence,
    Voronoi,
)
from .sampling import sample, sample_plane
from .types import ControlPoint, LatticeOrientation, NoiseQuality, SimplexQuality

__all__ = [
    # Types
    "NoiseQuality",
    "LatticeOrientation",
    "SimplexQuality",
    "ControlPoint",
    # Base
    "Module",
    # Generators
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
    # Models
    "Line",
    "Plane",
    "Cylinder",
    "Sphere",
    # Evaluation
    "evaluate_iterative",
    "sample",
    "sample_plane",
    # Config
    "GraphConfig",
    "NodeConfig",
    "load_graph",
    "load_graph_config",
    "build_graph",
    # Exceptions
    "NoiseGraphError",
    "GraphConfigError",
    "EvaluationDepthError",
]
