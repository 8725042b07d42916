"""Module graph loading from TOML files.

A graph file names a ``root`` node and defines every node in a
``[nodes.<name>]`` table::

    root = "terrain"

    [nodes.base]
    type = "perlin"
    octave_count = 4

    [nodes.terrain]
    type = "scale_bias"
    sources = ["base"]
    scale = 0.5

``sources`` lists the names of the node's children in slot order; every
other key is passed to the module constructor. A node referenced by several
parents is built once and shared.
"""

import tomllib
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import GraphConfigError
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

logger = structlog.get_logger()

NODE_TYPES: dict[str, type[Module]] = {
    # Generators
    "perlin": Perlin,
    "billow": Billow,
    "ridged_multi": RidgedMulti,
    "simplex": Simplex,
    "ridged_multi_simplex": RidgedMultiSimplex,
    "voronoi": Voronoi,
    "spheres": Spheres,
    "cylinders": Cylinders,
    "checkerboard": Checkerboard,
    "const": Const,
    # Modifiers
    "scale_bias": ScaleBias,
    "clamp": Clamp,
    "exponent": Exponent,
    "invert": Invert,
    "range": Range,
    "curve": Curve,
    "terrace": Terrace,
    "abs": Abs,
    "cache": Cache,
    "rotate_point": RotatePoint,
    "scale_point": ScalePoint,
    "translate_point": TranslatePoint,
    "turbulence": Turbulence,
    # Combiners
    "add": Add,
    "multiply": Multiply,
    "max": Max,
    "min": Min,
    "power": Power,
    # Selectors
    "blend": Blend,
    "select": Select,
    "displace": Displace,
}


class NodeConfig(BaseModel):
    """One node of a module graph."""

    model_config = ConfigDict(extra="allow")

    type: str
    sources: list[str] = Field(default_factory=list, description="Child node names in slot order")

    @property
    def params(self) -> dict[str, Any]:
        """Constructor parameters other than the children."""
        return dict(self.model_extra or {})


class GraphConfig(BaseModel):
    """Complete module graph description."""

    root: str
    nodes: dict[str, NodeConfig] = Field(default_factory=dict)


def load_graph_config(config_path: Path) -> GraphConfig:
    """Load a graph description from a TOML file.

    Args:
        config_path: Path to the TOML file.

    Returns:
        Parsed GraphConfig.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If the TOML is malformed.
        pydantic.ValidationError: If the file does not describe a graph.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return GraphConfig.model_validate(data)


def load_graph(config_path: Path) -> Module:
    """Load a TOML graph file and build its root module.

    Args:
        config_path: Path to the TOML file.

    Returns:
        The root module.

    Raises:
        GraphConfigError: If the graph is malformed.
    """
    config = load_graph_config(config_path)
    module = build_graph(config)
    logger.info(
        "graph_loaded",
        path=str(config_path),
        root=config.root,
        node_count=len(config.nodes),
    )
    return module


def build_graph(config: GraphConfig) -> Module:
    """Build the module tree described by a GraphConfig.

    Nodes are built children first with an explicit stack, so arbitrarily
    deep graph files do not exhaust the interpreter stack.

    Args:
        config: Graph description.

    Returns:
        The root module.

    Raises:
        GraphConfigError: If the root is missing, a node has an unknown
            type, a reference is dangling, references form a cycle, a node
            has the wrong number of sources or invalid parameters.
    """
    if config.root not in config.nodes:
        raise GraphConfigError(f"Root node '{config.root}' is not defined")

    built: dict[str, Module] = {}
    # Nodes whose children are still being built, root first
    path: list[str] = []
    # (name, children_done) entries; children_done marks the second visit
    pending: list[tuple[str, bool]] = [(config.root, False)]

    while pending:
        name, children_done = pending.pop()
        if children_done:
            path.pop()
            built[name] = _build_node(name, config.nodes[name], built)
            continue
        if name in built:
            continue
        if name in path:
            cycle = " -> ".join(path[path.index(name):] + [name])
            raise GraphConfigError(f"Reference cycle: {cycle}")

        node = config.nodes[name]
        module_cls = NODE_TYPES.get(node.type)
        if module_cls is None:
            raise GraphConfigError(f"Node '{name}' has unknown type '{node.type}'")

        slots = module_cls.source_fields
        if len(node.sources) != len(slots):
            raise GraphConfigError(
                f"Node '{name}' of type '{node.type}' needs {len(slots)} "
                f"sources, got {len(node.sources)}"
            )
        for source_name in node.sources:
            if source_name not in config.nodes:
                raise GraphConfigError(
                    f"Node '{name}' references undefined node '{source_name}'"
                )

        path.append(name)
        pending.append((name, True))
        pending.extend((source_name, False) for source_name in reversed(node.sources))

    return built[config.root]


def _build_node(name: str, node: NodeConfig, built: dict[str, Module]) -> Module:
    module_cls = NODE_TYPES[node.type]
    children = {
        slot: built[source_name]
        for slot, source_name in zip(module_cls.source_fields, node.sources)
    }
    try:
        module = module_cls(**node.params, **children)
    except (ValidationError, TypeError) as e:
        raise GraphConfigError(f"Node '{name}' has invalid parameters: {e}") from e

    logger.debug("graph_node_built", node=name, type=node.type)
    return module
