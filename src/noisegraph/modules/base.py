"""Module abstraction for the noise composition graph.

A module is a node computing a scalar from a 3D coordinate. Nodes with
children do not call their children directly. Instead, ``evaluate`` is a
generator that yields ``(child, x, y, z)`` requests and receives each
child's value back, then returns the node's own value. ``get`` drives that
generator recursively; ``noisegraph.evaluation.evaluate_iterative`` drives
the same generators with an explicit stack.

Children are required constructor fields, so a module can never exist with
an unbound slot. Models are frozen; the only mutable node is ``Cache``.

Trees are not thread-safe. Evaluating one tree from several threads while a
Cache is shared, or while a Cache source is reassigned, is unsupported; use
one tree per thread.
"""

from typing import ClassVar, Generator

from pydantic import BaseModel

SourceRequest = tuple["Module", float, float, float]
Evaluation = Generator[SourceRequest, float, float]


class Module(BaseModel, frozen=True, extra="forbid"):
    """Base class for every node in a noise graph."""

    # Names of the child fields, in source-slot order
    source_fields: ClassVar[tuple[str, ...]] = ()

    @property
    def sources(self) -> tuple["Module", ...]:
        """Child modules in slot order."""
        return tuple(getattr(self, name) for name in self.source_fields)

    @property
    def source_count(self) -> int:
        """Number of child slots."""
        return len(self.source_fields)

    def get(self, x: float, y: float, z: float) -> float:
        """Evaluate the module at a point.

        Args:
            x: Sample x coordinate.
            y: Sample y coordinate.
            z: Sample z coordinate.

        Returns:
            Module output at (x, y, z).
        """
        steps = self.evaluate(x, y, z)
        try:
            request = next(steps)
            while True:
                source, sx, sy, sz = request
                request = steps.send(source.get(sx, sy, sz))
        except StopIteration as done:
            return done.value

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        """Yield child requests and return this module's value."""
        raise NotImplementedError(f"{type(self).__name__} does not implement evaluate")


class Source(Module, frozen=True):
    """Leaf module with no children.

    Subclasses override ``get`` directly.
    """

    def get(self, x: float, y: float, z: float) -> float:
        raise NotImplementedError(f"{type(self).__name__} does not implement get")


class Modifier(Module, frozen=True):
    """Module transforming the output or input coordinate of one source."""

    source_fields: ClassVar[tuple[str, ...]] = ("source",)

    source: Module


class Combiner(Module, frozen=True):
    """Module combining the outputs of two sources."""

    source_fields: ClassVar[tuple[str, ...]] = ("source_a", "source_b")

    source_a: Module
    source_b: Module

    def combine(self, a: float, b: float) -> float:
        """Combine the two source values."""
        raise NotImplementedError(f"{type(self).__name__} does not implement combine")

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        a = yield self.source_a, x, y, z
        b = yield self.source_b, x, y, z
        return self.combine(a, b)


class Selector(Module, frozen=True):
    """Module choosing between two sources based on a control module."""

    source_fields: ClassVar[tuple[str, ...]] = ("source_a", "source_b", "control")

    source_a: Module
    source_b: Module
    control: Module
