"""Stack-based evaluation of module trees.

``Module.get`` recurses once per tree level. ``evaluate_iterative`` drives
the same ``evaluate`` generators with an explicit stack, so arbitrarily deep
trees evaluate without touching the interpreter recursion limit, and an
optional depth cap guards against untrusted graphs.
"""

from .exceptions import EvaluationDepthError
from .modules.base import Evaluation, Module


def evaluate_iterative(
    module: Module,
    x: float,
    y: float,
    z: float,
    max_depth: int | None = None,
) -> float:
    """Evaluate a module tree without native recursion.

    Produces exactly the same value as ``module.get(x, y, z)``.

    Args:
        module: Root of the tree.
        x: Sample x coordinate.
        y: Sample y coordinate.
        z: Sample z coordinate.
        max_depth: Largest allowed number of modules on one root-to-leaf
            path, or None for no limit.

    Returns:
        Module output at (x, y, z).

    Raises:
        ValueError: If max_depth is below 1.
        EvaluationDepthError: If the evaluation descends below max_depth.
    """
    if max_depth is not None and max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")

    if module.source_count == 0:
        return module.get(x, y, z)

    stack: list[Evaluation] = [module.evaluate(x, y, z)]
    # A fresh generator must be started with None
    reply: float | None = None

    while True:
        try:
            request = stack[-1].send(reply)
        except StopIteration as done:
            stack.pop()
            if not stack:
                return done.value
            reply = done.value
            continue

        child, cx, cy, cz = request
        if max_depth is not None and len(stack) + 1 > max_depth:
            raise EvaluationDepthError(max_depth)

        if child.source_count == 0:
            reply = child.get(cx, cy, cz)
        else:
            stack.append(child.evaluate(cx, cy, cz))
            reply = None
