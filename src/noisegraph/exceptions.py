"""Custom exceptions for noise graph construction and evaluation."""


class NoiseGraphError(Exception):
    """Base exception for noise graph errors."""

    pass


class GraphConfigError(NoiseGraphError):
    """Raised when a graph configuration cannot be turned into modules."""

    pass


class EvaluationDepthError(NoiseGraphError):
    """Raised when iterative evaluation descends past the allowed depth."""

    def __init__(self, max_depth: int):
        super().__init__(f"Module tree is deeper than max_depth={max_depth}")
        self.max_depth = max_depth
