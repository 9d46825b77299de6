"""
Custom exceptions for the dijkstra module.

Provides a hierarchy of exceptions for clear error handling
and debugging of shortest-path operations.
"""


class DijkstraError(Exception):
    """Base exception for all dijkstra module errors."""

    pass


class ValidationError(DijkstraError):
    """Base exception for input validation errors."""

    pass


class NegativeWeightError(ValidationError):
    """Raised when the graph contains an edge with negative weight."""

    def __init__(self, u: int, v: int, weight: float) -> None:
        self.u = u
        self.v = v
        self.weight = weight
        message = (
            f"Edge ({u}, {v}) has negative weight {weight}; "
            "Dijkstra requires non-negative weights"
        )
        super().__init__(message)


class AsymmetricEdgeError(ValidationError):
    """Raised when an undirected adjacency mapping is not symmetric."""

    def __init__(self, u: int, v: int) -> None:
        self.u = u
        self.v = v
        message = f"Edge ({u}, {v}) has no matching reverse entry ({v}, {u})"
        super().__init__(message)
