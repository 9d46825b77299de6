"""
Input validation for the dijkstra module.

Provides validation functions that check inputs before algorithm execution,
ensuring fail-fast behavior with clear error messages.
"""

import math
from typing import Mapping

from .exceptions import AsymmetricEdgeError, NegativeWeightError

Adjacency = Mapping[int, Mapping[int, float]]


def validate_weights(adjacency: Adjacency) -> None:
    """
    Validate that every edge weight is a non-negative number.

    Args:
        adjacency: Mapping node -> {neighbor: weight}.

    Raises:
        NegativeWeightError: If any weight is negative or NaN.
    """
    for u, neighbors in adjacency.items():
        for v, weight in neighbors.items():
            if math.isnan(weight) or weight < 0:
                raise NegativeWeightError(u, v, weight)


def validate_symmetry(adjacency: Adjacency) -> None:
    """
    Validate that an undirected adjacency mapping lists every edge both ways.

    Args:
        adjacency: Mapping node -> {neighbor: weight}.

    Raises:
        AsymmetricEdgeError: If (u, v) is present without (v, u).
    """
    for u, neighbors in adjacency.items():
        for v in neighbors:
            if u not in adjacency.get(v, {}):
                raise AsymmetricEdgeError(u, v)


def validate_dijkstra_inputs(adjacency: Adjacency, undirected: bool = True) -> None:
    """
    Validate all inputs for the dijkstra algorithm.

    Args:
        adjacency: Mapping node -> {neighbor: weight}.
        undirected: If True, also check that the mapping is symmetric.

    Raises:
        NegativeWeightError: If any weight is negative or NaN.
        AsymmetricEdgeError: If undirected and an edge lacks its reverse.
    """
    validate_weights(adjacency)

    if undirected:
        validate_symmetry(adjacency)
