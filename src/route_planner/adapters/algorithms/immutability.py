"""
Immutability utilities for built route graphs.

A graph is read-only once its edges are inserted. These helpers enforce
that at runtime so concurrent queries can share one graph without locks.
"""

from types import MappingProxyType
from typing import Dict, Mapping


def freeze_adjacency(
    adjacency: Dict[int, Dict[int, float]],
) -> Mapping[int, Mapping[int, float]]:
    """
    Wrap a nested adjacency dict in read-only mapping proxies.

    The inner dicts are copied so later changes to the builder's working
    dicts cannot leak into the frozen view.

    Args:
        adjacency: Mapping node -> {neighbor: weight}.

    Returns:
        Read-only view; item assignment raises TypeError.

    Example:
        >>> frozen = freeze_adjacency({0: {1: 0.5}, 1: {0: 0.5}})
        >>> frozen[0][1] = 0.1  # Raises TypeError
    """
    return MappingProxyType(
        {node: MappingProxyType(dict(neighbors)) for node, neighbors in adjacency.items()}
    )


def is_frozen(adjacency: Mapping[int, Mapping[int, float]]) -> bool:
    """
    Check if an adjacency mapping is read-only at both levels.

    Args:
        adjacency: Mapping to check.

    Returns:
        True if the outer mapping and every neighbor mapping are proxies.
    """
    if not isinstance(adjacency, MappingProxyType):
        return False
    return all(isinstance(n, MappingProxyType) for n in adjacency.values())
