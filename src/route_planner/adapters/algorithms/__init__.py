"""
Algorithm adapters for route planning.
"""

from src.route_planner.adapters.algorithms.dijkstra_adapter import (
    DijkstraPathFinder,
)
from src.route_planner.adapters.algorithms.immutability import (
    freeze_adjacency,
    is_frozen,
)

__all__ = [
    "DijkstraPathFinder",
    "freeze_adjacency",
    "is_frozen",
]
