"""
Path Finder port interface.

Defines the abstract contract for shortest-path algorithms.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.route_planner.adapters.repositories.route_graph_repo import RouteGraph
    from src.route_planner.schemas.path import PathResult


class PathFinder(ABC):
    """
    Abstract interface for shortest-path algorithms.

    Implementations:
    - DijkstraPathFinder: binary-heap Dijkstra for non-negative weights
    """

    @abstractmethod
    def find_path(
        self,
        graph: RouteGraph,
        origin: int,
        destination: int,
    ) -> PathResult:
        """
        Find the minimum-weight path between two cities.

        Args:
            graph: Built, read-only RouteGraph.
            origin: Origin city identifier.
            destination: Destination city identifier.

        Returns:
            PathResult, or PathResult.unreachable() when no path exists.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Algorithm identifier.

        Returns:
            Human-readable algorithm name.
        """
        ...
