"""
Graph Repository port interface.

Defines the caching protocol for built route graphs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from src.route_planner.exceptions import RoutePlannerError

if TYPE_CHECKING:
    from src.route_planner.adapters.repositories.route_graph_repo import RouteGraph


class GraphNotInitializedError(RoutePlannerError):
    """Raised when a graph is accessed before it has been built."""

    pass


@runtime_checkable
class RouteGraphCache(Protocol):
    """
    Protocol for route graph caching.

    A cached graph is immutable, so readers may share it without
    copying. Implementations must be safe for concurrent access.
    """

    def get(self) -> Optional[RouteGraph]:
        """Get cached graph or None if miss."""
        ...

    def set(self, graph: RouteGraph) -> None:
        """Store graph in cache."""
        ...

    def invalidate(self) -> None:
        """Clear the cached graph, forcing a rebuild on next access."""
        ...
