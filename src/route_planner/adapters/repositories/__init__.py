"""
Route graph construction and caching.
"""

from src.route_planner.adapters.repositories.route_graph_repo import (
    InMemoryRouteGraphCache,
    RouteGraph,
    RouteGraphBuilder,
    RouteGraphRepository,
    collect_city_nodes,
    insert_edges,
)

__all__ = [
    "InMemoryRouteGraphCache",
    "RouteGraph",
    "RouteGraphBuilder",
    "RouteGraphRepository",
    "collect_city_nodes",
    "insert_edges",
]
