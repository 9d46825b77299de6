"""
Port interfaces for the Route Planner.

Ports define the abstract interfaces (ABCs and Protocols) that the domain
layer uses to communicate with data sources and algorithms. This follows
the Ports and Adapters (Hexagonal) architecture pattern.
"""

from src.route_planner.ports.graph_repository import (
    GraphNotInitializedError,
    RouteGraphCache,
)
from src.route_planner.ports.path_finder import PathFinder
from src.route_planner.ports.record_provider import RouteRecordProvider

__all__ = [
    "GraphNotInitializedError",
    "PathFinder",
    "RouteGraphCache",
    "RouteRecordProvider",
]
