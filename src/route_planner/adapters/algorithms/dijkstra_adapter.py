"""
Dijkstra Algorithm Adapter - Bridge between architecture and algorithm.

Wraps the dijkstra module and converts its Label output to PathResult
schema objects.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.dijkstra.alg import shortest_label
from src.dijkstra.reconstruction import reconstruct_path

from src.route_planner.adapters.algorithms.immutability import is_frozen
from src.route_planner.ports.path_finder import PathFinder
from src.route_planner.schemas.path import PathResult

if TYPE_CHECKING:
    from src.route_planner.adapters.repositories.route_graph_repo import RouteGraph

logger = logging.getLogger(__name__)


class DijkstraPathFinder(PathFinder):
    """
    Adapter for the dijkstra module.

    Edge weights are normalized scores blended with non-negative
    coefficients, so every weight in a built graph is >= 0 and Dijkstra
    applies directly.

    Attributes:
        _validate: If True, re-check weights and symmetry on every query.
    """

    def __init__(self, validate_graph: bool = False) -> None:
        """
        Initialize the Dijkstra path finder.

        Args:
            validate_graph: If True, validate the adjacency before each
                search. Graphs from RouteGraphBuilder never need it.
        """
        self._validate = validate_graph

    @property
    def name(self) -> str:
        """Algorithm identifier."""
        return "Dijkstra"

    def find_path(
        self,
        graph: RouteGraph,
        origin: int,
        destination: int,
    ) -> PathResult:
        """
        Find the minimum-weight path between two cities.

        Unknown endpoints and disconnected cities both yield the
        unreachable sentinel; neither is treated as an error.

        Args:
            graph: Built RouteGraph.
            origin: Origin city identifier.
            destination: Destination city identifier.

        Returns:
            PathResult with nodes origin..destination and total weight.

        Raises:
            NegativeWeightError: If validation is enabled and a weight is negative.
        """
        if not is_frozen(graph.adjacency):
            logger.warning("Searching a graph whose adjacency is not read-only")

        for city_id, role in ((origin, "origin"), (destination, "destination")):
            if not graph.has_node(city_id):
                logger.warning("Unknown %s city %d; no route possible", role, city_id)
                return PathResult.unreachable()

        if origin == destination:
            return PathResult(nodes=(origin,), total_weight=0.0)

        label = shortest_label(
            graph.adjacency,
            origin,
            destination,
            validate=self._validate,
        )

        if label is None:
            logger.info("City %d is not reachable from %d", destination, origin)
            return PathResult.unreachable()

        nodes, weights = reconstruct_path(label)

        logger.debug(
            "Dijkstra path %d -> %d: %s (edges %s)",
            origin,
            destination,
            nodes,
            weights,
        )

        return PathResult.from_nodes(nodes, label.cost)
