"""
Route Planner Service - Domain orchestrator for cheapest-route queries.

Coordinates the interaction between:
- RouteGraphRepository (built, read-only route graph)
- PathFinder (algorithm adapter)
- Path renderer (display strings)
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, FrozenSet

from src.route_planner.schemas.path import PathResult
from src.route_planner.services.path_renderer_service import render_graph, render_path

if TYPE_CHECKING:
    from src.route_planner.adapters.repositories.route_graph_repo import (
        RouteGraphRepository,
    )
    from src.route_planner.ports.path_finder import PathFinder

logger = logging.getLogger(__name__)


class RoutePlannerService:
    """
    Domain service for finding the cheapest route from a fixed origin.

    Orchestrates the query:
    1. Retrieves the cached route graph (built on first use)
    2. Delegates the search to the path finder
    3. Logs performance metrics

    The graph is never mutated after it is built, so the service is
    safe to call from several threads.

    Attributes:
        _graph_repo: Repository providing the route graph.
        _path_finder: Algorithm adapter for shortest paths.
        _origin_id: Fixed origin of every query.
    """

    def __init__(
        self,
        graph_repo: RouteGraphRepository,
        path_finder: PathFinder,
        origin_id: int = 0,
    ) -> None:
        """
        Initialize the route planner service.

        Args:
            graph_repo: Repository for route graph access.
            path_finder: Algorithm adapter (e.g., DijkstraPathFinder).
            origin_id: City every route starts from.
        """
        self._graph_repo = graph_repo
        self._path_finder = path_finder
        self._origin_id = origin_id

    @property
    def origin_id(self) -> int:
        """City every route starts from."""
        return self._origin_id

    def plan(self, destination_id: int) -> PathResult:
        """
        Find the cheapest route from the fixed origin to destination_id.

        Args:
            destination_id: Target city identifier.

        Returns:
            PathResult; the unreachable sentinel if no route exists.

        Raises:
            GraphNotInitializedError: If the graph cannot be built.
        """
        start_time = time.perf_counter()

        graph = self._graph_repo.get_graph()
        graph_time = time.perf_counter() - start_time

        algo_start = time.perf_counter()
        result = self._path_finder.find_path(graph, self._origin_id, destination_id)
        algo_time = time.perf_counter() - algo_start

        total_time = time.perf_counter() - start_time

        logger.info(
            "Route search %d -> %d completed: %s in %.3fms (graph: %.3fms, algo: %.3fms)",
            self._origin_id,
            destination_id,
            f"{result.num_hops} hops, weight {result.total_weight:.4f}"
            if result.is_reachable
            else "no route",
            total_time * 1000,
            graph_time * 1000,
            algo_time * 1000,
        )

        return result

    def render(self, result: PathResult, destination_id: int) -> str:
        """Render a result with the graph's city names."""
        graph = self._graph_repo.get_graph()
        return render_path(
            result,
            graph.names,
            origin=self._origin_id,
            destination=destination_id,
        )

    def plan_and_render(self, destination_id: int) -> str:
        """Find the cheapest route and return its display string."""
        result = self.plan(destination_id)
        return self.render(result, destination_id)

    def describe_graph(self) -> str:
        """List the graph's edges, one "From -> To" line each."""
        return render_graph(self._graph_repo.get_graph())

    def available_cities(self) -> FrozenSet[int]:
        """All city identifiers in the graph."""
        return self._graph_repo.get_graph().node_ids

    @property
    def algorithm_name(self) -> str:
        """Get name of the underlying algorithm."""
        return self._path_finder.name

    @property
    def is_ready(self) -> bool:
        """Check if service is ready to handle requests."""
        return self._graph_repo.is_initialized
