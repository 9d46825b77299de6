"""
PlanCheapestRoute Use Case - Public API for route planning.

This module provides the main entry point for the route planner.
It acts as a Facade/Factory, handling dependency initialization and
providing a clean interface for consumers.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import FrozenSet, Optional, Union

from src.route_planner.adapters.algorithms.dijkstra_adapter import DijkstraPathFinder
from src.route_planner.adapters.data_providers.csv_provider import CsvRouteProvider
from src.route_planner.adapters.repositories.route_graph_repo import (
    InMemoryRouteGraphCache,
    RouteGraphRepository,
)
from src.route_planner.config import PlannerConfig
from src.route_planner.ports.path_finder import PathFinder
from src.route_planner.ports.record_provider import RouteRecordProvider
from src.route_planner.schemas.path import PathResult
from src.route_planner.services.route_planner_service import RoutePlannerService
from src.route_planner.services.weight_calculator_service import WeightCalculatorService

logger = logging.getLogger(__name__)


class PlanCheapestRoute:
    """
    Public API for finding the cheapest route from the fixed origin.

    Example usage:
        >>> with PlanCheapestRoute(csv_path="example.csv") as planner:
        ...     print(planner.search_and_render(destination=2))
        Braga -> Porto (Weight: 0.61)

    Attributes:
        _service: Underlying RoutePlannerService.
        _graph_repo: Route graph repository.
    """

    def __init__(
        self,
        csv_path: Optional[Union[str, Path]] = None,
        data_provider: Optional[RouteRecordProvider] = None,
        path_finder: Optional[PathFinder] = None,
        config: Optional[PlannerConfig] = None,
    ) -> None:
        """
        Initialize the planner with optional custom dependencies.

        Args:
            csv_path: Route CSV file. Defaults to config.records_path.
            data_provider: Custom record provider. If None, uses CsvRouteProvider.
            path_finder: Custom algorithm. If None, uses DijkstraPathFinder.
            config: Planner configuration. Defaults to PlannerConfig().
        """
        self._config = config or PlannerConfig()

        if data_provider is not None:
            self._data_provider = data_provider
        else:
            csv_path = csv_path or self._config.records_path
            self._data_provider = CsvRouteProvider(csv_path)

        self._graph_repo = RouteGraphRepository(
            data_provider=self._data_provider,
            cache=InMemoryRouteGraphCache(),
            weight_calculator=WeightCalculatorService(self._config.preferences),
            duplicate_edge_policy=self._config.duplicate_edge_policy,
        )

        self._path_finder = path_finder or DijkstraPathFinder()

        self._service = RoutePlannerService(
            graph_repo=self._graph_repo,
            path_finder=self._path_finder,
            origin_id=self._config.origin_id,
        )

        logger.info(
            "PlanCheapestRoute initialized with %s algorithm and %s provider",
            self._path_finder.name,
            self._data_provider.name,
        )

    def search(self, destination: Optional[int] = None) -> PathResult:
        """
        Find the cheapest route from the origin to destination.

        Args:
            destination: Target city id. Defaults to config.destination_id.

        Returns:
            PathResult; PathResult.unreachable() if no route exists.
        """
        if destination is None:
            destination = self._config.destination_id
        return self._service.plan(destination)

    def search_and_render(self, destination: Optional[int] = None) -> str:
        """
        Find the cheapest route and format it for display.

        Returns:
            "Name1 -> ... -> NameN (Weight: X.XX)" or a "No route found" message.
        """
        if destination is None:
            destination = self._config.destination_id
        return self._service.plan_and_render(destination)

    def describe_graph(self) -> str:
        """List every connection of the graph, one per line."""
        return self._service.describe_graph()

    def get_available_cities(self) -> FrozenSet[int]:
        """All city identifiers in the graph."""
        return self._service.available_cities()

    def has_route(self, a: int, b: int) -> bool:
        """Check if a direct connection exists between two cities."""
        return self._graph_repo.get_graph().has_route(a, b)

    @property
    def origin(self) -> int:
        """City every route starts from."""
        return self._service.origin_id

    @property
    def is_ready(self) -> bool:
        """Check if the graph has been built."""
        return self._service.is_ready

    @property
    def algorithm_name(self) -> str:
        """Get the name of the routing algorithm being used."""
        return self._service.algorithm_name

    def refresh_data(self) -> None:
        """Rebuild the graph from the data provider."""
        self._graph_repo.refresh()

    def shutdown(self) -> None:
        """Drop the cached graph."""
        self._graph_repo.invalidate()
        logger.info("PlanCheapestRoute shutdown complete")

    def __enter__(self) -> "PlanCheapestRoute":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit with cleanup."""
        self.shutdown()
