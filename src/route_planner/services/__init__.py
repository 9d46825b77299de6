"""
Domain services for the Route Planner.

Services hold the weighting policy and rendering logic, and orchestrate
the interaction between ports (repositories, algorithms).
"""

from src.route_planner.services.path_renderer_service import render_graph, render_path
from src.route_planner.services.route_planner_service import RoutePlannerService
from src.route_planner.services.weight_calculator_service import (
    WeightCalculatorService,
    min_max_normalize,
)

__all__ = [
    "RoutePlannerService",
    "WeightCalculatorService",
    "min_max_normalize",
    "render_graph",
    "render_path",
]
