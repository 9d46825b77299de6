"""
Application layer for the Route Planner.

This layer provides the public API for the route planner. It acts as a
facade, handling dependency initialization and providing a simple
interface for consumers.
"""

from src.route_planner.application.plan_cheapest_route import PlanCheapestRoute

__all__ = ["PlanCheapestRoute"]
