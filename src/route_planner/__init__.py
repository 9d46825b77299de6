"""
Route Planner - cheapest route search over city connections.

Edge cost blends min-max normalized ticket price and distance; routes
are found with Dijkstra from a fixed origin city.
"""

__version__ = "0.1.0"
