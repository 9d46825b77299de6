"""
Data provider adapters for route records.
"""

from src.route_planner.adapters.data_providers.csv_provider import CsvRouteProvider
from src.route_planner.adapters.data_providers.memory_provider import (
    InMemoryRouteProvider,
)

__all__ = [
    "CsvRouteProvider",
    "InMemoryRouteProvider",
]
