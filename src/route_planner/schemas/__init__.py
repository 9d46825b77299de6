"""
Schema definitions for the Route Planner.

Pandera-validated DataFrames and frozen dataclasses as the data contracts.
"""

from .graph import (
    CityNode,
    DuplicateEdgePolicy,
    WeightedEdge,
    WeightedEdgeSchema,
)
from .path import PathResult
from .preferences import DEFAULT_PREFERENCES, WeightPreferences
from .route_record import (
    RECORD_COLUMNS,
    RouteRecord,
    RouteRecordDataFrame,
    RouteRecordSchema,
    records_to_frame,
)

__all__ = [
    # Records
    "RECORD_COLUMNS",
    "RouteRecord",
    "RouteRecordDataFrame",
    "RouteRecordSchema",
    "records_to_frame",
    # Graph
    "CityNode",
    "DuplicateEdgePolicy",
    "WeightedEdge",
    "WeightedEdgeSchema",
    # Results
    "PathResult",
    # Preferences
    "DEFAULT_PREFERENCES",
    "WeightPreferences",
]
