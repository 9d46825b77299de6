"""
Route record schemas using Pandera.

Defines the contract for route data handed to the planning core.
Schema validation happens at layer boundaries only, not per-row.
"""

import math
from dataclasses import asdict, dataclass
from typing import Iterable, List, Set

import numpy as np
import pandas as pd
import pandera as pa
from pandera.typing import DataFrame, Series

# Column order mirrors the CSV layout: id, city, to, ticket_average, distance, hours
RECORD_COLUMNS: List[str] = [
    "origin_id",
    "origin_name",
    "destination_id",
    "ticket_price",
    "distance_km",
    "duration_hours",
]

REQUIRED_COLUMNS: Set[str] = set(RECORD_COLUMNS)


class RouteRecordSchema(pa.DataFrameModel):
    """
    Core contract for route records.

    One row per city-to-city connection. Extra columns are allowed and
    preserved (strict=False) so providers can attach metadata without
    breaking the graph builder.
    """

    origin_id: Series[int] = pa.Field(
        nullable=False,
        description="Origin city identifier",
    )
    origin_name: Series[str] = pa.Field(
        nullable=False,
        description="Display name of the origin city",
    )
    destination_id: Series[int] = pa.Field(
        nullable=False,
        description="Destination city identifier",
    )
    ticket_price: Series[float] = pa.Field(
        ge=0,
        description="Average ticket price for the connection",
    )
    distance_km: Series[float] = pa.Field(
        ge=0,
        description="Distance between the two cities in kilometres",
    )
    duration_hours: Series[float] = pa.Field(
        nullable=True,
        description="Travel time in hours (informational, not weighted)",
    )

    class Config:
        strict = False
        coerce = True
        name = "RouteRecordSchema"
        description = "Route records consumed by the graph builder"

    @pa.check("ticket_price", "distance_km", name="finite")
    def finite_features(cls, series: Series[float]) -> Series[bool]:
        """Weighted features must be finite numbers."""
        return np.isfinite(series)


RouteRecordDataFrame = DataFrame[RouteRecordSchema]


@dataclass(frozen=True)
class RouteRecord:
    """
    Immutable representation of one input row.

    Attributes:
        origin_id: Origin city identifier.
        origin_name: Display name of the origin city.
        destination_id: Destination city identifier.
        ticket_price: Non-negative ticket price.
        distance_km: Non-negative distance.
        duration_hours: Travel time, informational only.
    """

    origin_id: int
    origin_name: str
    destination_id: int
    ticket_price: float
    distance_km: float
    duration_hours: float = 0.0

    def __post_init__(self) -> None:
        for field_name in ("ticket_price", "distance_km"):
            value = getattr(self, field_name)
            if not math.isfinite(value):
                raise ValueError(f"{field_name} must be finite, got {value}")
        if self.ticket_price < 0:
            raise ValueError(f"ticket_price must be >= 0, got {self.ticket_price}")
        if self.distance_km < 0:
            raise ValueError(f"distance_km must be >= 0, got {self.distance_km}")

    @property
    def is_self_loop(self) -> bool:
        """True when the record connects a city to itself."""
        return self.origin_id == self.destination_id


def records_to_frame(records: Iterable[RouteRecord]) -> pd.DataFrame:
    """
    Convert a record sequence into a validated DataFrame.

    Args:
        records: RouteRecord values in input order.

    Returns:
        DataFrame validated against RouteRecordSchema, index reset.
    """
    df = pd.DataFrame([asdict(r) for r in records], columns=RECORD_COLUMNS)
    return RouteRecordSchema.validate(df.reset_index(drop=True))

