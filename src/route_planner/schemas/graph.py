"""
Graph element schemas.

CityNode and WeightedEdge are the building blocks of the route graph.
WeightedEdgeSchema validates the tabular edge view used for inspection.
"""

from dataclasses import dataclass
from enum import Enum

import pandera as pa
from pandera.typing import DataFrame, Series


class DuplicateEdgePolicy(str, Enum):
    """
    How the graph builder resolves several records for the same city pair.

    KEEP_LAST reproduces plain overwrite-on-insert semantics.
    KEEP_MINIMUM keeps the cheapest connection.
    """

    KEEP_FIRST = "keep_first"
    KEEP_LAST = "keep_last"
    KEEP_MINIMUM = "keep_minimum"


def placeholder_city_name(city_id: int) -> str:
    """Display name for cities that never appear as a record origin."""
    return f"City {city_id}"


@dataclass(frozen=True)
class CityNode:
    """
    A unique city identifier with its display name.

    Attributes:
        city_id: Integer city identifier.
        name: Human-readable city name.
    """

    city_id: int
    name: str


@dataclass(frozen=True)
class WeightedEdge:
    """
    Undirected weighted connection between two cities.

    Endpoints are stored in ascending order so that (a, b) and (b, a)
    compare equal.

    Attributes:
        u: Smaller endpoint identifier.
        v: Larger endpoint identifier.
        weight: Blended, normalized cost of travelling between u and v.
    """

    u: int
    v: int
    weight: float

    def __post_init__(self) -> None:
        if self.u == self.v:
            raise ValueError(f"Self-loop edges are not allowed (node {self.u})")
        if self.u > self.v:
            u, v = self.v, self.u
            object.__setattr__(self, "u", u)
            object.__setattr__(self, "v", v)

    @property
    def endpoints(self) -> tuple[int, int]:
        """Ordered (u, v) pair."""
        return self.u, self.v

    def other(self, node: int) -> int:
        """Return the endpoint opposite to node."""
        if node == self.u:
            return self.v
        if node == self.v:
            return self.u
        raise KeyError(node)


class WeightedEdgeSchema(pa.DataFrameModel):
    """Schema for the tabular view of a route graph's edges."""

    u: Series[int] = pa.Field(description="Smaller endpoint identifier")
    v: Series[int] = pa.Field(description="Larger endpoint identifier")
    weight: Series[float] = pa.Field(
        ge=0,
        description="Blended edge weight",
    )

    class Config:
        strict = False
        coerce = True
        name = "WeightedEdgeSchema"

    @pa.dataframe_check
    def no_self_loops(cls, df: DataFrame) -> Series[bool]:
        """Edges never connect a city to itself."""
        return df["u"] != df["v"]
