"""
Path result schema.

Standardizes the output of shortest-path queries between the algorithm
adapter and its consumers.
"""

import math
from dataclasses import dataclass
from typing import Mapping, Sequence

from src.route_planner.schemas.graph import placeholder_city_name


@dataclass(frozen=True)
class PathResult:
    """
    Immutable result of an origin-to-destination query.

    An empty node tuple with infinite weight is the "unreachable"
    sentinel; it is a normal query outcome, not an error.

    Attributes:
        nodes: City identifiers from origin to destination inclusive.
        total_weight: Sum of edge weights along the path.
    """

    nodes: tuple[int, ...]
    total_weight: float

    def __post_init__(self) -> None:
        """Validate the result after initialization."""
        if not self.nodes and not math.isinf(self.total_weight):
            raise ValueError("An empty path must carry an infinite weight")
        if self.nodes and self.total_weight < 0:
            raise ValueError(f"total_weight must be >= 0, got {self.total_weight}")

    @classmethod
    def unreachable(cls) -> "PathResult":
        """The designated "no path exists" result."""
        return cls(nodes=(), total_weight=math.inf)

    @classmethod
    def from_nodes(cls, nodes: Sequence[int], total_weight: float) -> "PathResult":
        """Factory accepting any node sequence."""
        return cls(nodes=tuple(int(n) for n in nodes), total_weight=float(total_weight))

    @property
    def is_reachable(self) -> bool:
        """True if a path exists."""
        return bool(self.nodes)

    @property
    def num_hops(self) -> int:
        """Number of edges along the path (0 for a single-node path)."""
        return max(len(self.nodes) - 1, 0)

    @property
    def origin(self) -> int:
        """First node of the path."""
        if not self.nodes:
            raise ValueError("Unreachable result has no origin")
        return self.nodes[0]

    @property
    def destination(self) -> int:
        """Last node of the path."""
        if not self.nodes:
            raise ValueError("Unreachable result has no destination")
        return self.nodes[-1]

    def city_names(self, names: Mapping[int, str]) -> list[str]:
        """Display names along the path, with placeholders for unknown ids."""
        return [names.get(n, placeholder_city_name(n)) for n in self.nodes]
