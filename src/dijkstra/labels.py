from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, eq=False)
class Label:
    """
    Represents a state in the Dijkstra search space.

    Each Label tracks:
    - Current node (city identifier)
    - Total weight accumulated from the origin
    - Chain back to previous label (for path reconstruction)
    - Weight of the edge that led to this state

    Note: eq=False keeps labels identity-compared so heap entries with
    equal costs never fall back to field-wise comparison.
    """
    node: int
    cost: float
    prev: Optional["Label"] = None
    edge_weight: float = 0.0

    def __eq__(self, other: object) -> bool:
        """Identity-based equality for heap operations."""
        return self is other

    def __hash__(self) -> int:
        """Identity-based hash for consistent behavior with __eq__."""
        return id(self)

    def __lt__(self, other: "Label") -> bool:
        """
        Comparison for heapq tiebreaking.

        When (cost, node) are equal, heapq compares Labels directly.
        Any consistent ordering works here; tie-breaking between
        equal-cost paths is not part of the contract.
        """
        return id(self) < id(other)

    def extend(self, node: int, weight: float) -> "Label":
        """Label reached by following one edge of the given weight."""
        return Label(node=node, cost=self.cost + weight, prev=self, edge_weight=weight)
