"""
Single-source Dijkstra over an undirected weighted adjacency mapping.

Uses a binary heap with lazy deletion: stale heap entries are skipped
when popped instead of being decreased in place.
"""

import heapq
from typing import Dict, List, Optional

from .labels import Label
from .validation import Adjacency, validate_dijkstra_inputs


def dijkstra(
    adjacency: Adjacency,
    origin: int,
    destination: Optional[int] = None,
    validate: bool = True,
) -> Dict[int, Label]:
    """
    Compute minimum-weight labels from origin.

    Args:
        adjacency: Mapping node -> {neighbor: weight}, weights >= 0.
        origin: Source node identifier.
        destination: If given, stop as soon as this node is settled.
        validate: If True, check weights (and symmetry) before searching.

    Returns:
        Dict mapping each settled node to its terminal Label. Empty if
        origin is not part of the graph.

    Raises:
        NegativeWeightError: If any weight is negative.
        AsymmetricEdgeError: If the mapping is not symmetric.
    """
    if validate:
        validate_dijkstra_inputs(adjacency)

    if origin not in adjacency:
        return {}

    settled: Dict[int, Label] = {}
    best: Dict[int, float] = {origin: 0.0}
    pq: List[tuple[float, int, Label]] = []

    heapq.heappush(pq, (0.0, origin, Label(node=origin, cost=0.0)))

    while pq:
        cost, node, label = heapq.heappop(pq)

        if node in settled:
            continue

        settled[node] = label

        if node == destination:
            break

        for neighbor, weight in adjacency[node].items():
            if neighbor in settled:
                continue

            new_cost = cost + weight
            if new_cost < best.get(neighbor, float("inf")):
                best[neighbor] = new_cost
                heapq.heappush(pq, (new_cost, neighbor, label.extend(neighbor, weight)))

    return settled


def shortest_label(
    adjacency: Adjacency,
    origin: int,
    destination: int,
    validate: bool = True,
) -> Optional[Label]:
    """
    Terminal label of the cheapest origin -> destination path.

    Returns:
        The destination's Label, or None if it cannot be reached.
    """
    settled = dijkstra(adjacency, origin, destination=destination, validate=validate)
    return settled.get(destination)
