from typing import List, Optional, Tuple

from .labels import Label


def reconstruct_path(label: Label) -> Tuple[List[int], List[float]]:
    """
    Reconstruct path (nodes and edge weights) from a terminal label.

    Returns:
        nodes: ordered list of node ids from origin to the label's node
        weights: ordered list of edge weights taken (one fewer than nodes)
    """
    nodes: List[int] = []
    weights: List[float] = []

    curr: Optional[Label] = label
    while curr is not None:
        nodes.append(curr.node)
        if curr.prev is not None:
            weights.append(curr.edge_weight)
        curr = curr.prev

    nodes.reverse()
    weights.reverse()

    return nodes, weights
