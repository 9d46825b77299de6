"""
Path Renderer - human-readable output for query results.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Optional

from src.route_planner.schemas.graph import placeholder_city_name
from src.route_planner.schemas.path import PathResult

if TYPE_CHECKING:
    from src.route_planner.adapters.repositories.route_graph_repo import RouteGraph

PATH_SEPARATOR = " -> "
GRAPH_BANNER = "====== Graph ======"


def _display_name(city_id: int, names: Mapping[int, str]) -> str:
    return names.get(city_id, placeholder_city_name(city_id))


def render_path(
    result: PathResult,
    names: Mapping[int, str],
    origin: Optional[int] = None,
    destination: Optional[int] = None,
) -> str:
    """
    Format a path as "Name1 -> Name2 -> ... -> NameN (Weight: X.XX)".

    Args:
        result: Query result to render.
        names: Mapping city id -> display name.
        origin: Queried origin, used only for the "no route" message.
        destination: Queried destination, used only for the "no route" message.

    Returns:
        The formatted route, or an explicit "No route found" message when
        result is the unreachable sentinel.

    Example:
        >>> render_path(PathResult((0, 2), 0.61), {0: "Braga", 2: "Porto"})
        'Braga -> Porto (Weight: 0.61)'
    """
    if not result.is_reachable:
        if origin is not None and destination is not None:
            return (
                f"No route found from {_display_name(origin, names)} "
                f"to {_display_name(destination, names)}"
            )
        return "No route found"

    route = PATH_SEPARATOR.join(result.city_names(names))
    return f"{route} (Weight: {result.total_weight:.2f})"


def render_graph(graph: RouteGraph) -> str:
    """
    List every edge of the graph as "From -> To", one per line.

    Edges are ordered by endpoint identifiers; the smaller id is printed
    first. Each line ends with a newline.
    """
    names = graph.names
    lines = [
        f"{_display_name(edge.u, names)}{PATH_SEPARATOR}{_display_name(edge.v, names)}\n"
        for edge in graph.edges()
    ]
    return "".join(lines)
