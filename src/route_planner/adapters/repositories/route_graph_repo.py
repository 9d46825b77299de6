"""
Route Graph Repository - graph construction and caching.

Implements:
- Node collection from route records (last-seen display name wins)
- Undirected weighted edge insertion with an explicit duplicate policy
- Frozen RouteGraph shared read-only by all queries
- In-memory cache with cold-start build on first access
"""

from __future__ import annotations

import hashlib
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, FrozenSet, List, Mapping, Optional, Sequence

import pandas as pd

from src.route_planner.adapters.algorithms.immutability import freeze_adjacency
from src.route_planner.exceptions import EmptyRecordsError, MissingColumnsError
from src.route_planner.ports.graph_repository import GraphNotInitializedError
from src.route_planner.schemas.graph import (
    CityNode,
    DuplicateEdgePolicy,
    WeightedEdge,
    WeightedEdgeSchema,
    placeholder_city_name,
)
from src.route_planner.schemas.route_record import REQUIRED_COLUMNS
from src.route_planner.services.weight_calculator_service import WeightCalculatorService

if TYPE_CHECKING:
    from src.route_planner.ports.record_provider import RouteRecordProvider

logger = logging.getLogger(__name__)

Adjacency = Dict[int, Dict[int, float]]


# =============================================================================
# ROUTE GRAPH: read-only view shared by queries
# =============================================================================


@dataclass(frozen=True)
class RouteGraph:
    """
    Undirected weighted graph of cities.

    Travel cost is assumed symmetric: a record origin -> destination
    produces an edge usable in both directions.

    Attributes:
        nodes: Read-only mapping of city id to CityNode.
        adjacency: Read-only mapping node -> {neighbor: weight}. Every
            node has an entry, isolated nodes map to an empty mapping.
        built_at: Timestamp when graph was built.
        version: Hash for cache invalidation.
        record_count: Number of records the graph was built from.
    """

    nodes: Mapping[int, CityNode]
    adjacency: Mapping[int, Mapping[int, float]]
    built_at: datetime
    version: str
    record_count: int

    @property
    def node_ids(self) -> FrozenSet[int]:
        """All city identifiers."""
        return frozenset(self.nodes)

    @property
    def names(self) -> Dict[int, str]:
        """Mapping city id -> display name."""
        return {city_id: node.name for city_id, node in self.nodes.items()}

    @property
    def edge_count(self) -> int:
        """Number of undirected edges."""
        return sum(len(neighbors) for neighbors in self.adjacency.values()) // 2

    def has_node(self, city_id: int) -> bool:
        """Check if city exists in the graph."""
        return city_id in self.nodes

    def has_route(self, a: int, b: int) -> bool:
        """Check if a direct connection exists (in either direction)."""
        return b in self.adjacency.get(a, {})

    def weight(self, a: int, b: int) -> float:
        """
        Weight of the direct connection between a and b.

        Raises:
            KeyError: If no such edge exists.
        """
        return self.adjacency[a][b]

    def neighbors(self, city_id: int) -> Mapping[int, float]:
        """Read-only neighbor mapping of a city (empty if unknown)."""
        return self.adjacency.get(city_id, MappingProxyType({}))

    def edges(self) -> List[WeightedEdge]:
        """All edges, each listed once, sorted by endpoints."""
        result = [
            WeightedEdge(u, v, weight)
            for u, neighbors in self.adjacency.items()
            for v, weight in neighbors.items()
            if u < v
        ]
        return sorted(result, key=lambda e: e.endpoints)

    def edges_df(self) -> pd.DataFrame:
        """Edges as a DataFrame validated against WeightedEdgeSchema."""
        df = pd.DataFrame(
            [(e.u, e.v, e.weight) for e in self.edges()],
            columns=["u", "v", "weight"],
        )
        return WeightedEdgeSchema.validate(df)


# =============================================================================
# GRAPH CONSTRUCTION
# =============================================================================


def validate_records_df(records_df: pd.DataFrame) -> None:
    """
    Validate the records DataFrame structure.

    Raises:
        EmptyRecordsError: If DataFrame is empty.
        MissingColumnsError: If required columns are missing.
    """
    if records_df.empty:
        raise EmptyRecordsError()

    missing_columns = REQUIRED_COLUMNS - set(records_df.columns)
    if missing_columns:
        raise MissingColumnsError(missing_columns)


def collect_city_nodes(records_df: pd.DataFrame) -> Dict[int, CityNode]:
    """
    Collect one node per distinct city identifier.

    Identifiers come from both the origin and destination columns. When
    the same origin appears with different names, the last one scanned
    wins. Destination-only identifiers get a placeholder name.

    Args:
        records_df: Validated route records.

    Returns:
        Dict mapping city id to CityNode, in first-seen order.
    """
    names: Dict[int, str] = {}

    for city_id, name in zip(records_df["origin_id"], records_df["origin_name"]):
        city_id = int(city_id)
        name = str(name)
        previous = names.get(city_id)
        if previous is not None and previous != name:
            logger.warning(
                "City %d seen as both %r and %r; keeping %r",
                city_id,
                previous,
                name,
                name,
            )
        names[city_id] = name

    for city_id in records_df["destination_id"]:
        city_id = int(city_id)
        if city_id not in names:
            names[city_id] = placeholder_city_name(city_id)

    return {city_id: CityNode(city_id, name) for city_id, name in names.items()}


def _resolve_duplicate(
    current: float, candidate: float, policy: DuplicateEdgePolicy
) -> float:
    """Pick the weight to keep when a city pair is inserted twice."""
    if policy is DuplicateEdgePolicy.KEEP_FIRST:
        return current
    if policy is DuplicateEdgePolicy.KEEP_LAST:
        return candidate
    return min(current, candidate)


def insert_edges(
    nodes: Mapping[int, CityNode],
    records_df: pd.DataFrame,
    weights: Sequence[float],
    policy: DuplicateEdgePolicy = DuplicateEdgePolicy.KEEP_MINIMUM,
) -> Adjacency:
    """
    Insert one undirected edge per usable record.

    A record is skipped when it is a self-loop or when either endpoint is
    missing from nodes. Skips are never fatal; the graph is simply smaller.

    Args:
        nodes: Known cities; edges are only created between these.
        records_df: Route records, row order aligned with weights.
        weights: Edge weight of each record.
        policy: How to resolve several records for the same city pair.

    Returns:
        Mutable adjacency dict with an entry for every node.

    Raises:
        ValueError: If weights and records have different lengths.
    """
    if len(weights) != len(records_df):
        raise ValueError(
            f"Got {len(weights)} weights for {len(records_df)} records"
        )

    adjacency: Adjacency = {city_id: {} for city_id in nodes}
    self_loops = 0
    unknown = 0
    duplicates = 0

    origins = records_df["origin_id"].to_numpy()
    destinations = records_df["destination_id"].to_numpy()

    for i, (u, v) in enumerate(zip(origins, destinations)):
        u = int(u)
        v = int(v)
        weight = float(weights[i])

        if u not in nodes or v not in nodes:
            unknown += 1
            logger.debug("Skipping record %d: unknown city in (%d, %d)", i, u, v)
            continue

        if u == v:
            self_loops += 1
            continue

        if v in adjacency[u]:
            duplicates += 1
            kept = _resolve_duplicate(adjacency[u][v], weight, policy)
            logger.debug(
                "Duplicate edge (%d, %d): %.4f vs %.4f, keeping %.4f (%s)",
                u,
                v,
                adjacency[u][v],
                weight,
                kept,
                policy.value,
            )
            weight = kept

        adjacency[u][v] = weight
        adjacency[v][u] = weight

    if unknown or duplicates:
        logger.info(
            "Edge insertion: %d unknown-city records skipped, %d duplicate pairs "
            "resolved with %s",
            unknown,
            duplicates,
            policy.value,
        )
    logger.debug("Skipped %d self-loop records", self_loops)

    return adjacency


class RouteGraphBuilder:
    """
    Builds a RouteGraph from route records in two steps.

    Usage:
        >>> builder = RouteGraphBuilder(records_df)
        >>> builder.create_nodes()
        >>> builder.create_edges()
        >>> graph = builder.build()
    """

    def __init__(
        self,
        records_df: pd.DataFrame,
        weight_calculator: Optional[WeightCalculatorService] = None,
        duplicate_edge_policy: DuplicateEdgePolicy = DuplicateEdgePolicy.KEEP_MINIMUM,
    ) -> None:
        """
        Initialize the builder.

        Args:
            records_df: Validated route records.
            weight_calculator: Edge cost policy. Defaults to 0.4/0.6 blend.
            duplicate_edge_policy: Resolution for repeated city pairs.

        Raises:
            EmptyRecordsError: If there are no records.
            MissingColumnsError: If required columns are missing.
        """
        validate_records_df(records_df)

        self._records_df = records_df.reset_index(drop=True)
        self._calculator = weight_calculator or WeightCalculatorService()
        self._policy = duplicate_edge_policy
        self._nodes: Optional[Dict[int, CityNode]] = None
        self._adjacency: Optional[Adjacency] = None

    def create_nodes(self) -> Dict[int, CityNode]:
        """Collect the distinct cities of all records."""
        self._nodes = collect_city_nodes(self._records_df)
        logger.debug("Created %d nodes", len(self._nodes))
        return self._nodes

    def create_edges(self) -> Adjacency:
        """
        Weight every record and insert the resulting edges.

        Raises:
            GraphNotInitializedError: If create_nodes() has not run yet.
        """
        if self._nodes is None:
            raise GraphNotInitializedError("create_nodes() must run before create_edges()")

        weights = self._calculator.calculate_for_records(self._records_df)
        self._adjacency = insert_edges(self._nodes, self._records_df, weights, self._policy)
        return self._adjacency

    def build(self) -> RouteGraph:
        """
        Run any missing steps and return the frozen graph.

        Returns:
            RouteGraph that no longer shares state with the builder.
        """
        if self._nodes is None:
            self.create_nodes()
        if self._adjacency is None:
            self.create_edges()

        graph = RouteGraph(
            nodes=MappingProxyType(dict(self._nodes)),
            adjacency=freeze_adjacency(self._adjacency),
            built_at=datetime.now(),
            version=self._compute_version(),
            record_count=len(self._records_df),
        )

        logger.info(
            "Built route graph: %d cities, %d edges from %d records",
            len(graph.nodes),
            graph.edge_count,
            graph.record_count,
        )
        return graph

    def _compute_version(self) -> str:
        """Compute hash of the built edges for version tracking."""
        content = ";".join(
            f"{u}-{v}:{w:.12g}"
            for u in sorted(self._adjacency)
            for v, w in sorted(self._adjacency[u].items())
            if u < v
        )
        content += f"|{len(self._records_df)}|{sorted(self._nodes)}"
        return hashlib.md5(content.encode()).hexdigest()[:12]


# =============================================================================
# IN-MEMORY CACHE
# =============================================================================


class InMemoryRouteGraphCache:
    """
    In-process graph cache.

    Thread-safe for concurrent access within a single process.

    Attributes:
        _graph: Currently cached graph (or None).
        _lock: Lock for thread-safe access.
    """

    def __init__(self) -> None:
        self._graph: Optional[RouteGraph] = None
        self._lock = threading.Lock()

    def get(self) -> Optional[RouteGraph]:
        """Get cached graph or None if miss."""
        with self._lock:
            return self._graph

    def set(self, graph: RouteGraph) -> None:
        """Store graph in cache."""
        with self._lock:
            self._graph = graph

    def invalidate(self) -> None:
        """Clear cached graph."""
        with self._lock:
            self._graph = None


# =============================================================================
# ROUTE GRAPH REPOSITORY
# =============================================================================


class RouteGraphRepository:
    """
    Repository that builds the route graph once and serves it read-only.

    Usage:
        >>> provider = CsvRouteProvider("routes.csv")
        >>> repo = RouteGraphRepository(provider)
        >>> graph = repo.get_graph()  # builds on first call
    """

    def __init__(
        self,
        data_provider: RouteRecordProvider,
        cache: Optional[InMemoryRouteGraphCache] = None,
        weight_calculator: Optional[WeightCalculatorService] = None,
        duplicate_edge_policy: DuplicateEdgePolicy = DuplicateEdgePolicy.KEEP_MINIMUM,
    ) -> None:
        """
        Initialize repository with data provider and cache.

        Args:
            data_provider: Source for route records.
            cache: Cache backend. Defaults to a fresh InMemoryRouteGraphCache.
            weight_calculator: Edge cost policy passed to the builder.
            duplicate_edge_policy: Resolution for repeated city pairs.
        """
        self._provider = data_provider
        self._cache = cache or InMemoryRouteGraphCache()
        self._calculator = weight_calculator or WeightCalculatorService()
        self._policy = duplicate_edge_policy
        self._build_lock = threading.Lock()

    def get_graph(self) -> RouteGraph:
        """
        Get current graph, building it on first access.

        Returns:
            Current RouteGraph.

        Raises:
            GraphNotInitializedError: If the graph cannot be built.
        """
        cached = self._cache.get()
        if cached is not None:
            return cached

        with self._build_lock:
            # Double-check after acquiring lock
            cached = self._cache.get()
            if cached is not None:
                return cached

            try:
                graph = self._build_graph()
            except Exception as e:
                logger.error("Graph build failed: %s", e)
                raise GraphNotInitializedError(
                    f"Failed to initialize route graph: {e}"
                ) from e

            self._cache.set(graph)

        return graph

    def _build_graph(self) -> RouteGraph:
        """Fetch records from the provider and build a new graph."""
        records_df = self._provider.get_records_df()

        builder = RouteGraphBuilder(
            records_df,
            weight_calculator=self._calculator,
            duplicate_edge_policy=self._policy,
        )
        builder.create_nodes()
        builder.create_edges()
        return builder.build()

    def refresh(self) -> RouteGraph:
        """Rebuild the graph from the provider and replace the cached one."""
        self.invalidate()
        return self.get_graph()

    def invalidate(self) -> None:
        """Invalidate cache and force a rebuild on next access."""
        self._cache.invalidate()

    @property
    def is_initialized(self) -> bool:
        """Check if graph has been built at least once."""
        return self._cache.get() is not None

    @property
    def current_version(self) -> Optional[str]:
        """Get version of currently cached graph."""
        graph = self._cache.get()
        return graph.version if graph else None
