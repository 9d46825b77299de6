"""
Tests for Route Graph Repository.

Tests cover:
- Node collection and display-name resolution
- Edge insertion (self-loops, unknown cities, duplicate policies)
- RouteGraph read-only access patterns
- InMemoryRouteGraphCache and RouteGraphRepository build-once behavior
"""

import logging
from unittest.mock import MagicMock

import pandas as pd
import pytest

from src.route_planner.adapters.data_providers.memory_provider import (
    InMemoryRouteProvider,
)
from src.route_planner.adapters.repositories.route_graph_repo import (
    InMemoryRouteGraphCache,
    RouteGraphBuilder,
    RouteGraphRepository,
    collect_city_nodes,
    insert_edges,
    validate_records_df,
)
from src.route_planner.exceptions import (
    EmptyRecordsError,
    MissingColumnsError,
    NonFiniteFeatureError,
)
from src.route_planner.ports.graph_repository import (
    GraphNotInitializedError,
    RouteGraphCache,
)
from src.route_planner.ports.record_provider import RouteRecordProvider
from src.route_planner.schemas.graph import CityNode, DuplicateEdgePolicy
from src.route_planner.schemas.preferences import WeightPreferences
from src.route_planner.schemas.route_record import RouteRecord, records_to_frame
from src.route_planner.services.weight_calculator_service import WeightCalculatorService


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def duplicate_pair_df() -> pd.DataFrame:
    """
    Records where (0, 2) appears twice with different weights.

    Weights with the default blend: [0.61, 0.0, 1.0].
    """
    return records_to_frame([
        RouteRecord(2, "Porto", 0, 25.0, 30.0),
        RouteRecord(0, "Braga", 2, 0.0, 0.0),
        RouteRecord(1, "Lisbon", 0, 40.0, 50.0),
    ])


@pytest.fixture
def mock_provider(sample_records_df) -> MagicMock:
    """Create a mock RouteRecordProvider serving the sample records."""
    provider = MagicMock(spec=RouteRecordProvider)
    provider.get_records_df.return_value = sample_records_df
    provider.name = "Mock"
    return provider


# =============================================================================
# NODE COLLECTION TESTS
# =============================================================================


class TestCollectCityNodes:
    """Tests for collect_city_nodes."""

    def test_sample_nodes(self, sample_records_df):
        nodes = collect_city_nodes(sample_records_df)

        assert nodes == {
            0: CityNode(0, "Braga"),
            1: CityNode(1, "Lisbon"),
            2: CityNode(2, "Porto"),
        }

    def test_last_name_wins(self, caplog):
        df = records_to_frame([
            RouteRecord(0, "Braga", 1, 1.0, 1.0),
            RouteRecord(0, "Braga Centro", 1, 2.0, 2.0),
        ])

        with caplog.at_level(logging.WARNING):
            nodes = collect_city_nodes(df)

        assert nodes[0].name == "Braga Centro"
        assert "City 0 seen as both" in caplog.text

    def test_destination_only_city_gets_placeholder(self):
        df = records_to_frame([RouteRecord(0, "Braga", 7, 1.0, 1.0)])

        nodes = collect_city_nodes(df)

        assert nodes[7] == CityNode(7, "City 7")

    def test_origin_name_replaces_placeholder(self):
        df = records_to_frame([
            RouteRecord(0, "Braga", 7, 1.0, 1.0),
            RouteRecord(7, "Faro", 0, 2.0, 2.0),
        ])

        assert collect_city_nodes(df)[7].name == "Faro"


# =============================================================================
# EDGE INSERTION TESTS
# =============================================================================


class TestInsertEdges:
    """Tests for insert_edges."""

    def test_self_loops_skipped(self, sample_records_df):
        nodes = collect_city_nodes(sample_records_df)

        adjacency = insert_edges(nodes, sample_records_df, [0.0, 1.0, 0.61, 0.612])

        assert 0 not in adjacency[0]
        assert all(u not in adjacency[u] for u in adjacency)

    def test_edges_symmetric(self, sample_records_df):
        nodes = collect_city_nodes(sample_records_df)

        adjacency = insert_edges(nodes, sample_records_df, [0.0, 1.0, 0.61, 0.612])

        for u, neighbors in adjacency.items():
            for v, weight in neighbors.items():
                assert adjacency[v][u] == weight

    def test_unknown_city_skipped(self, sample_records_df):
        nodes = {0: CityNode(0, "Braga"), 1: CityNode(1, "Lisbon")}

        adjacency = insert_edges(nodes, sample_records_df, [0.0, 1.0, 0.61, 0.612])

        assert set(adjacency) == {0, 1}
        assert adjacency[0] == {1: 1.0}

    def test_isolated_node_has_entry(self):
        df = records_to_frame([RouteRecord(0, "Braga", 0, 1.0, 1.0)])
        nodes = collect_city_nodes(df)

        adjacency = insert_edges(nodes, df, [0.0])

        assert adjacency == {0: {}}

    @pytest.mark.parametrize(
        "policy,expected",
        [
            (DuplicateEdgePolicy.KEEP_FIRST, 0.5),
            (DuplicateEdgePolicy.KEEP_LAST, 0.8),
            (DuplicateEdgePolicy.KEEP_MINIMUM, 0.2),
        ],
    )
    def test_duplicate_policies(self, policy, expected):
        df = records_to_frame([
            RouteRecord(0, "Braga", 1, 1.0, 1.0),
            RouteRecord(1, "Lisbon", 0, 2.0, 2.0),
            RouteRecord(0, "Braga", 1, 3.0, 3.0),
        ])
        nodes = collect_city_nodes(df)

        adjacency = insert_edges(nodes, df, [0.5, 0.2, 0.8], policy)

        assert adjacency[0][1] == expected
        assert adjacency[1][0] == expected

    def test_length_mismatch(self, sample_records_df):
        nodes = collect_city_nodes(sample_records_df)

        with pytest.raises(ValueError, match="3 weights for 4 records"):
            insert_edges(nodes, sample_records_df, [0.0, 1.0, 0.5])


# =============================================================================
# BUILDER TESTS
# =============================================================================


class TestRouteGraphBuilder:
    """Tests for RouteGraphBuilder and RouteGraph."""

    def test_sample_graph_shape(self, sample_graph):
        assert sample_graph.node_ids == frozenset({0, 1, 2})
        assert sample_graph.edge_count == 3
        assert sample_graph.record_count == 4
        assert sample_graph.names == {0: "Braga", 1: "Lisbon", 2: "Porto"}

    def test_sample_weights(self, sample_graph):
        assert sample_graph.weight(0, 1) == pytest.approx(1.0)
        assert sample_graph.weight(0, 2) == pytest.approx(0.61)
        assert sample_graph.weight(2, 1) == pytest.approx(0.612)

    def test_has_route_either_direction(self, sample_graph):
        assert sample_graph.has_route(0, 2)
        assert sample_graph.has_route(2, 0)
        assert not sample_graph.has_route(0, 0)
        assert not sample_graph.has_route(0, 9)

    def test_neighbors(self, sample_graph):
        assert set(sample_graph.neighbors(2)) == {0, 1}
        assert len(sample_graph.neighbors(9)) == 0

    def test_missing_weight_raises(self, sample_graph):
        with pytest.raises(KeyError):
            sample_graph.weight(0, 0)

    def test_edges_sorted(self, sample_graph):
        assert [e.endpoints for e in sample_graph.edges()] == [(0, 1), (0, 2), (1, 2)]

    def test_edges_df(self, sample_graph):
        df = sample_graph.edges_df()

        assert list(df.columns) == ["u", "v", "weight"]
        assert len(df) == 3
        assert (df["u"] < df["v"]).all()

    def test_graph_is_read_only(self, sample_graph):
        with pytest.raises(TypeError):
            sample_graph.adjacency[0][1] = 0.0
        with pytest.raises(TypeError):
            sample_graph.nodes[5] = CityNode(5, "Faro")

    def test_version_deterministic(self, sample_records_df):
        first = RouteGraphBuilder(sample_records_df).build()
        second = RouteGraphBuilder(sample_records_df).build()

        assert first.version == second.version
        assert len(first.version) == 12

    @pytest.mark.parametrize(
        "policy,expected",
        [
            (DuplicateEdgePolicy.KEEP_FIRST, 0.61),
            (DuplicateEdgePolicy.KEEP_LAST, 0.0),
            (DuplicateEdgePolicy.KEEP_MINIMUM, 0.0),
        ],
    )
    def test_builder_policy(self, duplicate_pair_df, policy, expected):
        graph = RouteGraphBuilder(
            duplicate_pair_df, duplicate_edge_policy=policy
        ).build()

        assert graph.weight(0, 2) == pytest.approx(expected)

    def test_policy_changes_version(self, duplicate_pair_df):
        first = RouteGraphBuilder(
            duplicate_pair_df, duplicate_edge_policy=DuplicateEdgePolicy.KEEP_FIRST
        ).build()
        last = RouteGraphBuilder(
            duplicate_pair_df, duplicate_edge_policy=DuplicateEdgePolicy.KEEP_LAST
        ).build()

        assert first.version != last.version

    def test_custom_weight_calculator(self, sample_records_df):
        calculator = WeightCalculatorService(WeightPreferences.distance_only())

        graph = RouteGraphBuilder(sample_records_df, weight_calculator=calculator).build()

        assert graph.weight(0, 2) == pytest.approx(0.6)
        assert graph.weight(1, 2) == pytest.approx(0.52)

    def test_edges_before_nodes(self, sample_records_df):
        builder = RouteGraphBuilder(sample_records_df)

        with pytest.raises(GraphNotInitializedError):
            builder.create_edges()

    def test_explicit_steps(self, sample_records_df):
        builder = RouteGraphBuilder(sample_records_df)
        builder.create_nodes()
        builder.create_edges()

        assert builder.build().edge_count == 3

    def test_builder_does_not_share_state(self, sample_records_df):
        builder = RouteGraphBuilder(sample_records_df)
        builder.create_nodes()
        adjacency = builder.create_edges()
        graph = builder.build()

        adjacency[0][1] = 99.0

        assert graph.weight(0, 1) == pytest.approx(1.0)

    def test_empty_records(self):
        with pytest.raises(EmptyRecordsError):
            RouteGraphBuilder(records_to_frame([]))

    def test_missing_columns(self, sample_records_df):
        with pytest.raises(MissingColumnsError):
            RouteGraphBuilder(sample_records_df.drop(columns=["origin_name"]))

    def test_infinite_price_rejected_before_edges(self, sample_records_df):
        df = sample_records_df.copy()
        df.loc[1, "ticket_price"] = float("inf")
        builder = RouteGraphBuilder(df)
        builder.create_nodes()

        with pytest.raises(NonFiniteFeatureError):
            builder.create_edges()

    def test_validate_records_df(self, sample_records_df):
        validate_records_df(sample_records_df)


# =============================================================================
# CACHE AND REPOSITORY TESTS
# =============================================================================


class TestInMemoryRouteGraphCache:
    """Tests for InMemoryRouteGraphCache."""

    def test_satisfies_protocol(self):
        assert isinstance(InMemoryRouteGraphCache(), RouteGraphCache)

    def test_set_get_invalidate(self, sample_graph):
        cache = InMemoryRouteGraphCache()
        assert cache.get() is None

        cache.set(sample_graph)
        assert cache.get() is sample_graph

        cache.invalidate()
        assert cache.get() is None


class TestRouteGraphRepository:
    """Tests for RouteGraphRepository."""

    def test_builds_once(self, mock_provider):
        repo = RouteGraphRepository(mock_provider)

        first = repo.get_graph()
        second = repo.get_graph()

        assert first is second
        mock_provider.get_records_df.assert_called_once()

    def test_not_initialized_before_first_access(self, mock_provider):
        repo = RouteGraphRepository(mock_provider)

        assert not repo.is_initialized
        assert repo.current_version is None

        graph = repo.get_graph()

        assert repo.is_initialized
        assert repo.current_version == graph.version

    def test_refresh_rebuilds(self, mock_provider):
        repo = RouteGraphRepository(mock_provider)
        first = repo.get_graph()

        second = repo.refresh()

        assert second is not first
        assert mock_provider.get_records_df.call_count == 2

    def test_invalidate(self, mock_provider):
        repo = RouteGraphRepository(mock_provider)
        repo.get_graph()

        repo.invalidate()

        assert not repo.is_initialized

    def test_provider_failure_wrapped(self, mock_provider):
        mock_provider.get_records_df.side_effect = FileNotFoundError("gone")
        repo = RouteGraphRepository(mock_provider)

        with pytest.raises(GraphNotInitializedError, match="gone") as exc_info:
            repo.get_graph()

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert not repo.is_initialized

    def test_empty_provider(self):
        repo = RouteGraphRepository(InMemoryRouteProvider([]))

        with pytest.raises(GraphNotInitializedError) as exc_info:
            repo.get_graph()

        assert isinstance(exc_info.value.__cause__, EmptyRecordsError)

    def test_non_finite_records_wrapped(self, sample_records_df):
        df = sample_records_df.copy()
        df.loc[2, "distance_km"] = float("nan")
        provider = MagicMock(spec=RouteRecordProvider)
        provider.get_records_df.return_value = df
        repo = RouteGraphRepository(provider)

        with pytest.raises(GraphNotInitializedError) as exc_info:
            repo.get_graph()

        assert isinstance(exc_info.value.__cause__, NonFiniteFeatureError)

    def test_policy_passed_to_builder(self, duplicate_pair_df):
        provider = MagicMock(spec=RouteRecordProvider)
        provider.get_records_df.return_value = duplicate_pair_df

        repo = RouteGraphRepository(
            provider, duplicate_edge_policy=DuplicateEdgePolicy.KEEP_FIRST
        )

        assert repo.get_graph().weight(0, 2) == pytest.approx(0.61)
