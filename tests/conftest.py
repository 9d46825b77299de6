"""Shared fixtures for route planner tests."""

from pathlib import Path
from typing import List

import pandas as pd
import pytest

from src.route_planner.adapters.repositories.route_graph_repo import (
    RouteGraph,
    RouteGraphBuilder,
)
from src.route_planner.schemas.route_record import RouteRecord, records_to_frame

# id, city, to, ticket_average, distance, hours
SAMPLE_CSV = """id,city,to,ticket_average,distance,hours
0, Braga, 0, 0, 0, 0
1, Lisbon, 0,40, 50, 5
2, Porto, 0, 25, 30, 1.5
2, Porto, 1, 30, 26, 1.5
"""


@pytest.fixture
def sample_records() -> List[RouteRecord]:
    """The four-row Braga/Lisbon/Porto example."""
    return [
        RouteRecord(0, "Braga", 0, 0.0, 0.0, 0.0),
        RouteRecord(1, "Lisbon", 0, 40.0, 50.0, 5.0),
        RouteRecord(2, "Porto", 0, 25.0, 30.0, 1.5),
        RouteRecord(2, "Porto", 1, 30.0, 26.0, 1.5),
    ]


@pytest.fixture
def sample_records_df(sample_records: List[RouteRecord]) -> pd.DataFrame:
    """Sample records as a validated DataFrame."""
    return records_to_frame(sample_records)


@pytest.fixture
def sample_graph(sample_records_df: pd.DataFrame) -> RouteGraph:
    """Graph built from the sample records with default settings."""
    return RouteGraphBuilder(sample_records_df).build()


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    """Sample records written to a CSV file."""
    path = tmp_path / "routes.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path
