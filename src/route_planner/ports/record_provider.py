"""
Route Record Provider port interface.

Defines the abstract contract for data sources that provide route records.
Implementations handle the specifics of different backends (CSV, memory).
"""

from abc import ABC, abstractmethod
from typing import Set

from src.route_planner.schemas.route_record import RouteRecordDataFrame


class RouteRecordProvider(ABC):
    """
    Abstract interface for route record providers.

    Providers own file access, tokenization and per-row error reporting.
    They return validated DataFrames; the planning core never sees raw
    text or conversion failures.

    Implementations:
    - CsvRouteProvider: CSV file -> DataFrame
    - InMemoryRouteProvider: RouteRecord sequence -> DataFrame
    """

    @abstractmethod
    def get_records_df(self) -> RouteRecordDataFrame:
        """
        Return route records as a validated DataFrame.

        Returns:
            DataFrame validated against RouteRecordSchema, in input order.

        Raises:
            pandera.errors.SchemaError: If data fails a validation check.
            pandera.errors.SchemaErrors: If a column cannot be coerced.
            FileNotFoundError: If the underlying source is missing.
        """
        ...

    @abstractmethod
    def get_city_ids(self) -> Set[int]:
        """
        Return every city identifier mentioned by the records.

        Returns:
            Identifiers from both the origin and destination columns.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Human-readable name of this provider.

        Returns:
            Provider identifier (e.g., "CSV file", "In-memory records").
        """
        ...

    @property
    def is_available(self) -> bool:
        """
        Check if the data source is currently available.

        Default implementation returns True. Override for providers
        backed by external resources.
        """
        return True
