"""
In-memory Data Provider - RouteRecord sequence to DataFrame adapter.
"""

import logging
from typing import Iterable, Set

from src.route_planner.ports.record_provider import RouteRecordProvider
from src.route_planner.schemas.route_record import (
    RouteRecord,
    RouteRecordDataFrame,
    records_to_frame,
)

logger = logging.getLogger(__name__)


class InMemoryRouteProvider(RouteRecordProvider):
    """
    Data provider backed by already-parsed RouteRecord values.

    Records are copied into a tuple on construction so later changes
    to the caller's list do not affect the provider.
    """

    def __init__(self, records: Iterable[RouteRecord]) -> None:
        self._records = tuple(records)

    def get_records_df(self) -> RouteRecordDataFrame:
        """Return the records as a validated DataFrame, in input order."""
        df = records_to_frame(self._records)
        logger.debug("Providing %d in-memory route records", len(df))
        return df

    def get_city_ids(self) -> Set[int]:
        ids = {r.origin_id for r in self._records}
        ids.update(r.destination_id for r in self._records)
        return ids

    @property
    def records(self) -> tuple[RouteRecord, ...]:
        return self._records

    @property
    def name(self) -> str:
        return "In-memory records"
