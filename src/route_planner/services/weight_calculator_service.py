"""
Weight Calculator Service - edge cost policy.

Turns raw ticket prices and distances into one blended edge weight per
route record. Both features are min-max normalized independently, then
mixed with the coefficients from WeightPreferences.

This is the only place where the price-versus-distance trade-off is
expressed; graph construction and path search never look at raw prices.
"""

import logging
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from src.route_planner.exceptions import (
    EmptyFeatureError,
    MissingColumnsError,
    NonFiniteFeatureError,
)
from src.route_planner.schemas.preferences import DEFAULT_PREFERENCES, WeightPreferences

logger = logging.getLogger(__name__)

Feature = Union[Sequence[float], np.ndarray, pd.Series]


def min_max_normalize(values: Feature, feature: str = "feature") -> np.ndarray:
    """
    Rescale a numeric sequence to [0, 1].

    Each value v maps to (v - min) / (max - min). When every value is
    identical the range is zero and the result is all zeros, so no NaN or
    Inf ever reaches the edge weights.

    Args:
        values: Non-empty sequence of finite numbers.
        feature: Name used in error and log messages.

    Returns:
        Float array of the same length as values.

    Raises:
        EmptyFeatureError: If values is empty.
        NonFiniteFeatureError: If any value is NaN or infinite.

    Example:
        >>> min_max_normalize([0, 40, 25, 30])
        array([0.   , 1.   , 0.625, 0.75 ])
        >>> min_max_normalize([7, 7, 7])
        array([0., 0., 0.])
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        raise EmptyFeatureError(feature)

    non_finite = int(np.count_nonzero(~np.isfinite(arr)))
    if non_finite:
        raise NonFiniteFeatureError(feature, non_finite)

    lo = arr.min()
    hi = arr.max()

    if hi == lo:
        logger.debug(
            "All %d %s values equal %.4g; normalizing to zeros", arr.size, feature, lo
        )
        return np.zeros_like(arr)

    return (arr - lo) / (hi - lo)


class WeightCalculatorService:
    """
    Blends normalized ticket price and distance into edge weights.

    Attributes:
        _preferences: Blend coefficients (validated to sum to 1.0).
    """

    def __init__(self, preferences: Optional[WeightPreferences] = None) -> None:
        """
        Initialize the calculator.

        Args:
            preferences: Blend coefficients. Defaults to 0.4 ticket / 0.6 distance.
        """
        self._preferences = preferences or DEFAULT_PREFERENCES

    @property
    def preferences(self) -> WeightPreferences:
        """Blend coefficients in use."""
        return self._preferences

    def calculate_weights(
        self,
        distances: Feature,
        ticket_prices: Feature,
    ) -> np.ndarray:
        """
        Compute one weight per record, preserving input order.

        Args:
            distances: Distance of each record.
            ticket_prices: Ticket price of each record, same order.

        Returns:
            Array of weights in [0, 1].

        Raises:
            ValueError: If the sequences have different lengths.
            EmptyFeatureError: If the sequences are empty.
            NonFiniteFeatureError: If either sequence holds NaN or Inf.
        """
        if len(distances) != len(ticket_prices):
            raise ValueError(
                f"distances ({len(distances)}) and ticket_prices "
                f"({len(ticket_prices)}) must have the same length"
            )

        norm_distance = min_max_normalize(distances, feature="distance")
        norm_ticket = min_max_normalize(ticket_prices, feature="ticket price")

        prefs = self._preferences
        scores = prefs.weight_ticket * norm_ticket + prefs.weight_distance * norm_distance

        logger.debug(
            "Calculated %d weights (ticket=%.2f, distance=%.2f)",
            len(scores),
            prefs.weight_ticket,
            prefs.weight_distance,
        )

        return scores

    def calculate_for_records(self, records_df: pd.DataFrame) -> np.ndarray:
        """
        Compute weights for a route records DataFrame.

        Args:
            records_df: DataFrame with distance_km and ticket_price columns.

        Returns:
            Array of weights aligned with the DataFrame's row order.

        Raises:
            MissingColumnsError: If either column is absent.
        """
        missing = {"distance_km", "ticket_price"} - set(records_df.columns)
        if missing:
            raise MissingColumnsError(missing)

        return self.calculate_weights(
            records_df["distance_km"].to_numpy(dtype=np.float64),
            records_df["ticket_price"].to_numpy(dtype=np.float64),
        )
