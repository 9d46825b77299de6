"""
Custom exceptions for the route planner.

Only caller contract violations raise. Data-quality problems (unknown
nodes, degenerate feature columns, unreachable destinations) degrade to
partial results and are logged instead.
"""


class RoutePlannerError(Exception):
    """Base exception for all route planner errors."""

    pass


class ValidationError(RoutePlannerError, ValueError):
    """Base exception for input validation errors."""

    pass


class EmptyFeatureError(ValidationError):
    """Raised when a feature column handed to the normalizer is empty."""

    def __init__(self, feature: str = "feature") -> None:
        self.feature = feature
        message = f"Cannot normalize empty {feature} sequence"
        super().__init__(message)


class EmptyRecordsError(ValidationError):
    """Raised when the route records DataFrame is empty."""

    def __init__(self, message: str = "Route records DataFrame is empty") -> None:
        super().__init__(message)


class MissingColumnsError(ValidationError):
    """Raised when required DataFrame columns are missing."""

    def __init__(self, missing: set[str]) -> None:
        self.missing = missing
        columns_str = ", ".join(sorted(missing))
        message = f"Missing required columns: {columns_str}"
        super().__init__(message)


class NonFiniteFeatureError(ValidationError):
    """Raised when a feature handed to the normalizer holds NaN or Inf."""

    def __init__(self, feature: str = "feature", count: int = 1) -> None:
        self.feature = feature
        self.count = count
        message = f"Cannot normalize {feature}: {count} non-finite value(s)"
        super().__init__(message)
