"""
Route planner configuration module.

Centralizes the defaults used by the CLI and the public facade, and
loads overrides from environment variables (optionally via a .env file).
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

from src.route_planner.schemas.graph import DuplicateEdgePolicy
from src.route_planner.schemas.preferences import WeightPreferences

# Environment variable names
ENV_CSV_PATH = "ROUTE_PLANNER_CSV"
ENV_ORIGIN_ID = "ROUTE_PLANNER_ORIGIN_ID"
ENV_DESTINATION_ID = "ROUTE_PLANNER_DESTINATION_ID"
ENV_EDGE_POLICY = "ROUTE_PLANNER_EDGE_POLICY"
ENV_LOG_LEVEL = "ROUTE_PLANNER_LOG_LEVEL"

DEFAULT_CSV_PATH = "example.csv"
DEFAULT_ORIGIN_ID = 0
DEFAULT_DESTINATION_ID = 1


@dataclass(frozen=True)
class PlannerConfig:
    """
    Immutable planner configuration.

    Attributes:
        records_path: CSV file with route records.
        origin_id: City every route starts from.
        destination_id: Default destination when none is requested.
        duplicate_edge_policy: Resolution for repeated city pairs.
        log_level: Logging level name for the CLI.
        preferences: Ticket/distance blend coefficients.
    """

    records_path: str = DEFAULT_CSV_PATH
    origin_id: int = DEFAULT_ORIGIN_ID
    destination_id: int = DEFAULT_DESTINATION_ID
    duplicate_edge_policy: DuplicateEdgePolicy = DuplicateEdgePolicy.KEEP_MINIMUM
    log_level: str = "INFO"
    preferences: WeightPreferences = field(default_factory=WeightPreferences)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.records_path:
            raise ValueError("records_path cannot be empty")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def log_level_value(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        dotenv: bool = True,
    ) -> "PlannerConfig":
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.
            dotenv: If True and environ is None, load a .env file first.

        Returns:
            Validated PlannerConfig; unset variables keep their defaults.

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        kwargs = {}

        if environ.get(ENV_CSV_PATH):
            kwargs["records_path"] = environ[ENV_CSV_PATH]
        if environ.get(ENV_ORIGIN_ID):
            kwargs["origin_id"] = _parse_int(ENV_ORIGIN_ID, environ[ENV_ORIGIN_ID])
        if environ.get(ENV_DESTINATION_ID):
            kwargs["destination_id"] = _parse_int(
                ENV_DESTINATION_ID, environ[ENV_DESTINATION_ID]
            )
        if environ.get(ENV_EDGE_POLICY):
            kwargs["duplicate_edge_policy"] = _parse_policy(environ[ENV_EDGE_POLICY])
        if environ.get(ENV_LOG_LEVEL):
            kwargs["log_level"] = environ[ENV_LOG_LEVEL]

        return cls(**kwargs)


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _parse_policy(value: str) -> DuplicateEdgePolicy:
    try:
        return DuplicateEdgePolicy(value.strip().lower())
    except ValueError:
        choices = ", ".join(p.value for p in DuplicateEdgePolicy)
        raise ValueError(
            f"{ENV_EDGE_POLICY} must be one of {choices}, got {value!r}"
        ) from None
