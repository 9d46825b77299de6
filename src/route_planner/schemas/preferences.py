"""
Weighting preferences.

The blend between ticket price and distance is the single piece of
business policy in the planner. It is injected as a value object so the
weight calculator can be exercised with alternative policies.
"""

import math
from dataclasses import dataclass

# Allowed drift when checking that coefficients sum to one
SUM_TOLERANCE = 1e-9


@dataclass(frozen=True)
class WeightPreferences:
    """
    Immutable blend coefficients for edge weights.

    Attributes:
        weight_ticket: Share of the normalized ticket price.
        weight_distance: Share of the normalized distance.
    """

    weight_ticket: float = 0.4
    weight_distance: float = 0.6

    def __post_init__(self) -> None:
        """Validate coefficients after initialization."""
        for field_name in ("weight_ticket", "weight_distance"):
            value = getattr(self, field_name)
            if not math.isfinite(value):
                raise ValueError(f"{field_name} must be finite, got {value}")
            if value < 0:
                raise ValueError(f"{field_name} must be >= 0, got {value}")

        total = self.weight_ticket + self.weight_distance
        if not math.isclose(total, 1.0, rel_tol=0.0, abs_tol=SUM_TOLERANCE):
            raise ValueError(
                f"weight_ticket + weight_distance must equal 1.0, got {total}"
            )

    @classmethod
    def distance_only(cls) -> "WeightPreferences":
        """Preferences that ignore ticket prices."""
        return cls(weight_ticket=0.0, weight_distance=1.0)

    @classmethod
    def ticket_only(cls) -> "WeightPreferences":
        """Preferences that ignore distances."""
        return cls(weight_ticket=1.0, weight_distance=0.0)


DEFAULT_PREFERENCES = WeightPreferences()
