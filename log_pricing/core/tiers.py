"""
Pricing tiers and rate management.

Holds the volume tier table used for log cost and the flat per-user price.
"""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PricingTier:
    """Per-unit rate for the half-open quantity range [lower, upper)."""
    lower: int
    upper: float  # math.inf for the top tier
    rate: float

    @property
    def width(self) -> float:
        """Number of units this tier can absorb."""
        return self.upper - self.lower

    @property
    def is_unbounded(self) -> bool:
        return math.isinf(self.upper)


@dataclass(frozen=True)
class PricingTable:
    """Fixed tier table plus flat per-user price."""
    tiers: Tuple[PricingTier, ...]
    user_price: float

    def __post_init__(self):
        """Validate tiers are contiguous, ascending and end unbounded.

        Raises:
            ValueError: If the table is malformed
        """
        if not self.tiers:
            raise ValueError("pricing table must have at least one tier")
        if not math.isfinite(self.user_price):
            raise ValueError("user_price must be finite")
        if self.user_price < 0:
            raise ValueError("user_price cannot be negative")

        for i, tier in enumerate(self.tiers):
            if isinstance(tier.lower, bool) or not isinstance(tier.lower, int):
                raise ValueError(f"tiers[{i}].lower must be an integer")
            if not tier.is_unbounded and (
                isinstance(tier.upper, bool) or not isinstance(tier.upper, int)
            ):
                raise ValueError(f"tiers[{i}].upper must be an integer or math.inf")
            if not math.isfinite(tier.rate):
                raise ValueError(f"tiers[{i}].rate must be finite")

        if self.tiers[0].lower != 0:
            raise ValueError("first tier must start at 0")

        for i, tier in enumerate(self.tiers):
            if tier.rate < 0:
                raise ValueError(f"tiers[{i}].rate cannot be negative")
            if tier.upper <= tier.lower:
                raise ValueError(f"tiers[{i}].upper must be greater than lower")

            is_last = i == len(self.tiers) - 1
            if is_last and not tier.is_unbounded:
                raise ValueError("last tier must be unbounded")
            if not is_last:
                if tier.is_unbounded:
                    raise ValueError(f"only the last tier may be unbounded (tiers[{i}])")
                next_tier = self.tiers[i + 1]
                if next_tier.lower != tier.upper:
                    raise ValueError(
                        f"tiers[{i + 1}].lower must equal tiers[{i}].upper "
                        f"({next_tier.lower} != {tier.upper})"
                    )


USER_PRICE = 20

# Fixed pricing table - shared by every calculation, never mutated
DEFAULT_PRICING_TABLE = PricingTable(
    tiers=(
        PricingTier(lower=0, upper=10_000, rate=0),
        PricingTier(lower=10_000, upper=2_000_000, rate=0.0003224),
        PricingTier(lower=2_000_000, upper=15_000_000, rate=0.0001352),
        PricingTier(lower=15_000_000, upper=50_000_000, rate=0.0000852),
        PricingTier(lower=50_000_000, upper=100_000_000, rate=0.0000473),
        PricingTier(lower=100_000_000, upper=math.inf, rate=0.0000243),
    ),
    user_price=USER_PRICE,
)
