"""
Cost calculations.

Pure functions over a PricingTable: no I/O, no rounding. Rounding to
currency precision belongs to whoever displays the numbers.
"""

import logging
import math
from dataclasses import dataclass
from typing import List

from .tiers import DEFAULT_PRICING_TABLE, PricingTable, PricingTier
from .validation import parse_input

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CostBreakdown:
    """Log, user and total cost for one calculation request."""
    log_cost: float
    user_cost: float
    total_cost: float


@dataclass(frozen=True)
class TierUsage:
    """Units and cost allocated to a single tier."""
    tier: PricingTier
    units: int
    cost: float


def _require_non_negative(value: int, name: str) -> None:
    if value < 0:
        raise ValueError(f"{name} cannot be negative")


def _unit_cost(units: int, rate: float) -> float:
    """units * rate as a float, saturating to inf past the float range."""
    if units == 0 or rate == 0:
        return 0.0
    try:
        return float(units * rate)
    except OverflowError:
        return math.inf


def tier_breakdown(log_count: int, table: PricingTable = DEFAULT_PRICING_TABLE) -> List[TierUsage]:
    """Allocate a log count across tiers in ascending order.

    Tiers that receive no units are omitted. The unbounded top tier
    absorbs whatever is left once the finite tiers are full.

    Args:
        log_count: Number of logs
        table: Pricing table to apply

    Returns:
        Per-tier allocation, cheapest-first as listed in the table

    Raises:
        ValueError: If log_count is negative
    """
    _require_non_negative(log_count, "log_count")

    usages = []
    remaining = log_count
    for tier in table.tiers:
        if remaining <= 0:
            break
        consumed = int(min(remaining, tier.width))
        usages.append(TierUsage(tier=tier, units=consumed, cost=_unit_cost(consumed, tier.rate)))
        remaining -= consumed

    return usages


def calculate_log_cost(log_count: int, table: PricingTable = DEFAULT_PRICING_TABLE) -> float:
    """Calculate tiered log cost.

    Args:
        log_count: Number of logs
        table: Pricing table to apply

    Returns:
        Unrounded cost, inf once it exceeds the float range

    Raises:
        ValueError: If log_count is negative
    """
    cost = 0.0
    for usage in tier_breakdown(log_count, table):
        cost += usage.cost

    logger.debug("log cost for %d logs: %r", log_count, cost)
    return cost


def calculate_user_cost(user_count: int, table: PricingTable = DEFAULT_PRICING_TABLE) -> float:
    """Flat cost: user_count * user_price, inf if it exceeds the float range."""
    _require_non_negative(user_count, "user_count")
    return _unit_cost(user_count, table.user_price)


def calculate_costs(
    log_count: int,
    user_count: int,
    table: PricingTable = DEFAULT_PRICING_TABLE,
) -> CostBreakdown:
    """Calculate log, user and total cost.

    The total is the sum of the two unrounded components.
    """
    log_cost = calculate_log_cost(log_count, table)
    user_cost = calculate_user_cost(user_count, table)
    return CostBreakdown(
        log_cost=log_cost,
        user_cost=user_cost,
        total_cost=log_cost + user_cost,
    )


def calculate_costs_from_text(
    logs_text: str,
    users_text: str,
    table: PricingTable = DEFAULT_PRICING_TABLE,
) -> CostBreakdown:
    """Validate raw text inputs and calculate costs.

    Raises:
        InvalidQuantityError: For the first field that is not a valid
            non-negative integer
    """
    log_count = parse_input(logs_text, field="logs")
    user_count = parse_input(users_text, field="users")
    return calculate_costs(log_count, user_count, table)
