"""
Pricing configuration loading.

Reads an alternate tier table and user price from a YAML file.
"""

import logging
import math
from pathlib import Path
from typing import Any, Dict, List

import yaml

from log_pricing.core.tiers import PricingTable, PricingTier

logger = logging.getLogger(__name__)


def load_pricing_config(path: str) -> PricingTable:
    """Load and validate a pricing table from a YAML file.

    A tier with ``upper: null`` is unbounded. Validation is strict so a
    typo in the file fails loudly instead of silently mispricing.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated PricingTable

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Pricing config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a dictionary")

    allowed_top_keys = {'tiers', 'user_price'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    if 'user_price' not in raw_config:
        raise ValueError("Missing required 'user_price'")
    user_price = _parse_number(raw_config['user_price'], "user_price")

    if 'tiers' not in raw_config:
        raise ValueError("Missing required 'tiers' section")
    tiers_data = raw_config['tiers']
    if not isinstance(tiers_data, list) or not tiers_data:
        raise ValueError("'tiers' must be a non-empty list")

    tiers = _parse_tiers(tiers_data)

    table = PricingTable(tiers=tuple(tiers), user_price=user_price)
    logger.info("Loaded pricing config from %s (%d tiers)", path, len(tiers))
    return table


def _parse_tiers(tiers_data: List[Any]) -> List[PricingTier]:
    tiers = []
    for i, tier_data in enumerate(tiers_data):
        path = f"tiers[{i}]"
        if not isinstance(tier_data, dict):
            raise ValueError(f"'{path}' must be a dictionary")
        tiers.append(_parse_tier(tier_data, path))
    return tiers


def _parse_tier(data: Dict, path: str) -> PricingTier:
    """Parse and validate one tier entry.

    Args:
        data: Tier configuration data
        path: Path for error messages

    Returns:
        PricingTier

    Raises:
        ValueError: If the entry is invalid
    """
    allowed_keys = {'lower', 'upper', 'rate'}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in {path}: {unknown_keys}")

    for key in ('lower', 'upper', 'rate'):
        if key not in data:
            raise ValueError(f"Missing required '{key}' in {path}")

    lower = data['lower']
    if isinstance(lower, bool) or not isinstance(lower, int) or lower < 0:
        raise ValueError(f"'lower' in {path} must be a non-negative integer")

    upper = data['upper']
    if upper is None:
        upper = math.inf
    elif isinstance(upper, bool) or not isinstance(upper, int):
        raise ValueError(f"'upper' in {path} must be an integer or null")

    rate = _parse_number(data['rate'], f"{path}.rate")

    return PricingTier(lower=lower, upper=upper, rate=rate)


def _parse_number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{path}' must be a number")
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise ValueError(f"'{path}' must be finite")
    if number < 0:
        raise ValueError(f"'{path}' cannot be negative")
    return number
