"""
Runtime settings read from the environment.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv


class _Settings:
    LOG_LEVEL: int
    PRICING_CONFIG: Optional[str]

    def __init__(self):
        load_dotenv()

        log_level_str = os.getenv("LOG_PRICING_LOG_LEVEL", "WARNING").upper()
        self.LOG_LEVEL = getattr(logging, log_level_str, logging.WARNING)
        self.PRICING_CONFIG = os.getenv("LOG_PRICING_CONFIG") or None


def get_settings() -> _Settings:
    """Read settings fresh from the environment."""
    return _Settings()
